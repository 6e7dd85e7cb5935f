from __future__ import annotations

import logging

from flask import Flask, flash, g, redirect, render_template, session, url_for

from ..common.guards import current_user, login_required
from ..container import Container
from .service import DashboardStats

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        try:
            # Pick up role / class changes made by an Admin since login.
            fresh = container.auth_service.refresh(session["user_id"])
        except Exception:
            logger.exception("Refreshing the session of %s failed", session.get("username"))
            fresh = current_user()

        if fresh is None:
            session.clear()
            flash("Your account is no longer active. Please log in again.", "warning")
            return redirect(url_for("login"))
        session.update(fresh.to_session())
        g.pop("current_user", None)

        try:
            stats = container.dashboard_service.stats_for(current_user())
        except Exception:
            logger.exception("Loading dashboard statistics failed")
            flash("System error while loading the dashboard", "danger")
            stats = DashboardStats()
        return render_template("dashboard.html", stats=stats, active_page="dashboard")
