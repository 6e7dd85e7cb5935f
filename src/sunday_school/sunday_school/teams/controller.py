from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.guards import admin_required, current_user, login_required
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..container import Container
from .service import team_for_class

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/teams", endpoint="teams")
    @login_required
    def teams():
        try:
            items = container.team_service.list_teams()
            classes = container.class_service.list_classes()
            class_names = container.class_service.names_by_id()
        except Exception:
            logger.exception("Loading teams failed")
            flash("System error while loading teams", "danger")
            items, classes, class_names = [], [], {}

        return render_template(
            "teams.html",
            teams=items,
            class_names=class_names,
            classes=classes,
            team_of={c.class_id: team_for_class(items, c.class_id) for c in classes},
            can_edit=current_user().role == Role.ADMIN,
            active_page="teams",
        )

    @app.route("/teams/add", methods=["POST"], endpoint="add_team")
    @admin_required
    def add_team():
        try:
            container.team_service.create(
                current_role=current_user().role,
                name=request.form.get("name", ""),
                motto=request.form.get("motto"),
                icon=request.form.get("icon"),
                primary_color=request.form.get("primary_color"),
                class_ids=request.form.getlist("class_ids"),
            )
            flash("Team created.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Creating a team failed")
            flash("System error while creating the team", "danger")
        return redirect(url_for("teams"))

    @app.route("/teams/<team_id>/update", methods=["POST"], endpoint="update_team")
    @admin_required
    def update_team(team_id: str):
        role = current_user().role
        try:
            container.team_service.update(
                current_role=role,
                team_id=team_id,
                name=request.form.get("name", ""),
                motto=request.form.get("motto"),
                icon=request.form.get("icon"),
                primary_color=request.form.get("primary_color"),
            )
            if request.form.get("set_classes") == "1":
                container.team_service.set_classes(
                    current_role=role, team_id=team_id, class_ids=request.form.getlist("class_ids")
                )
            flash("Team updated.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Updating team %s failed", team_id)
            flash("System error while updating the team", "danger")
        return redirect(url_for("teams"))

    @app.route("/teams/assign", methods=["POST"], endpoint="assign_class")
    @admin_required
    def assign_class():
        try:
            team = container.team_service.assign_class(
                current_role=current_user().role,
                team_id=request.form.get("team_id", ""),
                class_id=request.form.get("class_id", ""),
            )
            flash(f"Class moved to {team.name}.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Assigning a class to a team failed")
            flash("System error while assigning the class", "danger")
        return redirect(url_for("teams"))

    @app.route("/teams/<team_id>/delete", methods=["POST"], endpoint="delete_team")
    @admin_required
    def delete_team(team_id: str):
        try:
            container.team_service.delete(current_role=current_user().role, team_id=team_id)
            flash("Team deleted.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Deleting team %s failed", team_id)
            flash("System error while deleting the team", "danger")
        return redirect(url_for("teams"))
