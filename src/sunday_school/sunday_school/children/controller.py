from __future__ import annotations

import io
import logging

from flask import Flask, abort, flash, redirect, render_template, request, send_file, url_for

from ..common.guards import current_user, login_required, roles_required
from ..core.enums import SCANNER_ROLES
from ..core.exceptions import DomainError, NotFoundError
from ..container import Container
from .model import PROFILE_FIELDS

logger = logging.getLogger(__name__)


def _child_form() -> dict:
    data = {
        "full_name": request.form.get("full_name", ""),
        "class_id": request.form.get("class_id", ""),
        "date_of_birth": request.form.get("date_of_birth"),
    }
    for name in PROFILE_FIELDS:
        data[name] = request.form.get(name)
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/children", endpoint="children")
    @roles_required(SCANNER_ROLES)
    def children():
        me = current_user()
        search = request.args.get("q", "")
        class_filter = request.args.get("class_id", "")
        try:
            items = container.child_service.list_visible(
                me,
                search=search,
                class_filter=class_filter,
                include_inactive=request.args.get("inactive") == "1",
            )
            classes = container.class_service.visible_classes(me)
            class_names = container.class_service.names_by_id()
        except Exception:
            logger.exception("Loading children failed")
            flash("System error while loading children", "danger")
            items, classes, class_names = [], [], {}

        return render_template(
            "children.html",
            children=items,
            classes=classes,
            class_names=class_names,
            profile_fields=PROFILE_FIELDS,
            search=search,
            class_filter=class_filter,
            active_page="children",
        )

    @app.route("/children/add", methods=["POST"], endpoint="add_child")
    @roles_required(SCANNER_ROLES)
    def add_child():
        try:
            child = container.child_service.create(user=current_user(), **_child_form())
            flash(f"{child.full_name} enrolled as {child.code}.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Enrolling a child failed")
            flash("System error while adding the child", "danger")
        return redirect(url_for("children"))

    @app.route("/children/<child_id>/update", methods=["POST"], endpoint="update_child")
    @roles_required(SCANNER_ROLES)
    def update_child(child_id: str):
        try:
            container.child_service.update(user=current_user(), child_id=child_id, **_child_form())
            flash("Child updated.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Updating child %s failed", child_id)
            flash("System error while updating the child", "danger")
        return redirect(url_for("children"))

    @app.route("/children/<child_id>/active", methods=["POST"], endpoint="set_child_active")
    @roles_required(SCANNER_ROLES)
    def set_child_active(child_id: str):
        active = request.form.get("is_active") == "1"
        try:
            container.child_service.set_active(user=current_user(), child_id=child_id, is_active=active)
            flash("Child restored." if active else "Child removed from the list.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Changing child %s failed", child_id)
            flash("System error while updating the child", "danger")
        return redirect(url_for("children"))

    @app.route("/children/<child_id>/qr.png", endpoint="child_qr")
    @login_required
    def child_qr(child_id: str):
        try:
            png = container.scanner_service.child_qr_png(child_id)
        except NotFoundError:
            abort(404)
        return send_file(io.BytesIO(png), mimetype="image/png", download_name=f"{child_id}.png")
