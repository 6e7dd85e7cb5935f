from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.guards import current_user, login_required, roles_required
from ..core.enums import STAFF_ROLES, Role
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def _class_form() -> dict:
    return {
        "name": request.form.get("name", ""),
        "description": request.form.get("description"),
        "schedule_day": request.form.get("schedule_day"),
        "schedule_time": request.form.get("schedule_time"),
        "location": request.form.get("location"),
        "khadem_ids": request.form.getlist("khadem_ids"),
        "age_group": request.form.get("age_group"),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/classes", endpoint="classes")
    @login_required
    def classes():
        me = current_user()
        show_inactive = request.args.get("inactive") == "1" and me.role in STAFF_ROLES
        try:
            if me.role in STAFF_ROLES:
                items = container.class_service.list_classes(include_inactive=show_inactive)
            else:
                items = container.class_service.visible_classes(me)
            khadems = container.user_service.list_by_role(Role.KHADEM)
        except Exception:
            logger.exception("Loading classes failed")
            flash("System error while loading classes", "danger")
            items, khadems = [], []

        return render_template(
            "classes.html",
            classes=items,
            khadems=khadems,
            khadem_names={u.user_id: u.full_name for u in khadems},
            can_edit=me.role in STAFF_ROLES,
            show_inactive=show_inactive,
            active_page="classes",
        )

    @app.route("/classes/add", methods=["POST"], endpoint="add_class")
    @roles_required(STAFF_ROLES)
    def add_class():
        try:
            container.class_service.create(current_role=current_user().role, **_class_form())
            flash("Class created.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Creating a class failed")
            flash("System error while creating the class", "danger")
        return redirect(url_for("classes"))

    @app.route("/classes/<class_id>/update", methods=["POST"], endpoint="update_class")
    @roles_required(STAFF_ROLES)
    def update_class(class_id: str):
        try:
            container.class_service.update(current_role=current_user().role, class_id=class_id, **_class_form())
            flash("Class updated.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Updating class %s failed", class_id)
            flash("System error while updating the class", "danger")
        return redirect(url_for("classes"))

    @app.route("/classes/<class_id>/active", methods=["POST"], endpoint="set_class_active")
    @roles_required(STAFF_ROLES)
    def set_class_active(class_id: str):
        active = request.form.get("is_active") == "1"
        try:
            container.class_service.set_active(current_role=current_user().role, class_id=class_id, is_active=active)
            flash("Class restored." if active else "Class deactivated.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Changing class %s failed", class_id)
            flash("System error while updating the class", "danger")
        return redirect(url_for("classes"))
