from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.guards import current_user, login_required, roles_required
from ..core.enums import STAFF_ROLES, EventStatus, EventType
from ..core.exceptions import DomainError
from ..container import Container
from .service import EventForm

logger = logging.getLogger(__name__)


def _event_form() -> EventForm:
    return EventForm(
        name=request.form.get("name", ""),
        event_type=request.form.get("event_type", EventType.SERVICE.value),
        description=request.form.get("description"),
        start_date=request.form.get("start_date"),
        end_date=request.form.get("end_date"),
        start_time=request.form.get("start_time"),
        end_time=request.form.get("end_time"),
        location=request.form.get("location"),
        status=request.form.get("status"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/events", endpoint="events")
    @login_required
    def events():
        try:
            items = container.event_service.list_events()
        except Exception:
            logger.exception("Loading events failed")
            flash("System error while loading events", "danger")
            items = []

        return render_template(
            "events.html",
            events=items,
            event_types=list(EventType),
            statuses=list(EventStatus),
            can_edit=current_user().role in STAFF_ROLES,
            active_page="events",
        )

    @app.route("/events/add", methods=["POST"], endpoint="add_event")
    @roles_required(STAFF_ROLES)
    def add_event():
        try:
            container.event_service.create(current_role=current_user().role, form=_event_form())
            flash("Event created.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Creating an event failed")
            flash("System error while creating the event", "danger")
        return redirect(url_for("events"))

    @app.route("/events/<event_id>/update", methods=["POST"], endpoint="update_event")
    @roles_required(STAFF_ROLES)
    def update_event(event_id: str):
        try:
            container.event_service.update(current_role=current_user().role, event_id=event_id, form=_event_form())
            flash("Event updated.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Updating event %s failed", event_id)
            flash("System error while updating the event", "danger")
        return redirect(url_for("events"))

    @app.route("/events/<event_id>/delete", methods=["POST"], endpoint="delete_event")
    @roles_required(STAFF_ROLES)
    def delete_event(event_id: str):
        try:
            container.event_service.delete(current_role=current_user().role, event_id=event_id)
            flash("Event deleted.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Deleting event %s failed", event_id)
            flash("System error while deleting the event", "danger")
        return redirect(url_for("events"))
