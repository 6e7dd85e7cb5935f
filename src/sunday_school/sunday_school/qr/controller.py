from __future__ import annotations

import logging

from flask import Flask, flash, jsonify, render_template, request

from ..common.guards import current_user, roles_required
from ..core.enums import SCANNER_ROLES
from ..core.exceptions import AuthorizationError, DomainError, NotFoundError
from ..container import Container

logger = logging.getLogger(__name__)


def _status_for(error: DomainError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, AuthorizationError):
        return 403
    return 400


def _child_json(child, class_name: str) -> dict:
    return {
        "child_id": child.child_id,
        "code": child.code,
        "full_name": child.full_name,
        "class_id": child.class_id,
        "class_name": class_name,
    }


def register(app: Flask, container: Container) -> None:
    def class_name_of(child) -> str:
        found = container.class_service.find(child.class_id)
        return found.name if found else ""

    @app.route("/scanner", endpoint="scanner")
    @roles_required(SCANNER_ROLES)
    def scanner():
        try:
            events = container.event_service.scorable_events()
        except Exception:
            logger.exception("Loading events for the scanner failed")
            flash("System error while loading events", "danger")
            events = []

        return render_template(
            "scanner.html",
            events=events,
            active_page="scanner",
        )

    @app.route("/api/scan/resolve", methods=["POST"], endpoint="api_scan_resolve")
    @roles_required(SCANNER_ROLES)
    def api_scan_resolve():
        data = request.get_json(silent=True) or {}
        try:
            child = container.scanner_service.resolve(str(data.get("qr_code", "")).strip())
            return jsonify({"success": True, "child": _child_json(child, class_name_of(child))}), 200
        except DomainError as e:
            return jsonify({"success": False, "message": str(e)}), _status_for(e)
        except Exception:
            logger.exception("Resolving a scanned code failed")
            return jsonify({"success": False, "message": "System error while reading the code"}), 500

    @app.route("/api/scan/image", methods=["POST"], endpoint="api_scan_image")
    @roles_required(SCANNER_ROLES)
    def api_scan_image():
        file = request.files.get("image")
        if file is None or not file.filename:
            return jsonify({"success": False, "message": "Please choose an image"}), 400
        try:
            child = container.scanner_service.resolve_image(file.stream)
            return jsonify({"success": True, "child": _child_json(child, class_name_of(child))}), 200
        except DomainError as e:
            return jsonify({"success": False, "message": str(e)}), _status_for(e)
        except Exception:
            logger.exception("Decoding an uploaded QR image failed")
            return jsonify({"success": False, "message": "System error while reading the image"}), 500

    @app.route("/api/scores", methods=["POST"], endpoint="api_scores")
    @roles_required(SCANNER_ROLES)
    def api_scores():
        data = request.get_json(silent=True) or {}
        try:
            record = container.scanner_service.record_score(
                user=current_user(),
                event_id=data.get("event_id"),
                child_id=data.get("child_id"),
                score=data.get("score"),
            )
            return jsonify({
                "success": True,
                "message": f"Added {record.score} points",
                "score_id": record.score_id,
            }), 201
        except DomainError as e:
            return jsonify({"success": False, "message": str(e)}), _status_for(e)
        except Exception:
            logger.exception("Saving a score failed")
            return jsonify({"success": False, "message": "System error while saving the score"}), 500
