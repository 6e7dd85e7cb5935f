from __future__ import annotations

from flask import Flask, flash, jsonify, render_template, request

from ..common.guards import login_required
from ..core.constants import DEFAULT_LEADERBOARD_REFRESH_SECONDS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def refresh_seconds() -> int:
        return int(app.config.get("LEADERBOARD_REFRESH_SECONDS", DEFAULT_LEADERBOARD_REFRESH_SECONDS))

    @app.route("/leaderboard", endpoint="leaderboard")
    @login_required
    def leaderboard():
        service = container.leaderboard_service
        event_id = service.resolve_event_id(request.args.get("event_id"))
        standings = service.standings(event_id)
        if standings.failed:
            flash("Could not load the scores right now. Try again shortly.", "warning")
        return render_template(
            "leaderboard.html",
            events=service.selectable_events(),
            selected_event_id=event_id,
            standings=standings,
            refresh_seconds=refresh_seconds(),
            active_page="leaderboard",
        )

    @app.route("/api/leaderboard", endpoint="api_leaderboard")
    @login_required
    def api_leaderboard():
        service = container.leaderboard_service
        event_id = service.resolve_event_id(request.args.get("event_id"))
        standings = service.standings(event_id)
        if standings.failed:
            return jsonify({"success": False, "message": "Could not load the scores", "event_id": event_id}), 503

        payload = standings.to_dict()
        payload["event_id"] = event_id
        payload["refresh_seconds"] = refresh_seconds()
        payload["success"] = True
        return jsonify(payload), 200
