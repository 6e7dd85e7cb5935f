"""Route guards shared by the feature controllers.

The logged-in user lives in the Flask session; `current_user()` turns it back
into an explicit `SessionUser` so services never read ambient state.
"""
from __future__ import annotations

from functools import wraps
from typing import Iterable, Optional

from flask import flash, g, redirect, render_template, request, session, url_for

from ..core.enums import Role
from ..users.model import SessionUser


def current_user() -> Optional[SessionUser]:
    if "user_id" not in session:
        return None
    cached = getattr(g, "current_user", None)
    if cached is not None:
        return cached

    try:
        role = Role(session.get("role"))
    except ValueError:
        return None

    user = SessionUser(
        user_id=str(session["user_id"]),
        username=session.get("username", ""),
        full_name=session.get("name", ""),
        role=role,
        class_id=session.get("class_id") or None,
    )
    g.current_user = user
    return user


def render_forbidden():
    return render_template("403.html"), 403


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            if _wants_json():
                return {"success": False, "message": "Please log in to continue"}, 401
            flash("Please log in to continue!", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def roles_required(roles: Iterable[Role]):
    allowed = frozenset(roles)

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                if _wants_json():
                    return {"success": False, "message": "Please log in to continue"}, 401
                return redirect(url_for("login"))

            if user.role not in allowed:
                if _wants_json():
                    return {"success": False, "message": "You do not have permission"}, 403
                return render_forbidden()

            return view(*args, **kwargs)

        return wrapper

    return decorator


def admin_required(view):
    return roles_required({Role.ADMIN})(view)
