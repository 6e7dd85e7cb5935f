from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..common.guards import admin_required, current_user, login_required
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _parse_role(value: str) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")


def register(app: Flask, container: Container) -> None:
    app.jinja_env.globals["current_user"] = current_user

    @app.route("/", endpoint="index")
    def index():
        return redirect(url_for("dashboard" if "user_id" in session else "login"))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if current_user() is not None:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                s_user = container.auth_service.authenticate(username, password)

                session.clear()
                session.permanent = bool(remember)
                session.update(s_user.to_session())

                flash("Login successful!", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Login failed for %s", username)
                flash("System error while logging in", "danger")

        return render_template("login.html")

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_account():
        if request.method == "POST":
            try:
                if request.form.get("password", "") != request.form.get("confirm_password", ""):
                    raise ValidationError("Passwords do not match")
                container.auth_service.register(
                    username=request.form.get("username", ""),
                    full_name=request.form.get("full_name", ""),
                    password=request.form.get("password", ""),
                    email=request.form.get("email"),
                )
                flash("Account created. An administrator has to approve it before you can log in.", "info")
                return redirect(url_for("login"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Registration failed")
                flash("System error while registering", "danger")

        return render_template("register.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))

    @app.route("/users", endpoint="users")
    @admin_required
    def users():
        try:
            items = container.user_service.list_users()
            pending = container.user_service.list_pending()
            classes = container.class_service.list_classes()
        except Exception:
            logger.exception("Loading users failed")
            flash("System error while loading users", "danger")
            items, pending, classes = [], [], []

        return render_template(
            "users.html",
            users=items,
            pending=pending,
            classes=classes,
            roles=list(Role),
            active_page="users",
        )

    @app.route("/users/add", methods=["POST"], endpoint="add_user")
    @admin_required
    def add_user():
        try:
            container.user_service.create_account(
                current_role=current_user().role,
                username=request.form.get("username", ""),
                full_name=request.form.get("full_name", ""),
                password=request.form.get("password", ""),
                role=_parse_role(request.form.get("role", Role.KHADEM.value)),
                email=request.form.get("email"),
                phone=request.form.get("phone"),
                class_id=request.form.get("class_id"),
            )
            flash("User created.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Creating a user failed")
            flash("System error while creating the user", "danger")
        return redirect(url_for("users"))

    @app.route("/users/<user_id>/update", methods=["POST"], endpoint="update_user")
    @admin_required
    def update_user(user_id: str):
        try:
            role_s = request.form.get("role")
            container.user_service.update_account(
                current_role=current_user().role,
                user_id=user_id,
                role=_parse_role(role_s) if role_s else None,
                class_id=request.form.get("class_id"),
                is_active=request.form.get("is_active") == "1" if "is_active" in request.form else None,
            )
            flash("User updated.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Updating user %s failed", user_id)
            flash("System error while updating the user", "danger")
        return redirect(url_for("users"))

    @app.route("/users/<user_id>/delete", methods=["POST"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: str):
        try:
            container.user_service.delete_user(current_role=current_user().role, user_id=user_id)
            flash("User deleted.", "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Deleting user %s failed", user_id)
            flash("System error while deleting the user", "danger")
        return redirect(url_for("users"))

    @app.route("/profile", methods=["GET", "POST"], endpoint="profile")
    @login_required
    def profile():
        me = current_user()
        if request.method == "POST":
            try:
                updated = container.user_service.update_profile(
                    user_id=me.user_id,
                    full_name=request.form.get("full_name", ""),
                    email=request.form.get("email"),
                    phone=request.form.get("phone"),
                    photo_url=request.form.get("photo_url"),
                    new_password=request.form.get("new_password"),
                    confirm_password=request.form.get("confirm_password"),
                )
                session["name"] = updated.full_name
                flash("Profile updated.", "success")
                return redirect(url_for("profile"))
            except DomainError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Updating profile of %s failed", me.username)
                flash("System error while updating the profile", "danger")

        return render_template("profile.html", user=container.user_service.get(me.user_id), active_page="profile")
