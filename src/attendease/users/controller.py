from __future__ import annotations

from flask import Flask, jsonify, session
from werkzeug.exceptions import BadRequest

from ..common.web import current_role, current_user_id, int_field, json_body, login_required, roles_required
from ..container import Container
from ..core.enums import Role
from ..guards.identity import IdentityChangeGuard
from ..snapshot.codec import user_to_dict
from .credentials import generate_random_password
from .service import ProfileForm, UserForm

_EMAIL_WARNINGS = "email_warnings"


def _guard_for(user_id: str, original_email: str) -> IdentityChangeGuard:
    warnings = session.get(_EMAIL_WARNINGS, {})
    return IdentityChangeGuard(original_email=original_email, warning_raised=bool(warnings.get(user_id)))


def _remember(user_id: str, guard: IdentityChangeGuard) -> None:
    warnings = dict(session.get(_EMAIL_WARNINGS, {}))
    if guard.warning_raised:
        warnings[user_id] = True
    else:
        warnings.pop(user_id, None)
    session[_EMAIL_WARNINGS] = warnings


def _role_field(data: dict) -> Role:
    try:
        return Role(data.get("role", Role.TRAINEE.value))
    except ValueError:
        raise BadRequest("Unknown role")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.login(str(data.get("email", "")), str(data.get("password", "")))

        session.clear()
        session["user_id"] = user.id
        session["role"] = user.role.value
        return jsonify(user_to_dict(user))

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    @app.route("/api/auth/reset", methods=["POST"], endpoint="reset_password")
    def reset_password():
        data = json_body()
        container.auth_service.request_reset(str(data.get("email", "")), str(data.get("phoneNumber", "")))
        return jsonify({"eligible": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(user_to_dict(container.user_service.get(current_user_id())))

    @app.route("/api/me", methods=["PUT"], endpoint="update_profile")
    @login_required
    def update_profile():
        data = json_body()
        user = container.user_service.get(current_user_id())
        form = ProfileForm(
            name=str(data.get("name", user.name)),
            email=str(data.get("email", user.email)),
            phone_number=str(data.get("phoneNumber", user.phone_number)),
            password=str(data.get("password", user.password)),
            profile_image=data.get("profileImage", user.profile_image),
        )

        guard = _guard_for(user.id, user.email)
        try:
            snapshot = container.user_service.update_profile(user_id=user.id, form=form, guard=guard)
        finally:
            _remember(user.id, guard)
        return jsonify(user_to_dict(snapshot.find_user(user.id)))

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @roles_required(Role.ADMIN)
    def admin_users():
        return jsonify([user_to_dict(u) for u in container.user_service.list_users()])

    @app.route("/api/admin/users/password", methods=["GET"], endpoint="generate_password")
    @roles_required(Role.ADMIN)
    def generate_password():
        return jsonify({"password": generate_random_password()})

    @app.route("/api/admin/users", methods=["POST"], endpoint="add_user")
    @roles_required(Role.ADMIN)
    def add_user():
        data = json_body()
        form = UserForm(
            name=str(data.get("name", "")),
            email=str(data.get("email", "")),
            phone_number=str(data.get("phoneNumber", "")),
            role=_role_field(data),
            password=str(data.get("password", "")),
            profile_image=data.get("profileImage"),
            credits=int_field(data, "credits"),
        )
        snapshot = container.user_service.create_user(current_role=current_role(), form=form)
        return jsonify(user_to_dict(snapshot.users[-1])), 201

    @app.route("/api/admin/users/<user_id>", methods=["PUT"], endpoint="edit_user")
    @roles_required(Role.ADMIN)
    def edit_user(user_id: str):
        data = json_body()
        user = container.user_service.get(user_id)
        form = UserForm(
            name=str(data.get("name", user.name)),
            email=str(data.get("email", user.email)),
            phone_number=str(data.get("phoneNumber", user.phone_number)),
            role=_role_field({"role": data.get("role", user.role.value)}),
            password=str(data.get("password", user.password)),
            profile_image=data.get("profileImage", user.profile_image),
        )

        guard = _guard_for(user.id, user.email)
        try:
            snapshot = container.user_service.update_user(
                current_role=current_role(), user_id=user.id, form=form, guard=guard
            )
        finally:
            _remember(user.id, guard)
        return jsonify(user_to_dict(snapshot.find_user(user.id)))

    @app.route("/api/admin/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @roles_required(Role.ADMIN)
    def delete_user(user_id: str):
        container.user_service.delete_user(current_role=current_role(), user_id=user_id)
        return jsonify({"ok": True})
