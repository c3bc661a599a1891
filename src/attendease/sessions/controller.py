from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_user_id, json_body, roles_required
from ..container import Container
from ..core.enums import Role
from ..snapshot.codec import class_to_dict
from .model import SessionForm


def _form(data: dict, *, fallback=None) -> SessionForm:
    def pick(key: str, attr: str) -> str:
        if key in data:
            return str(data.get(key) or "")
        return getattr(fallback, attr) if fallback else ""

    return SessionForm(
        name=pick("name", "name"),
        date=pick("date", "date"),
        time=pick("time", "time"),
        location=pick("location", "location"),
        trainer_id=pick("trainerId", "trainer_id"),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    @roles_required(Role.ADMIN, Role.TRAINER)
    def create_session():
        actor = container.user_service.get(current_user_id())
        snapshot = container.schedule_service.create(actor=actor, form=_form(json_body()))
        return jsonify(class_to_dict(snapshot.classes[-1])), 201

    @app.route("/api/sessions/<session_id>", methods=["PUT"], endpoint="update_session")
    @roles_required(Role.ADMIN, Role.TRAINER)
    def update_session(session_id: str):
        actor = container.user_service.get(current_user_id())
        current = next((c for c in container.schedule_service.list_all() if c.id == session_id), None)
        snapshot = container.schedule_service.update(
            actor=actor, session_id=session_id, form=_form(json_body(), fallback=current)
        )
        return jsonify(class_to_dict(snapshot.find_class(session_id)))

    @app.route("/api/sessions/<session_id>", methods=["DELETE"], endpoint="delete_session")
    @roles_required(Role.ADMIN, Role.TRAINER)
    def delete_session(session_id: str):
        actor = container.user_service.get(current_user_id())
        container.schedule_service.delete(actor=actor, session_id=session_id)
        return jsonify({"ok": True})
