from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_role, current_user_id, roles_required
from ..container import Container
from ..core.enums import Role
from ..snapshot.codec import user_to_dict
from ..snapshot.model import Snapshot


def _wallet(snapshot: Snapshot, trainee_id: str, class_id: str | None = None) -> dict:
    trainee = snapshot.find_user(trainee_id)
    body = {"trainee": user_to_dict(trainee) if trainee else None}
    if class_id is not None:
        body["held"] = snapshot.find_attendance(trainee_id=trainee_id, class_id=class_id) is not None
    return body


def register(app: Flask, container: Container) -> None:
    @app.route("/api/trainee/sessions/<session_id>/book", methods=["POST"], endpoint="book_session")
    @roles_required(Role.TRAINEE)
    def book_session(session_id: str):
        trainee_id = current_user_id()
        snapshot = container.ledger_service.book(trainee_id=trainee_id, session_id=session_id)
        return jsonify(_wallet(snapshot, trainee_id, session_id))

    @app.route("/api/trainee/sessions/<session_id>/cancel", methods=["POST"], endpoint="cancel_session")
    @roles_required(Role.TRAINEE)
    def cancel_session(session_id: str):
        trainee_id = current_user_id()
        snapshot = container.ledger_service.cancel(trainee_id=trainee_id, session_id=session_id)
        return jsonify(_wallet(snapshot, trainee_id, session_id))

    @app.route("/api/trainee/packages/<package_id>/purchase", methods=["POST"], endpoint="purchase_package")
    @roles_required(Role.TRAINEE)
    def purchase_package(package_id: str):
        trainee_id = current_user_id()
        snapshot = container.ledger_service.purchase(trainee_id=trainee_id, package_id=package_id)
        return jsonify(_wallet(snapshot, trainee_id))

    @app.route("/api/sessions/<session_id>/roster/<trainee_id>", methods=["POST"], endpoint="toggle_attendance")
    @roles_required(Role.ADMIN, Role.TRAINER)
    def toggle_attendance(session_id: str, trainee_id: str):
        snapshot = container.ledger_service.toggle_attendance(
            current_role=current_role(), trainee_id=trainee_id, session_id=session_id
        )
        return jsonify(_wallet(snapshot, trainee_id, session_id))
