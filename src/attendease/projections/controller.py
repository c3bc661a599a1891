from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_role, current_user_id, roles_required
from ..container import Container
from ..core.enums import Role
from ..snapshot.codec import class_to_dict, log_to_dict, user_to_dict


def _session_row(row: dict) -> dict:
    out = class_to_dict(row["session"])
    if "creator_role" in row:
        out["creatorRole"] = row["creator_role"].value
    if "can_edit" in row:
        out["canEdit"] = row["can_edit"]
    if "booked" in row:
        out["booked"] = row["booked"]
        out["canCancel"] = row["can_cancel"]
    return out


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/stats", methods=["GET"], endpoint="admin_stats")
    @roles_required(Role.ADMIN)
    def admin_stats():
        stats = container.dashboard_service.admin_stats()
        return jsonify(
            {
                "trainees": stats.trainees,
                "sessionsToday": stats.sessions_today,
                "checkIn": stats.check_ins,
                "revenue": stats.revenue,
            }
        )

    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    @roles_required(Role.ADMIN, Role.TRAINER)
    def list_sessions():
        if current_role() == Role.ADMIN:
            rows = container.dashboard_service.schedule_for_admin()
        else:
            rows = container.dashboard_service.schedule_for_trainer(current_user_id())
        return jsonify([_session_row(r) for r in rows])

    @app.route("/api/sessions/<session_id>/roster", methods=["GET"], endpoint="roster")
    @roles_required(Role.ADMIN, Role.TRAINER)
    def roster(session_id: str):
        entries = container.dashboard_service.roster(session_id)
        return jsonify([{"trainee": user_to_dict(e.trainee), "present": e.is_present} for e in entries])

    @app.route("/api/trainee/sessions", methods=["GET"], endpoint="open_sessions")
    @roles_required(Role.TRAINEE)
    def open_sessions():
        rows = container.dashboard_service.open_sessions_for_trainee(current_user_id())
        return jsonify([_session_row(r) for r in rows])

    @app.route("/api/trainee/logs", methods=["GET"], endpoint="trainee_logs")
    @roles_required(Role.TRAINEE)
    def trainee_logs():
        return jsonify([log_to_dict(log) for log in container.dashboard_service.trainee_history(current_user_id())])
