from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_role, int_field, json_body, login_required, number_field, roles_required
from ..container import Container
from ..core.enums import Role
from ..snapshot.codec import package_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/api/packages", methods=["GET"], endpoint="list_packages")
    @login_required
    def list_packages():
        return jsonify([package_to_dict(p) for p in container.package_service.list_all()])

    @app.route("/api/packages", methods=["POST"], endpoint="create_package")
    @roles_required(Role.ADMIN)
    def create_package():
        data = json_body()
        snapshot = container.package_service.create(
            current_role=current_role(),
            name=str(data.get("name", "")),
            credits=int_field(data, "credits"),
            price=number_field(data, "price"),
        )
        return jsonify(package_to_dict(snapshot.packages[-1])), 201

    @app.route("/api/packages/<package_id>", methods=["PUT"], endpoint="update_package")
    @roles_required(Role.ADMIN)
    def update_package(package_id: str):
        data = json_body()
        snapshot = container.package_service.update(
            current_role=current_role(),
            package_id=package_id,
            name=str(data.get("name", "")),
            credits=int_field(data, "credits"),
            price=number_field(data, "price"),
        )
        return jsonify(package_to_dict(snapshot.find_package(package_id)))

    @app.route("/api/packages/<package_id>", methods=["DELETE"], endpoint="delete_package")
    @roles_required(Role.ADMIN)
    def delete_package(package_id: str):
        container.package_service.delete(current_role=current_role(), package_id=package_id)
        return jsonify({"ok": True})
