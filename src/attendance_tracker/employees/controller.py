from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.web import login_required, manager_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/me/profile", methods=["GET"], endpoint="my_profile")
    @login_required(container)
    def my_profile():
        return jsonify(container.employee_service.get_profile(g.employee.user_id).as_dict())

    @app.route("/api/me/profile", methods=["PUT"], endpoint="update_my_profile")
    @login_required(container)
    def update_my_profile():
        data = request.get_json(silent=True) or {}
        employee = container.employee_service.update_profile(
            g.employee.user_id,
            name=data.get("name"),
            email=data.get("email"),
            department=data.get("department"),
        )
        return jsonify(employee.as_dict())

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @manager_required(container)
    def list_employees():
        return jsonify([e.as_dict() for e in container.employee_service.list_roster()])
