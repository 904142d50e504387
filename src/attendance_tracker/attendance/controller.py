from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.validators import require_date
from ..common.web import login_required, manager_required
from ..core.constants import NOT_CHECKED_IN
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required(container)
    def checkin():
        record = svc.check_in(g.employee.user_id)
        return jsonify(record.as_dict()), 201

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="checkout")
    @login_required(container)
    def checkout():
        record = svc.check_out(g.employee.user_id)
        return jsonify(record.as_dict())

    @app.route("/api/attendance/today", methods=["GET"], endpoint="today_status")
    @login_required(container)
    def today_status():
        record = svc.get_today_record(g.employee.user_id)
        return jsonify(record.as_dict() if record else {"status": NOT_CHECKED_IN})

    @app.route("/api/attendance/my-history", methods=["GET"], endpoint="my_history")
    @login_required(container)
    def my_history():
        days = svc.get_history(g.employee.user_id, month=request.args.get("month"), year=request.args.get("year"))
        return jsonify([d.as_dict() for d in days])

    @app.route("/api/attendance/all", methods=["GET"], endpoint="all_attendance")
    @manager_required(container)
    def all_attendance():
        on_date = request.args.get("date")
        start = request.args.get("startDate")
        end = request.args.get("endDate")
        status = request.args.get("status")

        try:
            status_filter = AttendanceStatus(status) if status else None
        except ValueError:
            raise ValidationError(f"Unknown status {status}")

        rows = svc.list_attendance(
            on_date=require_date(on_date, "date") if on_date else None,
            start=require_date(start, "startDate") if start and end else None,
            end=require_date(end, "endDate") if start and end else None,
            status=status_filter,
            employee_code=request.args.get("employeeId") or None,
        )
        return jsonify([r.as_dict() for r in rows])

    @app.route("/api/attendance/employee/<int:user_id>", methods=["GET"], endpoint="employee_attendance")
    @manager_required(container)
    def employee_attendance(user_id: int):
        rows = svc.get_employee_attendance(user_id, month=request.args.get("month"), year=request.args.get("year"))
        return jsonify([r.as_dict() for r in rows])
