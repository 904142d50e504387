from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.validators import require_date
from ..common.web import login_required, manager_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reports = container.report_service
    dashboards = container.dashboard_service

    @app.route("/api/attendance/my-summary", methods=["GET"], endpoint="my_summary")
    @login_required(container)
    def my_summary():
        summary = reports.summarize_employee_month(
            g.employee.user_id,
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return jsonify(summary.as_dict())

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="team_summary")
    @manager_required(container)
    def team_summary():
        summary = reports.summarize_team_month(month=request.args.get("month"), year=request.args.get("year"))
        return jsonify(summary.as_dict())

    @app.route("/api/attendance/today-status", methods=["GET"], endpoint="team_today_status")
    @manager_required(container)
    def team_today_status():
        return jsonify(reports.summarize_today_team_status().as_dict())

    @app.route("/api/attendance/weekly-trend", methods=["GET"], endpoint="weekly_trend")
    @manager_required(container)
    def weekly_trend():
        return jsonify([p.as_dict() for p in reports.build_weekly_trend()])

    @app.route("/api/attendance/export", methods=["GET"], endpoint="export_attendance")
    @manager_required(container)
    def export_attendance():
        start_s = request.args.get("startDate")
        end_s = request.args.get("endDate")

        start = end = None
        if start_s and end_s:
            start = require_date(start_s, "startDate")
            end = require_date(end_s, "endDate")

        csv_text = reports.export_csv(start=start, end=end, employee_code=request.args.get("employeeId") or None)
        return app.response_class(
            csv_text.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance-report.csv"},
        )

    @app.route("/api/dashboard/employee", methods=["GET"], endpoint="employee_dashboard")
    @login_required(container)
    def employee_dashboard():
        return jsonify(dashboards.employee_dashboard(g.employee.user_id))

    @app.route("/api/dashboard/manager", methods=["GET"], endpoint="manager_dashboard")
    @manager_required(container)
    def manager_dashboard():
        return jsonify(dashboards.manager_dashboard())
