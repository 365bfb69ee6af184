from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_week_start
from ..common.http import admin_required, fail, ok
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payslips/generate", methods=["POST"], endpoint="api_generate_payslips")
    @admin_required
    def generate_payslips():
        data = request.get_json(silent=True) or {}
        try:
            week_start = parse_week_start(data.get("weekStart"))
        except ValidationError as e:
            return fail(str(e), status=400)

        result = container.payroll_service.generate_weekly_payslips(week_start)
        if result.is_fault:
            return fail(result.error or "Payslip generation failed", status=500)
        return ok([p.to_dict() for p in result.value or []])

    @app.route("/api/payroll-report", methods=["GET"], endpoint="api_payroll_report")
    @admin_required
    def payroll_report():
        try:
            week_start = parse_week_start(request.args.get("weekStart"))
        except ValidationError as e:
            return fail(str(e), status=400)

        result = container.payroll_report_service.get_payroll_report(week_start)
        if result.is_fault:
            return fail(result.error or "Payroll report failed", status=500)
        return ok([p.to_dict() for p in result.value or []])

    @app.route("/api/payroll-report/summary", methods=["GET"], endpoint="api_payroll_report_summary")
    @admin_required
    def payroll_report_summary():
        try:
            week_start = parse_week_start(request.args.get("weekStart"))
        except ValidationError as e:
            return fail(str(e), status=400)

        result = container.payroll_report_service.get_payroll_summary(week_start)
        if result.is_fault:
            return fail(result.error or "Payroll summary failed", status=500)
        return ok(result.value.to_dict())

    @app.route("/api/payroll-report.csv", methods=["GET"], endpoint="api_payroll_report_csv")
    @admin_required
    def payroll_report_csv():
        try:
            week_start = parse_week_start(request.args.get("weekStart"))
        except ValidationError as e:
            return fail(str(e), status=400)

        result = container.payroll_report_service.export_csv(week_start)
        if result.is_fault:
            return fail(result.error or "Payroll export failed", status=500)

        csv_bytes = (result.value or "").encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=payroll_report_{week_start.isoformat()}.csv"},
        )
