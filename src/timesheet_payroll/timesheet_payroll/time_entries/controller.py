from __future__ import annotations

from flask import Flask, request, session

from ..common.http import admin_required, fail, login_required, ok
from ..common.validators import as_bool
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clock-in", methods=["POST"], endpoint="api_clock_in")
    @login_required
    def clock_in():
        try:
            entry = container.time_tracking_service.clock_in(int(session["user_id"]))
        except ValidationError as e:
            return fail(str(e), status=400)
        except Exception:
            app.logger.exception("clock-in failed")
            return fail("Server error while clocking in", status=500)
        return ok({"success": True, "entry": entry.to_dict()})

    @app.route("/api/clock-out", methods=["POST"], endpoint="api_clock_out")
    @login_required
    def clock_out():
        data = request.get_json(silent=True) or {}
        try:
            entry = container.time_tracking_service.clock_out(
                int(session["user_id"]),
                overtime_note=data.get("overtimeNote"),
            )
        except ValidationError as e:
            return fail(str(e), status=400)
        except Exception:
            app.logger.exception("clock-out failed")
            return fail("Server error while clocking out", status=500)
        return ok({"success": True, "entry": entry.to_dict()})

    @app.route("/api/today-entry", methods=["GET"], endpoint="api_today_entry")
    @login_required
    def today_entry():
        try:
            entry = container.time_tracking_service.get_today_entry(int(session["user_id"]))
        except Exception:
            app.logger.exception("today entry lookup failed")
            return fail("Server error", status=500)
        return ok(entry.to_dict() if entry else None)

    @app.route("/api/overtime-requests", methods=["GET"], endpoint="api_overtime_requests")
    @admin_required
    def overtime_requests():
        try:
            return ok(container.time_tracking_service.list_overtime_requests())
        except Exception:
            app.logger.exception("overtime request listing failed")
            return fail("Server error", status=500)

    @app.route("/api/overtime-requests/<int:entry_id>/approve", methods=["POST"], endpoint="api_approve_overtime")
    @admin_required
    def approve_overtime(entry_id: int):
        data = request.get_json(silent=True) or {}
        approved = as_bool(data.get("approved", False))
        try:
            container.time_tracking_service.decide_overtime(
                entry_id,
                approved=approved,
                admin_user_id=int(session["user_id"]),
            )
        except NotFoundError as e:
            return fail(str(e), status=404)
        except AuthorizationError as e:
            return fail(str(e), status=403)
        except ValidationError as e:
            return fail(str(e), status=400)
        except Exception:
            app.logger.exception("overtime decision for entry %s failed", entry_id)
            return fail("Server error", status=500)
        return ok({"success": True, "id": entry_id, "approved": approved})
