from __future__ import annotations

import logging
from datetime import date

from flask import Flask, jsonify, request, session

from ..common.auth import login_required, roles_required
from ..common.datetime_utils import now_local, parse_iso_date
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<int:year>/<int:month>", methods=["GET"], endpoint="my_attendance")
    @login_required
    def my_attendance(year: int, month: int):
        try:
            data = container.attendance_service.history_rows(
                str(session["employee_id"]), year, month, today=date.today()
            )
            return jsonify({"success": True, **data}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to load attendance for %s", session.get("employee_id"))
            return jsonify({"success": False, "message": "System error while loading attendance"}), 500

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        try:
            result = container.attendance_service.clock_in(str(session["employee_id"]), now=now_local())
            return jsonify({"success": True, "status": result.status.value, "note": result.note or ""}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Clock-in failed for %s", session.get("employee_id"))
            return jsonify({"success": False, "message": "System error while clocking in"}), 500

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out():
        try:
            container.attendance_service.clock_out(str(session["employee_id"]), now=now_local())
            return jsonify({"success": True}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Clock-out failed for %s", session.get("employee_id"))
            return jsonify({"success": False, "message": "System error while clocking out"}), 500

    @app.route(
        "/api/admin/attendance/<employee_id>/<int:year>/<int:month>",
        methods=["GET"],
        endpoint="employee_attendance",
    )
    @roles_required(Role.ADMIN, Role.HR)
    def employee_attendance(employee_id: str, year: int, month: int):
        try:
            data = container.attendance_service.history_rows(employee_id, year, month, today=date.today())
            return jsonify({"success": True, **data}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Failed to load attendance for %s", employee_id)
            return jsonify({"success": False, "message": "System error while loading attendance"}), 500

    @app.route("/api/admin/attendance/mark-absences", methods=["POST"], endpoint="mark_absences")
    @roles_required(Role.ADMIN, Role.HR)
    def mark_absences():
        try:
            payload = request.get_json(silent=True) or {}
            work_date = parse_iso_date(payload.get("date") or "")
            written = container.attendance_service.mark_absences(work_date, today=date.today())
            return jsonify({"success": True, "written": written}), 200
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Marking absences failed")
            return jsonify({"success": False, "message": "System error while marking absences"}), 500
