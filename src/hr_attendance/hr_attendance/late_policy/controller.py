from __future__ import annotations

import logging
from datetime import date

from flask import Flask, jsonify

from ..common.auth import roles_required
from ..core.enums import Role
from ..core.exceptions import (
    ConcurrentUpdateError,
    ConfigIncompleteError,
    UnresolvedLeaveTypeError,
    ValidationError,
)
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route(
        "/api/admin/late-policy/<employee_id>/<int:year>/<int:month>",
        methods=["POST"],
        endpoint="evaluate_late_policy",
    )
    @roles_required(Role.ADMIN, Role.HR)
    def evaluate_late_policy(employee_id: str, year: int, month: int):
        try:
            outcome = container.late_policy_service.evaluate_month(employee_id, year, month, today=date.today())
            return jsonify({"success": True, **outcome.to_dict()}), 200
        except ConfigIncompleteError as e:
            return jsonify({"success": False, "message": str(e), "missing": list(e.missing)}), 400
        except UnresolvedLeaveTypeError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except ConcurrentUpdateError as e:
            return jsonify({"success": False, "message": str(e)}), 409
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            logger.exception("Late policy evaluation failed for %s", employee_id)
            return jsonify({"success": False, "message": "System error while evaluating late policy"}), 500
