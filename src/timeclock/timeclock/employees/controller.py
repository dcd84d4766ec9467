from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        try:
            return jsonify([e.to_dict() for e in container.employee_service.list_active()])
        except Exception:
            logger.exception("Error listing employees")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/employees/compliance", methods=["GET"], endpoint="employees_compliance")
    def employees_compliance():
        try:
            return jsonify([w.to_dict() for w in container.attendance_service.compliance_all()])
        except Exception:
            logger.exception("Error computing compliance")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/employees/daily-status", methods=["GET"], endpoint="employees_daily_status")
    def employees_daily_status():
        try:
            return jsonify([s.to_dict() for s in container.attendance_service.daily_status()])
        except Exception:
            logger.exception("Error computing daily status")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    def employees_get(employee_id: int):
        try:
            return jsonify(container.employee_service.get_active(employee_id).to_dict())
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Error loading employee %s", employee_id)
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    def employees_create():
        data = _payload()
        try:
            employee = container.employee_service.create(
                given_name=data.get("given_name"),
                family_name=data.get("family_name"),
                schedule=data.get("schedule"),
                expected_daily_hours=data.get("expected_daily_hours"),
                expected_weekly_hours=data.get("expected_weekly_hours"),
            )
            body = employee.to_dict()
            body["message"] = "Employee created"
            return jsonify(body), 201
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Error creating employee")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    def employees_update(employee_id: int):
        data = _payload()
        try:
            container.employee_service.update(
                employee_id,
                given_name=data.get("given_name"),
                family_name=data.get("family_name"),
                schedule=data.get("schedule"),
                expected_daily_hours=data.get("expected_daily_hours"),
                expected_weekly_hours=data.get("expected_weekly_hours"),
            )
            return jsonify({"message": "Employee updated"})
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Error updating employee %s", employee_id)
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    def employees_delete(employee_id: int):
        try:
            container.employee_service.deactivate(employee_id)
            return jsonify({"message": "Employee deleted"})
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Error deleting employee %s", employee_id)
            return jsonify({"error": "Internal server error"}), 500
