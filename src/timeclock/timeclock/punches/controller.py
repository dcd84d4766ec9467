from __future__ import annotations

import logging
from datetime import date, datetime

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: str) -> date:
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            raise ValidationError("Dates must use YYYY-MM-DD")

    @app.route("/api/punches", methods=["GET"], endpoint="punches_list")
    def punches_list():
        try:
            day_s = request.args.get("date")
            punches = container.punch_service.list_punches(
                employee_id=request.args.get("employee_id"),
                business_day=_parse_date(day_s) if day_s else None,
            )
            names = container.employee_service.names_for(p.employee_id for p in punches)
            out = []
            for p in punches:
                row = p.to_dict()
                row["employee"] = names.get(p.employee_id)
                out.append(row)
            return jsonify(out)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Error listing punches")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/punches", methods=["POST"], endpoint="punches_create")
    def punches_create():
        data = request.get_json(silent=True) or {}
        try:
            result = container.punch_service.register(data.get("employee_id"), note=data.get("note"))
            return jsonify(result.to_dict()), 201
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Error registering punch")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/punches/status/<int:employee_id>", methods=["GET"], endpoint="punches_status")
    def punches_status(employee_id: int):
        try:
            return jsonify(container.punch_service.status(employee_id))
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Error loading punch status for %s", employee_id)
            return jsonify({"error": "Internal server error"}), 500
