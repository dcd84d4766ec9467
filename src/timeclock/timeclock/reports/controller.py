from __future__ import annotations

import io
import logging
from datetime import date, datetime
from typing import Optional

from flask import Flask, jsonify, request, send_file

from ..core.exceptions import NotFoundError, SinkFailure, ValidationError
from ..container import Container
from .scheduler import TickStatus

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: Optional[str], field_name: str, *, required: bool = False) -> Optional[date]:
        if not value:
            if required:
                raise ValidationError(f"{field_name} is required")
            return None
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            raise ValidationError(f"{field_name} must use YYYY-MM-DD")

    def _range_args():
        start = _parse_date(request.args.get("start"), "Start date", required=True)
        end = _parse_date(request.args.get("end"), "End date", required=True)
        return start, end, request.args.get("employee_id")

    @app.route("/api/reports/daily", methods=["GET"], endpoint="reports_daily")
    def reports_daily():
        try:
            day = _parse_date(request.args.get("date"), "Date")
            return jsonify(container.report_aggregator.daily(day).to_dict())
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Error building daily report")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/reports/weekly", methods=["GET"], endpoint="reports_weekly")
    def reports_weekly():
        try:
            start = _parse_date(request.args.get("start"), "Start date")
            end = _parse_date(request.args.get("end"), "End date")
            return jsonify(container.report_aggregator.weekly(start, end).to_dict())
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Error building weekly report")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/reports/custom", methods=["GET"], endpoint="reports_custom")
    def reports_custom():
        try:
            start, end, employee_id = _range_args()
            report = container.report_aggregator.custom_range(start=start, end=end, employee_id=employee_id)
            return jsonify(report.to_dict())
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Error building custom report")
            return jsonify({"error": "Internal server error"}), 500

    @app.route("/api/reports/export-excel", methods=["GET"], endpoint="reports_export_excel")
    def reports_export_excel():
        try:
            start, end, employee_id = _range_args()
            report = container.report_aggregator.custom_range(start=start, end=end, employee_id=employee_id)
            content = container.excel_writer.write(report)
            return send_file(
                io.BytesIO(content),
                mimetype=XLSX_MIMETYPE,
                as_attachment=True,
                download_name=container.excel_writer.filename_for(report),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except SinkFailure as e:
            return jsonify({"error": str(e)}), 502
        except Exception:
            logger.exception("Error exporting spreadsheet")
            return jsonify({"error": "Internal server error"}), 500

    def _tick_response(result):
        if result.status == TickStatus.DELIVERED:
            return jsonify({"message": f"{result.job.capitalize()} report sent"})
        if result.status == TickStatus.SKIPPED:
            return jsonify({"error": f"{result.job.capitalize()} report is already being sent"}), 409
        return jsonify({"error": f"Could not send {result.job} report: {result.error}"}), 502

    @app.route("/api/reports/email/daily", methods=["POST"], endpoint="reports_email_daily")
    def reports_email_daily():
        return _tick_response(container.report_scheduler.trigger_daily())

    @app.route("/api/reports/email/weekly", methods=["POST"], endpoint="reports_email_weekly")
    def reports_email_weekly():
        return _tick_response(container.report_scheduler.trigger_weekly())
