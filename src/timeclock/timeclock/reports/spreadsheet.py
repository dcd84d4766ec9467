from __future__ import annotations

import io
import logging
import re

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill

from ..core.constants import SHEET_NAME_MAX_LENGTH
from ..core.exceptions import SinkFailure
from ..employees.model import Employee
from .model import AllEmployeesRangeReport, EmployeeRangeReport
from .service import RangeReport

logger = logging.getLogger(__name__)

HEADERS = ["Date", "In", "Out", "Worked Hours", "Expected Hours", "Difference", "Status"]

HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFD9D9D9")
MET_FILL = PatternFill(fill_type="solid", fgColor="FF90EE90")
MISSED_FILL = PatternFill(fill_type="solid", fgColor="FFFFCCCB")

SINGLE_SHEET_NAME = "Punch Report"

_FORBIDDEN_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")


def sheet_name_for(employee: Employee, used: set[str]) -> str:
    """Excel-safe, unique sheet name derived from "Family Given"."""
    base = _FORBIDDEN_SHEET_CHARS.sub("", f"{employee.family_name} {employee.given_name}")
    base = base[:SHEET_NAME_MAX_LENGTH].strip() or f"Employee {employee.employee_id}"

    name = base
    n = 2
    # Excel compares sheet names case-insensitively.
    while name.lower() in used:
        suffix = f" ({n})"
        name = base[: SHEET_NAME_MAX_LENGTH - len(suffix)].rstrip() + suffix
        n += 1
    used.add(name.lower())
    return name


def _status_label(row) -> str:
    if row.anomaly:
        return "Check punches"
    return "Met" if row.met else "Not met"


class ExcelReportWriter:
    """Spreadsheet sink: one sheet per employee, rows highlighted by ``met``."""

    def write(self, report: RangeReport) -> bytes:
        output = io.BytesIO()
        try:
            with pd.ExcelWriter(output, engine="openpyxl") as writer:
                if isinstance(report, AllEmployeesRangeReport):
                    used: set[str] = set()
                    for r in report.reports:
                        self._write_sheet(writer, sheet_name_for(r.employee, used), r, title=r.employee.sort_name)
                    if not report.reports:
                        self._write_empty(writer, report)
                else:
                    self._write_sheet(
                        writer,
                        SINGLE_SHEET_NAME,
                        report,
                        title=f"Punch Report - {report.employee.full_name}",
                    )
        except (OSError, ValueError) as e:
            logger.exception("Could not build spreadsheet")
            raise SinkFailure("Could not build spreadsheet") from e
        return output.getvalue()

    @staticmethod
    def filename_for(report: RangeReport) -> str:
        if isinstance(report, EmployeeRangeReport):
            family = _FORBIDDEN_SHEET_CHARS.sub("", report.employee.family_name).replace(" ", "_")
            return f"report_{family}_{report.start.isoformat()}_{report.end.isoformat()}.xlsx"
        return f"report_all_{report.start.isoformat()}_{report.end.isoformat()}.xlsx"

    def _write_title(self, ws, title: str, period: str) -> None:
        ws.merge_cells("A1:G1")
        ws["A1"] = title
        ws["A1"].font = Font(bold=True, size=14)
        ws["A1"].alignment = Alignment(horizontal="center")

        ws.merge_cells("A2:G2")
        ws["A2"] = period
        ws["A2"].alignment = Alignment(horizontal="center")

    def _write_empty(self, writer: pd.ExcelWriter, report: AllEmployeesRangeReport) -> None:
        pd.DataFrame(columns=HEADERS).to_excel(writer, sheet_name=SINGLE_SHEET_NAME, startrow=3, index=False)
        ws = writer.sheets[SINGLE_SHEET_NAME]
        self._write_title(ws, "Punch Report", f"Period: {report.start.isoformat()} to {report.end.isoformat()}")

    def _write_sheet(
        self,
        writer: pd.ExcelWriter,
        sheet_name: str,
        report: EmployeeRangeReport,
        *,
        title: str,
    ) -> None:
        df = pd.DataFrame(
            [
                [r.work_date.isoformat(), r.in_label, r.out_label, r.worked, r.expected, r.diff, _status_label(r)]
                for r in report.rows
            ],
            columns=HEADERS,
        )
        # Header lands on row 4, data from row 5.
        df.to_excel(writer, sheet_name=sheet_name, startrow=3, index=False)
        ws = writer.sheets[sheet_name]

        self._write_title(ws, title, f"Period: {report.start.isoformat()} to {report.end.isoformat()}")

        for cell in ws[4]:
            cell.font = Font(bold=True)
            cell.fill = HEADER_FILL

        for offset, r in enumerate(report.rows):
            if r.worked > 0 and not r.anomaly:
                ws.cell(row=5 + offset, column=7).fill = MET_FILL if r.met else MISSED_FILL

        s = report.summary
        lines = [
            ("Total Hours Worked:", s.total_hours),
            ("Days Worked:", s.days_worked),
            ("Daily Average:", s.avg_daily),
            ("Total Expected Hours:", s.expected_total),
            ("Total Difference:", s.diff_total),
        ]

        row = 5 + len(report.rows) + 1
        ws.cell(row=row, column=1, value="SUMMARY").font = Font(bold=True)
        for label, value in lines:
            row += 1
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)

        for i, letter in enumerate("ABCDEFG"):
            ws.column_dimensions[letter].width = 12 if i == 0 else 15
