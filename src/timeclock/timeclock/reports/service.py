from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Optional, Sequence, Union

from ..attendance.model import DayAttendance
from ..attendance.service import AttendanceService, group_by_day
from ..common.datetime_utils import business_today, previous_week_bounds, week_bounds
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..employees.service import EmployeeService
from ..punches.model import PunchEvent
from ..punches.repository import PunchRepository
from .model import (
    AllEmployeesRangeReport,
    DailyEntry,
    DailyReport,
    EmployeeRangeReport,
    ReportRow,
    ReportSummary,
    WeeklyDay,
    WeeklyEntry,
    WeeklyReport,
)

logger = logging.getLogger(__name__)

RangeReport = Union[EmployeeRangeReport, AllEmployeesRangeReport]


def to_row(day: DayAttendance) -> ReportRow:
    return ReportRow(
        work_date=day.work_date,
        first_in=day.first_in,
        last_out=day.last_out,
        worked=day.worked_hours,
        expected=day.expected_hours,
        diff=day.difference,
        met=day.met,
        anomaly=day.anomaly,
    )


def summarize(rows: Sequence[ReportRow], expected_daily: float) -> ReportSummary:
    """Roll up rows; only days with positive, non-anomalous hours count."""
    counted = [r for r in rows if r.worked > 0 and not r.anomaly]
    total = sum(r.worked for r in counted)
    days = len(counted)
    expected_total = expected_daily * days
    return ReportSummary(
        total_hours=round(total, 2),
        days_worked=days,
        avg_daily=round(total / days, 2) if days else 0.0,
        expected_total=round(expected_total, 2),
        diff_total=round(total - expected_total, 2),
    )


class ReportAggregator:
    """Builds daily, weekly and custom-range reports straight from the store."""

    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeRepository,
        employee_service: EmployeeService,
        attendance: AttendanceService,
    ):
        self._punches = punches
        self._employees = employees
        self._employee_service = employee_service
        self._attendance = attendance

    @staticmethod
    def _check_range(start: date, end: date) -> None:
        if start > end:
            raise ValidationError("Start date must not be after end date")

    def _employee_report(self, employee: Employee, start: date, end: date, days: Sequence[DayAttendance]) -> EmployeeRangeReport:
        rows = [to_row(d) for d in days]
        return EmployeeRangeReport(
            employee=employee,
            start=start,
            end=end,
            summary=summarize(rows, employee.expected_daily_hours),
            rows=rows,
        )

    def employee_range(self, employee_id, start: date, end: date) -> EmployeeRangeReport:
        self._check_range(start, end)
        employee = self._employee_service.get_active(employee_id)
        return self._employee_report(employee, start, end, self._attendance.days_for(employee, start, end))

    def all_employees_range(self, start: date, end: date) -> AllEmployeesRangeReport:
        self._check_range(start, end)
        employees = self._employees.list_active()
        days = self._attendance.days_by_employee(employees, start, end)
        return AllEmployeesRangeReport(
            start=start,
            end=end,
            reports=[self._employee_report(e, start, end, days[e.employee_id]) for e in employees],
        )

    def custom_range(self, *, start: date, end: date, employee_id=None) -> RangeReport:
        if employee_id in (None, ""):
            return self.all_employees_range(start, end)
        return self.employee_range(employee_id, start, end)

    def _punches_by_employee_day(self, start: date, end: date) -> dict[int, dict[date, list[PunchEvent]]]:
        out: dict[int, dict[date, list[PunchEvent]]] = defaultdict(dict)
        for (employee_id, work_date), bucket in group_by_day(
            self._punches.list_in_range(start_date=start, end_date=end)
        ).items():
            out[employee_id][work_date] = bucket
        return out

    def daily(self, day: Optional[date] = None) -> DailyReport:
        day = day or business_today()
        by_employee = self._punches_by_employee_day(day, day)
        return DailyReport(
            day=day,
            entries=[
                DailyEntry(employee=e, punches=by_employee.get(e.employee_id, {}).get(day, []))
                for e in self._employees.list_active()
            ],
        )

    def weekly(self, start: Optional[date] = None, end: Optional[date] = None) -> WeeklyReport:
        default_start, default_end = week_bounds(business_today())
        start = start or default_start
        end = end or default_end
        self._check_range(start, end)

        by_employee = self._punches_by_employee_day(start, end)
        entries = []
        for e in self._employees.list_active():
            days = by_employee.get(e.employee_id, {})
            entries.append(
                WeeklyEntry(employee=e, days=[WeeklyDay(day=d, punches=days[d]) for d in sorted(days)])
            )
        return WeeklyReport(start=start, end=end, entries=entries)

    def previous_week(self, today: Optional[date] = None) -> WeeklyReport:
        start, end = previous_week_bounds(today or business_today())
        return self.weekly(start, end)
