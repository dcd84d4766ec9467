from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import business_today, to_business_local
from ..core.enums import PunchKind
from ..core.exceptions import ComputationAnomaly
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..punches.model import PunchEvent
from ..punches.repository import PunchRepository
from .calculator.daily_hours import DailyHoursCalculator
from .compliance import ComplianceScorer
from .model import ComplianceWindow, DailyStatus, DayAttendance
from .punctuality import PunctualityClassifier
from .schedule_parser import ScheduleParser

logger = logging.getLogger(__name__)


def group_by_day(punches: Iterable[PunchEvent]) -> dict[tuple[int, date], list[PunchEvent]]:
    """Bucket punches by (employee, business day), keeping time order inside a bucket."""
    grouped: dict[tuple[int, date], list[PunchEvent]] = defaultdict(list)
    for p in punches:
        grouped[(p.employee_id, to_business_local(p.punched_at).date())].append(p)
    for bucket in grouped.values():
        bucket.sort(key=lambda p: (to_business_local(p.punched_at), p.punch_id))
    return dict(grouped)


class AttendanceService:
    """Turns raw punches into per-day attendance facts.

    Nothing here is cached: every call reads the store again, since punches
    can land between two reads of the same day.
    """

    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[DailyHoursCalculator] = None,
        parser: Optional[ScheduleParser] = None,
        punctuality: Optional[PunctualityClassifier] = None,
        compliance: Optional[ComplianceScorer] = None,
    ):
        self._punches = punches
        self._employees = employees
        self._calculator = calculator or DailyHoursCalculator()
        self._parser = parser or ScheduleParser()
        self._punctuality = punctuality or PunctualityClassifier()
        self._compliance = compliance or ComplianceScorer()

    def build_day(self, employee: Employee, work_date: date, punches: Sequence[PunchEvent]) -> DayAttendance:
        ins = [to_business_local(p.punched_at).time() for p in punches if p.kind == PunchKind.IN]
        outs = [to_business_local(p.punched_at).time() for p in punches if p.kind == PunchKind.OUT]
        first_in = min(ins) if ins else None
        last_out = max(outs) if outs else None

        worked = self._calculator.worked_hours(first_in, last_out)
        anomaly = False
        try:
            self._calculator.ensure_plausible(worked)
        except ComputationAnomaly as e:
            logger.warning(
                "Employee %s on %s: %s (in=%s, out=%s)",
                employee.employee_id,
                work_date.isoformat(),
                e,
                first_in,
                last_out,
            )
            anomaly = True

        return DayAttendance(
            work_date=work_date,
            employee_id=employee.employee_id,
            first_in=first_in,
            last_out=last_out,
            worked_hours=worked,
            expected_hours=employee.expected_daily_hours,
            anomaly=anomaly,
        )

    def _days_from(self, employee: Employee, punches: Iterable[PunchEvent]) -> list[DayAttendance]:
        grouped = group_by_day(punches)
        return [
            self.build_day(employee, work_date, bucket)
            for (employee_id, work_date), bucket in sorted(grouped.items(), key=lambda kv: kv[0][1])
            if employee_id == employee.employee_id
        ]

    def days_for(self, employee: Employee, start: date, end: date) -> list[DayAttendance]:
        """Days with at least one punch for one employee, oldest first."""
        punches = self._punches.list_in_range(start_date=start, end_date=end, employee_id=employee.employee_id)
        return self._days_from(employee, punches)

    def days_by_employee(self, employees: Sequence[Employee], start: date, end: date) -> dict[int, list[DayAttendance]]:
        """One store read for every employee; employees without punches map to []."""
        punches = self._punches.list_in_range(start_date=start, end_date=end)
        by_employee: dict[int, list[PunchEvent]] = defaultdict(list)
        for p in punches:
            by_employee[p.employee_id].append(p)
        return {e.employee_id: self._days_from(e, by_employee.get(e.employee_id, [])) for e in employees}

    def daily_status(self, day: Optional[date] = None) -> list[DailyStatus]:
        day = day or business_today()
        employees = self._employees.list_active()
        days = self.days_by_employee(employees, day, day)

        out: list[DailyStatus] = []
        for e in employees:
            entry = days[e.employee_id][0] if days[e.employee_id] else None
            expected_start = self._parser.parse_start(e.schedule)
            first_in = entry.first_in if entry else None
            out.append(
                DailyStatus(
                    employee_id=e.employee_id,
                    first_in=first_in,
                    last_out=entry.last_out if entry else None,
                    worked_hours=entry.worked_hours if entry else 0.0,
                    punctuality=self._punctuality.classify(first_in, expected_start),
                    expected_start=expected_start.strftime("%H:%M") if expected_start else None,
                )
            )
        return out

    def compliance(self, employee: Employee, *, today: Optional[date] = None) -> ComplianceWindow:
        today = today or business_today()
        start, end = self._compliance.horizon(today)
        window = self._compliance.select_window(self.days_for(employee, start, end), today)
        return self._compliance.score(employee.employee_id, window)

    def compliance_all(self, *, today: Optional[date] = None) -> list[ComplianceWindow]:
        today = today or business_today()
        employees = self._employees.list_active()
        start, end = self._compliance.horizon(today)
        days = self.days_by_employee(employees, start, end)
        return [
            self._compliance.score(e.employee_id, self._compliance.select_window(days[e.employee_id], today))
            for e in employees
        ]

    def session_hours(self, last_in: PunchEvent, punched_out_at) -> float:
        """Hours between one "in" and the "out" that closes it (not the day total)."""
        return self._calculator.worked_hours(
            to_business_local(last_in.punched_at).time(),
            to_business_local(punched_out_at).time(),
        )
