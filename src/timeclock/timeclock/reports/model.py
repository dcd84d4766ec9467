from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import to_business_local
from ..core.constants import NO_RECORD
from ..core.enums import PunchKind
from ..employees.model import Employee
from ..punches.model import PunchEvent


@dataclass(frozen=True)
class ReportRow:
    """One day of one employee, shaped for JSON and spreadsheet output."""

    work_date: date
    first_in: Optional[time]
    last_out: Optional[time]
    worked: float
    expected: float
    diff: float
    met: bool
    anomaly: bool = False

    @property
    def in_label(self) -> str:
        return self.first_in.strftime("%H:%M:%S") if self.first_in else NO_RECORD

    @property
    def out_label(self) -> str:
        return self.last_out.strftime("%H:%M:%S") if self.last_out else NO_RECORD

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "in": self.in_label,
            "out": self.out_label,
            "worked": self.worked,
            "expected": self.expected,
            "diff": self.diff,
            "met": self.met,
            "anomaly": self.anomaly,
        }


@dataclass(frozen=True)
class ReportSummary:
    total_hours: float = 0.0
    days_worked: int = 0
    avg_daily: float = 0.0
    expected_total: float = 0.0
    diff_total: float = 0.0

    def to_dict(self) -> dict:
        return {
            "total_hours": self.total_hours,
            "days_worked": self.days_worked,
            "avg_daily": self.avg_daily,
            "expected_total": self.expected_total,
            "diff_total": self.diff_total,
        }


@dataclass(frozen=True)
class EmployeeRangeReport:
    employee: Employee
    start: date
    end: date
    summary: ReportSummary
    rows: list[ReportRow] = field(default_factory=list)

    def period_dict(self) -> dict:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}

    def to_dict(self) -> dict:
        return {
            "employee": self.employee.to_dict(),
            "period": self.period_dict(),
            "summary": self.summary.to_dict(),
            "details": [r.to_dict() for r in self.rows],
        }


@dataclass(frozen=True)
class AllEmployeesRangeReport:
    start: date
    end: date
    reports: list[EmployeeRangeReport] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "period": {"start": self.start.isoformat(), "end": self.end.isoformat()},
            "employees": [
                {"employee": r.employee.to_dict(), "summary": r.summary.to_dict(), "details": [d.to_dict() for d in r.rows]}
                for r in self.reports
            ],
        }


def punch_summary(punches: list[PunchEvent]) -> str:
    """Comma separated ``kind:HH:MM:SS`` listing of a day's punches."""
    return ", ".join(f"{p.kind.value}:{to_business_local(p.punched_at).strftime('%H:%M:%S')}" for p in punches)


def _punch_list(punches: list[PunchEvent]) -> list[dict]:
    return [{"kind": p.kind.value, "time": to_business_local(p.punched_at).strftime("%H:%M:%S")} for p in punches]


@dataclass(frozen=True)
class DailyEntry:
    employee: Employee
    punches: list[PunchEvent] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.employee.employee_id,
            "name": self.employee.full_name,
            "schedule": self.employee.schedule,
            "punches": _punch_list(self.punches),
            "punch_summary": punch_summary(self.punches),
        }


@dataclass(frozen=True)
class DailyReport:
    day: date
    entries: list[DailyEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"date": self.day.isoformat(), "employees": [e.to_dict() for e in self.entries]}


@dataclass(frozen=True)
class WeeklyDay:
    day: date
    punches: list[PunchEvent] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "punches": _punch_list(self.punches),
            "punch_summary": punch_summary(self.punches),
        }


@dataclass(frozen=True)
class WeeklyEntry:
    employee: Employee
    days: list[WeeklyDay] = field(default_factory=list)

    @property
    def days_worked(self) -> int:
        return sum(1 for d in self.days if any(p.kind == PunchKind.IN for p in d.punches))

    def to_dict(self) -> dict:
        return {
            "id": self.employee.employee_id,
            "name": self.employee.full_name,
            "schedule": self.employee.schedule,
            "days_worked": self.days_worked,
            "days": [d.to_dict() for d in self.days],
        }


@dataclass(frozen=True)
class WeeklyReport:
    start: date
    end: date
    entries: list[WeeklyEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "employees": [e.to_dict() for e in self.entries],
        }
