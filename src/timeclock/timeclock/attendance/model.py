from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import format_time
from ..core.enums import ComplianceTier, Punctuality


@dataclass(frozen=True)
class DayAttendance:
    """Read-model: one employee's day, derived from punches on every request."""

    work_date: date
    employee_id: int
    first_in: Optional[time]
    last_out: Optional[time]
    worked_hours: float
    expected_hours: float
    anomaly: bool = False

    @property
    def difference(self) -> float:
        return round(self.worked_hours - self.expected_hours, 2)

    @property
    def met(self) -> bool:
        return self.worked_hours >= self.expected_hours

    @property
    def has_work(self) -> bool:
        return self.worked_hours > 0 and not self.anomaly


@dataclass(frozen=True)
class DailyStatus:
    """Today's board entry for one employee."""

    employee_id: int
    first_in: Optional[time]
    last_out: Optional[time]
    worked_hours: float
    punctuality: Punctuality
    expected_start: Optional[str]

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "first_in": format_time(self.first_in),
            "last_out": format_time(self.last_out),
            "worked_hours": self.worked_hours,
            "punctuality": self.punctuality.value,
            "expected_start": self.expected_start,
        }


@dataclass(frozen=True)
class ComplianceWindow:
    employee_id: int
    days: tuple[DayAttendance, ...]
    counted_days: int
    met_days: int
    percentage: float
    tier: ComplianceTier

    @property
    def rounded_percentage(self) -> int:
        # Half up: 62.5 shows as 63.
        return int(math.floor(self.percentage + 0.5))

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "percentage": self.rounded_percentage,
            "days_worked": self.counted_days,
            "days_met": self.met_days,
            "tier": self.tier.value,
        }
