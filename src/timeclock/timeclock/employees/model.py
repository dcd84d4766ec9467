from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_EXPECTED_DAILY_HOURS, DEFAULT_EXPECTED_WEEKLY_HOURS


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee who punches the clock.

    Note: Plain data object (no DB access code).
    """

    employee_id: int
    given_name: str
    family_name: str
    schedule: str
    expected_daily_hours: float = DEFAULT_EXPECTED_DAILY_HOURS
    expected_weekly_hours: float = DEFAULT_EXPECTED_WEEKLY_HOURS
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.given_name} {self.family_name}"

    @property
    def sort_name(self) -> str:
        """Family-first form ("Family, Given") used by report titles and e-mails."""
        return f"{self.family_name}, {self.given_name}"

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "given_name": self.given_name,
            "family_name": self.family_name,
            "schedule": self.schedule,
            "expected_daily_hours": self.expected_daily_hours,
            "expected_weekly_hours": self.expected_weekly_hours,
            "active": self.is_active,
        }
