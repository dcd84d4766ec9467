from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Sequence

from ..core.constants import (
    COMPLIANCE_EXCELLENT_THRESHOLD,
    COMPLIANCE_GOOD_THRESHOLD,
    COMPLIANCE_LOOKBACK_DAYS,
    COMPLIANCE_MAX_DAYS,
)
from ..core.enums import ComplianceTier
from .model import ComplianceWindow, DayAttendance


class ComplianceScorer:
    """Rolling share of recent days on which the expected hours were worked.

    Days without worked hours (absences, a lone "in") are left out of the
    denominator entirely.
    """

    def __init__(self, *, lookback_days: int = COMPLIANCE_LOOKBACK_DAYS, max_days: int = COMPLIANCE_MAX_DAYS):
        self.lookback_days = int(lookback_days)
        self.max_days = int(max_days)

    def horizon(self, today: date) -> tuple[date, date]:
        return today - timedelta(days=self.lookback_days), today

    def select_window(self, days: Iterable[DayAttendance], today: date) -> list[DayAttendance]:
        start, end = self.horizon(today)
        in_range = [d for d in days if start <= d.work_date <= end]
        in_range.sort(key=lambda d: d.work_date, reverse=True)
        return in_range[: self.max_days]

    @staticmethod
    def tier_for(percentage: float) -> ComplianceTier:
        if percentage >= COMPLIANCE_EXCELLENT_THRESHOLD:
            return ComplianceTier.EXCELLENT
        if percentage >= COMPLIANCE_GOOD_THRESHOLD:
            return ComplianceTier.GOOD
        return ComplianceTier.LOW

    def score(self, employee_id: int, window: Sequence[DayAttendance]) -> ComplianceWindow:
        counted = [d for d in window if d.has_work]
        met = sum(1 for d in counted if d.met)
        percentage = (met / len(counted)) * 100 if counted else 0.0

        return ComplianceWindow(
            employee_id=employee_id,
            days=tuple(window),
            counted_days=len(counted),
            met_days=met,
            percentage=percentage,
            tier=self.tier_for(percentage),
        )
