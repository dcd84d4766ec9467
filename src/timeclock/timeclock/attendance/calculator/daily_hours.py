from __future__ import annotations

from datetime import time
from typing import Optional

from ...common.datetime_utils import minutes_of_day
from ...core.constants import MAX_PLAUSIBLE_DAILY_HOURS
from ...core.exceptions import ComputationAnomaly
from .base import HoursCalculator


class DailyHoursCalculator(HoursCalculator):
    """Standard rule: (last out - first in) in minutes-of-day, over 60, 2 decimals.

    Seconds are ignored. An "out" earlier than the "in" gives a negative
    result, which is returned as-is; see ``ensure_plausible``.
    """

    def worked_hours(self, first_in: Optional[time], last_out: Optional[time]) -> float:
        if first_in is None or last_out is None:
            return 0.0
        minutes = minutes_of_day(last_out) - minutes_of_day(first_in)
        return round(minutes / 60, 2)

    @staticmethod
    def ensure_plausible(hours: float) -> float:
        """Reject hours no single day can hold.

        The same-day rule above tops out just under 24h; the upper bound is for
        calculators whose spans cross midnight.
        """
        if hours < 0 or hours > MAX_PLAUSIBLE_DAILY_HOURS:
            raise ComputationAnomaly(f"Implausible worked hours: {hours}", hours=hours)
        return hours
