from __future__ import annotations

from datetime import time
from typing import Optional

from ..common.datetime_utils import minutes_of_day
from ..core.constants import PUNCTUALITY_TOLERANCE_MINUTES
from ..core.enums import Punctuality


class PunctualityClassifier:
    def __init__(self, tolerance_minutes: int = PUNCTUALITY_TOLERANCE_MINUTES):
        self._tolerance = int(tolerance_minutes)

    def classify(self, first_in: Optional[time], expected_start: Optional[time]) -> Punctuality:
        if first_in is None:
            return Punctuality.ABSENT
        if expected_start is None:
            # Arrived, but there is nothing to compare against.
            return Punctuality.PRESENT
        if minutes_of_day(first_in) <= minutes_of_day(expected_start) + self._tolerance:
            return Punctuality.ON_TIME
        return Punctuality.LATE
