from __future__ import annotations

import re
from datetime import time
from typing import Optional

_TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})")


class ScheduleParser:
    """Pull an expected start time out of a freeform schedule description.

    "Monday to Friday 8:00-17:00" -> 08:00. Only the first ``H:MM``/``HH:MM``
    occurrence counts, whatever it is: "Off at 17:00, in at 8:00" yields 17:00.
    This leniency is long-standing behavior that reports depend on; tightening
    it changes punctuality results.
    """

    def parse_start(self, schedule: Optional[str]) -> Optional[time]:
        if not schedule:
            return None
        match = _TIME_PATTERN.search(schedule)
        if not match:
            return None
        hour, minute = int(match.group(1)), int(match.group(2))
        # "25:00" matches the pattern but is not a time of day.
        if hour > 23 or minute > 59:
            return None
        return time(hour, minute)

    def display_start(self, schedule: Optional[str]) -> Optional[str]:
        start = self.parse_start(schedule)
        return start.strftime("%H:%M") if start else None
