from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Kind of clock event stored in the database."""

    IN = "in"
    OUT = "out"


class ToggleState(str, Enum):
    """What the punch clock is waiting for on the current business day."""

    AWAITING_IN = "AWAITING_IN"
    AWAITING_OUT = "AWAITING_OUT"


class Punctuality(str, Enum):
    ABSENT = "absent"
    PRESENT = "present"
    ON_TIME = "on_time"
    LATE = "late"


class ComplianceTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    LOW = "low"
