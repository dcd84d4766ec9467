from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PunchKind


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: a single clock event. Append-only, never updated."""

    punch_id: int
    employee_id: int
    kind: PunchKind
    punched_at: datetime
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.punch_id,
            "employee_id": self.employee_id,
            "kind": self.kind.value,
            "punched_at": self.punched_at.strftime("%Y-%m-%d %H:%M:%S"),
            "note": self.note or "",
        }


@dataclass(frozen=True)
class PunchResult:
    """Outcome of a punch submission.

    ``session_hours`` covers only the span since the immediately preceding
    "in"; it is not the day total reported by the attendance reports.
    """

    punch: PunchEvent
    employee_name: str
    session_hours: Optional[float]
    message: str

    def to_dict(self) -> dict:
        return {
            "id": self.punch.punch_id,
            "employee_id": self.punch.employee_id,
            "kind": self.punch.kind.value,
            "employee": self.employee_name,
            "punched_at": self.punch.punched_at.strftime("%Y-%m-%d %H:%M:%S"),
            "session_hours": self.session_hours,
            "message": self.message,
        }
