from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchKind
from .model import PunchEvent


class PunchRepository(Protocol):
    def most_recent(self, employee_id: int, business_day: date) -> Optional[PunchEvent]:
        """Last inserted punch of the employee on the given business day."""

        raise NotImplementedError

    def insert(
        self,
        *,
        employee_id: int,
        kind: PunchKind,
        punched_at: datetime,
        note: Optional[str] = None,
    ) -> PunchEvent:
        raise NotImplementedError

    def list_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[PunchEvent]:
        """Punches whose business day falls within [start_date, end_date], oldest first."""

        raise NotImplementedError

    def list_punches(
        self,
        *,
        employee_id: Optional[int] = None,
        business_day: Optional[date] = None,
    ) -> Sequence[PunchEvent]:
        """Punch log, newest first."""

        raise NotImplementedError
