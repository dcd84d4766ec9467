from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import PunchKind, ToggleState
from .model import PunchEvent
from .repository import PunchRepository


class PunchToggleResolver:
    """Decide whether the next punch of the day is an "in" or an "out".

    State is re-read from the store on every call and never kept between
    requests. Out-of-order punches are not rejected; the next punch simply
    takes whatever kind the current state calls for.
    """

    def __init__(self, punches: PunchRepository):
        self._punches = punches

    @staticmethod
    def state_after(last: Optional[PunchEvent]) -> ToggleState:
        if last is not None and last.kind == PunchKind.IN:
            return ToggleState.AWAITING_OUT
        return ToggleState.AWAITING_IN

    @staticmethod
    def kind_for(state: ToggleState) -> PunchKind:
        return PunchKind.OUT if state == ToggleState.AWAITING_OUT else PunchKind.IN

    def last_punch(self, employee_id: int, business_day: date) -> Optional[PunchEvent]:
        return self._punches.most_recent(employee_id, business_day)

    def state(self, employee_id: int, business_day: date) -> ToggleState:
        return self.state_after(self.last_punch(employee_id, business_day))

    def next_kind(self, employee_id: int, business_day: date) -> PunchKind:
        return self.kind_for(self.state(employee_id, business_day))
