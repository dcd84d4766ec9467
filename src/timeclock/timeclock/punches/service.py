from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_business, to_business_local
from ..common.validators import require_id
from ..core.enums import PunchKind
from ..employees.service import EmployeeService
from .model import PunchEvent, PunchResult
from .repository import PunchRepository
from .resolver import PunchToggleResolver

logger = logging.getLogger(__name__)


class PunchService:
    """Use case: employees punch the clock; the clock decides in vs. out."""

    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeService,
        attendance: AttendanceService,
        *,
        resolver: Optional[PunchToggleResolver] = None,
    ):
        self._punches = punches
        self._employees = employees
        self._attendance = attendance
        self._resolver = resolver or PunchToggleResolver(punches)

    def register(self, employee_id, *, note: Optional[str] = None, now: Optional[datetime] = None) -> PunchResult:
        employee = self._employees.get_active(employee_id)
        now = to_business_local(now) if now else now_business()

        last = self._resolver.last_punch(employee.employee_id, now.date())
        kind = self._resolver.kind_for(self._resolver.state_after(last))

        session_hours: Optional[float] = None
        if kind == PunchKind.OUT and last is not None:
            session_hours = self._attendance.session_hours(last, now)
            message = f"Thanks for your work! You worked {session_hours} hours today."
        else:
            message = f"Punch {kind.value} recorded"

        punch = self._punches.insert(
            employee_id=employee.employee_id,
            kind=kind,
            punched_at=now,
            note=(note or "").strip() or None,
        )
        logger.info("Punch %s recorded for employee id=%s at %s", kind.value, employee.employee_id, now)

        return PunchResult(
            punch=punch,
            employee_name=employee.full_name,
            session_hours=session_hours,
            message=message,
        )

    def status(self, employee_id, *, today: Optional[date] = None) -> dict:
        employee_id = require_id(employee_id, "Employee id")
        today = today or now_business().date()
        last = self._resolver.last_punch(employee_id, today)
        state = self._resolver.state_after(last)
        return {
            "last_punch": last.to_dict() if last else None,
            "state": state.value,
            "next_kind": self._resolver.kind_for(state).value,
        }

    def list_punches(self, *, employee_id=None, business_day: Optional[date] = None) -> Sequence[PunchEvent]:
        if employee_id not in (None, ""):
            employee_id = require_id(employee_id, "Employee id")
        else:
            employee_id = None
        return self._punches.list_punches(employee_id=employee_id, business_day=business_day)
