from datetime import date, datetime

import pytest

from timeclock.attendance.service import AttendanceService
from timeclock.core.enums import PunchKind, ToggleState
from timeclock.core.exceptions import NotFoundError, ValidationError
from timeclock.employees.service import EmployeeService
from timeclock.punches.resolver import PunchToggleResolver
from timeclock.punches.service import PunchService


def _service(employees_repo, punches_repo) -> PunchService:
    attendance = AttendanceService(punches_repo, employees_repo)
    return PunchService(punches_repo, EmployeeService(employees_repo), attendance)


def test_first_punch_of_the_day_is_in(employees_repo, punches_repo, fixed_now):
    svc = _service(employees_repo, punches_repo)

    result = svc.register(1, now=fixed_now)

    assert result.punch.kind == PunchKind.IN
    assert result.session_hours is None
    assert result.message == "Punch in recorded"
    assert result.employee_name == "Juan Perez"


def test_punches_alternate_regardless_of_timestamps(employees_repo, punches_repo):
    svc = _service(employees_repo, punches_repo)
    # Out of chronological order on purpose.
    stamps = [datetime(2026, 2, 4, 12, 0), datetime(2026, 2, 4, 9, 0), datetime(2026, 2, 4, 10, 0)]

    kinds = [svc.register(1, now=ts).punch.kind for ts in stamps]

    assert kinds == [PunchKind.IN, PunchKind.OUT, PunchKind.IN]


def test_out_reports_hours_since_preceding_in(employees_repo, punches_repo):
    svc = _service(employees_repo, punches_repo)
    svc.register(1, now=datetime(2026, 2, 4, 8, 0))
    svc.register(1, now=datetime(2026, 2, 4, 12, 0))
    svc.register(1, now=datetime(2026, 2, 4, 13, 0))

    result = svc.register(1, now=datetime(2026, 2, 4, 17, 30))

    assert result.punch.kind == PunchKind.OUT
    # Session only, not the 9.5h day total.
    assert result.session_hours == 4.5
    assert result.message == "Thanks for your work! You worked 4.5 hours today."


def test_new_business_day_starts_with_in(employees_repo, punches_repo):
    svc = _service(employees_repo, punches_repo)
    svc.register(1, now=datetime(2026, 2, 3, 8, 0))

    assert svc.register(1, now=datetime(2026, 2, 4, 8, 0)).punch.kind == PunchKind.IN


def test_note_is_trimmed(employees_repo, punches_repo, fixed_now):
    svc = _service(employees_repo, punches_repo)

    assert svc.register(1, note="  dentist  ", now=fixed_now).punch.note == "dentist"
    assert svc.register(1, note="   ", now=fixed_now).punch.note is None


def test_missing_employee_id_is_rejected(employees_repo, punches_repo, fixed_now):
    svc = _service(employees_repo, punches_repo)

    with pytest.raises(ValidationError):
        svc.register(None, now=fixed_now)
    assert punches_repo.rows == []


def test_unknown_or_inactive_employee_is_not_found(employees_repo, punches_repo, fixed_now):
    employees_repo.deactivate(2)
    svc = _service(employees_repo, punches_repo)

    with pytest.raises(NotFoundError):
        svc.register(99, now=fixed_now)
    with pytest.raises(NotFoundError):
        svc.register(2, now=fixed_now)


def test_status_reports_next_kind(employees_repo, punches_repo, fixed_now):
    svc = _service(employees_repo, punches_repo)
    today = fixed_now.date()

    assert svc.status(1, today=today) == {"last_punch": None, "state": "AWAITING_IN", "next_kind": "in"}

    svc.register(1, now=fixed_now)
    status = svc.status(1, today=today)

    assert status["state"] == "AWAITING_OUT"
    assert status["next_kind"] == "out"
    assert status["last_punch"]["punched_at"] == "2026-02-04 08:05:00"


def test_resolver_state_is_reread_from_store(punches_repo):
    resolver = PunchToggleResolver(punches_repo)
    day = date(2026, 2, 4)

    assert resolver.state(1, day) == ToggleState.AWAITING_IN
    punches_repo.add(1, "in", datetime(2026, 2, 4, 8, 0))
    assert resolver.next_kind(1, day) == PunchKind.OUT
    punches_repo.add(1, "out", datetime(2026, 2, 4, 9, 0))
    assert resolver.next_kind(1, day) == PunchKind.IN


def test_list_punches_filters(employees_repo, punches_repo):
    punches_repo.add(1, "in", datetime(2026, 2, 3, 8, 0))
    punches_repo.add(2, "in", datetime(2026, 2, 4, 9, 0))
    punches_repo.add(1, "in", datetime(2026, 2, 4, 8, 0))
    svc = _service(employees_repo, punches_repo)

    assert [p.punch_id for p in svc.list_punches(employee_id="1")] == [3, 1]
    assert [p.punch_id for p in svc.list_punches(business_day=date(2026, 2, 4))] == [2, 3]
    assert len(svc.list_punches(employee_id="")) == 3
