from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from timeclock.core.enums import PunchKind
from timeclock.employees.model import Employee
from timeclock.punches.model import PunchEvent


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id: dict[int, Employee] = {e.employee_id: e for e in employees}
        self._id = max(self._by_id, default=0)

    def list_active(self):
        items = [e for e in self._by_id.values() if e.is_active]
        items.sort(key=lambda e: (e.family_name, e.given_name))
        return items

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))

    def create(self, *, given_name, family_name, schedule, expected_daily_hours, expected_weekly_hours) -> int:
        self._id += 1
        self._by_id[self._id] = Employee(
            employee_id=self._id,
            given_name=given_name,
            family_name=family_name,
            schedule=schedule,
            expected_daily_hours=expected_daily_hours,
            expected_weekly_hours=expected_weekly_hours,
        )
        return self._id

    def update(self, *, employee_id, given_name, family_name, schedule, expected_daily_hours, expected_weekly_hours) -> bool:
        current = self._by_id.get(employee_id)
        if not current:
            return False
        self._by_id[employee_id] = replace(
            current,
            given_name=given_name,
            family_name=family_name,
            schedule=schedule,
            expected_daily_hours=expected_daily_hours,
            expected_weekly_hours=expected_weekly_hours,
        )
        return True

    def deactivate(self, employee_id: int) -> bool:
        current = self._by_id.get(employee_id)
        if not current:
            return False
        self._by_id[employee_id] = replace(current, is_active=False)
        return True


class InMemoryPunches:
    def __init__(self):
        self.rows: list[PunchEvent] = []
        self._id = 0
        self.range_calls = 0

    def add(self, employee_id: int, kind: str, punched_at: datetime, note: Optional[str] = None) -> PunchEvent:
        return self.insert(employee_id=employee_id, kind=PunchKind(kind), punched_at=punched_at, note=note)

    def most_recent(self, employee_id: int, business_day: date) -> Optional[PunchEvent]:
        items = [p for p in self.rows if p.employee_id == employee_id and p.punched_at.date() == business_day]
        return max(items, key=lambda p: p.punch_id) if items else None

    def insert(self, *, employee_id, kind, punched_at, note=None) -> PunchEvent:
        self._id += 1
        punch = PunchEvent(punch_id=self._id, employee_id=employee_id, kind=kind, punched_at=punched_at, note=note)
        self.rows.append(punch)
        return punch

    def list_in_range(self, *, start_date, end_date, employee_id=None):
        self.range_calls += 1
        items = [
            p
            for p in self.rows
            if start_date <= p.punched_at.date() <= end_date and (employee_id is None or p.employee_id == employee_id)
        ]
        items.sort(key=lambda p: (p.punched_at, p.punch_id))
        return items

    def list_punches(self, *, employee_id=None, business_day=None):
        items = [
            p
            for p in self.rows
            if (employee_id is None or p.employee_id == employee_id)
            and (business_day is None or p.punched_at.date() == business_day)
        ]
        items.sort(key=lambda p: (p.punched_at, p.punch_id), reverse=True)
        return items


def make_employee(employee_id: int, given: str, family: str, schedule: str = "Monday to Friday 8:00-17:00", **kwargs) -> Employee:
    return Employee(employee_id=employee_id, given_name=given, family_name=family, schedule=schedule, **kwargs)


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday, business-local.
    return datetime(2026, 2, 4, 8, 5, 0)


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            make_employee(1, "Juan", "Perez"),
            make_employee(2, "Maria", "Gonzalez", "Monday to Friday 9:00-18:00"),
            make_employee(3, "Carlos", "Lopez", "Flexible hours", expected_weekly_hours=48.0),
        ]
    )


@pytest.fixture
def punches_repo() -> InMemoryPunches:
    return InMemoryPunches()
