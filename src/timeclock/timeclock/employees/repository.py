from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note: services depend on this interface, not on a concrete database.
    """

    def list_active(self) -> Sequence[Employee]:
        """Active employees ordered by family name, then given name."""

        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        """Return the employee whether active or not."""

        raise NotImplementedError

    def create(
        self,
        *,
        given_name: str,
        family_name: str,
        schedule: str,
        expected_daily_hours: float,
        expected_weekly_hours: float,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        employee_id: int,
        given_name: str,
        family_name: str,
        schedule: str,
        expected_daily_hours: float,
        expected_weekly_hours: float,
    ) -> bool:
        raise NotImplementedError

    def deactivate(self, employee_id: int) -> bool:
        raise NotImplementedError
