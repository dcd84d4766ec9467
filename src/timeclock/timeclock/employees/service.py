from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..common.validators import optional_positive_float, require_id, require_non_empty
from ..core.constants import DEFAULT_EXPECTED_DAILY_HOURS, DEFAULT_EXPECTED_WEEKLY_HOURS
from ..core.exceptions import NotFoundError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage employees (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_active(self) -> Sequence[Employee]:
        return self._employees.list_active()

    def get_active(self, employee_id) -> Employee:
        """Look up an employee that can still punch and be reported on."""
        employee_id = require_id(employee_id, "Employee id")
        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.is_active:
            raise NotFoundError("Employee not found")
        return employee

    def names_for(self, employee_ids: Iterable[int]) -> dict[int, str]:
        """Full names for the given ids, deactivated employees included (for punch history)."""
        names: dict[int, str] = {}
        for employee_id in set(employee_ids):
            employee = self._employees.get_by_id(employee_id)
            if employee:
                names[employee_id] = employee.full_name
        return names

    def create(
        self,
        *,
        given_name: Optional[str],
        family_name: Optional[str],
        schedule: Optional[str],
        expected_daily_hours=None,
        expected_weekly_hours=None,
    ) -> Employee:
        given_name = require_non_empty(given_name, "Given name")
        family_name = require_non_empty(family_name, "Family name")
        schedule = require_non_empty(schedule, "Schedule")
        daily = optional_positive_float(expected_daily_hours, "Expected daily hours", DEFAULT_EXPECTED_DAILY_HOURS)
        weekly = optional_positive_float(expected_weekly_hours, "Expected weekly hours", DEFAULT_EXPECTED_WEEKLY_HOURS)

        employee_id = self._employees.create(
            given_name=given_name,
            family_name=family_name,
            schedule=schedule,
            expected_daily_hours=daily,
            expected_weekly_hours=weekly,
        )
        logger.info("Created employee id=%s (%s %s)", employee_id, given_name, family_name)
        return Employee(
            employee_id=employee_id,
            given_name=given_name,
            family_name=family_name,
            schedule=schedule,
            expected_daily_hours=daily,
            expected_weekly_hours=weekly,
        )

    def update(
        self,
        employee_id,
        *,
        given_name: Optional[str],
        family_name: Optional[str],
        schedule: Optional[str],
        expected_daily_hours=None,
        expected_weekly_hours=None,
    ) -> None:
        given_name = require_non_empty(given_name, "Given name")
        family_name = require_non_empty(family_name, "Family name")
        schedule = require_non_empty(schedule, "Schedule")
        employee = self.get_active(employee_id)

        self._employees.update(
            employee_id=employee.employee_id,
            given_name=given_name,
            family_name=family_name,
            schedule=schedule,
            expected_daily_hours=optional_positive_float(
                expected_daily_hours, "Expected daily hours", DEFAULT_EXPECTED_DAILY_HOURS
            ),
            expected_weekly_hours=optional_positive_float(
                expected_weekly_hours, "Expected weekly hours", DEFAULT_EXPECTED_WEEKLY_HOURS
            ),
        )

    def deactivate(self, employee_id) -> None:
        """Soft delete: the employee disappears from lists, punches stay."""
        employee = self.get_active(employee_id)
        if not self._employees.deactivate(employee.employee_id):
            raise NotFoundError("Employee not found")
        logger.info("Deactivated employee id=%s", employee.employee_id)
