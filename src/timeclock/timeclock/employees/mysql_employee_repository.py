from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.constants import DEFAULT_EXPECTED_DAILY_HOURS, DEFAULT_EXPECTED_WEEKLY_HOURS
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, given_name, family_name, schedule,
    expected_daily_hours, expected_weekly_hours, is_active, created_at
"""


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        given_name=row["given_name"],
        family_name=row["family_name"],
        schedule=row["schedule"],
        expected_daily_hours=float(row.get("expected_daily_hours") or DEFAULT_EXPECTED_DAILY_HOURS),
        expected_weekly_hours=float(row.get("expected_weekly_hours") or DEFAULT_EXPECTED_WEEKLY_HOURS),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE is_active=1
                ORDER BY family_name, given_name
                """
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def create(
        self,
        *,
        given_name: str,
        family_name: str,
        schedule: str,
        expected_daily_hours: float,
        expected_weekly_hours: float,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(given_name, family_name, schedule, expected_daily_hours, expected_weekly_hours, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (given_name, family_name, schedule, expected_daily_hours, expected_weekly_hours),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET given_name=%s, family_name=%s, schedule=%s, expected_daily_hours=%s, expected_weekly_hours=%s
                WHERE employee_id=%s
                """,
                (given_name, family_name, schedule, expected_daily_hours, expected_weekly_hours, int(employee_id)),
            )
            return cur.rowcount > 0

    def deactivate(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET is_active=0 WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
