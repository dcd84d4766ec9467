from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Optional, Sequence

from ..core.enums import PunchKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PunchEvent
from .repository import PunchRepository


def _to_punch(row: Dict[str, Any]) -> PunchEvent:
    return PunchEvent(
        punch_id=int(row["punch_id"]),
        employee_id=int(row["employee_id"]),
        kind=PunchKind(row["kind"]),
        punched_at=row["punched_at"],
        note=row.get("note") or None,
    )


def _day_bounds(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    # punched_at is stored business-local, so a day is [00:00, next 00:00).
    return datetime.combine(start_date, time.min), datetime.combine(end_date + timedelta(days=1), time.min)


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def most_recent(self, employee_id: int, business_day: date) -> Optional[PunchEvent]:
        start, end = _day_bounds(business_day, business_day)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT punch_id, employee_id, kind, punched_at, note
                FROM punches
                WHERE employee_id=%s AND punched_at >= %s AND punched_at < %s
                ORDER BY punch_id DESC
                LIMIT 1
                """,
                (int(employee_id), start, end),
            )
            row = fetchone(cur)
            return _to_punch(row) if row else None

    def insert(
        self,
        *,
        employee_id: int,
        kind: PunchKind,
        punched_at: datetime,
        note: Optional[str] = None,
    ) -> PunchEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO punches(employee_id, kind, punched_at, note)
                VALUES(%s,%s,%s,%s)
                """,
                (int(employee_id), kind.value, punched_at, note or ""),
            )
            return PunchEvent(
                punch_id=int(cur.lastrowid),
                employee_id=int(employee_id),
                kind=kind,
                punched_at=punched_at,
                note=note or None,
            )

    def list_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Sequence[PunchEvent]:
        start, end = _day_bounds(start_date, end_date)
        clauses = ["punched_at >= %s", "punched_at < %s"]
        params: list[object] = [start, end]

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT punch_id, employee_id, kind, punched_at, note
                FROM punches
                WHERE {where}
                ORDER BY punched_at ASC, punch_id ASC
                """,
                tuple(params),
            )
            return [_to_punch(r) for r in fetchall(cur)]

    def list_punches(
        self,
        *,
        employee_id: Optional[int] = None,
        business_day: Optional[date] = None,
    ) -> Sequence[PunchEvent]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if business_day is not None:
            start, end = _day_bounds(business_day, business_day)
            clauses.extend(["punched_at >= %s", "punched_at < %s"])
            params.extend([start, end])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT punch_id, employee_id, kind, punched_at, note
                FROM punches
                {where}
                ORDER BY punched_at DESC, punch_id DESC
                """,
                tuple(params),
            )
            return [_to_punch(r) for r in fetchall(cur)]
