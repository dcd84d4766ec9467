from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from ..core.constants import BUSINESS_UTC_OFFSET_HOURS

BUSINESS_TZ = timezone(timedelta(hours=BUSINESS_UTC_OFFSET_HOURS), "UTC-03")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_business() -> datetime:
    """Current business-local time as a naive datetime.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(BUSINESS_TZ).replace(tzinfo=None)


def business_today() -> date:
    return now_business().date()


def to_business_local(value: datetime) -> datetime:
    """Normalize a timestamp to naive business-local time.

    Naive values are assumed to already be business-local.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(BUSINESS_TZ).replace(tzinfo=None)


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def format_time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M:%S") if value else None


def week_bounds(day: date) -> tuple[date, date]:
    """Sunday..Saturday calendar week containing ``day``."""
    # weekday(): Monday=0 .. Sunday=6
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def previous_week_bounds(day: date) -> tuple[date, date]:
    start, _ = week_bounds(day)
    return week_bounds(start - timedelta(days=1))
