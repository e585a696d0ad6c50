"""Business-timezone calendar helpers.

Timestamps are stored in UTC; a "day" for reporting purposes runs from
midnight to midnight in ``BUSINESS_TIMEZONE``.
"""
import datetime
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from .config import BUSINESS_TIMEZONE


def business_tz() -> ZoneInfo:
    return ZoneInfo(BUSINESS_TIMEZONE)


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def business_today(now: Optional[datetime.datetime] = None) -> datetime.date:
    now = now or utc_now()
    return now.astimezone(business_tz()).date()


def local_midnight(day: datetime.date) -> datetime.datetime:
    """Midnight at the start of ``day`` in the business timezone, as UTC."""
    start = datetime.datetime.combine(day, datetime.time.min, tzinfo=business_tz())
    return start.astimezone(datetime.timezone.utc)


def day_bounds(day: datetime.date) -> Tuple[datetime.datetime, datetime.datetime]:
    """Half-open ``[start, end)`` UTC bounds of a business calendar day."""
    return local_midnight(day), local_midnight(day + datetime.timedelta(days=1))


def window_bounds(end_day: datetime.date, days: int) -> Tuple[datetime.datetime, datetime.datetime]:
    """Bounds of the trailing ``days``-day window that ends on ``end_day``."""
    if days < 1:
        raise ValueError("days must be at least 1")
    first_day = end_day - datetime.timedelta(days=days - 1)
    return local_midnight(first_day), local_midnight(end_day + datetime.timedelta(days=1))


def parse_time(value: str) -> datetime.time:
    parts = value.strip().split(":")
    if len(parts) < 2:
        raise ValueError("REPORT_RUN_TIME must be in HH:MM format")
    hour = int(parts[0])
    minute = int(parts[1])
    second = int(parts[2]) if len(parts) > 2 else 0
    return datetime.time(hour=hour, minute=minute, second=second)


def next_daily_run(run_time: datetime.time, now: Optional[datetime.datetime] = None) -> datetime.datetime:
    """Next occurrence of ``run_time`` in the business timezone."""
    now = (now or utc_now()).astimezone(business_tz())
    candidate = now.replace(
        hour=run_time.hour,
        minute=run_time.minute,
        second=run_time.second,
        microsecond=0,
    )
    if candidate <= now:
        # Re-anchor through the date so DST shifts keep the wall-clock time.
        next_day = candidate.date() + datetime.timedelta(days=1)
        candidate = datetime.datetime.combine(next_day, run_time, tzinfo=business_tz())
    return candidate
