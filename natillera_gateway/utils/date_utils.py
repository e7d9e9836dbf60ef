"""Date manipulation utilities"""

from datetime import date, datetime, time
from typing import Any, Optional


def start_of_day(day: date) -> datetime:
    """Midnight at the beginning of ``day`` (naive)"""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last millisecond of ``day`` (naive), so same-day timestamps are included"""
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time(23, 59, 59, 999000))


def wall_clock(moment: datetime) -> datetime:
    """Drop tzinfo so backend timestamps compare against naive day bounds"""
    return moment.replace(tzinfo=None)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the backend, None when absent or malformed"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return start_of_day(value)
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def parse_date(value: Any) -> Optional[date]:
    """Parse a calendar date (accepts full timestamps too)"""
    moment = parse_timestamp(value)
    return moment.date() if moment else None
