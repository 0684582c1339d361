"""Date and time formatting utilities."""

from datetime import datetime, timezone
from typing import Optional


_PREVIOUS = {"year": "last year", "month": "last month", "day": "yesterday"}


def _relative(value: int, unit: str) -> str:
    if value == 1 and unit in _PREVIOUS:
        return _PREVIOUS[unit]
    plural = "" if value == 1 else "s"
    return f"{value} {unit}{plural} ago"


def time_ago(date: datetime, now: Optional[datetime] = None) -> str:
    """
    Describe how long ago ``date`` was, in its largest whole unit.

    Args:
        date: Timezone-aware moment in the past
        now: Reference moment (defaults to the current time)

    Returns:
        Text like "3 days ago", "yesterday" or "now"
    """
    now = now or datetime.now(timezone.utc)
    diff = int((now - date).total_seconds())
    if diff <= 0:
        return "now"

    minutes = diff // 60
    hours = minutes // 60
    days = hours // 24
    months = days // 30
    years = months // 12

    if years > 0:
        return _relative(years, "year")
    if months > 0:
        return _relative(months, "month")
    if days > 0:
        return _relative(days, "day")
    if hours > 0:
        return _relative(hours, "hour")
    if minutes > 0:
        return _relative(minutes, "minute")
    return _relative(diff, "second")


def format_date(date: Optional[datetime]) -> str:
    """Format a commit date as YYYY-MM-DD, or "unknown"."""
    if date is None:
        return "unknown"
    return date.strftime("%Y-%m-%d")
