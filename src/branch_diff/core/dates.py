"""Relative date formatting for commit lists."""

from datetime import datetime, timezone
from typing import Optional

SECONDS_PER_DAY = 24 * 60 * 60


def _aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.astimezone()
    return value


def format_relative_date(when: datetime, now: Optional[datetime] = None) -> str:
    """Format ``when`` as today / yesterday / Nd, or a calendar date after a week."""
    when = _aware(when)
    now = _aware(now) if now is not None else datetime.now(timezone.utc)

    days = int((now - when).total_seconds() // SECONDS_PER_DAY)
    if days <= 0:
        return "today"
    if days == 1:
        return "yesterday"
    if days < 7:
        return f"{days}d"
    return when.strftime("%Y-%m-%d")


def parse_git_date(value: str) -> datetime:
    """Parse a strict ISO 8601 date as printed by ``git log --format=%aI``."""
    # Python < 3.11 does not accept a trailing "Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
