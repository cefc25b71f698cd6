"""UTC datetime and calendar-date utilities."""

from datetime import date, datetime, timezone
from typing import Callable

from stay_with_friends.errors import ValidationFailed

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    This function should be used instead of datetime.now() or datetime.utcnow()
    to ensure all timestamps are timezone-aware and stored in UTC. Services accept
    any zero-argument callable with the same contract as their ``clock``.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp (SQLite drops tzinfo on the way back)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_date(value: str | date, field_name: str = "date") -> date:
    """
    Parse an ISO ``YYYY-MM-DD`` string into a date.

    Args:
        value: ISO date string, or an already-parsed date
        field_name: Name used in the error message

    Raises:
        ValidationFailed: If the string is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationFailed(f"{field_name} must be an ISO date (YYYY-MM-DD)")
