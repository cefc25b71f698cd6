"""
Availability interval store: insert, per-host listing, and the two date queries.

Intervals are inclusive on both ends and may overlap freely. The queries
tolerate overlap instead of normalizing it: a day claimed by several
``available`` rows is reported once, and a host with several matching rows
is reported once.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Iterator, Optional

import structlog
from sqlalchemy.engine import Engine

from stay_with_friends.config import MAX_DATE_WINDOW_DAYS
from stay_with_friends.db.readers.availabilities import (
    list_availabilities_by_host,
    list_available_overlapping,
    search_hosts_available_between,
)
from stay_with_friends.db.writers.availabilities import insert_availability
from stay_with_friends.errors import InvalidRange
from stay_with_friends.metrics import availability_intervals_created, date_enumeration_days
from stay_with_friends.models.availabilities import AVAILABILITY_STATUSES
from stay_with_friends.utils.datetime import parse_date
from stay_with_friends.validators import (
    validate_date_range,
    validate_optional_text,
    validate_status,
)

logger = structlog.get_logger(__name__)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def covered_days(
    window_start: date, window_end: date, intervals: list[tuple[date, date]]
) -> list[date]:
    """
    Return the days of the window that fall inside at least one interval.

    Walks the window one day at a time and keeps a day when any interval
    contains it, so the result is ascending and each day appears once however
    many intervals claim it.

    Args:
        window_start: First day of the window
        window_end: Last day of the window
        intervals: Inclusive ``(start, end)`` pairs

    Returns:
        Sorted, de-duplicated list of days
    """
    if not intervals:
        return []
    return [
        day
        for day in iter_days(window_start, window_end)
        if any(start <= day <= end for start, end in intervals)
    ]


def add_interval(
    engine: Engine,
    host_id: str,
    start_date: str | date,
    end_date: str | date,
    status: str = "available",
    notes: Optional[str] = None,
) -> str:
    """
    Record a date range on a host's calendar.

    No overlap check is made; a ``blocked`` row can sit on top of an
    ``available`` one.

    Args:
        engine: SQLAlchemy engine
        host_id: Host the interval belongs to
        start_date: First day (inclusive), ISO string or date
        end_date: Last day (inclusive), ISO string or date
        status: available, booked or blocked
        notes: Optional free text (max 500 chars)

    Returns:
        str: New interval id

    Raises:
        InvalidRange: If start_date is after end_date
        InvalidStatus: If status is not a calendar status
    """
    start = parse_date(start_date, "start_date")
    end = parse_date(end_date, "end_date")
    validate_date_range(start, end)
    validate_status(status, AVAILABILITY_STATUSES)
    validate_optional_text(notes, "Notes", 500)

    with engine.begin() as conn:
        availability_id = insert_availability(conn, host_id, start, end, status, notes)

    availability_intervals_created.labels(status=status).inc()
    logger.info(
        "availability_created",
        availability_id=availability_id,
        host_id=host_id,
        start_date=start.isoformat(),
        end_date=end.isoformat(),
        status=status,
    )
    return availability_id


def list_by_host(engine: Engine, host_id: str) -> list[dict[str, Any]]:
    with engine.connect() as conn:
        return list_availabilities_by_host(conn, host_id)


def enumerate_available_dates(
    engine: Engine,
    range_start: str | date,
    range_end: str | date,
    host_id: Optional[str] = None,
) -> list[date]:
    """
    List each calendar day in the range that some ``available`` interval covers.

    Args:
        engine: SQLAlchemy engine
        range_start: First day of the query window (inclusive)
        range_end: Last day of the query window (inclusive)
        host_id: Restrict to one host's calendar (default: every host)

    Returns:
        list[date]: Ascending, duplicate-free days; empty when nothing is open

    Raises:
        InvalidRange: If range_start is after range_end, or the window spans more
            than MAX_DATE_WINDOW_DAYS days
    """
    start = parse_date(range_start, "start_date")
    end = parse_date(range_end, "end_date")
    validate_date_range(start, end)
    if (end - start).days + 1 > MAX_DATE_WINDOW_DAYS:
        raise InvalidRange(f"Date window must span at most {MAX_DATE_WINDOW_DAYS} days")

    with engine.connect() as conn:
        rows = list_available_overlapping(conn, start, end, host_id=host_id)

    date_enumeration_days.observe((end - start).days + 1)
    return covered_days(start, end, [(row["start_date"], row["end_date"]) for row in rows])


def available_intervals_between(
    engine: Engine, range_start: str | date, range_end: str | date
) -> list[dict[str, Any]]:
    """``available`` intervals of any host overlapping the window, with host name and location."""
    start = parse_date(range_start, "start_date")
    end = parse_date(range_end, "end_date")
    validate_date_range(start, end)

    with engine.connect() as conn:
        return list_available_overlapping(conn, start, end)


def available_intervals_on(engine: Engine, day: str | date) -> list[dict[str, Any]]:
    return available_intervals_between(engine, day, day)


def search_available_hosts(
    engine: Engine,
    window_start: str | date,
    window_end: str | date,
    text_filter: Optional[str] = None,
) -> list[dict[str, Any]]:
    """
    Find hosts open for at least part of a window that match a text filter.

    Args:
        engine: SQLAlchemy engine
        window_start: First day of the window (inclusive)
        window_end: Last day of the window (inclusive)
        text_filter: Substring matched case-insensitively against name,
            description and location

    Returns:
        list[dict[str, Any]]: One row per host, ordered by name
    """
    start = parse_date(window_start, "start_date")
    end = parse_date(window_end, "end_date")
    validate_date_range(start, end)

    with engine.connect() as conn:
        hosts = search_hosts_available_between(conn, start, end, text_filter)

    logger.debug("host_search", results=len(hosts), text_filter=text_filter)
    return hosts
