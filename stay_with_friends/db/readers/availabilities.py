from datetime import date
from typing import Any, Optional

from sqlalchemy import exists, or_, select
from sqlalchemy.engine import Connection

from stay_with_friends.models.availabilities import Availability
from stay_with_friends.models.hosts import Host


def _overlaps(window_start: date, window_end: date) -> Any:
    """Inclusive overlap between an availability row and a query window."""
    return (Availability.start_date <= window_end) & (Availability.end_date >= window_start)


def list_availabilities_by_host(conn: Connection, host_id: str) -> list[dict[str, Any]]:
    """
    Fetch every availability row for a host, earliest start first.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        host_id (str): Host id.

    Returns:
        list[dict[str, Any]]: Rows of any status.
    """
    result = conn.execute(
        select(Availability)
        .where(Availability.host_id == host_id)
        .order_by(Availability.start_date, Availability.end_date)
    )
    return [dict(row) for row in result.mappings()]


def list_available_overlapping(
    conn: Connection,
    window_start: date,
    window_end: date,
    host_id: Optional[str] = None,
) -> list[dict[str, Any]]:
    """
    Fetch ``available`` rows overlapping an inclusive window, with host name and location.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        window_start (date): First day of the window.
        window_end (date): Last day of the window.
        host_id (Optional[str]): Restrict to one host.

    Returns:
        list[dict[str, Any]]: Availability rows plus ``host_name`` and ``host_location``.
    """
    stmt = (
        select(
            Availability,
            Host.name.label("host_name"),
            Host.location.label("host_location"),
        )
        .join(Host, Host.id == Availability.host_id)
        .where(Availability.status == "available", _overlaps(window_start, window_end))
        .order_by(Availability.start_date, Availability.id)
    )
    if host_id is not None:
        stmt = stmt.where(Availability.host_id == host_id)
    return [dict(row) for row in conn.execute(stmt).mappings()]


def find_exact_available(
    conn: Connection, host_id: str, start_date: date, end_date: date
) -> Optional[dict[str, Any]]:
    """
    Find an ``available`` row on a host whose range is exactly ``[start_date, end_date]``.

    Returns:
        Optional[dict[str, Any]]: The first matching row, or None.
    """
    row = (
        conn.execute(
            select(Availability)
            .where(
                Availability.host_id == host_id,
                Availability.status == "available",
                Availability.start_date == start_date,
                Availability.end_date == end_date,
            )
            .order_by(Availability.id)
            .limit(1)
        )
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def search_hosts_available_between(
    conn: Connection,
    window_start: date,
    window_end: date,
    text_filter: Optional[str] = None,
) -> list[dict[str, Any]]:
    """
    Fetch hosts with at least one ``available`` row overlapping the window.

    The availability test is an EXISTS subquery, so a host with several
    overlapping rows comes back once.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        window_start (date): First day of the window.
        window_end (date): Last day of the window.
        text_filter (Optional[str]): Case-insensitive substring matched against
            name, description and location; ``%`` and ``_`` match literally.
            Empty or None matches every host.

    Returns:
        list[dict[str, Any]]: Host rows ordered by name.
    """
    has_open_window = exists().where(
        Availability.host_id == Host.id,
        Availability.status == "available",
        _overlaps(window_start, window_end),
    )
    stmt = select(Host).where(has_open_window).order_by(Host.name, Host.id)

    if text_filter:
        stmt = stmt.where(
            or_(
                Host.name.icontains(text_filter, autoescape=True),
                Host.description.icontains(text_filter, autoescape=True),
                Host.location.icontains(text_filter, autoescape=True),
            )
        )

    return [dict(row) for row in conn.execute(stmt).mappings()]
