from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Connection

from stay_with_friends.models.booking_requests import BookingRequest
from stay_with_friends.models.hosts import Host


def get_booking_request(conn: Connection, request_id: str) -> Optional[dict[str, Any]]:
    row = (
        conn.execute(select(BookingRequest).where(BookingRequest.id == request_id))
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def list_booking_requests_by_host(conn: Connection, host_id: str) -> list[dict[str, Any]]:
    result = conn.execute(
        select(BookingRequest)
        .where(BookingRequest.host_id == host_id)
        .order_by(BookingRequest.created_at.desc())
    )
    return [dict(row) for row in result.mappings()]


def list_booking_requests_by_requester(
    conn: Connection, requester_id: str
) -> list[dict[str, Any]]:
    result = conn.execute(
        select(BookingRequest)
        .where(BookingRequest.requester_id == requester_id)
        .order_by(BookingRequest.created_at.desc())
    )
    return [dict(row) for row in result.mappings()]


def list_booking_requests_for_owner(conn: Connection, owner_id: str) -> list[dict[str, Any]]:
    """
    Fetch requests addressed to any host the user owns, newest first.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        owner_id (str): Host owner's user id.

    Returns:
        list[dict[str, Any]]: Booking request rows plus ``host_name``.
    """
    result = conn.execute(
        select(BookingRequest, Host.name.label("host_name"))
        .join(Host, Host.id == BookingRequest.host_id)
        .where(Host.owner_id == owner_id)
        .order_by(BookingRequest.created_at.desc())
    )
    return [dict(row) for row in result.mappings()]


def count_pending_for_owner(conn: Connection, owner_id: str) -> int:
    result = conn.execute(
        select(func.count(BookingRequest.id))
        .join(Host, Host.id == BookingRequest.host_id)
        .where(Host.owner_id == owner_id, BookingRequest.status == "pending")
    )
    return int(result.scalar_one())
