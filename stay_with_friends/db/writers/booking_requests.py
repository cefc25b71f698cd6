from datetime import date, datetime
from typing import Any, Optional

import structlog
from sqlalchemy import insert, update
from sqlalchemy.engine import Connection

from stay_with_friends.models.base import new_id
from stay_with_friends.models.booking_requests import BookingRequest

logger = structlog.get_logger(__name__)


def insert_booking_request(
    conn: Connection,
    host_id: str,
    requester_id: str,
    start_date: date,
    end_date: date,
    guests: int,
    message: Optional[str],
    created_at: datetime,
) -> dict[str, Any]:
    """
    Insert a ``pending`` booking request and return the stored row.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        host_id (str): Target host.
        requester_id (str): Requesting user.
        start_date (date): First night (inclusive).
        end_date (date): Last day (inclusive).
        guests (int): Party size, already validated.
        message (Optional[str]): Note to the host.
        created_at (datetime): Creation timestamp from the caller's clock.

    Returns:
        dict[str, Any]: The inserted row.
    """
    row = {
        "id": new_id(),
        "host_id": host_id,
        "requester_id": requester_id,
        "start_date": start_date,
        "end_date": end_date,
        "guests": guests,
        "message": message,
        "status": "pending",
        "response_message": None,
        "responded_at": None,
        "created_at": created_at,
    }
    conn.execute(insert(BookingRequest).values(**row))
    return row


def update_booking_request_status(
    conn: Connection,
    request_id: str,
    status: str,
    response_message: Optional[str],
    responded_at: datetime,
) -> None:
    """
    Set the status and host response of a booking request.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        request_id (str): Booking request id.
        status (str): New status.
        response_message (Optional[str]): Host's reply.
        responded_at (datetime): Response timestamp.
    """
    stmt = (
        update(BookingRequest)
        .where(BookingRequest.id == request_id)
        .values(status=status, response_message=response_message, responded_at=responded_at)
    )
    conn.execute(stmt)
