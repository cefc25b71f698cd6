"""
Booking request state machine.

A request is created ``pending`` and moved exactly once by the host owner to
``approved``, ``declined`` or ``cancelled``. Approval also records the stay on
the host's calendar (see ``reconcile_approval``); the status change and the
calendar write share one transaction.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Optional

import structlog
from sqlalchemy.engine import Connection, Engine

from stay_with_friends.config import MAX_GUESTS
from stay_with_friends.db.readers.availabilities import find_exact_available
from stay_with_friends.db.readers.booking_requests import (
    count_pending_for_owner,
    get_booking_request,
    list_booking_requests_by_host,
    list_booking_requests_by_requester,
    list_booking_requests_for_owner,
)
from stay_with_friends.db.readers.hosts import get_host, host_owned_by
from stay_with_friends.db.readers.users import find_user_by_id
from stay_with_friends.db.writers.availabilities import (
    insert_availability,
    mark_availability_booked,
)
from stay_with_friends.db.writers.booking_requests import (
    insert_booking_request,
    update_booking_request_status,
)
from stay_with_friends.errors import (
    InvalidGuestCount,
    InvalidState,
    NotFound,
    Unauthorized,
)
from stay_with_friends.metrics import availability_intervals_created, booking_transitions
from stay_with_friends.models.booking_requests import BOOKING_STATUSES
from stay_with_friends.utils.datetime import Clock, parse_date, utc_now
from stay_with_friends.validators import (
    validate_date_range,
    validate_optional_text,
    validate_status,
)

logger = structlog.get_logger(__name__)

OwnershipCheck = Callable[[Connection, str, str], bool]


def validate_guest_count(guests: Any, capacity: Optional[int] = None) -> None:
    """
    Raises:
        InvalidGuestCount: If guests is not a positive integer or exceeds the
            host capacity (MAX_GUESTS when the capacity is unknown)
    """
    if isinstance(guests, bool) or not isinstance(guests, int) or guests < 1:
        raise InvalidGuestCount("Guests count must be a positive integer")
    limit = capacity if capacity is not None else MAX_GUESTS
    if guests > limit:
        raise InvalidGuestCount(f"Guests count must be no more than {limit}")


def create_booking_request(
    engine: Engine,
    host_id: str,
    requester_id: str,
    start_date: str | date,
    end_date: str | date,
    guests: int,
    message: Optional[str] = None,
    capacity: Optional[int] = None,
    clock: Clock = utc_now,
) -> dict[str, Any]:
    """
    File a ``pending`` booking request.

    Args:
        engine: SQLAlchemy engine
        host_id: Host being requested
        requester_id: Authenticated requester
        start_date: First day of the stay (inclusive)
        end_date: Last day of the stay (inclusive)
        guests: Party size
        message: Optional note to the host (max 1000 chars)
        capacity: Host capacity as checked by the listing layer, if known
        clock: Source of the creation timestamp

    Returns:
        dict[str, Any]: The stored request

    Raises:
        InvalidRange: If start_date is after end_date
        InvalidGuestCount: If guests is not a positive integer within capacity
        NotFound: If the host does not exist
    """
    start = parse_date(start_date, "start_date")
    end = parse_date(end_date, "end_date")
    validate_date_range(start, end)
    validate_guest_count(guests, capacity)
    validate_optional_text(message, "Message", 1000)

    with engine.begin() as conn:
        if get_host(conn, host_id) is None:
            raise NotFound(f"Host {host_id} not found")
        booking = insert_booking_request(
            conn, host_id, requester_id, start, end, guests, message, clock()
        )

    booking_transitions.labels(status="pending").inc()
    logger.info(
        "booking_request_created",
        booking_request_id=booking["id"],
        host_id=host_id,
        requester_id=requester_id,
        guests=guests,
    )
    return booking


def reconcile_approval(conn: Connection, booking: dict[str, Any]) -> dict[str, Any]:
    """
    Record an approved booking on the host's calendar.

    If an ``available`` interval on the host covers exactly the booked range it
    is flipped to ``booked``. Otherwise a new ``booked`` interval is inserted
    for the booked range. Wider or partially overlapping ``available``
    intervals are left untouched, so they keep advertising the booked days.

    Args:
        conn: Connection inside the approval transaction
        booking: The booking request row

    Returns:
        dict: ``availability_id`` of the booked interval and ``created`` (True
        when a new row was inserted)
    """
    requester = find_user_by_id(conn, booking["requester_id"])
    guest_label = (
        (requester.get("name") or requester.get("email")) if requester else booking["requester_id"]
    )
    notes = f"Booked by {guest_label}"

    match = find_exact_available(
        conn, booking["host_id"], booking["start_date"], booking["end_date"]
    )
    if match is not None:
        mark_availability_booked(conn, match["id"], notes)
        logger.info(
            "availability_booked",
            availability_id=match["id"],
            booking_request_id=booking["id"],
        )
        return {"availability_id": match["id"], "created": False}

    availability_id = insert_availability(
        conn, booking["host_id"], booking["start_date"], booking["end_date"], "booked", notes
    )
    availability_intervals_created.labels(status="booked").inc()
    logger.info(
        "availability_booked_interval_created",
        availability_id=availability_id,
        booking_request_id=booking["id"],
    )
    return {"availability_id": availability_id, "created": True}


def update_booking_status(
    engine: Engine,
    request_id: str,
    new_status: str,
    caller_id: str,
    response_message: Optional[str] = None,
    clock: Clock = utc_now,
    owns_host: OwnershipCheck = host_owned_by,
) -> dict[str, Any]:
    """
    Host owner's response to a booking request.

    Args:
        engine: SQLAlchemy engine
        request_id: Booking request id
        new_status: pending, approved, declined or cancelled
        caller_id: Authenticated caller; must own the target host
        response_message: Optional reply to the requester
        clock: Source of ``responded_at``
        owns_host: Ownership fact supplied by the listing layer

    Returns:
        dict[str, Any]: The updated request

    Raises:
        InvalidStatus: If new_status is not a booking status
        NotFound: If the request does not exist
        Unauthorized: If the caller does not own the host
        InvalidState: If the request already left ``pending``
    """
    validate_status(new_status, BOOKING_STATUSES)
    validate_optional_text(response_message, "Response message", 1000)

    with engine.begin() as conn:
        booking = get_booking_request(conn, request_id)
        if booking is None:
            raise NotFound(f"Booking request {request_id} not found")
        if not owns_host(conn, booking["host_id"], caller_id):
            raise Unauthorized("Can only update booking requests for your own hosts")
        if booking["status"] != "pending":
            raise InvalidState(f"Booking request is already {booking['status']}")

        update_booking_request_status(conn, request_id, new_status, response_message, clock())

        if new_status == "approved":
            reconcile_approval(conn, booking)

        updated = get_booking_request(conn, request_id)

    booking_transitions.labels(status=new_status).inc()
    logger.info(
        "booking_request_status_updated",
        booking_request_id=request_id,
        host_id=booking["host_id"],
        status=new_status,
    )
    return updated  # type: ignore[return-value]


def requests_for_host(
    engine: Engine, host_id: str, caller_id: str, owns_host: OwnershipCheck = host_owned_by
) -> list[dict[str, Any]]:
    with engine.connect() as conn:
        if not owns_host(conn, host_id, caller_id):
            raise Unauthorized("Can only view booking requests for your own hosts")
        return list_booking_requests_by_host(conn, host_id)


def requests_by_requester(engine: Engine, requester_id: str, caller_id: str) -> list[dict[str, Any]]:
    if requester_id != caller_id:
        raise Unauthorized("Can only view your own booking requests")
    with engine.connect() as conn:
        return list_booking_requests_by_requester(conn, requester_id)


def requests_for_host_owner(engine: Engine, owner_id: str) -> list[dict[str, Any]]:
    """Every request addressed to any host the user owns, newest first."""
    with engine.connect() as conn:
        return list_booking_requests_for_owner(conn, owner_id)


def pending_count_for_host_owner(engine: Engine, owner_id: str) -> int:
    with engine.connect() as conn:
        return count_pending_for_owner(conn, owner_id)
