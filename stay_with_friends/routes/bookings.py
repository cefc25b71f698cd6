"""Booking request routes."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.engine import Engine

from stay_with_friends.dependencies import get_clock, get_db_engine, get_identity
from stay_with_friends.routes._helpers import load_host_or_404, translate_errors
from stay_with_friends.schemas.bookings import (
    BookingRequestCreatePayload,
    BookingRequestOut,
    BookingStatusPayload,
)
from stay_with_friends.schemas.identity import Identity
from stay_with_friends.services import bookings
from stay_with_friends.utils.datetime import Clock

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "/booking-requests",
    status_code=status.HTTP_201_CREATED,
    response_model=BookingRequestOut,
)
def create_booking_request(
    payload: BookingRequestCreatePayload,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> Any:
    """
    Ask to stay at a host as the authenticated caller.

    The host's declared ``max_guests`` is passed on as the capacity limit.
    """
    host = load_host_or_404(engine, payload.host_id)
    with translate_errors("booking_request_create", host_id=payload.host_id):
        return bookings.create_booking_request(
            engine,
            payload.host_id,
            identity.id,
            payload.start_date,
            payload.end_date,
            payload.guests,
            payload.message,
            capacity=host.get("max_guests"),
            clock=clock,
        )


@router.patch("/booking-requests/{request_id}", response_model=BookingRequestOut)
def update_booking_request(
    request_id: str,
    payload: BookingStatusPayload,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> Any:
    """
    Approve, decline or cancel a request addressed to one of the caller's hosts.

    Approval also marks the dates as booked on the host's calendar.
    """
    with translate_errors("booking_request_update", booking_request_id=request_id):
        return bookings.update_booking_status(
            engine,
            request_id,
            payload.status,
            identity.id,
            payload.response_message,
            clock=clock,
        )


@router.get("/hosts/{host_id}/booking-requests", response_model=list[BookingRequestOut])
def host_booking_requests(
    host_id: str,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    with translate_errors("host_booking_requests", host_id=host_id):
        return bookings.requests_for_host(engine, host_id, identity.id)


@router.get("/booking-requests/mine", response_model=list[BookingRequestOut])
def my_booking_requests(
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    with translate_errors("my_booking_requests"):
        return bookings.requests_by_requester(engine, identity.id, identity.id)


@router.get("/booking-requests/incoming", response_model=list[BookingRequestOut])
def incoming_booking_requests(
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    with translate_errors("incoming_booking_requests"):
        return bookings.requests_for_host_owner(engine, identity.id)


@router.get("/booking-requests/incoming/count")
def incoming_pending_count(
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, int]:
    with translate_errors("incoming_pending_count"):
        return {"pending": bookings.pending_count_for_host_owner(engine, identity.id)}
