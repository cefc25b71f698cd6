"""Availability calendar and host search routes."""

from datetime import date
from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.engine import Engine

from stay_with_friends.dependencies import get_db_engine, get_identity
from stay_with_friends.routes._helpers import translate_errors, validate_host_owner_or_403
from stay_with_friends.schemas.availability import (
    AvailabilityCreatePayload,
    AvailabilityOut,
    HostOut,
)
from stay_with_friends.schemas.identity import Identity
from stay_with_friends.services import availability

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/hosts/{host_id}/availabilities", status_code=status.HTTP_201_CREATED)
def create_availability(
    host_id: str,
    payload: AvailabilityCreatePayload,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    """
    Add a date range to the caller's own host calendar.

    Args:
        host_id: Host to add the range to
        payload: Dates, status and notes

    Returns:
        dict: Id of the new interval
    """
    with translate_errors("availability_create", host_id=host_id):
        validate_host_owner_or_403(engine, host_id, identity.id)
        availability_id = availability.add_interval(
            engine,
            host_id,
            payload.start_date,
            payload.end_date,
            payload.status,
            payload.notes,
        )
    return {"id": availability_id}


@router.get("/hosts/{host_id}/availabilities", response_model=list[AvailabilityOut])
def host_availabilities(host_id: str, engine: Engine = Depends(get_db_engine)) -> Any:
    with translate_errors("host_availabilities", host_id=host_id):
        return availability.list_by_host(engine, host_id)


@router.get("/availabilities/dates")
def availability_dates(
    start_date: date = Query(..., description="First day of the window"),
    end_date: date = Query(..., description="Last day of the window"),
    host_id: Optional[str] = Query(None, description="Restrict to one host"),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, list[str]]:
    """
    Days in the window that at least one available interval covers.

    Returns:
        dict: ``dates`` as ascending ISO strings
    """
    with translate_errors("availability_dates"):
        days = availability.enumerate_available_dates(engine, start_date, end_date, host_id)
    return {"dates": [day.isoformat() for day in days]}


@router.get("/availabilities", response_model=list[AvailabilityOut])
def availabilities_in_window(
    start_date: date = Query(..., description="First day of the window"),
    end_date: Optional[date] = Query(None, description="Last day (defaults to start_date)"),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    with translate_errors("availabilities_in_window"):
        return availability.available_intervals_between(
            engine, start_date, end_date or start_date
        )


@router.get("/hosts/search", response_model=list[HostOut])
def search_hosts(
    start_date: date = Query(..., description="First day of the stay"),
    end_date: Optional[date] = Query(None, description="Last day (defaults to start_date)"),
    q: Optional[str] = Query(None, description="Text matched against name, description, location"),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    with translate_errors("host_search"):
        return availability.search_available_hosts(engine, start_date, end_date or start_date, q)
