from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field


class AvailabilityCreatePayload(BaseModel):
    """
    Schema for adding a date range to a host's calendar. Both ends are inclusive.
    """

    start_date: date = Field(..., description="First day (YYYY-MM-DD)")
    end_date: date = Field(..., description="Last day (YYYY-MM-DD)")
    status: Literal["available", "booked", "blocked"] = Field(
        "available", description="Calendar status for the range"
    )
    notes: Optional[str] = Field(None, max_length=500, description="Free-text notes")


class AvailabilityOut(BaseModel):
    id: str
    host_id: str
    start_date: date
    end_date: date
    status: str
    notes: Optional[str] = None
    host_name: Optional[str] = None
    host_location: Optional[str] = None


class HostOut(BaseModel):
    id: str
    owner_id: str
    name: str
    location: Optional[str] = None
    description: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    max_guests: Optional[int] = None
