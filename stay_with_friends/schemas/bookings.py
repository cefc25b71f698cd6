from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class BookingRequestCreatePayload(BaseModel):
    """
    Schema for asking to stay at a host. Guest count is range-checked by the service.
    """

    host_id: str = Field(..., description="Host being requested")
    start_date: date = Field(..., description="First day of the stay (YYYY-MM-DD)")
    end_date: date = Field(..., description="Last day of the stay (YYYY-MM-DD)")
    guests: int = Field(..., description="Party size")
    message: Optional[str] = Field(None, description="Note to the host")


class BookingStatusPayload(BaseModel):
    """
    Schema for the host's response. Status values are validated by the service
    so unknown values surface as invalid_status.
    """

    status: str = Field(..., description="pending, approved, declined or cancelled")
    response_message: Optional[str] = Field(None, description="Reply to the requester")


class BookingRequestOut(BaseModel):
    id: str
    host_id: str
    requester_id: str
    start_date: date
    end_date: date
    guests: int
    message: Optional[str] = None
    status: str
    response_message: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: datetime
    host_name: Optional[str] = None
