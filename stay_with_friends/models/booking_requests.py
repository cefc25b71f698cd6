# models/booking_requests.py

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from stay_with_friends.models.base import Base, new_id

BOOKING_STATUSES = ("pending", "approved", "declined", "cancelled")


class BookingRequest(Base):
    """
    ORM model for a requester's ask to stay at a host for a date range.

    Created as ``pending``; the host owner moves it once to approved, declined
    or cancelled. Approval also writes to the host's availability calendar.
    """

    __tablename__ = "booking_requests"
    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_booking_requests_range"),
        CheckConstraint("guests > 0", name="ck_booking_requests_guests"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    host_id = Column(
        String(36), ForeignKey("hosts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    requester_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    guests = Column(Integer, nullable=False)
    message = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    response_message = Column(Text, nullable=True)
    responded_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
