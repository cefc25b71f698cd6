from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, String, Text

from stay_with_friends.models.base import Base, new_id

AVAILABILITY_STATUSES = ("available", "booked", "blocked")


class Availability(Base):
    """
    ORM model for a date range on a host's calendar.

    Both ends are inclusive. Rows are never overlap-checked on insert: an
    ``available`` row and a later ``blocked`` row may cover the same days.
    Rows disappear only through cascading host deletion.
    """

    __tablename__ = "availabilities"
    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_availabilities_range"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    host_id = Column(
        String(36), ForeignKey("hosts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="available")
    notes = Column(Text, nullable=True)
