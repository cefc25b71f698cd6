from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from stay_with_friends.models.base import Base, new_id


class Host(Base):
    """
    ORM model for a shareable space owned by one user.

    Only ``id`` and ``owner_id`` drive availability and booking logic; the
    descriptive columns are searched by text and otherwise carried as-is.
    """

    __tablename__ = "hosts"

    id = Column(String(36), primary_key=True, default=new_id)
    owner_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    max_guests = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
