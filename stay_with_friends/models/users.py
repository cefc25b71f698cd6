"""SQLAlchemy model for the user directory."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from stay_with_friends.models.base import Base


class User(Base):
    """
    ORM model for registered members.

    Users are created by the identity layer or, for invitees, when an invitation
    is accepted. Email is the lookup key used by connection requests and invitations.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    image = Column(String(255), nullable=True)
    email_verified = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
