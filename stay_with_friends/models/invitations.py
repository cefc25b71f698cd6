"""SQLAlchemy model for email invitations to non-members."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.sql import func

from stay_with_friends.models.base import Base, new_id

INVITATION_STATUSES = ("pending", "accepted", "expired", "cancelled")


class Invitation(Base):
    """
    ORM model for a token-bearing invitation.

    ``expired`` is normally derived at read time from ``expires_at``; it is
    only written when a repeated invite to the same email finds a stale pending row.
    """

    __tablename__ = "invitations"
    __table_args__ = (
        CheckConstraint(
            "status IN (" + ", ".join(f"'{status}'" for status in INVITATION_STATUSES) + ")",
            name="ck_invitations_status",
        ),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    inviter_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    invitee_email = Column(String(255), nullable=False, index=True)
    message = Column(Text, nullable=True)
    token = Column(String(64), nullable=False, unique=True, index=True)
    status = Column(String(20), nullable=False, default="pending")
    expires_at = Column(DateTime(timezone=True), nullable=False)
    accepted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
