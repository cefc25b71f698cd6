from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.sql import func

from stay_with_friends.models.base import Base, new_id

CONNECTION_STATUSES = ("pending", "accepted", "declined", "blocked", "cancelled")


class Connection(Base):
    """
    ORM model for the trust edge between two users.

    The edge is undirected but stored as a directed row (``user_id`` is the
    initiator). Every lookup goes through ``pair_clause`` in the connections
    reader so both storage directions are matched by one predicate.
    """

    __tablename__ = "connections"
    __table_args__ = (
        UniqueConstraint("user_id", "connected_user_id", name="uq_connections_pair"),
        CheckConstraint("user_id <> connected_user_id", name="ck_connections_not_self"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    connected_user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    relationship = Column(String(50), nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
