from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Connection

from stay_with_friends.models.invitations import Invitation


def get_invitation(conn: Connection, invitation_id: str) -> Optional[dict[str, Any]]:
    row = (
        conn.execute(select(Invitation).where(Invitation.id == invitation_id))
        .mappings()
        .fetchone()
    )
    return dict(row) if row else None


def get_invitation_by_token(conn: Connection, token: str) -> Optional[dict[str, Any]]:
    row = (
        conn.execute(select(Invitation).where(Invitation.token == token)).mappings().fetchone()
    )
    return dict(row) if row else None


def list_pending_invitations_for(
    conn: Connection, inviter_id: str, invitee_email: str
) -> list[dict[str, Any]]:
    """
    Fetch rows still stored as ``pending`` for an inviter and email, expired or not.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        inviter_id (str): Inviting user.
        invitee_email (str): Invited address.

    Returns:
        list[dict[str, Any]]: Matching rows, oldest first.
    """
    result = conn.execute(
        select(Invitation)
        .where(
            Invitation.inviter_id == inviter_id,
            func.lower(Invitation.invitee_email) == invitee_email.lower(),
            Invitation.status == "pending",
        )
        .order_by(Invitation.created_at)
    )
    return [dict(row) for row in result.mappings()]


def list_invitations_by_inviter(conn: Connection, inviter_id: str) -> list[dict[str, Any]]:
    result = conn.execute(
        select(Invitation)
        .where(Invitation.inviter_id == inviter_id)
        .order_by(Invitation.created_at.desc())
    )
    return [dict(row) for row in result.mappings()]
