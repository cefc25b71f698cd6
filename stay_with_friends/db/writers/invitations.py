from datetime import datetime
from typing import Any, Optional

from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from stay_with_friends.models.base import new_id
from stay_with_friends.models.invitations import Invitation


def insert_invitation(
    conn: Connection,
    inviter_id: str,
    invitee_email: str,
    message: Optional[str],
    token: str,
    created_at: datetime,
    expires_at: datetime,
) -> dict[str, Any]:
    """
    Insert a ``pending`` invitation and return the stored row.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        inviter_id (str): Inviting user.
        invitee_email (str): Invited address.
        message (Optional[str]): Personal note.
        token (str): Opaque redemption token.
        created_at (datetime): Creation timestamp.
        expires_at (datetime): Expiry timestamp, after created_at.

    Returns:
        dict[str, Any]: The inserted row.
    """
    row = {
        "id": new_id(),
        "inviter_id": inviter_id,
        "invitee_email": invitee_email,
        "message": message,
        "token": token,
        "status": "pending",
        "expires_at": expires_at,
        "accepted_at": None,
        "created_at": created_at,
    }
    conn.execute(insert(Invitation).values(**row))
    return row


def set_invitation_status(
    conn: Connection,
    invitation_id: str,
    status: str,
    accepted_at: Optional[datetime] = None,
) -> None:
    """
    Set an invitation's status; ``accepted_at`` is only meaningful for ``accepted``.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        invitation_id (str): Invitation id.
        status (str): New status.
        accepted_at (Optional[datetime]): Acceptance timestamp.
    """
    stmt = (
        update(Invitation)
        .where(Invitation.id == invitation_id)
        .values(status=status, accepted_at=accepted_at)
    )
    conn.execute(stmt)


def delete_invitation(conn: Connection, invitation_id: str) -> int:
    result = conn.execute(delete(Invitation).where(Invitation.id == invitation_id))
    return result.rowcount
