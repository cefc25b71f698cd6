"""
Invitation state machine for bringing people into the network by email.

Inviting an address that already belongs to a member becomes a plain
connection request. Inviting anyone else issues a token-bearing invitation
that is ``pending`` until accepted, cancelled, or found to be past its
``expires_at``. Expiry is derived when the row is read; it is only written
back when a repeated invite to the same address meets the stale row.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from typing import Any, Optional

import structlog
from sqlalchemy.engine import Connection, Engine

from stay_with_friends.config import INVITATION_BASE_URL, INVITATION_TTL_DAYS
from stay_with_friends.db.readers.invitations import (
    get_invitation,
    get_invitation_by_token,
    list_invitations_by_inviter,
    list_pending_invitations_for,
)
from stay_with_friends.db.readers.users import find_user_by_email, find_user_by_id
from stay_with_friends.db.writers.connections import insert_connection
from stay_with_friends.db.writers.invitations import (
    delete_invitation as delete_invitation_row,
)
from stay_with_friends.db.writers.invitations import insert_invitation, set_invitation_status
from stay_with_friends.db.writers.users import create_user
from stay_with_friends.errors import (
    AlreadyUsed,
    DuplicateInvitation,
    EmailMismatch,
    Expired,
    InvalidState,
    InvalidToken,
    NotFound,
    Unauthorized,
    ValidationFailed,
)
from stay_with_friends.metrics import connection_transitions, invitation_transitions
from stay_with_friends.schemas.identity import Identity
from stay_with_friends.services.connections import open_edge
from stay_with_friends.utils.datetime import Clock, as_utc, utc_now
from stay_with_friends.validators import validate_email, validate_name, validate_optional_text

logger = structlog.get_logger(__name__)

TOKEN_BYTES = 32
CONNECTION_SENT_STATUS = "connection-sent"
CONNECTION_SENT_TOKEN = "connection-request"
DEFAULT_RELATIONSHIP = "friend"


def generate_token() -> str:
    """Opaque 64-character hex token carrying 32 bytes of entropy."""
    return secrets.token_hex(TOKEN_BYTES)


def is_expired(invitation: dict[str, Any], now: datetime) -> bool:
    return as_utc(now) > as_utc(invitation["expires_at"])


def effective_status(invitation: dict[str, Any], now: datetime) -> str:
    """
    Status as it should be reported at ``now``.

    A stored ``pending`` row past its ``expires_at`` reads as ``expired``;
    every other status is reported as stored.
    """
    if invitation["status"] == "pending" and is_expired(invitation, now):
        return "expired"
    return invitation["status"]


def _with_effective_status(invitation: dict[str, Any], now: datetime) -> dict[str, Any]:
    return {**invitation, "status": effective_status(invitation, now)}


def create_invitation(
    engine: Engine,
    inviter_id: str,
    invitee_email: str,
    message: Optional[str] = None,
    clock: Clock = utc_now,
) -> dict[str, Any]:
    """
    Invite an email address, or send a connection request if it is already a member.

    Args:
        engine: SQLAlchemy engine
        inviter_id: Authenticated inviter
        invitee_email: Address to invite
        message: Optional personal note (max 500 chars)
        clock: Source of ``created_at`` and ``expires_at``

    Returns:
        dict[str, Any]: The stored invitation, or for a member an
        invitation-shaped record with status ``connection-sent`` whose token
        cannot be redeemed

    Raises:
        AlreadyConnected: If the address belongs to a member already linked to the inviter
        DuplicateInvitation: If a live pending invitation exists for this inviter and address
    """
    invitee_email = validate_email(invitee_email)
    validate_optional_text(message, "Invitation message", 500)
    now = clock()
    expires_at = now + timedelta(days=INVITATION_TTL_DAYS)

    with engine.begin() as conn:
        member = find_user_by_email(conn, invitee_email)
        if member is not None:
            connection = open_edge(
                conn, inviter_id, member["id"], DEFAULT_RELATIONSHIP, "pending", clock
            )
            invitation = {
                "id": connection["id"],
                "inviter_id": inviter_id,
                "invitee_email": invitee_email,
                "message": message
                or f"Connection request sent to {member.get('name') or invitee_email}",
                "token": CONNECTION_SENT_TOKEN,
                "status": CONNECTION_SENT_STATUS,
                "expires_at": expires_at,
                "accepted_at": None,
                "created_at": now,
            }
        else:
            pending = list_pending_invitations_for(conn, inviter_id, invitee_email)
            if any(not is_expired(row, now) for row in pending):
                raise DuplicateInvitation("Invitation already sent to this email")
            for stale in pending:
                set_invitation_status(conn, stale["id"], "expired")
                logger.info("invitation_expired", invitation_id=stale["id"])

            invitation = insert_invitation(
                conn, inviter_id, invitee_email, message, generate_token(), now, expires_at
            )

    if member is not None:
        connection_transitions.labels(status="pending").inc()
        invitation_transitions.labels(status=CONNECTION_SENT_STATUS).inc()
        logger.info(
            "invitation_routed_to_connection",
            connection_id=invitation["id"],
            inviter_id=inviter_id,
            connected_user_id=member["id"],
        )
        return invitation

    invitation_transitions.labels(status="expired").inc(len(pending))
    invitation_transitions.labels(status="pending").inc()
    logger.info(
        "invitation_created",
        invitation_id=invitation["id"],
        inviter_id=inviter_id,
        expires_at=expires_at.isoformat(),
    )
    return invitation


def accept_invitation(
    engine: Engine,
    token: str,
    identity: Identity,
    profile: Optional[dict[str, Any]] = None,
    clock: Clock = utc_now,
) -> dict[str, Any]:
    """
    Redeem an invitation token for the authenticated caller.

    A caller without an account gets one under their identity, and the
    inviter and new member are linked by two ``accepted`` rows, one per
    direction. A caller who registered some other way in the meantime keeps
    their account and receives a single ``pending`` request from the inviter.

    Args:
        engine: SQLAlchemy engine
        token: Invitation token
        identity: Authenticated caller
        profile: Optional ``name`` and ``image`` for a new account
        clock: Source of ``accepted_at``

    Returns:
        dict[str, Any]: The caller's user record

    Raises:
        InvalidToken: If no invitation carries the token
        AlreadyUsed: If the invitation is no longer ``pending``
        Expired: If ``expires_at`` has passed (the row stays ``pending``)
        EmailMismatch: If the caller's email is not the invited address
        AlreadyConnected: If an existing member is already linked to the inviter
    """
    if not token or not isinstance(token, str):
        raise InvalidToken("Invalid token format")
    profile = profile or {}
    if profile.get("name") is not None:
        validate_name(profile["name"])
    validate_optional_text(profile.get("image"), "Image URL", 255)
    now = clock()

    with engine.begin() as conn:
        invitation = get_invitation_by_token(conn, token)
        if invitation is None:
            raise InvalidToken("Invalid invitation token")
        if invitation["status"] != "pending":
            raise AlreadyUsed("Invitation has already been used or cancelled")
        if is_expired(invitation, now):
            raise Expired("Invitation has expired")
        if identity.email.strip().lower() != invitation["invitee_email"].strip().lower():
            raise EmailMismatch("Can only accept invitations sent to your email")

        inviter_id = invitation["inviter_id"]
        member = find_user_by_email(conn, invitation["invitee_email"]) or find_user_by_id(
            conn, identity.id
        )
        if member is not None:
            open_edge(conn, inviter_id, member["id"], DEFAULT_RELATIONSHIP, "pending", clock)
            set_invitation_status(conn, invitation["id"], "accepted", accepted_at=now)
            user = member
        else:
            user = create_user(
                conn,
                identity.id,
                invitation["invitee_email"],
                name=profile.get("name"),
                image=profile.get("image"),
            )
            set_invitation_status(conn, invitation["id"], "accepted", accepted_at=now)
            insert_connection(conn, inviter_id, identity.id, DEFAULT_RELATIONSHIP, "accepted", now)
            insert_connection(conn, identity.id, inviter_id, DEFAULT_RELATIONSHIP, "accepted", now)

    invitation_transitions.labels(status="accepted").inc()
    if member is not None:
        connection_transitions.labels(status="pending").inc()
    else:
        connection_transitions.labels(status="accepted").inc(2)
    logger.info(
        "invitation_accepted",
        invitation_id=invitation["id"],
        inviter_id=inviter_id,
        user_id=user["id"],
        existing_member=member is not None,
    )
    return user


def _load_owned(conn: Connection, invitation_id: str, caller_id: str) -> dict[str, Any]:
    invitation = get_invitation(conn, invitation_id)
    if invitation is None:
        raise NotFound(f"Invitation {invitation_id} not found")
    if invitation["inviter_id"] != caller_id:
        raise Unauthorized("Can only manage your own invitations")
    return invitation


def cancel_invitation(engine: Engine, invitation_id: str, caller_id: str) -> bool:
    """
    Withdraw a pending invitation.

    Raises:
        NotFound: If the invitation does not exist
        Unauthorized: If the caller is not the inviter
        InvalidState: If the invitation is no longer ``pending``
    """
    with engine.begin() as conn:
        invitation = _load_owned(conn, invitation_id, caller_id)
        if invitation["status"] != "pending":
            raise InvalidState(f"Invitation is already {invitation['status']}")
        set_invitation_status(conn, invitation_id, "cancelled")

    invitation_transitions.labels(status="cancelled").inc()
    logger.info("invitation_cancelled", invitation_id=invitation_id)
    return True


def delete_invitation(
    engine: Engine, invitation_id: str, caller_id: str, clock: Clock = utc_now
) -> bool:
    """
    Remove a pending or cancelled invitation.

    Accepted and expired invitations are kept as a record of who joined and
    who was asked.

    Returns:
        bool: True if the row was removed

    Raises:
        NotFound: If the invitation does not exist
        Unauthorized: If the caller is not the inviter
        InvalidState: If the invitation is accepted or expired
    """
    with engine.begin() as conn:
        invitation = _load_owned(conn, invitation_id, caller_id)
        status = effective_status(invitation, clock())
        if status not in ("pending", "cancelled"):
            raise InvalidState("Only pending or cancelled invitations can be deleted")
        removed = delete_invitation_row(conn, invitation_id)

    logger.info("invitation_deleted", invitation_id=invitation_id, rows_removed=removed)
    return removed > 0


def invitation_by_token(
    engine: Engine, token: str, clock: Clock = utc_now
) -> Optional[dict[str, Any]]:
    with engine.connect() as conn:
        invitation = get_invitation_by_token(conn, token)
    if invitation is None:
        return None
    return _with_effective_status(invitation, clock())


def invitations_by_inviter(
    engine: Engine, inviter_id: str, caller_id: str, clock: Clock = utc_now
) -> list[dict[str, Any]]:
    if inviter_id != caller_id:
        raise Unauthorized("Can only view your own invitations")
    with engine.connect() as conn:
        rows = list_invitations_by_inviter(conn, inviter_id)
    now = clock()
    return [_with_effective_status(row, now) for row in rows]


def invitation_url(token: str) -> str:
    return f"{INVITATION_BASE_URL.rstrip('/')}/{token}"


def send_invitation_email(email: str, url: str) -> str:
    """
    Validate an outgoing invitation email and report it as sent.

    No mail is delivered; the link is returned so the caller can share it.

    Raises:
        ValidationFailed: If the address is malformed or the URL is missing
    """
    email = validate_email(email)
    if not url or not isinstance(url, str):
        raise ValidationFailed("Invitation URL is required")
    logger.info("invitation_email_stubbed", recipient_domain=email.split("@", 1)[1])
    return url
