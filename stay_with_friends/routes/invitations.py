"""Invitation routes: invite by email, redeem, withdraw and list."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.engine import Engine

from stay_with_friends.dependencies import get_clock, get_db_engine, get_identity
from stay_with_friends.routes._helpers import translate_errors
from stay_with_friends.schemas.identity import Identity
from stay_with_friends.schemas.social import (
    InvitationAcceptPayload,
    InvitationCreatePayload,
    InvitationEmailPayload,
    InvitationOut,
    UserOut,
)
from stay_with_friends.services import invitations
from stay_with_friends.utils.datetime import Clock

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/invitations", status_code=status.HTTP_201_CREATED, response_model=InvitationOut)
def create_invitation(
    payload: InvitationCreatePayload,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> Any:
    """
    Invite an email address.

    When the address already belongs to a member a connection request is sent
    instead and the response has status ``connection-sent``.
    """
    with translate_errors("invitation_create", inviter_id=identity.id):
        return invitations.create_invitation(
            engine, identity.id, payload.email, payload.message, clock=clock
        )


@router.get("/invitations", response_model=list[InvitationOut])
def my_invitations(
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> Any:
    with translate_errors("invitations_list"):
        return invitations.invitations_by_inviter(engine, identity.id, identity.id, clock=clock)


@router.post("/invitations/email")
def send_invitation_email(payload: InvitationEmailPayload) -> dict[str, str]:
    with translate_errors("invitation_email"):
        url = invitations.send_invitation_email(payload.email, payload.invitation_url)
    return {"invitation_url": url}


@router.get("/invitations/{token}", response_model=InvitationOut)
def invitation_by_token(
    token: str,
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> Any:
    with translate_errors("invitation_lookup"):
        invitation = invitations.invitation_by_token(engine, token, clock=clock)
    if invitation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invitation not found")
    return invitation


@router.post("/invitations/{token}/accept", response_model=UserOut)
def accept_invitation(
    token: str,
    payload: InvitationAcceptPayload,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> Any:
    with translate_errors("invitation_accept", user_id=identity.id):
        return invitations.accept_invitation(
            engine, token, identity, payload.model_dump(), clock=clock
        )


@router.post("/invitations/{invitation_id}/cancel")
def cancel_invitation(
    invitation_id: str,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, bool]:
    with translate_errors("invitation_cancel", invitation_id=invitation_id):
        return {"cancelled": invitations.cancel_invitation(engine, invitation_id, identity.id)}


@router.delete("/invitations/{invitation_id}")
def delete_invitation(
    invitation_id: str,
    identity: Identity = Depends(get_identity),
    engine: Engine = Depends(get_db_engine),
    clock: Clock = Depends(get_clock),
) -> dict[str, bool]:
    with translate_errors("invitation_delete", invitation_id=invitation_id):
        return {
            "deleted": invitations.delete_invitation(
                engine, invitation_id, identity.id, clock=clock
            )
        }
