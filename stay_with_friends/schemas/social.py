from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ConnectionCreatePayload(BaseModel):
    """
    Schema for requesting a connection with a registered user.
    """

    email: str = Field(..., description="Email of the user to connect with")
    relationship: Optional[str] = Field(None, description="Label such as 'friend'")


class ConnectionStatusPayload(BaseModel):
    status: str = Field(..., description="pending, accepted, declined, blocked or cancelled")


class UserOut(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    image: Optional[str] = None


class ConnectionOut(BaseModel):
    id: str
    user_id: str
    connected_user_id: str
    relationship: Optional[str] = None
    status: str
    created_at: datetime
    connected_user: Optional[UserOut] = None
    requester: Optional[UserOut] = None


class InvitationCreatePayload(BaseModel):
    """
    Schema for inviting someone by email. Members receive a connection request instead.
    """

    email: str = Field(..., description="Address to invite")
    message: Optional[str] = Field(None, description="Personal note")


class InvitationAcceptPayload(BaseModel):
    """
    Profile details for the account created on acceptance. Both are optional.
    """

    name: Optional[str] = Field(None, description="Display name")
    image: Optional[str] = Field(None, description="Avatar URL")


class InvitationEmailPayload(BaseModel):
    email: str = Field(..., description="Recipient address")
    invitation_url: str = Field(..., description="Link to include in the email")


class InvitationOut(BaseModel):
    id: str
    inviter_id: str
    invitee_email: str
    message: Optional[str] = None
    token: str
    status: str
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    created_at: datetime
