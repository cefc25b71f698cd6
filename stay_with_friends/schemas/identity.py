from pydantic import BaseModel, Field


class Identity(BaseModel):
    """
    Authenticated caller as vouched for by the identity layer.

    Token verification happens upstream; services only trust these two fields.
    """

    id: str = Field(..., description="User id issued by the identity provider")
    email: str = Field(..., description="Verified email address")
