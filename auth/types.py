"""Pydantic models for auth domain."""

from datetime import datetime

from pydantic import BaseModel, Field


class PendingAuth(BaseModel):
    """A pending authentication code awaiting redemption."""

    code: str = Field(..., description="Hex encoded random code")
    expires_at: datetime

    model_config = {"frozen": True}


class SessionClaims(BaseModel):
    """Claim set carried by a session credential."""

    sub: str = Field(..., description="Subject identifier")
    iat: datetime
    nbf: datetime
    exp: datetime
    iss: str

    model_config = {"frozen": True}


class AuthCompleteRequest(BaseModel):
    """Request payload for completing authentication."""

    auth_token: str
    user_agent: str = ""


class AuthInitiateResponse(BaseModel):
    """Response payload for starting authentication."""

    url: str
    token: str


class AuthCompleteResponse(BaseModel):
    """Response payload carrying the issued session credential."""

    token: str
    expires_in: int
