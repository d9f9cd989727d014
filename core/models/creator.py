"""Creator domain models."""

from datetime import datetime

from pydantic import BaseModel, Field


class Creator(BaseModel):
    """Cached metadata for a creator on the upstream platform."""

    id: str
    name: str
    username: str
    avatar_url: str | None = Field(None, description="Omitted from responses when unknown")
    is_verified: bool = False
    is_following: bool = False
    last_updated: datetime
