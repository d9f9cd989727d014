"""Authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """
    Authentication configuration.

    All durations are in their natural units (minutes for short durations,
    hours for longer ones) to make configuration intuitive.
    """

    # Pending auth settings
    pending_auth_expiry_minutes: int = Field(
        default=10,
        description="How long a pending authentication code remains redeemable",
        ge=1,
        le=60,
    )

    # Session settings
    session_expiry_hours: int = Field(
        default=24,
        description="Session credential lifetime in hours",
        ge=1,
        le=720,
    )
    session_expires_in_seconds: int = Field(
        default=3600,
        description="Lifetime advertised to clients in the complete response",
        ge=60,
    )
    session_issuer: str = Field(
        default="creator-api",
        min_length=1,
        description="Issuer claim stamped on every session credential",
    )

    # Upstream platform
    platform_security_url: str = Field(
        default="https://fansly.com/account/security",
        description="Page where the user retrieves their platform credential",
    )
