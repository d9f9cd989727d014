"""Application configuration loaded from the environment."""

import os

from pydantic import BaseModel, Field, field_validator, model_validator

from auth.config import AuthConfig


class AppConfig(BaseModel):
    """
    Process-wide configuration.

    Read once at startup via from_env(); nothing reads the environment
    after that.
    """

    environment: str = Field(default="development", description="development or production")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = Field(default="info", pattern="^(debug|info|warning|error)$")
    jwt_secret: str = Field(default="", description="Secret for signing session credentials")
    platform_api_url: str = Field(default="https://apiv3.fansly.com")
    platform_auth_token: str | None = Field(default=None, description="Platform credential for creator sync")
    auth: AuthConfig = Field(default_factory=AuthConfig)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            return "warning" if value == "warn" else value
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @model_validator(mode="after")
    def require_secret_in_production(self) -> "AppConfig":
        """A production deployment must sign with a configured secret."""
        if self.is_production and not self.jwt_secret:
            raise ValueError("JWT_SECRET is required in production")
        return self

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build config from environment variables, falling back to defaults."""
        values = {
            "environment": os.getenv("ENV"),
            "host": os.getenv("SERVER_HOST"),
            "port": os.getenv("SERVER_PORT"),
            "log_level": os.getenv("LOG_LEVEL"),
            "jwt_secret": os.getenv("JWT_SECRET"),
            "platform_api_url": os.getenv("PLATFORM_API_URL"),
            "platform_auth_token": os.getenv("PLATFORM_AUTH_TOKEN") or None,
        }
        return cls(**{k: v for k, v in values.items() if v is not None})
