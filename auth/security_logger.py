"""Security event logging for auth audit trail.

Events go to a dedicated "security" logger so deployments can route them
separately from application logs. Nothing is persisted by the process.
"""

import logging
from enum import Enum
from typing import Any


class SecurityEvent(Enum):
    """Auth security event types."""

    AUTH_INITIATED = "auth_initiated"
    AUTH_COMPLETED = "auth_completed"
    AUTH_FAILED = "auth_failed"
    AUTH_EXPIRED = "auth_expired"
    SESSION_ISSUED = "session_issued"
    SESSION_REJECTED = "session_rejected"
    API_KEY_REJECTED = "api_key_rejected"


class SecurityLogger:
    """Append-only security event logger."""

    LOGGER_NAME = "security"

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger(self.LOGGER_NAME)

    def log(
        self,
        event: SecurityEvent,
        subject: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Emit one record for a security event.

        Failures and rejections are logged at WARNING, everything else at INFO.
        """
        level = logging.INFO
        if event in (
            SecurityEvent.AUTH_FAILED,
            SecurityEvent.AUTH_EXPIRED,
            SecurityEvent.SESSION_REJECTED,
            SecurityEvent.API_KEY_REJECTED,
        ):
            level = logging.WARNING

        record = {
            "event_type": event.value,
            "subject": subject,
            "ip_address": ip_address,
            "user_agent": user_agent,
            "details": details,
        }
        self._logger.log(level, f"security event: {event.value}", extra={"security": record})
