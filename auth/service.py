"""Authentication service - orchestrates the two-phase token exchange."""

import logging
from dataclasses import dataclass
from uuid import uuid4

from auth.config import AuthConfig
from auth.pending import PendingAuthStore, RedemptionResult
from auth.session import SessionIssuer
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)


@dataclass
class InitiateResult:
    """Result of starting authentication."""

    url: str
    token: str


@dataclass
class IssuedSession:
    """Session credential handed back to the client."""

    token: str
    expires_in: int


class AuthService:
    """Orchestrates pending-code issuance and redemption.

    Handles:
    - Phase 1: issue a pending code and point the user at the platform
    - Phase 2: redeem the code and sign a session credential
    """

    def __init__(
        self,
        config: AuthConfig,
        pending_store: PendingAuthStore,
        session_issuer: SessionIssuer,
        security_logger: SecurityLogger,
    ):
        self._config = config
        self._pending_store = pending_store
        self._session_issuer = session_issuer
        self._security_logger = security_logger

    def initiate(
        self,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> InitiateResult:
        """Start authentication.

        Raises:
            TokenGenerationError: If a pending code could not be generated.
        """
        code = self._pending_store.issue()

        self._security_logger.log(
            SecurityEvent.AUTH_INITIATED,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return InitiateResult(url=self._config.platform_security_url, token=code)

    def complete(
        self,
        auth_token: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> IssuedSession:
        """Redeem a pending code for a session credential.

        Flow:
        1. Redeem the pending code (always consumes it on a hit)
        2. Mint a subject for the new session
        3. Sign the credential
        4. Log security events

        Raises:
            InvalidTokenError: If the code is unknown, expired or already used.
            TokenSigningError: If the credential could not be signed.
        """
        result = self._pending_store.redeem(auth_token)

        if result is RedemptionResult.NOT_FOUND:
            self._security_logger.log(
                SecurityEvent.AUTH_FAILED,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": "token_not_found"},
            )
            raise InvalidTokenError("Invalid or expired authentication token")

        if result is RedemptionResult.EXPIRED:
            self._security_logger.log(
                SecurityEvent.AUTH_EXPIRED,
                ip_address=ip_address,
                user_agent=user_agent,
            )
            raise InvalidTokenError("Invalid or expired authentication token")

        # No upstream identity is linked at this stage; each completed
        # exchange gets its own opaque subject.
        subject = str(uuid4())
        token = self._session_issuer.issue(subject)

        self._security_logger.log(
            SecurityEvent.AUTH_COMPLETED,
            subject=subject,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self._security_logger.log(
            SecurityEvent.SESSION_ISSUED,
            subject=subject,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return IssuedSession(token=token, expires_in=self._config.session_expires_in_seconds)

