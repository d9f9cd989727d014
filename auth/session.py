"""Session credential issuance and verification.

Credentials are stateless HS256 JWTs. Nothing is stored server-side:
validity is decided by the signature and the nbf/exp window alone, so any
process holding the same secret can verify a credential.
"""

import logging
from datetime import datetime, timedelta

import jwt
from pydantic import ValidationError

from auth.config import AuthConfig
from auth.exceptions import InvalidTokenError, TokenSigningError
from auth.types import SessionClaims
from utils.timezone import now_utc, from_timestamp

logger = logging.getLogger(__name__)


class SessionIssuer:
    """Signs and verifies session credentials with a shared secret."""

    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ["sub", "iat", "nbf", "exp", "iss"]

    def __init__(self, secret: str, config: AuthConfig):
        self._secret = secret
        self._issuer = config.session_issuer
        self._lifetime = timedelta(hours=config.session_expiry_hours)

    def issue(self, subject: str, now: datetime | None = None) -> str:
        """Sign a new credential for subject.

        Raises:
            TokenSigningError: If the secret is unavailable or signing fails.
        """
        if not self._secret:
            raise TokenSigningError("Credential secret is not configured")

        issued_at = now or now_utc()
        claims = SessionClaims(
            sub=subject,
            iat=issued_at,
            nbf=issued_at,
            exp=issued_at + self._lifetime,
            iss=self._issuer,
        )

        try:
            return jwt.encode(claims.model_dump(), self._secret, algorithm=self.ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise TokenSigningError(f"Failed to sign credential: {e}") from e

    def verify(self, token: str) -> str:
        """Verify a credential and return its subject.

        Raises:
            InvalidTokenError: On any failure. The reason is logged, never
                returned to the caller.
        """
        if not self._secret:
            logger.error("Credential secret is not configured; rejecting credential")
            raise InvalidTokenError("Invalid or expired token")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                issuer=self._issuer,
                options={"require": self.REQUIRED_CLAIMS},
            )
            claims = SessionClaims(
                sub=payload["sub"],
                iat=from_timestamp(payload["iat"]),
                nbf=from_timestamp(payload["nbf"]),
                exp=from_timestamp(payload["exp"]),
                iss=payload["iss"],
            )
        except (jwt.PyJWTError, ValidationError, TypeError, ValueError) as e:
            logger.warning(f"Session credential rejected: {type(e).__name__}: {e}")
            raise InvalidTokenError("Invalid or expired token") from e

        return claims.sub
