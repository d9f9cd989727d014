"""Pending authentication codes.

Codes are held in process memory only and are single use: redemption
always deletes the entry, whether it succeeds or finds it expired.
"""

import logging
import secrets
import threading
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable

from auth.config import AuthConfig
from auth.exceptions import TokenGenerationError
from auth.types import PendingAuth
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class RedemptionResult(Enum):
    """Outcome of redeeming a pending code."""

    OK = "ok"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"


class PendingAuthStore:
    """In-memory registry of outstanding authentication codes.

    All access to the code map goes through issue/redeem/purge_expired,
    each of which holds the lock for its whole lookup-and-mutate step.
    """

    CODE_BYTES = 16  # 128 bits, 32 hex characters

    def __init__(self, config: AuthConfig, clock: Callable[[], datetime] = now_utc):
        self._window = timedelta(minutes=config.pending_auth_expiry_minutes)
        self._clock = clock
        self._entries: dict[str, PendingAuth] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def issue(self) -> str:
        """Create a new pending code valid for the configured window.

        Raises:
            TokenGenerationError: If the random source fails or the code
                collides with a live one.
        """
        try:
            code = secrets.token_hex(self.CODE_BYTES)
        except OSError as e:
            raise TokenGenerationError(f"Secure random source failed: {e}") from e

        self.purge_expired()

        now = self._clock()
        with self._lock:
            if code in self._entries:
                raise TokenGenerationError("Generated code collides with a live code")
            self._entries[code] = PendingAuth(code=code, expires_at=now + self._window)

        return code

    def redeem(self, code: str) -> RedemptionResult:
        """Consume a pending code.

        The entry is removed on any hit, so a second redemption of the same
        code always returns NOT_FOUND.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.pop(code, None)

        if entry is None:
            return RedemptionResult.NOT_FOUND

        if now > entry.expires_at:
            return RedemptionResult.EXPIRED

        return RedemptionResult.OK

    def purge_expired(self) -> int:
        """Drop expired entries. Returns count removed."""
        now = self._clock()
        with self._lock:
            expired = [code for code, entry in self._entries.items() if now > entry.expires_at]
            for code in expired:
                del self._entries[code]

        if expired:
            logger.debug(f"Purged {len(expired)} expired pending auth codes")
        return len(expired)
