"""Authentication and authorization modules."""

from auth.exceptions import (
    AuthError,
    InvalidTokenError,
    TokenGenerationError,
    TokenSigningError,
)
from auth.types import (
    PendingAuth,
    SessionClaims,
    AuthCompleteRequest,
    AuthInitiateResponse,
    AuthCompleteResponse,
)
from auth.config import AuthConfig
from auth.pending import PendingAuthStore, RedemptionResult
from auth.session import SessionIssuer
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.service import AuthService, InitiateResult, IssuedSession
from auth.security_middleware import SessionAuthMiddleware, APIKeyMiddleware, APIKeyPolicy
from auth.api import create_auth_router
