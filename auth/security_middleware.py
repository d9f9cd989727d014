"""Security middleware for FastAPI - session credential and API key gates.

Each gate only guards the path prefixes it is constructed with, so the
application can hand disjoint route groups to each gate. A route is never
behind both.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from auth.exceptions import InvalidTokenError
from auth.session import SessionIssuer
from auth.security_logger import SecurityLogger, SecurityEvent
from api.base import error_response
from utils.user_context import subject_context

logger = logging.getLogger(__name__)


def _path_matches(path: str, prefixes) -> bool:
    """Check if path is a prefix or lies below one, on a segment boundary."""
    for prefix in prefixes:
        base = prefix.rstrip("/")
        if path == base or path.startswith(base + "/"):
            return True
    return False


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(status_code=401, content=error_response(message).model_dump())


class SessionAuthMiddleware(BaseHTTPMiddleware):
    """Middleware that requires a valid session credential.

    For guarded routes:
    1. Extracts the credential from 'Authorization: Bearer <token>'
    2. Verifies it via SessionIssuer
    3. Sets the subject in request.state and the subject context
    4. Restores the previous context after the request completes

    Public paths bypass authentication entirely.
    """

    PUBLIC_PATHS = [
        "/health",
        "/api/v1/health",
        "/api/v1/auth/",
        "/docs",
        "/openapi.json",
    ]

    BEARER_PREFIX = "Bearer "

    def __init__(
        self,
        app,
        session_issuer: SessionIssuer,
        protected_prefixes: tuple[str, ...] = ("/",),
        security_logger: SecurityLogger | None = None,
    ):
        super().__init__(app)
        self._session_issuer = session_issuer
        self._protected_prefixes = protected_prefixes
        self._security_logger = security_logger or SecurityLogger()

    def _is_guarded(self, path: str) -> bool:
        if _path_matches(path, self.PUBLIC_PATHS):
            return False
        return _path_matches(path, self._protected_prefixes)

    def _extract_bearer(self, header: str) -> str | None:
        """Return the token from a 'Bearer <token>' header, or None if malformed."""
        if not header.startswith(self.BEARER_PREFIX):
            return None
        token = header[len(self.BEARER_PREFIX):].strip()
        return token or None

    async def dispatch(self, request: Request, call_next):
        """Process request through middleware."""
        if not self._is_guarded(request.url.path):
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return _unauthorized("Authorization header is required")

        token = self._extract_bearer(auth_header)
        if token is None:
            return _unauthorized("Invalid authorization header format")

        try:
            subject = self._session_issuer.verify(token)
        except InvalidTokenError:
            self._security_logger.log(
                SecurityEvent.SESSION_REJECTED,
                ip_address=request.client.host if request.client else None,
                user_agent=request.headers.get("User-Agent"),
            )
            return _unauthorized("Invalid or expired token")

        request.state.subject = subject
        with subject_context(subject):
            return await call_next(request)


class APIKeyPolicy:
    """Decides whether an API key is acceptable.

    Any non-empty key is accepted. Managed key storage is not part of this
    service; swap in a policy that checks a key store to enforce real keys.
    """

    def is_valid(self, api_key: str | None) -> bool:
        return bool(api_key)


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Middleware that requires an API key for machine-to-machine routes.

    Key is read from the 'X-API-Key' header, falling back to the 'api_key'
    query parameter. Bypass paths keep the health check and the auth
    bootstrap flow reachable without a key.
    """

    BYPASS_PATHS = [
        "/health",
        "/api/v1/health",
        "/api/v1/auth/",
    ]

    HEADER = "X-API-Key"
    QUERY_PARAM = "api_key"

    def __init__(
        self,
        app,
        protected_prefixes: tuple[str, ...] = ("/",),
        policy: APIKeyPolicy | None = None,
        security_logger: SecurityLogger | None = None,
    ):
        super().__init__(app)
        self._protected_prefixes = protected_prefixes
        self._policy = policy or APIKeyPolicy()
        self._security_logger = security_logger or SecurityLogger()

    def _is_guarded(self, path: str) -> bool:
        if path == "/" or _path_matches(path, self.BYPASS_PATHS):
            return False
        return _path_matches(path, self._protected_prefixes)

    async def dispatch(self, request: Request, call_next):
        """Process request through middleware."""
        if not self._is_guarded(request.url.path):
            return await call_next(request)

        api_key = request.headers.get(self.HEADER)
        if not api_key:
            api_key = request.query_params.get(self.QUERY_PARAM)

        if not self._policy.is_valid(api_key):
            client_host = request.client.host if request.client else None
            logger.warning(f"Invalid or missing API key from {client_host}")
            self._security_logger.log(
                SecurityEvent.API_KEY_REJECTED,
                ip_address=client_host,
                user_agent=request.headers.get("User-Agent"),
                details={"path": request.url.path},
            )
            return _unauthorized("Invalid or missing API key")

        return await call_next(request)
