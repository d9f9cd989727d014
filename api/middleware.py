"""Request-scoped middleware for API requests."""

import logging
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags every request with an ID and logs one access line per request.

    An inbound X-Request-ID is reused so IDs survive proxies.
    """

    HEADER = "X-Request-ID"
    MAX_INBOUND_LENGTH = 128

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(self.HEADER, "")
        if not request_id or len(request_id) > self.MAX_INBOUND_LENGTH:
            request_id = str(uuid4())
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[self.HEADER] = request_id
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f}ms) request_id={request_id}"
        )
        return response
