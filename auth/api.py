"""HTTP routes for authentication."""

import ipaddress
import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from auth.service import AuthService
from auth.types import AuthCompleteRequest, AuthCompleteResponse, AuthInitiateResponse
from auth.exceptions import InvalidTokenError
from api.base import error_response

logger = logging.getLogger(__name__)


def _get_client_ip(request: Request) -> str | None:
    """Extract valid IP address from request, or None if invalid."""
    if not request.client:
        return None
    host = request.client.host
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        return None


def create_auth_router(auth_service: AuthService) -> APIRouter:
    """Create auth router with injected service."""
    router = APIRouter(tags=["auth"])

    @router.post("/initiate", response_model=AuthInitiateResponse)
    async def initiate(request: Request):
        """Start authentication.

        Returns the platform page where the user finds their credential,
        and a pending code to redeem within its validity window.
        """
        result = auth_service.initiate(
            ip_address=_get_client_ip(request),
            user_agent=request.headers.get("User-Agent"),
        )
        return AuthInitiateResponse(url=result.url, token=result.token)

    @router.post("/complete", response_model=AuthCompleteResponse)
    async def complete(request: Request):
        """Redeem a pending code for a session credential."""
        try:
            body = AuthCompleteRequest.model_validate(await request.json())
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            logger.warning(f"Invalid request: {e}")
            return JSONResponse(
                status_code=400,
                content=error_response("Invalid request").model_dump(),
            )

        try:
            issued = auth_service.complete(
                auth_token=body.auth_token,
                user_agent=body.user_agent,
                ip_address=_get_client_ip(request),
            )
        except InvalidTokenError:
            return JSONResponse(
                status_code=401,
                content=error_response("Invalid or expired authentication token").model_dump(),
            )

        return AuthCompleteResponse(token=issued.token, expires_in=issued.expires_in)

    return router
