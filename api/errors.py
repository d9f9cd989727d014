"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from api.base import error_response
from auth.exceptions import InvalidTokenError, TokenGenerationError, TokenSigningError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content=error_response(str(exc)).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content=error_response("Invalid request").model_dump(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
            content=error_response(str(exc.detail)).model_dump(),
        )

    @app.exception_handler(InvalidTokenError)
    async def invalid_token_handler(request: Request, exc: InvalidTokenError):
        return JSONResponse(
            status_code=401,
            content=error_response(str(exc)).model_dump(),
        )

    @app.exception_handler(TokenGenerationError)
    async def token_generation_handler(request: Request, exc: TokenGenerationError):
        logger.error(f"Failed to generate auth token: {exc}")
        return JSONResponse(
            status_code=500,
            content=error_response("Failed to start authentication").model_dump(),
        )

    @app.exception_handler(TokenSigningError)
    async def token_signing_handler(request: Request, exc: TokenSigningError):
        logger.error(f"Failed to generate session token: {exc}")
        return JSONResponse(
            status_code=500,
            content=error_response("Failed to generate token").model_dump(),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return JSONResponse(
            status_code=500,
            content=error_response("An internal error occurred").model_dump(),
        )
