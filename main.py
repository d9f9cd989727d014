"""FastAPI application factory and process entry point."""

import logging
import secrets
import sys

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from api.creators import create_creators_router
from api.errors import register_error_handlers
from api.machine import create_machine_router
from api.middleware import RequestIDMiddleware
from auth.api import create_auth_router
from auth.pending import PendingAuthStore
from auth.security_logger import SecurityLogger
from auth.security_middleware import APIKeyMiddleware, SessionAuthMiddleware
from auth.service import AuthService
from auth.session import SessionIssuer
from clients.platform_client import PlatformClient
from config import AppConfig
from core.services.creator_service import CreatorService

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Route groups per gate. Keep these disjoint.
SESSION_PROTECTED = (f"{API_PREFIX}/creators",)
API_KEY_PROTECTED = (
    f"{API_PREFIX}/content",
    f"{API_PREFIX}/media",
    f"{API_PREFIX}/monitoring",
    f"{API_PREFIX}/sync",
)


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _resolve_secret(config: AppConfig) -> str:
    if config.jwt_secret:
        return config.jwt_secret
    # Only reachable outside production; AppConfig rejects an empty secret there.
    logger.warning(
        "JWT_SECRET is not set; using an ephemeral secret. "
        "Session credentials will not survive a restart."
    )
    return secrets.token_urlsafe(32)


def create_app(config: AppConfig | None = None, platform: PlatformClient | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        config: Application config. Defaults to AppConfig() (development).
        platform: Platform client for creator sync. Built from config when
            a platform token is configured.

    Returns:
        Configured FastAPI application.
    """
    config = config or AppConfig()

    if platform is None and config.platform_auth_token:
        platform = PlatformClient(config.platform_auth_token, base_url=config.platform_api_url)

    security_logger = SecurityLogger()
    session_issuer = SessionIssuer(_resolve_secret(config), config.auth)
    auth_service = AuthService(
        config=config.auth,
        pending_store=PendingAuthStore(config.auth),
        session_issuer=session_issuer,
        security_logger=security_logger,
    )
    creator_service = CreatorService(platform=platform)

    app = FastAPI(
        title="Creator API",
        description="Session broker and creator directory for a content platform",
        version="0.1.0",
    )

    app.add_middleware(
        SessionAuthMiddleware,
        session_issuer=session_issuer,
        protected_prefixes=SESSION_PROTECTED,
        security_logger=security_logger,
    )
    app.add_middleware(
        APIKeyMiddleware,
        protected_prefixes=API_KEY_PROTECTED,
        security_logger=security_logger,
    )
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Accept", "Content-Type", "Authorization", "X-API-Key"],
        allow_credentials=True,
        max_age=300,
    )
    register_error_handlers(app)

    @app.get("/health")
    @app.get(f"{API_PREFIX}/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    app.include_router(create_auth_router(auth_service), prefix=f"{API_PREFIX}/auth")
    app.include_router(create_creators_router(creator_service), prefix=API_PREFIX)
    app.include_router(create_machine_router(creator_service), prefix=API_PREFIX)

    return app


def run() -> None:
    """Load config, then serve until SIGINT/SIGTERM (uvicorn drains in-flight requests)."""
    import uvicorn

    load_dotenv()

    try:
        config = AppConfig.from_env()
    except ValidationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(config.log_level)
    logger.info(f"Server starting on {config.host}:{config.port} ({config.environment})")

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level,
        timeout_graceful_shutdown=10,
    )
    logger.info("Server exited properly")


if __name__ == "__main__":
    run()
