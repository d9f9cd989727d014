"""Machine-to-machine routes behind the API key gate."""

import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from api.base import error_response
from clients.platform_client import PlatformClientError
from core.services.creator_service import CreatorService

logger = logging.getLogger(__name__)


def _not_implemented(message: str, **fields: str | None) -> JSONResponse:
    content = {"message": message}
    content.update({k: v for k, v in fields.items() if v is not None})
    return JSONResponse(status_code=501, content=content)


def create_machine_router(creator_service: CreatorService) -> APIRouter:
    router = APIRouter()

    @router.get("/content")
    async def get_creator_content(creator_id: str | None = Query(None)):
        logger.info(f"Get creator content for: {creator_id}")
        return _not_implemented("Get creator content not yet implemented", creator_id=creator_id)

    @router.get("/media")
    async def get_media(
        creator_id: str | None = Query(None),
        media_id: str | None = Query(None),
    ):
        logger.info(f"Get media {media_id} for creator {creator_id}")
        return _not_implemented("Get media not yet implemented", creator_id=creator_id, media_id=media_id)

    @router.post("/monitoring/start")
    async def start_monitoring():
        logger.info("Start monitoring endpoint hit")
        return _not_implemented("Start monitoring not yet implemented")

    @router.post("/monitoring/stop")
    async def stop_monitoring():
        logger.info("Stop monitoring endpoint hit")
        return _not_implemented("Stop monitoring not yet implemented")

    @router.post("/sync/creators")
    def sync_creators():
        """Refresh the creator cache from the platform."""
        if creator_service.platform is None:
            return JSONResponse(
                status_code=503,
                content=error_response("Platform client is not configured").model_dump(),
            )

        try:
            count = creator_service.refresh_from_platform()
        except PlatformClientError as e:
            logger.error(f"Failed to refresh creators: {e}")
            return JSONResponse(
                status_code=502,
                content=error_response("Failed to fetch creators").model_dump(),
            )

        return {"synced": count}

    return router
