"""GET /api/v1/creators: cached creator directory."""

import logging
import math

from fastapi import APIRouter, Request

from api.base import ListResponse, PageMeta
from core.services.creator_service import CreatorService
from utils.user_context import get_current_subject

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def _parse_int(raw: str | None, default: int) -> int | None:
    try:
        return int(raw) if raw is not None else default
    except ValueError:
        return None


def create_creators_router(creator_service: CreatorService) -> APIRouter:
    router = APIRouter()

    @router.get("/creators", response_model=ListResponse, response_model_exclude_none=True)
    async def list_creators(request: Request):
        """List creators.

        Query parameters:
            limit: page size (default 20, max 100; invalid values fall back to 20)
            offset: creators to skip (default 0; invalid values fall back to 0)
            sort: name | last_updated (default name)
            order: asc | desc (default asc)
        """
        params = request.query_params

        limit = _parse_int(params.get("limit"), DEFAULT_LIMIT)
        if limit is None or limit <= 0:
            limit = DEFAULT_LIMIT
        limit = min(limit, MAX_LIMIT)

        offset = _parse_int(params.get("offset"), 0)
        if offset is None or offset < 0:
            offset = 0

        sort = params.get("sort") or "name"
        order = params.get("order") or "asc"

        logger.info(
            f"Listing creators for {get_current_subject()} with "
            f"limit={limit}, offset={offset}, sort={sort}, order={order}"
        )

        # Raises ValueError on unknown sort/order, mapped to 400
        page, total = creator_service.list_creators(limit, offset, sort, order)

        return ListResponse(
            data=[c.model_dump(mode="json", exclude_none=True) for c in page],
            meta=PageMeta(
                total=total,
                count=len(page),
                per_page=limit,
                current_page=(offset // limit) + 1,
                total_pages=math.ceil(total / limit),
            ),
        )

    return router
