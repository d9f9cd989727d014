"""
Creator service for the cached creator directory.

Serves creator metadata from an in-process cache. The cache starts with
a small demo catalog and can be replaced wholesale from the upstream
platform's followed-accounts listing.
"""

import logging
import threading
from datetime import timedelta

from pydantic import ValidationError

from clients.platform_client import PlatformClient, PlatformClientError
from core.models import Creator
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

SORT_FIELDS = {"name", "last_updated"}
SORT_ORDERS = {"asc", "desc"}

# Upper bound on followed-account pages fetched by one sync
MAX_SYNC_PAGES = 200


def _demo_catalog() -> list[Creator]:
    now = now_utc()
    return [
        Creator(
            id="1",
            name="Example Creator 1",
            username="creator1",
            is_verified=True,
            is_following=True,
            last_updated=now - timedelta(hours=2),
        ),
        Creator(
            id="2",
            name="Example Creator 2",
            username="creator2",
            is_verified=False,
            is_following=True,
            last_updated=now - timedelta(hours=1),
        ),
    ]


def sort_creators(creators: list[Creator], sort: str = "name", order: str = "asc") -> list[Creator]:
    """
    Return creators sorted by field.

    Raises:
        ValueError: If sort or order is not recognised.
    """
    if sort not in SORT_FIELDS:
        raise ValueError("Invalid sort field. Must be one of: name, last_updated")
    if order not in SORT_ORDERS:
        raise ValueError("Invalid order. Must be one of: asc, desc")

    return sorted(creators, key=lambda c: getattr(c, sort), reverse=(order == "desc"))


class CreatorService:
    """Service for creator directory operations."""

    def __init__(self, platform: PlatformClient | None = None, creators: list[Creator] | None = None):
        self.platform = platform
        self._creators = list(creators) if creators is not None else _demo_catalog()
        self._lock = threading.Lock()

    def list_creators(
        self,
        limit: int,
        offset: int,
        sort: str = "name",
        order: str = "asc",
    ) -> tuple[list[Creator], int]:
        """
        List one page of creators.

        Args:
            limit: Page size
            offset: Number of creators to skip
            sort: Field to sort by (name, last_updated)
            order: asc or desc

        Returns:
            Tuple of (page, total creators in the directory)
        """
        with self._lock:
            snapshot = list(self._creators)

        ordered = sort_creators(snapshot, sort, order)
        return ordered[offset:offset + limit], len(ordered)

    def refresh_from_platform(self) -> int:
        """
        Replace the cache with the accounts followed on the platform.

        Paging stops at the first short page, or at the first page that
        repeats an account already fetched. At most MAX_SYNC_PAGES pages
        are requested.

        Returns:
            Number of creators now cached

        Raises:
            RuntimeError: If no platform client is configured
            PlatformClientError: If the upstream request fails, returns a
                malformed account, or never stops paging
        """
        if self.platform is None:
            raise RuntimeError("Platform client is not configured")

        self.platform.get_account_info()
        logger.info("Platform credential accepted, refreshing creators")

        now = now_utc()
        creators: list[Creator] = []
        seen_ids: set[str] = set()
        offset = 0
        for _ in range(MAX_SYNC_PAGES):
            accounts = self.platform.get_followed_accounts(limit=PlatformClient.PAGE_SIZE, offset=offset)
            page = [_creator_from_account(account, now) for account in accounts]

            repeated = False
            for creator in page:
                if creator.id in seen_ids:
                    repeated = True
                    continue
                seen_ids.add(creator.id)
                creators.append(creator)

            if repeated:
                logger.warning(f"Platform repeated accounts at offset {offset}, stopping sync")
                break
            if len(accounts) < PlatformClient.PAGE_SIZE:
                break
            offset += len(accounts)
        else:
            logger.error(f"Platform still paging after {MAX_SYNC_PAGES} pages, aborting sync")
            raise PlatformClientError("Too many pages from platform")

        with self._lock:
            self._creators = creators

        logger.info(f"Creator cache refreshed from platform: {len(creators)} creators")
        return len(creators)


def _creator_from_account(account: dict, fetched_at) -> Creator:
    """
    Map one followed-account record to a Creator.

    Raises:
        PlatformClientError: If the record is not a usable account
    """
    try:
        username = str(account.get("username", ""))
        avatar = account.get("avatar")
        return Creator(
            id=str(account["id"]),
            name=account.get("displayName") or username,
            username=username,
            avatar_url=avatar.get("location") if isinstance(avatar, dict) else None,
            is_verified=bool(account.get("verified", False)),
            is_following=True,
            last_updated=fetched_at,
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        logger.error(f"Malformed account record from platform: {e}")
        raise PlatformClientError("Unexpected response shape from platform") from e
