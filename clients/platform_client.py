"""
Upstream content platform HTTP client.

Read-only calls made with the user's platform credential. The credential
goes in the Authorization header as-is (the platform does not use a
Bearer scheme).
"""

import json
import logging

import requests

logger = logging.getLogger(__name__)


class PlatformClientError(Exception):
    """Raised when a platform request fails."""


class PlatformClient:
    """Fetch account data from the content platform."""

    DEFAULT_BASE_URL = "https://apiv3.fansly.com"
    USER_AGENT = "creator-api/1.0"
    TIMEOUT_SECONDS = 30
    PAGE_SIZE = 50

    def __init__(self, auth_token: str, base_url: str = DEFAULT_BASE_URL):
        """
        Initialize with platform credential.

        Args:
            auth_token: Platform authorization token
            base_url: API base URL

        Raises:
            ValueError: If auth_token or base_url is empty
        """
        if not auth_token:
            raise ValueError("auth_token is required")
        if not base_url:
            raise ValueError("base_url is required")

        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token

    def _get(self, path: str, params: dict | None = None) -> dict:
        """
        GET a platform endpoint and decode the JSON body.

        Raises:
            PlatformClientError: On any failure
        """
        url = f"{self.base_url}{path}"
        headers = {
            "Authorization": self.auth_token,
            "User-Agent": self.USER_AGENT,
        }

        try:
            response = requests.get(url, params=params, headers=headers, timeout=self.TIMEOUT_SECONDS)
        except requests.exceptions.RequestException as e:
            logger.error(f"Platform request failed: {e}")
            raise PlatformClientError(f"Connection failed: {e}")

        if response.status_code != 200:
            logger.error(f"Platform returned {response.status_code} for {path}")
            raise PlatformClientError(f"Unexpected status code: {response.status_code}")

        try:
            return response.json()
        except json.JSONDecodeError:
            logger.error(f"Platform returned invalid JSON for {path}")
            raise PlatformClientError("Invalid response from platform")

    def get_account_info(self) -> dict:
        """Return the authenticated account's information."""
        return self._get("/account/me")

    def get_followed_accounts(self, limit: int, offset: int) -> list[dict]:
        """
        Return accounts the authenticated user follows.

        Raises:
            PlatformClientError: On failure or an unexpected response shape
        """
        data = self._get("/account/me/following", params={"limit": limit, "offset": offset})

        try:
            accounts = data["response"]["accounts"]
        except (KeyError, TypeError):
            raise PlatformClientError("Unexpected response shape from platform")

        if not isinstance(accounts, list):
            raise PlatformClientError("Unexpected response shape from platform")
        return accounts
