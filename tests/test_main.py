"""End-to-end tests for the assembled application."""

import logging
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from clients.platform_client import PlatformClient
from config import AppConfig
from main import create_app


@pytest.fixture
def config(secret):
    return AppConfig(jwt_secret=secret)


@pytest.fixture
def client(config):
    return TestClient(create_app(config), raise_server_exceptions=False)


def _login(client) -> str:
    code = client.post("/api/v1/auth/initiate").json()["token"]
    response = client.post("/api/v1/auth/complete", json={"auth_token": code, "user_agent": "ua"})
    return response.json()["token"]


class TestHealth:
    @pytest.mark.parametrize("path", ["/health", "/api/v1/health"])
    def test_public(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert "X-Request-ID" in response.headers


class TestSessionFlow:
    """initiate -> complete -> creators."""

    def test_full_exchange(self, client):
        token = _login(client)

        response = client.get("/api/v1/creators", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["meta"]["total"] == 2

    def test_creators_without_session(self, client):
        response = client.get("/api/v1/creators")

        assert response.status_code == 401
        assert response.json() == {"error": "Authorization header is required"}

    def test_api_key_does_not_open_creators(self, client):
        """The gates are not interchangeable."""
        response = client.get("/api/v1/creators", headers={"X-API-Key": "k"})

        assert response.status_code == 401

    def test_credential_from_other_secret_rejected(self, other_secret):
        foreign = TestClient(create_app(AppConfig(jwt_secret=other_secret)))
        ours = TestClient(create_app(AppConfig(jwt_secret="y" * 40)))
        token = _login(foreign)

        response = ours.get("/api/v1/creators", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired token"}


class TestMachineRoutes:
    """Machine routes need an API key and nothing else."""

    def test_without_key(self, client):
        response = client.get("/api/v1/content")

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or missing API key"}

    def test_with_key_no_session_needed(self, client):
        response = client.get("/api/v1/content?creator_id=1", headers={"X-API-Key": "k"})

        assert response.status_code == 501

    def test_session_does_not_open_machine_routes(self, client):
        token = _login(client)

        response = client.post("/api/v1/monitoring/start", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_sync_with_injected_platform(self, config):
        platform = Mock(spec=PlatformClient)
        platform.get_account_info.return_value = {}
        platform.get_followed_accounts.return_value = [{"id": 1, "username": "a"}]
        client = TestClient(create_app(config, platform=platform))

        response = client.post("/api/v1/sync/creators?api_key=k")

        assert response.json() == {"synced": 1}


class TestSecretResolution:
    def test_missing_secret_in_development_is_ephemeral(self, caplog):
        """Development runs with a generated secret and says so."""
        with caplog.at_level(logging.WARNING, logger="main"):
            client = TestClient(create_app(AppConfig()))

        assert "ephemeral secret" in caplog.text
        token = _login(client)
        response = client.get("/api/v1/creators", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200


class TestCors:
    def test_preflight(self, client):
        response = client.options(
            "/api/v1/creators",
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "Authorization",
            },
        )

        assert response.status_code == 200
        assert "GET" in response.headers["access-control-allow-methods"]
