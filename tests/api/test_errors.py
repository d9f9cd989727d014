"""Tests for global exception handlers."""

import pytest
from fastapi import FastAPI, HTTPException, Query
from fastapi.testclient import TestClient

from api.errors import register_error_handlers
from auth.exceptions import InvalidTokenError, TokenGenerationError, TokenSigningError


@pytest.fixture
def client():
    """App whose routes raise each mapped exception."""
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/value-error")
    async def value_error():
        raise ValueError("Invalid sort field")

    @app.get("/typed")
    async def typed(n: int = Query(...)):
        return {"n": n}

    @app.get("/not-found")
    async def not_found():
        raise HTTPException(status_code=404, detail="Not here")

    @app.get("/invalid-token")
    async def invalid_token():
        raise InvalidTokenError("Invalid or expired token")

    @app.get("/generation")
    async def generation():
        raise TokenGenerationError("entropy source unavailable")

    @app.get("/signing")
    async def signing():
        raise TokenSigningError("no secret")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded with secret details")

    return TestClient(app, raise_server_exceptions=False)


class TestErrorHandlers:
    """Every failure renders as {"error": message}."""

    @pytest.mark.parametrize("path,status,body", [
        ("/value-error", 400, {"error": "Invalid sort field"}),
        ("/typed?n=abc", 400, {"error": "Invalid request"}),
        ("/not-found", 404, {"error": "Not here"}),
        ("/missing-route", 404, {"error": "Not Found"}),
        ("/invalid-token", 401, {"error": "Invalid or expired token"}),
        ("/generation", 500, {"error": "Failed to start authentication"}),
        ("/signing", 500, {"error": "Failed to generate token"}),
    ])
    def test_mapped_exceptions(self, client, path, status, body):
        response = client.get(path)

        assert response.status_code == status
        assert response.json() == body

    def test_unhandled_exception_hides_details(self, client):
        """Internal details never reach the client."""
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {"error": "An internal error occurred"}
