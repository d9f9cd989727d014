"""Response bodies shared by every endpoint."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    """
    Error body returned for every rejection.

    Clients only ever see a human-readable message; codes and internal
    reasons stay in the server logs.
    """

    error: str = Field(..., description="Human-readable error message")


class PageMeta(BaseModel):
    """Pagination metadata for list endpoints."""

    total: int
    count: int
    per_page: int
    current_page: int
    total_pages: int


class ListResponse(BaseModel):
    """List payload with pagination metadata."""

    data: list[Any]
    meta: PageMeta


def error_response(message: str) -> ErrorBody:
    """Create an error body."""
    return ErrorBody(error=message)
