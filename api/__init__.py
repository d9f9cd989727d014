"""API modules for HTTP interface."""

from api.base import (
    ErrorBody,
    PageMeta,
    ListResponse,
    error_response,
)
