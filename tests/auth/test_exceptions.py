"""Tests for auth/exceptions.py - Typed exceptions for auth failures."""

import pytest

from auth.exceptions import (
    AuthError,
    InvalidTokenError,
    TokenGenerationError,
    TokenSigningError,
)


class TestExceptionInheritance:
    """All auth exceptions should inherit from AuthError."""

    def test_invalid_token_inherits(self):
        assert issubclass(InvalidTokenError, AuthError)

    def test_token_generation_inherits(self):
        assert issubclass(TokenGenerationError, AuthError)

    def test_token_signing_inherits(self):
        assert issubclass(TokenSigningError, AuthError)

    def test_can_be_caught_as_auth_error(self):
        """Should be catchable as AuthError."""
        with pytest.raises(AuthError):
            raise InvalidTokenError("Invalid or expired token")
