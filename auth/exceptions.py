"""Typed exceptions for auth failures."""


class AuthError(Exception):
    """Base class for authentication/authorization errors."""


class InvalidTokenError(AuthError):
    """
    Token is invalid, expired, or already used.

    Used for both pending-auth codes and session credentials. The message
    never says which check failed.
    """


class TokenGenerationError(AuthError):
    """Secure random source failed or produced a code that is already live."""


class TokenSigningError(AuthError):
    """Session credential could not be signed (secret missing or signer failed)."""
