"""Shared test fixtures for the creator API test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from auth.config import AuthConfig
from auth.session import SessionIssuer
from utils.user_context import clear_current_subject


# =============================================================================
# TEST CONSTANTS
# =============================================================================

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
OTHER_SECRET = "other-secret-fedcba9876543210fedcba9876543210"
TEST_SUBJECT = "subject-0001"


class FrozenClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


# =============================================================================
# CONTEXT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def reset_subject_context():
    """Ensure clean subject context before and after each test."""
    clear_current_subject()
    yield
    clear_current_subject()


# =============================================================================
# AUTH FIXTURES
# =============================================================================


@pytest.fixture
def auth_config() -> AuthConfig:
    """Default auth config."""
    return AuthConfig()


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen at a fixed UTC instant."""
    return FrozenClock(datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def session_issuer(auth_config) -> SessionIssuer:
    """SessionIssuer signing with the test secret."""
    return SessionIssuer(TEST_SECRET, auth_config)


@pytest.fixture
def secret() -> str:
    """The credential secret used by session_issuer."""
    return TEST_SECRET


@pytest.fixture
def other_secret() -> str:
    """A different credential secret."""
    return OTHER_SECRET


@pytest.fixture
def subject() -> str:
    """A session subject."""
    return TEST_SUBJECT
