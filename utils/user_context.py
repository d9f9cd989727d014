"""Propagate the authenticated subject through the call stack using contextvars."""

from contextvars import ContextVar
from contextlib import contextmanager

_current_subject: ContextVar[str | None] = ContextVar("current_subject", default=None)


def get_current_subject() -> str:
    """
    Get the current session subject from context.

    Raises RuntimeError if no subject is set.
    This is fail-fast behavior - code that needs the caller's identity
    must only run behind the session gate.
    """
    subject = _current_subject.get()
    if subject is None:
        raise RuntimeError(
            "No subject set. This usually means you're calling "
            "session-scoped code outside of an authenticated request."
        )
    return subject


def set_current_subject(subject: str) -> None:
    """
    Set current subject in context.

    Called by subject_context on entry.
    """
    _current_subject.set(subject)


def clear_current_subject() -> None:
    """
    Clear subject context.

    Called by subject_context on exit when no subject was set before.
    Must be called in finally block to prevent context leakage.
    """
    _current_subject.set(None)


@contextmanager
def subject_context(subject: str):
    """
    Context manager for temporarily setting the subject.

    The session gate wraps each authenticated request in one, so handlers
    such as GET /creators can call get_current_subject().
    """
    previous = _current_subject.get()
    set_current_subject(subject)
    try:
        yield
    finally:
        if previous is None:
            clear_current_subject()
        else:
            set_current_subject(previous)
