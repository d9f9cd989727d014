"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, from_timestamp
from utils.user_context import (
    get_current_subject,
    set_current_subject,
    clear_current_subject,
    subject_context,
)
