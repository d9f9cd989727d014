"""Core domain models."""

from core.models.creator import Creator

__all__ = ["Creator"]
