"""Database model type definitions."""

from src.models.profile import ProfileRow

__all__ = [
    "ProfileRow",
]
