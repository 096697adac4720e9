# src/plaza/models/__init__.py
"""SQLAlchemy document models for the Plaza application."""

from .post import ModerationState, Post
from .user import User

__all__ = [
    "ModerationState",
    "Post",
    "User",
]
