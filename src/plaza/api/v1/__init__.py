"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    moderation_router,
    posts_router,
    reactions_router,
    users_router,
)

__all__ = [
    "auth_router",
    "moderation_router",
    "posts_router",
    "reactions_router",
    "users_router",
]
