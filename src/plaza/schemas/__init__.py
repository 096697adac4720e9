"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ErrorResponse
from .post import (
    AuthorSummary,
    CommentCreate,
    CommentResponse,
    DeleteAck,
    ModerationAck,
    PostCreate,
    PostResponse,
)
from .user import FollowResponse, LoginRequest, RegisterRequest, TokenResponse, UserResponse

__all__ = [
    "ErrorResponse",
    "AuthorSummary", "CommentCreate", "CommentResponse", "DeleteAck",
    "ModerationAck", "PostCreate", "PostResponse",
    "FollowResponse", "LoginRequest", "RegisterRequest", "TokenResponse", "UserResponse",
]
