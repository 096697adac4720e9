"""User-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., max_length=64)
    email: EmailStr
    password: str = Field(..., max_length=256)
    bio: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=120)


class LoginRequest(BaseModel):
    """Schema for exchanging credentials for a bearer token."""

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Bearer token issued after register or login."""

    token: str
    user_id: str


class UserResponse(BaseModel):
    """Public profile of a user; never includes the password hash."""

    id: str
    username: str
    email: str
    image: str
    bio: str | None = None
    location: str | None = None
    posts: list[str]
    bookmarks: list[str]
    followers: list[str]
    following: list[str]
    visitors: list[str]
    likes: list[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FollowResponse(BaseModel):
    """Result of a follow toggle."""

    state: Literal["followed", "unfollowed"]
