"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from plaza.models.post import ModerationState


class PostCreate(BaseModel):
    """Schema for submitting a new post."""

    text: str = Field(..., max_length=5000, description="Post body")


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    text: str = Field(..., max_length=2000, description="Comment body")


class AuthorSummary(BaseModel):
    """Author fields embedded in post responses."""

    id: str
    username: str
    image: str

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseModel):
    """One entry of a post's comment log.

    ``name`` and ``image`` are the commenter's profile values at the time the
    comment was written; later profile edits are not reflected.
    """

    id: str
    user: str
    name: str
    image: str
    text: str
    created_at: datetime


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    author_id: str
    author: AuthorSummary
    text: str
    likes: list[str]
    agrees: list[str]
    deserves: list[str]
    comments: list[CommentResponse]
    moderation_state: ModerationState
    approved: bool
    approval_pending: bool
    created_at: datetime
    approved_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ModerationAck(BaseModel):
    """Acknowledgement returned by approve and reject."""

    post_id: str
    outcome: Literal["approved", "rejected"]
    msg: str


class DeleteAck(BaseModel):
    """Acknowledgement returned when an author deletes a post."""

    post_id: str
    msg: str
