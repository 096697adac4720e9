"""Lookup helpers that turn missing documents into domain errors."""
from __future__ import annotations

from plaza.core import errors
from plaza.db.ids import ensure_valid_id
from plaza.models import ModerationState, Post, User
from plaza.repositories import PostRepository, UserRepository


def require_user(users: UserRepository, user_id: str) -> User:
    """Return the user or raise InvalidArgument/NotFound."""
    user = users.get_by_id(ensure_valid_id(user_id))
    if user is None:
        raise errors.NotFound("User not found")
    return user


def require_post(posts: PostRepository, post_id: str) -> Post:
    """Return the post in any moderation state or raise InvalidArgument/NotFound."""
    post = posts.get_by_id(ensure_valid_id(post_id))
    if post is None:
        raise errors.NotFound("Post not found")
    return post


def require_approved_post(posts: PostRepository, post_id: str) -> Post:
    """Return a post that may receive likes, reactions and comments."""
    post = require_post(posts, post_id)
    if post.moderation_state != ModerationState.APPROVED:
        raise errors.InvalidState("Post is not approved yet")
    return post
