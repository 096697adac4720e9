"""Agree/deserve marks and comments on approved posts."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from plaza.core import errors
from plaza.db.ids import new_id
from plaza.db.time import utcnow
from plaza.repositories import PostRepository, UserRepository
from plaza.services.lookup import require_approved_post, require_user

logger = logging.getLogger(__name__)


class ReactionService:
    """Append-only reactions and the comment log.

    Unlike likes, agree and deserve never toggle off: a second call from the
    same user raises :class:`~plaza.core.errors.AlreadyReacted`.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.users = UserRepository(db)

    def _react(self, field: str, label: str, actor_id: str, post_id: str) -> list[str]:
        post = require_approved_post(self.posts, post_id)
        actor = require_user(self.users, actor_id)
        if actor.id in getattr(post, field):
            raise errors.AlreadyReacted(f"Post already marked as {label}")
        updated = self.posts.add_to_set(post.id, field, actor.id)
        if updated is None:
            raise errors.NotFound("Post not found")
        return list(getattr(updated, field))

    def agree(self, actor_id: str, post_id: str) -> list[str]:
        """Record that the actor agrees with the post; returns all agreeing ids."""
        return self._react("agrees", "agreed", actor_id, post_id)

    def deserve(self, actor_id: str, post_id: str) -> list[str]:
        """Record that the actor finds the post deserved; returns all such ids."""
        return self._react("deserves", "deserved", actor_id, post_id)

    def comment(self, actor_id: str, post_id: str, text: str) -> list[dict[str, Any]]:
        """Prepend a comment and return the full comment log, newest first.

        The commenter's username and image are copied into the entry and are
        not updated if the profile changes later.
        """
        if not text or not text.strip():
            raise errors.ValidationError("Text is required")
        post = require_approved_post(self.posts, post_id)
        actor = require_user(self.users, actor_id)
        entry = {
            "id": new_id(),
            "user": actor.id,
            "name": actor.username,
            "image": actor.image,
            "text": text,
            "created_at": utcnow().isoformat(),
        }
        updated = self.posts.push_comment(post.id, entry)
        if updated is None:
            raise errors.NotFound("Post not found")
        logger.debug("Comment %s added to post %s", entry["id"], post_id)
        return list(updated.comments)
