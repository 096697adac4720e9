"""Data access helpers for working with post documents."""
from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import select

from plaza.db.ids import new_id
from plaza.models.post import POST_SET_FIELDS, ModerationState, Post
from plaza.repositories.base import DocumentRepository

__all__ = ["PostRepository"]


class PostRepository(DocumentRepository[Post]):
    """Find and update post documents."""

    model = Post
    set_fields = POST_SET_FIELDS

    def list_by_state(self, state: ModerationState, *, newest_first: bool = True) -> list[Post]:
        """Return posts in the given moderation state sorted by creation time."""
        order = Post.created_at.desc() if newest_first else Post.created_at.asc()
        result = self.session.execute(
            select(Post).where(Post.moderation_state == state).order_by(order, Post.id)
        )
        return list(result.scalars())

    def list_approved(self, *, newest_first: bool = True) -> list[Post]:
        """Return approved posts sorted by the time they were approved."""
        order = Post.approved_at.desc() if newest_first else Post.approved_at.asc()
        result = self.session.execute(
            select(Post)
            .where(Post.moderation_state == ModerationState.APPROVED)
            .order_by(order, Post.id)
        )
        return list(result.scalars())

    def list_by_ids(self, post_ids: Iterable[str]) -> list[Post]:
        """Return posts for ``post_ids`` preserving the given order; unknown ids are skipped."""
        ids = list(post_ids)
        if not ids:
            return []
        result = self.session.execute(select(Post).where(Post.id.in_(ids)))
        by_id = {post.id: post for post in result.scalars()}
        return [by_id[post_id] for post_id in ids if post_id in by_id]

    def list_by_author(self, author_id: str, state: ModerationState) -> list[Post]:
        """Return an author's posts in ``state``, newest first."""
        result = self.session.execute(
            select(Post)
            .where(Post.author_id == author_id, Post.moderation_state == state)
            .order_by(Post.created_at.desc(), Post.id)
        )
        return list(result.scalars())

    def create(self, *, author_id: str, text: str) -> Post:
        """Insert a new pending post and return the persisted ORM instance."""
        post = Post(
            id=new_id(),
            author_id=author_id,
            text=text,
            likes=[],
            agrees=[],
            deserves=[],
            comments=[],
            moderation_state=ModerationState.PENDING,
        )
        return self.save(post)

    def mark_approved(self, post_id: str, approved_at: datetime) -> Post | None:
        """Move a pending post to approved in a single write.

        Returns None when the post is missing or no longer pending, so a
        concurrent second approval cannot overwrite the first.
        """
        post = self._load_for_update(post_id)
        if post is None or post.moderation_state != ModerationState.PENDING:
            self.session.rollback()
            return None
        post.moderation_state = ModerationState.APPROVED
        post.approved_at = approved_at
        self.commit()
        return post

    def push_comment(self, post_id: str, comment: dict[str, Any]) -> Post | None:
        """Prepend a comment to the post's comment log."""
        post = self._load_for_update(post_id)
        if post is None:
            return None
        post.comments = [comment, *(post.comments or [])]
        self.commit()
        return post

    def delete_pending(self, post_id: str) -> str | None:
        """Delete a post only if it is still pending.

        Returns the deleted id, or None when the post is missing or was
        approved since it was last read.
        """
        post = self._load_for_update(post_id)
        if post is None or post.moderation_state != ModerationState.PENDING:
            self.session.rollback()
            return None
        deleted_id = post.id
        self.delete(post)
        return deleted_id
