"""Moderation state machine for submitted posts.

A post starts ``pending`` and takes exactly one terminal transition: approval
by someone other than its author, or rejection (deletion) by someone other
than its author. Both transitions are single-use; repeating one is reported
as :class:`~plaza.core.errors.InvalidState` instead of being ignored.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from plaza.core import errors
from plaza.db.time import utcnow
from plaza.models import ModerationState, Post
from plaza.repositories import PostRepository, UserRepository
from plaza.services.lookup import require_post, require_user

logger = logging.getLogger(__name__)


class ModerationService:
    """Service handling post submission and moderation transitions."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.users = UserRepository(db)

    def submit(self, author_id: str, text: str) -> Post:
        """Create a post awaiting moderation.

        Args:
            author_id: ID of the authenticated author
            text: Post body

        Returns:
            The persisted pending post

        Raises:
            ValidationError: If the text is empty
            NotFound: If the author does not exist
        """
        if not text or not text.strip():
            raise errors.ValidationError("Text is required")
        author = require_user(self.users, author_id)
        post = self.posts.create(author_id=author.id, text=text)
        logger.info("Post %s submitted by %s", post.id, author.id)
        return post

    def _check_moderator(self, moderator_id: str, post_id: str) -> Post:
        post = require_post(self.posts, post_id)
        if moderator_id == post.author_id:
            raise errors.Forbidden("Authors cannot moderate their own posts")
        if post.moderation_state != ModerationState.PENDING:
            raise errors.InvalidState("Post already moderated")
        return post

    def approve(self, moderator_id: str, post_id: str) -> Post:
        """Approve a pending post and link it into its author's ``posts``.

        The post write and the author write are separate single-document
        commits. If the second one fails the post stays approved; running
        :meth:`link_to_author` (or the reconciler) completes it, and a repeat
        is a no-op because the author update is a set-add.

        Raises:
            InvalidArgument: If the post id is malformed
            NotFound: If the post does not exist
            Forbidden: If the moderator is the post's author
            InvalidState: If the post is not pending
        """
        post = self._check_moderator(moderator_id, post_id)
        approved = self.posts.mark_approved(post.id, utcnow())
        if approved is None:
            # Lost a race with another moderator between the check and the write.
            raise errors.InvalidState("Post already moderated")
        self.link_to_author(approved)
        logger.info("Post %s approved by %s", approved.id, moderator_id)
        return approved

    def link_to_author(self, post: Post) -> None:
        """Idempotently add an approved post to its author's ``posts`` set."""
        if self.users.add_to_set(post.author_id, "posts", post.id) is None:
            logger.warning("Author %s of approved post %s is missing", post.author_id, post.id)

    def reject(self, moderator_id: str, post_id: str) -> str:
        """Reject a pending post by deleting it permanently.

        Reactions and comments stored on the post disappear with it; a pending
        post is never referenced from any user's like index, so no other
        document needs cleanup.

        Returns:
            ID of the deleted post
        """
        post = self._check_moderator(moderator_id, post_id)
        deleted_id = self.posts.delete_pending(post.id)
        if deleted_id is None:
            # Approved (or rejected) by another moderator after the check.
            raise errors.InvalidState("Post already moderated")
        logger.info("Post %s rejected by %s", deleted_id, moderator_id)
        return deleted_id

    def list_pending(self, moderator_id: str) -> list[Post]:
        """Return pending posts the moderator may act on, newest first."""
        return [
            post
            for post in self.posts.list_by_state(ModerationState.PENDING)
            if post.author_id != moderator_id
        ]

    def list_own_pending(self, author_id: str) -> list[Post]:
        """Return the author's own posts still awaiting moderation."""
        return self.posts.list_by_author(author_id, ModerationState.PENDING)
