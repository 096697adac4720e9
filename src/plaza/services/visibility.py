"""Read-path gate: only approved posts are reachable by ordinary queries."""

from __future__ import annotations

import enum
import logging

from sqlalchemy.orm import Session

from plaza.core import errors
from plaza.db.ids import ensure_valid_id
from plaza.models import ModerationState, Post
from plaza.repositories import PostRepository, UserRepository
from plaza.services.lookup import require_post, require_user

logger = logging.getLogger(__name__)


class SortOrder(str, enum.Enum):
    """Ordering for post listings."""

    MOST_RECENT_FIRST = "most_recent_first"
    OLDEST_FIRST = "oldest_first"


class VisibilityService:
    """Approved-post reads and author-only deletion."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.posts = PostRepository(db)
        self.users = UserRepository(db)

    def list_approved(self, sort_order: SortOrder = SortOrder.MOST_RECENT_FIRST) -> list[Post]:
        """Return every approved post ordered by approval time."""
        return self.posts.list_approved(
            newest_first=sort_order == SortOrder.MOST_RECENT_FIRST,
        )

    def get_by_id(self, post_id: str, requester_id: str | None = None) -> Post:
        """Return an approved post.

        A pending post is reported exactly like a missing one so moderation
        state does not leak.
        """
        post = self.posts.get_by_id(ensure_valid_id(post_id))
        if post is None or post.moderation_state != ModerationState.APPROVED:
            raise errors.NotFound("Post not found")
        return post

    def list_user_posts(self, user_id: str) -> list[Post]:
        """Return the approved posts listed in a user's ``posts`` set."""
        user = require_user(self.users, user_id)
        return [
            post
            for post in self.posts.list_by_ids(user.posts)
            if post.moderation_state == ModerationState.APPROVED
        ]

    def delete_post(self, actor_id: str, post_id: str) -> str:
        """Delete a post owned by the actor and drop every reference to it.

        Order of writes: the post itself, the author's ``posts`` set, then each
        user's ``likes`` and ``bookmarks``. Ids left dangling by a failure after
        the first write are removed by :class:`ConsistencyService`.

        Raises:
            InvalidArgument: If the post id is malformed
            NotFound: If the post does not exist
            Forbidden: If the actor is not the author
        """
        post = require_post(self.posts, post_id)
        if post.author_id != actor_id:
            raise errors.Forbidden("Only the author can delete this post")
        deleted_id = post.id
        author_id = post.author_id
        self.posts.delete(post)
        self.users.pull_from_set(author_id, "posts", deleted_id)
        purged = self.users.pull_from_all("likes", deleted_id)
        self.users.pull_from_all("bookmarks", deleted_id)
        logger.info("Post %s deleted by author; purged from %d like indexes", deleted_id, purged)
        return deleted_id
