"""Follow and like toggles that keep both sides of each edge in sync.

Each relation is stored twice: ``A.following``/``B.followers`` and
``post.likes``/``user.likes``. A toggle is two single-document writes made of
set-adds or set-removes, so a toggle interrupted between the writes converges
the next time it is called instead of corrupting a counter.
"""

from __future__ import annotations

import enum
import logging

from sqlalchemy.orm import Session

from plaza.core import errors
from plaza.db.ids import ensure_valid_id
from plaza.models import User
from plaza.repositories import PostRepository, UserRepository
from plaza.services.lookup import require_approved_post, require_user

logger = logging.getLogger(__name__)


class FollowState(str, enum.Enum):
    """Outcome of a follow toggle."""

    FOLLOWED = "followed"
    UNFOLLOWED = "unfollowed"


class SocialGraphService:
    """Service for user-to-user follow edges and user-to-post like edges."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.users = UserRepository(db)
        self.posts = PostRepository(db)

    def follow(self, actor_id: str, target_id: str) -> FollowState:
        """Toggle whether ``actor_id`` follows ``target_id``.

        The edge counts as present only when both sides record it. A one-sided
        edge is treated as absent, so the call adds the missing side rather
        than removing the surviving one.

        Raises:
            Forbidden: If the actor targets themselves
            InvalidArgument: If an id is malformed
            NotFound: If either user does not exist
        """
        ensure_valid_id(actor_id)
        ensure_valid_id(target_id)
        if actor_id == target_id:
            raise errors.Forbidden("You cannot follow yourself")
        actor = require_user(self.users, actor_id)
        target = require_user(self.users, target_id)

        in_followers = actor.id in target.followers
        in_following = target.id in actor.following

        if in_followers and in_following:
            self.users.pull_from_set(target.id, "followers", actor_id)
            self.users.pull_from_set(actor_id, "following", target_id)
            logger.info("%s unfollowed %s", actor_id, target_id)
            return FollowState.UNFOLLOWED

        if in_followers != in_following:
            logger.warning(
                "Repairing one-sided follow edge %s -> %s (followers=%s, following=%s)",
                actor_id,
                target_id,
                in_followers,
                in_following,
            )
        self.users.add_to_set(target_id, "followers", actor_id)
        self.users.add_to_set(actor_id, "following", target_id)
        logger.info("%s followed %s", actor_id, target_id)
        return FollowState.FOLLOWED

    def like_post(self, actor_id: str, post_id: str) -> list[str]:
        """Toggle the actor's like on an approved post.

        New likes are placed first in both ``post.likes`` and the actor's
        ``likes`` index. Calling twice unlikes; it is never an error.

        Returns:
            Liker ids of the post, most recent first

        Raises:
            InvalidArgument: If an id is malformed
            NotFound: If the post or the actor does not exist
            InvalidState: If the post is still pending
        """
        post = require_approved_post(self.posts, post_id)
        actor = require_user(self.users, actor_id)
        target_post_id = post.id

        if actor.id in post.likes:
            updated = self.posts.pull_from_set(target_post_id, "likes", actor.id)
            self.users.pull_from_set(actor_id, "likes", target_post_id)
        else:
            updated = self.posts.add_to_set(target_post_id, "likes", actor.id, prepend=True)
            self.users.add_to_set(actor_id, "likes", target_post_id, prepend=True)

        if updated is None:
            raise errors.NotFound("Post not found")
        return list(updated.likes)

    def followers(self, user_id: str) -> list[User]:
        """Return the users following ``user_id``."""
        user = require_user(self.users, user_id)
        return self.users.list_by_ids(user.followers)

    def following(self, user_id: str) -> list[User]:
        """Return the users ``user_id`` follows."""
        user = require_user(self.users, user_id)
        return self.users.list_by_ids(user.following)
