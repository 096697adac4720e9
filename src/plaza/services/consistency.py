"""Reconciliation of mirrored references left half-written by failed requests.

Multi-document operations commit one document at a time, so a crash between
writes can leave one side of a relation behind. This pass walks both
collections and completes or removes such edges. Missing sides of an edge are
inserted rather than the surviving side removed, matching the follow toggle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from plaza.models import ModerationState
from plaza.repositories import PostRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass
class ReconcileReport:
    """Counts of repairs made (or that would be made in dry-run mode)."""

    author_links_added: int = 0
    author_links_removed: int = 0
    follow_edges_repaired: int = 0
    user_likes_added: int = 0
    user_likes_removed: int = 0
    post_likes_added: int = 0
    details: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Total number of repairs."""
        return (
            self.author_links_added
            + self.author_links_removed
            + self.follow_edges_repaired
            + self.user_likes_added
            + self.user_likes_removed
            + self.post_likes_added
        )


class ConsistencyService:
    """Detect and repair one-sided references between users and posts."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.users = UserRepository(db)
        self.posts = PostRepository(db)

    def reconcile(self, dry_run: bool = False) -> ReconcileReport:
        """Scan every user and post and repair mismatched references.

        Args:
            dry_run: Only report what would change.

        Returns:
            Report of the repairs
        """
        report = ReconcileReport()
        self._reconcile_author_posts(report, dry_run)
        self._reconcile_follow_edges(report, dry_run)
        self._reconcile_likes(report, dry_run)
        if report.total:
            logger.warning(
                "Reconciliation %s %d references",
                "found" if dry_run else "repaired",
                report.total,
            )
        else:
            logger.info("Reconciliation found no inconsistencies")
        return report

    def _state_by_post(self) -> dict[str, tuple[str, ModerationState, list[str]]]:
        # Snapshot (author, state, likes) so later writes don't invalidate iteration.
        posts = self.posts.list_by_state(ModerationState.APPROVED) + self.posts.list_by_state(
            ModerationState.PENDING
        )
        return {
            post.id: (post.author_id, post.moderation_state, list(post.likes)) for post in posts
        }

    def _reconcile_author_posts(self, report: ReconcileReport, dry_run: bool) -> None:
        posts = self._state_by_post()
        user_posts = {user.id: list(user.posts) for user in self.users.list_all()}

        for post_id, (author_id, state, _likes) in posts.items():
            if state == ModerationState.APPROVED and post_id not in user_posts.get(author_id, []):
                report.author_links_added += 1
                report.details.append(f"link approved post {post_id} to author {author_id}")
                if not dry_run:
                    self.users.add_to_set(author_id, "posts", post_id)

        for user_id, post_ids in user_posts.items():
            for post_id in post_ids:
                entry = posts.get(post_id)
                if entry is None or entry[1] != ModerationState.APPROVED or entry[0] != user_id:
                    report.author_links_removed += 1
                    report.details.append(f"unlink post {post_id} from user {user_id}")
                    if not dry_run:
                        self.users.pull_from_set(user_id, "posts", post_id)

    def _reconcile_follow_edges(self, report: ReconcileReport, dry_run: bool) -> None:
        graph = {
            user.id: (list(user.followers), list(user.following)) for user in self.users.list_all()
        }
        for user_id, (followers, following) in graph.items():
            for target_id in following:
                target = graph.get(target_id)
                if target is None or target_id == user_id:
                    continue
                if user_id not in target[0]:
                    report.follow_edges_repaired += 1
                    report.details.append(f"add {user_id} to followers of {target_id}")
                    if not dry_run:
                        self.users.add_to_set(target_id, "followers", user_id)
            for follower_id in followers:
                follower = graph.get(follower_id)
                if follower is None or follower_id == user_id:
                    continue
                if user_id not in follower[1]:
                    report.follow_edges_repaired += 1
                    report.details.append(f"add {user_id} to following of {follower_id}")
                    if not dry_run:
                        self.users.add_to_set(follower_id, "following", user_id)

    def _reconcile_likes(self, report: ReconcileReport, dry_run: bool) -> None:
        posts = self._state_by_post()
        user_likes = {user.id: list(user.likes) for user in self.users.list_all()}

        for post_id, (_author, state, likers) in posts.items():
            if state != ModerationState.APPROVED:
                continue
            for liker_id in likers:
                if liker_id in user_likes and post_id not in user_likes[liker_id]:
                    report.user_likes_added += 1
                    report.details.append(f"add post {post_id} to likes of {liker_id}")
                    if not dry_run:
                        self.users.add_to_set(liker_id, "likes", post_id)

        for user_id, liked in user_likes.items():
            for post_id in liked:
                entry = posts.get(post_id)
                if entry is None or entry[1] != ModerationState.APPROVED:
                    report.user_likes_removed += 1
                    report.details.append(f"remove post {post_id} from likes of {user_id}")
                    if not dry_run:
                        self.users.pull_from_set(user_id, "likes", post_id)
                elif user_id not in entry[2]:
                    report.post_likes_added += 1
                    report.details.append(f"add {user_id} to likes of post {post_id}")
                    if not dry_run:
                        self.posts.add_to_set(post_id, "likes", user_id)
