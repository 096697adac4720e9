"""Data access helpers for working with user documents."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select

from plaza.db.ids import new_id
from plaza.models.user import USER_SET_FIELDS, User
from plaza.repositories.base import DocumentRepository

__all__ = ["UserRepository"]


class UserRepository(DocumentRepository[User]):
    """Find and update user documents."""

    model = User
    set_fields = USER_SET_FIELDS

    def get_by_email(self, email: str) -> User | None:
        """Return the user registered with ``email``, if any."""
        result = self.session.execute(select(User).where(User.email == email))
        return result.scalars().first()

    def list_all(self) -> list[User]:
        """Return every user in registration order."""
        result = self.session.execute(select(User).order_by(User.created_at, User.id))
        return list(result.scalars())

    def list_by_ids(self, user_ids: Iterable[str]) -> list[User]:
        """Return users for ``user_ids`` preserving the given order; unknown ids are skipped."""
        ids = list(user_ids)
        if not ids:
            return []
        result = self.session.execute(select(User).where(User.id.in_(ids)))
        by_id = {user.id: user for user in result.scalars()}
        return [by_id[user_id] for user_id in ids if user_id in by_id]

    def create(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
        image: str,
        bio: str | None = None,
        location: str | None = None,
    ) -> User:
        """Insert a new user document with empty relation sets."""
        user = User(
            id=new_id(),
            username=username,
            email=email,
            password_hash=password_hash,
            image=image,
            bio=bio,
            location=location,
            posts=[],
            bookmarks=[],
            followers=[],
            following=[],
            visitors=[],
            likes=[],
        )
        return self.save(user)

    def pull_from_all(self, field: str, value: str) -> int:
        """Remove ``value`` from ``field`` on every user that holds it.

        Scans the whole collection; there is no secondary index by referenced id.
        Returns the number of users updated.
        """
        self._check_field(field)
        holders = [user.id for user in self.list_all() if value in (getattr(user, field) or [])]
        for user_id in holders:
            # Each removal re-reads its row under lock and commits on its own.
            self.pull_from_set(user_id, field, value)
        return len(holders)
