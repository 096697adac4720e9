# src/plaza/models/user.py
"""User document with its denormalized reference sets."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from plaza.db.session import Base
from plaza.db.time import utcnow

# Reference sets stored as JSON arrays of document ids on the user row.
USER_SET_FIELDS = frozenset(
    {"posts", "bookmarks", "followers", "following", "visitors", "likes"}
)


class User(Base):
    """Registered account plus the user side of every mirrored relation."""

    __tablename__ = "user"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    username: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # Approved posts authored by this user; appended at approval time.
    posts: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    bookmarks: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    followers: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    following: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    visitors: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    # Global like index; mirrors Post.likes, most recent first.
    likes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
