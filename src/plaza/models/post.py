# src/plaza/models/post.py
"""Post document, its reaction sets and moderation state."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from plaza.db.session import Base
from plaza.db.time import utcnow

if TYPE_CHECKING:
    from plaza.models.user import User

POST_SET_FIELDS = frozenset({"likes", "agrees", "deserves"})


class ModerationState(str, enum.Enum):
    """Stored moderation state of a post.

    A rejected post is deleted, so rejection has no stored value.
    """

    PENDING = "pending"
    APPROVED = "approved"


class Post(Base):
    """Short text post owned by exactly one author."""

    __tablename__ = "post"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    author_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("user.id"), nullable=False, index=True
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)

    likes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    agrees: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    deserves: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    # Newest first; author name/image are snapshots taken when the comment was written.
    comments: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    moderation_state: Mapped[ModerationState] = mapped_column(
        Enum(ModerationState, name="moderation_state", native_enum=False, length=16),
        nullable=False,
        default=ModerationState.PENDING,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    author: Mapped[User] = relationship("User", lazy="joined", innerjoin=True)

    @property
    def approved(self) -> bool:
        """Legacy flag: True once the post passed moderation."""
        return self.moderation_state == ModerationState.APPROVED

    @property
    def approval_pending(self) -> bool:
        """Legacy flag: True while the post awaits moderation."""
        return self.moderation_state == ModerationState.PENDING
