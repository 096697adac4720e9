"""Single-document write helpers shared by the repositories."""
from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from plaza.core import errors
from plaza.db.session import Base

__all__ = ["DocumentRepository"]

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", bound=Base)


class DocumentRepository(Generic[DocT]):
    """Thin wrapper giving find-by-id, set updates and atomic save for one model.

    Every mutating method commits exactly one document. Callers that need to
    touch several documents issue several calls; nothing is rolled back across
    them.
    """

    model: ClassVar[type[Base]]
    set_fields: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, doc_id: str) -> DocT | None:
        """Return a document by identifier."""
        return self.session.get(self.model, doc_id)  # type: ignore[return-value]

    def _load_for_update(self, doc_id: str) -> DocT | None:
        # Re-read the row so the set computation starts from committed state.
        return self.session.get(  # type: ignore[return-value]
            self.model,
            doc_id,
            with_for_update={"of": self.model},
            populate_existing=True,
        )

    def _check_field(self, field: str) -> None:
        if field not in self.set_fields:
            raise ValueError(f"{self.model.__name__}.{field} is not a reference set")

    def save(self, doc: DocT) -> DocT:
        """Persist a single document atomically."""
        self.session.add(doc)
        self.commit()
        return doc

    def commit(self) -> None:
        """Commit the pending single-document write.

        Raises:
            StoreFailure: If the database rejects the write.
        """
        try:
            self.session.commit()
        except SQLAlchemyError as err:
            self.session.rollback()
            logger.error("Store write failed for %s: %s", self.model.__name__, err)
            raise errors.StoreFailure() from err

    def add_to_set(
        self,
        doc_id: str,
        field: str,
        value: str,
        *,
        prepend: bool = False,
    ) -> DocT | None:
        """Add ``value`` to a reference set unless it is already present.

        Returns the updated document, or None if it does not exist.
        """
        self._check_field(field)
        doc = self._load_for_update(doc_id)
        if doc is None:
            return None
        current: list[Any] = list(getattr(doc, field) or [])
        if value in current:
            # Release the row lock without writing.
            self.session.rollback()
            return self.get_by_id(doc_id)
        setattr(doc, field, [value, *current] if prepend else [*current, value])
        self.commit()
        return doc

    def pull_from_set(self, doc_id: str, field: str, value: str) -> DocT | None:
        """Remove every occurrence of ``value`` from a reference set."""
        self._check_field(field)
        doc = self._load_for_update(doc_id)
        if doc is None:
            return None
        current: list[Any] = list(getattr(doc, field) or [])
        if value not in current:
            self.session.rollback()
            return self.get_by_id(doc_id)
        setattr(doc, field, [item for item in current if item != value])
        self.commit()
        return doc

    def delete(self, doc: DocT) -> None:
        """Remove a document permanently."""
        self.session.delete(doc)
        self.commit()
