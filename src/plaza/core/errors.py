"""Domain error taxonomy shared by every engine.

Each error carries a stable ``kind`` string and the HTTP status the API layer
renders it with. Services raise these directly; nothing inside the core
catches and retries them.
"""

from __future__ import annotations

from fastapi import status


class PlazaError(Exception):
    """Base class for all expected business failures."""

    kind: str = "Error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Return the structured ``{kind, message}`` error body."""
        return {"kind": self.kind, "message": self.message}


class ValidationError(PlazaError):
    """Malformed input such as empty post or comment text."""

    kind = "ValidationError"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class InvalidArgument(PlazaError):
    """Identifier that does not match the store's id format."""

    kind = "InvalidArgument"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "ID Not Valid"


class Unauthorized(PlazaError):
    """Missing or invalid actor identity."""

    kind = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class Forbidden(PlazaError):
    """Actor lacks rights over the resource."""

    kind = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed"


class NotFound(PlazaError):
    """Resource absent or deliberately hidden."""

    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidState(PlazaError):
    """Operation not legal in the resource's current lifecycle state."""

    kind = "InvalidState"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Operation not allowed in the current state"


class AlreadyReacted(PlazaError):
    """Repeated agree/deserve from the same actor."""

    kind = "AlreadyReacted"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Already reacted"


class StoreFailure(PlazaError):
    """Opaque persistence fault."""

    kind = "StoreFailure"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server Error"


__all__ = [
    "PlazaError",
    "ValidationError",
    "InvalidArgument",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "InvalidState",
    "AlreadyReacted",
    "StoreFailure",
]
