# src/plaza/db/ids.py
"""Document identifier generation and format checks."""

import re
import uuid

from plaza.core import errors

_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    """Return a fresh document identifier."""
    return uuid.uuid4().hex


def is_valid_id(value: object) -> bool:
    """Return True if ``value`` matches the store's identifier format."""
    return isinstance(value, str) and _ID_PATTERN.match(value) is not None


def ensure_valid_id(value: object) -> str:
    """Return ``value`` unchanged or raise InvalidArgument for malformed ids."""
    if not is_valid_id(value):
        raise errors.InvalidArgument()
    return value  # type: ignore[return-value]
