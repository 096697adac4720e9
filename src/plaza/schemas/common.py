"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Structured error body returned for every domain failure."""

    kind: str = Field(..., description="Error category, e.g. NotFound or Forbidden.")
    message: str = Field(..., description="Human readable explanation.")
