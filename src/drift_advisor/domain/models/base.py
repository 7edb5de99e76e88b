"""Base domain model classes."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel


def utc_now() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


class ValueObject(BaseModel):
    """Base class for value objects (immutable)."""

    model_config = {"frozen": True}
