"""Data models for the record store."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


class SaveOutcome(BaseModel):
    """Result of one background snapshot save."""

    sequence: int  # Monotonic per store, in mutation order
    namespace: str
    record_count: int
    success: bool
    error: Optional[str] = None
    completed_at: datetime = Field(default_factory=_utc_now)
