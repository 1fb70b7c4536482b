"""State change notifications.

Every effective mutation of the state store emits one of these to its
listeners.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChangeOrigin(StrEnum):
    CACHE = "cache"
    REMOTE = "remote"
    LOCAL = "local"


class StateSection(StrEnum):
    SUBJECT = "subject"
    SUBJECTS = "subjects"
    TICKET = "ticket"
    TICKETS = "tickets"
    LOADING = "loading"


class StateChange(BaseModel):
    """One section of the store changed."""

    model_config = ConfigDict(frozen=True)

    section: StateSection
    origin: ChangeOrigin
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("observed_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
