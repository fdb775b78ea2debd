"""Insight data models."""

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..llm.interface import SocialUpdate


class SyncState(str, Enum):
    """Lifecycle of the daily-briefing sync."""

    NOT_STARTED = "not_started"
    SYNC_IN_PROGRESS = "sync_in_progress"
    IDLE = "idle"


class InsightRecord(BaseModel):
    """Latest social-update result for one contact.

    Replaced wholesale on every successful sync, never merged.
    """

    model_config = ConfigDict(frozen=True)

    summary: str
    suggestions: List[str] = Field(default_factory=list, max_length=3)
    sources: List[str] = Field(default_factory=list)
    timestamp: datetime
    has_update: bool = False

    @classmethod
    def from_update(cls, update: SocialUpdate, timestamp: datetime) -> "InsightRecord":
        return cls(
            summary=update.summary,
            suggestions=update.suggestions[:3],
            sources=list(dict.fromkeys(update.sources)),
            timestamp=timestamp,
            has_update=update.has_update,
        )
