"""Pydantic models for contacts and their interaction history."""

import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

CATCH_UP_FREQUENCIES = [
    "Weekly",
    "Bi-Weekly",
    "Monthly",
    "Quarterly",
    "Bi-Annually",
    "Yearly",
]


def new_id() -> str:
    """Generate a fresh opaque identifier."""
    return uuid.uuid4().hex


class SyncPlatform(str, Enum):
    """Social platform watched for daily insight syncing."""

    LINKEDIN = "LinkedIn"
    INSTAGRAM = "Instagram"
    TWITTER = "Twitter"
    NONE = "N/A"


class PersonalAttribute(BaseModel):
    """Free-form label/value pair attached to a contact."""

    id: str = Field(default_factory=new_id)
    label: str = ""
    value: str = ""

    def is_blank(self) -> bool:
        return not self.label.strip() and not self.value.strip()


class Interaction(BaseModel):
    """A logged meeting or conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    notes: str = ""
    ai_summary: Optional[List[str]] = None

    @field_validator("occurred_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def display_date(self) -> str:
        """Human-readable date in the local timezone, e.g. 'Jun 01, 2024'."""
        return self.occurred_at.astimezone().strftime("%b %d, %Y")


class Contact(BaseModel):
    """A person in the relationship network.

    ``interactions`` is kept newest-first; ``interactions[0]`` is always the
    most recent meeting.
    """

    id: str = Field(default_factory=new_id)
    first_name: str
    last_name: str = ""
    avatar_url: Optional[str] = None

    # Basic
    personal_phone: Optional[str] = None
    birthday: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None

    # Relationship context
    first_met: Optional[str] = None
    occasion: Optional[str] = None

    # Professional
    title: Optional[str] = None
    company: Optional[str] = None
    work_email: Optional[str] = None
    work_phone: Optional[str] = None
    linkedin: Optional[str] = None

    attributes: List[PersonalAttribute] = Field(default_factory=list)

    # Classification
    category: str = "Others"
    tags: List[str] = Field(default_factory=list)

    # Sync preferences
    sync_platform: SyncPlatform = SyncPlatform.LINKEDIN
    generate_ai_responses: bool = True

    # Management
    catch_up_frequency: str = "Monthly"
    next_catch_up_date: Optional[date] = None
    notes: str = ""
    interactions: List[Interaction] = Field(default_factory=list)

    @field_validator("next_catch_up_date", mode="before")
    @classmethod
    def _blank_date_is_unset(cls, value: Any) -> Any:
        # Date inputs submit "" when cleared
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def add_tag(self, tag: str) -> "Contact":
        """Return a copy with ``tag`` appended unless it is blank or present."""
        tag = tag.strip()
        if not tag or tag in self.tags:
            return self
        return self.model_copy(update={"tags": [*self.tags, tag]})

    def remove_tag(self, tag: str) -> "Contact":
        return self.model_copy(update={"tags": [t for t in self.tags if t != tag]})
