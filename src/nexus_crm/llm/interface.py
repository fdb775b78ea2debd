"""Relationship-intelligence interface and shared result types.

Defines the Protocol consumed by the insight aggregator, the advisor and the
interaction logger. Implementations must never raise: every operation
degrades to the documented fallback value instead.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from ..contacts.models import Contact

NO_UPDATES_FOUND = "No updates found."
NO_UPDATES_TODAY = "No updates today."

FALLBACK_ICE_BREAKERS = [
    "How have you been?",
    "Working on anything exciting?",
    "Long time no see!",
]

FALLBACK_DISCUSSION_TOPICS = [
    "Follow up on previous projects",
    "Ask about recent work updates",
    "General catch up on personal interests",
]

FALLBACK_SUMMARY = ["Could not summarize."]
DEFAULT_FOLLOW_UP_DAYS = 30


@dataclass
class SocialUpdate:
    """Latest public activity found for a contact."""

    has_update: bool
    summary: str
    suggestions: List[str] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)

    @classmethod
    def fallback(cls, summary: str = NO_UPDATES_FOUND) -> "SocialUpdate":
        return cls(has_update=False, summary=summary)


@dataclass
class EmailDraft:
    """Drafted outreach email."""

    subject: str = "Hello"
    body: str = "Hi, just reaching out."


@dataclass
class MeetingSummary:
    """Condensed meeting notes plus a suggested follow-up offset."""

    summary: List[str] = field(default_factory=lambda: list(FALLBACK_SUMMARY))
    suggested_date_offset_days: int = DEFAULT_FOLLOW_UP_DAYS


class RelationshipIntelligence(Protocol):
    """Protocol for the generative relationship-intelligence backend."""

    async def fetch_social_update(self, contact: Contact) -> SocialUpdate:
        """Find recent public activity on the contact's sync platform."""
        ...

    async def generate_ice_breakers(self, contact: Contact) -> List[str]:
        """Three personalised conversation starters."""
        ...

    async def generate_discussion_topics(
        self,
        contact: Contact,
        social_context: Optional[str] = None,
    ) -> List[str]:
        """Three to five topics for an upcoming catch-up."""
        ...

    async def draft_email(self, contact: Contact, intent: str) -> EmailDraft:
        """Short email draft for the given intent."""
        ...

    async def summarize_meeting(
        self,
        raw_notes: str,
        contact_name: str,
    ) -> MeetingSummary:
        """Bullet summary of raw notes and a follow-up offset in days."""
        ...
