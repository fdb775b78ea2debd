"""Shared test fixtures."""

from typing import Callable, Dict, List, Optional

import pytest
import structlog

from nexus_crm.contacts.models import Contact, SyncPlatform
from nexus_crm.llm.interface import (
    FALLBACK_DISCUSSION_TOPICS,
    EmailDraft,
    MeetingSummary,
    SocialUpdate,
)

logger = structlog.get_logger()


class FakeIntelligence:
    """In-memory relationship-intelligence service for testing.

    ``updates`` maps contact id to the SocialUpdate to return; ids listed
    in ``failing`` raise instead.
    """

    def __init__(self) -> None:
        self.updates: Dict[str, SocialUpdate] = {}
        self.failing: set = set()
        self.fetch_calls: List[str] = []
        self.topic_calls: List[Optional[str]] = []
        self.summary = MeetingSummary(summary=["Discussed the move"], suggested_date_offset_days=14)

    async def fetch_social_update(self, contact: Contact) -> SocialUpdate:
        self.fetch_calls.append(contact.id)
        if contact.id in self.failing:
            logger.debug("Fake fetch failing", contact_id=contact.id)
            raise RuntimeError(f"fetch failed for {contact.id}")
        return self.updates.get(contact.id, SocialUpdate.fallback())

    async def generate_ice_breakers(self, contact: Contact) -> List[str]:
        return [f"Ask {contact.first_name} about work"]

    async def generate_discussion_topics(
        self, contact: Contact, social_context: Optional[str] = None
    ) -> List[str]:
        self.topic_calls.append(social_context)
        return list(FALLBACK_DISCUSSION_TOPICS)

    async def draft_email(self, contact: Contact, intent: str) -> EmailDraft:
        return EmailDraft(subject=f"Re: {intent}", body=f"Hi {contact.first_name}")

    async def summarize_meeting(self, raw_notes: str, contact_name: str) -> MeetingSummary:
        return self.summary


@pytest.fixture
def fake_service() -> FakeIntelligence:
    return FakeIntelligence()


@pytest.fixture
def make_contact() -> Callable[..., Contact]:
    """Factory building contacts with sensible defaults."""

    def _make(
        contact_id: str = "c1",
        first_name: str = "Sarah",
        last_name: str = "Chen",
        **kwargs: object,
    ) -> Contact:
        defaults: dict = dict(
            id=contact_id,
            first_name=first_name,
            last_name=last_name,
            category="Professional",
            sync_platform=SyncPlatform.NONE,
        )
        defaults.update(kwargs)
        return Contact(**defaults)

    return _make
