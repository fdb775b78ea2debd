"""ContactAdvisor -- on-demand AI help for a selected contact."""

from datetime import date
from typing import List, Optional

import structlog

from ..contacts.models import Contact, SyncPlatform
from ..contacts.schedule import has_upcoming_or_overdue
from ..llm.interface import EmailDraft, RelationshipIntelligence
from .models import InsightRecord

logger = structlog.get_logger()


class ContactAdvisor:
    """Discussion topics, ice-breakers and email drafts for one contact.

    Called explicitly by whatever owns the contact-selection lifecycle.
    """

    def __init__(self, service: RelationshipIntelligence) -> None:
        self._service = service

    async def _social_context(
        self,
        contact: Contact,
        insight: Optional[InsightRecord],
    ) -> Optional[str]:
        if insight is not None:
            return insight.summary if insight.has_update else None
        if contact.sync_platform is SyncPlatform.NONE:
            return None

        try:
            update = await self._service.fetch_social_update(contact)
        except Exception as exc:
            logger.warning(
                "Social context fetch failed",
                contact_id=contact.id,
                error=str(exc),
            )
            return None
        return update.summary if update.has_update else None

    async def evaluate_and_fetch_topics_if_eligible(
        self,
        contact: Contact,
        today: Optional[date] = None,
        insight: Optional[InsightRecord] = None,
    ) -> List[str]:
        """Discussion topics when a catch-up is scheduled, else [].

        Args:
            contact: The selected contact.
            today: Evaluation date, defaults to the local date.
            insight: An already-synced record to use as social context
                instead of fetching a fresh update.
        """
        if not has_upcoming_or_overdue(contact, today):
            return []

        social_context = await self._social_context(contact, insight)
        try:
            return await self._service.generate_discussion_topics(contact, social_context)
        except Exception as exc:
            logger.warning(
                "Discussion topic generation failed",
                contact_id=contact.id,
                error=str(exc),
            )
            return []

    async def ice_breakers(self, contact: Contact) -> List[str]:
        return await self._service.generate_ice_breakers(contact)

    async def draft_email(self, contact: Contact, intent: str) -> Optional[EmailDraft]:
        """Draft an email; None when no intent was given."""
        if not intent or not intent.strip():
            return None
        return await self._service.draft_email(contact, intent.strip())
