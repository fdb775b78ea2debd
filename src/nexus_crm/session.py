"""CRMSession -- single entry point wiring the core together.

Owns the contact book, the insight aggregator and the advisor for one
application lifetime, and commits copy-on-write updates back into the book.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Union

import structlog

from .config.settings import Settings
from .contacts.book import ContactBook
from .contacts.models import Contact
from .contacts.ranking import ALL_CATEGORIES, SortKey, rank_contacts
from .insights.advisor import ContactAdvisor
from .insights.aggregator import InsightAggregator
from .insights.briefing import DailyBriefing, build_briefing
from .interactions.logger import log_interaction
from .llm.factory import create_intelligence_service
from .llm.interface import RelationshipIntelligence

logger = structlog.get_logger()


class CRMSession:
    """Application-lifetime state for one user."""

    def __init__(
        self,
        service: RelationshipIntelligence,
        book: Optional[ContactBook] = None,
        batch_cap: int = 8,
        categories: Optional[Sequence[str]] = None,
    ) -> None:
        self.service = service
        self.book = book if book is not None else ContactBook()
        self.aggregator = InsightAggregator(service, batch_cap=batch_cap)
        self.advisor = ContactAdvisor(service)
        self.categories: List[str] = list(categories or [])

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        contacts: Optional[Iterable[Contact]] = None,
    ) -> "CRMSession":
        service = create_intelligence_service(settings)
        return cls(
            service=service,
            book=ContactBook(contacts),
            batch_cap=settings.insight_batch_cap,
            categories=settings.default_categories,
        )

    async def open_dashboard(self, today: Optional[date] = None) -> DailyBriefing:
        """Run the one-time morning sync if due, then build the briefing."""
        contacts = self.book.all()
        triggered = await self.aggregator.maybe_auto_sync(contacts)
        if triggered:
            logger.info("Morning briefing sync completed", contacts=len(contacts))
        return build_briefing(self.book.all(), self.aggregator, today)

    async def refresh(self) -> int:
        """Manual "refresh daily sync"."""
        return await self.aggregator.sync_all(self.book.all())

    def list_contacts(
        self,
        query: str = "",
        category: str = ALL_CATEGORIES,
        sort_key: SortKey = SortKey.LAST_NAME,
    ) -> List[Contact]:
        return rank_contacts(self.book.all(), query, category, sort_key)

    def log_interaction(
        self,
        contact_id: str,
        raw_notes: str,
        summary: Optional[Sequence[str]] = None,
        next_date: Union[date, str, None] = None,
        now: Optional[datetime] = None,
    ) -> Contact:
        """Log an interaction and commit the updated contact.

        Raises:
            ContactNotFoundError: If ``contact_id`` is unknown.
        """
        contact = self.book.require(contact_id)
        updated = log_interaction(contact, raw_notes, summary, next_date, now)
        return self.book.update(updated)

    async def discussion_topics(
        self,
        contact_id: str,
        today: Optional[date] = None,
    ) -> List[str]:
        contact = self.book.require(contact_id)
        insight = self.aggregator.store.get_result(contact_id)
        return await self.advisor.evaluate_and_fetch_topics_if_eligible(
            contact, today=today, insight=insight
        )
