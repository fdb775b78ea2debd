"""InsightAggregator -- concurrent daily-briefing sync.

Fans out one social-update fetch per eligible contact, merges each result
into the InsightStore as it completes, and derives the contacts worth
surfacing on the dashboard. A fetch failure only affects its own contact:
it is logged and swallowed before the batch joins.
"""

import asyncio
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

import structlog

from ..contacts.eligibility import eligible_contacts, is_eligible
from ..contacts.models import Contact
from ..llm.interface import RelationshipIntelligence
from .models import InsightRecord, SyncState
from .store import InsightStore

logger = structlog.get_logger()

DEFAULT_BATCH_CAP = 8


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InsightAggregator:
    """Owns the insight store and the sync lifecycle.

    Lifecycle: NOT_STARTED -> SYNC_IN_PROGRESS -> IDLE. The automatic
    morning sync fires at most once per aggregator, tracked apart from the
    lifecycle state so that an earlier manual ``sync_all`` does not
    suppress it. Later syncs are manual (``sync_all``/``sync_one``).
    """

    def __init__(
        self,
        service: RelationshipIntelligence,
        store: Optional[InsightStore] = None,
        batch_cap: int = DEFAULT_BATCH_CAP,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._service = service
        self._store = store or InsightStore()
        self._batch_cap = batch_cap
        self._clock = clock or _utcnow
        self._state = SyncState.NOT_STARTED
        self._active_batches = 0
        self._auto_fired = False

    @property
    def store(self) -> InsightStore:
        return self._store

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def is_syncing_all(self) -> bool:
        return self._active_batches > 0

    async def sync_one(self, contact: Contact) -> Optional[InsightRecord]:
        """Fetch and store the latest insight for one contact.

        Returns the new record, or None when the fetch was skipped (already
        in flight, not eligible) or failed. Never raises.
        """
        if self._store.is_loading(contact.id):
            logger.debug("Sync already in flight", contact_id=contact.id)
            return None
        if not is_eligible(contact):
            logger.debug("Contact not eligible for sync", contact_id=contact.id)
            return None

        # Flag before the first await so concurrent callers see it
        self._store.set_loading(contact.id, True)
        try:
            update = await self._service.fetch_social_update(contact)
            record = InsightRecord.from_update(update, timestamp=self._clock())
            self._store.set_result(contact.id, record)
            logger.info(
                "Insight synced",
                contact_id=contact.id,
                has_update=record.has_update,
            )
            return record
        except Exception as exc:
            logger.warning(
                "Insight sync failed",
                contact_id=contact.id,
                error=str(exc),
            )
            return None
        finally:
            self._store.set_loading(contact.id, False)

    def select_targets(self, contacts: Iterable[Contact]) -> List[Contact]:
        """First ``batch_cap`` eligible contacts in collection order."""
        return eligible_contacts(contacts)[: self._batch_cap]

    async def sync_all(self, contacts: Iterable[Contact]) -> int:
        """Sync the capped batch concurrently.

        Returns the number of records written.
        """
        targets = self.select_targets(contacts)
        self._active_batches += 1
        self._state = SyncState.SYNC_IN_PROGRESS
        logger.info("Insight batch sync started", targets=len(targets))
        try:
            results = await asyncio.gather(*(self.sync_one(c) for c in targets))
        finally:
            self._active_batches -= 1
            if self._active_batches == 0:
                self._state = SyncState.IDLE

        written = sum(1 for r in results if r is not None)
        logger.info(
            "Insight batch sync finished",
            targets=len(targets),
            written=written,
        )
        return written

    async def maybe_auto_sync(self, contacts: Iterable[Contact]) -> bool:
        """Run the one-time morning sync once an eligible contact exists.

        Returns True if this call triggered the sync.
        """
        if self._auto_fired:
            return False
        contacts = list(contacts)
        if not eligible_contacts(contacts):
            return False
        # Claim before awaiting so a concurrent caller cannot fire twice
        self._auto_fired = True
        await self.sync_all(contacts)
        return True

    def insight_worthy_contacts(self, contacts: Iterable[Contact]) -> List[Contact]:
        """Eligible contacts that are loading or have an actionable update.

        Covers every contact with a stored ``has_update`` record, not only
        the last batch.
        """
        worthy = []
        for contact in eligible_contacts(contacts):
            if self._store.is_loading(contact.id):
                worthy.append(contact)
                continue
            record = self._store.get_result(contact.id)
            if record is not None and record.has_update:
                worthy.append(contact)
        return worthy

    @property
    def update_count(self) -> int:
        """Number of stored records with an actionable update."""
        return sum(1 for r in self._store.results.values() if r.has_update)
