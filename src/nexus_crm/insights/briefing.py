"""Daily relationship briefing shown on the dashboard."""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from ..contacts.models import Contact
from ..contacts.schedule import count_due, upcoming_catch_ups
from .aggregator import InsightAggregator

UPCOMING_LIMIT = 5


@dataclass
class DailyBriefing:
    """Snapshot of dashboard figures."""

    total_contacts: int
    catch_ups_due: int
    update_count: int
    upcoming: List[Contact] = field(default_factory=list)
    insight_worthy: List[Contact] = field(default_factory=list)
    is_syncing: bool = False


def build_briefing(
    contacts: Iterable[Contact],
    aggregator: InsightAggregator,
    today: Optional[date] = None,
) -> DailyBriefing:
    contacts = list(contacts)
    return DailyBriefing(
        total_contacts=len(contacts),
        catch_ups_due=count_due(contacts, today),
        update_count=aggregator.update_count,
        upcoming=upcoming_catch_ups(contacts, limit=UPCOMING_LIMIT),
        insight_worthy=aggregator.insight_worthy_contacts(contacts),
        is_syncing=aggregator.is_syncing_all,
    )
