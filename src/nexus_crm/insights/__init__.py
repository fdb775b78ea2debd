"""Daily-briefing insight sync and per-contact advice."""

from .advisor import ContactAdvisor
from .aggregator import InsightAggregator
from .briefing import DailyBriefing, build_briefing
from .models import InsightRecord, SyncState
from .store import InsightStore

__all__ = [
    "ContactAdvisor",
    "DailyBriefing",
    "InsightAggregator",
    "InsightRecord",
    "InsightStore",
    "SyncState",
    "build_briefing",
]
