"""Interaction logging and follow-up rescheduling.

``log_interaction`` is a pure copy-on-write update: it returns a new
Contact and leaves the original untouched. Committing the result into the
ContactBook is the caller's job.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Sequence, Union

import structlog
from pydantic import TypeAdapter

from ..contacts.models import Contact, Interaction
from ..llm.interface import RelationshipIntelligence

logger = structlog.get_logger()

_next_date_adapter = TypeAdapter(Optional[date])


def _coerce_date(value: Union[date, str, None]) -> Optional[date]:
    """Accept a date, an ISO ``YYYY-MM-DD`` string, or blank for unset."""
    if isinstance(value, str) and not value.strip():
        return None
    return _next_date_adapter.validate_python(value)


@dataclass
class MeetingAnalysis:
    """AI summary of raw notes plus the suggested next catch-up date."""

    summary: List[str]
    suggested_next_date: date


def log_interaction(
    contact: Contact,
    raw_notes: str,
    summary: Optional[Sequence[str]] = None,
    next_date: Union[date, str, None] = None,
    now: Optional[datetime] = None,
) -> Contact:
    """Record a new interaction at the front of the history.

    Args:
        contact: Contact the interaction happened with.
        raw_notes: Notes exactly as typed.
        summary: Optional AI bullet summary; stored only when non-empty.
        next_date: New ``next_catch_up_date`` as a date or ISO string;
            stored as given, past dates included.
        now: Time of logging, defaults to the current UTC instant.

    Returns:
        Updated copy of ``contact``.
    """
    next_date = _coerce_date(next_date)
    interaction = Interaction(
        occurred_at=now or datetime.now(timezone.utc),
        notes=raw_notes,
        ai_summary=list(summary) if summary else None,
    )
    updated = contact.model_copy(
        update={
            "interactions": [interaction, *contact.interactions],
            "next_catch_up_date": next_date,
        }
    )
    logger.info(
        "Interaction logged",
        contact_id=contact.id,
        interaction_id=interaction.id,
        next_catch_up_date=next_date.isoformat() if next_date else None,
    )
    return updated


def suggest_next_date(offset_days: int, today: Optional[date] = None) -> date:
    return (today or date.today()) + timedelta(days=offset_days)


async def analyze_notes(
    service: RelationshipIntelligence,
    contact: Contact,
    raw_notes: str,
    today: Optional[date] = None,
) -> Optional[MeetingAnalysis]:
    """Summarise raw notes and propose the next catch-up date.

    Returns None for blank notes without calling the service.
    """
    if not raw_notes.strip():
        return None

    result = await service.summarize_meeting(raw_notes, contact.display_name)
    return MeetingAnalysis(
        summary=list(result.summary),
        suggested_next_date=suggest_next_date(result.suggested_date_offset_days, today),
    )
