"""Catch-up schedule evaluation.

Pure functions deriving due/overdue status from a contact's
``next_catch_up_date``. ``today`` defaults to the local calendar date, so
comparisons are always against local midnight.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional

from .models import Contact

# Sentinel returned when a contact has no logged interactions
NEVER = None


def _today(today: Optional[date]) -> date:
    return today if today is not None else date.today()


def is_overdue(contact: Contact, today: Optional[date] = None) -> bool:
    """True iff a catch-up date is set and lies strictly before today."""
    target = contact.next_catch_up_date
    return target is not None and target < _today(today)


def is_due_or_overdue(contact: Contact, today: Optional[date] = None) -> bool:
    """True iff a catch-up date is set and is today or earlier."""
    target = contact.next_catch_up_date
    return target is not None and target <= _today(today)


def has_upcoming_or_overdue(contact: Contact, today: Optional[date] = None) -> bool:
    """True iff any catch-up date is scheduled.

    Every set date is either on/after today (upcoming) or before it
    (overdue), so the check reduces to "a date is set". ``today`` is accepted
    for signature parity with the other predicates.
    """
    return contact.next_catch_up_date is not None


def last_interaction_date(contact: Contact) -> Optional[datetime]:
    """When the most recent interaction happened, or ``NEVER``."""
    if not contact.interactions:
        return NEVER
    return contact.interactions[0].occurred_at


def describe_last_interaction(contact: Contact) -> str:
    if not contact.interactions:
        return "Never"
    return contact.interactions[0].display_date


def count_due(contacts: Iterable[Contact], today: Optional[date] = None) -> int:
    """Number of contacts whose catch-up is due or overdue."""
    day = _today(today)
    return sum(1 for c in contacts if is_due_or_overdue(c, day))


def upcoming_catch_ups(contacts: Iterable[Contact], limit: int = 5) -> List[Contact]:
    """Scheduled contacts ordered by catch-up date, earliest first.

    Overdue dates come first since they sort earliest. Equal dates keep
    collection order.
    """
    scheduled = [c for c in contacts if c.next_catch_up_date is not None]
    scheduled.sort(key=lambda c: c.next_catch_up_date)  # type: ignore[arg-type, return-value]
    return scheduled[:limit]
