"""Search, category filtering, and sorting of the contact list."""

import unicodedata
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Tuple

from .models import Contact

ALL_CATEGORIES = "All"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SortKey(str, Enum):
    """Sort orders offered in settings."""

    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    CATEGORY = "category"
    RECENT = "recent"


def collation_key(text: str) -> Tuple[str, str]:
    """Accent- and case-insensitive sort key, raw text as tiebreak."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def matches_query(contact: Contact, query: str) -> bool:
    haystack = f"{contact.first_name} {contact.last_name} {contact.company or ''}"
    return query.lower() in haystack.lower()


def matches_category(contact: Contact, category: str) -> bool:
    return category == ALL_CATEGORIES or contact.category == category


def _recent_key(contact: Contact) -> datetime:
    if not contact.interactions:
        return _EPOCH
    return contact.interactions[0].occurred_at


def rank_contacts(
    contacts: Iterable[Contact],
    query: str = "",
    category: str = ALL_CATEGORIES,
    sort_key: SortKey = SortKey.LAST_NAME,
) -> List[Contact]:
    """Filter by query AND category, then sort.

    All sorts are stable: contacts comparing equal keep their input order,
    including under ``RECENT`` which sorts newest first.
    """
    result = [
        c
        for c in contacts
        if matches_query(c, query) and matches_category(c, category)
    ]

    sort_key = SortKey(sort_key)
    if sort_key is SortKey.FIRST_NAME:
        result.sort(key=lambda c: collation_key(c.first_name))
    elif sort_key is SortKey.LAST_NAME:
        result.sort(key=lambda c: collation_key(c.last_name))
    elif sort_key is SortKey.CATEGORY:
        result.sort(key=lambda c: collation_key(c.category))
    else:
        result.sort(key=_recent_key, reverse=True)

    return result
