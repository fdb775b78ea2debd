"""Contact collection, schedule evaluation, eligibility and ranking."""

from .book import ContactBook, prepare_for_save, validate_contact
from .eligibility import eligible_contacts, is_eligible, sync_handle
from .models import (
    CATCH_UP_FREQUENCIES,
    Contact,
    Interaction,
    PersonalAttribute,
    SyncPlatform,
)
from .ranking import ALL_CATEGORIES, SortKey, rank_contacts

__all__ = [
    "ALL_CATEGORIES",
    "CATCH_UP_FREQUENCIES",
    "Contact",
    "ContactBook",
    "Interaction",
    "PersonalAttribute",
    "SortKey",
    "SyncPlatform",
    "eligible_contacts",
    "is_eligible",
    "prepare_for_save",
    "rank_contacts",
    "sync_handle",
    "validate_contact",
]
