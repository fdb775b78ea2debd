"""ContactBook -- the in-memory contact collection.

The collection is an immutable tuple replaced on every mutation, so
readers holding an earlier snapshot are never affected by later writes.
"""

from typing import Iterable, List, Optional, Tuple

import structlog

from ..exceptions import ContactNotFoundError
from .eligibility import eligible_contacts
from .models import Contact, SyncPlatform

logger = structlog.get_logger()

_HANDLE_ERRORS = {
    SyncPlatform.LINKEDIN: (
        "linkedin",
        "Please provide a LinkedIn URL to enable LinkedIn Daily Sync.",
    ),
    SyncPlatform.INSTAGRAM: (
        "instagram",
        "Please provide an Instagram handle to enable Instagram Daily Sync.",
    ),
    SyncPlatform.TWITTER: (
        "twitter",
        "Please provide a Twitter handle to enable Twitter Daily Sync.",
    ),
}


def validate_contact(contact: Contact) -> List[str]:
    """Return save-time validation errors; empty when the contact is valid."""
    errors: List[str] = []
    rule = _HANDLE_ERRORS.get(contact.sync_platform)
    if rule:
        field_name, message = rule
        value = getattr(contact, field_name)
        if not value or not value.strip():
            errors.append(message)
    return errors


def prepare_for_save(contact: Contact) -> Contact:
    """Drop custom attributes whose label and value are both blank."""
    kept = [a for a in contact.attributes if not a.is_blank()]
    if len(kept) == len(contact.attributes):
        return contact
    return contact.model_copy(update={"attributes": kept})


class ContactBook:
    """Single source of truth for the contact collection."""

    def __init__(self, contacts: Optional[Iterable[Contact]] = None) -> None:
        self._contacts: Tuple[Contact, ...] = tuple(contacts or ())
        self._eligible_cache: Optional[Tuple[Tuple[Contact, ...], List[Contact]]] = None

    def __len__(self) -> int:
        return len(self._contacts)

    def all(self) -> Tuple[Contact, ...]:
        """Current snapshot of the collection."""
        return self._contacts

    def get(self, contact_id: str) -> Optional[Contact]:
        for contact in self._contacts:
            if contact.id == contact_id:
                return contact
        return None

    def require(self, contact_id: str) -> Contact:
        contact = self.get(contact_id)
        if contact is None:
            raise ContactNotFoundError(contact_id)
        return contact

    def create(self, contact: Contact) -> Contact:
        """Add a new contact at the front of the collection."""
        contact = prepare_for_save(contact)
        self._contacts = (contact, *self._contacts)
        logger.info("Contact created", contact_id=contact.id)
        return contact

    def update(self, contact: Contact) -> Contact:
        """Replace the stored contact with the same id."""
        self.require(contact.id)
        contact = prepare_for_save(contact)
        self._contacts = tuple(
            contact if c.id == contact.id else c for c in self._contacts
        )
        logger.debug("Contact updated", contact_id=contact.id)
        return contact

    def delete(self, contact_id: str) -> None:
        self.require(contact_id)
        self._contacts = tuple(c for c in self._contacts if c.id != contact_id)
        logger.info("Contact deleted", contact_id=contact_id)

    def replace_all(self, contacts: Iterable[Contact]) -> None:
        self._contacts = tuple(contacts)

    def eligible_contacts(self) -> List[Contact]:
        """Sync-eligible contacts, memoised on the current snapshot."""
        cached = self._eligible_cache
        if cached is not None and cached[0] is self._contacts:
            return cached[1]
        result = eligible_contacts(self._contacts)
        self._eligible_cache = (self._contacts, result)
        return result
