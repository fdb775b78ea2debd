"""Eligibility of contacts for automated social-insight syncing."""

from typing import Iterable, List, Optional

from .models import Contact, SyncPlatform

# Platform -> Contact field holding the handle or profile URL
PLATFORM_FIELDS = {
    SyncPlatform.LINKEDIN: "linkedin",
    SyncPlatform.INSTAGRAM: "instagram",
    SyncPlatform.TWITTER: "twitter",
}


def sync_handle(contact: Contact) -> Optional[str]:
    """Return the non-blank handle for the contact's sync platform, if any."""
    field_name = PLATFORM_FIELDS.get(contact.sync_platform)
    if field_name is None:
        return None
    value = getattr(contact, field_name)
    if not value or not value.strip():
        return None
    return value


def is_eligible(contact: Contact) -> bool:
    """A contact is eligible when its platform is set and has a handle."""
    return sync_handle(contact) is not None


def eligible_contacts(contacts: Iterable[Contact]) -> List[Contact]:
    """Eligible contacts in collection order."""
    return [c for c in contacts if is_eligible(c)]
