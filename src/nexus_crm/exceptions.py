"""Exceptions raised by the Nexus CRM core."""


class NexusError(Exception):
    """Base class for all Nexus CRM errors."""


class ConfigurationError(NexusError):
    """Raised when settings select something that cannot be built."""


class ContactNotFoundError(NexusError):
    """Raised when a contact id is not present in the contact book."""

    def __init__(self, contact_id: str) -> None:
        self.contact_id = contact_id
        super().__init__(f"Contact not found: {contact_id}")
