"""Tests for sync eligibility."""

import pytest

from nexus_crm.contacts.eligibility import eligible_contacts, is_eligible, sync_handle
from nexus_crm.contacts.models import SyncPlatform


class TestIsEligible:
    """Tests for is_eligible and sync_handle."""

    def test_linkedin_without_url_is_not_eligible(self, make_contact) -> None:
        """Test LinkedIn sync needs a LinkedIn URL even if other handles exist."""
        contact = make_contact(
            sync_platform=SyncPlatform.LINKEDIN,
            linkedin="",
            instagram="@sarah",
            twitter="@sarah",
        )
        assert is_eligible(contact) is False
        assert sync_handle(contact) is None

    def test_linkedin_with_url_is_eligible(self, make_contact) -> None:
        contact = make_contact(
            sync_platform=SyncPlatform.LINKEDIN,
            linkedin="linkedin.com/in/sarahchen",
        )
        assert is_eligible(contact) is True
        assert sync_handle(contact) == "linkedin.com/in/sarahchen"

    @pytest.mark.parametrize(
        "platform, field_name",
        [
            (SyncPlatform.INSTAGRAM, "instagram"),
            (SyncPlatform.TWITTER, "twitter"),
        ],
    )
    def test_platform_field_mapping(self, make_contact, platform, field_name) -> None:
        """Test each platform reads its own handle field."""
        assert is_eligible(make_contact(sync_platform=platform, **{field_name: "@h"}))
        assert not is_eligible(make_contact(sync_platform=platform, linkedin="x"))

    def test_not_applicable_is_never_eligible(self, make_contact) -> None:
        contact = make_contact(
            sync_platform=SyncPlatform.NONE,
            linkedin="l",
            instagram="i",
            twitter="t",
        )
        assert is_eligible(contact) is False

    def test_whitespace_handle_counts_as_empty(self, make_contact) -> None:
        contact = make_contact(sync_platform=SyncPlatform.TWITTER, twitter="   ")
        assert is_eligible(contact) is False

    def test_instagram_with_empty_handle_excluded(self, make_contact) -> None:
        """Test an Instagram contact with an empty handle is filtered out."""
        contact = make_contact(sync_platform=SyncPlatform.INSTAGRAM, instagram="")
        assert eligible_contacts([contact]) == []


class TestEligibleContacts:
    """Tests for eligible_contacts."""

    def test_preserves_collection_order(self, make_contact) -> None:
        contacts = [
            make_contact("3", sync_platform=SyncPlatform.TWITTER, twitter="@c"),
            make_contact("1"),
            make_contact("2", sync_platform=SyncPlatform.LINKEDIN, linkedin="l"),
        ]
        assert [c.id for c in eligible_contacts(contacts)] == ["3", "2"]
