"""Tests for contact search, filtering and sorting."""

from datetime import datetime, timezone

import pytest

from nexus_crm.contacts.models import Interaction
from nexus_crm.contacts.ranking import (
    ALL_CATEGORIES,
    SortKey,
    collation_key,
    rank_contacts,
)


def _at(day: int) -> Interaction:
    return Interaction(occurred_at=datetime(2024, 5, day, tzinfo=timezone.utc))


@pytest.fixture
def contacts(make_contact):
    return [
        make_contact("1", "Sarah", "Chen", category="Professional", company="TechFlow Inc"),
        make_contact("2", "Marcus", "Reynolds", category="VIP", company="BuildRight"),
        make_contact("3", "Elena", "Rodriguez", category="Family & Friends"),
        make_contact("4", "Émile", "Abadie", category="Professional", company="Atelier"),
    ]


class TestFiltering:
    """Tests for query and category filtering."""

    def test_empty_query_and_all_returns_everything(self, contacts) -> None:
        """Test the neutral filter keeps every contact exactly once."""
        result = rank_contacts(contacts, "", ALL_CATEGORIES, SortKey.LAST_NAME)

        assert sorted(c.id for c in result) == ["1", "2", "3", "4"]
        assert len(result) == len(contacts)

    def test_query_matches_first_last_and_company(self, contacts) -> None:
        assert [c.id for c in rank_contacts(contacts, "sarah")] == ["1"]
        assert [c.id for c in rank_contacts(contacts, "REYNOLDS")] == ["2"]
        assert [c.id for c in rank_contacts(contacts, "buildright")] == ["2"]

    def test_query_spans_name_boundary(self, contacts) -> None:
        """Test the query runs over the concatenated 'first last company'."""
        assert [c.id for c in rank_contacts(contacts, "elena rod")] == ["3"]

    def test_missing_company_does_not_match_placeholder(self, contacts) -> None:
        assert rank_contacts(contacts, "none") == []

    def test_category_filter_exact_match(self, contacts) -> None:
        result = rank_contacts(contacts, category="Professional")
        assert {c.id for c in result} == {"1", "4"}

    def test_query_and_category_combined(self, contacts) -> None:
        """Test query AND category must both match."""
        assert rank_contacts(contacts, "marcus", "Professional") == []
        assert [c.id for c in rank_contacts(contacts, "marcus", "VIP")] == ["2"]

    def test_input_is_not_modified(self, contacts) -> None:
        before = [c.id for c in contacts]
        rank_contacts(contacts, sort_key=SortKey.FIRST_NAME)
        assert [c.id for c in contacts] == before


class TestSorting:
    """Tests for the four sort orders."""

    def test_sort_by_last_name(self, contacts) -> None:
        result = rank_contacts(contacts, sort_key=SortKey.LAST_NAME)
        assert [c.last_name for c in result] == ["Abadie", "Chen", "Reynolds", "Rodriguez"]

    def test_sort_by_first_name_ignores_accents(self, contacts) -> None:
        """Test 'Émile' sorts among the E names rather than after Z."""
        result = rank_contacts(contacts, sort_key=SortKey.FIRST_NAME)
        assert [c.first_name for c in result] == ["Elena", "Émile", "Marcus", "Sarah"]

    def test_sort_by_category(self, contacts) -> None:
        result = rank_contacts(contacts, sort_key=SortKey.CATEGORY)
        assert [c.category for c in result] == [
            "Family & Friends",
            "Professional",
            "Professional",
            "VIP",
        ]

    def test_sort_accepts_raw_value(self, contacts) -> None:
        result = rank_contacts(contacts, sort_key="firstName")  # type: ignore[arg-type]
        assert result[0].first_name == "Elena"

    def test_recent_newest_first_and_never_last(self, make_contact) -> None:
        """Test recent sort orders by latest interaction, none sorts oldest."""
        contacts = [
            make_contact("never"),
            make_contact("old", interactions=[_at(1)]),
            make_contact("new", interactions=[_at(20), _at(2)]),
        ]

        result = rank_contacts(contacts, sort_key=SortKey.RECENT)

        assert [c.id for c in result] == ["new", "old", "never"]

    def test_recent_is_stable_for_equal_dates(self, make_contact) -> None:
        """Test contacts with identical last interactions keep input order."""
        contacts = [
            make_contact("a", interactions=[_at(5)]),
            make_contact("b", interactions=[_at(9)]),
            make_contact("c", interactions=[_at(5)]),
            make_contact("d"),
            make_contact("e"),
        ]

        result = rank_contacts(contacts, sort_key=SortKey.RECENT)

        assert [c.id for c in result] == ["b", "a", "c", "d", "e"]

    def test_name_sort_is_stable_for_equal_names(self, make_contact) -> None:
        contacts = [
            make_contact("x", "Ann", "Lee"),
            make_contact("y", "Bob", "Lee"),
        ]
        result = rank_contacts(contacts, sort_key=SortKey.LAST_NAME)
        assert [c.id for c in result] == ["x", "y"]


class TestCollationKey:
    def test_case_and_accent_insensitive_primary(self) -> None:
        assert collation_key("émile")[0] == collation_key("Emile")[0]
