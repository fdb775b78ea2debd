"""Tests for catch-up schedule evaluation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from nexus_crm.contacts.models import Interaction
from nexus_crm.contacts.schedule import (
    NEVER,
    count_due,
    describe_last_interaction,
    has_upcoming_or_overdue,
    is_due_or_overdue,
    is_overdue,
    last_interaction_date,
    upcoming_catch_ups,
)

TODAY = date(2024, 6, 1)


class TestDuePredicates:
    """Tests for is_overdue / is_due_or_overdue / has_upcoming_or_overdue."""

    @pytest.mark.parametrize("days_before", [1, 30, 365])
    def test_past_date_is_overdue_and_due(self, make_contact, days_before) -> None:
        """Test any date strictly before today is overdue and due."""
        contact = make_contact(next_catch_up_date=TODAY - timedelta(days=days_before))

        assert is_overdue(contact, TODAY) is True
        assert is_due_or_overdue(contact, TODAY) is True

    def test_today_is_due_but_not_overdue(self, make_contact) -> None:
        """Test a catch-up dated today counts as due, not overdue."""
        contact = make_contact(next_catch_up_date=TODAY)

        assert is_overdue(contact, TODAY) is False
        assert is_due_or_overdue(contact, TODAY) is True

    def test_future_date_is_neither(self, make_contact) -> None:
        contact = make_contact(next_catch_up_date=TODAY + timedelta(days=1))

        assert is_overdue(contact, TODAY) is False
        assert is_due_or_overdue(contact, TODAY) is False

    def test_no_date_is_neither(self, make_contact) -> None:
        """Test contacts without a date are never due or overdue."""
        contact = make_contact(next_catch_up_date=None)

        assert is_overdue(contact, TODAY) is False
        assert is_due_or_overdue(contact, TODAY) is False
        assert has_upcoming_or_overdue(contact, TODAY) is False

    @pytest.mark.parametrize("offset", [-400, -1, 0, 1, 400])
    def test_has_upcoming_or_overdue_for_any_set_date(self, make_contact, offset) -> None:
        """Test any scheduled date, past or future, gates topic generation."""
        contact = make_contact(next_catch_up_date=TODAY + timedelta(days=offset))
        assert has_upcoming_or_overdue(contact, TODAY) is True

    def test_defaults_to_current_date(self, make_contact) -> None:
        """Test predicates fall back to today's local date."""
        contact = make_contact(next_catch_up_date=date.today() - timedelta(days=1))
        assert is_overdue(contact) is True
        assert is_due_or_overdue(make_contact(next_catch_up_date=date.today())) is True


class TestLastInteraction:
    """Tests for last_interaction_date and describe_last_interaction."""

    def test_never_without_interactions(self, make_contact) -> None:
        contact = make_contact()

        assert last_interaction_date(contact) is NEVER
        assert describe_last_interaction(contact) == "Never"

    def test_first_interaction_is_latest(self, make_contact) -> None:
        """Test the first element of the newest-first list is used."""
        newest = datetime(2024, 5, 20, tzinfo=timezone.utc)
        older = datetime(2024, 1, 2, tzinfo=timezone.utc)
        contact = make_contact(
            interactions=[Interaction(occurred_at=newest), Interaction(occurred_at=older)]
        )

        assert last_interaction_date(contact) == newest
        assert describe_last_interaction(contact) == contact.interactions[0].display_date


class TestDashboardHelpers:
    """Tests for count_due and upcoming_catch_ups."""

    def test_count_due(self, make_contact) -> None:
        contacts = [
            make_contact("a", next_catch_up_date=TODAY - timedelta(days=3)),
            make_contact("b", next_catch_up_date=TODAY),
            make_contact("c", next_catch_up_date=TODAY + timedelta(days=3)),
            make_contact("d"),
        ]
        assert count_due(contacts, TODAY) == 2

    def test_upcoming_sorted_by_date_and_limited(self, make_contact) -> None:
        """Test upcoming catch-ups are earliest first and capped."""
        contacts = [
            make_contact(str(i), next_catch_up_date=TODAY + timedelta(days=10 - i))
            for i in range(7)
        ]
        contacts.append(make_contact("none"))

        upcoming = upcoming_catch_ups(contacts, limit=5)

        assert [c.id for c in upcoming] == ["6", "5", "4", "3", "2"]

    def test_upcoming_keeps_order_for_equal_dates(self, make_contact) -> None:
        contacts = [
            make_contact("x", next_catch_up_date=TODAY),
            make_contact("y", next_catch_up_date=TODAY),
        ]
        assert [c.id for c in upcoming_catch_ups(contacts)] == ["x", "y"]
