"""Tests for InsightStore and InsightRecord."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from nexus_crm.insights.models import InsightRecord
from nexus_crm.insights.store import InsightStore
from nexus_crm.llm.interface import SocialUpdate

STAMP = datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc)


class TestInsightStore:
    """Tests for loading flags and results."""

    def test_loading_flags(self) -> None:
        store = InsightStore()
        assert store.is_loading("a") is False

        store.set_loading("a")
        store.set_loading("b", True)
        assert store.loading_ids() == frozenset({"a", "b"})

        store.set_loading("a", False)
        assert store.is_loading("a") is False
        # Clearing an unset flag is a no-op
        store.set_loading("zzz", False)

    def test_results_replaced_wholesale(self) -> None:
        store = InsightStore()
        first = InsightRecord(summary="one", timestamp=STAMP, has_update=True)
        second = InsightRecord(summary="two", timestamp=STAMP)

        store.set_result("a", first)
        store.set_result("a", second)

        assert store.get_result("a") is second
        assert store.get_result("missing") is None

    def test_results_view_is_read_only(self) -> None:
        store = InsightStore()
        store.set_result("a", InsightRecord(summary="x", timestamp=STAMP))

        with pytest.raises(TypeError):
            store.results["b"] = InsightRecord(summary="y", timestamp=STAMP)  # type: ignore[index]
        assert list(store.results) == ["a"]


class TestInsightRecord:
    """Tests for InsightRecord construction."""

    def test_from_update_caps_and_dedupes(self) -> None:
        update = SocialUpdate(
            has_update=True,
            summary="Promoted to VP",
            suggestions=["a", "b", "c", "d"],
            sources=["https://x", "https://y", "https://x"],
        )

        record = InsightRecord.from_update(update, timestamp=STAMP)

        assert record.suggestions == ["a", "b", "c"]
        assert record.sources == ["https://x", "https://y"]
        assert record.timestamp == STAMP
        assert record.has_update is True

    def test_too_many_suggestions_rejected(self) -> None:
        with pytest.raises(ValidationError):
            InsightRecord(summary="s", suggestions=["1", "2", "3", "4"], timestamp=STAMP)
