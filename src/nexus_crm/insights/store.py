"""Keyed store for per-contact sync state."""

from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Set

from .models import InsightRecord


class InsightStore:
    """Loading flags and latest insight records, keyed by contact id.

    Written only by the InsightAggregator from the event loop thread;
    consumers read through the accessors or the read-only ``results`` view.
    """

    def __init__(self) -> None:
        self._loading: Set[str] = set()
        self._results: Dict[str, InsightRecord] = {}

    def is_loading(self, contact_id: str) -> bool:
        return contact_id in self._loading

    def set_loading(self, contact_id: str, loading: bool = True) -> None:
        if loading:
            self._loading.add(contact_id)
        else:
            self._loading.discard(contact_id)

    def loading_ids(self) -> FrozenSet[str]:
        return frozenset(self._loading)

    def get_result(self, contact_id: str) -> Optional[InsightRecord]:
        return self._results.get(contact_id)

    def set_result(self, contact_id: str, record: InsightRecord) -> None:
        self._results[contact_id] = record

    @property
    def results(self) -> Mapping[str, InsightRecord]:
        return MappingProxyType(self._results)
