"""In-memory service record store.

Implements ServiceRepoPort for single-process deployments, demos and
tests. Each instance owns its records; nothing is shared at module level.
"""

from __future__ import annotations

from collections.abc import Iterable

from zosale.domain.entities import ServiceRecord


class InMemoryServiceRepo:
    """Insertion-ordered record store held in a dict."""

    def __init__(self, records: Iterable[ServiceRecord] = ()) -> None:
        self._records: dict[str, ServiceRecord] = {}
        for record in records:
            self.save(record)

    def save(self, record: ServiceRecord) -> ServiceRecord:
        """Insert or replace; a replaced record keeps its position."""
        self._records[record.id] = record.model_copy()
        return record

    def get_by_id(self, service_id: str) -> ServiceRecord | None:
        record = self._records.get(service_id)
        return record.model_copy() if record else None

    def get_all(self) -> list[ServiceRecord]:
        return [record.model_copy() for record in self._records.values()]

    def delete(self, service_id: str) -> None:
        self._records.pop(service_id, None)

    def clear(self) -> None:
        """Remove every record - useful for testing."""
        self._records.clear()
