"""
Services component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol

from zosale.domain.entities import ServiceRecord


class StoreUnavailableError(Exception):
    """The backing record store could not be reached."""


class ServiceRepoPort(Protocol):
    """
    Repository interface for service records.

    get_all returns records in insertion order. Implementations raise
    StoreUnavailableError when the store cannot be reached.
    """

    def save(self, record: ServiceRecord) -> ServiceRecord:
        """Insert or replace a record."""
        ...

    def get_by_id(self, service_id: str) -> ServiceRecord | None:
        """Get record by ID."""
        ...

    def get_all(self) -> list[ServiceRecord]:
        """List all records."""
        ...

    def delete(self, service_id: str) -> None:
        """Delete record."""
        ...
