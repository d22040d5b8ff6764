"""Persistence contract consumed by the ingest service."""

from __future__ import annotations

from typing import List, Protocol

from models.records import SensorData


class StorageError(RuntimeError):
    """Raised when the storage backend cannot complete a save or lookup."""


class SensorRepository(Protocol):

    def save(self, record: SensorData) -> None:
        """Persist one record. Records are neither deduplicated nor validated."""
        ...

    def find_by_device_id(self, device_id: str) -> List[SensorData]:
        """Return every saved record for ``device_id``; an empty list when there are none."""
        ...
