from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import List, Optional

from pydantic import ValidationError

from datastore.documents import SensorDataDocument
from datastore.repository import StorageError
from models.records import SensorData
from settings import get_settings

logger = logging.getLogger(__name__)


class JsonSensorRepository:
    """Append-and-scan record store kept in memory, optionally mirrored to a JSON file."""

    def __init__(self, name: str, persistence_path: Optional[Path] = None) -> None:
        self.name = name
        self._documents: List[SensorDataDocument] = []
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def save(self, record: SensorData) -> None:
        document = SensorDataDocument.from_record(record)
        with self._lock:
            self._documents.append(document)
            try:
                self._persist()
            except StorageError:
                self._documents.pop()
                raise

    def find_by_device_id(self, device_id: str) -> List[SensorData]:
        with self._lock:
            matches = [doc for doc in self._documents if doc.device_id == device_id]
        return [doc.to_record() for doc in matches]

    def count(self) -> int:
        with self._lock:
            return len(self._documents)

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = [doc.to_payload() for doc in self._documents]
        try:
            self.persistence_path.write_text(json.dumps(payload, indent=2, sort_keys=True))
        except OSError as exc:
            logger.error(
                "Failed to write sensor store",
                extra={"store": self.name, "path": str(self.persistence_path)},
            )
            raise StorageError(f"Could not write {self.persistence_path}: {exc}") from exc

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "[]"
            data = json.loads(raw)
            documents = [SensorDataDocument.model_validate(item) for item in data]
        except (OSError, json.JSONDecodeError, TypeError, ValidationError) as exc:
            raise StorageError(
                f"Could not load sensor store from {self.persistence_path}: {exc}"
            ) from exc

        self._documents.extend(documents)
        logger.info(
            "Loaded sensor store",
            extra={
                "store": self.name,
                "path": str(self.persistence_path),
                "record_count": len(documents),
            },
        )


@lru_cache
def build_default_repository(
    name: Optional[str] = None,
    path: Optional[str] = None,
) -> JsonSensorRepository:
    settings = get_settings()
    store_name = settings.store_name if name is None else name
    store_path = settings.store_persistence_path if path is None else path
    persistence = Path(store_path) if store_path else None
    return JsonSensorRepository(name=store_name, persistence_path=persistence)
