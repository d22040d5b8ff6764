from __future__ import annotations

from typing import Iterable

from datastore.json_store import build_default_repository
from services.ingest import build_default_ingest_service
from settings import get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    store_path = tmp_path / "store.json"

    monkeypatch.setenv("SENSOR_STORE_NAME", "custom-store")
    monkeypatch.setenv("SENSOR_STORE_PERSISTENCE_PATH", str(store_path))
    monkeypatch.setenv("API_HOST", "0.0.0.0")
    monkeypatch.setenv("API_PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", " debug ")

    caches = (get_settings, build_default_repository, build_default_ingest_service)
    _clear_caches(caches)

    try:
        settings = get_settings()
        repository = build_default_repository()
        service = build_default_ingest_service()

        assert settings.api_host == "0.0.0.0"
        assert settings.api_port == 8080
        assert settings.log_level == "DEBUG"
        assert repository.name == "custom-store"
        assert repository.persistence_path == store_path
        assert service.repository is repository
    finally:
        _clear_caches(caches)


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("API_PORT", "not-a-port")
    monkeypatch.setenv("SENSOR_STORE_NAME", "   ")
    monkeypatch.setenv("SENSOR_STORE_PERSISTENCE_PATH", "")
    get_settings.cache_clear()

    try:
        settings = get_settings()

        assert settings.api_port == 3000
        assert settings.store_name == "sensor_data"
        assert settings.store_persistence_path is None
    finally:
        get_settings.cache_clear()
