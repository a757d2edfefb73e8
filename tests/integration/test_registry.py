"""Integration tests for the database registry."""

from __future__ import annotations

import pytest

from doggo_db.adapters.outbound import InMemoryStorageBackend
from doggo_db.application import (
    DatabaseRegistry,
    close_database,
    get_registry,
    open_database,
)
from doggo_db.infrastructure.metrics import MetricsRegistry


@pytest.mark.integration
class TestDatabaseRegistry:
    """Tests for per-process database uniqueness."""

    def test_same_name_same_engine(self, memory_backend: InMemoryStorageBackend, metrics_registry: MetricsRegistry) -> None:
        first = open_database("d", backend=memory_backend, metrics=metrics_registry)
        second = open_database("d", backend=memory_backend)

        assert first is second
        assert get_registry().is_open("d", memory_backend)

    def test_different_backends(self, metrics_registry: MetricsRegistry) -> None:
        first = open_database("d", backend=InMemoryStorageBackend(), metrics=metrics_registry)
        second = open_database("d", backend=InMemoryStorageBackend(), metrics=metrics_registry)

        assert first is not second

    def test_close(self, memory_backend: InMemoryStorageBackend, metrics_registry: MetricsRegistry) -> None:
        first = open_database("d", backend=memory_backend, metrics=metrics_registry)

        assert close_database("d", backend=memory_backend)
        assert not close_database("d", backend=memory_backend)

        second = open_database("d", backend=memory_backend, metrics=metrics_registry)
        assert second is not first

    def test_listener_replaced(self, memory_backend: InMemoryStorageBackend, metrics_registry: MetricsRegistry) -> None:
        registry = DatabaseRegistry()
        seen = []
        registry.open("d", backend=memory_backend, metrics=metrics_registry)

        engine = registry.open("d", backend=memory_backend, listener=seen.append)
        engine.table("pets")

        assert len(seen) == 1
        assert len(registry) == 1

    def test_default_backend_from_container(self, monkeypatch: pytest.MonkeyPatch, container, metrics_registry: MetricsRegistry) -> None:
        monkeypatch.setenv("DOGGO_DB_STORAGE__BACKEND", "memory")
        from doggo_db.infrastructure.config import get_config

        get_config.cache_clear()
        try:
            engine = open_database("d", metrics=metrics_registry)
            assert isinstance(engine.backend, InMemoryStorageBackend)
            assert open_database("d") is engine
        finally:
            get_config.cache_clear()
