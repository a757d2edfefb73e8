"""Unit tests for the DI container."""

from __future__ import annotations

from pathlib import Path

import pytest

from doggo_db.adapters.outbound import FileStorageBackend, InMemoryStorageBackend
from doggo_db.infrastructure.config import Config, StorageConfig
from doggo_db.infrastructure.container import (
    Container,
    build_storage_backend,
    configure_container,
)
from doggo_db.ports.outbound import StorageBackend


@pytest.mark.unit
class TestContainer:
    """Tests for Container registrations."""

    def test_singleton(self, container: Container) -> None:
        backend = InMemoryStorageBackend()
        container.register_singleton(StorageBackend, backend)

        assert container.resolve(StorageBackend) is backend
        assert container.has(StorageBackend)

    def test_factory_is_lazy_and_cached(self, container: Container) -> None:
        calls = []

        def factory(c: Container) -> InMemoryStorageBackend:
            calls.append(c)
            return InMemoryStorageBackend()

        container.register_factory(StorageBackend, factory)
        assert calls == []

        first = container.resolve(StorageBackend)
        second = container.resolve(StorageBackend)

        assert first is second
        assert len(calls) == 1

    def test_unregistered(self, container: Container) -> None:
        with pytest.raises(KeyError):
            container.resolve(StorageBackend)

    def test_clear(self, container: Container) -> None:
        container.register_singleton(StorageBackend, InMemoryStorageBackend())

        container.clear()

        assert not container.has(StorageBackend)


@pytest.mark.unit
class TestStorageWiring:
    """Tests for config-driven backend selection."""

    def test_memory_backend(self) -> None:
        config = Config(storage=StorageConfig(backend="memory"))

        assert isinstance(build_storage_backend(config), InMemoryStorageBackend)

    def test_file_backend(self, test_config: Config) -> None:
        backend = build_storage_backend(test_config)

        assert isinstance(backend, FileStorageBackend)
        assert backend.data_dir == Path(test_config.storage.data_dir)

    def test_configure_container(self, container: Container) -> None:
        config = Config(storage=StorageConfig(backend="memory"))

        configure_container(container, config)

        assert container.resolve(Config) is config
        assert isinstance(container.resolve(StorageBackend), InMemoryStorageBackend)
