"""Pytest configuration and fixtures for doggo_db tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from doggo_db.adapters.outbound import FileStorageBackend, InMemoryStorageBackend
from doggo_db.application.registry import reset_registry
from doggo_db.infrastructure.config import Config, StorageConfig
from doggo_db.infrastructure.container import Container, reset_container
from doggo_db.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration with a temporary data directory."""
    return Config(
        storage=StorageConfig(
            backend="file",
            data_dir=temp_dir / "data",
            sync=False,  # Faster for tests
        ),
    )


@pytest.fixture
def container() -> Generator[Container, None, None]:
    """Provide a fresh DI container for each test."""
    reset_container()
    c = Container()
    yield c
    c.clear()
    reset_container()


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def memory_backend() -> InMemoryStorageBackend:
    """Provide an empty in-memory storage backend."""
    return InMemoryStorageBackend()


@pytest.fixture
def file_backend(temp_dir: Path) -> FileStorageBackend:
    """Provide a file storage backend rooted in a temporary directory."""
    return FileStorageBackend(temp_dir / "data", sync=False)


@pytest.fixture(autouse=True)
def _fresh_registry() -> Generator[None, None, None]:
    """Forget databases opened through the global registry."""
    reset_registry()
    yield
    reset_registry()


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
