"""Process-wide registry of open databases.

A database is unique per process by name: opening the same name on the
same backend twice returns the engine opened first.
"""

from __future__ import annotations

from doggo_db.application.database_engine import ChangeListener, DatabaseEngine
from doggo_db.infrastructure.container import get_container
from doggo_db.infrastructure.logging import get_logger
from doggo_db.infrastructure.metrics import MetricsRegistry
from doggo_db.ports.outbound.storage_backend import StorageBackend

logger = get_logger(__name__)


class DatabaseRegistry:
    """Tracks open engines keyed by (backend, name)."""

    def __init__(self) -> None:
        self._engines: dict[tuple[int, str], DatabaseEngine] = {}

    def open(
        self,
        name: str,
        backend: StorageBackend | None = None,
        listener: ChangeListener | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> DatabaseEngine:
        """Return the open engine for name, opening it if needed.

        A listener passed for an already open database replaces the
        previous one.
        """
        backend = backend or get_container().resolve(StorageBackend)
        key = (id(backend), name)

        engine = self._engines.get(key)
        if engine is not None:
            if listener is not None:
                engine.listener = listener
            return engine

        engine = DatabaseEngine(name, backend=backend, listener=listener, metrics=metrics)
        self._engines[key] = engine
        logger.debug("database_registered", database=name)
        return engine

    def close(self, name: str, backend: StorageBackend | None = None) -> bool:
        """Forget an open engine. Returns False if it was not open."""
        backend = backend or get_container().resolve(StorageBackend)
        return self._engines.pop((id(backend), name), None) is not None

    def is_open(self, name: str, backend: StorageBackend | None = None) -> bool:
        backend = backend or get_container().resolve(StorageBackend)
        return (id(backend), name) in self._engines

    def clear(self) -> None:
        self._engines.clear()

    def __len__(self) -> int:
        return len(self._engines)


# Global registry instance
_registry: DatabaseRegistry | None = None


def get_registry() -> DatabaseRegistry:
    """Get the global registry instance."""
    global _registry
    if _registry is None:
        _registry = DatabaseRegistry()
    return _registry


def reset_registry() -> None:
    """Reset the global registry (useful for testing)."""
    global _registry
    _registry = None


def open_database(
    name: str,
    backend: StorageBackend | None = None,
    listener: ChangeListener | None = None,
    metrics: MetricsRegistry | None = None,
) -> DatabaseEngine:
    """Open a database through the global registry."""
    return get_registry().open(name, backend=backend, listener=listener, metrics=metrics)


def close_database(name: str, backend: StorageBackend | None = None) -> bool:
    """Close a database opened through the global registry."""
    return get_registry().close(name, backend=backend)
