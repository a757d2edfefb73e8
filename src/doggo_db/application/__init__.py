"""Application layer for the document store.

The application layer orchestrates domain logic to fulfill use cases.

Exports:
    DatabaseEngine:
        - DatabaseEngine: Main entry point for one named database
        - ChangeListener: Callback type notified after each durable save
    Registry:
        - DatabaseRegistry: Open engines keyed by backend and name
        - open_database / close_database: Global registry helpers
"""

from doggo_db.application.database_engine import ChangeListener, DatabaseEngine
from doggo_db.application.registry import (
    DatabaseRegistry,
    close_database,
    get_registry,
    open_database,
    reset_registry,
)

__all__ = [
    "DatabaseEngine",
    "ChangeListener",
    "DatabaseRegistry",
    "open_database",
    "close_database",
    "get_registry",
    "reset_registry",
]
