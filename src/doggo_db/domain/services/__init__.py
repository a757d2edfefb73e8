"""Domain services.

Services implement domain logic that doesn't fit within a single entity.
"""

from doggo_db.domain.services.query_engine import (
    MISSING,
    QueryEngine,
    loose_equals,
    matches,
    resolve_path,
)
from doggo_db.domain.services.transaction_manager import SnapshotTransactionManager

__all__ = [
    "MISSING",
    "QueryEngine",
    "SnapshotTransactionManager",
    "loose_equals",
    "matches",
    "resolve_path",
]
