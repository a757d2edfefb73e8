"""Inbound ports - API contracts used by the database engine."""

from doggo_db.ports.inbound.transaction_manager import (
    TransactionManager,
    TransactionStats,
)

__all__ = [
    "TransactionManager",
    "TransactionStats",
]
