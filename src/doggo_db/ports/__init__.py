"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: contracts used by the engine (e.g., TransactionManager)
- Outbound ports: dependencies on external systems (e.g., StorageBackend)

Adapters implement these ports with concrete functionality.
"""

from doggo_db.ports.inbound import TransactionManager, TransactionStats
from doggo_db.ports.outbound import StorageBackend

__all__ = [
    # Inbound ports
    "TransactionManager",
    "TransactionStats",
    # Outbound ports
    "StorageBackend",
]
