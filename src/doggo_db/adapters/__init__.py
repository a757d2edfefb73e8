"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: convert caller input (filter mappings)
- Outbound adapters: implement external dependencies (storage, serialization)
"""

from doggo_db.adapters.inbound import FilterParser
from doggo_db.adapters.outbound import (
    FileStorageBackend,
    InMemoryStorageBackend,
    JsonCodec,
)

__all__ = [
    # Inbound adapters
    "FilterParser",
    # Outbound adapters
    "FileStorageBackend",
    "InMemoryStorageBackend",
    "JsonCodec",
]
