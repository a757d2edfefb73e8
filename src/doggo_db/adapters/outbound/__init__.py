"""Outbound adapters - implementations of outbound ports.

These adapters implement blob storage and serialization.
"""

from doggo_db.adapters.outbound.file_storage_backend import FileStorageBackend
from doggo_db.adapters.outbound.json_codec import JsonCodec
from doggo_db.adapters.outbound.memory_storage_backend import InMemoryStorageBackend

__all__ = [
    "FileStorageBackend",
    "InMemoryStorageBackend",
    "JsonCodec",
]
