"""Outbound ports - interfaces for external dependencies.

The document store depends on exactly one external system: blob storage.
"""

from doggo_db.ports.outbound.storage_backend import StorageBackend

__all__ = [
    "StorageBackend",
]
