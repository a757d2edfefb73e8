"""Storage Backend port for persisting serialized databases.

This outbound port is the only contract the core has with durable storage:
a key-value primitive holding one serialized blob per database name.

The core assumes nothing beyond read-after-write within one process. It
does not rely on atomicity, durability or safe concurrent access; two
processes writing the same key simply overwrite each other (last write
wins).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageBackend(Protocol):
    """Protocol for key-value blob storage.

    Implementations:
        - FileStorageBackend: one file per key on the local filesystem
        - InMemoryStorageBackend: process-local dictionary
    """

    @abstractmethod
    def read(self, key: str) -> bytes | None:
        """Read the blob stored under key.

        Returns:
            The stored bytes, or None if nothing is stored.
        """
        ...

    @abstractmethod
    def write(self, key: str, value: bytes) -> bool:
        """Store value under key, replacing any previous blob.

        Returns:
            True if the write succeeded.
        """
        ...

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check if a blob is stored under key."""
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove the blob stored under key.

        Returns:
            True if a blob was removed.
        """
        ...
