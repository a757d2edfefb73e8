"""In-memory storage backend.

Keeps blobs in a process-local dictionary, the equivalent of a browser's
key-value storage. Useful for tests and throwaway databases.
"""

from __future__ import annotations


class InMemoryStorageBackend:
    """Dictionary-backed implementation of the StorageBackend protocol."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._items: dict[str, bytes] = dict(initial or {})
        self.write_count = 0

    def read(self, key: str) -> bytes | None:
        return self._items.get(key)

    def write(self, key: str, value: bytes) -> bool:
        self._items[key] = bytes(value)
        self.write_count += 1
        return True

    def exists(self, key: str) -> bool:
        return key in self._items

    def delete(self, key: str) -> bool:
        return self._items.pop(key, None) is not None

    def keys(self) -> list[str]:
        """Return stored keys in insertion order."""
        return list(self._items)
