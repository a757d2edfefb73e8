"""File-based storage backend.

This adapter implements the StorageBackend protocol with one file per key:
the database ``pets`` lives in ``<data_dir>/pets.json``.

Writes go to a temporary file in the same directory which then replaces
the target, so a crash mid-write leaves the previous blob intact.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from doggo_db.infrastructure.logging import get_logger

logger = get_logger(__name__)


class FileStorageBackend:
    """File-based implementation of the StorageBackend protocol.

    Attributes:
        data_dir: Directory holding the database files.
        extension: File suffix appended to each key.
    """

    def __init__(
        self,
        data_dir: str | Path,
        extension: str = ".json",
        sync: bool = True,
    ) -> None:
        """Initialize the backend.

        Args:
            data_dir: Directory for database files. Created if missing.
            extension: Suffix for database files (default ".json").
            sync: If True, fsync each file after writing.
        """
        self._data_dir = Path(data_dir)
        self._extension = extension
        self._sync = sync
        self._data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """Return the file path backing key.

        Raises:
            ValueError: If key is empty or would escape data_dir.
        """
        if not key or key in (".", "..") or "/" in key or "\\" in key or "\x00" in key:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._data_dir / f"{key}{self._extension}"

    def read(self, key: str) -> bytes | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def write(self, key: str, value: bytes) -> bool:
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{key}.", suffix=".tmp", dir=self._data_dir
        )
        try:
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(value)
                tmp_file.flush()
                if self._sync:
                    os.fsync(tmp_file.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            logger.warning("storage_write_failed", path=str(path), error=str(e))
            Path(tmp_name).unlink(missing_ok=True)
            return False

        return True

    def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        if not path.exists():
            return False
        path.unlink()
        return True
