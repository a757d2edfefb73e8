"""JSON codec for database blobs.

Serializes a DatabaseState to UTF-8 JSON using the stored layout:

    {
      "tables": {"<name>": {"tableName", "createdAt", "updatedAt",
                            "lastEntryId", "contents": [...]}},
      "createdAt": "<iso>", "updatedAt": "<iso>"
    }

Key order is preserved, so decode followed by encode reproduces the
original bytes.
"""

from __future__ import annotations

import json

from doggo_db.domain.entities import DatabaseState
from doggo_db.domain.errors import PersistenceError


class JsonCodec:
    """Encodes and decodes database blobs."""

    encoding = "utf-8"

    def encode(self, state: DatabaseState) -> bytes:
        """Serialize a database.

        Raises:
            PersistenceError: If a row holds a value JSON cannot represent.
        """
        try:
            text = json.dumps(
                state.to_dict(),
                ensure_ascii=False,
                separators=(",", ":"),
                allow_nan=False,
            )
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Database is not serializable: {e}") from e
        return text.encode(self.encoding)

    def decode(self, blob: bytes) -> DatabaseState:
        """Deserialize a database.

        Raises:
            PersistenceError: If the blob is not a valid database.
        """
        try:
            data = json.loads(blob.decode(self.encoding))
            return DatabaseState.from_dict(data)
        except (UnicodeDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Stored database is corrupt: {e}") from e
