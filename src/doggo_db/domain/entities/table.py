"""Table entity: a named, ordered collection of schema-less rows.

Rows keep insertion order. Updates merge into a row in place and deletes
remove a row in place; neither reorders the remaining rows.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator

from doggo_db.domain.value_objects import (
    ENTRY_ID_FIELD,
    EntryId,
    Row,
    strip_reserved,
    utc_now,
)


@dataclass
class Table:
    """A table of rows.

    Attributes:
        name: Table name, unique within its database.
        contents: Rows in insertion order.
        created_at: Creation timestamp.
        updated_at: Timestamp of the last row mutation.
        last_entry_id: Highest EntryId handed out so far. Never decreases,
            so identifiers are not reused after deletes.

    Example:
        >>> table = Table("pets")
        >>> row = table.add_row({"name": "Rex"})
        >>> row
        {'entryId': 1, 'name': 'Rex'}
    """

    name: str
    contents: list[Row] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    last_entry_id: int = 0

    def __len__(self) -> int:
        return len(self.contents)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.contents)

    def touch(self) -> None:
        """Refresh updated_at."""
        self.updated_at = utc_now()

    def next_entry_id(self) -> EntryId:
        """Allocate the next EntryId."""
        self.last_entry_id += 1
        return EntryId(self.last_entry_id)

    def add_row(self, payload: dict[str, Any]) -> Row:
        """Append a copy of payload with a fresh entryId.

        Any client supplied entryId is discarded.

        Returns:
            The stored row.
        """
        row: Row = {ENTRY_ID_FIELD: self.next_entry_id()}
        row.update(copy.deepcopy(strip_reserved(payload)))
        self.contents.append(row)
        self.touch()
        return row

    def update_row(self, index: int, updates: dict[str, Any]) -> bool:
        """Merge updates into the row at index.

        Returns:
            False if index is out of range.
        """
        if index < 0 or index >= len(self.contents):
            return False
        self.contents[index].update(copy.deepcopy(strip_reserved(updates)))
        self.touch()
        return True

    def remove_row(self, index: int) -> Row:
        """Remove and return the row at index."""
        row = self.contents.pop(index)
        self.touch()
        return row

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored table layout."""
        return {
            "tableName": self.name,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "lastEntryId": self.last_entry_id,
            "contents": self.contents,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Table:
        """Deserialize from the stored table layout.

        Blobs written without ``lastEntryId`` get the highest stored
        entryId as their counter.
        """
        contents = list(data.get("contents", []))
        last_entry_id = data.get("lastEntryId")
        if last_entry_id is None:
            last_entry_id = max(
                (int(row.get(ENTRY_ID_FIELD, 0)) for row in contents),
                default=0,
            )

        return cls(
            name=data["tableName"],
            contents=contents,
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
            last_entry_id=int(last_entry_id),
        )
