"""Database entity: the whole in-memory tree persisted as one blob."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from doggo_db.domain.entities.table import Table
from doggo_db.domain.value_objects import utc_now


@dataclass
class DatabaseState:
    """Tables of one database plus its timestamps.

    This is the unit of persistence: every durable save serializes the
    entire state, and aborting a transaction replaces it wholesale.
    """

    tables: dict[str, Table] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def touch(self) -> None:
        self.updated_at = utc_now()

    def has_table(self, name: str) -> bool:
        return name in self.tables

    def add_table(self, name: str) -> Table:
        """Create and register an empty table."""
        table = Table(name=name)
        self.tables[name] = table
        return table

    def remove_table(self, name: str) -> Table | None:
        """Remove a table. Returns None if it does not exist."""
        return self.tables.pop(name, None)

    def total_rows(self) -> int:
        return sum(len(table) for table in self.tables.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored database layout."""
        return {
            "tables": {name: table.to_dict() for name, table in self.tables.items()},
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DatabaseState:
        """Deserialize from the stored database layout."""
        tables = {
            name: Table.from_dict(table_data)
            for name, table_data in data.get("tables", {}).items()
        }
        return cls(
            tables=tables,
            created_at=datetime.fromisoformat(data["createdAt"]),
            updated_at=datetime.fromisoformat(data["updatedAt"]),
        )
