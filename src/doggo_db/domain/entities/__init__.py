"""Domain entities for the document store.

Exports:
    - Table: Named ordered collection of rows
    - DatabaseState: All tables of a database, the unit of persistence
"""

from doggo_db.domain.entities.database import DatabaseState
from doggo_db.domain.entities.table import Table

__all__ = [
    "DatabaseState",
    "Table",
]
