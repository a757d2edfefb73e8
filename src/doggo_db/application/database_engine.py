"""Database Engine - unified entry point for a document database.

This module provides the DatabaseEngine class, which owns the in-memory
tree of one named database, mediates every CRUD and query operation, and
persists the whole tree through a storage backend.

Usage:
    from doggo_db.application import DatabaseEngine

    db = DatabaseEngine("shelter")
    db.table("pets").add({"name": "Rex", "species": "dog"})
    dogs = db.find({"species": "dog"})

    with db.transaction():
        db.add({"name": "Tom", "species": "cat"})
        db.add({"name": "Kit", "species": "cat"})

Persistence:
    Every mutating operation calls save(), which serializes the database,
    writes it through the backend and notifies the change listener. While a
    transaction is open save() is a no-op; commit saves, abort reloads the
    last durable snapshot.
"""

from __future__ import annotations

import copy
import time
from collections.abc import Mapping
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Callable, Iterator

from doggo_db.adapters.inbound.filter_parser import FilterParser
from doggo_db.adapters.outbound.json_codec import JsonCodec
from doggo_db.domain.entities import DatabaseState, Table
from doggo_db.domain.errors import (
    DatabaseAlreadyExists,
    NoActiveTable,
    NoDatabaseName,
    NoDataProvided,
    NotAValidObject,
    NoTableName,
    PersistenceError,
    TableAlreadyExists,
)
from doggo_db.domain.services import QueryEngine, SnapshotTransactionManager
from doggo_db.domain.value_objects import Clause, Row, invalid_field, strip_reserved
from doggo_db.infrastructure.container import get_container
from doggo_db.infrastructure.logging import get_logger
from doggo_db.infrastructure.metrics import MetricsRegistry, get_metrics
from doggo_db.infrastructure.tracing import trace_span
from doggo_db.ports.inbound.transaction_manager import TransactionManager
from doggo_db.ports.outbound.storage_backend import StorageBackend

ChangeListener = Callable[[DatabaseState], None]

logger = get_logger(__name__)


class DatabaseEngine:
    """Engine for one named database.

    The engine keeps an "active table" cursor. table() and create() set it;
    row-level operations (get, add, find, find_and_update, update_at,
    delete) act on it. Mutating operations return the engine so calls can
    be chained.

    Thread Safety:
        None. The engine is single-threaded and synchronous;
        share it across threads only with external locking.
    """

    def __init__(
        self,
        name: str,
        backend: StorageBackend | None = None,
        listener: ChangeListener | None = None,
        metrics: MetricsRegistry | None = None,
        transaction_manager: TransactionManager | None = None,
    ) -> None:
        """Open a database, creating and persisting it if absent.

        Args:
            name: Database name, used as the storage key.
            backend: Storage backend. Resolved from the DI container if None.
            listener: Optional callback invoked with a snapshot after each
                durable save.
            metrics: Metrics registry (global registry if None).
            transaction_manager: Transaction state holder (fresh
                SnapshotTransactionManager if None).

        Raises:
            NoDatabaseName: If name is empty.
            PersistenceError: If the stored blob cannot be decoded.
        """
        if not name:
            raise NoDatabaseName()

        self._name = name
        self._backend = backend or get_container().resolve(StorageBackend)
        self._listener = listener
        self._metrics = metrics or get_metrics()
        self._txn_manager = transaction_manager or SnapshotTransactionManager()

        self._codec = JsonCodec()
        self._parser = FilterParser()
        self._query_engine = QueryEngine()

        self._active_table: Table | None = None
        self._state = self._load(reason="open")

    # ------------------------------------------------------------------
    # Class helpers
    # ------------------------------------------------------------------

    @classmethod
    def exists(cls, name: str, backend: StorageBackend | None = None) -> bool:
        """Check if a database with this name is stored."""
        if not name:
            raise NoDatabaseName()
        backend = backend or get_container().resolve(StorageBackend)
        return backend.exists(name)

    @classmethod
    def create_database(
        cls,
        name: str,
        backend: StorageBackend | None = None,
        listener: ChangeListener | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> DatabaseEngine:
        """Explicitly create a new database.

        Raises:
            NoDatabaseName: If name is empty.
            DatabaseAlreadyExists: If a database with this name is stored.
        """
        backend = backend or get_container().resolve(StorageBackend)
        if cls.exists(name, backend):
            raise DatabaseAlreadyExists(f"A Database named '{name}' already exists.")
        return cls(name, backend=backend, listener=listener, metrics=metrics)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def database(self) -> DatabaseState:
        """The live in-memory database."""
        return self._state

    @property
    def active_table(self) -> Table | None:
        return self._active_table

    @property
    def listener(self) -> ChangeListener | None:
        return self._listener

    @listener.setter
    def listener(self, listener: ChangeListener | None) -> None:
        self._listener = listener

    @property
    def in_transaction(self) -> bool:
        return self._txn_manager.is_active()

    # ------------------------------------------------------------------
    # Table operations
    # ------------------------------------------------------------------

    def table(self, name: str) -> DatabaseEngine:
        """Select a table, creating it if it does not exist.

        Raises:
            NoTableName: If name is empty.
        """
        if not name:
            raise NoTableName()

        existing = self._state.tables.get(name)
        if existing is None:
            return self.create(name)

        self._active_table = existing
        return self

    def create(self, name: str) -> DatabaseEngine:
        """Create an empty table, select it and persist.

        Raises:
            NoTableName: If name is empty.
            TableAlreadyExists: If the table exists.
        """
        if not name:
            raise NoTableName()
        if self._state.has_table(name):
            raise TableAlreadyExists(f"A Table named '{name}' already exists.")

        self._active_table = self._state.add_table(name)
        self._metrics.operations_total.labels(operation="create").inc()
        logger.info("table_created", database=self._name, table=name)

        return self.save()

    def drop(self, name: str | None = None) -> DatabaseEngine:
        """Drop a table, or the active table if name is omitted.

        Clears the active cursor if it pointed at the dropped table. Does
        nothing if the table does not exist.
        """
        target = name
        if target is None and self._active_table is not None:
            target = self._active_table.name

        if self._active_table is not None and self._active_table.name == target:
            self._active_table = None

        if target is None or self._state.remove_table(target) is None:
            return self

        self._metrics.operations_total.labels(operation="drop").inc()
        logger.info("table_dropped", database=self._name, table=target)

        return self.save()

    def list(self) -> Mapping[str, Table]:
        """Return a read-only view of all tables, keyed by name."""
        return MappingProxyType(self._state.tables)

    # ------------------------------------------------------------------
    # Row operations
    # ------------------------------------------------------------------

    def get(self) -> list[Row]:
        """Return every row of the active table.

        Raises:
            NoActiveTable: If no table is selected.
        """
        return self._require_active_table().contents

    def add(self, row: Mapping[str, Any] | None) -> DatabaseEngine:
        """Append a row to the active table with a fresh entryId.

        Raises:
            NoDataProvided: If row is None or empty.
            NoActiveTable: If no table is selected.
            NotAValidObject: If row is not a mapping, or holds a key or
                value JSON cannot store unchanged.
        """
        if not row:
            raise NoDataProvided()
        table = self._require_active_table()
        payload = self._validate_payload(row, "Data provided")

        stored = table.add_row(payload)

        self._metrics.operations_total.labels(operation="add").inc()
        self._metrics.rows_inserted_total.labels(table=table.name).inc()
        logger.debug("row_added", table=table.name, entry_id=stored["entryId"])

        return self.save()

    def find(
        self,
        filters: Mapping[str, Any] | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Row]:
        """Return rows of the active table matching filters.

        offset and limit select a window of row positions in scan order
        (``contents[offset:offset + limit]``); only rows inside the window
        are evaluated. Without an active table the result is empty.

        Raises:
            ValueError: If offset or limit is negative.
            UnsupportedOperation, InvalidIterableOperand: If filters is malformed.
        """
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        clauses = self._parser.parse(filters)
        self._metrics.operations_total.labels(operation="find").inc()

        if self._active_table is None:
            return []

        stop = None if limit is None else offset + limit
        window = self._active_table.contents[offset:stop]
        self._metrics.rows_scanned_total.inc(len(window))

        return [row for _, row in self._query_engine.select(window, clauses)]

    def find_and_update(
        self,
        filters: Mapping[str, Any] | None,
        updates: Mapping[str, Any],
        only_one: bool = True,
    ) -> bool:
        """Merge updates into matching rows of the active table.

        Reserved fields are stripped from updates. Stops after the first
        match when only_one is True.

        Returns:
            True if any row matched.

        Raises:
            NoActiveTable: If no table is selected.
            NoDataProvided: If updates is empty once reserved fields are removed.
            NotAValidObject: If updates hold a key or value JSON cannot store.
        """
        table = self._require_active_table()
        clean = self._clean_updates(updates)
        clauses = self._parser.parse(filters)

        self._metrics.operations_total.labels(operation="find_and_update").inc()

        positions = self._match_positions(table, clauses, only_one)
        for index in positions:
            table.update_row(index, clean)
        updated = len(positions)

        if not updated:
            return False

        self._metrics.rows_updated_total.labels(table=table.name).inc(updated)
        logger.debug("rows_updated", table=table.name, count=updated)
        self.save()
        return True

    def update_at(self, index: int, updates: Mapping[str, Any]) -> bool:
        """Merge updates into the row at a position of the active table.

        Returns:
            False if index is out of range.

        Raises:
            NoActiveTable: If no table is selected.
            NoDataProvided: If updates is empty once reserved fields are removed.
            NotAValidObject: If updates hold a key or value JSON cannot store.
        """
        table = self._require_active_table()
        clean = self._clean_updates(updates)

        self._metrics.operations_total.labels(operation="update_at").inc()
        if not table.update_row(index, clean):
            return False

        self._metrics.rows_updated_total.labels(table=table.name).inc()
        self.save()
        return True

    def delete(self, filters: Mapping[str, Any] | None, only_one: bool = True) -> bool:
        """Remove matching rows from the active table.

        Stops after the first match when only_one is True. Remaining rows
        keep their order.

        Returns:
            True if any row matched.

        Raises:
            NoActiveTable: If no table is selected.
        """
        table = self._require_active_table()
        clauses = self._parser.parse(filters)

        self._metrics.operations_total.labels(operation="delete").inc()

        doomed = self._match_positions(table, clauses, only_one)

        if not doomed:
            return False

        # Highest index first so earlier positions stay valid
        for index in reversed(doomed):
            table.remove_row(index)

        self._metrics.rows_deleted_total.labels(table=table.name).inc(len(doomed))
        logger.debug("rows_deleted", table=table.name, count=len(doomed))
        self.save()
        return True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> DatabaseEngine:
        """Persist the whole database and notify the change listener.

        Does nothing while a transaction is open.

        Raises:
            PersistenceError: If the database cannot be serialized or the
                backend rejects the write.
        """
        if self._txn_manager.is_active():
            self._metrics.saves_total.labels(outcome="deferred").inc()
            logger.debug("save_deferred", database=self._name)
            return self

        start = time.perf_counter()
        with trace_span("doggo_db.save", {"database": self._name}):
            self._state.touch()
            blob = self._codec.encode(self._state)
            if not self._backend.write(self._name, blob):
                self._metrics.saves_total.labels(outcome="failed").inc()
                raise PersistenceError(f"Database '{self._name}' could not be written.")

        self._metrics.saves_total.labels(outcome="written").inc()
        self._metrics.bytes_written_total.inc(len(blob))
        self._metrics.save_latency_seconds.observe(time.perf_counter() - start)
        logger.debug("database_saved", database=self._name, bytes=len(blob))

        if self._listener is not None:
            self._listener(copy.deepcopy(self._state))

        return self

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def start_transaction(self) -> DatabaseEngine:
        """Open a transaction; saves are deferred until commit.

        Raises:
            TransactionInProgress: If a transaction is already open.
        """
        self._txn_manager.begin()
        self._metrics.transactions_active.inc()
        logger.debug("transaction_started", database=self._name)
        return self

    def commit_transaction(self) -> DatabaseEngine:
        """Close the transaction and persist accumulated changes.

        Raises:
            NoActiveTransaction: If no transaction is open.
        """
        self._txn_manager.commit()
        self._metrics.transactions_active.dec()
        self._metrics.transactions_total.labels(status="commit").inc()
        logger.debug("transaction_committed", database=self._name)
        return self.save()

    def abort_transaction(self) -> DatabaseEngine:
        """Close the transaction and reload the last durable snapshot.

        Every in-memory change since the last durable save is discarded,
        including changes made before the transaction started.

        Raises:
            NoActiveTransaction: If no transaction is open.
        """
        self._txn_manager.abort()
        self._metrics.transactions_active.dec()
        self._metrics.transactions_total.labels(status="abort").inc()

        active_name = self._active_table.name if self._active_table else None
        self._state = self._load(reason="abort")
        self._active_table = self._state.tables.get(active_name) if active_name else None

        logger.info("transaction_aborted", database=self._name)
        return self

    @contextmanager
    def transaction(self) -> Iterator[DatabaseEngine]:
        """Run a block inside a transaction.

        Commits on normal exit; aborts and re-raises on exception.
        """
        self.start_transaction()
        try:
            yield self
        except BaseException:
            self.abort_transaction()
            raise
        self.commit_transaction()

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table and transaction statistics.
        """
        txn_stats = self._txn_manager.get_stats()
        return {
            "name": self._name,
            "tables": len(self._state.tables),
            "rows": self._state.total_rows(),
            "active_table": self._active_table.name if self._active_table else None,
            "transactions": {
                "active": txn_stats.active,
                "committed": txn_stats.committed_total,
                "aborted": txn_stats.aborted_total,
            },
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load(self, reason: str) -> DatabaseState:
        """Load the stored database, initializing and persisting it if absent."""
        with trace_span("doggo_db.load", {"database": self._name, "reason": reason}):
            blob = self._backend.read(self._name)
            self._metrics.loads_total.labels(reason=reason).inc()

            if blob is None:
                self._state = DatabaseState()
                logger.info("database_initialized", database=self._name)
                self.save()
                return self._state

            state = self._codec.decode(blob)

        logger.info(
            "database_loaded",
            database=self._name,
            reason=reason,
            tables=len(state.tables),
        )
        return state

    def _require_active_table(self) -> Table:
        if self._active_table is None:
            raise NoActiveTable()
        return self._active_table

    def _validate_payload(self, payload: Any, what: str) -> dict[str, Any]:
        if not isinstance(payload, Mapping):
            raise NotAValidObject(
                f"{what} is not a valid object: {type(payload).__name__}"
            )
        payload = dict(payload)
        bad = invalid_field(payload)
        if bad is not None:
            raise NotAValidObject(f"{what} holds a value that cannot be stored: {bad}")
        return payload

    def _match_positions(
        self, table: Table, clauses: list[Clause], only_one: bool
    ) -> list[int]:
        """Positions of matching rows, counting the rows actually evaluated."""
        positions: list[int] = []
        for index, _ in self._query_engine.select(table.contents, clauses):
            positions.append(index)
            if only_one:
                break

        scanned = positions[-1] + 1 if only_one and positions else len(table)
        self._metrics.rows_scanned_total.inc(scanned)
        return positions

    def _clean_updates(self, updates: Mapping[str, Any] | None) -> dict[str, Any]:
        if not updates:
            raise NoDataProvided()
        clean = strip_reserved(self._validate_payload(updates, "Updates"))
        if not clean:
            raise NoDataProvided("Updates contain only reserved fields.")
        return clean

    def __repr__(self) -> str:
        active = self._active_table.name if self._active_table else None
        return f"DatabaseEngine(name={self._name!r}, active_table={active!r})"
