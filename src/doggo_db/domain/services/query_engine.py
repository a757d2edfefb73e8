"""Query engine: evaluates parsed filter clauses against rows.

Evaluation is a pure function of (row, clauses). All clauses must match
(implicit AND); evaluation stops at the first clause that fails.

Comparison rules:
    - Loose equality: ``==`` plus number/string coercion (``5`` equals
      ``"5"``), and an absent field equals ``None``.
    - Pattern clauses search the textual form of the field value.
    - Membership (``$in``, ``$notIn``, ``$includes``) is strict: ``5`` is
      not a member of ``["5"]``.
    - A literal field that is absent never matches. Field operators also
      fail on an absent field, except ``$not``.
    - Dot-paths (``"addr.city"``) walk nested mappings. A missing segment
      resolves to absent rather than raising.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Iterator, Sequence

from doggo_db.domain.value_objects import (
    Clause,
    Equals,
    FieldOp,
    FieldOperator,
    Or,
    Pattern,
    Row,
)


class _Missing:
    """Sentinel for a field that does not exist on a row."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def resolve_path(row: Row, path: str) -> Any:
    """Resolve a field name or dot-path on a row.

    A key that literally contains dots wins over path traversal.

    Returns:
        The value, or MISSING if any segment is absent.
    """
    if path in row:
        return row[path]

    current: Any = row
    for segment in path.split("."):
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        else:
            return MISSING
    return current


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return None
    return None


def loose_equals(left: Any, right: Any) -> bool:
    """Loose equality between a field value and a comparison value."""
    if left is MISSING or left is None or right is MISSING or right is None:
        return left in (None, MISSING) and right in (None, MISSING)

    if left == right:
        return True

    if isinstance(left, str) != isinstance(right, str):
        left_number = _to_number(left)
        right_number = _to_number(right)
        if left_number is not None and right_number is not None:
            return left_number == right_number

    return False


def as_text(value: Any) -> str:
    """Textual form of a value, as used by pattern clauses."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(as_text(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True)
    return str(value)


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without coercion; booleans never equal numbers."""
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def includes(container: Any, item: Any) -> bool:
    """Array membership or substring containment."""
    if isinstance(container, (list, tuple)):
        return any(strict_equals(element, item) for element in container)
    if isinstance(container, str):
        return as_text(item) in container
    return False


def _is_member(value: Any, candidates: Iterable[Any]) -> bool:
    return any(strict_equals(value, candidate) for candidate in candidates)


class QueryEngine:
    """Evaluates filter clauses against rows.

    Usage:
        engine = QueryEngine()
        clauses = FilterParser().parse({"species": "dog"})
        dogs = [row for _, row in engine.select(rows, clauses)]
    """

    def matches(self, row: Row, clauses: Sequence[Clause]) -> bool:
        """Check if a row satisfies every clause.

        An empty clause list matches every row.
        """
        return all(self.evaluate(row, clause) for clause in clauses)

    def select(
        self, rows: Iterable[Row], clauses: Sequence[Clause]
    ) -> Iterator[tuple[int, Row]]:
        """Yield (position, row) for each matching row in scan order."""
        for position, row in enumerate(rows):
            if self.matches(row, clauses):
                yield position, row

    def evaluate(self, row: Row, clause: Clause) -> bool:
        """Evaluate a single clause against a row."""
        if isinstance(clause, Equals):
            return self._evaluate_equals(row, clause)
        elif isinstance(clause, Pattern):
            return self._evaluate_pattern(row, clause)
        elif isinstance(clause, Or):
            return any(self.evaluate(row, inner) for inner in clause.clauses)
        elif isinstance(clause, FieldOp):
            return self._evaluate_field_op(row, clause)
        return False

    def _evaluate_equals(self, row: Row, clause: Equals) -> bool:
        value = resolve_path(row, clause.field)
        if value is MISSING:
            return False
        return loose_equals(value, clause.value)

    def _evaluate_pattern(self, row: Row, clause: Pattern) -> bool:
        value = resolve_path(row, clause.field)
        if value is MISSING:
            return False
        return clause.regex.search(as_text(value)) is not None

    def _evaluate_field_op(self, row: Row, clause: FieldOp) -> bool:
        value = resolve_path(row, clause.field)
        if value is MISSING and not clause.operator.accepts_missing():
            return False

        op = clause.operator
        if op == FieldOperator.NOT:
            return not loose_equals(value, clause.value)
        elif op in (FieldOperator.IN, FieldOperator.ANY):
            return _is_member(value, clause.value)
        elif op == FieldOperator.NOT_IN:
            return not _is_member(value, clause.value)
        elif op == FieldOperator.INCLUDES:
            return includes(value, clause.value)
        elif op == FieldOperator.NOT_INCLUDES:
            return not includes(value, clause.value)
        return False


def matches(row: Row, clauses: Sequence[Clause]) -> bool:
    """Module-level shorthand for QueryEngine().matches()."""
    return _default_engine.matches(row, clauses)


_default_engine = QueryEngine()
