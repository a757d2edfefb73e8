"""Filter parser.

Converts the user-facing filter mapping into a list of typed clauses that
the query engine evaluates. Parsing happens once per query, so malformed
filters are rejected before any row is scanned.

Supported filter keys:
    - ``"field"`` or ``"a.b.c"``: equality, or a pattern match when the value
      is a compiled ``re.Pattern``
    - ``"$or": {field: value, ...}``: any listed comparison matches
    - ``"$not" | "$in" | "$any" | "$notIn" | "$includes" | "$notIncludes"``:
      ``{field: comparisonValue}`` with exactly one entry

Example:
    >>> parser = FilterParser()
    >>> parser.parse({"species": "dog", "$in": {"age": [5, 7]}})
    [Equals(field='species', value='dog'), FieldOp(operator=<FieldOperator.IN: '$in'>, field='age', value=[5, 7])]
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from doggo_db.domain.errors import InvalidIterableOperand, UnsupportedOperation
from doggo_db.domain.value_objects import (
    OPERATOR_PREFIX,
    OR_OPERATOR,
    Clause,
    Equals,
    FieldOp,
    FieldOperator,
    Or,
    Pattern,
)

_FIELD_OPERATORS: dict[str, FieldOperator] = {op.value: op for op in FieldOperator}


def _check_field_name(name: Any) -> None:
    if not isinstance(name, str):
        raise UnsupportedOperation(f"Filter keys must be strings, got {name!r}")


class FilterParser:
    """Parser that converts filter mappings to clause lists."""

    def parse(self, filters: Mapping[str, Any] | None) -> list[Clause]:
        """Parse a filter mapping.

        Args:
            filters: The filter mapping. None or empty matches every row.

        Returns:
            Clauses to be ANDed, in the order of the mapping's keys.

        Raises:
            UnsupportedOperation: If an operator key is unknown or malformed,
                or the filter is not a mapping.
            InvalidIterableOperand: If $in / $any / $notIn is not given an array.
        """
        if not filters:
            return []
        if not isinstance(filters, Mapping):
            raise UnsupportedOperation(
                f"Filter must be a mapping, got {type(filters).__name__}"
            )

        return [self._parse_entry(key, value) for key, value in filters.items()]

    def _parse_entry(self, key: str, value: Any) -> Clause:
        _check_field_name(key)
        if key == OR_OPERATOR and isinstance(value, Mapping):
            return Or(
                clauses=tuple(
                    self._parse_comparison(field, expected)
                    for field, expected in value.items()
                )
            )

        operator = _FIELD_OPERATORS.get(key)
        if operator is not None:
            return self._parse_field_op(operator, value)

        if key.startswith(OPERATOR_PREFIX) and key != OR_OPERATOR:
            raise UnsupportedOperation(f"Unsupported operation: {key}")

        return self._parse_comparison(key, value)

    def _parse_comparison(self, field: str, expected: Any) -> Equals | Pattern:
        _check_field_name(field)
        if isinstance(expected, re.Pattern):
            return Pattern(field=field, regex=expected)
        return Equals(field=field, value=expected)

    def _parse_field_op(self, operator: FieldOperator, operand: Any) -> FieldOp:
        if not isinstance(operand, Mapping) or len(operand) != 1:
            raise UnsupportedOperation(
                f"{operator.value} expects a single {{field: value}} entry, got {operand!r}"
            )

        field, value = next(iter(operand.items()))
        _check_field_name(field)
        if operator.requires_iterable() and not isinstance(value, (list, tuple)):
            raise InvalidIterableOperand(
                f"{operator.value} on '{field}' expects an array, got {type(value).__name__}"
            )

        return FieldOp(operator=operator, field=field, value=value)


def parse_filter(filters: Mapping[str, Any] | None) -> list[Clause]:
    """Module-level shorthand for FilterParser().parse()."""
    return FilterParser().parse(filters)
