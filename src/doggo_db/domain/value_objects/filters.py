"""Filter clauses: the parsed form of a query filter.

A filter is a list of clauses that must all match (implicit AND). Each
clause is one of the tagged variants below. Clauses are produced once by
the filter parser and then evaluated by the query engine without further
inspection of the user's mapping.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class FieldOperator(Enum):
    """Operators applied to one named field: ``{"$op": {field: value}}``."""

    NOT = "$not"
    IN = "$in"
    ANY = "$any"
    NOT_IN = "$notIn"
    INCLUDES = "$includes"
    NOT_INCLUDES = "$notIncludes"

    def requires_iterable(self) -> bool:
        """Check if the comparison value must be array-shaped."""
        return self in (FieldOperator.IN, FieldOperator.ANY, FieldOperator.NOT_IN)

    def accepts_missing(self) -> bool:
        """Check if the operator is evaluated when the field is absent."""
        return self == FieldOperator.NOT


OR_OPERATOR = "$or"
"""Conditional operator key combining field comparisons with OR semantics."""

OPERATOR_PREFIX = "$"


@dataclass(frozen=True)
class Equals:
    """Field value loosely equals ``value``."""

    field: str
    value: Any

    def __str__(self) -> str:
        return f"{self.field} == {self.value!r}"


@dataclass(frozen=True)
class Pattern:
    """Field value, as text, is searched by ``regex``."""

    field: str
    regex: re.Pattern[str]

    def __str__(self) -> str:
        return f"{self.field} ~ /{self.regex.pattern}/"


@dataclass(frozen=True)
class Or:
    """At least one of ``clauses`` matches."""

    clauses: tuple[Equals | Pattern, ...]

    def __str__(self) -> str:
        return "(" + " OR ".join(str(c) for c in self.clauses) + ")"


@dataclass(frozen=True)
class FieldOp:
    """A field operator applied to one field."""

    operator: FieldOperator
    field: str
    value: Any

    def __str__(self) -> str:
        return f"{self.operator.value}({self.field}, {self.value!r})"


Clause = Union[Equals, Pattern, Or, FieldOp]
