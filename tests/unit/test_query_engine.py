"""Unit tests for the query engine."""

from __future__ import annotations

import re

import pytest

from doggo_db.adapters.inbound import parse_filter
from doggo_db.domain.services import MISSING, QueryEngine, loose_equals, matches, resolve_path
from doggo_db.domain.services.query_engine import as_text, includes


def _match(row: dict, filters: dict) -> bool:
    return matches(row, parse_filter(filters))


@pytest.mark.unit
class TestResolvePath:
    """Tests for field lookup."""

    def test_top_level(self) -> None:
        assert resolve_path({"a": 1}, "a") == 1

    def test_nested(self) -> None:
        assert resolve_path({"a": {"b": {"c": 3}}}, "a.b.c") == 3

    def test_missing_segment(self) -> None:
        assert resolve_path({"a": {"b": 1}}, "a.x") is MISSING

    def test_non_mapping_intermediate(self) -> None:
        assert resolve_path({"a": 5}, "a.b") is MISSING

    def test_literal_dotted_key_wins(self) -> None:
        assert resolve_path({"a.b": 1, "a": {"b": 2}}, "a.b") == 1

    def test_none_value_is_present(self) -> None:
        assert resolve_path({"a": None}, "a") is None


@pytest.mark.unit
class TestLooseEquals:
    """Tests for loose equality."""

    @pytest.mark.parametrize(
        "left,right",
        [
            (5, 5),
            (5, "5"),
            ("5", 5),
            (5, 5.0),
            ("dog", "dog"),
            (True, 1),
            (None, None),
            (MISSING, None),
            ([1, 2], [1, 2]),
        ],
    )
    def test_equal(self, left: object, right: object) -> None:
        assert loose_equals(left, right)

    @pytest.mark.parametrize(
        "left,right",
        [
            (5, 6),
            ("5", "5.0"),
            ("dog", "cat"),
            (None, 0),
            (MISSING, 0),
            ("abc", 0),
        ],
    )
    def test_not_equal(self, left: object, right: object) -> None:
        assert not loose_equals(left, right)


@pytest.mark.unit
class TestTextHelpers:
    """Tests for textual conversion and containment."""

    def test_as_text(self) -> None:
        assert as_text("x") == "x"
        assert as_text(True) == "true"
        assert as_text(None) == "null"
        assert as_text(5.0) == "5"
        assert as_text(["a", 1]) == "a,1"

    def test_includes_list_is_strict(self) -> None:
        assert includes(["a", "b"], "a")
        assert not includes([5], "5")
        assert not includes([1], True)

    def test_includes_substring(self) -> None:
        assert includes("golden retriever", "retr")

    def test_includes_other_types(self) -> None:
        assert not includes(5, 5)


@pytest.mark.unit
class TestMatches:
    """Tests for filter evaluation."""

    def test_empty_filter_matches(self) -> None:
        assert _match({"a": 1}, {})

    def test_equality(self) -> None:
        row = {"species": "dog", "age": 5}

        assert _match(row, {"species": "dog"})
        assert _match(row, {"age": "5"})
        assert not _match(row, {"species": "cat"})

    def test_all_clauses_must_match(self) -> None:
        row = {"species": "dog", "age": 5}

        assert _match(row, {"species": "dog", "age": 5})
        assert not _match(row, {"species": "dog", "age": 6})

    def test_missing_field_never_matches(self) -> None:
        assert not _match({"a": 1}, {"b": None})

    def test_nested_field(self) -> None:
        row = {"owner": {"name": "Ann"}}

        assert _match(row, {"owner.name": "Ann"})
        assert not _match(row, {"owner.age": 30})

    def test_pattern(self) -> None:
        row = {"name": "Rex", "age": 12}

        assert _match(row, {"name": re.compile(r"^R")})
        assert _match(row, {"age": re.compile(r"^1\d$")})
        assert not _match(row, {"name": re.compile(r"^T")})

    def test_or(self) -> None:
        row = {"species": "dog", "name": "Rex"}

        assert _match(row, {"$or": {"species": "cat", "name": "Rex"}})
        assert not _match(row, {"$or": {"species": "cat", "name": "Tom"}})

    def test_or_literal_field(self) -> None:
        assert _match({"$or": 1}, {"$or": 1})

    def test_in(self) -> None:
        assert _match({"age": 5}, {"$in": {"age": [5, 7]}})
        assert not _match({"age": 10}, {"$in": {"age": [5, 7]}})

    def test_in_is_strict(self) -> None:
        assert not _match({"age": 5}, {"$in": {"age": ["5"]}})
        assert not _match({"good": True}, {"$in": {"good": [1]}})
        assert _match({"age": 5}, {"$in": {"age": [5.0]}})

    def test_not_in_is_strict(self) -> None:
        assert _match({"age": 5}, {"$notIn": {"age": ["5"]}})

    def test_any_behaves_like_in(self) -> None:
        assert _match({"age": 7}, {"$any": {"age": [5, 7]}})
        assert not _match({"age": 8}, {"$any": {"age": [5, 7]}})

    def test_not_in(self) -> None:
        assert _match({"age": 10}, {"$notIn": {"age": [5, 7]}})
        assert not _match({"age": 5}, {"$notIn": {"age": [5, 7]}})

    def test_not(self) -> None:
        assert _match({"species": "cat"}, {"$not": {"species": "dog"}})
        assert not _match({"species": "dog"}, {"$not": {"species": "dog"}})

    def test_not_allows_missing_field(self) -> None:
        assert _match({}, {"$not": {"species": "dog"}})
        assert not _match({}, {"$not": {"species": None}})

    def test_includes(self) -> None:
        assert _match({"tags": ["a", "b"]}, {"$includes": {"tags": "a"}})
        assert not _match({"tags": ["a", "b"]}, {"$includes": {"tags": "z"}})
        assert _match({"bio": "good boy"}, {"$includes": {"bio": "boy"}})

    def test_not_includes(self) -> None:
        assert _match({"tags": ["a", "b"]}, {"$notIncludes": {"tags": "z"}})
        assert not _match({"tags": ["a", "b"]}, {"$notIncludes": {"tags": "a"}})

    @pytest.mark.parametrize(
        "operator,operand",
        [
            ("$in", [1]),
            ("$any", [1]),
            ("$notIn", [1]),
            ("$includes", 1),
            ("$notIncludes", 1),
        ],
    )
    def test_missing_field_fails_operators(self, operator: str, operand: object) -> None:
        assert not _match({}, {operator: {"x": operand}})


@pytest.mark.unit
class TestQueryEngineSelect:
    """Tests for row selection."""

    def test_select_yields_positions_in_order(self) -> None:
        rows = [{"a": 1}, {"a": 2}, {"a": 1}]

        selected = list(QueryEngine().select(rows, parse_filter({"a": 1})))

        assert selected == [(0, rows[0]), (2, rows[2])]

    def test_select_returns_live_rows(self) -> None:
        rows = [{"a": 1}]

        (_, row), = QueryEngine().select(rows, [])

        assert row is rows[0]
