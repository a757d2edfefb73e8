"""Unit tests for Table and DatabaseState entities."""

from __future__ import annotations

import pytest

from doggo_db.domain.entities import DatabaseState, Table


@pytest.mark.unit
class TestTable:
    """Tests for the Table entity."""

    def test_add_row_assigns_entry_id_first(self) -> None:
        table = Table("pets")

        row = table.add_row({"name": "Rex"})

        assert row == {"entryId": 1, "name": "Rex"}
        assert list(row) == ["entryId", "name"]
        assert len(table) == 1

    def test_add_row_ignores_client_entry_id(self) -> None:
        table = Table("pets")

        row = table.add_row({"entryId": 999, "name": "Rex"})

        assert row["entryId"] == 1

    def test_add_row_stores_a_copy(self) -> None:
        table = Table("pets")
        payload = {"tags": ["a"]}

        table.add_row(payload)
        payload["tags"].append("b")

        assert table.contents[0]["tags"] == ["a"]

    def test_entry_ids_not_reused_after_remove(self) -> None:
        table = Table("pets")
        table.add_row({"n": 1})
        table.add_row({"n": 2})

        table.remove_row(1)
        row = table.add_row({"n": 3})

        assert row["entryId"] == 3
        assert table.last_entry_id == 3

    def test_update_row_merges(self) -> None:
        table = Table("pets")
        table.add_row({"name": "Rex", "age": 3})

        assert table.update_row(0, {"age": 4, "entryId": 50})

        assert table.contents[0] == {"entryId": 1, "name": "Rex", "age": 4}

    def test_update_row_out_of_range(self) -> None:
        table = Table("pets")
        table.add_row({"a": 1})

        assert not table.update_row(1, {"a": 2})
        assert not table.update_row(-1, {"a": 2})
        assert table.contents[0]["a"] == 1

    def test_mutations_touch_updated_at(self) -> None:
        table = Table("pets")
        before = table.updated_at

        table.add_row({"a": 1})

        assert table.updated_at >= before

    def test_dict_round_trip(self) -> None:
        table = Table("pets")
        table.add_row({"name": "Rex"})

        restored = Table.from_dict(table.to_dict())

        assert restored == table

    def test_from_dict_derives_counter(self) -> None:
        data = Table("pets").to_dict()
        data.pop("lastEntryId")
        data["contents"] = [{"entryId": 4}, {"entryId": 9}]

        table = Table.from_dict(data)

        assert table.last_entry_id == 9
        assert table.add_row({"a": 1})["entryId"] == 10


@pytest.mark.unit
class TestDatabaseState:
    """Tests for the DatabaseState entity."""

    def test_add_and_remove_table(self) -> None:
        state = DatabaseState()

        table = state.add_table("pets")

        assert state.has_table("pets")
        assert state.tables["pets"] is table
        assert state.remove_table("pets") is table
        assert state.remove_table("pets") is None

    def test_total_rows(self) -> None:
        state = DatabaseState()
        state.add_table("a").add_row({"x": 1})
        state.add_table("b").add_row({"x": 2})

        assert state.total_rows() == 2

    def test_dict_layout(self) -> None:
        state = DatabaseState()
        state.add_table("pets")

        data = state.to_dict()

        assert list(data) == ["tables", "createdAt", "updatedAt"]
        assert list(data["tables"]["pets"]) == [
            "tableName",
            "createdAt",
            "updatedAt",
            "lastEntryId",
            "contents",
        ]

    def test_dict_round_trip(self) -> None:
        state = DatabaseState()
        state.add_table("pets").add_row({"name": "Rex"})

        assert DatabaseState.from_dict(state.to_dict()) == state
