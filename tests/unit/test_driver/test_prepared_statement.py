"""Unit tests for PreparedStatement against an in-memory SQLite database."""

import sqlite3
from typing import Any

import pytest

from flexbind import ZERO_BUT_TRUE, Connection, FlexBindConfig, ParameterScheme
from flexbind.exceptions import MalformedIdentifierError, ParameterShapeError, ParameterStyleMismatchError


def test_named_placeholder_reused(connection: Connection) -> None:
    statement = connection.prepare("SELECT :x AS a, :x AS b")

    statement.execute(x=5)

    assert statement.sql == "SELECT ? AS a, ? AS b"
    assert statement.getrow_tuple() == (5, 5)


def test_numeric_placeholder_reused(connection: Connection) -> None:
    statement = connection.prepare("SELECT ?1 AS a, ?2 AS b, ?1 AS c")

    statement.execute([10, 20])

    assert statement.scheme is ParameterScheme.NUMERIC
    assert statement.param_count == 3
    assert statement.getrow_tuple() == (10, 20, 10)


def test_colon_numbers_are_numeric(connection: Connection) -> None:
    statement = connection.prepare("SELECT :2 AS second, :1 AS first")

    statement.execute("one", "two")

    assert statement.getrow_dict() == {"second": "two", "first": "one"}


def test_at_sign_identifier_keeps_sigil(connection: Connection) -> None:
    statement = connection.prepare("SELECT @v AS value")

    statement.execute({"@v": 3})

    assert statement.scheme is ParameterScheme.NAMED
    assert statement.getrow_tuple() == (3,)


def test_plain_positional_statement(connection: Connection) -> None:
    statement = connection.prepare("SELECT name FROM systems WHERE regional = ? AND security < ?")

    statement.execute(1, 1.0)

    assert statement.scheme is ParameterScheme.POSITIONAL
    assert statement.param_count == 2
    assert statement.getall_tuples() == [("Jita",)]


def test_positional_statement_rejects_mapping(connection: Connection) -> None:
    statement = connection.prepare("SELECT ?")

    with pytest.raises(ParameterStyleMismatchError):
        statement.execute({"x": 1})

    assert isinstance(statement.last_error, ParameterStyleMismatchError)


def test_unbound_named_placeholder_fails_at_execute(connection: Connection) -> None:
    statement = connection.prepare("SELECT :a, :b")

    with pytest.raises(sqlite3.ProgrammingError):
        statement.execute(a=1)

    assert isinstance(statement.last_error, sqlite3.ProgrammingError)


def test_bind_failure_prevents_execution(make_statement: Any) -> None:
    statement = make_statement("SELECT :a")

    with pytest.raises(MalformedIdentifierError):
        statement.execute({"a-b": 1})

    statement.native.execute_native.assert_not_called()
    statement.native.bind_one.assert_not_called()


def test_bindings_persist_between_executions(connection: Connection) -> None:
    statement = connection.prepare("SELECT :x AS x")

    statement.execute(x="first")
    assert statement.getrow_tuple() == ("first",)

    statement.execute()
    assert statement.getrow_tuple() == ("first",)


def test_bind_param_then_execute(connection: Connection) -> None:
    statement = connection.prepare("SELECT name FROM systems WHERE regional = :r AND security >= :s ORDER BY name")

    statement.bind_param("r", 1).bind_param("s", 1.0)
    statement.execute()

    assert [row["name"] for row in statement.getall_dicts()] == ["Amarr", "Kisogo", "New Caldari"]


def test_bind_param_positional_uses_position(connection: Connection) -> None:
    statement = connection.prepare("SELECT ? AS a, ? AS b")

    statement.bind_param(2, "two").bind_param("1", "one")
    statement.execute()

    assert statement.getrow_tuple() == ("one", "two")


def test_bind_param_positional_rejects_names(connection: Connection) -> None:
    statement = connection.prepare("SELECT ?")

    with pytest.raises(ParameterStyleMismatchError):
        statement.bind_param("x", 1)


def test_bind_param_positional_rejects_out_of_range_position(connection: Connection) -> None:
    statement = connection.prepare("SELECT ?, ?")

    with pytest.raises(ParameterStyleMismatchError, match="out of range"):
        statement.bind_param(3, "third")

    assert isinstance(statement.last_error, ParameterStyleMismatchError)


def test_skipped_position_is_not_filled_by_later_values(connection: Connection) -> None:
    statement = connection.prepare("SELECT ?, ?, ?")

    statement.bind_param(1, "first").bind_param(3, "third")

    with pytest.raises(sqlite3.ProgrammingError):
        statement.execute()


def test_param_count_ignores_markers_in_literals(connection: Connection) -> None:
    statement = connection.prepare("SELECT 'why?' AS q, \"odd?\" AS i, ? AS v FROM (SELECT 1 AS \"odd?\")")

    assert statement.param_count == 1
    statement.bind_param(1, "value")
    statement.execute()
    assert statement.getrow_tuple() == ("why?", 1, "value")


def test_update_with_no_matches_is_zero_but_true(connection: Connection) -> None:
    statement = connection.prepare("UPDATE systems SET security = 0 WHERE name = :name")

    result = statement.execute(name="Nowhere")

    assert result is ZERO_BUT_TRUE
    assert result == 0
    assert result
    assert repr(result) == "0E0"


def test_update_row_count(connection: Connection) -> None:
    statement = connection.prepare("UPDATE systems SET security = security WHERE regional = :r")

    assert statement.execute(r=1) == 4


def test_select_row_count_is_unknown(connection: Connection) -> None:
    statement = connection.prepare("SELECT name FROM systems")

    assert statement.execute() == -1


def test_auto_bind_disabled_spreads_single_list(sqlite_connection: sqlite3.Connection) -> None:
    connection = Connection(sqlite_connection, FlexBindConfig(auto_bind=False))
    statement = connection.prepare("SELECT ? AS a, ? AS b")

    statement.execute([1, 2])
    assert statement.getrow_tuple() == (1, 2)

    statement.execute(3, 4)
    assert statement.getrow_tuple() == (3, 4)


def test_auto_bind_disabled_rejects_keywords(sqlite_connection: sqlite3.Connection) -> None:
    connection = Connection(sqlite_connection, FlexBindConfig(auto_bind=False))
    statement = connection.prepare("SELECT :x")

    with pytest.raises(ParameterShapeError, match="auto-bind"):
        statement.execute(x=1)


def test_auto_bind_disabled_uses_explicit_binds(sqlite_connection: sqlite3.Connection) -> None:
    connection = Connection(sqlite_connection, FlexBindConfig(auto_bind=False))
    statement = connection.prepare("SELECT :x AS x")

    statement.bind(x=9)
    statement.execute()

    assert statement.getrow_tuple() == (9,)


def test_options_override_auto_bind(connection: Connection) -> None:
    statement = connection.prepare("SELECT ? AS a", options={"auto_bind": False})

    assert statement.auto_bind is False
    statement.execute(["raw"])
    assert statement.getrow_tuple() == ("raw",)

    statement.set_auto_bind(True)
    statement.execute("bound")
    assert statement.getrow_tuple() == ("bound",)


def test_getrow_uses_configured_style(sqlite_connection: sqlite3.Connection) -> None:
    connection = Connection(sqlite_connection, FlexBindConfig(fetch_style="tuple"))
    statement = connection.prepare("SELECT name, regional FROM systems WHERE name = :n")

    statement.execute(n="Tama")

    assert statement.getrow() == ("Tama", 0)


def test_getrow_on_empty_result_is_none(connection: Connection) -> None:
    statement = connection.prepare("SELECT name FROM systems WHERE name = :n")

    statement.execute(n="Nowhere")

    assert statement.getrow() is None
    assert statement.getall() == []


def test_context_manager_closes_native(make_statement: Any) -> None:
    with make_statement("SELECT :a") as statement:
        pass

    statement.native.close.assert_called_once_with()


def test_repr_shows_rewritten_sql(make_statement: Any) -> None:
    statement = make_statement("SELECT :a")

    assert "SELECT ?" in repr(statement)
    assert "named" in repr(statement)
