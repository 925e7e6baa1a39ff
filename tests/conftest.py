from __future__ import annotations

import sqlite3
from collections.abc import Generator
from pathlib import Path
from unittest.mock import Mock

import pytest

from flexbind import Connection, PreparedStatement
from flexbind.driver import DBAPIStatement
from flexbind.parameters import translate

here = Path(__file__).parent
root_path = here.parent

SYSTEMS = [
    ("Kisogo", 1, 1.0),
    ("New Caldari", 1, 1.0),
    ("Amarr", 1, 1.0),
    ("Jita", 1, 0.9),
    ("Tama", 0, 0.3),
]


@pytest.fixture
def sqlite_connection() -> Generator[sqlite3.Connection, None, None]:
    """In-memory SQLite database with a small ``systems`` table."""
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE systems (name TEXT NOT NULL, regional INTEGER NOT NULL, security REAL NOT NULL)")
    conn.executemany("INSERT INTO systems (name, regional, security) VALUES (?, ?, ?)", SYSTEMS)
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def connection(sqlite_connection: sqlite3.Connection) -> Connection:
    return Connection(sqlite_connection)


@pytest.fixture
def make_statement() -> Generator[object, None, None]:
    """Build a statement over a mocked native handle that records binds."""

    def _make(sql: str, **kwargs: object) -> PreparedStatement:
        translated = translate(sql)
        native = Mock(spec=DBAPIStatement)
        native.sql = translated.sql
        native.last_error = None
        native.execute_native.return_value = 1
        return PreparedStatement(native, translated, sql, **kwargs)  # type: ignore[arg-type]

    yield _make
