"""Positional statement handle over a PEP 249 connection."""

import contextlib
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Optional

from flexbind.exceptions import FlexBindError
from flexbind.utils.logging import get_logger

if TYPE_CHECKING:
    from flexbind.protocols import DBAPIConnection, DBAPICursor

__all__ = ("DBAPIStatement",)

logger = get_logger("driver.native")


class DBAPIStatement:
    """Native statement for drivers using the ``qmark`` paramstyle.

    DB-API has no per-placeholder bind call, so bound values are collected by
    position and handed to ``cursor.execute`` in position order. Bound values
    survive across executions until they are rebound.
    """

    __slots__ = ("_bound", "_connection", "_cursor", "last_error", "sql")

    def __init__(self, connection: "DBAPIConnection", sql: str) -> None:
        self._connection = connection
        self._cursor: Optional[DBAPICursor] = None
        self._bound: dict[int, Any] = {}
        self.sql = sql
        self.last_error: Optional[BaseException] = None

    @contextmanager
    def _record_errors(self) -> "Generator[None, None, None]":
        """Remember the most recent driver error, then let it propagate unchanged."""
        self.last_error = None
        try:
            yield
        except Exception as exc:
            self.last_error = exc
            raise

    def bind_one(self, position: int, value: Any) -> None:
        self._bound[position] = value

    @property
    def bound_values(self) -> "tuple[Any, ...]":
        """Bound values for positions 1, 2, ... up to the first unbound position.

        A gap is never closed up: values after it are withheld, so the driver
        sees too few values and raises its own error.
        """
        values = []
        position = 1
        while position in self._bound:
            values.append(self._bound[position])
            position += 1
        return tuple(values)

    def execute_native(self, values: "Optional[tuple[Any, ...]]" = None) -> int:
        """Run the statement on a fresh cursor.

        Args:
            values: Positional values; the bound values are used when omitted.

        Returns:
            The driver's row count.
        """
        parameters = self.bound_values if values is None else tuple(values)
        with self._record_errors():
            self._close_cursor()
            cursor = self._connection.cursor()
            self._cursor = cursor
            logger.debug("Executing native statement with %d value(s)", len(parameters))
            cursor.execute(self.sql, parameters)
            return cursor.rowcount

    def _require_cursor(self) -> "DBAPICursor":
        if self._cursor is None:
            msg = "Statement has not been executed"
            raise FlexBindError(msg)
        return self._cursor

    def fetch_one(self) -> "Optional[tuple[Any, ...]]":
        with self._record_errors():
            cursor = self._require_cursor()
            if cursor.description is None:
                return None
            row = cursor.fetchone()
            return None if row is None else tuple(row)

    def fetch_all(self) -> "list[tuple[Any, ...]]":
        with self._record_errors():
            cursor = self._require_cursor()
            if cursor.description is None:
                return []
            return [tuple(row) for row in cursor.fetchall()]

    @property
    def column_names(self) -> "list[str]":
        if self._cursor is None or self._cursor.description is None:
            return []
        return [column[0] for column in self._cursor.description]

    def _close_cursor(self) -> None:
        if self._cursor is not None:
            with contextlib.suppress(Exception):
                self._cursor.close()
            self._cursor = None

    def close(self) -> None:
        self._close_cursor()
        self._bound.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sql={self.sql!r})"
