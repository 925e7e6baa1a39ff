"""Runtime-checkable protocols for flexbind.

These describe the native driver surface flexbind builds on: a PEP 249
connection/cursor pair, and the positional statement handle that wraps them.
"""

from typing import Any, Optional, Protocol, runtime_checkable

__all__ = ("DBAPIConnection", "DBAPICursor", "NativeStatement")


@runtime_checkable
class DBAPICursor(Protocol):
    """Protocol for PEP 249 cursors."""

    description: Any
    rowcount: int

    def execute(self, operation: Any, parameters: Any = ...) -> Any:
        """Execute a statement."""
        ...

    def fetchone(self) -> Any:
        """Fetch the next row."""
        ...

    def fetchall(self) -> Any:
        """Fetch all remaining rows."""
        ...

    def close(self) -> Any:
        """Close the cursor."""
        ...


@runtime_checkable
class DBAPIConnection(Protocol):
    """Protocol for PEP 249 connections."""

    def cursor(self) -> Any:
        """Return a new cursor."""
        ...

    def commit(self) -> Any:
        """Commit the current transaction."""
        ...

    def close(self) -> Any:
        """Close the connection."""
        ...


@runtime_checkable
class NativeStatement(Protocol):
    """A prepared statement that only understands positional placeholders."""

    sql: str
    last_error: Optional[BaseException]

    def bind_one(self, position: int, value: Any) -> None:
        """Bind ``value`` to the 1-based placeholder ``position``."""
        ...

    def execute_native(self, values: "Optional[tuple[Any, ...]]" = None) -> int:
        """Execute with explicit positional values, or with the bound ones when ``values`` is None."""
        ...

    def fetch_one(self) -> "Optional[tuple[Any, ...]]":
        """Fetch the next row, or None when exhausted."""
        ...

    def fetch_all(self) -> "list[tuple[Any, ...]]":
        """Fetch all remaining rows."""
        ...

    @property
    def column_names(self) -> "list[str]":
        """Names of the result columns."""
        ...

    def close(self) -> None:
        """Release the native cursor."""
        ...
