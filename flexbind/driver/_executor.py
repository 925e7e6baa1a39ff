"""Connection wrapper: prepare, bind, execute and fetch in one call."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final, Optional, Union

from flexbind.callbacks import SKIP, apply_chain
from flexbind.config import DEFAULT_CONFIG, FetchStyle, FlexBindConfig
from flexbind.driver._fetch import RowIterator
from flexbind.driver._native import DBAPIStatement
from flexbind.driver._statement import PreparedStatement
from flexbind.exceptions import ImproperConfigurationError
from flexbind.parameters import Binder, PlaceholderTranslator
from flexbind.utils.logging import get_logger

if TYPE_CHECKING:
    from flexbind.callbacks import CallbackChain
    from flexbind.protocols import DBAPIConnection

__all__ = ("Connection", "StatementOptions", "connect")

logger = get_logger("driver.executor")

StatementOptions = Mapping[str, Any]
STATEMENT_OPTIONS: Final = frozenset({"auto_bind"})

Statement = Union[str, PreparedStatement]


class Connection:
    """Composition wrapper around a PEP 249 connection whose paramstyle is ``qmark``.

    Every method that takes a ``statement`` accepts either SQL text, which is
    prepared (and released again once the call is done), or an existing
    :class:`PreparedStatement`. Remaining positional and keyword arguments are
    bindings. ``callbacks`` and ``options`` are reserved keyword names and are
    never treated as bindings.
    """

    __slots__ = ("_binder", "_translator", "config", "native")

    def __init__(self, native: "DBAPIConnection", config: Optional[FlexBindConfig] = None) -> None:
        self.native = native
        self.config = config or DEFAULT_CONFIG
        self._translator = PlaceholderTranslator(self.config.translation_cache_size)
        self._binder = Binder()

    def prepare(self, sql: str, options: Optional[StatementOptions] = None) -> PreparedStatement:
        """Rewrite ``sql`` to positional placeholders and prepare it.

        Args:
            sql: SQL using ``?``, ``?N``, ``:N``, ``:name`` or ``@name`` placeholders.
            options: Statement attributes; ``auto_bind`` overrides the configured default.

        Raises:
            ImproperConfigurationError: If ``options`` has unknown keys.

        Returns:
            The prepared statement.
        """
        auto_bind = None
        if options:
            unknown = set(options) - STATEMENT_OPTIONS
            if unknown:
                msg = f"Unknown statement options: {sorted(unknown)}"
                raise ImproperConfigurationError(msg)
            auto_bind = options.get("auto_bind")

        translated = self._translator.translate(sql)
        native = DBAPIStatement(self.native, translated.sql)
        logger.debug("Prepared %s statement with %d placeholder(s)", translated.style, len(translated.occurrences))
        return PreparedStatement(native, translated, sql, self.config, self._binder, auto_bind)

    def _resolve(self, statement: Statement, options: Optional[StatementOptions]) -> "tuple[PreparedStatement, bool]":
        if isinstance(statement, PreparedStatement):
            return statement, False
        if isinstance(statement, str):
            return self.prepare(statement, options), True
        msg = f"Expected SQL text or a PreparedStatement, not {type(statement).__name__}"
        raise TypeError(msg)

    def do(
        self,
        statement: Statement,
        *args: Any,
        callbacks: "CallbackChain" = (),
        options: Optional[StatementOptions] = None,
        **kwargs: Any,
    ) -> Any:
        """Prepare (if needed) and execute a statement.

        Returns:
            The row count (zero as ``ZERO_BUT_TRUE``), or that count passed
            through ``callbacks``; None if a callback eliminated it.
        """
        prepared, owned = self._resolve(statement, options)
        try:
            result = prepared.execute(*args, **kwargs)
        finally:
            if owned:
                prepared.close()
        if result and callbacks:
            value = apply_chain(callbacks, result)
            return None if value is SKIP else value
        return result

    def _fetch(
        self,
        method: str,
        statement: Statement,
        args: "tuple[Any, ...]",
        kwargs: "dict[str, Any]",
        callbacks: "CallbackChain",
        options: Optional[StatementOptions],
    ) -> Any:
        prepared, owned = self._resolve(statement, options)
        try:
            prepared.execute(*args, **kwargs)
            return getattr(prepared, method)(callbacks)
        finally:
            if owned:
                prepared.close()

    def getrow_tuple(
        self,
        statement: Statement,
        *args: Any,
        callbacks: "CallbackChain" = (),
        options: Optional[StatementOptions] = None,
        **kwargs: Any,
    ) -> Any:
        """Execute and return the first row as a tuple, or None."""
        return self._fetch("getrow_tuple", statement, args, kwargs, callbacks, options)

    def getrow_dict(
        self,
        statement: Statement,
        *args: Any,
        callbacks: "CallbackChain" = (),
        options: Optional[StatementOptions] = None,
        **kwargs: Any,
    ) -> Any:
        """Execute and return the first row as a dict, or None."""
        return self._fetch("getrow_dict", statement, args, kwargs, callbacks, options)

    def getrow(
        self,
        statement: Statement,
        *args: Any,
        callbacks: "CallbackChain" = (),
        options: Optional[StatementOptions] = None,
        **kwargs: Any,
    ) -> Any:
        return self._fetch("getrow", statement, args, kwargs, callbacks, options)

    def getall_tuples(
        self,
        statement: Statement,
        *args: Any,
        callbacks: "CallbackChain" = (),
        options: Optional[StatementOptions] = None,
        **kwargs: Any,
    ) -> "list[Any]":
        """Execute and return every row as a tuple."""
        return self._fetch("getall_tuples", statement, args, kwargs, callbacks, options)

    def getall_dicts(
        self,
        statement: Statement,
        *args: Any,
        callbacks: "CallbackChain" = (),
        options: Optional[StatementOptions] = None,
        **kwargs: Any,
    ) -> "list[Any]":
        """Execute and return every row as a dict."""
        return self._fetch("getall_dicts", statement, args, kwargs, callbacks, options)

    def getall(
        self,
        statement: Statement,
        *args: Any,
        callbacks: "CallbackChain" = (),
        options: Optional[StatementOptions] = None,
        **kwargs: Any,
    ) -> "list[Any]":
        return self._fetch("getall", statement, args, kwargs, callbacks, options)

    def iterate(
        self,
        statement: Statement,
        *args: Any,
        callbacks: "CallbackChain" = (),
        options: Optional[StatementOptions] = None,
        style: Optional[FetchStyle] = None,
        **kwargs: Any,
    ) -> RowIterator:
        """Execute and return a lazy iterator over the transformed rows.

        A statement prepared from SQL text here is closed once the iterator
        runs out of rows or is closed; use the iterator as a context manager
        when it may be abandoned early.
        """
        prepared, owned = self._resolve(statement, options)
        try:
            return prepared.iterate(
                *args, callbacks=callbacks, style=style, on_exhausted=prepared.close if owned else None, **kwargs
            )
        except Exception:
            if owned:
                prepared.close()
            raise

    def close(self) -> None:
        self._translator.clear()
        self.native.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(native={self.native!r}, config={self.config!r})"


def connect(native: "DBAPIConnection", config: Optional[FlexBindConfig] = None) -> Connection:
    """Wrap an open DB-API connection."""
    return Connection(native, config)
