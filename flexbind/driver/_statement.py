"""Prepared statements with flexible placeholder binding."""

import logging
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Optional

from flexbind.config import DEFAULT_CONFIG, FetchStyle, FlexBindConfig
from flexbind.driver._common import normalize_row_count
from flexbind.driver._fetch import FetchPipeline, RowIterator
from flexbind.exceptions import ParameterShapeError
from flexbind.parameters import (
    Binder,
    ParameterIndex,
    ParameterScheme,
    TranslatedSQL,
    build_binding_request,
    count_positional_markers,
    unpack_execute_values,
)
from flexbind.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from flexbind.callbacks import CallbackChain
    from flexbind.protocols import NativeStatement

__all__ = ("PreparedStatement",)

logger = get_logger("driver.statement")


class PreparedStatement:
    """A native statement plus the bookkeeping needed to bind by name or number.

    ``sql`` is the rewritten, positional-only text given to the driver.
    ``parameter_index`` is None for statements that only ever used plain
    ``?`` placeholders; those bind purely by position.
    """

    __slots__ = ("_binder", "_config", "auto_bind", "native", "original_sql", "parameter_index", "style")

    def __init__(
        self,
        native: "NativeStatement",
        translated: TranslatedSQL,
        original_sql: str,
        config: Optional[FlexBindConfig] = None,
        binder: Optional[Binder] = None,
        auto_bind: Optional[bool] = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._binder = binder or Binder()
        self.native = native
        self.style = translated.style
        self.original_sql = original_sql
        self.parameter_index = ParameterIndex(translated.occurrences) if translated.occurrences else None
        self.auto_bind = self._config.auto_bind if auto_bind is None else bool(auto_bind)

    @property
    def config(self) -> FlexBindConfig:
        return self._config

    @property
    def sql(self) -> str:
        return self.native.sql

    @property
    def scheme(self) -> ParameterScheme:
        if self.parameter_index is None:
            return ParameterScheme.POSITIONAL
        return self.parameter_index.scheme

    @property
    def param_count(self) -> int:
        """Number of placeholder occurrences in the statement.

        For plain ``?`` statements, markers inside quoted literals are not counted.
        """
        if self.parameter_index is None:
            return count_positional_markers(self.sql)
        return len(self.parameter_index)

    @property
    def last_error(self) -> Optional[BaseException]:
        """The error raised by the most recent operation, if any."""
        return self.native.last_error

    @contextmanager
    def _record_errors(self) -> "Generator[None, None, None]":
        try:
            yield
        except Exception as exc:
            self.native.last_error = exc
            raise

    def set_auto_bind(self, enabled: bool) -> "PreparedStatement":
        self.auto_bind = bool(enabled)
        return self

    def bind(self, *args: Any, **kwargs: Any) -> "PreparedStatement":
        """Bind values to the statement's placeholders.

        Accepted shapes, by scheme:

        * positional ``?``: values in order, or one list/tuple of values
        * numeric ``?N``/``:N``: the same, or identifier/value pairs
        * named ``:name``/``@name``: ``name=value`` keywords, one mapping, one
          flat ``[name, value, ...]`` list, or a flat argument list of pairs

        A value given for a name that occurs several times is bound to every
        occurrence.

        Raises:
            MissingIdentifierError: An identifier is None or empty.
            MalformedIdentifierError: An identifier has characters outside ``[@\\w]``.
            ParameterShapeError: The values cannot be read for this statement.
            ParameterStyleMismatchError: Named values were given to a positional statement.
        """
        with self._record_errors():
            request = build_binding_request(args, kwargs, self.original_sql)
            if request is not None:
                self._binder.bind(self, request)
        return self

    def bind_param(self, identifier: Any, value: Any) -> "PreparedStatement":
        """Bind ``value`` to one name, number, or (for positional statements) position."""
        with self._record_errors():
            self._binder.bind_param(self, identifier, value)
        return self

    def execute(self, *args: Any, **kwargs: Any) -> int:
        """Execute the statement.

        With auto-bind on, the arguments are bound first (see :meth:`bind`)
        and the statement runs with its bound values. With auto-bind off, the
        arguments go straight to the driver; a single list or tuple is spread
        into positional values.

        Returns:
            The affected row count, with zero reported as ``ZERO_BUT_TRUE``.
        """
        if self.auto_bind:
            self.bind(*args, **kwargs)
            rows = self.native.execute_native()
        else:
            if kwargs:
                with self._record_errors():
                    msg = "Keyword bindings need auto-bind; pass positional values instead"
                    raise ParameterShapeError(msg, self.original_sql)
            values = unpack_execute_values(args)
            rows = self.native.execute_native(values if args else None)
        log_with_context(logger, logging.DEBUG, "Executed statement", scheme=self.scheme.value, row_count=rows)
        return normalize_row_count(rows)

    def _fetcher(self) -> FetchPipeline:
        return FetchPipeline(self.native)

    def getrow_tuple(self, callbacks: "CallbackChain" = ()) -> Any:
        """Fetch the next row as a tuple, or None when there are no more rows."""
        return self._fetcher().row_tuple(callbacks)

    def getrow_dict(self, callbacks: "CallbackChain" = ()) -> Any:
        """Fetch the next row as a ``{column: value}`` dict, or None when there are no more rows."""
        return self._fetcher().row_dict(callbacks)

    def getrow(self, callbacks: "CallbackChain" = ()) -> Any:
        return self._fetcher().row(self._config.fetch_style, callbacks)

    def getall_tuples(self, callbacks: "CallbackChain" = ()) -> "list[Any]":
        """Fetch the remaining rows as tuples."""
        return self._fetcher().all_tuples(callbacks)

    def getall_dicts(self, callbacks: "CallbackChain" = ()) -> "list[Any]":
        """Fetch the remaining rows as ``{column: value}`` dicts."""
        return self._fetcher().all_dicts(callbacks)

    def getall(self, callbacks: "CallbackChain" = ()) -> "list[Any]":
        return self._fetcher().all(self._config.fetch_style, callbacks)

    def iterate(
        self,
        *args: Any,
        callbacks: "CallbackChain" = (),
        style: Optional[FetchStyle] = None,
        on_exhausted: "Optional[Callable[[], None]]" = None,
        **kwargs: Any,
    ) -> RowIterator:
        """Execute with the given bindings and return a lazy row iterator."""
        self.execute(*args, **kwargs)
        return RowIterator(self.native, style or self._config.fetch_style, callbacks, on_exhausted)

    def close(self) -> None:
        self.native.close()

    def __enter__(self) -> "PreparedStatement":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sql={self.sql!r}, scheme={self.scheme!r}, auto_bind={self.auto_bind!r})"
