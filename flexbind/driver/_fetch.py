"""Row retrieval with callback chains."""

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, Optional

from flexbind.callbacks import SKIP, CallbackChain, apply_chain, transform_rows
from flexbind.config import FetchStyle

if TYPE_CHECKING:
    from flexbind.protocols import NativeStatement

__all__ = ("FetchPipeline", "RowIterator")


class FetchPipeline:
    """Fetch rows from an executed native statement and thread them through a chain.

    Rows come back either as tuples of field values or as ``{column: value}``
    dicts. Eliminated rows never reach the caller: a single-row fetch returns
    ``None`` and multi-row fetches leave the row out.
    """

    __slots__ = ("native",)

    def __init__(self, native: "NativeStatement") -> None:
        self.native = native

    def _as_dict(self, row: "tuple[Any, ...]") -> "dict[str, Any]":
        return dict(zip(self.native.column_names, row))

    def _shape(self, style: FetchStyle) -> "Callable[[tuple[Any, ...]], Any]":
        return self._as_dict if style is FetchStyle.DICT else tuple

    def row(self, style: FetchStyle, chain: CallbackChain = ()) -> Any:
        raw = self.native.fetch_one()
        if raw is None:
            return None
        value = apply_chain(chain, self._shape(style)(raw))
        return None if value is SKIP else value

    def row_tuple(self, chain: CallbackChain = ()) -> Any:
        return self.row(FetchStyle.TUPLE, chain)

    def row_dict(self, chain: CallbackChain = ()) -> Any:
        return self.row(FetchStyle.DICT, chain)

    def all(self, style: FetchStyle, chain: CallbackChain = ()) -> "list[Any]":
        shape = self._shape(style)
        return transform_rows(chain, (shape(raw) for raw in self.native.fetch_all()))

    def all_tuples(self, chain: CallbackChain = ()) -> "list[Any]":
        return self.all(FetchStyle.TUPLE, chain)

    def all_dicts(self, chain: CallbackChain = ()) -> "list[Any]":
        return self.all(FetchStyle.DICT, chain)


class RowIterator(Iterator[Any]):
    """Lazy cursor over an executed statement.

    Each advance pulls one native row, applies the iterator's chain and
    yields the result; eliminated rows are skipped. Once the native result
    set is exhausted, or :meth:`close` is called, the iterator stays
    exhausted and its ``on_exhausted`` callback has run exactly once.
    """

    __slots__ = ("_exhausted", "_on_exhausted", "_pipeline", "chain", "style")

    def __init__(
        self,
        native: "NativeStatement",
        style: FetchStyle = FetchStyle.DICT,
        chain: CallbackChain = (),
        on_exhausted: "Optional[Callable[[], None]]" = None,
    ) -> None:
        self._pipeline = FetchPipeline(native)
        self._exhausted = False
        self._on_exhausted = on_exhausted
        self.style = style
        self.chain = tuple(chain)

    def _finish(self) -> None:
        self._exhausted = True
        if self._on_exhausted is not None:
            callback, self._on_exhausted = self._on_exhausted, None
            callback()

    def __iter__(self) -> "RowIterator":
        return self

    def __next__(self) -> Any:
        pipeline = self._pipeline
        while not self._exhausted:
            raw = pipeline.native.fetch_one()
            if raw is None:
                self._finish()
                break
            value = apply_chain(self.chain, pipeline._shape(self.style)(raw))
            if value is not SKIP:
                return value
        raise StopIteration

    def fetch(self) -> Any:
        """Return the next transformed row, or None when exhausted."""
        return next(self, None)

    def for_each(self, *callbacks: "Callable[[Any], Any]") -> "list[Any]":
        """Consume the remaining rows through ``callbacks`` and collect the results.

        The extra chain runs after the iterator's own chain.
        """
        return transform_rows(callbacks, self)

    def close(self) -> None:
        """Stop iterating; no further rows are fetched."""
        if not self._exhausted:
            self._finish()

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def __enter__(self) -> "RowIterator":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
