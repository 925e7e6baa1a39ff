"""Applying caller-supplied transformation chains to fetched rows.

A chain is any sequence of one-argument callables. Each stage gets the
output of the stage before it. A stage that returns :data:`SKIP` drops the
row, and no later stage sees it.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Final, Union

__all__ = ("SKIP", "CallbackChain", "SkipType", "apply_chain", "transform_rows")


class SkipType:
    """Type of the :data:`SKIP` sentinel."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "SKIP"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "SKIP"


SKIP: Final = SkipType()

CallbackChain = Sequence[Callable[[Any], Any]]


def apply_chain(chain: CallbackChain, row: Any) -> Union[Any, SkipType]:
    """Run ``row`` through every stage of ``chain`` in order.

    Returns:
        The transformed value, or :data:`SKIP` if a stage eliminated the row.
    """
    value = row
    for stage in chain:
        value = stage(value)
        if value is SKIP:
            return SKIP
    return value


def transform_rows(chain: CallbackChain, rows: Iterable[Any]) -> "list[Any]":
    """Apply ``chain`` to each row independently, dropping eliminated rows."""
    if not chain:
        return list(rows)
    transformed = []
    for row in rows:
        value = apply_chain(chain, row)
        if value is not SKIP:
            transformed.append(value)
    return transformed
