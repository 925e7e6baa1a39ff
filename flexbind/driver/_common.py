"""Helpers shared by statements and connections."""

from typing import Any, Final, Optional

__all__ = ("ZERO_BUT_TRUE", "ZeroButTrue", "normalize_row_count")

UNKNOWN_ROW_COUNT: Final[int] = -1


class ZeroButTrue(int):
    """A row count of zero that is still true in a boolean context.

    A successful statement that touched no rows must not look like a failure
    to callers that write ``if statement.execute(): ...``.
    """

    __slots__ = ()

    def __new__(cls) -> "ZeroButTrue":
        return super().__new__(cls, 0)

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "0E0"

    __str__ = __repr__

    def __reduce__(self) -> str:
        return "ZERO_BUT_TRUE"


ZERO_BUT_TRUE: Final = ZeroButTrue()


def normalize_row_count(rows: Optional[Any]) -> int:
    """Map a native row count onto flexbind's conventions.

    ``0`` becomes :data:`ZERO_BUT_TRUE`; a missing count becomes ``-1``, the
    DB-API marker for "not known".
    """
    if rows is None:
        return UNKNOWN_ROW_COUNT
    count = int(rows)
    if count == 0:
        return ZERO_BUT_TRUE
    return count
