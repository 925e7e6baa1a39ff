"""Per-statement placeholder bookkeeping."""

from collections import Counter
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Final

from mypy_extensions import mypyc_attr

from flexbind.parameters.types import ParameterScheme

__all__ = ("ParameterIndex",)

_DIGITS: Final = frozenset("0123456789")


def _is_numeric_identifier(identifier: str) -> bool:
    return bool(identifier) and all(char in _DIGITS for char in identifier)


@mypyc_attr(allow_interpreted_subclasses=False)
class ParameterIndex:
    """Placeholder order, per-identifier counts, and scheme of a prepared statement.

    ``order`` holds one identifier per placeholder occurrence, so an identifier
    used three times appears three times. The index is built once and never
    changes afterwards.
    """

    __slots__ = ("_positions", "occurrence_count", "order", "scheme")

    def __init__(self, order: "tuple[str, ...]") -> None:
        self.order = order
        self.occurrence_count: Mapping[str, int] = MappingProxyType(dict(Counter(order)))
        if not order:
            self.scheme = ParameterScheme.POSITIONAL
        elif all(_is_numeric_identifier(identifier) for identifier in order):
            self.scheme = ParameterScheme.NUMERIC
        else:
            self.scheme = ParameterScheme.NAMED

        positions: dict[str, list[int]] = {}
        for position, identifier in enumerate(order, start=1):
            positions.setdefault(identifier, []).append(position)
        self._positions = {identifier: tuple(found) for identifier, found in positions.items()}

    @classmethod
    def from_occurrences(cls, occurrences: "Iterable[str]") -> "ParameterIndex":
        return cls(tuple(occurrences))

    @property
    def identifiers(self) -> "tuple[str, ...]":
        """Distinct identifiers in first-seen order."""
        return tuple(self._positions)

    @property
    def is_numeric(self) -> bool:
        return self.scheme is ParameterScheme.NUMERIC

    def positions_for(self, identifier: Any) -> "tuple[int, ...]":
        """Return every 1-based placeholder position bound by ``identifier``.

        Args:
            identifier: A name or number; numbers are matched by their string form.

        Returns:
            Positions in ascending order, empty when the identifier is not used.
        """
        return self._positions.get(str(identifier), ())

    def __contains__(self, identifier: object) -> bool:
        return str(identifier) in self._positions

    def __len__(self) -> int:
        return len(self.order)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return self.order == other.order

    def __hash__(self) -> int:
        return hash(self.order)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(order={self.order!r}, scheme={self.scheme!r})"
