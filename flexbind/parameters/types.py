"""Core parameter types used throughout flexbind."""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

__all__ = (
    "BindingRequest",
    "KeyValueBinding",
    "ParameterScheme",
    "PlaceholderStyle",
    "PositionalBinding",
    "TranslatedSQL",
)


class PlaceholderStyle(str, Enum):
    """Placeholder notation detected in a SQL string."""

    QMARK = "qmark"
    NAMED_COLON = "named_colon"
    NAMED_AT = "named_at"
    NUMERIC = "numeric"

    def __str__(self) -> str:
        """String representation for better error messages.

        Returns:
            The enum value as a string.
        """
        return self.value


class ParameterScheme(str, Enum):
    """How binding identifiers of a prepared statement are interpreted."""

    POSITIONAL = "positional"
    NUMERIC = "numeric"
    NAMED = "named"

    def __str__(self) -> str:
        return self.value


class TranslatedSQL:
    """Immutable result of placeholder translation."""

    __slots__ = ("occurrences", "sql", "style")

    def __init__(self, sql: str, occurrences: "tuple[str, ...]", style: PlaceholderStyle) -> None:
        self.sql = sql
        self.occurrences = occurrences
        self.style = style

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return self.sql == other.sql and self.occurrences == other.occurrences and self.style == other.style

    def __hash__(self) -> int:
        return hash((self.sql, self.occurrences, self.style))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sql={self.sql!r}, occurrences={self.occurrences!r}, style={self.style!r})"


class PositionalBinding:
    """Binding values supplied as an ordered sequence."""

    __slots__ = ("values",)

    def __init__(self, values: "tuple[Any, ...]") -> None:
        self.values = values

    def __len__(self) -> int:
        return len(self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return self.values == other.values

    def __hash__(self) -> int:
        return hash(repr(self.values))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(values={self.values!r})"


class KeyValueBinding:
    """Binding values supplied as identifier/value pairs."""

    __slots__ = ("pairs",)

    def __init__(self, pairs: "Mapping[Any, Any]") -> None:
        self.pairs = pairs

    def __len__(self) -> int:
        return len(self.pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return dict(self.pairs) == dict(other.pairs)

    def __hash__(self) -> int:
        return hash(repr(sorted(self.pairs.items(), key=lambda item: str(item[0]))))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pairs={dict(self.pairs)!r})"


BindingRequest = Union[PositionalBinding, KeyValueBinding]
