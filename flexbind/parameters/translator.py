"""Placeholder detection and rewriting.

A statement uses exactly one placeholder scheme. Schemes are tried in a fixed
priority order and the first one found wins:

1. ``:name`` (and ``:1`` style numbers), identifiers stored without the colon
2. ``@name``, identifiers stored with the ``@`` sigil
3. ``?1`` style numbers, identifiers stored as digit strings
4. plain ``?``, passed to the driver untouched

Tokens of a lower priority scheme that appear alongside a higher priority one
are left as literal text.
"""

import re
from collections import OrderedDict
from typing import Final, Optional

from mypy_extensions import mypyc_attr

from flexbind.parameters.types import PlaceholderStyle, TranslatedSQL
from flexbind.utils.logging import get_logger

__all__ = ("POSITIONAL_MARKER", "PlaceholderTranslator", "count_positional_markers", "translate")

logger = get_logger("parameters.translator")

POSITIONAL_MARKER: Final[str] = "?"

NAMED_COLON_PATTERN: Final = re.compile(r":(\w+)\b")
NAMED_AT_PATTERN: Final = re.compile(r"(@\w+)\b")
NUMERIC_PATTERN: Final = re.compile(r"\?(\d+)\b")
POSITIONAL_MARKER_PATTERN: Final = re.compile(r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"|\?")

_SCHEME_PATTERNS: "Final[tuple[tuple[PlaceholderStyle, re.Pattern[str]], ...]]" = (
    (PlaceholderStyle.NAMED_COLON, NAMED_COLON_PATTERN),
    (PlaceholderStyle.NAMED_AT, NAMED_AT_PATTERN),
    (PlaceholderStyle.NUMERIC, NUMERIC_PATTERN),
)


def translate(sql: str) -> TranslatedSQL:
    """Rewrite ``sql`` to positional placeholders.

    Args:
        sql: SQL text using any one of the supported placeholder schemes.

    Raises:
        TypeError: If ``sql`` is not a string.

    Returns:
        The rewritten SQL, the identifiers in occurrence order, and the detected style.
    """
    if not isinstance(sql, str):
        msg = f"SQL must be a string, not {type(sql).__name__}"
        raise TypeError(msg)

    for style, pattern in _SCHEME_PATTERNS:
        if pattern.search(sql) is None:
            continue
        occurrences = tuple(pattern.findall(sql))
        return TranslatedSQL(pattern.sub(POSITIONAL_MARKER, sql), occurrences, style)

    return TranslatedSQL(sql, (), PlaceholderStyle.QMARK)


def count_positional_markers(sql: str) -> int:
    """Count ``?`` markers outside quoted literals and quoted identifiers."""
    return sum(1 for match in POSITIONAL_MARKER_PATTERN.finditer(sql) if match.group() == POSITIONAL_MARKER)


@mypyc_attr(allow_interpreted_subclasses=False)
class PlaceholderTranslator:
    """Memoising front end for :func:`translate`.

    Translation is a pure function of the SQL text, so results are kept in a
    bounded least-recently-used cache.
    """

    __slots__ = ("_cache", "_cache_size")

    DEFAULT_CACHE_SIZE: Final[int] = 1000

    def __init__(self, cache_size: Optional[int] = None) -> None:
        self._cache: OrderedDict[str, TranslatedSQL] = OrderedDict()
        self._cache_size = self.DEFAULT_CACHE_SIZE if cache_size is None else cache_size

    def translate(self, sql: str) -> TranslatedSQL:
        """Translate ``sql``, consulting the cache first."""
        if self._cache_size <= 0:
            return translate(sql)

        cached = self._cache.get(sql)
        if cached is not None:
            self._cache.move_to_end(sql)
            return cached

        result = translate(sql)
        logger.debug("Translated %s placeholders: %d occurrence(s)", result.style, len(result.occurrences))
        self._cache[sql] = result
        if len(self._cache) > self._cache_size:
            self._cache.popitem(last=False)
        return result

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
