"""Library-wide settings.

A :class:`FlexBindConfig` is handed to each :class:`~flexbind.driver.Connection`
when it is created. ``DEFAULT_CONFIG`` is used when none is supplied.
"""

from enum import Enum
from typing import Final, Optional

from flexbind.exceptions import ImproperConfigurationError

__all__ = ("DEFAULT_CONFIG", "FetchStyle", "FlexBindConfig")

PROXY_FETCH_METHODS: Final = frozenset({"getall_dicts", "getall_tuples"})


class FetchStyle(str, Enum):
    """Shape of rows returned by the default fetch helpers."""

    DICT = "dict"
    TUPLE = "tuple"

    def __str__(self) -> str:
        return self.value


class FlexBindConfig:
    """Declarative configuration for statement preparation and fetching."""

    __slots__ = ("auto_bind", "fetch_style", "proxy_fetch", "translation_cache_size")

    def __init__(
        self,
        auto_bind: bool = True,
        fetch_style: FetchStyle = FetchStyle.DICT,
        proxy_fetch: str = "getall_dicts",
        translation_cache_size: Optional[int] = None,
    ) -> None:
        """Initialize configuration.

        Args:
            auto_bind: Whether new statements bind execute arguments automatically
            fetch_style: Row shape used by ``getrow``, ``getall`` and ``iterate``
            proxy_fetch: Fetch method used by the named handle registry
            translation_cache_size: Number of translated SQL strings to keep, 0 disables caching

        Raises:
            ImproperConfigurationError: If a setting is out of range.
        """
        if proxy_fetch not in PROXY_FETCH_METHODS:
            msg = f"proxy_fetch must be one of {sorted(PROXY_FETCH_METHODS)}, not {proxy_fetch!r}"
            raise ImproperConfigurationError(msg)
        if translation_cache_size is not None and translation_cache_size < 0:
            msg = "translation_cache_size cannot be negative"
            raise ImproperConfigurationError(msg)
        self.auto_bind = bool(auto_bind)
        self.fetch_style = FetchStyle(fetch_style)
        self.proxy_fetch = proxy_fetch
        self.translation_cache_size = translation_cache_size

    def replace(self, **changes: object) -> "FlexBindConfig":
        """Return a copy with ``changes`` applied."""
        current = {name: getattr(self, name) for name in self.__slots__}
        current.update(changes)
        return type(self)(**current)  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.__slots__)

    def __hash__(self) -> int:
        return hash(tuple(getattr(self, name) for name in self.__slots__))

    def __repr__(self) -> str:
        parts = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.__slots__)
        return f"{type(self).__name__}({parts})"


DEFAULT_CONFIG: Final = FlexBindConfig()
