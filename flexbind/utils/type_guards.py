"""Type guard functions for runtime type checking in flexbind.

This module provides type-safe runtime checks that help the type checker
understand type narrowing, replacing defensive hasattr() and duck typing patterns.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from flexbind.protocols import DBAPIConnection

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

__all__ = (
    "is_dbapi_connection",
    "is_mapping_parameters",
    "is_sequence_parameters",
    "is_unordered_iterable",
)

_SCALAR_SEQUENCE_TYPES = (str, bytes, bytearray, memoryview)


def is_mapping_parameters(params: Any) -> "TypeGuard[Mapping[Any, Any]]":
    """Check if binding values were supplied as a mapping.

    Args:
        params: The value to check

    Returns:
        True if the value is a mapping, False otherwise
    """
    return isinstance(params, Mapping)


def is_sequence_parameters(params: Any) -> "TypeGuard[Sequence[Any]]":
    """Check if binding values were supplied as an ordered sequence.

    Strings and binary buffers are single values, not sequences of values.

    Args:
        params: The value to check

    Returns:
        True if the value is a list-like sequence, False otherwise
    """
    return isinstance(params, Sequence) and not isinstance(params, _SCALAR_SEQUENCE_TYPES)


def is_unordered_iterable(params: Any) -> "TypeGuard[Iterable[Any]]":
    """Check for iterables that have no usable order or length (sets, generators)."""
    return (
        isinstance(params, Iterable)
        and not isinstance(params, (Mapping, _SCALAR_SEQUENCE_TYPES))
        and not is_sequence_parameters(params)
    )


def is_dbapi_connection(obj: Any) -> "TypeGuard[DBAPIConnection]":
    """Check if an object looks like a PEP 249 connection.

    Args:
        obj: The object to check

    Returns:
        True if the object implements the DB-API connection protocol, False otherwise
    """
    return isinstance(obj, DBAPIConnection)
