"""Tests for flexbind.utils.type_guards."""

import sqlite3
from collections import OrderedDict
from types import MappingProxyType
from typing import Any

import pytest

from flexbind.utils.type_guards import (
    is_dbapi_connection,
    is_mapping_parameters,
    is_sequence_parameters,
    is_unordered_iterable,
)


@pytest.mark.parametrize("value", [{}, {"a": 1}, OrderedDict(a=1), MappingProxyType({"a": 1})])
def test_is_mapping_parameters(value: Any) -> None:
    assert is_mapping_parameters(value)
    assert not is_sequence_parameters(value)
    assert not is_unordered_iterable(value)


@pytest.mark.parametrize("value", [[], [1, 2], (1,), range(3)])
def test_is_sequence_parameters(value: Any) -> None:
    assert is_sequence_parameters(value)
    assert not is_mapping_parameters(value)
    assert not is_unordered_iterable(value)


@pytest.mark.parametrize("value", ["text", b"bytes", bytearray(b"x"), memoryview(b"x"), 1, None])
def test_scalars_are_not_collections(value: Any) -> None:
    assert not is_sequence_parameters(value)
    assert not is_mapping_parameters(value)
    assert not is_unordered_iterable(value)


@pytest.mark.parametrize("value", [{1, 2}, frozenset(), (n for n in range(2)), iter([1])])
def test_is_unordered_iterable(value: Any) -> None:
    assert is_unordered_iterable(value)


def test_is_dbapi_connection() -> None:
    conn = sqlite3.connect(":memory:")
    try:
        assert is_dbapi_connection(conn)
    finally:
        conn.close()

    assert not is_dbapi_connection(object())
    assert not is_dbapi_connection("sqlite://")
