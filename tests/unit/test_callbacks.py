"""Tests for callback chains."""

import copy
import pickle
from typing import Any

from flexbind.callbacks import SKIP, SkipType, apply_chain, transform_rows


def test_skip_is_falsy_singleton() -> None:
    assert not SKIP
    assert repr(SKIP) == "SKIP"
    assert isinstance(SKIP, SkipType)
    assert copy.copy(SKIP) is SKIP
    assert pickle.loads(pickle.dumps(SKIP)) is SKIP


def test_empty_chain_returns_row_unchanged() -> None:
    row = {"f": 1}

    assert apply_chain((), row) is row
    assert transform_rows((), [row]) == [row]


def test_stages_run_in_order() -> None:
    def increment(row: "dict[str, int]") -> "dict[str, int]":
        return {"n": row["n"] + 1}

    def double(row: "dict[str, int]") -> "dict[str, int]":
        return {"n": row["n"] * 2}

    assert apply_chain([increment, double], {"n": 1}) == {"n": 4}


def test_skip_short_circuits() -> None:
    seen: "list[Any]" = []

    def record(row: Any) -> Any:
        seen.append(row)
        return row

    assert apply_chain([lambda row: SKIP, record], 1) is SKIP
    assert seen == []


def test_falsy_values_are_not_eliminated() -> None:
    assert transform_rows([lambda row: None], [1, 2]) == [None, None]
    assert transform_rows([lambda row: 0], [1]) == [0]


def test_transform_rows_filters_eliminated() -> None:
    rows = [{"f": "X"}, {"f": "Y"}, {"f": "X"}]

    assert transform_rows([lambda row: SKIP if row["f"] == "X" else row], rows) == [{"f": "Y"}]


def test_transform_rows_accepts_generators() -> None:
    assert transform_rows([str], (n for n in range(3))) == ["0", "1", "2"]
