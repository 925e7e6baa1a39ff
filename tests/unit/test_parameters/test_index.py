"""Unit tests for flexbind.parameters.index."""

import pytest

from flexbind.parameters import ParameterIndex, ParameterScheme, translate


@pytest.mark.parametrize(
    "order,expected_scheme",
    [
        ((), ParameterScheme.POSITIONAL),
        (("1", "2"), ParameterScheme.NUMERIC),
        (("10", "2", "10"), ParameterScheme.NUMERIC),
        (("name",), ParameterScheme.NAMED),
        (("@name",), ParameterScheme.NAMED),
        (("1", "name"), ParameterScheme.NAMED),
    ],
    ids=["empty", "numeric", "numeric_repeated", "named", "named_at", "mixed_is_named"],
)
def test_scheme_classification(order: "tuple[str, ...]", expected_scheme: ParameterScheme) -> None:
    assert ParameterIndex(order).scheme is expected_scheme


def test_occurrence_counts() -> None:
    index = ParameterIndex(("x", "y", "x", "z", "x"))

    assert index.occurrence_count == {"x": 3, "y": 1, "z": 1}
    assert sum(index.occurrence_count.values()) == len(index.order) == len(index)


def test_occurrence_counts_are_read_only() -> None:
    index = ParameterIndex(("x",))
    with pytest.raises(TypeError):
        index.occurrence_count["x"] = 2  # type: ignore[index]


def test_positions_for_repeated_identifier() -> None:
    index = ParameterIndex(("x", "y", "x"))

    assert index.positions_for("x") == (1, 3)
    assert index.positions_for("y") == (2,)


def test_positions_for_matches_numbers_by_string_form() -> None:
    index = ParameterIndex(("1", "2", "1"))

    assert index.positions_for(1) == (1, 3)
    assert index.positions_for("2") == (2,)
    assert 2 in index


def test_positions_for_unknown_identifier() -> None:
    index = ParameterIndex(("x",))
    assert index.positions_for("missing") == ()
    assert "missing" not in index


def test_colon_and_at_identifiers_are_distinct() -> None:
    index = ParameterIndex(("@id",))

    assert index.positions_for("id") == ()
    assert index.positions_for("@id") == (1,)


def test_identifiers_in_first_seen_order() -> None:
    index = ParameterIndex.from_occurrences(["b", "a", "b", "c"])
    assert index.identifiers == ("b", "a", "c")


def test_positions_match_marker_ordinals_in_rewritten_sql() -> None:
    sql = "SELECT * FROM t WHERE a = :k OR b = :other OR c = :k OR d = :k"
    translated = translate(sql)
    index = ParameterIndex(translated.occurrences)

    markers = [i for i, char in enumerate(translated.sql) if char == "?"]
    k_offsets = [markers[position - 1] for position in index.positions_for("k")]

    assert len(k_offsets) == index.occurrence_count["k"] == 3
    assert [translated.sql[offset - 4 : offset - 3] for offset in k_offsets] == ["a", "c", "d"]


def test_equality_and_hash() -> None:
    assert ParameterIndex(("a", "b")) == ParameterIndex(("a", "b"))
    assert ParameterIndex(("a", "b")) != ParameterIndex(("b", "a"))
    assert hash(ParameterIndex(("a",))) == hash(ParameterIndex(("a",)))
