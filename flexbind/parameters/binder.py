"""Binding of caller values to native positional placeholders."""

import re
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Final, Optional

from mypy_extensions import mypyc_attr

from flexbind.exceptions import (
    MalformedIdentifierError,
    MissingIdentifierError,
    ParameterShapeError,
    ParameterStyleMismatchError,
)
from flexbind.parameters.types import BindingRequest, KeyValueBinding, PositionalBinding
from flexbind.utils.logging import get_logger

if TYPE_CHECKING:
    from flexbind.driver._statement import PreparedStatement

__all__ = ("Binder", "pairs_to_mapping", "validate_identifier")

logger = get_logger("parameters.binder")

MALFORMED_IDENTIFIER: Final = re.compile(r"[^@\w]")


def validate_identifier(identifier: Any, sql: Optional[str] = None) -> str:
    """Check a binding identifier and return its string form.

    Raises:
        MissingIdentifierError: If the identifier is None or empty.
        MalformedIdentifierError: If it contains anything besides word characters and ``@``.
    """
    if identifier is None or isinstance(identifier, bool):
        raise MissingIdentifierError(sql=sql)
    text = str(identifier)
    if not text:
        raise MissingIdentifierError(sql=sql)
    if MALFORMED_IDENTIFIER.search(text):
        raise MalformedIdentifierError(identifier, sql)
    return text


def pairs_to_mapping(values: "Sequence[Any]", sql: Optional[str] = None) -> "dict[Any, Any]":
    """Read a flat ``[key, value, key, value, ...]`` list as a mapping.

    Later keys override earlier ones.

    Raises:
        ParameterShapeError: If the list cannot be split into pairs.
    """
    if len(values) == 1:
        raise ParameterShapeError(sql=sql)
    if len(values) % 2:
        msg = f"Odd number of elements in key/value bindings ({len(values)})"
        raise ParameterShapeError(msg, sql)
    return dict(zip(values[::2], values[1::2]))


@mypyc_attr(allow_interpreted_subclasses=False)
class Binder:
    """Issue one native bind per placeholder occurrence for a binding request.

    Pure positional statements take values in order. Statements with numeric
    placeholders accept either a sequence (element ``i`` binds identifier
    ``i + 1``) or identifier/value pairs. Statements with named placeholders
    take identifier/value pairs, either as a mapping or as a flat list.
    """

    __slots__ = ()

    def bind(self, statement: "PreparedStatement", request: BindingRequest) -> "PreparedStatement":
        index = statement.parameter_index
        sql = statement.original_sql

        if index is None:
            if isinstance(request, KeyValueBinding):
                raise ParameterStyleMismatchError(sql=sql)
            for position, value in enumerate(request.values, start=1):
                statement.native.bind_one(position, value)
            logger.debug("Bound %d positional value(s)", len(request.values))
            return statement

        if isinstance(request, PositionalBinding):
            if index.is_numeric:
                pairs: Mapping[Any, Any] = {str(n): value for n, value in enumerate(request.values, start=1)}
            else:
                pairs = pairs_to_mapping(request.values, sql)
        else:
            pairs = request.pairs

        resolved = [(validate_identifier(identifier, sql), value) for identifier, value in pairs.items()]
        for identifier, value in resolved:
            self._bind_positions(statement, identifier, value)
        return statement

    def bind_param(self, statement: "PreparedStatement", identifier: Any, value: Any) -> int:
        """Bind a single identifier or position.

        Returns:
            The number of native binds issued.
        """
        sql = statement.original_sql
        text = validate_identifier(identifier, sql)
        if statement.parameter_index is None:
            if not text.isdigit() or int(text) < 1:
                msg = f'Positional statements are bound by 1-based position, not "{text}"'
                raise ParameterStyleMismatchError(msg, sql)
            if int(text) > statement.param_count:
                msg = f"Position {text} is out of range for a statement with {statement.param_count} placeholder(s)"
                raise ParameterStyleMismatchError(msg, sql)
            statement.native.bind_one(int(text), value)
            return 1
        return self._bind_positions(statement, text, value)

    def _bind_positions(self, statement: "PreparedStatement", identifier: str, value: Any) -> int:
        positions = statement.parameter_index.positions_for(identifier)  # type: ignore[union-attr]
        if not positions:
            logger.debug("Identifier %r does not occur in statement; nothing bound", identifier)
        for position in positions:
            statement.native.bind_one(position, value)
        return len(positions)
