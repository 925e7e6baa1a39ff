"""Turn caller arguments into a :data:`BindingRequest`.

This is the only place that looks at the shape of caller-supplied values;
the binder only ever sees a tagged request.
"""

from collections.abc import Mapping
from typing import Any, Optional

from flexbind.exceptions import ParameterShapeError
from flexbind.parameters.types import BindingRequest, KeyValueBinding, PositionalBinding
from flexbind.utils.type_guards import is_mapping_parameters, is_sequence_parameters, is_unordered_iterable

__all__ = ("build_binding_request", "unpack_execute_values")


def build_binding_request(
    args: "tuple[Any, ...]", kwargs: "Optional[Mapping[str, Any]]" = None, sql: Optional[str] = None
) -> Optional[BindingRequest]:
    """Classify binding arguments.

    Args:
        args: Positional arguments from the call.
        kwargs: Keyword arguments from the call, always identifier/value pairs.
        sql: Statement text used for error context.

    Raises:
        ParameterShapeError: If the arguments cannot be read as values or pairs.

    Returns:
        The request, or None when nothing was supplied.
    """
    if kwargs:
        if not args:
            return KeyValueBinding(dict(kwargs))
        if len(args) == 1 and is_mapping_parameters(args[0]):
            return KeyValueBinding({**args[0], **kwargs})
        msg = "Keyword bindings can only be combined with a single mapping argument"
        raise ParameterShapeError(msg, sql)

    if not args:
        return None

    if len(args) == 1:
        value = args[0]
        if is_mapping_parameters(value):
            return KeyValueBinding(value)
        if is_sequence_parameters(value):
            return PositionalBinding(tuple(value))
        if is_unordered_iterable(value):
            raise ParameterShapeError(sql=sql)

    return PositionalBinding(tuple(args))


def unpack_execute_values(args: "tuple[Any, ...]") -> "tuple[Any, ...]":
    """Values for a direct native execute; a lone list or tuple is spread out."""
    if len(args) == 1 and is_sequence_parameters(args[0]):
        return tuple(args[0])
    return args
