"""Placeholder translation and parameter binding for flexbind."""

from flexbind.parameters.binder import Binder, pairs_to_mapping, validate_identifier
from flexbind.parameters.index import ParameterIndex
from flexbind.parameters.request import build_binding_request, unpack_execute_values
from flexbind.parameters.translator import POSITIONAL_MARKER, PlaceholderTranslator, count_positional_markers, translate
from flexbind.parameters.types import (
    BindingRequest,
    KeyValueBinding,
    ParameterScheme,
    PlaceholderStyle,
    PositionalBinding,
    TranslatedSQL,
)

__all__ = (
    "POSITIONAL_MARKER",
    "Binder",
    "BindingRequest",
    "KeyValueBinding",
    "ParameterIndex",
    "ParameterScheme",
    "PlaceholderStyle",
    "PlaceholderTranslator",
    "PositionalBinding",
    "TranslatedSQL",
    "build_binding_request",
    "count_positional_markers",
    "pairs_to_mapping",
    "translate",
    "unpack_execute_values",
    "validate_identifier",
)
