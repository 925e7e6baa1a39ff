"""flexbind: flexible placeholder binding and callback-driven fetching over DB-API drivers."""

from flexbind import callbacks, config, driver, exceptions, parameters, registry, utils
from flexbind.__metadata__ import __version__
from flexbind.callbacks import SKIP, CallbackChain, apply_chain
from flexbind.config import DEFAULT_CONFIG, FetchStyle, FlexBindConfig
from flexbind.driver import ZERO_BUT_TRUE, Connection, PreparedStatement, RowIterator, connect
from flexbind.exceptions import (
    FlexBindError,
    ImproperConfigurationError,
    MalformedIdentifierError,
    MissingIdentifierError,
    NotFoundError,
    ParameterError,
    ParameterShapeError,
    ParameterStyleMismatchError,
)
from flexbind.parameters import ParameterIndex, ParameterScheme, PlaceholderStyle, translate
from flexbind.registry import NamedHandleRegistry

__all__ = (
    "DEFAULT_CONFIG",
    "SKIP",
    "ZERO_BUT_TRUE",
    "CallbackChain",
    "Connection",
    "FetchStyle",
    "FlexBindConfig",
    "FlexBindError",
    "ImproperConfigurationError",
    "MalformedIdentifierError",
    "MissingIdentifierError",
    "NamedHandleRegistry",
    "NotFoundError",
    "ParameterError",
    "ParameterIndex",
    "ParameterScheme",
    "ParameterShapeError",
    "ParameterStyleMismatchError",
    "PlaceholderStyle",
    "PreparedStatement",
    "RowIterator",
    "__version__",
    "apply_chain",
    "callbacks",
    "config",
    "connect",
    "driver",
    "exceptions",
    "parameters",
    "registry",
    "translate",
    "utils",
)
