"""Statement preparation, execution and fetching over DB-API connections."""

from flexbind.driver._common import ZERO_BUT_TRUE, ZeroButTrue, normalize_row_count
from flexbind.driver._executor import Connection, StatementOptions, connect
from flexbind.driver._fetch import FetchPipeline, RowIterator
from flexbind.driver._native import DBAPIStatement
from flexbind.driver._statement import PreparedStatement

__all__ = (
    "ZERO_BUT_TRUE",
    "Connection",
    "DBAPIStatement",
    "FetchPipeline",
    "PreparedStatement",
    "RowIterator",
    "StatementOptions",
    "ZeroButTrue",
    "connect",
    "normalize_row_count",
)
