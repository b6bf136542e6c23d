"""sqlprep: client-side prepared statements over a single shared connection."""

from sqlprep import driver, exceptions, parameters, protocols, utils
from sqlprep.__metadata__ import __version__
from sqlprep.driver import AsyncConnection, AsyncStatement, Connection, Statement, StatementState
from sqlprep.exceptions import (
    ParameterCountError,
    ParameterError,
    PlaceholderIndexError,
    PlaceholderParseError,
    ReceiveError,
    SendError,
    SQLPrepError,
    StatementStateError,
    UnsupportedOperationError,
)
from sqlprep.parameters import (
    UNKNOWN_PARAMETER_COUNT,
    LiteralStyle,
    ParameterConfig,
    ParameterStyle,
    count_parameters,
    rewrite_query,
)
from sqlprep.result import EffectResult

__all__ = (
    "UNKNOWN_PARAMETER_COUNT",
    "AsyncConnection",
    "AsyncStatement",
    "Connection",
    "EffectResult",
    "LiteralStyle",
    "ParameterConfig",
    "ParameterCountError",
    "ParameterError",
    "ParameterStyle",
    "PlaceholderIndexError",
    "PlaceholderParseError",
    "ReceiveError",
    "SQLPrepError",
    "SendError",
    "Statement",
    "StatementState",
    "StatementStateError",
    "UnsupportedOperationError",
    "__version__",
    "count_parameters",
    "driver",
    "exceptions",
    "parameters",
    "protocols",
    "rewrite_query",
    "utils",
)
