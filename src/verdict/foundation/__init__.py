"""Foundation layer: errors, configuration, call introspection and the Result type.

Everything above this layer (chain runner, matcher, codecs) builds on these.
"""

from .calling import CONTEXT_PARAM, MISSING, CallShape, call_shape
from .config import (
    ChainSettings,
    LoggingSettings,
    MatcherSettings,
    VerdictSettings,
    clear_settings_cache,
    get_settings,
)
from .errors import (
    ChainContractError,
    EmptyChainError,
    ErrorCode,
    ErrorDetail,
    ExceptionInfo,
    JsonDict,
    JsonValue,
    MissingContextError,
    MissingInputError,
    NoMatchError,
    ResultContractError,
    UnwrapError,
    VerdictError,
)
from .result import (
    DEFAULT_CATCH,
    Failure,
    Result,
    Success,
    collect_results,
    from_primitive,
    sequence,
    to_primitive,
    traverse,
)

__all__ = [
    # Calling
    "CONTEXT_PARAM", "MISSING", "CallShape", "call_shape",
    # Config
    "ChainSettings", "LoggingSettings", "MatcherSettings", "VerdictSettings",
    "clear_settings_cache", "get_settings",
    # Errors
    "ErrorCode", "ErrorDetail", "ExceptionInfo", "JsonDict", "JsonValue",
    "VerdictError", "ResultContractError", "ChainContractError", "EmptyChainError",
    "MissingInputError", "MissingContextError", "NoMatchError", "UnwrapError",
    # Result
    "Result", "Success", "Failure", "DEFAULT_CATCH",
    "sequence", "traverse", "collect_results", "to_primitive", "from_primitive",
]
