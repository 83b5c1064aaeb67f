"""Error handling for verdict.

- ErrorCode/ErrorDetail: Structured description of library errors
- VerdictError and subclasses: Contract violations and no-match conditions
- ExceptionInfo: Serializable snapshot of exceptions captured as Failure payloads
"""

from .errors import (
    ChainContractError,
    EmptyChainError,
    ErrorCode,
    ErrorDetail,
    MissingContextError,
    MissingInputError,
    NoMatchError,
    ResultContractError,
    UnwrapError,
    VerdictError,
)
from .types import ExceptionInfo, JsonDict, JsonValue

__all__ = [
    # Codes and details
    "ErrorCode", "ErrorDetail",
    # Exceptions
    "VerdictError", "ResultContractError", "ChainContractError", "EmptyChainError",
    "MissingInputError", "MissingContextError", "NoMatchError", "UnwrapError",
    # Serialization
    "ExceptionInfo", "JsonValue", "JsonDict",
]
