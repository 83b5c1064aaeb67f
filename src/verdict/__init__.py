"""verdict - Success/Failure results, sequential step chains, and pattern matching.

A disciplined alternative to exceptions for operations that may fail.

Result values:
    >>> from verdict import Success, Failure
    >>> Success(2).map(lambda x: x * 10)
    Success(20)
    >>> Failure("boom").map(lambda x: x * 10)
    Failure('boom')
    >>> Success(1) << Success(2), Failure(1) << Failure(2)
    (Success(2), Failure(1))

Chains (first failure wins, exceptions in Try steps become Failures):
    >>> from verdict import attempt_all, Try, Let
    >>> attempt_all(Try(lambda: 1), Try(lambda n: n + 1))
    Success(2)
    >>> attempt_all(Try(lambda: 1), Try(lambda n: n / 0), Try(lambda n: n + 1)).is_failure()
    True

Pattern matching (first matching clause wins, unmatched results raise):
    >>> from verdict import match, success, failure, any_
    >>> match(Success(1),
    ...       success(1, then=lambda: "one"),
    ...       success(then=lambda v: "some success"),
    ...       any_(then=lambda: "catch-all"))
    'one'

Structured serialization:
    >>> Success({"a": 1}).to_dict()
    {'Success': {'a': 1}}
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import (
    ChainContractError,
    EmptyChainError,
    ErrorCode,
    ErrorDetail,
    ExceptionInfo,
    MissingContextError,
    MissingInputError,
    NoMatchError,
    ResultContractError,
    UnwrapError,
    VerdictError,
)

# Config
from .foundation.config import VerdictSettings, clear_settings_cache, get_settings

# Result
from .foundation.result import Failure, Result, Success, collect_results, sequence, traverse

# Chain
from .runtime.chain import Chain, Let, Try, attempt_all

# Matching
from .runtime.matching import (
    Clause,
    Matcher,
    NoPattern,
    Predicate,
    Tag,
    TypeTag,
    Value,
    any_,
    either,
    failure,
    match,
    success,
)

# Observability
from .runtime.observability import configure_logging, get_logger, log_context

# Codecs
from .io import decode, encode, pack, unpack

__all__ = [
    "__version__",
    # Result
    "Result", "Success", "Failure", "sequence", "traverse", "collect_results",
    # Chain
    "attempt_all", "Chain", "Try", "Let",
    # Matching
    "match", "Matcher", "Clause", "Tag", "success", "failure", "either", "any_",
    "NoPattern", "Value", "Predicate", "TypeTag",
    # Errors
    "ErrorCode", "ErrorDetail", "ExceptionInfo", "VerdictError", "ResultContractError",
    "ChainContractError", "EmptyChainError", "MissingInputError", "MissingContextError",
    "NoMatchError", "UnwrapError",
    # Config
    "VerdictSettings", "get_settings", "clear_settings_cache",
    # Observability
    "configure_logging", "get_logger", "log_context",
    # Codecs
    "encode", "decode", "pack", "unpack",
]
