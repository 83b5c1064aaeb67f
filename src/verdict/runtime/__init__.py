"""Runtime components built on the Result type: chain runner, pattern matcher, observability."""

from .chain import Chain, Let, Step, Try, attempt_all
from .matching import (
    NO_PATTERN,
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
from .observability import configure_logging, get_logger, log_context

__all__ = [
    # Chain
    "Chain", "Let", "Step", "Try", "attempt_all",
    # Matching
    "match", "Matcher", "Clause", "Tag", "success", "failure", "either", "any_",
    "NoPattern", "Value", "Predicate", "TypeTag", "NO_PATTERN",
    # Observability
    "configure_logging", "get_logger", "log_context",
]
