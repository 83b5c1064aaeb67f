"""Success/Failure result type with railway-oriented combinators."""

from .primitive import from_primitive, to_primitive
from .result import DEFAULT_CATCH, Failure, Result, Success, collect_results, sequence, traverse

__all__ = [
    "Result", "Success", "Failure", "DEFAULT_CATCH",
    "sequence", "traverse", "collect_results",
    "to_primitive", "from_primitive",
]
