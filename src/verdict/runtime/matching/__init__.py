"""Pattern matcher: ordered clauses over a Result's variant, value, or type."""

from .matcher import Clause, Handler, Matcher, Tag, any_, either, failure, match, success
from .patterns import NO_PATTERN, NoPattern, Pattern, Predicate, TypeTag, Value, as_pattern, pattern_matches

__all__ = [
    # Dispatch
    "match", "Matcher",
    # Clauses
    "Clause", "Handler", "Tag", "success", "failure", "either", "any_",
    # Patterns
    "Pattern", "NoPattern", "Value", "Predicate", "TypeTag", "NO_PATTERN", "as_pattern", "pattern_matches",
]
