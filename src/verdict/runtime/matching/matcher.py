"""First-match-wins dispatch over a Result's variant, value, or type.

Clauses are tried in declaration order. A clause matches when its tag agrees
with the Result's variant and its pattern accepts the payload; the winning
handler is called with the payload and its return value is the match result.
If nothing matches, NoMatchError is raised: add a clause (``any_`` is the
catch-all) rather than relying on a silent default.

Functional form:
    >>> match(Success(1),
    ...       success(1, then=lambda: "one"),
    ...       success(then=lambda v: f"other {v}"),
    ...       failure(ValueError, then=lambda e: f"bad value: {e}"),
    ...       any_(then=lambda: "unhandled"))
    'one'

Registration form:
    >>> describe = Matcher()
    >>> @describe.success(lambda n: n > 100)
    ... def big(n): return "big"
    >>> @describe.any_()
    ... def rest(): return "rest"
    >>> describe(Success(500))
    'big'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable, TypeAlias, TypeVar

from verdict.foundation.calling import CallShape, call_shape
from verdict.foundation.config import get_settings
from verdict.foundation.errors import NoMatchError, ResultContractError
from verdict.foundation.result import Result
from verdict.runtime.observability import get_logger

from .patterns import NO_PATTERN, Pattern, as_pattern, pattern_matches

_log = get_logger("verdict.match")

Handler: TypeAlias = Callable[..., Any]
H = TypeVar("H", bound=Handler)


class Tag(StrEnum):
    """Which variants a clause accepts."""
    SUCCESS = "success"
    FAILURE = "failure"
    EITHER = "either"

    def accepts(self, result: Result[Any, Any]) -> bool:
        match self:
            case Tag.EITHER: return True
            case Tag.SUCCESS: return result.is_success()
            case Tag.FAILURE: return result.is_failure()


@dataclass(frozen=True, slots=True)
class Clause:
    """One (tag, pattern, handler) entry of a match declaration."""

    tag: Tag
    pattern: Pattern
    handler: Handler
    shape: CallShape = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tag", Tag(self.tag))
        object.__setattr__(self, "pattern", as_pattern(self.pattern))
        object.__setattr__(self, "shape", call_shape(self.handler, inject_ctx=False))

    def matches(self, result: Result[Any, Any]) -> bool:
        return self.tag.accepts(result) and pattern_matches(self.pattern, result.value)

    def invoke(self, result: Result[Any, Any]) -> Any:
        return self.shape.call(self.handler, result.value)


# ═════════════════════════════════════════════════════════════════════════════
# Clause Builders
# ═════════════════════════════════════════════════════════════════════════════


def success(pattern: object = NO_PATTERN, *, then: Handler) -> Clause:
    """Clause for Success results, optionally narrowed by a value, predicate, or type."""
    return Clause(Tag.SUCCESS, as_pattern(pattern), then)


def failure(pattern: object = NO_PATTERN, *, then: Handler) -> Clause:
    """Clause for Failure results, optionally narrowed by a value, predicate, or type."""
    return Clause(Tag.FAILURE, as_pattern(pattern), then)


def either(pattern: object = NO_PATTERN, *, then: Handler) -> Clause:
    """Clause for both variants, optionally narrowed by a value, predicate, or type."""
    return Clause(Tag.EITHER, as_pattern(pattern), then)


def any_(*, then: Handler) -> Clause:
    """Catch-all clause: matches every Result."""
    return Clause(Tag.EITHER, NO_PATTERN, then)


# ═════════════════════════════════════════════════════════════════════════════
# Dispatch
# ═════════════════════════════════════════════════════════════════════════════


def match(result: Result[Any, Any], *clauses: Clause | Matcher) -> Any:
    """Invoke the handler of the first clause matching result and return its value.

    Matcher arguments contribute their registered clauses in place.

    Raises:
        ResultContractError: If result is not a Result, or an argument is not a Clause/Matcher
        NoMatchError: If no clause matches
    """
    if not isinstance(result, Result):
        raise ResultContractError(f"match expected a Result, got {type(result).__name__}", details=repr(result))
    ordered = _flatten(clauses)
    for clause in ordered:
        if clause.matches(result):
            return clause.invoke(result)
    if get_settings().matcher.log_misses:
        _log.debug("no clause matched", result=repr(result), clauses=len(ordered))
    raise NoMatchError(result, clauses=len(ordered))


def _flatten(clauses: tuple[Clause | Matcher, ...]) -> list[Clause]:
    ordered: list[Clause] = []
    for item in clauses:
        if isinstance(item, Clause):
            ordered.append(item)
        elif isinstance(item, Matcher):
            ordered.extend(item.clauses)
        else:
            raise ResultContractError(f"expected a Clause or Matcher, got {type(item).__name__}", details=repr(item))
    return ordered


class Matcher:
    """Reusable, ordered clause set with decorator registration.

    Decorators register in definition order and return the handler unchanged.
    """

    __slots__ = ("_clauses",)

    def __init__(self, *clauses: Clause) -> None:
        self._clauses: list[Clause] = list(_flatten(clauses))

    @property
    def clauses(self) -> tuple[Clause, ...]:
        return tuple(self._clauses)

    def add(self, clause: Clause) -> Matcher:
        """Append a clause; returns self for chaining."""
        self._clauses.extend(_flatten((clause,)))
        return self

    def _register(self, tag: Tag, pattern: object) -> Callable[[H], H]:
        def decorator(handler: H) -> H:
            self._clauses.append(Clause(tag, as_pattern(pattern), handler))
            return handler
        return decorator

    def success(self, pattern: object = NO_PATTERN) -> Callable[[H], H]:
        return self._register(Tag.SUCCESS, pattern)

    def failure(self, pattern: object = NO_PATTERN) -> Callable[[H], H]:
        return self._register(Tag.FAILURE, pattern)

    def either(self, pattern: object = NO_PATTERN) -> Callable[[H], H]:
        return self._register(Tag.EITHER, pattern)

    def any_(self) -> Callable[[H], H]:
        return self._register(Tag.EITHER, NO_PATTERN)

    def __call__(self, result: Result[Any, Any]) -> Any:
        return match(result, *self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    def __repr__(self) -> str:
        return f"Matcher({len(self._clauses)} clauses)"
