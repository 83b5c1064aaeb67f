"""Closed set of pattern kinds a matcher clause can test a payload against."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeAlias, assert_never

from verdict.foundation.errors import ResultContractError


@dataclass(frozen=True, slots=True)
class NoPattern:
    """Matches any payload."""


@dataclass(frozen=True, slots=True)
class Value:
    """Matches a payload equal to ``value``."""

    value: Any


@dataclass(frozen=True, slots=True)
class Predicate:
    """Matches when ``fn(payload)`` is truthy."""

    fn: Callable[[Any], object]


@dataclass(frozen=True, slots=True)
class TypeTag:
    """Matches an instance of ``kind`` (subclasses, ABCs and runtime-checkable protocols included)."""

    kind: type | tuple[type, ...]

    def __post_init__(self) -> None:
        kinds = self.kind if isinstance(self.kind, tuple) else (self.kind,)
        if not kinds or not all(isinstance(k, type) for k in kinds):
            raise ResultContractError("TypeTag needs a type or a non-empty tuple of types", details=repr(self.kind))


Pattern: TypeAlias = NoPattern | Value | Predicate | TypeTag

NO_PATTERN = NoPattern()


def as_pattern(obj: object) -> Pattern:
    """Infer the pattern kind of a bare clause argument.

    Types (or tuples of types) become TypeTag, other callables Predicate,
    everything else Value. Explicit pattern objects pass through.
    """
    match obj:
        case NoPattern() | Value() | Predicate() | TypeTag():
            return obj
        case type():
            return TypeTag(obj)
        case tuple() if obj and all(isinstance(k, type) for k in obj):
            return TypeTag(obj)
        case _ if callable(obj):
            return Predicate(obj)
        case _:
            return Value(obj)


def pattern_matches(pattern: Pattern, payload: object) -> bool:
    match pattern:
        case NoPattern():
            return True
        case Value(value=expected):
            return bool(expected == payload)
        case Predicate(fn=fn):
            return bool(fn(payload))
        case TypeTag(kind=kind):
            return isinstance(payload, kind)
        case _:
            assert_never(pattern)
