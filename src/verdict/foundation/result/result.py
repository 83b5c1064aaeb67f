"""Success/Failure result type for type-safe error handling.

Implements a two-variant union with full monadic operations:
- Functor: map, map_failure
- Bifunctor: bimap
- Monad: and_then / flat_map / ``>>``
- Logical combinators: and_, or_, ``<<``
- Railway-oriented composition with exception capture (attempt, try_then)

Performance notes:
- Uses __slots__ for minimal memory footprint
- Variant is a class-level flag, so branching is a single attribute read
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, ClassVar, Generic, NoReturn, TypeVar

from verdict.foundation.errors import ResultContractError, UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from verdict.runtime.matching import Clause

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")

DEFAULT_CATCH: tuple[type[Exception], ...] = (Exception,)


class Result(Generic[T, E]):
    """Discriminated union representing success or failure.

    Never instantiated directly: construct ``Success(value)`` or
    ``Failure(value)``. Wrapping a Result in its own variant returns the inner
    Result unchanged, so ``Success(Success(1)) == Success(1)``.

    Examples:
        >>> Success(42).map(lambda x: x * 2)
        Success(84)
        >>> Failure("fail").map(lambda x: x * 2)
        Failure('fail')
        >>> Success(5).and_then(lambda x: Success(x * 2) if x > 0 else Failure("neg"))
        Success(10)
        >>> Success(1) << Success(2), Failure(1) << Failure(2)
        (Success(2), Failure(1))
    """

    __slots__ = ("_value",)
    __match_args__ = ("value",)

    _is_success: ClassVar[bool]
    _tag: ClassVar[str]

    _value: T | E

    def __new__(cls, value: Any) -> Result[T, E]:
        if cls is Result:
            raise TypeError("Result is abstract; construct Success(...) or Failure(...)")
        if isinstance(value, cls):
            return value
        self = object.__new__(cls)
        object.__setattr__(self, "_value", value)
        return self

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type[Result[T, E]], tuple[T | E]]:
        return type(self), (self._value,)

    # ─── Type Checking ───────────────────────────────────────────────

    def is_success(self) -> bool:
        return self._is_success

    def is_failure(self) -> bool:
        return not self._is_success

    @property
    def tag(self) -> str:
        """Variant name: ``"Success"`` or ``"Failure"``."""
        return self._tag

    @property
    def value(self) -> T | E:
        """Unwrapped payload, regardless of variant."""
        return self._value

    # ─── Value Extraction ──────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Success payload. Raises UnwrapError on Failure."""
        if self._is_success:
            return self._value  # type: ignore[return-value]
        raise UnwrapError(f"unwrap() on {self!r}")

    def unwrap_failure(self) -> E:
        """Extract Failure payload. Raises UnwrapError on Success."""
        if not self._is_success:
            return self._value  # type: ignore[return-value]
        raise UnwrapError(f"unwrap_failure() on {self!r}")

    def unwrap_or(self, default: T) -> T:
        return self._value if self._is_success else default  # type: ignore[return-value]

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        """Extract Success payload or compute one from the failure via f."""
        return self._value if self._is_success else f(self._value)  # type: ignore[return-value,arg-type]

    def expect(self, msg: str) -> T:
        """Extract Success payload with a custom error message."""
        if self._is_success:
            return self._value  # type: ignore[return-value]
        raise UnwrapError(f"{msg}: {self._value}")

    # ─── Functor Operations ────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to Success payload. Signature: Result[T,E] → (T→U) → Result[U,E]"""
        return Success(f(self._value)) if self._is_success else self  # type: ignore[arg-type,return-value]

    def map_failure(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to Failure payload. Signature: Result[T,E] → (E→F) → Result[T,F]"""
        return Failure(f(self._value)) if not self._is_success else self  # type: ignore[arg-type,return-value]

    def bimap(self, on_success: Callable[[T], U], on_failure: Callable[[E], F]) -> Result[U, F]:
        """Apply on_success if Success, on_failure if Failure. Variant is preserved."""
        if self._is_success:
            return Success(on_success(self._value))  # type: ignore[arg-type]
        return Failure(on_failure(self._value))  # type: ignore[arg-type]

    # ─── Monad Operations ──────────────────────────────────────────────

    def and_then(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind (>>=). Chain operations that can fail.

        f must return a Result; anything else raises ResultContractError.

        Example:
            >>> Success("42").and_then(lambda s: Success(int(s))).and_then(lambda n: Success(n * 2))
            Success(84)
        """
        if not self._is_success:
            return self  # type: ignore[return-value]
        return _ensure_result(f(self._value), "and_then")  # type: ignore[arg-type]

    flat_map = and_then
    __rshift__ = and_then

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """On Failure, apply f to recover. On Success, pass through. f must return a Result."""
        if self._is_success:
            return self  # type: ignore[return-value]
        return _ensure_result(f(self._value), "or_else")  # type: ignore[arg-type]

    def try_then(
        self,
        f: Callable[[T], U | Result[U, Any]],
        *,
        catch: tuple[type[Exception], ...] = DEFAULT_CATCH,
    ) -> Result[U, Any]:
        """Like and_then, but an exception raised by f becomes a Failure.

        Plain return values are wrapped in Success; Results pass through.
        Exceptions outside ``catch`` propagate.
        """
        if not self._is_success:
            return self  # type: ignore[return-value]
        return Result.attempt(f, self._value, catch=catch)

    # ─── Logical Combinators ─────────────────────────────────────────────

    def and_(self, other: Result[U, E] | Callable[[], Result[U, E]]) -> Result[U, E]:
        """Return other if Success, else self. Short-circuit AND.

        other may be a zero-argument callable; it is only called on Success.
        """
        _check_operand(other, "and_")
        if not self._is_success:
            return self  # type: ignore[return-value]
        return _force(other, "and_")

    def or_(self, other: Result[T, F] | Callable[[], Result[T, F]]) -> Result[T, F]:
        """Return self if Success, else other. Short-circuit OR for fallbacks."""
        _check_operand(other, "or_")
        if self._is_success:
            return self  # type: ignore[return-value]
        return _force(other, "or_")

    def __lshift__(self, other: Result[U, E]) -> Result[U, E]:
        """Append: successes advance to the newer value, the first failure sticks.

        ``Success(a) << Success(b)`` is ``Success(b)``;
        ``Failure(a) << Failure(b)`` is ``Failure(a)``.
        """
        _ensure_result(other, "<<")
        return other if self._is_success else self  # type: ignore[return-value]

    # ─── Inspection & Utilities ──────────────────────────────────────────

    def inspect(self, f: Callable[[T], object]) -> Result[T, E]:
        """Call f with Success payload for side effects, return self."""
        if self._is_success:
            f(self._value)  # type: ignore[arg-type]
        return self

    def inspect_failure(self, f: Callable[[E], object]) -> Result[T, E]:
        """Call f with Failure payload for side effects, return self."""
        if not self._is_success:
            f(self._value)  # type: ignore[arg-type]
        return self

    # ─── Case Analysis ───────────────────────────────────────────────────

    def fold(self, on_success: Callable[[T], U], on_failure: Callable[[E], U]) -> U:
        """Two-armed exhaustive case analysis."""
        return on_success(self._value) if self._is_success else on_failure(self._value)  # type: ignore[arg-type]

    def match(self, *clauses: Clause) -> Any:
        """Dispatch on this Result with ordered matcher clauses.

        Example:
            >>> from verdict import success, any_
            >>> Success(1).match(success(1, then=lambda: "one"), any_(then=lambda: "other"))
            'one'
        """
        from verdict.runtime.matching import match
        return match(self, *clauses)

    # ─── Constructors ────────────────────────────────────────────────────

    @staticmethod
    def attempt(
        fn: Callable[..., U | Result[U, Any]],
        *args: Any,
        catch: tuple[type[Exception], ...] = DEFAULT_CATCH,
        **kwargs: Any,
    ) -> Result[U, Any]:
        """Call fn, converting caught exceptions into Failure(exception).

        Plain return values are wrapped in Success; Results pass through.

        Example:
            >>> Result.attempt(int, "42")
            Success(42)
            >>> Result.attempt(int, "x").is_failure()
            True
        """
        try:
            out = fn(*args, **kwargs)
        except catch as exc:
            return Failure(exc)
        return out if isinstance(out, Result) else Success(out)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> Result[Any, Any]:
        """Rebuild a Result from its structured form (payload stays primitive)."""
        from .primitive import from_primitive
        return from_primitive(data)

    # ─── Conversion ────────────────────────────────────────────────────────

    def to_tuple(self) -> tuple[T | None, E | None]:
        """Convert to (success_value, failure_value) tuple."""
        return (self._value, None) if self._is_success else (None, self._value)  # type: ignore[return-value]

    def to_dict(self) -> dict[str, Any]:
        """Structured form: ``{"Success": payload}`` or ``{"Failure": payload}``, payload serialized recursively."""
        from .primitive import to_primitive
        return {self._tag: to_primitive(self._value)}

    # ─── Dunder Methods ──────────────────────────────────────────────────

    __bool__ = lambda self: self._is_success  # noqa: E731
    __hash__ = lambda self: hash((self._is_success, self._value))  # noqa: E731
    __repr__ = lambda self: f"{self._tag}({self._value!r})"  # noqa: E731

    def __str__(self) -> str:
        """Display form is the payload's own string form."""
        return str(self._value)

    def __eq__(self, other: object) -> bool:
        return self._is_success == other._is_success and self._value == other._value if isinstance(other, Result) else NotImplemented

    def __iter__(self) -> Iterator[T]:
        """Iterate: yields payload if Success, nothing if Failure."""
        if self._is_success:
            yield self._value  # type: ignore[misc]


class Success(Result[T, E]):
    """Success variant."""

    __slots__ = ()
    _is_success = True
    _tag = "Success"


class Failure(Result[T, E]):
    """Failure variant."""

    __slots__ = ()
    _is_success = False
    _tag = "Failure"


# ═══════════════════════════════════════════════════════════════════════════════
# Contract Checks
# ═══════════════════════════════════════════════════════════════════════════════


def _ensure_result(value: object, op: str) -> Result[Any, Any]:
    if not isinstance(value, Result):
        raise ResultContractError(f"{op} expected a Result, got {type(value).__name__}", details=repr(value))
    return value


def _check_operand(other: object, op: str) -> None:
    if not isinstance(other, Result) and not callable(other):
        raise ResultContractError(
            f"{op} expected a Result or a callable returning one, got {type(other).__name__}", details=repr(other),
        )


def _force(other: Result[Any, Any] | Callable[[], Result[Any, Any]], op: str) -> Result[Any, Any]:
    return other if isinstance(other, Result) else _ensure_result(other(), op)


# ═══════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═══════════════════════════════════════════════════════════════════════════════


def sequence(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Iterable[Result[T,E]] → Result[List[T], E]. Fail-fast on first Failure."""
    values: list[T] = []
    for r in results:
        if not r._is_success:
            return r  # type: ignore[return-value]
        values.append(r._value)  # type: ignore[arg-type]
    return Success(values)


def traverse(items: Iterable[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Map f over items, sequence results. Fail-fast: f is not called after the first Failure."""
    values: list[U] = []
    for item in items:
        r = _ensure_result(f(item), "traverse")
        if not r._is_success:
            return r
        values.append(r._value)
    return Success(values)


def collect_results(results: Iterable[Result[T, E]]) -> Result[list[T], list[E]]:
    """Collect all Results, accumulating ALL failures (not fail-fast)."""
    values: list[T] = []
    errors: list[E] = []
    for r in results:
        (values if r._is_success else errors).append(r._value)  # type: ignore[arg-type]
    return Success(values) if not errors else Failure(errors)
