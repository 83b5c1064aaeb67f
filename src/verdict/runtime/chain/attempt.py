"""Sequential step execution with railway-oriented short-circuiting.

A chain is an ordered list of steps. Each step receives the previous step's
Success payload; the first Failure stops the chain and is returned as-is.

Two step kinds:
- Try: exceptions raised by the body become Failure(exception)
- Let: the body must return a Result; its exceptions propagate

Example:
    >>> attempt_all(
    ...     Try(lambda: 1),
    ...     Try(lambda n: n + 1),
    ... )
    Success(2)

    >>> attempt_all(
    ...     Try(lambda ctx: ctx.repo.load(order_id)),
    ...     Let(lambda order: validate(order)),
    ...     Try(lambda order, ctx: ctx.gateway.charge(order)),
    ...     context=services,
    ... )

    Or with the builder:
    >>> Chain(services).try_(load).let(validate).try_(charge).run()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, TypeAlias

from verdict.foundation.calling import MISSING, CallShape, call_shape
from verdict.foundation.config import get_settings
from verdict.foundation.errors import (
    ChainContractError,
    EmptyChainError,
    MissingContextError,
    MissingInputError,
)
from verdict.foundation.result import DEFAULT_CATCH, Failure, Result, Success
from verdict.runtime.observability import get_logger

_log = get_logger("verdict.chain")

Body: TypeAlias = Callable[..., Any]
Catch: TypeAlias = "type[Exception] | tuple[type[Exception], ...]"


# ═════════════════════════════════════════════════════════════════════════════
# Step Descriptors
# ═════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Try:
    """Step whose exceptions are captured as Failure(exception).

    Plain return values are wrapped in Success; Results are used as-is.
    Only exceptions matching ``catch`` are captured, others propagate.

    A body whose signature cannot be inspected is assumed to take an optional
    payload. As a first step it is called with no arguments, so a missing
    argument surfaces as a captured TypeError rather than MissingInputError.
    """

    kind: ClassVar[str] = "try"

    body: Body
    catch: tuple[type[Exception], ...] = DEFAULT_CATCH
    shape: CallShape = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "catch", _normalize_catch(self.catch))
        object.__setattr__(self, "shape", call_shape(self.body))

    def execute(self, payload: object, ctx: object) -> Result[Any, Any]:
        try:
            out = self.shape.call(self.body, payload, ctx)
        except self.catch as exc:
            _log.debug("step raised; captured as failure", step=_body_name(self.body), error=type(exc).__name__)
            return Failure(exc)
        return out if isinstance(out, Result) else Success(out)


@dataclass(frozen=True, slots=True)
class Let:
    """Unguarded step: the body must return a Result, and exceptions propagate."""

    kind: ClassVar[str] = "let"

    body: Body
    shape: CallShape = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "shape", call_shape(self.body))

    def execute(self, payload: object, ctx: object) -> Result[Any, Any]:
        out = self.shape.call(self.body, payload, ctx)
        if not isinstance(out, Result):
            raise ChainContractError(
                f"Let step {_body_name(self.body)} must return a Result, got {type(out).__name__}",
                details=repr(out),
            )
        return out


Step: TypeAlias = "Try | Let"


# ═════════════════════════════════════════════════════════════════════════════
# Runner
# ═════════════════════════════════════════════════════════════════════════════


def attempt_all(*steps: Step, context: object | None = None) -> Result[Any, Any]:
    """Run steps in order, threading Success payloads, stopping at the first Failure.

    Args:
        *steps: Try/Let step descriptors, executed strictly in order
        context: Optional object handed to bodies that declare a ``ctx`` parameter

    Returns:
        The last step's Result, or the first Failure

    Raises:
        EmptyChainError: If no steps are given
        MissingInputError: If the first step requires a payload
        MissingContextError: If a step asks for ``ctx`` and no context was given
        ChainContractError: If a step is not a Try/Let, or a Let returns a non-Result
    """
    if not steps:
        raise EmptyChainError("attempt_all requires at least one step")
    for index, step in enumerate(steps):
        if not isinstance(step, (Try, Let)):
            raise ChainContractError(f"step {index} is {type(step).__name__}, expected Try or Let", details=repr(step))

    log_steps = get_settings().chain.log_steps
    result: Result[Any, Any] | None = None
    for index, step in enumerate(steps):
        result = _run_step(step, index, result, context)
        if log_steps:
            _log.debug("step executed", index=index, kind=step.kind, step=_body_name(step.body), outcome=result.tag)
        if result.is_failure():
            if skipped := len(steps) - index - 1:
                _log.debug("chain short-circuited", failed_step=index, skipped=skipped)
            break
    return result  # type: ignore[return-value]


def _run_step(step: Step, index: int, previous: Result[Any, Any] | None, context: object | None) -> Result[Any, Any]:
    if step.shape.wants_ctx and context is None:
        raise MissingContextError(f"step {index} ({_body_name(step.body)}) declares ctx but no context was supplied")
    if previous is None:
        if step.shape.requires_payload:
            raise MissingInputError(
                f"first step {_body_name(step.body)} requires the previous payload, but there is none",
            )
        return step.execute(MISSING, context)
    return step.execute(previous.value, context)


# ═════════════════════════════════════════════════════════════════════════════
# Builder
# ═════════════════════════════════════════════════════════════════════════════


class Chain:
    """Immutable fluent builder over attempt_all.

    Each method returns a new Chain, so partial chains can be shared and
    extended independently.

    Example:
        >>> base = Chain().try_(lambda: 2)
        >>> base.try_(lambda n: n * 10).run()
        Success(20)
        >>> (base >> Try(lambda n: n + 1)).run()
        Success(3)
    """

    __slots__ = ("_steps", "_context")

    def __init__(self, context: object | None = None, steps: tuple[Step, ...] = ()) -> None:
        self._context = context
        self._steps = steps

    @property
    def steps(self) -> tuple[Step, ...]:
        return self._steps

    @property
    def context(self) -> object | None:
        return self._context

    def then(self, step: Step) -> Chain:
        """Append a prebuilt Try/Let step."""
        if not isinstance(step, (Try, Let)):
            raise ChainContractError(f"expected Try or Let, got {type(step).__name__}", details=repr(step))
        return Chain(self._context, (*self._steps, step))

    def try_(self, body: Body, *, catch: Catch = DEFAULT_CATCH) -> Chain:
        return self.then(Try(body, catch))  # type: ignore[arg-type]

    def let(self, body: Body) -> Chain:
        return self.then(Let(body))

    def with_context(self, context: object) -> Chain:
        """Same steps, different context."""
        return Chain(context, self._steps)

    def run(self) -> Result[Any, Any]:
        return attempt_all(*self._steps, context=self._context)

    __call__ = run

    def __rshift__(self, other: Step | Chain) -> Chain:
        """Append a step, or all steps of another chain (keeping this chain's context)."""
        if isinstance(other, Chain):
            return Chain(self._context, (*self._steps, *other._steps))
        return self.then(other)

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        names = [f"{s.kind}:{_body_name(s.body)}" for s in self._steps]
        return f"Chain({' -> '.join(names)})"


# ═════════════════════════════════════════════════════════════════════════════
# Helpers
# ═════════════════════════════════════════════════════════════════════════════


def _normalize_catch(catch: Catch) -> tuple[type[Exception], ...]:
    kinds = catch if isinstance(catch, tuple) else (catch,)
    if not kinds or not all(isinstance(k, type) and issubclass(k, Exception) for k in kinds):
        raise ChainContractError("catch must be an Exception subclass or a non-empty tuple of them", details=repr(catch))
    return kinds


def _body_name(body: Body) -> str:
    return getattr(body, "__qualname__", None) or type(body).__name__
