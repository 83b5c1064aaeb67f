"""Call-shape introspection for user-supplied step bodies and handlers.

A body may take nothing, or a single positional payload. A parameter named
``ctx`` receives the caller's context and never counts as the payload
parameter. It is passed by keyword, except when it is the leading positional
parameter (``def step(ctx, order)``), where it is passed first by position.

Bodies whose signature cannot be introspected (some C callables) are treated
as taking an optional payload: they get the payload when there is one and are
called with no arguments otherwise.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Callable, TypeVar

from verdict.foundation.errors import ResultContractError

T = TypeVar("T")

CONTEXT_PARAM = "ctx"

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_KEYWORDABLE = (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)


class _Missing:
    """Sentinel for 'no payload yet' (the first step of a chain)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


@dataclass(frozen=True, slots=True)
class CallShape:
    """How a callable wants to be invoked.

    ``ctx_leading`` marks a ``ctx`` parameter that comes before the payload
    parameter, so it must be bound by position.
    """

    accepts_payload: bool
    requires_payload: bool
    wants_ctx: bool
    ctx_leading: bool = False

    def call(self, fn: Callable[..., T], payload: object = MISSING, ctx: object = None) -> T:
        """Invoke fn, passing payload and ctx only where the shape asks for them."""
        args = (payload,) if self.accepts_payload and payload is not MISSING else ()
        if not self.wants_ctx:
            return fn(*args)
        if self.ctx_leading:
            return fn(ctx, *args)
        return fn(*args, **{CONTEXT_PARAM: ctx})


_OPAQUE = CallShape(accepts_payload=True, requires_payload=False, wants_ctx=False)


def call_shape(fn: Callable[..., object], *, inject_ctx: bool = True) -> CallShape:
    """Derive the CallShape of fn.

    With inject_ctx=False a parameter named ``ctx`` is an ordinary parameter.

    Raises:
        ResultContractError: If fn is not callable or requires more than one positional argument
    """
    if not callable(fn):
        raise ResultContractError(f"expected a callable, got {type(fn).__name__}", details=repr(fn))
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return _OPAQUE

    params = list(sig.parameters.values())
    ctx_param = sig.parameters.get(CONTEXT_PARAM)
    wants_ctx = inject_ctx and ctx_param is not None and ctx_param.kind in _KEYWORDABLE
    positional = [p for p in params if p.kind in _POSITIONAL and not (wants_ctx and p is ctx_param)]
    required = [p for p in positional if p.default is inspect.Parameter.empty]
    if len(required) > 1:
        raise ResultContractError(
            f"{_name(fn)} requires {len(required)} positional arguments; at most one (the payload) is supported",
            details=str(sig),
        )
    var_positional = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
    # ctx bound by position when no positional parameter precedes it
    ctx_leading = (
        wants_ctx
        and ctx_param.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD
        and all(p.kind not in _POSITIONAL for p in params[:params.index(ctx_param)])
        and (bool(positional) or var_positional)
    )
    return CallShape(
        accepts_payload=bool(positional) or var_positional,
        requires_payload=bool(required),
        wants_ctx=wants_ctx,
        ctx_leading=ctx_leading,
    )


def _name(fn: Callable[..., object]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)
