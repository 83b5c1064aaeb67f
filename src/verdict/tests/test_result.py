"""Tests for the Success/Failure result type.

Validates:
- Functor and monad laws
- Same-variant flattening and immutability
- Logical combinators and the asymmetric append
- Contract violations for non-Result returns
- Display and structured serialization
"""

from __future__ import annotations

import copy
import pickle
from dataclasses import dataclass
from typing import Callable

import pytest
from pydantic import BaseModel

from verdict import (
    ErrorCode,
    Failure,
    Result,
    ResultContractError,
    Success,
    UnwrapError,
    collect_results,
    sequence,
    traverse,
)


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Functor & Monad Laws
# ═════════════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize("v", [0, 1, "text", [1, 2], None])
def test_map_applies_to_success(v: object) -> None:
    """Success(v).map(f) == Success(f(v))"""
    f: Callable[[object], object] = lambda x: (x, "seen")
    assert Success(v).map(f) == Success(f(v))


def test_map_skips_failure() -> None:
    """Failure(v).map(f) == Failure(v), and f is never called."""
    calls: list[object] = []
    result = Failure("fail").map(calls.append)
    assert result == Failure("fail")
    assert calls == []


def test_functor_composition() -> None:
    """Functor law: fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + 1
    g: Callable[[int], int] = lambda x: x * 2
    assert Success(5).map(lambda x: f(g(x))) == Success(5).map(g).map(f)


def test_monad_left_identity() -> None:
    """Monad law: return a >>= f = f a"""
    f: Callable[[int], Result[int, str]] = lambda x: Success(x * 2)
    assert Success(42).and_then(f) == f(42)


def test_monad_right_identity() -> None:
    """Monad law: m >>= return = m"""
    m: Result[int, str] = Success(42)
    assert m.and_then(Success) == m


def test_monad_associativity() -> None:
    """Monad law: (m >>= f) >>= g = m >>= (\\x -> f x >>= g)"""
    m: Result[int, str] = Success(5)
    f: Callable[[int], Result[int, str]] = lambda x: Success(x + 1)
    g: Callable[[int], Result[int, str]] = lambda x: Success(x * 2)
    assert m.and_then(f).and_then(g) == m.and_then(lambda x: f(x).and_then(g))


# ═════════════════════════════════════════════════════════════════════════════
# Construction & Invariants
# ═════════════════════════════════════════════════════════════════════════════


def test_same_variant_nesting_flattens() -> None:
    """Success(Success(v)) == Success(v) and Failure(Failure(v)) == Failure(v)."""
    inner = Success(1)
    assert Success(inner) is inner
    assert Success(Success(Success("deep"))) == Success("deep")
    assert Failure(Failure("cause")) == Failure("cause")


def test_opposite_variant_nesting_is_kept() -> None:
    """Success(Failure(v)) is a Success whose payload is a Failure."""
    nested = Success(Failure(1))
    assert nested.is_success()
    assert nested.value == Failure(1)

    wrapped = Failure(Success(1))
    assert wrapped.is_failure()
    assert wrapped.value == Success(1)


def test_result_base_is_abstract() -> None:
    """Result itself cannot be constructed."""
    with pytest.raises(TypeError):
        Result(1)


def test_result_is_immutable() -> None:
    """Attributes cannot be assigned or deleted."""
    result = Success([1])
    with pytest.raises(AttributeError):
        result._value = 2  # type: ignore[misc]
    with pytest.raises(AttributeError):
        result.value = 2  # type: ignore[misc]
    with pytest.raises(AttributeError):
        del result._value
    assert result == Success([1])


def test_variant_accessors() -> None:
    """Predicates, tag, value and truthiness."""
    ok, bad = Success(42), Failure("failed")
    assert ok.is_success() and not ok.is_failure()
    assert bad.is_failure() and not bad.is_success()
    assert (ok.tag, bad.tag) == ("Success", "Failure")
    assert (ok.value, bad.value) == (42, "failed")
    assert bool(ok) is True
    assert bool(bad) is False


def test_equality_and_hashing() -> None:
    """Structural equality across variants and payloads."""
    assert Success(1) == Success(1)
    assert Success(1) != Failure(1)
    assert Success(1) != Success(2)
    assert Success(1) != 1
    assert len({Success(1), Success(1), Failure(1)}) == 2


def test_structural_pattern_matching() -> None:
    """Variants work with Python's match statement."""
    match Success(3):
        case Failure(_):
            outcome = "failure"
        case Success(value=v):
            outcome = f"success {v}"
    assert outcome == "success 3"


def test_pickle_and_copy() -> None:
    """Results survive pickling and copying."""
    result = Success({"items": [1, 2]})
    assert pickle.loads(pickle.dumps(result)) == result
    assert copy.deepcopy(result) == result
    assert copy.copy(Failure("x")) == Failure("x")


# ═════════════════════════════════════════════════════════════════════════════
# Combinators
# ═════════════════════════════════════════════════════════════════════════════


def test_and_combinator() -> None:
    """Success.and_ returns other; Failure.and_ returns self."""
    assert Success(1).and_(Success(2)) == Success(2)
    assert Success(1).and_(Failure(2)) == Failure(2)
    assert Failure(1).and_(Success(2)) == Failure(1)


def test_or_combinator() -> None:
    """Failure.or_ returns other; Success.or_ returns self."""
    assert Failure(1).or_(Success(1)) == Success(1)
    assert Success(1).or_(Success(2)) == Success(1)
    assert Failure(1).or_(Failure(2)) == Failure(2)


def test_lazy_operands_evaluated_only_when_needed() -> None:
    """Callable operands of and_/or_ run only on the branch that needs them."""
    calls: list[str] = []

    def fallback() -> Result[int, str]:
        calls.append("called")
        return Success(99)

    assert Failure(1).and_(fallback) == Failure(1)
    assert Success(1).or_(fallback) == Success(1)
    assert calls == []

    assert Success(1).and_(fallback) == Success(99)
    assert Failure(1).or_(fallback) == Success(99)
    assert calls == ["called", "called"]


def test_lazy_operand_must_return_result() -> None:
    """A lazy operand returning a plain value is a contract violation."""
    with pytest.raises(ResultContractError):
        Success(1).and_(lambda: 2)
    with pytest.raises(ResultContractError):
        Failure(1).or_(lambda: 2)


def test_and_or_reject_plain_operands() -> None:
    """Non-Result, non-callable operands fail loudly regardless of variant."""
    with pytest.raises(ResultContractError):
        Failure(1).and_(2)  # type: ignore[arg-type]
    with pytest.raises(ResultContractError):
        Success(1).or_("x")  # type: ignore[arg-type]


def test_and_then_chains_on_success() -> None:
    """and_then returns f's Result on Success; flat_map and >> are aliases."""
    assert Success(5).and_then(lambda x: Success(x * 2)) == Success(10)
    assert Success(5).and_then(lambda x: Failure("failed")) == Failure("failed")
    assert Success(5).flat_map(lambda x: Success(x + 1)) == Success(6)
    assert (Success(5) >> (lambda x: Success(x - 1))) == Success(4)


def test_and_then_skips_failure() -> None:
    """and_then on Failure returns self without calling f."""
    calls: list[object] = []
    failed = Failure("fail")
    assert failed.and_then(lambda x: calls.append(x) or Success(x)) is failed
    assert calls == []


def test_and_then_rejects_non_result() -> None:
    """A function returning a plain value is a contract violation, never auto-wrapped."""
    with pytest.raises(ResultContractError) as exc_info:
        Success(1).and_then(lambda x: x + 1)
    assert exc_info.value.error.code == ErrorCode.CONTRACT_VIOLATION
    assert isinstance(exc_info.value, TypeError)


def test_or_else() -> None:
    """or_else recovers from Failure and passes Success through untouched."""
    assert Failure("fail").or_else(lambda e: Success(f"recovered {e}")) == Success("recovered fail")
    assert Success(5).or_else(lambda _: Success(42)) == Success(5)
    with pytest.raises(ResultContractError):
        Failure("fail").or_else(lambda e: e)


def test_append_is_asymmetric() -> None:
    """Successes advance to the newer value; the first failure sticks."""
    assert Success(1) << Success(2) == Success(2)
    assert Failure(1) << Failure(2) == Failure(1)
    assert Success(1) << Failure(2) == Failure(2)
    assert Failure(1) << Success(2) == Failure(1)
    assert Success(1) << Success(2) << Success(3) == Success(3)
    assert Failure("first") << Failure("second") << Failure("third") == Failure("first")


def test_append_requires_result() -> None:
    with pytest.raises(ResultContractError):
        Success(1) << 2  # type: ignore[operator]


def test_map_failure_and_bimap() -> None:
    """map_failure and bimap transform the matching side only."""
    assert Failure("fail").map_failure(str.upper) == Failure("FAIL")
    assert Success(42).map_failure(str.upper) == Success(42)
    assert Success(5).bimap(lambda x: x * 2, str.upper) == Success(10)
    assert Failure("e").bimap(lambda x: x * 2, str.upper) == Failure("E")


def test_try_then_captures_exceptions() -> None:
    """try_then wraps plain values and converts raised exceptions to Failure."""
    assert Success("42").try_then(int) == Success(42)

    failed = Success("x").try_then(int)
    assert failed.is_failure()
    assert isinstance(failed.value, ValueError)

    assert Success(1).try_then(lambda _: Failure("explicit")) == Failure("explicit")
    assert Failure("kept").try_then(int) == Failure("kept")

    with pytest.raises(ValueError):
        Success("x").try_then(int, catch=(KeyError,))


def test_inspect_and_fold() -> None:
    """inspect runs side effects on the matching variant; fold is exhaustive."""
    seen: list[object] = []
    ok = Success(42)
    assert ok.inspect(seen.append) is ok
    assert Failure("e").inspect(seen.append) == Failure("e")
    Failure("e").inspect_failure(seen.append)
    assert seen == [42, "e"]

    assert ok.fold(lambda v: f"ok {v}", lambda e: f"err {e}") == "ok 42"
    assert Failure("x").fold(lambda v: f"ok {v}", lambda e: f"err {e}") == "err x"


# ═════════════════════════════════════════════════════════════════════════════
# Extraction
# ═════════════════════════════════════════════════════════════════════════════


def test_unwrap_variants() -> None:
    """unwrap/unwrap_failure raise UnwrapError on the wrong variant."""
    assert Success(5).unwrap() == 5
    assert Failure("e").unwrap_failure() == "e"
    with pytest.raises(UnwrapError):
        Failure("e").unwrap()
    with pytest.raises(RuntimeError):
        Success(5).unwrap_failure()


def test_unwrap_defaults() -> None:
    assert Success(5).unwrap_or(10) == 5
    assert Failure("fail").unwrap_or(10) == 10
    assert Failure("fail").unwrap_or_else(len) == 4
    with pytest.raises(UnwrapError, match="loading config: missing"):
        Failure("missing").expect("loading config")


def test_conversions() -> None:
    """to_tuple and iteration expose the payload on Success only."""
    assert Success(42).to_tuple() == (42, None)
    assert Failure("fail").to_tuple() == (None, "fail")
    assert list(Success(1)) == [1]
    assert list(Failure(1)) == []


def test_attempt() -> None:
    """Result.attempt converts caught exceptions into Failure."""
    assert Result.attempt(int, "42") == Success(42)
    assert Result.attempt(lambda: Failure("already")) == Failure("already")

    failed = Result.attempt(int, "not a number")
    assert failed.is_failure()
    assert isinstance(failed.value, ValueError)

    with pytest.raises(ValueError):
        Result.attempt(int, "x", catch=(KeyError,))


# ═════════════════════════════════════════════════════════════════════════════
# Display & Structured Serialization
# ═════════════════════════════════════════════════════════════════════════════


class Point(BaseModel):
    x: int
    y: int


@dataclass
class Item:
    sku: str
    qty: int


def test_display_is_payload_text() -> None:
    """str() omits the tag; repr() shows it."""
    assert str(Success(42)) == "42"
    assert str(Failure("boom")) == "boom"
    assert repr(Success(42)) == "Success(42)"
    assert repr(Failure("boom")) == "Failure('boom')"


def test_to_dict_top_level_key() -> None:
    """Structured form has exactly one key naming the variant."""
    assert Success({"a": 1}).to_dict() == {"Success": {"a": 1}}
    assert Failure("boom").to_dict() == {"Failure": "boom"}


def test_to_dict_is_recursive() -> None:
    """Nested Results, models, dataclasses and exceptions are serialized recursively."""
    assert Success(Failure(2)).to_dict() == {"Success": {"Failure": 2}}
    assert Success({"p": Point(x=1, y=2), "items": (Item("a", 3),)}).to_dict() == {
        "Success": {"p": {"x": 1, "y": 2}, "items": [{"sku": "a", "qty": 3}]},
    }
    assert Failure(ValueError("bad input")).to_dict() == {
        "Failure": {"type": "ValueError", "message": "bad input", "module": "builtins", "qualified_name": "ValueError"},
    }


def test_from_dict() -> None:
    """from_dict rebuilds variants, including nested ones."""
    assert Result.from_dict({"Success": {"a": 1}}) == Success({"a": 1})
    assert Result.from_dict({"Success": {"Failure": 2}}) == Success(Failure(2))
    with pytest.raises(ResultContractError):
        Result.from_dict({"Success": 1, "Failure": 2})
    with pytest.raises(ResultContractError):
        Result.from_dict({"Maybe": 1})


# ═════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═════════════════════════════════════════════════════════════════════════════


def test_sequence() -> None:
    """sequence fails fast with the first Failure."""
    assert sequence([Success(1), Success(2), Success(3)]) == Success([1, 2, 3])
    assert sequence([Success(1), Failure("e1"), Failure("e2")]) == Failure("e1")
    assert sequence([]) == Success([])


def test_traverse_stops_at_first_failure() -> None:
    calls: list[str] = []

    def parse(s: str) -> Result[int, str]:
        calls.append(s)
        return Success(int(s)) if s.isdigit() else Failure(f"invalid: {s}")

    assert traverse(["1", "2"], parse) == Success([1, 2])
    calls.clear()
    assert traverse(["1", "bad", "3"], parse) == Failure("invalid: bad")
    assert calls == ["1", "bad"]


def test_collect_results_accumulates_failures() -> None:
    assert collect_results([Success(1), Failure("e1"), Success(3), Failure("e2")]) == Failure(["e1", "e2"])
    assert collect_results([Success(1), Success(2)]) == Success([1, 2])
