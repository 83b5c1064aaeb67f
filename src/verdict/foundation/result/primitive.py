"""Recursive conversion between Results and plain JSON-compatible structures."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from verdict.foundation.errors import ExceptionInfo, JsonValue, ResultContractError

from .result import Failure, Result, Success

_PRIMITIVES = (str, int, float, bool, type(None))
_VARIANTS: dict[str, type[Result[Any, Any]]] = {"Success": Success, "Failure": Failure}


def to_primitive(obj: object) -> JsonValue:
    """Convert obj into JSON-compatible data. Nested Results become single-key dicts.

    Objects with no known structured form are returned unchanged; the codec
    decides whether it can encode them.
    """
    match obj:
        case Result():
            return obj.to_dict()
        case Enum():
            return to_primitive(obj.value)
        case str() | int() | float() | bool() | None:
            return obj
        case BaseModel():
            return obj.model_dump(mode="json")
        case BaseException():
            return ExceptionInfo.from_exception(obj).model_dump(mode="json")
        case Mapping():
            return {_key(k): to_primitive(v) for k, v in obj.items()}
        case list() | tuple() | set() | frozenset():
            return [to_primitive(v) for v in obj]
        case datetime() | date() | time():
            return obj.isoformat()
        case UUID() | Decimal():
            return str(obj)
        case _ if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
            return {f.name: to_primitive(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
        case _:
            return obj  # type: ignore[return-value]


def from_primitive(data: Mapping[str, Any]) -> Result[Any, Any]:
    """Rebuild a Result from ``{"Success": payload}`` / ``{"Failure": payload}``.

    Single-key variant mappings found anywhere inside the payload (directly,
    or within dicts and lists) are rebuilt as Results too. Everything else is
    left as decoded.

    Raises:
        ResultContractError: If data is not a single-key variant mapping
    """
    if not isinstance(data, Mapping) or len(data) != 1:
        raise ResultContractError("structured Result must be a mapping with exactly one key", details=repr(data))
    (tag, payload), = data.items()
    if (variant := _VARIANTS.get(tag)) is None:
        raise ResultContractError(f"unknown Result tag {tag!r}; expected 'Success' or 'Failure'", details=repr(data))
    return variant(_revive(payload))


def _revive(payload: Any) -> Any:
    match payload:
        case Mapping() if len(payload) == 1 and next(iter(payload)) in _VARIANTS:
            return from_primitive(payload)
        case Mapping():
            return {k: _revive(v) for k, v in payload.items()}
        case list():
            return [_revive(v) for v in payload]
        case _:
            return payload


def _key(k: object) -> str | int | float | bool | None:
    return k if isinstance(k, _PRIMITIVES) else str(k)
