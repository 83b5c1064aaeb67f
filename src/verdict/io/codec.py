"""Wire codecs for structured Results.

Provides orjson (JSON) and msgpack (binary) codecs over the structured form
``{"Success": payload}`` / ``{"Failure": payload}``.
Both are core dependencies - no fallback to stdlib json.

Usage:
    >>> from verdict.io import encode, decode
    >>> encode(Success({"a": 1}))
    b'{"Success":{"a":1}}'
    >>> decode(b'{"Failure":"boom"}')
    Failure('boom')
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

import msgpack
import orjson

from verdict.foundation.errors import ResultContractError
from verdict.foundation.result import Result, from_primitive

_ORJSON_OPTS = orjson.OPT_NON_STR_KEYS | orjson.OPT_UTC_Z


class CodecType(StrEnum):
    """Supported codec types."""
    ORJSON = "orjson"
    MSGPACK = "msgpack"


@runtime_checkable
class Codec(Protocol):
    """Protocol for Result codecs."""

    name: str
    content_type: str

    def encode(self, result: Result[Any, Any]) -> bytes: ...
    def decode(self, data: bytes) -> Result[Any, Any]: ...


# ═══════════════════════════════════════════════════════════════════════════════
# Codec Implementations
# ═══════════════════════════════════════════════════════════════════════════════

class OrjsonCodec:
    """orjson codec. Payload objects with no structured form are encoded via str()."""

    __slots__ = ()
    name = "orjson"
    content_type = "application/json"

    def encode(self, result: Result[Any, Any]) -> bytes:
        return orjson.dumps(_structured(result), option=_ORJSON_OPTS, default=str)

    def decode(self, data: bytes | str) -> Result[Any, Any]:
        return from_primitive(orjson.loads(data))


class MsgpackCodec:
    """MessagePack codec - binary protocol with smaller payloads than JSON."""

    __slots__ = ()
    name = "msgpack"
    content_type = "application/msgpack"

    def encode(self, result: Result[Any, Any]) -> bytes:
        return msgpack.packb(_structured(result), use_bin_type=True, strict_types=False, default=str)

    def decode(self, data: bytes) -> Result[Any, Any]:
        return from_primitive(msgpack.unpackb(data, raw=False, strict_map_key=False))


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════

_orjson = OrjsonCodec()
_msgpack = MsgpackCodec()

_CODECS: dict[str, Codec] = {"orjson": _orjson, "msgpack": _msgpack}


def get_codec(name: str | CodecType | None = None) -> Codec:
    """Get codec by name (default: orjson).

    Raises:
        KeyError: If no codec is registered under name
    """
    key = str(name) if name else "orjson"
    if key not in _CODECS:
        raise KeyError(f"unknown codec {key!r}; registered: {sorted(_CODECS)}")
    return _CODECS[key]


def register_codec(name: str, codec: Codec) -> None:
    """Register custom codec implementation."""
    _CODECS[name] = codec


# ═══════════════════════════════════════════════════════════════════════════════
# Direct Functions
# ═══════════════════════════════════════════════════════════════════════════════

def encode(result: Result[Any, Any]) -> bytes:
    """Encode to JSON bytes (orjson)."""
    return _orjson.encode(result)


def decode(data: bytes | str) -> Result[Any, Any]:
    """Decode JSON bytes/str into a Result (orjson)."""
    return _orjson.decode(data)


def encode_str(result: Result[Any, Any]) -> str:
    """Encode to JSON string (orjson)."""
    return _orjson.encode(result).decode()


def pack(result: Result[Any, Any]) -> bytes:
    """Encode to msgpack bytes."""
    return _msgpack.encode(result)


def unpack(data: bytes) -> Result[Any, Any]:
    """Decode msgpack bytes into a Result."""
    return _msgpack.decode(data)


def _structured(result: Result[Any, Any]) -> dict[str, Any]:
    if not isinstance(result, Result):
        raise ResultContractError(f"codecs encode Results, got {type(result).__name__}", details=repr(result))
    return result.to_dict()
