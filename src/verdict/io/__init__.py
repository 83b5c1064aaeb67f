"""I/O: wire codecs for structured Results."""

from .codec import (
    Codec,
    CodecType,
    MsgpackCodec,
    OrjsonCodec,
    decode,
    encode,
    encode_str,
    get_codec,
    pack,
    register_codec,
    unpack,
)

__all__ = [
    "Codec", "CodecType", "OrjsonCodec", "MsgpackCodec",
    "get_codec", "register_codec",
    "encode", "decode", "encode_str", "pack", "unpack",
]
