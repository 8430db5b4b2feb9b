"""MessagePack codec for mpack.

This module provides encoding and decoding between value-model trees and the
MessagePack wire format.
"""

from __future__ import annotations

from .config import DEFAULT_CONFIG, CodecConfig
from .decoder import (
    Decoder,
    decode,
    decode_array,
    decode_bin,
    decode_bool,
    decode_extended,
    decode_float,
    decode_integer,
    decode_map,
    decode_nil,
    decode_str,
)
from .encoder import Encoder, encode
from .formats import Family, classify

__all__ = [
    "encode",
    "decode",
    "Encoder",
    "Decoder",
    "decode_nil",
    "decode_bool",
    "decode_integer",
    "decode_float",
    "decode_str",
    "decode_bin",
    "decode_extended",
    "decode_array",
    "decode_map",
    "CodecConfig",
    "DEFAULT_CONFIG",
    "Family",
    "classify",
]
