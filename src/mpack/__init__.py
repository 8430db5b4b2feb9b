"""mpack: MessagePack Codec

A Python library for the MessagePack binary serialization format: a compact,
self-describing, schema-less encoding for nil, booleans, integers, floats,
text, byte strings, arrays, maps and application-defined extension values.

Key Features:
- Explicit, immutable value model (pydantic-based)
- Narrowest wire representation for every value
- Distinct 32- and 64-bit floats, full unsigned 64-bit integer range
- Encode to bytes or any binary sink, decode from bytes or any binary source
- Typed accessors that check the decoded kind

Quick Start:
    >>> from mpack import decode, encode, to_python
    >>>
    >>> data = encode({"vehicle_id": 42, "depths": [1.5, 2.25], "active": True})
    >>> value = decode(data)
    >>> to_python(value)
    {'vehicle_id': 42, 'depths': [1.5, 2.25], 'active': True}

    >>> from mpack import Extended, Float32, decode_integer
    >>> encode(Float32(0.5))
    b'\\xca?\\x00\\x00\\x00'
    >>> decode_integer(encode(200)).value
    200
"""

from __future__ import annotations

from .codec import (
    DEFAULT_CONFIG,
    CodecConfig,
    Decoder,
    Encoder,
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
    encode,
)
from .exceptions import (
    DecodeError,
    EncodeError,
    MalformedStream,
    MPackError,
    TruncatedInput,
    TypeMismatch,
    UnsupportedType,
)
from .models import (
    VALUE_KINDS,
    Array,
    Bin,
    Bool,
    Extended,
    Float32,
    Float64,
    Integer,
    Map,
    Nil,
    Str,
    Value,
    to_python,
    to_value,
)
from .utils import encoded_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "decode",
    "Encoder",
    "Decoder",
    # Typed accessors
    "decode_nil",
    "decode_bool",
    "decode_integer",
    "decode_float",
    "decode_str",
    "decode_bin",
    "decode_extended",
    "decode_array",
    "decode_map",
    # Value model
    "Value",
    "Nil",
    "Bool",
    "Integer",
    "Float32",
    "Float64",
    "Str",
    "Bin",
    "Array",
    "Map",
    "Extended",
    "VALUE_KINDS",
    "to_value",
    "to_python",
    # Configuration
    "CodecConfig",
    "DEFAULT_CONFIG",
    # Exceptions
    "MPackError",
    "EncodeError",
    "UnsupportedType",
    "DecodeError",
    "MalformedStream",
    "TruncatedInput",
    "TypeMismatch",
    # Sizing
    "encoded_size",
    # Version
    "__version__",
]
