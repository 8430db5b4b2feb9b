"""Encoded size calculation utilities.

This module provides functions to calculate the encoded size of values
without actually encoding them.
"""

from __future__ import annotations

from typing import Any

from ..codec import formats as fmt
from ..codec.config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError, UnsupportedType
from ..models.convert import to_value
from ..models.values import (
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
)


def encoded_size(value: Any, config: CodecConfig | None = None) -> int:
    """Calculate the number of bytes encode() would produce for a value.

    The size follows the same width policy as the encoder, so
    ``encoded_size(v) == len(encode(v))`` for every encodable value.

    Args:
        value: Value-model instance or plain Python data
        config: Codec configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Size in bytes

    Raises:
        UnsupportedType: If the value has no value-model counterpart
        EncodeError: If a container or payload is too large for the format,
            or containers nest deeper than max_depth

    Example:
        >>> encoded_size(200)
        2
        >>> encoded_size({"a": [1, 2]})
        6
    """
    config = config or DEFAULT_CONFIG
    return _size(to_value(value, config), config, config.max_depth)


def _size(value: Value, config: CodecConfig, depth: int) -> int:
    if isinstance(value, (Nil, Bool)):
        return 1

    if isinstance(value, Integer):
        return 1 + _integer_payload(value.value, config)

    if isinstance(value, Float32):
        return 5

    if isinstance(value, Float64):
        return 9

    if isinstance(value, Str):
        n = len(value.data)
        header = 1 if n <= fmt.FIXSTR_MAX else 1 + _length_width(n, True)
        return header + n

    if isinstance(value, Bin):
        n = len(value.data)
        return 1 + _length_width(n, True) + n

    if isinstance(value, (Array, Map)) and depth <= 0:
        raise EncodeError(f"Nesting exceeds max_depth={config.max_depth}")

    if isinstance(value, Array):
        header = _container_header(len(value.items))
        return header + sum(_size(item, config, depth - 1) for item in value.items)

    if isinstance(value, Map):
        header = _container_header(len(value.entries))
        return header + sum(
            _size(k, config, depth - 1) + _size(v, config, depth - 1)
            for k, v in value.entries
        )

    if isinstance(value, Extended):
        n = len(value.data)
        header = 1 if n in fmt.FIXEXT_TAGS else 1 + _length_width(n, True)
        return header + 1 + n

    raise UnsupportedType(f"No encoding available for {type(value).__name__}")


def _integer_payload(n: int, config: CodecConfig) -> int:
    if n >= 0:
        if n <= fmt.FIXNUM_MAX:
            return 0
        if n <= fmt.UINT8_MAX:
            return 1
        if n <= fmt.UINT16_MAX:
            return 2
        if n <= fmt.UINT32_MAX:
            return 4
        return 8

    floor = (
        fmt.NEGATIVE_FIXNUM_MIN
        if config.minimal_negative_fixnum
        else fmt.NEGATIVE_FIXNUM_COMPAT_MIN
    )
    if n >= floor:
        return 0
    if n >= fmt.INT8_MIN:
        return 1
    if n >= fmt.INT16_MIN:
        return 2
    if n >= fmt.INT32_MIN:
        return 4
    return 8


def _length_width(length: int, has_8bit: bool) -> int:
    if has_8bit and length <= fmt.UINT8_MAX:
        return 1
    if length <= fmt.UINT16_MAX:
        return 2
    if length <= fmt.UINT32_MAX:
        return 4
    raise EncodeError(f"Length {length} exceeds {fmt.UINT32_MAX}")


def _container_header(count: int) -> int:
    if count <= fmt.FIXCONTAINER_MAX:
        return 1
    return 1 + _length_width(count, False)
