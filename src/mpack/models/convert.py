"""Conversion between host Python objects and the value model.

to_value() lifts plain Python data into value-model instances so it can be
encoded; to_python() lowers a decoded value back into plain Python data.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..codec.config import DEFAULT_CONFIG, CodecConfig
from ..codec.formats import INT64_MIN, UINT64_MAX
from ..exceptions import UnsupportedType
from .values import (
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

logger = logging.getLogger(__name__)


def to_value(obj: Any, config: CodecConfig | None = None) -> Value:
    """Lift a host Python object into the value model.

    Mapping:
        - Value instances are returned unchanged
        - None -> Nil, bool -> Bool, int -> Integer, float -> Float64
        - str -> Str, bytes/bytearray/memoryview -> Bin
        - list/tuple -> Array, any Mapping -> Map

    Args:
        obj: Object to lift
        config: Codec configuration (only max_depth is consulted)

    Returns:
        Equivalent value-model instance

    Raises:
        UnsupportedType: If obj (or anything nested in it) has no counterpart,
            an integer is out of range, or nesting exceeds max_depth

    Example:
        >>> to_value({"id": 7, "tags": ["a", "b"]})
        Map(entries=((Str(data=b'id'), Integer(value=7)), ...))
    """
    config = config or DEFAULT_CONFIG
    return _lift(obj, config.max_depth)


def _lift(obj: Any, depth: int) -> Value:
    if isinstance(obj, Value):
        return obj

    if obj is None:
        return Nil()

    # bool is a subclass of int and must be tested first
    if isinstance(obj, bool):
        return Bool(obj)

    if isinstance(obj, int):
        if obj < INT64_MIN or obj > UINT64_MAX:
            logger.debug("Integer %d outside the wire range", obj)
            raise UnsupportedType(
                f"Integer {obj} out of range [{INT64_MIN}, {UINT64_MAX}]"
            )
        return Integer(obj)

    if isinstance(obj, float):
        return Float64(obj)

    if isinstance(obj, str):
        try:
            return Str(obj.encode("utf-8"))
        except UnicodeEncodeError as err:
            raise UnsupportedType(f"String is not encodable as UTF-8: {err}") from err

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return Bin(bytes(obj))

    if isinstance(obj, (list, tuple, Mapping)):
        if depth <= 0:
            raise UnsupportedType("Nesting exceeds max_depth (self-referencing container?)")
        if isinstance(obj, Mapping):
            return Map(tuple((_lift(k, depth - 1), _lift(v, depth - 1)) for k, v in obj.items()))
        return Array(tuple(_lift(item, depth - 1) for item in obj))

    logger.debug("No value kind for host type %s", type(obj).__name__)
    raise UnsupportedType(f"No encoding available for objects of type {type(obj).__name__}")


def to_python(value: Value) -> Any:
    """Lower a value-model instance into plain Python data.

    Mapping:
        - Nil -> None, Bool -> bool, Integer -> int
        - Float32/Float64 -> float
        - Str -> str (invalid UTF-8 is kept as a Str)
        - Bin -> bytes, Array -> list, Map -> dict
        - Extended is returned unchanged

    Map keys that would lower to unhashable objects (arrays, maps) are kept
    as Values so the result is always a valid dict. Keys that become equal
    once lowered (Integer 1 and Bool True) keep the last value.

    Args:
        value: Value to lower

    Returns:
        Plain Python object
    """
    if isinstance(value, Nil):
        return None
    if isinstance(value, (Bool, Integer, Float32, Float64)):
        return value.value
    if isinstance(value, Str):
        try:
            return value.text
        except UnicodeDecodeError:
            return value
    if isinstance(value, Bin):
        return value.data
    if isinstance(value, Array):
        return [to_python(item) for item in value.items]
    if isinstance(value, Map):
        return {_lower_key(key): to_python(item) for key, item in value.entries}
    if isinstance(value, Extended):
        return value
    raise UnsupportedType(f"Not a value-model instance: {type(value).__name__}")


def _lower_key(key: Value) -> Any:
    if isinstance(key, (Array, Map)):
        return key
    return to_python(key)
