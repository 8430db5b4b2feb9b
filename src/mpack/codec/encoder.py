"""MessagePack encoder.

This module provides the Encoder class and the encode() function that
convert value-model instances (or plain Python data, lifted through
to_value()) to the MessagePack wire format. Every value is written in the
narrowest representation its magnitude or length allows.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

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
from . import formats as fmt
from .bytestream import ByteWriter
from .config import DEFAULT_CONFIG, CodecConfig

logger = logging.getLogger(__name__)


class Encoder:
    """Writes values to a buffer or a binary sink.

    One Encoder may write any number of values in sequence. It must not be
    shared between threads.

    Example:
        >>> encoder = Encoder()
        >>> encoder.encode(Integer(200))
        >>> encoder.getvalue()
        b'\\xcc\\xc8'
    """

    def __init__(self, sink: Any = None, config: CodecConfig | None = None) -> None:
        """Initialize an encoder.

        Args:
            sink: Object with a ``write(bytes)`` method, or None to buffer in memory
            config: Codec configuration (defaults to DEFAULT_CONFIG)
        """
        self._writer = ByteWriter(sink)
        self._config = config or DEFAULT_CONFIG
        self._negative_fixnum_min = (
            fmt.NEGATIVE_FIXNUM_MIN
            if self._config.minimal_negative_fixnum
            else fmt.NEGATIVE_FIXNUM_COMPAT_MIN
        )

    def encode(self, value: Any) -> None:
        """Encode one value.

        Args:
            value: Value-model instance or plain Python data

        Raises:
            UnsupportedType: If the value (or anything nested in it) has no
                value-model counterpart
            EncodeError: If a container or payload is too large for the format,
                or containers nest deeper than max_depth
        """
        self._encode(to_value(value, self._config), self._config.max_depth)

    def flush(self) -> None:
        """Flush the underlying sink, if any."""
        self._writer.flush()

    def getvalue(self) -> bytes:
        """Return everything encoded so far (buffered encoders only)."""
        return self._writer.to_bytes()

    def _encode(self, value: Value, depth: int) -> None:
        arm = _arm_for(type(value))
        if arm is None:
            logger.debug("No encode arm for %s", type(value).__name__)
            raise UnsupportedType(f"No encoding available for {type(value).__name__}")
        arm(self, value, depth)

    def _encode_nil(self, value: Nil, depth: int) -> None:
        self._writer.write_byte(fmt.NIL)

    def _encode_bool(self, value: Bool, depth: int) -> None:
        self._writer.write_byte(fmt.TRUE if value.value else fmt.FALSE)

    def _encode_integer(self, value: Integer, depth: int) -> None:
        n = value.value
        writer = self._writer

        if n >= 0:
            if n <= fmt.FIXNUM_MAX:
                writer.write_byte(n)
            elif n <= fmt.UINT8_MAX:
                writer.write_byte(fmt.UINT8)
                writer.write_uint(n, 1)
            elif n <= fmt.UINT16_MAX:
                writer.write_byte(fmt.UINT16)
                writer.write_uint(n, 2)
            elif n <= fmt.UINT32_MAX:
                writer.write_byte(fmt.UINT32)
                writer.write_uint(n, 4)
            else:
                writer.write_byte(fmt.UINT64)
                writer.write_uint(n, 8)
            return

        if n >= self._negative_fixnum_min:
            writer.write_byte(n & 0xFF)
        elif n >= fmt.INT8_MIN:
            writer.write_byte(fmt.INT8)
            writer.write_int(n, 1)
        elif n >= fmt.INT16_MIN:
            writer.write_byte(fmt.INT16)
            writer.write_int(n, 2)
        elif n >= fmt.INT32_MIN:
            writer.write_byte(fmt.INT32)
            writer.write_int(n, 4)
        else:
            writer.write_byte(fmt.INT64)
            writer.write_int(n, 8)

    def _encode_float32(self, value: Float32, depth: int) -> None:
        self._writer.write_byte(fmt.FLOAT32)
        self._writer.write_float32(value.value)

    def _encode_float64(self, value: Float64, depth: int) -> None:
        self._writer.write_byte(fmt.FLOAT64)
        self._writer.write_float64(value.value)

    def _encode_str(self, value: Str, depth: int) -> None:
        n = len(value.data)
        if n <= fmt.FIXSTR_MAX:
            self._writer.write_byte(fmt.FIXSTR | n)
        else:
            self._write_sized_header(n, fmt.STR8, fmt.STR16, fmt.STR32, "String")
        self._writer.write_bytes(value.data)

    def _encode_bin(self, value: Bin, depth: int) -> None:
        self._write_sized_header(len(value.data), fmt.BIN8, fmt.BIN16, fmt.BIN32, "Binary")
        self._writer.write_bytes(value.data)

    def _encode_array(self, value: Array, depth: int) -> None:
        self._check_depth(depth)
        n = len(value.items)
        if n <= fmt.FIXCONTAINER_MAX:
            self._writer.write_byte(fmt.FIXARRAY | n)
        else:
            self._write_sized_header(n, None, fmt.ARRAY16, fmt.ARRAY32, "Array")
        for item in value.items:
            self._encode(item, depth - 1)

    def _encode_map(self, value: Map, depth: int) -> None:
        self._check_depth(depth)
        n = len(value.entries)
        if n <= fmt.FIXCONTAINER_MAX:
            self._writer.write_byte(fmt.FIXMAP | n)
        else:
            self._write_sized_header(n, None, fmt.MAP16, fmt.MAP32, "Map")
        for key, item in value.entries:
            self._encode(key, depth - 1)
            self._encode(item, depth - 1)

    def _encode_extended(self, value: Extended, depth: int) -> None:
        n = len(value.data)
        fixext_tag = fmt.FIXEXT_TAGS.get(n)
        if fixext_tag is not None:
            self._writer.write_byte(fixext_tag)
        else:
            self._write_sized_header(n, fmt.EXT8, fmt.EXT16, fmt.EXT32, "Extension payload")
        self._writer.write_int(value.type, 1)
        self._writer.write_bytes(value.data)

    def _check_depth(self, depth: int) -> None:
        if depth <= 0:
            raise EncodeError(f"Nesting exceeds max_depth={self._config.max_depth}")

    def _write_sized_header(
        self, length: int, tag8: int | None, tag16: int, tag32: int, what: str
    ) -> None:
        """Write the narrowest tag and length field able to describe length.

        Args:
            length: Byte or element count
            tag8: Tag with a 1-byte length field, or None if the family has none
            tag16: Tag with a 2-byte length field
            tag32: Tag with a 4-byte length field
            what: Description used in error messages

        Raises:
            EncodeError: If length does not fit in 32 bits
        """
        writer = self._writer
        if tag8 is not None and length <= fmt.UINT8_MAX:
            writer.write_byte(tag8)
            writer.write_uint(length, 1)
        elif length <= fmt.UINT16_MAX:
            writer.write_byte(tag16)
            writer.write_uint(length, 2)
        elif length <= fmt.UINT32_MAX:
            writer.write_byte(tag32)
            writer.write_uint(length, 4)
        else:
            raise EncodeError(f"{what} length {length} exceeds {fmt.UINT32_MAX}")


# One encode arm per value kind
ENCODE_ARMS: dict[type[Value], Callable[[Encoder, Any, int], None]] = {
    Nil: Encoder._encode_nil,
    Bool: Encoder._encode_bool,
    Integer: Encoder._encode_integer,
    Float32: Encoder._encode_float32,
    Float64: Encoder._encode_float64,
    Str: Encoder._encode_str,
    Bin: Encoder._encode_bin,
    Array: Encoder._encode_array,
    Map: Encoder._encode_map,
    Extended: Encoder._encode_extended,
}


def _arm_for(cls: type) -> Callable[[Encoder, Any, int], None] | None:
    arm = ENCODE_ARMS.get(cls)
    if arm is not None:
        return arm
    # Subclasses of a variant encode as that variant
    for base in cls.__mro__[1:]:
        if base in ENCODE_ARMS:
            return ENCODE_ARMS[base]
    return None


def encode(value: Any, sink: Any = None, *, config: CodecConfig | None = None) -> bytes | None:
    """Encode a value to MessagePack.

    Args:
        value: Value-model instance or plain Python data (None, bool, int,
            float, str, bytes, list/tuple, dict)
        sink: Optional object with a ``write(bytes)`` method. When given, the
            encoding is written to it and the sink is flushed before returning.
        config: Codec configuration (defaults to DEFAULT_CONFIG)

    Returns:
        The encoded bytes, or None when a sink was given

    Raises:
        UnsupportedType: If the value has no value-model counterpart
        EncodeError: If a container or payload is too large for the format,
            or containers nest deeper than max_depth

    Examples:
        ```python
        from mpack import Float32, encode

        encode(200)                  # b"\\xcc\\xc8"
        encode(Float32(1.5))         # b"\\xca\\x3f\\xc0\\x00\\x00"
        encode({"a": [1, 2]})        # b"\\x81\\xa1a\\x92\\x01\\x02"

        with open("value.bin", "wb") as f:
            encode({"id": 7}, f)
        ```
    """
    encoder = Encoder(sink, config=config)
    encoder.encode(value)
    if sink is None:
        return encoder.getvalue()
    encoder.flush()
    return None
