"""MessagePack decoder.

This module provides the Decoder class and the decode() function that read
exactly one complete MessagePack value from bytes or a binary source and
return it as a value-model tree. Typed accessors decode a value and check
that it is of the kind the caller expects.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Union

from ..exceptions import MalformedStream, TypeMismatch
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
from .bytestream import ByteReader
from .config import DEFAULT_CONFIG, CodecConfig
from .formats import Family

logger = logging.getLogger(__name__)

Kind = Union[type[Value], tuple[type[Value], ...], None]

_EMBEDDED_LENGTH = (Family.FIXSTR, Family.FIXARRAY, Family.FIXMAP)


def _kind_name(kind: Kind) -> str:
    if kind is None:
        return "any"
    if isinstance(kind, tuple):
        return " or ".join(k.kind for k in kind)
    return kind.kind


class Decoder:
    """Reads values from a buffer or a binary source.

    Each call to decode() consumes exactly one complete value; repeated calls
    read consecutive values. A Decoder must not be shared between threads.

    Example:
        >>> decoder = Decoder(b"\\x01\\xa2hi")
        >>> decoder.decode()
        Integer(value=1)
        >>> decoder.decode_str()
        Str(data=b'hi')
    """

    def __init__(self, source: Any, config: CodecConfig | None = None) -> None:
        """Initialize a decoder.

        Args:
            source: bytes, bytearray or memoryview, or an object with a
                ``read(n)`` method
            config: Codec configuration (defaults to DEFAULT_CONFIG)
        """
        self._reader = ByteReader(source)
        self._config = config or DEFAULT_CONFIG

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._reader.position()

    def decode(self) -> Value:
        """Decode one complete value.

        Returns:
            Decoded value tree

        Raises:
            MalformedStream: If a tag is unknown or reserved, nesting exceeds
                max_depth, or a string is invalid UTF-8 under validate_utf8
            TruncatedInput: If the input ends before the value is complete
        """
        return self._decode(self._config.max_depth)

    def _decode(self, depth: int) -> Value:
        tag = self._reader.read_byte()
        family = fmt.classify(tag)
        if family is None:
            logger.debug("Unknown tag 0x%02X at offset %d", tag, self.position - 1)
            raise MalformedStream(f"Unknown tag 0x{tag:02X}", tag=tag)
        return DECODE_ARMS[family](self, tag, family, depth)

    def _length(self, tag: int, family: Family) -> int:
        if family in _EMBEDDED_LENGTH:
            return fmt.embedded_value(tag, family)
        return self._reader.read_uint(fmt.LENGTH_WIDTH[family])

    def _decode_nil(self, tag: int, family: Family, depth: int) -> Nil:
        return Nil()

    def _decode_bool(self, tag: int, family: Family, depth: int) -> Bool:
        return Bool(family is Family.TRUE)

    def _decode_fixnum(self, tag: int, family: Family, depth: int) -> Integer:
        return Integer(fmt.embedded_value(tag, family))

    def _decode_uint(self, tag: int, family: Family, depth: int) -> Integer:
        return Integer(self._reader.read_uint(fmt.UNSIGNED_WIDTH[family]))

    def _decode_int(self, tag: int, family: Family, depth: int) -> Integer:
        return Integer(self._reader.read_int(fmt.SIGNED_WIDTH[family]))

    def _decode_float32(self, tag: int, family: Family, depth: int) -> Float32:
        return Float32(self._reader.read_float32())

    def _decode_float64(self, tag: int, family: Family, depth: int) -> Float64:
        return Float64(self._reader.read_float64())

    def _decode_str(self, tag: int, family: Family, depth: int) -> Str:
        data = self._reader.read_bytes(self._length(tag, family))
        if self._config.validate_utf8:
            try:
                data.decode("utf-8")
            except UnicodeDecodeError as err:
                raise MalformedStream(f"Invalid UTF-8 in {family.value}: {err}", tag=tag) from err
        return Str(data)

    def _decode_bin(self, tag: int, family: Family, depth: int) -> Bin:
        return Bin(self._reader.read_bytes(self._length(tag, family)))

    def _decode_array(self, tag: int, family: Family, depth: int) -> Array:
        count = self._length(tag, family)
        self._check_depth(depth, tag)
        items = []
        for _ in range(count):
            items.append(self._decode(depth - 1))
        return Array(tuple(items))

    def _decode_map(self, tag: int, family: Family, depth: int) -> Map:
        count = self._length(tag, family)
        self._check_depth(depth, tag)
        entries: dict[Value, Value] = {}
        for _ in range(count):
            key = self._decode(depth - 1)
            entries[key] = self._decode(depth - 1)
        return Map(tuple(entries.items()))

    def _decode_extended(self, tag: int, family: Family, depth: int) -> Extended:
        if family in fmt.FIXEXT_LENGTH:
            length = fmt.FIXEXT_LENGTH[family]
        else:
            length = self._reader.read_uint(fmt.LENGTH_WIDTH[family])
        ext_type = self._reader.read_int(1)
        return Extended(ext_type, self._reader.read_bytes(length))

    def _check_depth(self, depth: int, tag: int) -> None:
        if depth <= 0:
            raise MalformedStream(
                f"Nesting exceeds max_depth={self._config.max_depth}", tag=tag
            )

    # ── Typed accessors ──

    def decode_nil(self) -> Nil:
        """Decode a value and require it to be nil."""
        return self._expect(self.decode(), Nil)

    def decode_bool(self) -> Bool:
        """Decode a value and require it to be a boolean."""
        return self._expect(self.decode(), Bool)

    def decode_integer(self) -> Integer:
        """Decode a value and require it to be an integer."""
        return self._expect(self.decode(), Integer)

    def decode_float(self) -> Float32 | Float64:
        """Decode a value and require it to be a 32- or 64-bit float."""
        return self._expect(self.decode(), (Float32, Float64))

    def decode_str(self) -> Str:
        """Decode a value and require it to be a string."""
        return self._expect(self.decode(), Str)

    def decode_bin(self) -> Bin:
        """Decode a value and require it to be a byte string."""
        return self._expect(self.decode(), Bin)

    def decode_extended(self) -> Extended:
        """Decode a value and require it to be an extension value."""
        return self._expect(self.decode(), Extended)

    def decode_array(self, element_kind: Kind = None) -> Array:
        """Decode an array and check every element's kind.

        Args:
            element_kind: Value class (or tuple of classes) every element must
                be, or None to accept any element

        Returns:
            The decoded Array

        Raises:
            TypeMismatch: If the value is not an array, or on the first
                element of the wrong kind
        """
        array = self._expect(self.decode(), Array)
        if element_kind is not None:
            for index, item in enumerate(array.items):
                self._expect(item, element_kind, where=f"at array index {index}")
        return array

    def decode_map(self, key_kind: Kind = None, value_kind: Kind = None) -> Map:
        """Decode a map and check the kind of every key and value.

        Entries are checked in stored order, key before value, and the first
        violation is reported.

        Args:
            key_kind: Value class (or tuple of classes) for keys, or None
            value_kind: Value class (or tuple of classes) for values, or None

        Returns:
            The decoded Map

        Raises:
            TypeMismatch: If the value is not a map, or on the first key or
                value of the wrong kind
        """
        mapping = self._expect(self.decode(), Map)
        for index, (key, value) in enumerate(mapping.entries):
            if key_kind is not None:
                self._expect(key, key_kind, where=f"for map key {index}")
            if value_kind is not None:
                self._expect(value, value_kind, where=f"for map value {index}")
        return mapping

    @staticmethod
    def _expect(value: Value, kind: Kind, where: str | None = None) -> Any:
        if kind is not None and not isinstance(value, kind):
            raise TypeMismatch(_kind_name(kind), value.kind, where=where)
        return value


# Decode arm per wire family
DECODE_ARMS: dict[Family, Callable[[Decoder, int, Family, int], Value]] = {
    Family.POSITIVE_FIXNUM: Decoder._decode_fixnum,
    Family.NEGATIVE_FIXNUM: Decoder._decode_fixnum,
    Family.FIXSTR: Decoder._decode_str,
    Family.FIXARRAY: Decoder._decode_array,
    Family.FIXMAP: Decoder._decode_map,
    Family.NIL: Decoder._decode_nil,
    Family.FALSE: Decoder._decode_bool,
    Family.TRUE: Decoder._decode_bool,
    Family.BIN8: Decoder._decode_bin,
    Family.BIN16: Decoder._decode_bin,
    Family.BIN32: Decoder._decode_bin,
    Family.EXT8: Decoder._decode_extended,
    Family.EXT16: Decoder._decode_extended,
    Family.EXT32: Decoder._decode_extended,
    Family.FLOAT32: Decoder._decode_float32,
    Family.FLOAT64: Decoder._decode_float64,
    Family.UINT8: Decoder._decode_uint,
    Family.UINT16: Decoder._decode_uint,
    Family.UINT32: Decoder._decode_uint,
    Family.UINT64: Decoder._decode_uint,
    Family.INT8: Decoder._decode_int,
    Family.INT16: Decoder._decode_int,
    Family.INT32: Decoder._decode_int,
    Family.INT64: Decoder._decode_int,
    Family.FIXEXT1: Decoder._decode_extended,
    Family.FIXEXT2: Decoder._decode_extended,
    Family.FIXEXT4: Decoder._decode_extended,
    Family.FIXEXT8: Decoder._decode_extended,
    Family.FIXEXT16: Decoder._decode_extended,
    Family.STR8: Decoder._decode_str,
    Family.STR16: Decoder._decode_str,
    Family.STR32: Decoder._decode_str,
    Family.ARRAY16: Decoder._decode_array,
    Family.ARRAY32: Decoder._decode_array,
    Family.MAP16: Decoder._decode_map,
    Family.MAP32: Decoder._decode_map,
}


def decode(data: Any, *, config: CodecConfig | None = None) -> Value:
    """Decode one MessagePack value.

    Only the bytes of the first complete value are consumed; anything after
    it is left unread.

    Args:
        data: bytes, bytearray or memoryview, or an object with a ``read(n)``
            method (file, socket file, BytesIO)
        config: Codec configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Decoded value tree

    Raises:
        MalformedStream: If the stream does not follow the wire format
        TruncatedInput: If the input ends before the value is complete

    Examples:
        ```python
        from mpack import decode, to_python

        decode(b"\\xcc\\xc8")                    # Integer(value=200)
        to_python(decode(b"\\x81\\xa1a\\x92\\x01\\x02"))  # {"a": [1, 2]}

        with open("value.bin", "rb") as f:
            value = decode(f)
        ```
    """
    return Decoder(data, config=config).decode()


def decode_nil(data: Any, *, config: CodecConfig | None = None) -> Nil:
    """Decode one value from data and require it to be nil."""
    return Decoder(data, config=config).decode_nil()


def decode_bool(data: Any, *, config: CodecConfig | None = None) -> Bool:
    """Decode one value from data and require it to be a boolean."""
    return Decoder(data, config=config).decode_bool()


def decode_integer(data: Any, *, config: CodecConfig | None = None) -> Integer:
    """Decode one value from data and require it to be an integer."""
    return Decoder(data, config=config).decode_integer()


def decode_float(data: Any, *, config: CodecConfig | None = None) -> Float32 | Float64:
    """Decode one value from data and require it to be a float."""
    return Decoder(data, config=config).decode_float()


def decode_str(data: Any, *, config: CodecConfig | None = None) -> Str:
    """Decode one value from data and require it to be a string."""
    return Decoder(data, config=config).decode_str()


def decode_bin(data: Any, *, config: CodecConfig | None = None) -> Bin:
    """Decode one value from data and require it to be a byte string."""
    return Decoder(data, config=config).decode_bin()


def decode_extended(data: Any, *, config: CodecConfig | None = None) -> Extended:
    """Decode one value from data and require it to be an extension value."""
    return Decoder(data, config=config).decode_extended()


def decode_array(
    data: Any, element_kind: Kind = None, *, config: CodecConfig | None = None
) -> Array:
    """Decode an array from data and check every element's kind."""
    return Decoder(data, config=config).decode_array(element_kind)


def decode_map(
    data: Any,
    key_kind: Kind = None,
    value_kind: Kind = None,
    *,
    config: CodecConfig | None = None,
) -> Map:
    """Decode a map from data and check the kind of every key and value."""
    return Decoder(data, config=config).decode_map(key_kind, value_kind)
