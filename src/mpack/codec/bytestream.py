"""Byte-level writing and reading utilities.

This module provides the low-level primitives the encoder and decoder are
built on: fixed-width big-endian integers, IEEE-754 floats and raw byte
runs. A writer either accumulates into an internal buffer or forwards to a
caller-supplied binary sink; a reader either walks an in-memory buffer or
pulls from a caller-supplied binary source.
"""

from __future__ import annotations

import logging
import struct
from typing import Any

from ..exceptions import TruncatedInput

logger = logging.getLogger(__name__)

_FLOAT32 = struct.Struct(">f")
_FLOAT64 = struct.Struct(">d")

# Upper bound on a single read from a stream source
_READ_CHUNK = 65536


class ByteWriter:
    """Writes big-endian primitives to a buffer or a binary sink.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write_byte(0xCD)
        >>> writer.write_uint(300, 2)
        >>> writer.to_bytes()
        b'\\xcd\\x01,'
    """

    def __init__(self, sink: Any = None) -> None:
        """Initialize a writer.

        Args:
            sink: Object with a ``write(bytes)`` method, or None to buffer in memory.
                Short writes from raw sinks are retried until all bytes are
                accepted; a write() returning None counts as complete.
        """
        self._sink = sink
        self._buffer = bytearray()
        self._length = 0

    def _emit(self, data: bytes) -> None:
        if self._sink is None:
            self._buffer.extend(data)
        else:
            self._write_all(data)
        self._length += len(data)

    def _write_all(self, data: bytes) -> None:
        remaining = data
        while remaining:
            written = self._sink.write(remaining)
            if written is None or written >= len(remaining):
                return
            if written == 0:
                raise OSError(f"Sink accepted 0 of {len(remaining)} bytes")
            remaining = remaining[written:]

    def write_byte(self, value: int) -> None:
        """Write a single byte (0-255).

        Args:
            value: Byte value to write

        Raises:
            ValueError: If value is not a byte
        """
        if value < 0 or value > 0xFF:
            raise ValueError(f"Byte value must be 0-255, got {value}")
        self._emit(bytes((value,)))

    def write_uint(self, value: int, num_bytes: int) -> None:
        """Write an unsigned integer as num_bytes big-endian bytes.

        Args:
            value: Unsigned integer value to write (must be >= 0)
            num_bytes: Field width in bytes (1, 2, 4 or 8)

        Raises:
            ValueError: If value is negative or doesn't fit in num_bytes
        """
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")
        max_value = (1 << (8 * num_bytes)) - 1
        if value > max_value:
            raise ValueError(f"Value {value} requires more than {num_bytes} bytes (max: {max_value})")
        self._emit(value.to_bytes(num_bytes, "big"))

    def write_int(self, value: int, num_bytes: int) -> None:
        """Write a signed integer as num_bytes of big-endian two's complement.

        Args:
            value: Signed integer value to write
            num_bytes: Field width in bytes (1, 2, 4 or 8)

        Raises:
            ValueError: If value doesn't fit in num_bytes using two's complement
        """
        min_value = -(1 << (8 * num_bytes - 1))
        max_value = (1 << (8 * num_bytes - 1)) - 1
        if value < min_value or value > max_value:
            raise ValueError(
                f"Value {value} doesn't fit in {num_bytes} bytes (range: {min_value} to {max_value})"
            )
        self._emit(value.to_bytes(num_bytes, "big", signed=True))

    def write_float32(self, value: float) -> None:
        """Write an IEEE-754 single-precision float."""
        self._emit(_FLOAT32.pack(value))

    def write_float64(self, value: float) -> None:
        """Write an IEEE-754 double-precision float."""
        self._emit(_FLOAT64.pack(value))

    def write_bytes(self, data: bytes) -> None:
        """Write a raw byte run."""
        if data:
            self._emit(bytes(data))

    def byte_length(self) -> int:
        """Return the number of bytes written so far."""
        return self._length

    def flush(self) -> None:
        """Flush the sink, if it supports flushing."""
        flush = getattr(self._sink, "flush", None)
        if flush is not None:
            flush()

    def to_bytes(self) -> bytes:
        """Return the buffered bytes.

        Raises:
            ValueError: If the writer forwards to a sink instead of buffering
        """
        if self._sink is not None:
            raise ValueError("ByteWriter bound to a sink has no buffer")
        return bytes(self._buffer)


class ByteReader:
    """Reads big-endian primitives from a buffer or a binary source.

    Every read either returns exactly the requested number of bytes or raises
    TruncatedInput; nothing past the requested bytes is consumed.

    Example:
        >>> reader = ByteReader(b"\\x01\\x2c\\xff")
        >>> reader.read_uint(2)
        300
        >>> reader.read_int(1)
        -1
    """

    def __init__(self, source: Any) -> None:
        """Initialize a reader.

        Args:
            source: bytes, bytearray or memoryview to read from, or an object
                with a ``read(n)`` method
        """
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._data: bytes | None = bytes(source)
            self._source = None
        else:
            self._data = None
            self._source = source
        self._position = 0

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read exactly num_bytes raw bytes.

        Args:
            num_bytes: Number of bytes to read

        Returns:
            A fresh bytes object

        Raises:
            TruncatedInput: If fewer than num_bytes bytes are available
        """
        if num_bytes == 0:
            return b""

        if self._data is not None:
            end = self._position + num_bytes
            if end > len(self._data):
                available = len(self._data) - self._position
                logger.debug("Short buffer at offset %d: need %d, have %d",
                             self._position, num_bytes, available)
                raise TruncatedInput(num_bytes, available)
            chunk = self._data[self._position:end]
            self._position = end
            return chunk

        parts: list[bytes] = []
        remaining = num_bytes
        while remaining > 0:
            part = self._source.read(min(remaining, _READ_CHUNK))
            if not part:
                available = num_bytes - remaining
                self._position += available
                logger.debug("Source exhausted at offset %d: need %d, have %d",
                             self._position, num_bytes, available)
                raise TruncatedInput(num_bytes, available)
            parts.append(bytes(part))
            remaining -= len(part)
        self._position += num_bytes
        return b"".join(parts)

    def read_byte(self) -> int:
        """Read a single unsigned byte."""
        return self.read_bytes(1)[0]

    def read_uint(self, num_bytes: int) -> int:
        """Read a big-endian unsigned integer of num_bytes bytes."""
        return int.from_bytes(self.read_bytes(num_bytes), "big")

    def read_int(self, num_bytes: int) -> int:
        """Read a big-endian two's complement integer of num_bytes bytes."""
        return int.from_bytes(self.read_bytes(num_bytes), "big", signed=True)

    def read_float32(self) -> float:
        """Read an IEEE-754 single-precision float."""
        return _FLOAT32.unpack(self.read_bytes(4))[0]

    def read_float64(self) -> float:
        """Read an IEEE-754 double-precision float."""
        return _FLOAT64.unpack(self.read_bytes(8))[0]

    def position(self) -> int:
        """Return the number of bytes consumed so far."""
        return self._position

    def bytes_remaining(self) -> int | None:
        """Return the number of unread buffered bytes, or None for a stream source."""
        if self._data is None:
            return None
        return len(self._data) - self._position
