"""Exception hierarchy for mpack.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from MPackError for easy catching of any mpack-specific error.

Failures of the underlying sink or source (``OSError`` and friends) are not
wrapped; they reach the caller unchanged.
"""

from __future__ import annotations


class MPackError(Exception):
    """Base exception for all mpack errors."""

    pass


class EncodeError(MPackError):
    """Raised when encoding a value fails.

    Examples:
        - Array or map with more than 2**32 - 1 elements
        - Payload longer than a 32-bit length field can describe
    """

    pass


class UnsupportedType(EncodeError, TypeError):
    """Raised when a host object has no counterpart in the value model.

    Examples:
        - A set, a datetime or an arbitrary class instance
        - An integer outside -2**63 .. 2**64 - 1
        - A self-referencing list
    """

    pass


class DecodeError(MPackError):
    """Raised when decoding binary data fails."""

    pass


class MalformedStream(DecodeError):
    """Raised when the byte stream does not follow the wire format.

    Examples:
        - Reserved tag byte 0xC1
        - Nesting deeper than the configured max_depth
        - Invalid UTF-8 in a string when validation is enabled
    """

    def __init__(self, message: str, tag: int | None = None) -> None:
        super().__init__(message)
        self.tag = tag


class TruncatedInput(DecodeError):
    """Raised when fewer bytes are available than a declared length requires."""

    def __init__(self, needed: int, available: int) -> None:
        super().__init__(f"Truncated input: need {needed} bytes, have {available}")
        self.needed = needed
        self.available = available


class TypeMismatch(DecodeError):
    """Raised by typed accessors when the decoded kind differs from the requested one."""

    def __init__(self, expected: str, actual: str, where: str | None = None) -> None:
        location = f" {where}" if where else ""
        super().__init__(f"Type mismatch{location}: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual
