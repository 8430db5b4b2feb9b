"""Codec configuration.

The codec reads no environment variables or files; callers that need a
non-default policy build a CodecConfig and pass it explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodecConfig:
    """Encoding and decoding policy.

    Attributes:
        minimal_negative_fixnum: Encode -32 as a negative fixnum (default False).
            The default keeps the historical boundary where only -31..-1 use
            the one-byte form and -32 goes to int8. Both forms are legal on
            the wire and decode to the same value; enable this for strictly
            minimal output.

        validate_utf8: Reject string payloads that are not well-formed UTF-8
            while decoding (default False). When disabled the bytes are kept
            exactly as received.

        max_depth: Maximum container nesting accepted while decoding or while
            lifting host objects (default 256). Deeper input is rejected
            instead of exhausting the interpreter's recursion limit.

    Examples:
        ```python
        from mpack import CodecConfig, decode, encode

        strict = CodecConfig(minimal_negative_fixnum=True, validate_utf8=True)
        data = encode(-32, config=strict)  # b"\\xe0"
        value = decode(data, config=strict)
        ```
    """

    minimal_negative_fixnum: bool = False
    validate_utf8: bool = False
    max_depth: int = 256

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be > 0, got {self.max_depth}")


DEFAULT_CONFIG = CodecConfig()
