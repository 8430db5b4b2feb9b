"""The value model: a closed set of immutable variants.

Every encode and decode operates on instances of the classes defined here.
Each variant is a frozen pydantic model, so values are hashable and can be
used as map keys, and field bounds (integer range, extension type code) are
enforced on construction.

Example:
    >>> from mpack.models import Array, Integer, Map, Str
    >>> doc = Map({Str("ids"): Array([Integer(1), Integer(2)])})
    >>> doc.get(Str("ids"))
    Array(items=(Integer(value=1), Integer(value=2)))
"""

from __future__ import annotations

import struct
from collections.abc import Mapping
from typing import Any, ClassVar, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fields import SignedByte, WireInt

_FLOAT32 = struct.Struct(">f")


def _as_bytes(value: Any) -> Any:
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value


class Value(BaseModel):
    """Base class for all value variants.

    Only the concrete subclasses listed in VALUE_KINDS are encodable.

    Attributes:
        kind: Short name of the variant, used in error messages
    """

    model_config = ConfigDict(
        # Values never change after construction
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    kind: ClassVar[str] = "value"


class Nil(Value):
    """Absence of a value."""

    kind: ClassVar[str] = "nil"


class Bool(Value):
    """Boolean value."""

    kind: ClassVar[str] = "bool"

    value: bool = Field(strict=True)

    def __init__(self, value: bool, **data: Any) -> None:
        super().__init__(value=value, **data)


class Integer(Value):
    """Integer in the union of the signed and unsigned 64-bit ranges."""

    kind: ClassVar[str] = "integer"

    value: int = WireInt()

    def __init__(self, value: int, **data: Any) -> None:
        super().__init__(value=value, **data)


class Float32(Value):
    """Single-precision float.

    The value is rounded to single precision on construction, so a Float32
    compares equal to itself after a round trip through the wire format.
    """

    kind: ClassVar[str] = "float32"

    value: float = Field(strict=True)

    def __init__(self, value: float, **data: Any) -> None:
        super().__init__(value=value, **data)

    @field_validator("value", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("booleans are not floats")
        return value

    @field_validator("value")
    @classmethod
    def _round_to_single(cls, value: float) -> float:
        try:
            return _FLOAT32.unpack(_FLOAT32.pack(value))[0]
        except OverflowError as err:
            raise ValueError(f"{value} is out of single-precision range") from err


class Float64(Value):
    """Double-precision float."""

    kind: ClassVar[str] = "float64"

    value: float = Field(strict=True)

    def __init__(self, value: float, **data: Any) -> None:
        super().__init__(value=value, **data)

    @field_validator("value", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("booleans are not floats")
        return value


class Str(Value):
    """UTF-8 text, held as its encoded bytes.

    A Python ``str`` passed as data is encoded to UTF-8. Lengths on the wire
    are byte counts, not character counts.
    """

    kind: ClassVar[str] = "str"

    data: bytes = Field(strict=True)

    def __init__(self, data: str | bytes, **kwargs: Any) -> None:
        super().__init__(data=data, **kwargs)

    @field_validator("data", mode="before")
    @classmethod
    def _encode_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.encode("utf-8")
        return _as_bytes(value)

    @property
    def text(self) -> str:
        """Decode the bytes as UTF-8.

        Raises:
            UnicodeDecodeError: If the bytes are not well-formed UTF-8
        """
        return self.data.decode("utf-8")

    def __len__(self) -> int:
        return len(self.data)


class Bin(Value):
    """Raw byte string."""

    kind: ClassVar[str] = "bin"

    data: bytes = Field(strict=True)

    def __init__(self, data: bytes, **kwargs: Any) -> None:
        super().__init__(data=data, **kwargs)

    @field_validator("data", mode="before")
    @classmethod
    def _copy_buffer(cls, value: Any) -> Any:
        return _as_bytes(value)

    def __len__(self) -> int:
        return len(self.data)


class Array(Value):
    """Ordered sequence of values."""

    kind: ClassVar[str] = "array"

    items: tuple[Value, ...] = ()

    def __init__(self, items: Any = (), **data: Any) -> None:
        super().__init__(items=items, **data)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]


class Map(Value):
    """Collection of key/value pairs with unique keys.

    Entries may be given as a mapping or as an iterable of pairs. A key that
    appears more than once keeps its first position and its last value.
    Comparison and hashing ignore entry order.
    """

    kind: ClassVar[str] = "map"

    entries: tuple[tuple[Value, Value], ...] = ()

    def __init__(self, entries: Any = (), **data: Any) -> None:
        super().__init__(entries=entries, **data)

    @field_validator("entries", mode="before")
    @classmethod
    def _pairs_from_mapping(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    @field_validator("entries")
    @classmethod
    def _merge_duplicate_keys(
        cls, value: tuple[tuple[Value, Value], ...]
    ) -> tuple[tuple[Value, Value], ...]:
        merged = dict(value)
        if len(merged) == len(value):
            return value
        return tuple(merged.items())

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return len(self.entries) == len(other.entries) and dict(self.entries) == dict(other.entries)

    def __hash__(self) -> int:
        return hash(frozenset(self.entries))

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> Iterator[Value]:
        """Iterate over keys in stored order."""
        return (key for key, _ in self.entries)

    def items(self) -> Iterator[tuple[Value, Value]]:
        """Iterate over (key, value) pairs in stored order."""
        return iter(self.entries)

    def get(self, key: Value, default: Value | None = None) -> Value | None:
        """Return the value stored under key, or default."""
        for entry_key, entry_value in self.entries:
            if entry_key == key:
                return entry_value
        return default


class Extended(Value):
    """Application-defined payload tagged with a signed 8-bit type code."""

    kind: ClassVar[str] = "extended"

    type: int = SignedByte()
    data: bytes = Field(strict=True)

    def __init__(self, type: int, data: bytes, **kwargs: Any) -> None:
        super().__init__(type=type, data=data, **kwargs)

    @field_validator("data", mode="before")
    @classmethod
    def _copy_buffer(cls, value: Any) -> Any:
        return _as_bytes(value)


VALUE_KINDS: tuple[type[Value], ...] = (
    Nil,
    Bool,
    Integer,
    Float32,
    Float64,
    Str,
    Bin,
    Array,
    Map,
    Extended,
)
