"""Wire format table for the MessagePack family.

Every value on the wire starts with one tag byte. Five families pack a small
immediate value or length into the tag itself and are recognised by bit
masks; every other family owns exactly one tag byte. All multi-byte fields
that follow a tag are big-endian.
"""

from __future__ import annotations

import enum

# ── Bit-mask families (tested in this order, first match wins) ──
POSITIVE_FIXNUM_MASK = 0x80
POSITIVE_FIXNUM = 0x00  # 0x00-0x7F, value = tag
NEGATIVE_FIXNUM_MASK = 0xE0
NEGATIVE_FIXNUM = 0xE0  # 0xE0-0xFF, value = tag as signed byte
FIXSTR_MASK = 0xE0
FIXSTR = 0xA0  # 0xA0-0xBF, length = tag & 0x1F
FIXARRAY_MASK = 0xF0
FIXARRAY = 0x90  # 0x90-0x9F, length = tag & 0x0F
FIXMAP_MASK = 0xF0
FIXMAP = 0x80  # 0x80-0x8F, length = tag & 0x0F

# ── Exact tags ──
NIL = 0xC0
RESERVED = 0xC1
FALSE = 0xC2
TRUE = 0xC3
BIN8 = 0xC4
BIN16 = 0xC5
BIN32 = 0xC6
EXT8 = 0xC7
EXT16 = 0xC8
EXT32 = 0xC9
FLOAT32 = 0xCA
FLOAT64 = 0xCB
UINT8 = 0xCC
UINT16 = 0xCD
UINT32 = 0xCE
UINT64 = 0xCF
INT8 = 0xD0
INT16 = 0xD1
INT32 = 0xD2
INT64 = 0xD3
FIXEXT1 = 0xD4
FIXEXT2 = 0xD5
FIXEXT4 = 0xD6
FIXEXT8 = 0xD7
FIXEXT16 = 0xD8
STR8 = 0xD9
STR16 = 0xDA
STR32 = 0xDB
ARRAY16 = 0xDC
ARRAY32 = 0xDD
MAP16 = 0xDE
MAP32 = 0xDF

# ── Width-class limits ──
FIXNUM_MAX = 0x7F
FIXSTR_MAX = 15  # fixstr can carry 31 bytes; the encoder stops at 15
FIXCONTAINER_MAX = 15
UINT8_MAX = 0xFF
UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFFFFFF
UINT64_MAX = 0xFFFFFFFFFFFFFFFF
INT8_MIN = -0x80
INT16_MIN = -0x8000
INT32_MIN = -0x80000000
INT64_MIN = -0x8000000000000000
NEGATIVE_FIXNUM_MIN = -32
NEGATIVE_FIXNUM_COMPAT_MIN = -31


class Family(enum.Enum):
    """Wire family identified by a tag byte."""

    POSITIVE_FIXNUM = "positive fixnum"
    NEGATIVE_FIXNUM = "negative fixnum"
    FIXSTR = "fixstr"
    FIXARRAY = "fixarray"
    FIXMAP = "fixmap"
    NIL = "nil"
    FALSE = "false"
    TRUE = "true"
    BIN8 = "bin8"
    BIN16 = "bin16"
    BIN32 = "bin32"
    EXT8 = "ext8"
    EXT16 = "ext16"
    EXT32 = "ext32"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FIXEXT1 = "fixext1"
    FIXEXT2 = "fixext2"
    FIXEXT4 = "fixext4"
    FIXEXT8 = "fixext8"
    FIXEXT16 = "fixext16"
    STR8 = "str8"
    STR16 = "str16"
    STR32 = "str32"
    ARRAY16 = "array16"
    ARRAY32 = "array32"
    MAP16 = "map16"
    MAP32 = "map32"


EXACT_TAGS: dict[int, Family] = {
    NIL: Family.NIL,
    FALSE: Family.FALSE,
    TRUE: Family.TRUE,
    BIN8: Family.BIN8,
    BIN16: Family.BIN16,
    BIN32: Family.BIN32,
    EXT8: Family.EXT8,
    EXT16: Family.EXT16,
    EXT32: Family.EXT32,
    FLOAT32: Family.FLOAT32,
    FLOAT64: Family.FLOAT64,
    UINT8: Family.UINT8,
    UINT16: Family.UINT16,
    UINT32: Family.UINT32,
    UINT64: Family.UINT64,
    INT8: Family.INT8,
    INT16: Family.INT16,
    INT32: Family.INT32,
    INT64: Family.INT64,
    FIXEXT1: Family.FIXEXT1,
    FIXEXT2: Family.FIXEXT2,
    FIXEXT4: Family.FIXEXT4,
    FIXEXT8: Family.FIXEXT8,
    FIXEXT16: Family.FIXEXT16,
    STR8: Family.STR8,
    STR16: Family.STR16,
    STR32: Family.STR32,
    ARRAY16: Family.ARRAY16,
    ARRAY32: Family.ARRAY32,
    MAP16: Family.MAP16,
    MAP32: Family.MAP32,
}

# Byte width of the unsigned length field that follows a sized tag
LENGTH_WIDTH: dict[Family, int] = {
    Family.STR8: 1,
    Family.STR16: 2,
    Family.STR32: 4,
    Family.BIN8: 1,
    Family.BIN16: 2,
    Family.BIN32: 4,
    Family.ARRAY16: 2,
    Family.ARRAY32: 4,
    Family.MAP16: 2,
    Family.MAP32: 4,
    Family.EXT8: 1,
    Family.EXT16: 2,
    Family.EXT32: 4,
}

# Byte width of fixed-width numeric payloads
UNSIGNED_WIDTH: dict[Family, int] = {
    Family.UINT8: 1,
    Family.UINT16: 2,
    Family.UINT32: 4,
    Family.UINT64: 8,
}
SIGNED_WIDTH: dict[Family, int] = {
    Family.INT8: 1,
    Family.INT16: 2,
    Family.INT32: 4,
    Family.INT64: 8,
}

# Payload length implied by a fixext tag, and the reverse lookup
FIXEXT_LENGTH: dict[Family, int] = {
    Family.FIXEXT1: 1,
    Family.FIXEXT2: 2,
    Family.FIXEXT4: 4,
    Family.FIXEXT8: 8,
    Family.FIXEXT16: 16,
}
FIXEXT_TAGS: dict[int, int] = {
    1: FIXEXT1,
    2: FIXEXT2,
    4: FIXEXT4,
    8: FIXEXT8,
    16: FIXEXT16,
}

# Families able to carry each value kind
KIND_FAMILIES: dict[str, frozenset[Family]] = {
    "nil": frozenset({Family.NIL}),
    "bool": frozenset({Family.FALSE, Family.TRUE}),
    "integer": frozenset(
        {Family.POSITIVE_FIXNUM, Family.NEGATIVE_FIXNUM}
        | set(UNSIGNED_WIDTH)
        | set(SIGNED_WIDTH)
    ),
    "float32": frozenset({Family.FLOAT32}),
    "float64": frozenset({Family.FLOAT64}),
    "str": frozenset({Family.FIXSTR, Family.STR8, Family.STR16, Family.STR32}),
    "bin": frozenset({Family.BIN8, Family.BIN16, Family.BIN32}),
    "array": frozenset({Family.FIXARRAY, Family.ARRAY16, Family.ARRAY32}),
    "map": frozenset({Family.FIXMAP, Family.MAP16, Family.MAP32}),
    "extended": frozenset(set(FIXEXT_LENGTH) | {Family.EXT8, Family.EXT16, Family.EXT32}),
}


def classify(tag: int) -> Family | None:
    """Classify a tag byte into its wire family.

    The mask families are tested first, in priority order; the remaining
    tags are looked up exactly.

    Args:
        tag: Tag byte (0-255)

    Returns:
        The wire family, or None for the reserved tag 0xC1

    Example:
        >>> classify(0x93)
        <Family.FIXARRAY: 'fixarray'>
        >>> classify(0xC1) is None
        True
    """
    if tag & POSITIVE_FIXNUM_MASK == POSITIVE_FIXNUM:
        return Family.POSITIVE_FIXNUM
    if tag & NEGATIVE_FIXNUM_MASK == NEGATIVE_FIXNUM:
        return Family.NEGATIVE_FIXNUM
    if tag & FIXSTR_MASK == FIXSTR:
        return Family.FIXSTR
    if tag & FIXARRAY_MASK == FIXARRAY:
        return Family.FIXARRAY
    if tag & FIXMAP_MASK == FIXMAP:
        return Family.FIXMAP
    return EXACT_TAGS.get(tag)


def embedded_value(tag: int, family: Family) -> int:
    """Return the immediate value or length packed into a mask-family tag.

    Args:
        tag: Tag byte
        family: Family returned by classify() for this tag

    Returns:
        Integer value for fixnums, element/byte count for fix containers

    Raises:
        ValueError: If the family carries nothing in its tag
    """
    if family is Family.POSITIVE_FIXNUM:
        return tag
    if family is Family.NEGATIVE_FIXNUM:
        return tag - 0x100
    if family is Family.FIXSTR:
        return tag & 0x1F
    if family in (Family.FIXARRAY, Family.FIXMAP):
        return tag & 0x0F
    raise ValueError(f"{family.value} does not embed a value in its tag")
