"""Value model for mpack.

This module provides the closed set of value variants every encode and
decode operates on, plus conversion to and from plain Python data.
"""

from __future__ import annotations

from .convert import to_python, to_value
from .values import (
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
)

__all__ = [
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
]
