"""Field type helpers for the value model.

This module provides convenience functions for declaring bounded fields on
the pydantic models that make up the value model.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

from ..codec.formats import INT64_MIN, UINT64_MAX


def BoundedInt(*, ge: int, le: int, **kwargs: Any) -> FieldInfo:
    """Create a bounded, strict integer field.

    Strict mode keeps ``True``/``False`` from being accepted as 1/0.

    Args:
        ge: Minimum value (inclusive)
        le: Maximum value (inclusive)
        **kwargs: Additional Field() arguments (description, default, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Sample(BaseModel):
        ...     level: int = BoundedInt(ge=0, le=15)
    """
    kwargs.setdefault("strict", True)
    return cast(FieldInfo, Field(ge=ge, le=le, **kwargs))


def WireInt(**kwargs: Any) -> FieldInfo:
    """Create an integer field covering every wire integer, -2**63 to 2**64 - 1."""
    return BoundedInt(ge=INT64_MIN, le=UINT64_MAX, **kwargs)


def SignedByte(**kwargs: Any) -> FieldInfo:
    """Create an integer field limited to a signed byte, -128 to 127."""
    return BoundedInt(ge=-128, le=127, **kwargs)
