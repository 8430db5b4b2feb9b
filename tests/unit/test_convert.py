"""Unit tests for host object conversion."""

from __future__ import annotations

from collections import OrderedDict

import pytest

from mpack import (
    Array,
    Bin,
    Bool,
    CodecConfig,
    Extended,
    Float32,
    Float64,
    Integer,
    Map,
    Nil,
    Str,
    UnsupportedType,
    to_python,
    to_value,
)


class TestToValue:
    """Test lifting host objects."""

    def test_scalars(self) -> None:
        """Each host scalar maps to one variant."""
        assert to_value(None) == Nil()
        assert to_value(True) == Bool(True)
        assert to_value(7) == Integer(7)
        assert to_value(0.25) == Float64(0.25)
        assert to_value("a") == Str("a")
        assert to_value(b"a") == Bin(b"a")

    def test_values_pass_through(self) -> None:
        """Value instances are returned unchanged."""
        value = Float32(2.0)
        assert to_value(value) is value

    def test_containers(self, sample_document: dict) -> None:
        """Lists become arrays and dicts become maps, recursively."""
        value = to_value(sample_document)
        assert isinstance(value, Map)
        assert value.get(Str("waypoints")) == Array(
            [Array([Integer(1), Integer(-2)]), Array([Integer(300), Integer(-40000)])]
        )
        assert value.get(Str("payload")) == Bin(b"\x00\x01\xfe\xff")

    def test_any_mapping(self) -> None:
        """Mapping types other than dict are accepted."""
        value = to_value(OrderedDict([("b", 1), ("a", 2)]))
        assert list(value.keys()) == [Str("b"), Str("a")]

    def test_mixed_values_and_host_objects(self) -> None:
        """Values can be nested inside host containers."""
        value = to_value([Float32(1.0), 1.0])
        assert value == Array([Float32(1.0), Float64(1.0)])

    def test_unsupported(self) -> None:
        """Objects without a counterpart are rejected."""
        with pytest.raises(UnsupportedType, match="complex"):
            to_value(1j)

    def test_depth_limit(self) -> None:
        """Nesting beyond max_depth is rejected."""
        config = CodecConfig(max_depth=3)
        assert isinstance(to_value([[[1]]], config), Array)

        with pytest.raises(UnsupportedType, match="max_depth"):
            to_value([[[[1]]]], config)


class TestToPython:
    """Test lowering values."""

    def test_scalars(self) -> None:
        """Scalars lower to their Python equivalents."""
        assert to_python(Nil()) is None
        assert to_python(Bool(False)) is False
        assert to_python(Integer(2**64 - 1)) == 2**64 - 1
        assert to_python(Float32(0.5)) == 0.5
        assert to_python(Str("é")) == "é"
        assert to_python(Bin(b"\x00")) == b"\x00"

    def test_round_trip(self, sample_document: dict) -> None:
        """Host documents survive lifting and lowering."""
        assert to_python(to_value(sample_document)) == sample_document

    def test_invalid_utf8_kept(self) -> None:
        """Undecodable text stays a Str."""
        assert to_python(Str(b"\xff")) == Str(b"\xff")

    def test_extended_unchanged(self) -> None:
        """Extension values have no host equivalent."""
        value = Extended(3, b"abc")
        assert to_python(value) is value

    def test_unhashable_keys(self) -> None:
        """Array and map keys stay as values."""
        key = Array([Integer(1)])
        result = to_python(Map({key: Str("x")}))
        assert result == {key: "x"}

    def test_not_a_value(self) -> None:
        """Plain objects are rejected."""
        with pytest.raises(UnsupportedType):
            to_python(42)  # type: ignore[arg-type]
