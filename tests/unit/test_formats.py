"""Unit tests for the wire format table."""

from __future__ import annotations

import pytest

from mpack.codec import formats as fmt
from mpack.codec.formats import Family, classify, embedded_value
from mpack.models import VALUE_KINDS


class TestClassify:
    """Test tag byte classification."""

    def test_positive_fixnum_range(self) -> None:
        """Tags 0x00-0x7F are positive fixnums."""
        for tag in range(0x00, 0x80):
            assert classify(tag) is Family.POSITIVE_FIXNUM

    def test_negative_fixnum_range(self) -> None:
        """Tags 0xE0-0xFF are negative fixnums."""
        for tag in range(0xE0, 0x100):
            assert classify(tag) is Family.NEGATIVE_FIXNUM

    def test_fix_container_ranges(self) -> None:
        """fixmap, fixarray and fixstr occupy 0x80-0xBF."""
        for tag in range(0x80, 0x90):
            assert classify(tag) is Family.FIXMAP
        for tag in range(0x90, 0xA0):
            assert classify(tag) is Family.FIXARRAY
        for tag in range(0xA0, 0xC0):
            assert classify(tag) is Family.FIXSTR

    def test_exact_tags(self) -> None:
        """Every tag in 0xC0-0xDF except 0xC1 has its own family."""
        assert classify(0xC0) is Family.NIL
        assert classify(0xC2) is Family.FALSE
        assert classify(0xC3) is Family.TRUE
        assert classify(0xCA) is Family.FLOAT32
        assert classify(0xCF) is Family.UINT64
        assert classify(0xD3) is Family.INT64
        assert classify(0xD8) is Family.FIXEXT16
        assert classify(0xDF) is Family.MAP32

    def test_reserved_tag(self) -> None:
        """0xC1 is reserved and classifies as nothing."""
        assert classify(fmt.RESERVED) is None

    def test_all_tags_accounted_for(self) -> None:
        """Exactly one of the 256 tag bytes is unassigned."""
        unassigned = [tag for tag in range(256) if classify(tag) is None]
        assert unassigned == [0xC1]

    def test_every_family_reachable(self) -> None:
        """Every family is produced by at least one tag byte."""
        reached = {classify(tag) for tag in range(256)} - {None}
        assert reached == set(Family)


class TestEmbeddedValue:
    """Test immediate values carried in tag bytes."""

    def test_fixnums(self) -> None:
        """Fixnum tags carry their own value."""
        assert embedded_value(0x00, Family.POSITIVE_FIXNUM) == 0
        assert embedded_value(0x7F, Family.POSITIVE_FIXNUM) == 127
        assert embedded_value(0xFF, Family.NEGATIVE_FIXNUM) == -1
        assert embedded_value(0xE0, Family.NEGATIVE_FIXNUM) == -32

    def test_lengths(self) -> None:
        """Fix containers carry their length in the low bits."""
        assert embedded_value(0xA0, Family.FIXSTR) == 0
        assert embedded_value(0xBF, Family.FIXSTR) == 31
        assert embedded_value(0x9F, Family.FIXARRAY) == 15
        assert embedded_value(0x83, Family.FIXMAP) == 3

    def test_non_embedding_family(self) -> None:
        """Families without an embedded value are rejected."""
        with pytest.raises(ValueError, match="does not embed"):
            embedded_value(0xCC, Family.UINT8)


class TestKindFamilies:
    """Test the kind to family mapping."""

    def test_families_partition_the_table(self) -> None:
        """Every family belongs to exactly one value kind."""
        seen: set[Family] = set()
        for families in fmt.KIND_FAMILIES.values():
            assert not (seen & families)
            seen |= families
        assert seen == set(Family)

    def test_every_value_kind_has_families(self) -> None:
        """Each value class names a kind with at least one family."""
        assert set(fmt.KIND_FAMILIES) == {kind.kind for kind in VALUE_KINDS}
        for kind in VALUE_KINDS:
            assert fmt.KIND_FAMILIES[kind.kind]
