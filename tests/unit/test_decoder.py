"""Unit tests for the decoder."""

from __future__ import annotations

import pytest

from mpack import (
    Array,
    Bin,
    Bool,
    CodecConfig,
    Decoder,
    Extended,
    Float32,
    Float64,
    Integer,
    MalformedStream,
    Map,
    Nil,
    Str,
    TruncatedInput,
    decode,
)
from mpack.codec import formats as fmt
from mpack.codec.decoder import DECODE_ARMS
from mpack.codec.formats import Family
from mpack.models import VALUE_KINDS


class TestScalarDecoding:
    """Test decoding of every scalar family."""

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (b"\xc0", Nil()),
            (b"\xc2", Bool(False)),
            (b"\xc3", Bool(True)),
            (b"\x00", Integer(0)),
            (b"\x7f", Integer(127)),
            (b"\xff", Integer(-1)),
            (b"\xe0", Integer(-32)),
            (b"\xcc\xff", Integer(255)),
            (b"\xcd\x01\x00", Integer(256)),
            (b"\xce\xff\xff\xff\xff", Integer(4294967295)),
            (b"\xcf" + b"\xff" * 8, Integer(2**64 - 1)),
            (b"\xd0\x80", Integer(-128)),
            (b"\xd1\xff\x7f", Integer(-129)),
            (b"\xd2\x80\x00\x00\x00", Integer(-(2**31))),
            (b"\xd3\x80" + b"\x00" * 7, Integer(-(2**63))),
            (b"\xca\x3f\xc0\x00\x00", Float32(1.5)),
            (b"\xcb\x3f\xf8" + b"\x00" * 6, Float64(1.5)),
        ],
    )
    def test_scalar(self, data: bytes, expected) -> None:
        """Each tag decodes to the expected value."""
        assert decode(data) == expected

    def test_non_minimal_forms_accepted(self) -> None:
        """Wider-than-necessary encodings decode to the same value."""
        assert decode(b"\xcc\x01") == Integer(1)
        assert decode(b"\xd0\xe0") == Integer(-32)
        assert decode(b"\xcf" + b"\x00" * 7 + b"\x05") == Integer(5)
        assert decode(b"\xd9\x01a") == Str("a")

    def test_negative_fixnum_in_any_config(self) -> None:
        """0xE0 decodes to -32 regardless of the encoding policy."""
        assert decode(b"\xe0", config=CodecConfig()) == Integer(-32)


class TestByteDecoding:
    """Test strings, binaries and extensions."""

    def test_strings(self) -> None:
        """Every string family yields a Str."""
        assert decode(b"\xa0") == Str(b"")
        assert decode(b"\xa2hi") == Str("hi")
        assert decode(b"\xbf" + b"a" * 31) == Str("a" * 31)
        assert decode(b"\xda\x00\x02hi") == Str("hi")
        assert decode(b"\xdb\x00\x00\x00\x02hi") == Str("hi")

    def test_binaries(self) -> None:
        """Every binary family yields a Bin."""
        assert decode(b"\xc4\x00") == Bin(b"")
        assert decode(b"\xc5\x00\x01\x07") == Bin(b"\x07")
        assert decode(b"\xc6\x00\x00\x00\x01\x07") == Bin(b"\x07")

    def test_fixext(self) -> None:
        """fixext tags imply the payload length."""
        assert decode(b"\xd4\x2a\x01") == Extended(42, b"\x01")
        assert decode(b"\xd8\x2a" + bytes(16)) == Extended(42, bytes(16))

    def test_sized_ext(self) -> None:
        """ext8/16/32 read the length before the type."""
        assert decode(b"\xc7\x03\xfe\x01\x02\x03") == Extended(-2, b"\x01\x02\x03")
        assert decode(b"\xc8\x00\x00\x05") == Extended(5, b"")
        assert decode(b"\xc9\x00\x00\x00\x01\x05\x09") == Extended(5, b"\x09")

    def test_invalid_utf8_kept_by_default(self) -> None:
        """Without validation the bytes are kept as received."""
        assert decode(b"\xa2\xff\xfe") == Str(b"\xff\xfe")

    def test_invalid_utf8_rejected_when_validating(self) -> None:
        """With validation invalid UTF-8 is a malformed stream."""
        with pytest.raises(MalformedStream, match="UTF-8"):
            decode(b"\xa2\xff\xfe", config=CodecConfig(validate_utf8=True))

    def test_valid_utf8_when_validating(self) -> None:
        """Valid text passes validation."""
        data = b"\xa3" + "•".encode("utf-8")
        assert decode(data, config=CodecConfig(validate_utf8=True)).text == "•"


class TestContainerDecoding:
    """Test arrays and maps."""

    def test_empty_containers(self) -> None:
        """Zero-length containers."""
        assert decode(b"\x90") == Array([])
        assert decode(b"\x80") == Map({})
        assert decode(b"\xdc\x00\x00") == Array([])
        assert decode(b"\xdf\x00\x00\x00\x00") == Map({})

    def test_nested(self) -> None:
        """Containers nest."""
        value = decode(b"\x81\xa1a\x92\x01\x02")
        assert value == Map({Str("a"): Array([Integer(1), Integer(2)])})

    def test_array16(self) -> None:
        """array16 carries a 2-byte count."""
        value = decode(b"\xdc\x00\x10" + b"\xc0" * 16)
        assert len(value) == 16

    def test_duplicate_keys_last_wins(self) -> None:
        """A repeated key keeps the last value."""
        value = decode(b"\x82\x01\xa1a\x01\xa1b")
        assert value == Map({Integer(1): Str("b")})
        assert len(value) == 1

    def test_container_keys(self) -> None:
        """Arrays can be map keys on the wire."""
        value = decode(b"\x81\x91\x01\xc3")
        assert value.get(Array([Integer(1)])) == Bool(True)

    def test_depth_limit(self) -> None:
        """Nesting up to max_depth decodes; one more level is rejected."""
        config = CodecConfig(max_depth=10)
        assert isinstance(decode(b"\x91" * 10 + b"\xc0", config=config), Array)

        with pytest.raises(MalformedStream, match="max_depth"):
            decode(b"\x91" * 11 + b"\xc0", config=config)

    def test_default_depth_limit(self) -> None:
        """Hostile nesting is rejected before the recursion limit."""
        with pytest.raises(MalformedStream, match="max_depth=256"):
            decode(b"\x91" * 5000 + b"\xc0")


class TestMalformedInput:
    """Test malformed and truncated input."""

    def test_reserved_tag(self) -> None:
        """0xC1 is never valid."""
        with pytest.raises(MalformedStream) as exc_info:
            decode(b"\xc1")
        assert exc_info.value.tag == 0xC1

    def test_reserved_tag_nested(self) -> None:
        """0xC1 inside a container is also rejected."""
        with pytest.raises(MalformedStream):
            decode(b"\x92\x01\xc1")

    def test_empty_input(self) -> None:
        """No bytes at all."""
        with pytest.raises(TruncatedInput) as exc_info:
            decode(b"")
        assert exc_info.value.needed == 1
        assert exc_info.value.available == 0

    def test_truncated_payload(self) -> None:
        """Declared length longer than the input."""
        with pytest.raises(TruncatedInput) as exc_info:
            decode(b"\xd9\x05ab")
        assert exc_info.value.needed == 5
        assert exc_info.value.available == 2

    @pytest.mark.parametrize(
        "data",
        [
            b"\xcd\x01",
            b"\xca\x00\x00",
            b"\xd9",
            b"\x92\x01",
            b"\x81\x01",
            b"\xd4\x01",
            b"\xc7\x02\x01\x00",
        ],
    )
    def test_truncated(self, data: bytes) -> None:
        """Any cut-off value is reported as truncated."""
        with pytest.raises(TruncatedInput):
            decode(data)


class TestDecoderObject:
    """Test the Decoder class."""

    def test_sequential_values(self) -> None:
        """Repeated decode() calls read consecutive values."""
        decoder = Decoder(b"\x01\xa1a\xc0")
        assert decoder.decode() == Integer(1)
        assert decoder.decode() == Str("a")
        assert decoder.decode() == Nil()
        assert decoder.position == 4

        with pytest.raises(TruncatedInput):
            decoder.decode()

    def test_trailing_bytes_untouched(self) -> None:
        """Only the first value is consumed."""
        decoder = Decoder(b"\x01\xff\xff")
        assert decoder.decode() == Integer(1)
        assert decoder.position == 1

    def test_accepts_buffer_types(self) -> None:
        """bytearray and memoryview sources."""
        assert decode(bytearray(b"\x05")) == Integer(5)
        assert decode(memoryview(b"\x05")) == Integer(5)


class TestDispatch:
    """Test decode table coverage."""

    def test_every_family_has_an_arm(self) -> None:
        """All wire families are decodable."""
        assert set(DECODE_ARMS) == set(Family)

    def test_every_kind_is_decodable(self) -> None:
        """Every value class has at least one decoding family."""
        for kind in VALUE_KINDS:
            families = fmt.KIND_FAMILIES[kind.kind]
            assert families
            assert families <= set(DECODE_ARMS)
