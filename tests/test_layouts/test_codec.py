"""Tests for fixed-offset field readers and Layout bounds checks."""

import struct

import pytest

from curvequote.exceptions import BufferTooShortError, DecodeError
from curvequote.layouts.codec import FieldKind, FieldSpec, Layout, read_pubkey, read_u16, read_u64

from conftest import addr, key

SAMPLE = Layout(
    "Sample",
    (
        FieldSpec("flag", 8, FieldKind.BOOL),
        FieldSpec("small", 9, FieldKind.U16),
        FieldSpec("big", 11, FieldKind.U64),
        FieldSpec("owner", 19, FieldKind.PUBKEY),
    ),
)


def _sample_bytes() -> bytes:
    buf = bytearray(51)
    buf[8] = 1
    struct.pack_into("<HQ", buf, 9, 513, 2**64 - 1)
    buf[19:51] = key(5)
    return bytes(buf)


class TestReaders:
    def test_little_endian(self) -> None:
        assert read_u16(b"\x01\x02", 0) == 0x0201
        assert read_u64(struct.pack("<Q", 123_456_789_012), 0) == 123_456_789_012

    def test_pubkey_base58(self) -> None:
        assert read_pubkey(key(5), 0) == addr(5)


class TestLayout:
    def test_min_size_is_furthest_field(self) -> None:
        assert SAMPLE.min_size == 51

    def test_decode_all_fields(self) -> None:
        fields = SAMPLE.decode(_sample_bytes())
        assert fields == {"flag": True, "small": 513, "big": 2**64 - 1, "owner": addr(5)}

    def test_extra_trailing_bytes_ignored(self) -> None:
        fields = SAMPLE.decode(_sample_bytes() + b"\xff" * 40)
        assert fields["small"] == 513

    def test_short_buffer_raises(self) -> None:
        with pytest.raises(BufferTooShortError) as exc_info:
            SAMPLE.decode(_sample_bytes()[:50])
        assert exc_info.value.required == 51
        assert exc_info.value.actual == 50
        assert isinstance(exc_info.value, DecodeError)

    def test_empty_buffer_raises(self) -> None:
        with pytest.raises(BufferTooShortError):
            SAMPLE.decode(b"")

    def test_read_single_field_checks_only_that_field(self) -> None:
        data = _sample_bytes()[:19]
        assert SAMPLE.read(data, "big") == 2**64 - 1
        with pytest.raises(BufferTooShortError):
            SAMPLE.read(data, "owner")
