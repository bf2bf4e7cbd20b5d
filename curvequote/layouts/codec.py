"""Fixed-offset little-endian field readers.

A ``Layout`` is a named table of fields. ``Layout.decode`` checks the buffer
length against the furthest field once, then reads every field; nothing is
read past the end of the buffer.
"""

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from curvequote.exceptions import BufferTooShortError

# Every Anchor account starts with an 8-byte discriminator
DISCRIMINATOR_SIZE = 8


class FieldKind(Enum):
    U8 = 1
    BOOL = 2
    U16 = 3
    U64 = 4
    PUBKEY = 5

    @property
    def width(self) -> int:
        return _WIDTHS[self]


_WIDTHS = {
    FieldKind.U8: 1,
    FieldKind.BOOL: 1,
    FieldKind.U16: 2,
    FieldKind.U64: 8,
    FieldKind.PUBKEY: 32,
}


def read_u8(data: bytes, offset: int) -> int:
    return data[offset]


def read_bool(data: bytes, offset: int) -> bool:
    return data[offset] != 0


def read_u16(data: bytes, offset: int) -> int:
    return struct.unpack_from("<H", data, offset)[0]


def read_u64(data: bytes, offset: int) -> int:
    return struct.unpack_from("<Q", data, offset)[0]


def read_pubkey(data: bytes, offset: int) -> str:
    return str(Pubkey.from_bytes(data[offset:offset + 32]))


_READERS = {
    FieldKind.U8: read_u8,
    FieldKind.BOOL: read_bool,
    FieldKind.U16: read_u16,
    FieldKind.U64: read_u64,
    FieldKind.PUBKEY: read_pubkey,
}


@dataclass(frozen=True)
class FieldSpec:
    name: str
    offset: int
    kind: FieldKind

    @property
    def end(self) -> int:
        return self.offset + self.kind.width


@dataclass(frozen=True)
class Layout:
    name: str
    fields: tuple[FieldSpec, ...]

    @property
    def min_size(self) -> int:
        return max(f.end for f in self.fields)

    def require(self, data: bytes) -> None:
        if len(data) < self.min_size:
            raise BufferTooShortError(self.name, self.min_size, len(data))

    def decode(self, data: bytes) -> dict[str, Any]:
        self.require(data)
        return {f.name: _READERS[f.kind](data, f.offset) for f in self.fields}

    def read(self, data: bytes, name: str) -> Any:
        """Read a single named field, bounds-checked against that field only."""
        field = next(f for f in self.fields if f.name == name)
        if len(data) < field.end:
            raise BufferTooShortError(f"{self.name}.{name}", field.end, len(data))
        return _READERS[field.kind](data, field.offset)
