"""Big-endian binary reader for font tables."""

from __future__ import annotations

import struct

from glyphraster.fmath import f32


class StreamError(ValueError):
    """Raised when a read runs past the end of the data."""


class Stream:
    """A cursor over big-endian bytes.

    Reads advance ``offset``; a read that would run past the end raises
    :class:`StreamError` and leaves ``offset`` unchanged.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self.offset = 0

    def __len__(self) -> int:
        return len(self._data)

    def reset(self) -> None:
        """Move the cursor back to the start."""
        self.offset = 0

    def seek(self, offset: int) -> None:
        """Move the cursor to an absolute position."""
        self.offset = offset

    def skip(self, count: int) -> None:
        """Advance the cursor by ``count`` bytes without reading."""
        self.offset += count

    def _take(self, size: int) -> bytes:
        if size < 0:
            raise ValueError(f"negative read size {size}")
        end = self.offset + size
        if self.offset < 0 or end > len(self._data):
            raise StreamError(
                f"read of {size} bytes at offset {self.offset} exceeds {len(self._data)} bytes"
            )
        chunk = self._data[self.offset : end]
        self.offset = end
        return chunk

    def _unpack(self, code: str, count: int, size: int) -> tuple:
        return struct.unpack(f">{count}{code}", self._take(count * size))

    def read_u8(self) -> int:
        return self._unpack("B", 1, 1)[0]

    def read_u16(self) -> int:
        return self._unpack("H", 1, 2)[0]

    def read_u32(self) -> int:
        return self._unpack("I", 1, 4)[0]

    def read_i8(self) -> int:
        return self._unpack("b", 1, 1)[0]

    def read_i16(self) -> int:
        return self._unpack("h", 1, 2)[0]

    def read_i32(self) -> int:
        return self._unpack("i", 1, 4)[0]

    def read_f2dot14(self) -> float:
        """Read a signed 2.14 fixed-point number."""
        return f32(self.read_i16() / (1 << 14))

    def read_tag(self) -> bytes:
        """Read a four-byte table tag."""
        return self._take(4)

    def read_u8_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack("B", length, 1)

    def read_u16_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack("H", length, 2)

    def read_u32_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack("I", length, 4)

    def read_i8_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack("b", length, 1)

    def read_i16_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack("h", length, 2)

    def read_i32_slice(self, length: int) -> tuple[int, ...]:
        return self._unpack("i", length, 4)