"""Reader for the horizontal pairs of a font's ``kern`` table."""

from __future__ import annotations

from dataclasses import dataclass

from glyphraster.parse import Stream, StreamError


class _Unusable(Exception):
    """Internal signal that the table cannot be used."""


@dataclass(frozen=True)
class _SubTableHeader:
    length: int
    is_horizontal: bool
    format: int


def kern_key(left: int, right: int) -> int:
    """Combine two glyph indices into the key used by the kerning map."""
    return (left << 16) | right


def _read_ot_subtable(stream: Stream) -> _SubTableHeader:
    stream.read_u16()  # version
    length = stream.read_u16()
    table_format = stream.read_u8()
    coverage = stream.read_u8()
    return _SubTableHeader(length, coverage & 0x01 == 0x01, table_format)


def _read_aat_subtable(stream: Stream) -> _SubTableHeader:
    length = stream.read_u32()
    coverage = stream.read_u8()
    table_format = stream.read_u8()
    stream.read_u16()  # tuple index
    return _SubTableHeader(length, coverage & 0x80 != 0x80, table_format)


def _read_format0(stream: Stream) -> dict[int, int]:
    pairs = stream.read_u16()
    stream.skip(6)  # searchRange, entrySelector, rangeShift
    mappings: dict[int, int] = {}
    for _ in range(pairs):
        left = stream.read_u16()
        right = stream.read_u16()
        mappings[kern_key(left, right)] = stream.read_i16()
    return mappings


def _read_format3(stream: Stream) -> dict[int, int]:
    glyph_count = stream.read_u16()
    kerning_values_count = stream.read_u8()
    left_classes_count = stream.read_u8()
    right_classes_count = stream.read_u8()
    stream.skip(1)  # reserved flags
    indices_count = left_classes_count * right_classes_count

    kerning_values = stream.read_i16_slice(kerning_values_count)
    left_classes = stream.read_u8_slice(glyph_count)
    right_classes = stream.read_u8_slice(glyph_count)
    indices = stream.read_u8_slice(indices_count)

    mappings: dict[int, int] = {}
    for left, left_class in enumerate(left_classes):
        for right, right_class in enumerate(right_classes):
            if left_class > left_classes_count or right_class > right_classes_count:
                continue
            index = left_class * right_classes_count + right_class
            if index >= len(indices):
                raise _Unusable("kerning class index out of range")
            value_index = indices[index]
            if value_index >= len(kerning_values):
                raise _Unusable("kerning value index out of range")
            mappings[kern_key(left, right)] = kerning_values[value_index]
    return mappings


def _parse(stream: Stream) -> dict[int, int] | None:
    version_major = stream.read_u16()
    if version_major == 0x0000:
        table_count = stream.read_u16()
        read_subtable = _read_ot_subtable
    elif version_major == 0x0001:
        stream.read_u16()  # version minor
        table_count = stream.read_u32()
        read_subtable = _read_aat_subtable
    else:
        return None

    for _ in range(table_count):
        start = stream.offset
        header = read_subtable(stream)
        if header.format == 0:
            if header.is_horizontal:
                return _read_format0(stream)
        elif header.format == 3:
            if header.is_horizontal:
                return _read_format3(stream)
        else:
            stream.seek(start + header.length)
    return None


def parse_kern(data: bytes | bytearray | memoryview) -> dict[int, int] | None:
    """Return the horizontal kerning pairs of a ``kern`` table.

    The map goes from :func:`kern_key` of a left and right glyph index to a
    kerning value in font units. ``None`` is returned when the table is
    truncated, malformed, of an unknown version, or has no horizontal
    subtable in format 0 or 3.
    """
    try:
        return _parse(Stream(data))
    except (StreamError, _Unusable):
        return None