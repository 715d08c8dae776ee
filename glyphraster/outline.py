"""Glyph outline, metric and font setting records."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from glyphraster.fmath import f32

_I16_MIN = -(2**15)
_I16_MAX = 2**15 - 1


@dataclass(frozen=True)
class OutlineBounds:
    """Bounds of a glyph's outline in subpixels; always inside its bitmap."""

    xmin: float = 0.0
    ymin: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def scale(self, scale: float) -> OutlineBounds:
        """Return the bounds multiplied by ``scale``."""
        return OutlineBounds(
            xmin=f32(self.xmin * scale),
            ymin=f32(self.ymin * scale),
            width=f32(self.width * scale),
            height=f32(self.height * scale),
        )


@dataclass(frozen=True)
class Metrics:
    """Layout information for a glyph at a fixed scale."""

    xmin: int = 0
    ymin: int = 0
    width: int = 0
    height: int = 0
    advance_width: float = 0.0
    advance_height: float = 0.0
    bounds: OutlineBounds = field(default_factory=OutlineBounds)


@dataclass(frozen=True)
class LineMetrics:
    """Metrics used to position lines of text."""

    ascent: float
    descent: float
    line_gap: float
    new_line_size: float

    @classmethod
    def from_units(cls, ascent: int, descent: int, line_gap: int) -> LineMetrics:
        """Build line metrics from 16-bit font unit values.

        ``new_line_size`` is ``ascent - descent + line_gap``.
        """
        for name, value in (("ascent", ascent), ("descent", descent), ("line_gap", line_gap)):
            if not _I16_MIN <= value <= _I16_MAX:
                raise ValueError(f"{name} {value} is outside the 16-bit signed range")
        return cls(
            ascent=f32(ascent),
            descent=f32(descent),
            line_gap=f32(line_gap),
            new_line_size=f32(ascent - descent + line_gap),
        )

    def scale(self, scale: float) -> LineMetrics:
        """Return the metrics multiplied by ``scale``."""
        return LineMetrics(
            ascent=f32(self.ascent * scale),
            descent=f32(self.descent * scale),
            line_gap=f32(self.line_gap * scale),
            new_line_size=f32(self.new_line_size * scale),
        )


@dataclass(frozen=True)
class Glyph:
    """Compiled glyph geometry and its unscaled metrics."""

    v_lines: Sequence[Any] = ()
    m_lines: Sequence[Any] = ()
    advance_width: float = 0.0
    advance_height: float = 0.0
    bounds: OutlineBounds = field(default_factory=OutlineBounds)


@dataclass(frozen=True)
class FontSettings:
    """Settings that control how a font is loaded."""

    collection_index: int = 0
    scale: float = 40.0
    load_substitutions: bool = True