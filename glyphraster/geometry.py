"""Outline geometry: points, curves, and flattening outlines into lines."""

from __future__ import annotations

import math
from dataclasses import dataclass

from glyphraster.fmath import atan2, f32, fabs, from_bits, sqrt, to_bits
from glyphraster.outline import Glyph, OutlineBounds

_F32_MAX = from_bits(0x7F7FFFFF)
_F32_MIN = -_F32_MAX

_ERROR_THRESHOLD = 3.0  # In pixels.

_FLOOR_NUDGE = 0
_CEIL_NUDGE = 1


def _add(a: float, b: float) -> float:
    return f32(a + b)


def _sub(a: float, b: float) -> float:
    return f32(a - b)


def _mul(a: float, b: float) -> float:
    return f32(a * b)


def _div(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(1.0, a) * math.copysign(1.0, b) * math.inf
    return f32(a / b)


@dataclass(frozen=True)
class Point:
    """A point with absolute coordinates."""

    x: float = 0.0
    y: float = 0.0

    def scale(self, scale: float) -> Point:
        return Point(_mul(self.x, scale), _mul(self.y, scale))

    def distance_squared(self, other: Point) -> float:
        x = _sub(self.x, other.x)
        y = _sub(self.y, other.y)
        return _add(_mul(x, x), _mul(y, y))

    def distance(self, other: Point) -> float:
        return sqrt(self.distance_squared(other))

    def midpoint(self, other: Point) -> Point:
        return Point(
            _div(_add(self.x, other.x), 2.0),
            _div(_add(self.y, other.y), 2.0),
        )


@dataclass(frozen=True)
class QuadCurve:
    """A quadratic Bézier curve from ``a`` through control ``b`` to ``c``."""

    a: Point
    b: Point
    c: Point

    def scale(self, scale: float) -> QuadCurve:
        return QuadCurve(self.a.scale(scale), self.b.scale(scale), self.c.scale(scale))

    def is_flat(self, threshold: float) -> bool:
        d1 = sqrt(self.a.distance_squared(self.b))
        d2 = sqrt(self.b.distance_squared(self.c))
        d3 = sqrt(self.a.distance_squared(self.c))
        return _add(d1, d2) < _mul(threshold, d3)

    def split(self) -> tuple[QuadCurve, QuadCurve]:
        """Split the curve at t = 0.5."""
        q0 = self.a.midpoint(self.b)
        q1 = self.b.midpoint(self.c)
        r0 = q0.midpoint(q1)
        return QuadCurve(self.a, q0, r0), QuadCurve(r0, q1, self.c)

    def point(self, t: float) -> Point:
        """The point at time ``t`` on the curve."""
        tm = _sub(1.0, t)
        a = _mul(tm, tm)
        b = _mul(_mul(2.0, tm), t)
        c = _mul(t, t)
        x = _add(_add(_mul(a, self.a.x), _mul(b, self.b.x)), _mul(c, self.c.x))
        y = _add(_add(_mul(a, self.a.y), _mul(b, self.b.y)), _mul(c, self.c.y))
        return Point(x, y)

    def slope(self, t: float) -> tuple[float, float]:
        """The direction of the tangent at time ``t``."""
        tm = _sub(1.0, t)
        a = _mul(2.0, tm)
        b = _mul(2.0, t)
        x = _add(_mul(a, _sub(self.b.x, self.a.x)), _mul(b, _sub(self.c.x, self.b.x)))
        y = _add(_mul(a, _sub(self.b.y, self.a.y)), _mul(b, _sub(self.c.y, self.b.y)))
        return x, y

    def angle(self, t: float) -> float:
        """The angle of the tangent at time ``t`` in radians."""
        x, y = self.slope(t)
        return fabs(atan2(x, y))


@dataclass(frozen=True)
class CubeCurve:
    """A cubic Bézier curve from ``a`` through controls ``b`` and ``c`` to ``d``."""

    a: Point
    b: Point
    c: Point
    d: Point

    def scale(self, scale: float) -> CubeCurve:
        return CubeCurve(
            self.a.scale(scale), self.b.scale(scale), self.c.scale(scale), self.d.scale(scale)
        )

    def is_flat(self, threshold: float) -> bool:
        d1 = sqrt(self.a.distance_squared(self.b))
        d2 = sqrt(self.b.distance_squared(self.c))
        d3 = sqrt(self.c.distance_squared(self.d))
        d4 = sqrt(self.a.distance_squared(self.d))
        return _add(_add(d1, d2), d3) < _mul(threshold, d4)

    def split(self) -> tuple[CubeCurve, CubeCurve]:
        """Split the curve at t = 0.5."""
        q0 = self.a.midpoint(self.b)
        q1 = self.b.midpoint(self.c)
        q2 = self.c.midpoint(self.d)
        r0 = q0.midpoint(q1)
        r1 = q1.midpoint(q2)
        s0 = r0.midpoint(r1)
        return CubeCurve(self.a, q0, r0, s0), CubeCurve(s0, r1, q2, self.d)

    def point(self, t: float) -> Point:
        """The point at time ``t`` on the curve."""
        tm = _sub(1.0, t)
        a = _mul(_mul(tm, tm), tm)
        b = _mul(_mul(3.0, _mul(tm, tm)), t)
        c = _mul(_mul(3.0, tm), _mul(t, t))
        d = _mul(_mul(t, t), t)
        x = _add(
            _add(_add(_mul(a, self.a.x), _mul(b, self.b.x)), _mul(c, self.c.x)),
            _mul(d, self.d.x),
        )
        y = _add(
            _add(_add(_mul(a, self.a.y), _mul(b, self.b.y)), _mul(c, self.c.y)),
            _mul(d, self.d.y),
        )
        return Point(x, y)

    def slope(self, t: float) -> tuple[float, float]:
        """The direction of the tangent at time ``t``."""
        tm = _sub(1.0, t)
        a = _mul(3.0, _mul(tm, tm))
        b = _mul(_mul(6.0, tm), t)
        c = _mul(3.0, _mul(t, t))
        x = _add(
            _add(_mul(a, _sub(self.b.x, self.a.x)), _mul(b, _sub(self.c.x, self.b.x))),
            _mul(c, _sub(self.d.x, self.c.x)),
        )
        y = _add(
            _add(_mul(a, _sub(self.b.y, self.a.y)), _mul(b, _sub(self.c.y, self.b.y))),
            _mul(c, _sub(self.d.y, self.c.y)),
        )
        return x, y

    def angle(self, t: float) -> float:
        """The angle of the tangent at time ``t`` in radians."""
        x, y = self.slope(t)
        return fabs(atan2(x, y))


@dataclass(frozen=True, init=False)
class Line:
    """A line segment prepared for rasterization.

    ``coords`` is (x0, y0, x1, y1); ``nudge`` holds integer nudges (0 floor,
    1 ceil) for the start and end coordinates; ``adjustment`` holds the first
    crossing adjustments for x and y; ``params`` is (tdx, tdy, dx, dy).
    """

    coords: tuple[float, float, float, float]
    nudge: tuple[int, int, int, int]
    adjustment: tuple[float, float, float, float]
    params: tuple[float, float, float, float]

    def __init__(self, start: Point, end: Point) -> None:
        sx, sy, ex, ey = f32(start.x), f32(start.y), f32(end.x), f32(end.y)
        x_start_nudge, x_first_adj = (_FLOOR_NUDGE, 1.0) if ex >= sx else (_CEIL_NUDGE, 0.0)
        y_start_nudge, y_first_adj = (_FLOOR_NUDGE, 1.0) if ey >= sy else (_CEIL_NUDGE, 0.0)
        x_end_nudge = _CEIL_NUDGE if ex > sx else _FLOOR_NUDGE
        y_end_nudge = _CEIL_NUDGE if ey > sy else _FLOOR_NUDGE

        dx = _sub(ex, sx)
        dy = _sub(ey, sy)
        tdx = _F32_MAX if dx == 0.0 else _div(1.0, dx)
        tdy = _div(1.0, dy)

        object.__setattr__(self, "coords", (sx, sy, ex, ey))
        object.__setattr__(self, "nudge", (x_start_nudge, y_start_nudge, x_end_nudge, y_end_nudge))
        object.__setattr__(self, "adjustment", (x_first_adj, y_first_adj, 0.0, 0.0))
        object.__setattr__(self, "params", (tdx, tdy, dx, dy))

    def reposition(self, bounds, reverse: bool) -> Line:
        """Return the line moved so ``bounds`` top-left is the origin, y pointing down.

        ``bounds`` needs ``xmin`` and ``ymax``. When ``reverse`` is true the
        direction of the line is swapped.
        """
        x0, y0, x1, y1 = self.coords
        if reverse:
            x0, y0, x1, y1 = x1, y1, x0, y0
        x0 = _sub(x0, bounds.xmin)
        y0 = fabs(_sub(y0, bounds.ymax))
        x1 = _sub(x1, bounds.xmin)
        y1 = fabs(_sub(y1, bounds.ymax))
        return Line(Point(x0, y0), Point(x1, y1))


@dataclass
class _AABB:
    xmin: float = 0.0
    xmax: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0

    def include(self, x: float, y: float) -> None:
        if x < self.xmin:
            self.xmin = x
        if x > self.xmax:
            self.xmax = x
        if y < self.ymin:
            self.ymin = y
        if y > self.ymax:
            self.ymax = y


class Geometry:
    """Collects an outline and flattens its curves into lines.

    Curves are subdivided until each piece deviates from a straight line by
    less than a few pixels at the given ``scale``.
    """

    def __init__(self, scale: float, units_per_em: float) -> None:
        self._v_lines: list[Line] = []
        self._m_lines: list[Line] = []
        self._bounds = _AABB(xmin=_F32_MAX, xmax=_F32_MIN, ymin=_F32_MAX, ymax=_F32_MIN)
        self._start_point = Point()
        self._previous_point = Point()
        self._area = 0.0
        self._max_area = _mul(_ERROR_THRESHOLD * 2.0, _div(f32(units_per_em), f32(scale)))

    def _push(self, start: Point, end: Point) -> None:
        # Bit comparison: only exactly equal values count as the same.
        if to_bits(start.y) == to_bits(end.y):
            return
        self._area = _add(self._area, _mul(_sub(end.y, start.y), _add(end.x, start.x)))
        if to_bits(start.x) == to_bits(end.x):
            self._v_lines.append(Line(start, end))
        else:
            self._m_lines.append(Line(start, end))
        self._bounds.include(start.x, start.y)
        self._bounds.include(end.x, end.y)

    def _flatten(self, curve: QuadCurve | CubeCurve, end: Point) -> None:
        stack = [(self._previous_point, 0.0, end, 1.0)]
        while stack:
            a, at, c, ct = stack.pop()
            bt = _mul(_add(at, ct), 0.5)
            b = curve.point(bt)
            # Twice the triangle area.
            area = _sub(
                _mul(_sub(b.x, a.x), _sub(c.y, a.y)),
                _mul(_sub(c.x, a.x), _sub(b.y, a.y)),
            )
            if fabs(area) > self._max_area:
                stack.append((a, at, b, bt))
                stack.append((b, bt, c, ct))
            else:
                self._push(a, c)

    def move_to(self, x: float, y: float) -> None:
        point = Point(f32(x), f32(y))
        self._start_point = point
        self._previous_point = point

    def line_to(self, x: float, y: float) -> None:
        point = Point(f32(x), f32(y))
        self._push(self._previous_point, point)
        self._previous_point = point

    def quad_to(self, x0: float, y0: float, x1: float, y1: float) -> None:
        control = Point(f32(x0), f32(y0))
        end = Point(f32(x1), f32(y1))
        self._flatten(QuadCurve(self._previous_point, control, end), end)
        self._previous_point = end

    def curve_to(self, x0: float, y0: float, x1: float, y1: float, x2: float, y2: float) -> None:
        first = Point(f32(x0), f32(y0))
        second = Point(f32(x1), f32(y1))
        end = Point(f32(x2), f32(y2))
        self._flatten(CubeCurve(self._previous_point, first, second, end), end)
        self._previous_point = end

    def close(self) -> None:
        if self._start_point != self._previous_point:
            self._push(self._previous_point, self._start_point)
        self._previous_point = self._start_point

    def finalize(self, advance_width: float, advance_height: float) -> Glyph:
        """Build the glyph from the collected outline and the given advances."""
        v_lines: tuple[Line, ...] = ()
        m_lines: tuple[Line, ...] = ()
        if not self._v_lines and not self._m_lines:
            bounds = _AABB()
        else:
            bounds = self._bounds
            reverse = self._area > 0.0
            v_lines = tuple(line.reposition(bounds, reverse) for line in self._v_lines)
            m_lines = tuple(line.reposition(bounds, reverse) for line in self._m_lines)
        return Glyph(
            v_lines=v_lines,
            m_lines=m_lines,
            advance_width=f32(advance_width),
            advance_height=f32(advance_height),
            bounds=OutlineBounds(
                xmin=bounds.xmin,
                ymin=bounds.ymin,
                width=_sub(bounds.xmax, bounds.xmin),
                height=_sub(bounds.ymax, bounds.ymin),
            ),
        )