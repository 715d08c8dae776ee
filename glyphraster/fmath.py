"""Single-precision float helpers.

Every function takes and returns Python floats that hold IEEE-754 binary32
values. Each arithmetic step is rounded to single precision, so results match
32-bit float arithmetic bit for bit.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Sequence

_PACK = struct.Struct("<f")
_BITS = struct.Struct("<I")

_SIGN_BIT = 0x80000000
_ABS_MASK = 0x7FFFFFFF
_U32 = 0xFFFFFFFF

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def f32(value: float) -> float:
    """Round ``value`` to the nearest single-precision float."""
    value = float(value)
    try:
        return _PACK.unpack(_PACK.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def to_bits(value: float) -> int:
    """Return the 32-bit pattern of ``value`` as a single-precision float."""
    return _BITS.unpack(_PACK.pack(f32(value)))[0]


def from_bits(bits: int) -> float:
    """Return the single-precision float whose bit pattern is ``bits``."""
    return _PACK.unpack(_BITS.pack(bits & _U32))[0]


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
        sign = -1.0 if (to_bits(a) ^ to_bits(b)) & _SIGN_BIT else 1.0
        return sign * math.inf
    return f32(a / b)


def ceil(x: float) -> float:
    """Round towards positive infinity."""
    x = f32(x)
    ui = to_bits(x)
    e = ((ui >> 23) & 0xFF) - 0x7F
    if e >= 23:
        return x
    if e >= 0:
        m = 0x007FFFFF >> e
        if ui & m == 0:
            return x
        if ui >> 31 == 0:
            ui += m
        ui &= ~m & _U32
    elif ui >> 31 != 0:
        return -0.0
    elif (ui << 1) & _U32 != 0:
        return 1.0
    return from_bits(ui)


def floor(x: float) -> float:
    """Round towards negative infinity."""
    x = f32(x)
    ui = to_bits(x)
    e = ((ui >> 23) & 0xFF) - 0x7F
    if e >= 23:
        return x
    if e >= 0:
        m = 0x007FFFFF >> e
        if ui & m == 0:
            return x
        if ui >> 31 != 0:
            ui += m
        ui &= ~m & _U32
    elif ui >> 31 == 0:
        ui = 0
    elif (ui << 1) & _U32 != 0:
        return -1.0
    return from_bits(ui)


def trunc(x: float) -> float:
    """Round towards zero."""
    x = f32(x)
    i = to_bits(x)
    e = ((i >> 23) & 0xFF) - 0x7F + 9
    if e >= 23 + 9:
        return x
    if e < 9:
        e = 1
    m = _U32 >> e
    if i & m == 0:
        return x
    i &= ~m & _U32
    return from_bits(i)


def fract(x: float) -> float:
    """Return the fractional part of ``x``, carrying the sign of ``x``."""
    x = f32(x)
    return _sub(x, trunc(x))


def sqrt(x: float) -> float:
    """Correctly rounded single-precision square root."""
    x = f32(x)
    if math.isnan(x) or math.isinf(x):
        return _add(_mul(x, x), x) if x > 0 else math.nan
    if x == 0.0:
        return x
    if x < 0.0:
        return math.nan
    return f32(math.sqrt(x))


_ATAN_HI = tuple(f32(v) for v in (4.6364760399e-01, 7.8539812565e-01, 9.8279368877e-01, 1.5707962513e00))
_ATAN_LO = tuple(f32(v) for v in (5.0121582440e-09, 3.7748947079e-08, 3.4473217170e-08, 7.5497894159e-08))
_A_T = tuple(
    f32(v) for v in (3.3333328366e-01, -1.9999158382e-01, 1.4253635705e-01, -1.0648017377e-01, 6.1687607318e-02)
)
_X1P_120 = from_bits(0x03800000)


def atan(x: float) -> float:
    """The arctangent function."""
    x = f32(x)
    ix = to_bits(x)
    sign = (ix >> 31) != 0
    ix &= _ABS_MASK

    if ix >= 0x4C800000:
        if math.isnan(x):
            return x
        z = _add(_ATAN_HI[3], _X1P_120)
        return -z if sign else z

    if ix < 0x3EE00000:
        if ix < 0x39800000:
            return x
        index = -1
    else:
        x = fabs(x)
        if ix < 0x3F980000:
            if ix < 0x3F300000:
                x = _div(_sub(_mul(2.0, x), 1.0), _add(2.0, x))
                index = 0
            else:
                x = _div(_sub(x, 1.0), _add(x, 1.0))
                index = 1
        elif ix < 0x401C0000:
            x = _div(_sub(x, 1.5), _add(1.0, _mul(1.5, x)))
            index = 2
        else:
            x = _div(-1.0, x)
            index = 3

    z = _mul(x, x)
    w = _mul(z, z)
    s1 = _mul(z, _add(_A_T[0], _mul(w, _add(_A_T[2], _mul(w, _A_T[4])))))
    s2 = _mul(w, _add(_A_T[1], _mul(w, _A_T[3])))
    if index < 0:
        return _sub(x, _mul(x, _add(s1, s2)))
    z = _sub(_ATAN_HI[index], _sub(_sub(_mul(x, _add(s1, s2)), _ATAN_LO[index]), x))
    return -z if sign else z


_PI = f32(3.1415927410e00)
_PI_LO = f32(-8.7422776573e-08)


def atan2f(y: float, x: float) -> float:
    """The two-argument arctangent of ``y / x``."""
    x = f32(x)
    y = f32(y)
    if math.isnan(x) or math.isnan(y):
        return _add(x, y)
    ix = to_bits(x)
    iy = to_bits(y)
    if ix == 0x3F800000:
        return atan(y)
    m = ((iy >> 31) & 1) | ((ix >> 30) & 2)
    ix &= _ABS_MASK
    iy &= _ABS_MASK

    if iy == 0:
        if m in (0, 1):
            return y
        return _PI if m == 2 else -_PI
    if ix == 0:
        return -_PI / 2.0 if m & 1 else _PI / 2.0
    if ix == 0x7F800000:
        if iy == 0x7F800000:
            quarter = _PI / 4.0
            three_quarters = _div(_mul(3.0, _PI), 4.0)
            return (quarter, -quarter, three_quarters, -three_quarters)[m]
        return (0.0, -0.0, _PI, -_PI)[m]
    if ix + (26 << 23) < iy or iy == 0x7F800000:
        return -_PI / 2.0 if m & 1 else _PI / 2.0

    if m & 2 and iy + (26 << 23) < ix:
        z = 0.0
    else:
        z = atan(fabs(_div(y, x)))
    if m == 0:
        return z
    if m == 1:
        return -z
    if m == 2:
        return _sub(_PI, _sub(z, _PI_LO))
    return _sub(_sub(z, _PI_LO), _PI)


_F_PI = f32(math.pi)
_F_PI_2 = _F_PI / 2.0
_F_M_PI_2 = -_F_PI / 2.0
_F_PI_4 = _F_PI / 4.0
_F_PI_3_4 = _mul(_F_PI_4, 3.0)
_APPROX_CUBIC = f32(0.1963)
_APPROX_LINEAR = f32(0.9817)


def atan2(x: float, y: float) -> float:
    """Fast polynomial approximation of the angle of the vector (x, y)."""
    x = f32(x)
    y = f32(y)
    abs_y = fabs(y)
    if x == 0.0:
        if y > 0.0:
            return _F_PI_2
        if y == 0.0:
            return 0.0
        return _F_M_PI_2
    if x > 0.0:
        r = _div(_sub(x, abs_y), _add(x, abs_y))
        c = _F_PI_4
    else:
        r = _div(_add(x, abs_y), _sub(abs_y, x))
        c = _F_PI_3_4
    cubic = _mul(_mul(_mul(_APPROX_CUBIC, r), r), r)
    r = _add(_sub(cubic, _mul(_APPROX_LINEAR, r)), c)
    return copysign(r, y)


def fabs(value: float) -> float:
    """Clear the sign bit."""
    return from_bits(to_bits(value) & _ABS_MASK)


def is_negative(value: float) -> bool:
    """True when the sign bit is set, including for -0.0."""
    return to_bits(value) >= _SIGN_BIT


def is_positive(value: float) -> bool:
    """True when the sign bit is clear, including for +0.0."""
    return to_bits(value) < _SIGN_BIT


def flipsign(value: float) -> float:
    """Invert the sign bit."""
    return from_bits(to_bits(value) ^ _SIGN_BIT)


def copysign(value: float, sign: float) -> float:
    """Return ``value`` with the sign bit of ``sign``."""
    return from_bits((to_bits(value) & _ABS_MASK) | (to_bits(sign) & _SIGN_BIT))


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Limit ``value`` to the range [minimum, maximum]; NaN passes through."""
    x = value
    if x < minimum:
        x = minimum
    if x > maximum:
        x = maximum
    return x


def as_i32(value: float) -> int:
    """Convert to a 32-bit integer, truncating and saturating; NaN gives 0."""
    value = f32(value)
    if math.isnan(value):
        return 0
    if value >= 2.0**31:
        return _I32_MAX
    if value < -(2.0**31):
        return _I32_MIN
    return int(value)


def _as_u8(value: float) -> int:
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return int(value)


_COVERAGE_SCALE = f32(255.9)


def get_bitmap(coverage: Sequence[float], length: int) -> bytes:
    """Turn an accumulation buffer into ``length`` bytes of coverage.

    The buffer holds signed area deltas; their running sum is the coverage
    of each pixel, scaled to 0..255.
    """
    if length > len(coverage):
        raise ValueError(f"length {length} exceeds buffer size {len(coverage)}")
    output = bytearray(length)
    height = 0.0
    for i in range(length):
        height = _add(height, f32(coverage[i]))
        output[i] = _as_u8(clamp(_mul(fabs(height), _COVERAGE_SCALE), 0.0, 255.0))
    return bytes(output)