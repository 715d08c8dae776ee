import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from glyphraster import fmath

finite32 = st.floats(width=32, allow_nan=False, allow_infinity=False)


def _bit_walk(start, end, step=4099):
    start_bits = fmath.to_bits(start)
    end_bits = fmath.to_bits(end)
    for bits in range(start_bits, end_bits, step):
        yield fmath.from_bits(bits)


def test_ceil_walk_positive():
    for y in _bit_walk(3.0, 9.0):
        assert fmath.ceil(y) == float(math.ceil(y))


def test_ceil_walk_negative():
    for y in _bit_walk(-3.0, -9.0):
        assert fmath.ceil(y) == float(math.ceil(y))


@pytest.mark.parametrize(
    "value, expected",
    [(-1.5, -1.0), (-1.0, -1.0), (-0.5, 0.0), (0.0, 0.0), (0.5, 1.0), (1.0, 1.0), (1.5, 2.0)],
)
def test_ceil_cases(value, expected):
    assert fmath.ceil(value) == expected


def test_ceil_small_negative_is_negative_zero():
    assert fmath.to_bits(fmath.ceil(-0.5)) == 0x80000000


@pytest.mark.parametrize(
    "value, expected",
    [(-1.5, -2.0), (-1.0, -1.0), (-0.5, -1.0), (0.0, 0.0), (0.5, 0.0), (1.0, 1.0), (1.5, 1.0)],
)
def test_floor_cases(value, expected):
    assert fmath.floor(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(-1.5, -0.5), (-1.0, 0.0), (-0.5, -0.5), (0.0, 0.0), (0.5, 0.5), (1.0, 0.0), (1.5, 0.5)],
)
def test_fract_cases(value, expected):
    assert fmath.fract(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(-1.5, -1.0), (-1.0, -1.0), (-0.5, 0.0), (0.0, 0.0), (0.5, 0.0), (1.0, 1.0), (1.5, 1.0)],
)
def test_trunc_cases(value, expected):
    assert fmath.trunc(value) == expected


@given(finite32)
def test_floor_ceil_trunc_match_math(x):
    assert fmath.floor(x) == float(math.floor(x))
    assert fmath.ceil(x) == float(math.ceil(x))
    assert fmath.trunc(x) == float(math.trunc(x))


@given(finite32)
def test_fract_plus_trunc_is_identity(x):
    part = fmath.fract(x)
    assert abs(part) < 1.0
    assert fmath.trunc(x) + part == x


def test_f32_rounding_and_overflow():
    assert fmath.f32(0.1) == 0.10000000149011612
    assert fmath.f32(1e40) == math.inf
    assert fmath.f32(-1e40) == -math.inf


def test_bits_round_trip():
    assert fmath.to_bits(1.0) == 0x3F800000
    assert fmath.to_bits(-2.0) == 0xC0000000
    assert fmath.from_bits(0x7F800000) == math.inf
    assert fmath.from_bits(0x3F800000) == 1.0


@given(st.integers(min_value=0, max_value=0x7F7FFFFF))
def test_bits_round_trip_property(bits):
    assert fmath.to_bits(fmath.from_bits(bits)) == bits


def test_sqrt_values():
    assert fmath.sqrt(4.0) == 2.0
    assert fmath.to_bits(fmath.sqrt(2.0)) == 0x3FB504F3
    assert fmath.sqrt(math.inf) == math.inf
    assert math.isnan(fmath.sqrt(-1.0))
    assert math.isnan(fmath.sqrt(math.nan))
    assert fmath.to_bits(fmath.sqrt(-0.0)) == 0x80000000


def test_atan_known_values():
    assert abs(fmath.atan(1.0) - math.pi / 4) < 1e-7
    assert fmath.atan(0.0) == 0.0
    assert abs(fmath.atan(1e30) - math.pi / 2) < 1e-6
    assert math.isnan(fmath.atan(math.nan))


@given(st.floats(min_value=-1e6, max_value=1e6, width=32))
def test_atan_close_to_math(x):
    assert abs(fmath.atan(x) - math.atan(x)) <= 4e-7


def test_atan2f_special_cases():
    assert fmath.atan2f(0.0, -1.0) == fmath.f32(math.pi)
    assert fmath.atan2f(-0.0, -1.0) == -fmath.f32(math.pi)
    assert fmath.atan2f(1.0, 0.0) == fmath.f32(math.pi) / 2
    assert fmath.atan2f(-1.0, 0.0) == -fmath.f32(math.pi) / 2
    assert fmath.to_bits(fmath.atan2f(-0.0, 1.0)) == 0x80000000
    assert math.isnan(fmath.atan2f(math.nan, 1.0))
    assert abs(fmath.atan2f(math.inf, math.inf) - math.pi / 4) < 1e-6


@given(
    st.floats(min_value=-1e4, max_value=1e4, width=32).filter(lambda v: abs(v) > 1e-3),
    st.floats(min_value=-1e4, max_value=1e4, width=32).filter(lambda v: abs(v) > 1e-3),
)
def test_atan2f_close_to_math(y, x):
    assert abs(fmath.atan2f(y, x) - math.atan2(y, x)) <= 1e-6


def test_atan2_fast_axes():
    assert abs(fmath.atan2(0.0, 1.0) - math.pi / 2) < 1e-6
    assert fmath.atan2(0.0, 0.0) == 0.0
    assert abs(fmath.atan2(0.0, -1.0) + math.pi / 2) < 1e-6
    assert abs(fmath.atan2(1.0, 1.0) - math.pi / 4) < 1e-6


def test_sign_helpers():
    assert fmath.fabs(-3.5) == 3.5
    assert fmath.to_bits(fmath.fabs(-0.0)) == 0
    assert fmath.is_negative(-0.0) is True
    assert fmath.is_negative(0.0) is False
    assert fmath.is_positive(0.0) is True
    assert fmath.is_positive(-1.0) is False
    assert fmath.flipsign(2.0) == -2.0
    assert fmath.flipsign(-2.0) == 2.0
    assert fmath.copysign(3.0, -0.0) == -3.0
    assert fmath.copysign(-3.0, 1.0) == 3.0


def test_clamp():
    assert fmath.clamp(5.0, 0.0, 1.0) == 1.0
    assert fmath.clamp(-5.0, 0.0, 1.0) == 0.0
    assert fmath.clamp(0.25, 0.0, 1.0) == 0.25
    assert math.isnan(fmath.clamp(math.nan, 0.0, 1.0))


@pytest.mark.parametrize(
    "value, expected",
    [(3.7, 3), (-3.7, -3), (0.0, 0), (math.nan, 0), (1e20, 2**31 - 1), (-1e20, -(2**31))],
)
def test_as_i32(value, expected):
    assert fmath.as_i32(value) == expected


def test_get_bitmap_accumulates():
    assert fmath.get_bitmap([0.5, 0.5, -1.0, 0.0], 4) == bytes([127, 255, 0, 0])


def test_get_bitmap_uses_absolute_coverage():
    assert fmath.get_bitmap([-0.25, 0.0], 2) == bytes([63, 63])


def test_get_bitmap_truncates_to_length():
    assert fmath.get_bitmap([1.0, 0.0, 0.0], 2) == bytes([255, 255])


def test_get_bitmap_rejects_long_length():
    with pytest.raises(ValueError):
        fmath.get_bitmap([0.0, 0.0], 3)


@given(st.lists(st.floats(min_value=-2.0, max_value=2.0, width=32), max_size=40))
def test_get_bitmap_length(values):
    assert len(fmath.get_bitmap(values, len(values))) == len(values)