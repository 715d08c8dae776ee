import pytest

from glyphraster.fmath import f32
from glyphraster.outline import FontSettings, Glyph, LineMetrics, Metrics, OutlineBounds


def test_font_settings_defaults():
    settings = FontSettings()
    assert settings.collection_index == 0
    assert settings.scale == 40.0
    assert settings.load_substitutions is True


def test_metrics_defaults_are_zero():
    metrics = Metrics()
    assert (metrics.xmin, metrics.ymin, metrics.width, metrics.height) == (0, 0, 0, 0)
    assert metrics.advance_width == 0.0
    assert metrics.advance_height == 0.0
    assert metrics.bounds == OutlineBounds(0.0, 0.0, 0.0, 0.0)


def test_glyph_defaults_are_empty():
    glyph = Glyph()
    assert len(glyph.v_lines) == 0
    assert len(glyph.m_lines) == 0
    assert glyph.bounds == OutlineBounds()


def test_outline_bounds_scale_identity():
    bounds = OutlineBounds(1.5, -2.25, 10.0, 12.5)
    assert bounds.scale(1.0) == bounds


def test_outline_bounds_scale_by_two_doubles():
    bounds = OutlineBounds(1.5, -2.25, 10.0, 12.5)
    scaled = bounds.scale(2.0)
    assert scaled.xmin == bounds.xmin * 2
    assert scaled.ymin == bounds.ymin * 2
    assert scaled.width == bounds.width * 2
    assert scaled.height == bounds.height * 2


def test_outline_bounds_scale_results_are_single_precision():
    scaled = OutlineBounds(1.1, 2.2, 3.3, 4.4).scale(0.1)
    for value in (scaled.xmin, scaled.ymin, scaled.width, scaled.height):
        assert f32(value) == value


def test_line_metrics_from_units_new_line_size():
    ascent, descent, line_gap = 1900, -500, 0
    metrics = LineMetrics.from_units(ascent, descent, line_gap)
    assert metrics.ascent == ascent
    assert metrics.descent == descent
    assert metrics.line_gap == line_gap
    assert metrics.new_line_size == ascent - descent + line_gap


def test_line_metrics_extremes_do_not_wrap():
    ascent, descent, line_gap = 32767, -32768, 32767
    metrics = LineMetrics.from_units(ascent, descent, line_gap)
    assert metrics.new_line_size == ascent - descent + line_gap
    assert metrics.new_line_size > ascent


@pytest.mark.parametrize("values", [(40000, 0, 0), (0, -40000, 0), (0, 0, 2**15)])
def test_line_metrics_rejects_out_of_range(values):
    with pytest.raises(ValueError):
        LineMetrics.from_units(*values)


def test_line_metrics_scale():
    metrics = LineMetrics.from_units(1024, -256, 64)
    scaled = metrics.scale(0.5)
    assert scaled.ascent == metrics.ascent / 2
    assert scaled.descent == metrics.descent / 2
    assert scaled.line_gap == metrics.line_gap / 2
    assert scaled.new_line_size == metrics.new_line_size / 2
    assert metrics.scale(1.0) == metrics