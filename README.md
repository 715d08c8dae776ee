# glyphraster

Pure-Python building blocks for working with font glyph outlines. There are
no dependencies outside the standard library. All geometry is computed in
IEEE-754 single precision, one rounded step at a time.

## Modules

- `glyphraster.geometry`: `Point`, `QuadCurve`, `CubeCurve`, `Line` and
  `Geometry`. `Geometry(scale, units_per_em)` takes `move_to`, `line_to`,
  `quad_to`, `curve_to` and `close` calls in font units. It subdivides curves
  until each piece lies within about three pixels of a straight line at
  `scale` pixels per em. It drops horizontal segments and sorts the rest into
  vertical and other lines. `finalize(advance_width, advance_height)` returns
  a `Glyph`. In that glyph the lines are moved so that the top left of the
  outline's bounds is the origin, with y pointing down.
- `glyphraster.outline`: frozen dataclasses `OutlineBounds`, `Metrics`,
  `LineMetrics`, `Glyph` and `FontSettings` (defaults: `collection_index=0`,
  `scale=40.0`, `load_substitutions=True`). `OutlineBounds.scale` and
  `LineMetrics.scale` multiply every field by a factor.
  `LineMetrics.from_units(ascent, descent, line_gap)` takes 16-bit values
  and computes `new_line_size = ascent - descent + line_gap`. It raises
  `ValueError` for values outside the signed 16-bit range.
- `glyphraster.kern`: `parse_kern(data)` reads the raw bytes of a `kern`
  table, in OpenType (version 0) or AAT (version 1) form. It returns a dict
  that maps `kern_key(left, right)` to a value in font units, taken from the
  first horizontal subtable in format 0 or 3. It returns `None` if the table
  is truncated, malformed, of another version, or has no such subtable.
- `glyphraster.parse`: `Stream`, a big-endian reader with `read_u8/u16/u32`,
  `read_i8/i16/i32`, `read_f2dot14`, `read_tag` and `read_*_slice(length)`,
  plus `seek`, `skip` and `reset`. A read past the end raises `StreamError`
  (a `ValueError`) and leaves `offset` as it was.
- `glyphraster.fxhash`: `fx_hash(data)`, a fast non-cryptographic 64-bit hash
  of a byte string, for fingerprinting font files.
- `glyphraster.fmath`: single-precision helpers, among them `f32`, `to_bits`,
  `from_bits`, `ceil`, `floor`, `trunc`, `fract`, `sqrt`, `atan`, `atan2f`,
  the fast approximation `atan2`, `fabs`, `copysign`, `clamp` and `as_i32`.
  `get_bitmap(coverage, length)` turns a buffer of signed area deltas into
  `length` bytes of 0..255 coverage. It raises `ValueError` if `length`
  exceeds the buffer.

## Example

```python
from glyphraster.geometry import Geometry

geometry = Geometry(40.0, 1000.0)  # tuned for 40px, font has 1000 units/em
geometry.move_to(100, 0)
geometry.line_to(600, 0)
geometry.line_to(600, 500)
geometry.line_to(100, 500)
geometry.close()
glyph = geometry.finalize(700, 0)

print(glyph.bounds)             # OutlineBounds(xmin=100.0, ymin=0.0, width=500.0, height=500.0)
print(len(glyph.v_lines))       # 2 (the horizontal edges are dropped)
print(glyph.bounds.scale(20.0 / 1000.0))  # bounds at 20px
```

## Kerning

```python
from glyphraster.kern import kern_key, parse_kern

mappings = parse_kern(kern_table_bytes)  # raw bytes of a font's 'kern' table
if mappings is not None:
    units = mappings.get(kern_key(left_glyph, right_glyph))
    if units is not None:
        pixels = units * 20.0 / 1000.0  # at 20px, 1000 units/em
```

## What it does not do

The package does not open font files. It does not read `cmap`, `glyf`,
`CFF` or `GSUB` tables, so it has no way to map characters to glyphs. Outlines
have to come from your own parser, through `Geometry`. The package does not
draw a `Glyph`'s lines into a coverage bitmap. The only step toward a bitmap
is `fmath.get_bitmap`, which works on an accumulation buffer you have already
filled. There is no text layout, no line breaking and no command-line tool.

## Running the tests

```
pip install "glyphraster[test]"
pytest
```