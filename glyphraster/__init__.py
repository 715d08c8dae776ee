"""Glyph outline flattening, glyph metric records, kern table parsing and float32 helpers."""

__version__ = "0.1.0"
__all__ = ["fmath", "fxhash", "parse", "kern", "outline", "geometry"]