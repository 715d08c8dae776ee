"""Fast non-cryptographic hash used to fingerprint font files."""

from __future__ import annotations

_ROTATE = 5
_SEED64 = 0x517CC1B727220A95
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _hash_word(state: int, word: int) -> int:
    rotated = ((state << _ROTATE) | (state >> (64 - _ROTATE))) & _MASK64
    return ((rotated ^ word) * _SEED64) & _MASK64


def fx_hash(data: bytes | bytearray | memoryview) -> int:
    """Hash ``data`` with the 64-bit Fx algorithm, reading words little-endian.

    Eight-byte words are consumed first, then at most one four-byte word,
    then the remaining bytes one at a time. The result is an unsigned
    64-bit integer. This hash is not suitable for security purposes.
    """
    view = memoryview(bytes(data))
    state = 0
    full = len(view) - len(view) % 8
    for start in range(0, full, 8):
        state = _hash_word(state, int.from_bytes(view[start : start + 8], "little"))
    rest = view[full:]
    if len(rest) >= 4:
        state = _hash_word(state, int.from_bytes(rest[:4], "little"))
        rest = rest[4:]
    for byte in rest:
        state = _hash_word(state, byte)
    return state