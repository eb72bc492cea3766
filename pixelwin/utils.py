"""Small helpers: hashing, colour conversion and font offsets."""

from __future__ import annotations

import struct

from .constants import FONT_WIDTH

_MASK64 = 0xFFFFFFFFFFFFFFFF
_FNV_PRIME = 0x100000001B3
_FNV_OFFSET = 0xCBF29CE484222325


def fnv_hash(data: str | bytes) -> int:
    """Return the 64-bit FNV-1a hash of ``data``.

    Bytes above 0x7F are treated as signed characters, sign-extended
    before being mixed in.
    """
    if isinstance(data, str):
        data = data.encode("latin-1")
    result = _FNV_OFFSET
    for byte in data:
        value = byte if byte < 0x80 else (byte - 0x100) & _MASK64
        result = ((result ^ value) * _FNV_PRIME) & _MASK64
    return result


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


_WEIGHT_R = _f32(0.299)
_WEIGHT_G = _f32(0.587)
_WEIGHT_B = _f32(0.114)


def rgba_to_mono(color: int) -> int:
    """Convert an 0xRRGGBBAA colour to grayscale, keeping alpha."""
    color &= 0xFFFFFFFF
    r = int(_f32(_WEIGHT_R * ((color >> 24) & 0xFF))) & 0xFF
    g = int(_f32(_WEIGHT_G * ((color >> 16) & 0xFF))) & 0xFF
    b = int(_f32(_WEIGHT_B * ((color >> 8) & 0xFF))) & 0xFF
    y = (r + g + b) & 0xFF
    return (y << 24) | (y << 16) | (y << 8) | (color & 0xFF)


def pack_rgba(color: int) -> bytes:
    """Return the four pixel bytes R, G, B, A of an 0xRRGGBBAA colour."""
    return (color & 0xFFFFFFFF).to_bytes(4, "big")


def get_texoffset(char: str) -> int:
    """Return the X offset of ``char`` in the font atlas, or -1 if unprintable."""
    if not isinstance(char, str) or len(char) != 1:
        raise ValueError("expected a single character")
    code = ord(char)
    if not 32 <= code <= 126:
        return -1
    return (FONT_WIDTH + 2) * (code - 32)