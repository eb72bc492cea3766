"""Reader for the XPM42 text image format.

An XPM42 file starts with the line ``!XPM42``, then a header line
``<width> <height> <colours> <chars per pixel> <c|m>``, then one line per
colour (``<chars> #RRGGBBAA``) and finally one line of pixel characters per
row. Mode ``m`` turns every colour to grayscale.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import IO

from .constants import BPP
from .errors import ErrorCode, MlxError
from .texture import Texture
from .utils import fnv_hash, pack_rgba, rgba_to_mono

_TABLE_SIZE = 0xFFFF
_MAX_DIMENSION = 0x7FFF
_MAX_CPP = 10
_UINT32 = 0xFFFFFFFF

_INT = r"[+-]?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)"
_HEADER = re.compile(rf"\s*({_INT})\s*({_INT})\s*({_INT})\s*({_INT})\s*(\S)")
_HEX_PREFIX = re.compile(r"\s*([+-]?)([0-9a-fA-F]*)")


@dataclass
class Xpm:
    """An XPM42 image: its texture plus the header information."""

    texture: Texture
    color_count: int
    cpp: int
    mode: str


def _parse_int(token: str) -> int:
    sign = -1 if token.startswith("-") else 1
    digits = token.lstrip("+-")
    if digits[:2].lower() == "0x":
        return sign * int(digits[2:], 16)
    if len(digits) > 1 and digits.startswith("0"):
        return sign * int(digits, 8)
    return sign * int(digits, 10)


def _parse_channel(text: str) -> int:
    match = _HEX_PREFIX.match(text[:2])
    digits = match.group(2) if match else ""
    value = int(digits, 16) if digits else 0
    if match and match.group(1) == "-":
        value = -value
    return value & 0xFF


def _lines(stream: IO[str] | IO[bytes] | Iterable[str | bytes]) -> Iterator[str]:
    for line in stream:
        yield line.decode("latin-1") if isinstance(line, bytes) else line


def _invalid() -> MlxError:
    return MlxError(ErrorCode.INVXPM)


def _read_header(lines: Iterator[str]) -> tuple[int, int, int, int, str]:
    if next(lines, None) != "!XPM42\n":
        raise _invalid()
    header = next(lines, None)
    match = _HEADER.match(header) if header is not None else None
    if match is None:
        raise _invalid()
    width, height = (_parse_int(t) & _UINT32 for t in match.group(1, 2))
    color_count, cpp = (_parse_int(t) for t in match.group(3, 4))
    mode = match.group(5)
    if width > _MAX_DIMENSION or height > _MAX_DIMENSION:
        raise _invalid()
    if mode not in ("c", "m") or not 0 <= cpp <= _MAX_CPP:
        raise _invalid()
    return width, height, color_count, cpp, mode


def _read_table(lines: Iterator[str], count: int, cpp: int, mode: str) -> dict[int, int]:
    table: dict[int, int] = {}
    for _ in range(count):
        line = next(lines, None)
        if line is None or line.rfind(" ") != cpp:
            raise _invalid()
        if len(line) < cpp + 3 or line[cpp + 1] != "#" or not line[cpp + 2].isalnum():
            raise _invalid()
        start = cpp + 2
        color = 0
        for shift, offset in ((24, 0), (16, 2), (8, 4), (0, 6)):
            color |= _parse_channel(line[start + offset : start + offset + 2]) << shift
        table[fnv_hash(line[:cpp]) % _TABLE_SIZE] = rgba_to_mono(color) if mode == "m" else color
    return table


def _read_pixels(
    lines: Iterator[str], width: int, height: int, cpp: int, table: dict[int, int]
) -> bytearray:
    pixels = bytearray()
    lookup: dict[str, bytes] = {}
    for _ in range(height):
        line = next(lines, None)
        if not line:
            raise _invalid()
        if line.endswith("\n"):
            line = line[:-1]
        if len(line) != width * cpp:
            raise _invalid()
        for start in range(0, width * cpp, cpp) if cpp else [0] * width:
            key = line[start : start + cpp]
            packed = lookup.get(key)
            if packed is None:
                packed = pack_rgba(table.get(fnv_hash(key) % _TABLE_SIZE, 0))
                lookup[key] = packed
            pixels += packed
    return pixels


def parse_xpm42(stream: IO[str] | IO[bytes] | Iterable[str | bytes]) -> Xpm:
    """Parse XPM42 data from an open text or binary stream.

    Raises MlxError(INVXPM) if the data is malformed.
    """
    lines = _lines(stream)
    width, height, color_count, cpp, mode = _read_header(lines)
    table = _read_table(lines, color_count, cpp, mode)
    pixels = _read_pixels(lines, width, height, cpp, table)
    return Xpm(Texture(width, height, pixels, BPP), color_count, cpp, mode)


def load_xpm42(path: str | os.PathLike[str]) -> Xpm:
    """Load an XPM42 file.

    Raises MlxError with INVEXT for a path without ``.xpm42``, INVFILE if
    the file cannot be opened and INVXPM if its contents are malformed.
    """
    if ".xpm42" not in os.fspath(path):
        raise MlxError(ErrorCode.INVEXT)
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise MlxError(ErrorCode.INVFILE) from exc
    with handle:
        return parse_xpm42(handle)