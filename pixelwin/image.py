"""Pixel buffers and the positioned instances that display them."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .constants import BPP
from .errors import ErrorCode, MlxError
from .utils import pack_rgba

_MAX_DIMENSION = 0x7FFF


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _check_dimensions(width: int, height: int) -> None:
    if not (0 < width <= _MAX_DIMENSION and 0 < height <= _MAX_DIMENSION):
        raise MlxError(ErrorCode.INVDIM)


def _sample_indices(old: int, new: int) -> list[int]:
    """Nearest-neighbour source indices, computed in single precision."""
    step = _f32(old / new)
    return [int(_f32(n * step)) for n in range(new)]


@dataclass
class Instance:
    """One placement of an image on screen.

    Coordinates start at the top left; ``z`` decides which images are
    drawn in front of others.
    """

    x: int
    y: int
    z: int = 0
    enabled: bool = True


class Image:
    """An RGBA pixel buffer that can be shown at several positions.

    Images compare by identity, so two images with equal pixels are
    still distinct.
    """

    def __init__(self, width: int, height: int) -> None:
        _check_dimensions(width, height)
        self._width = width
        self._height = height
        self.pixels = bytearray(width * height * BPP)
        self.instances: list[Instance] = []
        self.enabled = True

    def __repr__(self) -> str:
        return (
            f"Image(width={self._width}, height={self._height}, "
            f"instances={len(self.instances)})"
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def count(self) -> int:
        """Number of instances of this image."""
        return len(self.instances)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise MlxError(ErrorCode.INVPOS)
        return (y * self._width + x) * BPP

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at (x, y) to an 0xRRGGBBAA colour."""
        start = self._offset(x, y)
        self.pixels[start : start + BPP] = pack_rgba(color)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y) as an 0xRRGGBBAA colour."""
        start = self._offset(x, y)
        return int.from_bytes(self.pixels[start : start + BPP], "big")

    def resize(self, width: int, height: int) -> None:
        """Scale the buffer to a new size with nearest-neighbour sampling."""
        _check_dimensions(width, height)
        if width == self._width and height == self._height:
            return
        columns = _sample_indices(self._width, width)
        rows = _sample_indices(self._height, height)
        source = memoryview(self.pixels)
        row_bytes = self._width * BPP
        resized = bytearray()
        for row in rows:
            base = row * row_bytes
            resized += b"".join(
                source[base + col * BPP : base + (col + 1) * BPP] for col in columns
            )
        source.release()
        self.pixels = resized
        self._width = width
        self._height = height

    def add_instance(self, x: int, y: int, z: int) -> int:
        """Add an enabled instance at (x, y, z) and return its index."""
        self.instances.append(Instance(x, y, z, True))
        return len(self.instances) - 1