"""Textures loaded from disk and their conversion to images."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from PIL import Image as PILImage

from .constants import BPP
from .errors import ErrorCode, MlxError
from .image import Image


@dataclass
class Texture:
    """Decoded RGBA pixel data."""

    width: int
    height: int
    pixels: bytearray
    bytes_per_pixel: int = BPP

    def __post_init__(self) -> None:
        self.pixels = bytearray(self.pixels)
        if len(self.pixels) < self.width * self.height * self.bytes_per_pixel:
            raise ValueError("pixel buffer is smaller than width * height * bytes_per_pixel")

    def to_image(self) -> Image:
        """Create a new image holding a copy of this texture's pixels."""
        image = Image(self.width, self.height)
        size = min(self.width * self.height * self.bytes_per_pixel, len(image.pixels))
        image.pixels[:size] = self.pixels[:size]
        return image


def load_png(path: str | os.PathLike[str]) -> Texture:
    """Decode a PNG file into an RGBA texture.

    Raises MlxError(INVPNG) if the file is missing, unreadable or not a PNG.
    """
    try:
        with PILImage.open(path) as picture:
            if picture.format != "PNG":
                raise ValueError("not a PNG file")
            rgba = picture.convert("RGBA")
            width, height = rgba.size
            data = rgba.tobytes()
    except (OSError, ValueError, SyntaxError) as exc:
        print(f"pixelwin: PNG: {exc}", file=sys.stderr)
        raise MlxError(ErrorCode.INVPNG) from exc
    return Texture(width, height, bytearray(data), BPP)