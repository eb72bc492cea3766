import pytest
from PIL import Image as PILImage

from pixelwin.constants import BPP
from pixelwin.errors import ErrorCode, MlxError
from pixelwin.texture import Texture, load_png


def _write_png(path, width, height, colours):
    picture = PILImage.new("RGBA", (width, height))
    picture.putdata(colours)
    picture.save(path, format="PNG")


def test_to_image_copies_pixels():
    pixels = bytes(range(2 * 3 * BPP))
    texture = Texture(2, 3, pixels)
    image = texture.to_image()
    assert (image.width, image.height) == (2, 3)
    assert bytes(image.pixels) == pixels


def test_to_image_is_independent_copy():
    texture = Texture(1, 1, b"\x01\x02\x03\x04")
    image = texture.to_image()
    image.put_pixel(0, 0, 0xAABBCCDD)
    assert bytes(texture.pixels) == b"\x01\x02\x03\x04"


def test_to_image_zero_size_rejected():
    texture = Texture(0, 4, b"")
    with pytest.raises(MlxError) as info:
        texture.to_image()
    assert info.value.code == ErrorCode.INVDIM


def test_texture_rejects_short_buffer():
    with pytest.raises(ValueError):
        Texture(2, 2, b"\x00" * 4)


def test_default_bytes_per_pixel():
    texture = Texture(1, 1, b"\x00" * 4)
    assert texture.bytes_per_pixel == BPP


def test_load_png_round_trip(tmp_path):
    path = tmp_path / "pic.png"
    colours = [(255, 0, 0, 255), (0, 255, 0, 128), (0, 0, 255, 0), (10, 20, 30, 40)]
    _write_png(path, 2, 2, colours)
    texture = load_png(path)
    assert (texture.width, texture.height) == (2, 2)
    assert bytes(texture.pixels) == bytes(c for colour in colours for c in colour)
    image = texture.to_image()
    assert image.get_pixel(1, 1) == 0x0A141E28


def test_load_png_missing_file(tmp_path):
    with pytest.raises(MlxError) as info:
        load_png(tmp_path / "missing.png")
    assert info.value.code == ErrorCode.INVPNG


def test_load_png_garbage(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"not an image at all")
    with pytest.raises(MlxError) as info:
        load_png(path)
    assert info.value.code == ErrorCode.INVPNG


def test_load_png_rejects_other_formats(tmp_path):
    path = tmp_path / "pic.bmp"
    PILImage.new("RGB", (2, 2)).save(path, format="BMP")
    with pytest.raises(MlxError) as info:
        load_png(path)
    assert info.value.code == ErrorCode.INVPNG