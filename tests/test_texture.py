import pytest
from PIL import Image

from solong.mlx.errors import MlxErrno, MlxError
from solong.mlx.texture import Texture, load_png


def test_pixel_reads_bytes_in_order():
    texture = Texture(2, 1, bytes([0, 0, 0, 0, 1, 2, 3, 4]))
    assert texture.pixel(1, 0) == 0x01020304
    assert texture.pixel(0, 0) == 0


def test_wrong_pixel_length_rejected():
    with pytest.raises(ValueError):
        Texture(2, 2, bytes(4))


@pytest.mark.parametrize("x, y", [(2, 0), (0, 1), (-1, 0)])
def test_pixel_out_of_bounds(x, y):
    texture = Texture(2, 1, bytes(8))
    with pytest.raises(IndexError):
        texture.pixel(x, y)


def test_load_png_round_trip(tmp_path):
    path = tmp_path / "sprite.png"
    image = Image.new("RGBA", (3, 2), (0, 0, 0, 0))
    image.putpixel((1, 1), (10, 20, 30, 40))
    image.save(path)

    texture = load_png(path)
    assert (texture.width, texture.height) == (3, 2)
    assert texture.bytes_per_pixel == 4
    assert len(texture.pixels) == 3 * 2 * 4
    assert texture.pixel(1, 1) == 0x0A141E28
    assert texture.pixel(0, 0) == 0


def test_load_png_rgb_gets_opaque_alpha(tmp_path):
    path = tmp_path / "rgb.png"
    Image.new("RGB", (1, 1), (1, 2, 3)).save(path)
    assert load_png(path).pixel(0, 0) == 0x010203FF


def test_load_png_missing_file(tmp_path):
    with pytest.raises(MlxError) as info:
        load_png(tmp_path / "nope.png")
    assert info.value.errno is MlxErrno.INVPNG


def test_load_png_garbage(tmp_path):
    path = tmp_path / "bad.png"
    path.write_bytes(b"this is not an image")
    with pytest.raises(MlxError) as info:
        load_png(path)
    assert info.value.errno is MlxErrno.INVPNG


def test_load_png_rejects_other_formats(tmp_path):
    path = tmp_path / "picture.bmp"
    Image.new("RGB", (2, 2)).save(path, format="BMP")
    with pytest.raises(MlxError) as info:
        load_png(path)
    assert info.value.errno is MlxErrno.INVPNG