"""RGBA textures and PNG loading."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image as PILImage

from .errors import MlxErrno, MlxError

BPP = 4


@dataclass
class Texture:
    """A block of RGBA pixels, row by row, four bytes each."""

    width: int
    height: int
    pixels: bytearray
    bytes_per_pixel: int = BPP

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError("texture dimensions must not be negative")
        self.pixels = bytearray(self.pixels)
        expected = self.width * self.height * self.bytes_per_pixel
        if len(self.pixels) != expected:
            raise ValueError(f"expected {expected} bytes of pixels, got {len(self.pixels)}")

    def pixel(self, x, y):
        """Return the colour at (x, y) as 0xRRGGBBAA."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is out of bounds")
        start = (y * self.width + x) * self.bytes_per_pixel
        return int.from_bytes(self.pixels[start:start + self.bytes_per_pixel], "big")


def load_png(path):
    """Decode a PNG file into an RGBA texture."""
    try:
        with PILImage.open(path) as image:
            if image.format != "PNG":
                raise MlxError(MlxErrno.INVPNG, f"{path}: not a PNG file")
            rgba = image.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise MlxError(MlxErrno.INVPNG, str(exc)) from exc
    return Texture(rgba.width, rgba.height, bytearray(rgba.tobytes()))