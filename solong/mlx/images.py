"""Images, their on-screen instances and the canvas that draws them."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import MlxErrno, MlxError
from .texture import BPP
from .utils import pack_pixel

MAX_DIMENSION = 0x7FFF


def _valid_dimensions(width, height):
    return 0 < width <= MAX_DIMENSION and 0 < height <= MAX_DIMENSION


@dataclass(eq=False)
class Instance:
    """One placement of an image on the canvas."""

    x: int
    y: int
    z: int = 0
    enabled: bool = True


@dataclass(eq=False)
class Image:
    """An RGBA pixel buffer that can be shown any number of times."""

    width: int
    height: int
    pixels: bytearray = field(default=None, repr=False)
    instances: list = field(default_factory=list, repr=False)
    enabled: bool = True

    def __post_init__(self):
        if self.pixels is None:
            self.pixels = bytearray(self.width * self.height * BPP)
        else:
            self.pixels = bytearray(self.pixels)
        expected = self.width * self.height * BPP
        if len(self.pixels) != expected:
            raise ValueError(f"expected {expected} bytes of pixels, got {len(self.pixels)}")

    def put_pixel(self, x, y, color):
        """Set the pixel at (x, y) to the 0xRRGGBBAA colour."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError("Pixel is out of bounds")
        start = (y * self.width + x) * BPP
        self.pixels[start:start + BPP] = pack_pixel(color)

    def resize(self, width, height):
        """Change the image dimensions, keeping the raw pixel bytes that still fit."""
        if not _valid_dimensions(width, height):
            raise MlxError(MlxErrno.INVDIM)
        if (width, height) == (self.width, self.height):
            return
        size = width * height * BPP
        if size <= len(self.pixels):
            del self.pixels[size:]
        else:
            self.pixels.extend(bytes(size - len(self.pixels)))
        self.width = width
        self.height = height

    def draw_texture(self, texture, x, y):
        """Copy a whole texture into this image with its top-left corner at (x, y)."""
        if texture.width > self.width or texture.height > self.height:
            raise MlxError(MlxErrno.INVDIM)
        if x < 0 or y < 0 or x > self.width or y > self.height:
            raise MlxError(MlxErrno.INVPOS)
        if x + texture.width > self.width or y + texture.height > self.height:
            raise MlxError(MlxErrno.INVPOS, "texture does not fit at this position")
        row_bytes = texture.width * BPP
        for row in range(texture.height):
            src = row * row_bytes
            dst = ((row + y) * self.width + x) * BPP
            self.pixels[dst:dst + row_bytes] = texture.pixels[src:src + row_bytes]


class Canvas:
    """Owns the images of a window and the order in which their instances are drawn."""

    def __init__(self):
        self.images = []
        self.zdepth = 0
        self._queue = []
        self._needs_sort = False

    def new_image(self, width, height):
        """Create a blank, fully transparent image."""
        if not _valid_dimensions(width, height):
            raise MlxError(MlxErrno.INVDIM)
        image = Image(width, height)
        self.images.insert(0, image)
        return image

    def image_to_window(self, image, x, y):
        """Place a new instance of the image at (x, y) and return its index."""
        if not any(known is image for known in self.images):
            raise MlxError(MlxErrno.INVIMG)
        image.instances.append(Instance(x, y, self.zdepth, True))
        self.zdepth += 1
        index = len(image.instances) - 1
        self._queue.insert(0, (image, index))
        self._needs_sort = True
        return index

    def delete_image(self, image):
        """Remove an image and every one of its instances from the canvas."""
        self._queue = [entry for entry in self._queue if entry[0] is not image]
        self.images = [known for known in self.images if known is not image]

    def set_instance_depth(self, instance, depth):
        """Change the depth of an instance; the draw order is updated lazily."""
        if instance.z == depth:
            return
        instance.z = depth
        self._needs_sort = True

    def texture_area_to_image(self, texture, x, y, width, height):
        """Create an image from a rectangle of a texture."""
        if width > texture.width or height > texture.height:
            raise MlxError(MlxErrno.INVDIM)
        if x < 0 or y < 0 or x > texture.width or y > texture.height:
            raise MlxError(MlxErrno.INVPOS)
        if x + width > texture.width or y + height > texture.height:
            raise MlxError(MlxErrno.INVPOS, "area reaches outside the texture")
        image = self.new_image(width, height)
        row_bytes = width * BPP
        for row in range(height):
            src = ((y + row) * texture.width + x) * BPP
            dst = row * row_bytes
            image.pixels[dst:dst + row_bytes] = texture.pixels[src:src + row_bytes]
        return image

    def texture_to_image(self, texture):
        """Create an image holding a copy of a whole texture."""
        return self.texture_area_to_image(texture, 0, 0, texture.width, texture.height)

    def draw_order(self):
        """Return the visible (image, instance) pairs, back to front by depth."""
        if self._needs_sort:
            self._needs_sort = False
            self._queue = sorted(
                reversed(self._queue), key=lambda entry: entry[0].instances[entry[1]].z
            )
        visible = []
        for image, index in self._queue:
            instance = image.instances[index]
            if image.enabled and instance.enabled:
                visible.append((image, instance))
        return visible

    def clear(self):
        """Forget every image and instance."""
        self.images = []
        self._queue = []
        self._needs_sort = False
        self.zdepth = 0