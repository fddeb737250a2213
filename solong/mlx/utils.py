"""Small helpers: string hashing and colour conversion."""

from __future__ import annotations

FNV_PRIME = 0x100000001B3
FNV_OFFSET = 0xCBF29CE484222325
_MASK64 = (1 << 64) - 1


def fnv_hash(data):
    """Return the 64-bit FNV-1a hash of a byte string (str is UTF-8 encoded).

    Bytes are taken as signed chars, so values above 127 are sign extended.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    result = FNV_OFFSET
    for byte in data:
        signed = byte - 256 if byte >= 128 else byte
        result ^= signed & _MASK64
        result = (result * FNV_PRIME) & _MASK64
    return result


def rgba_to_mono(color):
    """Convert an RGBA colour to grey, keeping its alpha channel."""
    color &= 0xFFFFFFFF
    red = 299 * ((color >> 24) & 0xFF) // 1000
    green = 587 * ((color >> 16) & 0xFF) // 1000
    blue = 114 * ((color >> 8) & 0xFF) // 1000
    grey = (red + green + blue) & 0xFF
    return (grey << 24) | (grey << 16) | (grey << 8) | (color & 0xFF)


def pack_pixel(color):
    """Return the four RGBA bytes of a 0xRRGGBBAA colour."""
    return (color & 0xFFFFFFFF).to_bytes(4, "big")