"""Reader for XPM42, a simple text pixmap format.

A file starts with the line ``!XPM42``, then a header line
``<width> <height> <colours> <chars per pixel> <c|m>``, then one line per
colour (``<chars> #RRGGBBAA``) and finally one line of pixel characters
per row.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from .errors import MlxErrno, MlxError
from .texture import BPP, Texture
from .utils import fnv_hash, pack_pixel, rgba_to_mono

MAGIC = b"!XPM42"
MAX_DIMENSION = 0x7FFF
MAX_CHARS_PER_PIXEL = 10
_TABLE_SIZE = 0xFFFF

_C_INT = re.compile(rb"([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_HEX_PREFIX = re.compile(rb"[0-9a-fA-F]*")


@dataclass
class Xpm:
    """A decoded XPM42 image."""

    texture: Texture
    color_count: int
    cpp: int
    mode: str


def _invalid(reason):
    return MlxError(MlxErrno.INVXPM, reason)


def _as_bytes(line):
    return line.encode("utf-8") if isinstance(line, str) else bytes(line)


def _chomp(line):
    return line[:-1] if line.endswith(b"\n") else line


def _c_int(token):
    """Parse an integer the way C's %i does: decimal, 0x hex or 0 octal."""
    match = _C_INT.fullmatch(token)
    if match is None:
        raise _invalid(f"bad number in header: {token!r}")
    sign, body = match.groups()
    if body[:2].lower() == b"0x":
        value = int(body[2:], 16)
    elif body.startswith(b"0") and len(body) > 1:
        value = int(body[1:], 8)
    else:
        value = int(body)
    return -value if sign == b"-" else value


def _hex_channel(chunk):
    digits = _HEX_PREFIX.match(chunk).group()
    return int(digits, 16) if digits else 0


def _parse_header(line):
    fields = line.split()
    if len(fields) < 5:
        raise _invalid("header needs width, height, colours, chars per pixel and mode")
    width, height, count, cpp = (_c_int(field) for field in fields[:4])
    mode = fields[4][:1].decode("ascii", errors="replace")
    if not (0 <= width <= MAX_DIMENSION and 0 <= height <= MAX_DIMENSION):
        raise _invalid("dimensions out of range")
    if mode not in ("c", "m"):
        raise _invalid(f"unknown colour mode {mode!r}")
    if not 1 <= cpp <= MAX_CHARS_PER_PIXEL:
        raise _invalid("chars per pixel out of range")
    return width, height, count, cpp, mode


def _parse_entry(line, cpp):
    """Split a colour line into its pixel characters and RGBA value."""
    if line.rfind(b" ") != cpp:
        raise _invalid(f"colour entry has wrong key length: {line!r}")
    if line[cpp + 1:cpp + 2] != b"#" or not line[cpp + 2:cpp + 3].isalnum():
        raise _invalid(f"malformed colour entry: {line!r}")
    digits = line[cpp + 2:]
    color = 0
    for offset, shift in zip(range(0, 8, 2), (24, 16, 8, 0)):
        color |= _hex_channel(digits[offset:offset + 2]) << shift
    return line[:cpp], color


def parse_xpm42(lines):
    """Decode XPM42 content given as an iterable of lines (str or bytes)."""
    source = iter(lines)

    def next_line(what):
        line = next(source, None)
        if line is None:
            raise _invalid(f"unexpected end of data while reading {what}")
        return _chomp(_as_bytes(line))

    if next_line("file type") != MAGIC:
        raise _invalid("missing !XPM42 file type")
    width, height, count, cpp, mode = _parse_header(next_line("header"))

    table = {}
    for _ in range(count):
        key, color = _parse_entry(next_line("colour table"), cpp)
        table[fnv_hash(key) % _TABLE_SIZE] = rgba_to_mono(color) if mode == "m" else color

    pixels = bytearray()
    for _ in range(height):
        row = next_line("pixel data")
        if len(row) != width * cpp:
            raise _invalid(f"pixel row has length {len(row)}, expected {width * cpp}")
        pixels += b"".join(
            pack_pixel(table.get(fnv_hash(row[start:start + cpp]) % _TABLE_SIZE, 0))
            for start in range(0, len(row), cpp)
        )

    texture = Texture(width, height, pixels, BPP)
    return Xpm(texture=texture, color_count=count, cpp=cpp, mode=mode)


def load_xpm42(path):
    """Read and decode an XPM42 file."""
    if ".xpm42" not in str(os.fspath(path)):
        raise MlxError(MlxErrno.INVEXT, str(path))
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise MlxError(MlxErrno.INVFILE, str(exc)) from exc
    with handle:
        return parse_xpm42(handle)