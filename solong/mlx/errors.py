"""Error numbers and the exception raised by the graphics layer."""

from __future__ import annotations

import enum


class MlxErrno(enum.IntEnum):
    """Error numbers reported by the graphics layer."""

    SUCCESS = 0
    INVEXT = 1
    INVFILE = 2
    INVPNG = 3
    INVXPM = 4
    INVPOS = 5
    INVDIM = 6
    INVIMG = 7
    VERTFAIL = 8
    FRAGFAIL = 9
    SHDRFAIL = 10
    MEMFAIL = 11
    GLADFAIL = 12
    GLFWFAIL = 13
    WINFAIL = 14
    STRTOBIG = 15


_MESSAGES = {
    MlxErrno.SUCCESS: "No Errors",
    MlxErrno.INVEXT: "File has invalid extension",
    MlxErrno.INVFILE: "Failed to open the file",
    MlxErrno.INVPNG: "PNG file is invalid or corrupted",
    MlxErrno.INVXPM: "XPM42 file is invalid or corrupted",
    MlxErrno.INVPOS: "The specified X or Y positions are out of bounds",
    MlxErrno.INVDIM: "The specified Width or Height dimensions are out of bounds",
    MlxErrno.INVIMG: "The provided image is invalid, might indicate mismanagement of images",
    MlxErrno.VERTFAIL: "Failed to compile the vertex shader.",
    MlxErrno.FRAGFAIL: "Failed to compile the fragment shader.",
    MlxErrno.SHDRFAIL: "Failed to compile the shaders.",
    MlxErrno.MEMFAIL: "Failed to allocate memory",
    MlxErrno.GLADFAIL: "Failed to initialize GLAD",
    MlxErrno.GLFWFAIL: "Failed to initialize GLFW",
    MlxErrno.WINFAIL: "Failed to create window",
    MlxErrno.STRTOBIG: "String is to big to be drawn",
}


def strerror(errno):
    """Return the English description of an error number."""
    try:
        code = MlxErrno(errno)
    except ValueError:
        raise ValueError(f"unknown error number: {errno!r}") from None
    return _MESSAGES[code]


class MlxError(Exception):
    """Raised when a graphics operation fails; carries its error number."""

    def __init__(self, errno, detail=None):
        self.errno = MlxErrno(errno)
        self.detail = detail
        message = strerror(self.errno)
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)