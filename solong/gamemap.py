"""Reading and validating ``.ber`` maps."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from pathlib import Path

WALL = "1"
EMPTY = "0"
COLLECTIBLE = "C"
EXIT = "E"
PLAYER = "P"
ENEMY = "X"
TILES = frozenset((WALL, EMPTY, COLLECTIBLE, EXIT, PLAYER, ENEMY))

MAP_SUFFIX = ".ber"

_BAD_ARGUMENTS = "Error, argumentos incorrectos"
_BAD_SUFFIX = "Error, argumento no es .ber"
_EMPTY_MAP = "Error, mapa vacio"
_EMPTY_LINE = "Error, parece que una linea esta vacía"
_NOT_RECTANGULAR = "Error, el mapa no es rectangular"
_BAD_ELEMENTS = "Error, el mapa no tiene los elementos necesarios"
_NOT_CLOSED = "Error, el mapa no esta cerrado"
_NO_WAY_OUT = "Error, el mapa no tiene salida"


class MapError(Exception):
    """Raised when the arguments or the map file are not usable."""


@dataclass(frozen=True)
class GameMap:
    """A validated map: rows of tiles plus what was counted on them."""

    rows: tuple
    player: tuple
    collectibles: int
    exits: int
    enemies: int

    @property
    def width(self):
        return len(self.rows[0])

    @property
    def height(self):
        return len(self.rows)

    def tile(self, x, y):
        """Return the tile character at column x, row y."""
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise IndexError(f"tile ({x}, {y}) is outside the map")
        return self.rows[y][x]


def check_arguments(args):
    """Check the command-line arguments and return the map path."""
    args = list(args)
    if len(args) != 1:
        raise MapError(_BAD_ARGUMENTS)
    path = str(args[0])
    if not path.endswith(MAP_SUFFIX):
        raise MapError(_BAD_SUFFIX)
    return path


def reachable(grid, start):
    """Return the (x, y) cells reachable from start without crossing walls or enemies."""
    rows = list(grid)
    x, y = start

    def open_cell(cx, cy):
        if not (0 <= cy < len(rows) and 0 <= cx < len(rows[cy])):
            return False
        return rows[cy][cx] not in (WALL, ENEMY)

    if not open_cell(x, y):
        return frozenset()
    seen = {(x, y)}
    pending = deque([(x, y)])
    while pending:
        cx, cy = pending.popleft()
        for nx, ny in ((cx, cy + 1), (cx, cy - 1), (cx + 1, cy), (cx - 1, cy)):
            if (nx, ny) not in seen and open_cell(nx, ny):
                seen.add((nx, ny))
                pending.append((nx, ny))
    return frozenset(seen)


def _cells(rows):
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            yield x, y, char


def _check_shape(rows):
    width = len(rows[0])
    if width == len(rows) or any(len(row) != width for row in rows):
        raise MapError(_NOT_RECTANGULAR)


def _count_elements(rows):
    counts = {COLLECTIBLE: 0, EXIT: 0, ENEMY: 0, PLAYER: 0}
    player = None
    for x, y, char in _cells(rows):
        if char not in TILES:
            raise MapError(_BAD_ELEMENTS)
        if char in counts:
            counts[char] += 1
        if char == PLAYER:
            player = (x, y)
    if counts[COLLECTIBLE] < 1 or counts[EXIT] < 1 or counts[PLAYER] != 1:
        raise MapError(_BAD_ELEMENTS)
    return player, counts


def _check_walls(rows):
    last_row = len(rows) - 1
    last_col = len(rows[0]) - 1
    for x, y, char in _cells(rows):
        on_border = y in (0, last_row) or x in (0, last_col)
        if on_border and char != WALL:
            raise MapError(_NOT_CLOSED)


def _check_path(rows, player):
    visited = reachable(rows, player)
    for x, y, char in _cells(rows):
        if char in (COLLECTIBLE, EXIT, PLAYER) and (x, y) not in visited:
            raise MapError(_NO_WAY_OUT)


def parse_map(text):
    """Validate map text and return the resulting GameMap."""
    if not text:
        raise MapError(_EMPTY_MAP)
    if "\n\n" in text:
        raise MapError(_EMPTY_LINE)
    rows = tuple(row for row in text.split("\n") if row)
    if not rows:
        raise MapError(_EMPTY_MAP)
    _check_shape(rows)
    player, counts = _count_elements(rows)
    _check_walls(rows)
    _check_path(rows, player)
    return GameMap(
        rows=rows,
        player=player,
        collectibles=counts[COLLECTIBLE],
        exits=counts[EXIT],
        enemies=counts[ENEMY],
    )


def load_map(path):
    """Read a map file and validate it."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise MapError(f"{_EMPTY_MAP}: {exc}") from exc
    return parse_map(text)