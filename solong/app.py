"""Command-line entry point: load a map, open a window and play."""

from __future__ import annotations

import sys
from pathlib import Path

from .game import Game, Outcome
from .gamemap import MapError, check_arguments, load_map
from .mlx.errors import MlxError
from .mlx.window import Key, Window
from .scene import PIX, Sprites, build_scene

TITLE = "so_long"
SPRITE_DIR = Path("sprites")
MOVE_THRESHOLD = 64

_RED = "\033[31m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

_WATCHED_KEYS = (
    Key.ESCAPE,
    Key.W, Key.UP,
    Key.S, Key.DOWN,
    Key.A, Key.LEFT,
    Key.D, Key.RIGHT,
)


def _error(message):
    print(f"{_RED}{message}{_RESET}", file=sys.stderr)


class _MoveCounter:
    """Turns pixels travelled into whole moves, one per tile's worth of pixels."""

    def __init__(self, threshold=MOVE_THRESHOLD):
        self.threshold = threshold
        self.moves = 0
        self._pending = 0
        self._seen = 0

    def update(self, travelled):
        """Record the total distance travelled; return the new move count when it grows."""
        self._pending += travelled - self._seen
        self._seen = travelled
        if self._pending >= self.threshold:
            self.moves += 1
            self._pending = 0
            return self.moves
        return None


class _Session:
    """Drives one game from the window's frame loop."""

    def __init__(self, window, game):
        self.window = window
        self.game = game
        self.counter = _MoveCounter()
        self.outcome = Outcome.PLAYING

    def frame(self):
        pressed = {key for key in _WATCHED_KEYS if self.window.is_key_down(key)}
        outcome = self.game.tick(pressed)
        moves = self.counter.update(self.game.travelled)
        if moves is not None:
            print(f"{_YELLOW}Movimientos:{moves}\r{_RESET}", end="", flush=True)
        if outcome is not Outcome.PLAYING:
            self.outcome = outcome
            self.window.close()


def main(argv=None):
    """Run the game on the map named by the single argument; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        path = check_arguments(args)
        game_map = load_map(path)
    except MapError as exc:
        _error(str(exc))
        return 1

    try:
        sprites = Sprites.load(SPRITE_DIR)
        window = Window(game_map.width * PIX, game_map.height * PIX, TITLE)
    except MlxError as exc:
        _error(f"Error, {exc}")
        return 1

    try:
        scene = build_scene(window.canvas, game_map, sprites)
    except (MlxError, ValueError) as exc:
        window.terminate()
        _error(f"Error, {exc}")
        return 1

    session = _Session(window, Game(window.canvas, game_map, scene))
    window.add_loop_hook(session.frame)
    try:
        window.loop()
    finally:
        window.terminate()

    if session.outcome is Outcome.WON:
        print(f"{_GREEN}\nYOU WIN\n{_RESET}", end="")
        return 0
    if session.outcome is Outcome.LOST:
        print(f"{_RED}\nYOU LOSE\n{_RESET}", end="")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())