"""Game rules: player movement, collecting, enemies, the exit and animations."""

from __future__ import annotations

import enum

from .gamemap import COLLECTIBLE, ENEMY, EXIT, WALL
from .mlx.window import Key
from .scene import PIX

DEFAULT_STEP = 4


class Outcome(enum.Enum):
    """What a frame or a move left the game in."""

    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    QUIT = "quit"


def swap_depth(canvas, first, second, total):
    """Negate the depths of the first ``total`` instances of two images.

    The new depths come from each image's first instance, so a shown frame
    (positive depth) is hidden and a hidden one is shown.
    """
    depth_first = -first.instances[0].z
    depth_second = -second.instances[0].z
    for index in range(total):
        canvas.set_instance_depth(first.instances[index], depth_first)
        canvas.set_instance_depth(second.instances[index], depth_second)


def _cell(value):
    """Map a pixel coordinate to a tile index, truncating toward zero."""
    return value // PIX if value >= 0 else -((-value) // PIX)


class Game:
    """The running state of one map laid out on a canvas."""

    FLOOR_TIMER = 100
    COIN_TIMER = 20
    ENEMY_TIMER = 20

    def __init__(self, canvas, game_map, scene, step=DEFAULT_STEP):
        self.canvas = canvas
        self.game_map = game_map
        self.scene = scene
        self.step = step
        self.coins = scene.coin_count
        self.travelled = 0
        self.floor_frame = 0
        self.coin_frame = 0
        self.enemy_frame = 0

    @property
    def position(self):
        """The player's top-left corner in pixels."""
        instance = self.scene.player_right.instances[0]
        return instance.x, instance.y

    def _tile(self, px, py):
        return self.game_map.tile(_cell(px), _cell(py))

    def _shift(self, dx, dy):
        for image in (self.scene.player_right, self.scene.player_left):
            image.instances[0].x += dx * self.step
            image.instances[0].y += dy * self.step
        self.travelled += self.step

    def _face(self, direction):
        right = self.scene.player_right.instances[0]
        left = self.scene.player_left.instances[0]
        if direction == "R":
            self.canvas.set_instance_depth(right, 30)
            self.canvas.set_instance_depth(left, -31)
        else:
            self.canvas.set_instance_depth(right, -30)
            self.canvas.set_instance_depth(left, 31)

    def _after_move(self, x, y):
        centre = self._tile(x + 32, y + 32)
        if centre == COLLECTIBLE:
            self.collect(y + 32, x + 32)
        if centre == ENEMY:
            return Outcome.LOST
        return self.check_finish(y, x)

    def move_up(self):
        """Step the player up unless a wall is in the way."""
        x, y = self.position
        if (self._tile(x + 10, y - self.step) != WALL
                and self._tile(x + 50, y - self.step) != WALL):
            self._shift(0, -1)
        return self._after_move(x, y)

    def move_down(self):
        """Step the player down unless a wall is in the way."""
        x, y = self.position
        below = y + 60 + self.step
        if self._tile(x + 10, below) != WALL and self._tile(x + 50, below) != WALL:
            self._shift(0, 1)
        return self._after_move(x, y)

    def move_left(self):
        """Face left and step the player left unless a wall is in the way."""
        x, y = self.position
        self._face("L")
        side = x + 10 - self.step
        if self._tile(side, y) != WALL and self._tile(side, y + 60) != WALL:
            self._shift(-1, 0)
        return self._after_move(x, y)

    def move_right(self):
        """Face right and step the player right unless a wall is in the way."""
        x, y = self.position
        self._face("R")
        side = x + 50 + self.step
        if self._tile(side, y) != WALL and self._tile(side, y + 60) != WALL:
            self._shift(1, 0)
        return self._after_move(x, y)

    def collect(self, y, x):
        """Pick up the coin on the tile holding pixel (x, y).

        Returns whether a coin was picked up. When none is left there and
        every coin is gone, the exit opens.
        """
        frames = self.scene.coin_frames
        for index in range(self.scene.coin_count):
            instance = frames[0].instances[index]
            if (_cell(instance.x) == _cell(x) and _cell(instance.y) == _cell(y)
                    and instance.enabled):
                for frame in frames:
                    frame.instances[index].enabled = False
                self.coins -= 1
                return True
        if self.coins == 0:
            self._open_door()
        return False

    def _open_door(self):
        if self.coins == 0:
            self.canvas.set_instance_depth(self.scene.exit_closed.instances[0], -15)
            self.canvas.set_instance_depth(self.scene.exit_open.instances[0], 16)

    def check_finish(self, y, x):
        """Return WON when the player reaches the exit with every coin taken."""
        if self.coins != 0:
            return Outcome.PLAYING
        step = self.step
        checks = (
            ((x + 40, y + 10 - step), (x + 50, y + 10 - step)),
            ((x + 20, y + 55 + step), (x + 40, y + 55 + step)),
            ((x + 10 - step, y + 20), (x + 10 - step, y + 55)),
            ((x + 45 + step, y + 20), (x + 45 + step, y + 55)),
        )
        for first, second in checks:
            if self._tile(*first) == EXIT and self._tile(*second) == EXIT:
                return Outcome.WON
        return Outcome.PLAYING

    def _animate_pair(self, frame, timer, first, second, total):
        if frame == timer and first.instances[0].z > 0:
            swap_depth(self.canvas, first, second, total)
            frame = -1
        elif frame == timer and second.instances[0].z > 0:
            swap_depth(self.canvas, second, first, total)
            frame = -1
        return frame + 1

    def _animate_coins(self):
        frames = self.scene.coin_frames
        total = self.scene.coin_count
        if self.coin_frame == self.COIN_TIMER:
            for current, following in zip(frames, frames[1:] + frames[:1]):
                if current.instances[0].z > 0:
                    swap_depth(self.canvas, current, following, total)
                    self.coin_frame = -1
                    break
        self.coin_frame += 1

    def animate(self):
        """Advance the floor, enemy and coin animations by one frame."""
        scene = self.scene
        self.floor_frame = self._animate_pair(
            self.floor_frame, self.FLOOR_TIMER, scene.floor_a, scene.floor_b, scene.floor_count
        )
        if self.game_map.enemies > 0:
            self.enemy_frame = self._animate_pair(
                self.enemy_frame, self.ENEMY_TIMER, scene.enemy_a, scene.enemy_b,
                scene.enemy_count,
            )
        self._animate_coins()

    def tick(self, pressed):
        """Run one frame with the given keys held down and return the outcome."""
        pressed = set(pressed)
        if Key.ESCAPE in pressed:
            return Outcome.QUIT
        moves = (
            ((Key.W, Key.UP), self.move_up),
            ((Key.S, Key.DOWN), self.move_down),
            ((Key.A, Key.LEFT), self.move_left),
            ((Key.D, Key.RIGHT), self.move_right),
        )
        for keys, move in moves:
            if pressed.intersection(keys):
                outcome = move()
                if outcome is not Outcome.PLAYING:
                    return outcome
        self.animate()
        return Outcome.PLAYING