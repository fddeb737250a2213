"""Loading the game sprites and laying out a map on the canvas."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .gamemap import COLLECTIBLE, ENEMY, EXIT, PLAYER, WALL
from .mlx.images import Image
from .mlx.texture import Texture, load_png

PIX = 64

_REQUIRED = {
    "floor_a": "bfloor1.png",
    "floor_b": "bfloor2.png",
    "wall": "wall.png",
    "coin_1": "col1.png",
    "coin_2": "col2.png",
    "coin_3": "col3.png",
    "player_right": "Reap1.png",
    "player_left": "Reapl1.png",
    "exit_closed": "exit1.png",
    "exit_open": "exit4.png",
}
_OPTIONAL = {
    "enemy_a": "enemy1.png",
    "enemy_b": "enemy2.png",
}


@dataclass
class Sprites:
    """The textures the game draws with; enemy textures are optional."""

    floor_a: Texture
    floor_b: Texture
    wall: Texture
    coin_1: Texture
    coin_2: Texture
    coin_3: Texture
    player_right: Texture
    player_left: Texture
    exit_closed: Texture
    exit_open: Texture
    enemy_a: Optional[Texture] = None
    enemy_b: Optional[Texture] = None

    @classmethod
    def load(cls, directory):
        """Load every sprite PNG from a directory."""
        directory = Path(directory)
        textures = {name: load_png(directory / file) for name, file in _REQUIRED.items()}
        for name, file in _OPTIONAL.items():
            path = directory / file
            textures[name] = load_png(path) if path.exists() else None
        return cls(**textures)


@dataclass(eq=False)
class Scene:
    """The images placed for a map and how many of each were placed."""

    floor_a: Image
    floor_b: Image
    wall: Image
    coin_frames: tuple
    exit_closed: Image
    exit_open: Image
    player_right: Image
    player_left: Image
    enemy_a: Optional[Image] = None
    enemy_b: Optional[Image] = None
    floor_count: int = 0
    wall_count: int = 0
    coin_count: int = 0
    enemy_count: int = 0
    player: tuple = (0, 0)


def _positions(game_map, char):
    for y, row in enumerate(game_map.rows):
        for x, tile in enumerate(row):
            if tile == char:
                yield x, y


def _render_floor(canvas, scene, game_map):
    for y in range(game_map.height):
        for x in range(game_map.width):
            first = canvas.image_to_window(scene.floor_a, x * PIX, y * PIX)
            second = canvas.image_to_window(scene.floor_b, x * PIX, y * PIX)
            canvas.set_instance_depth(scene.floor_a.instances[first], 1)
            canvas.set_instance_depth(scene.floor_b.instances[second], -2)
            scene.floor_count += 1


def _render_walls(canvas, scene, game_map):
    for x, y in _positions(game_map, WALL):
        index = canvas.image_to_window(scene.wall, x * PIX, y * PIX)
        canvas.set_instance_depth(scene.wall.instances[index], 5)
        scene.wall_count += 1


def _render_pair(canvas, shown, hidden, position, depths):
    x, y = position
    canvas.image_to_window(shown, x * PIX, y * PIX)
    canvas.image_to_window(hidden, x * PIX, y * PIX)
    canvas.set_instance_depth(shown.instances[0], depths[0])
    canvas.set_instance_depth(hidden.instances[0], depths[1])


def _render_coins(canvas, scene, game_map):
    for x, y in _positions(game_map, COLLECTIBLE):
        for frame in scene.coin_frames:
            canvas.image_to_window(frame, x * PIX, y * PIX)
        # Only the first instance of each frame gets its depth set here;
        # the animation later aligns all of them.
        for frame, depth in zip(scene.coin_frames, (10, -11, -12)):
            canvas.set_instance_depth(frame.instances[0], depth)
        scene.coin_count += 1


def build_scene(canvas, game_map, sprites):
    """Create the images for a map and place them on the canvas."""
    has_enemies = game_map.enemies > 0
    if has_enemies and (sprites.enemy_a is None or sprites.enemy_b is None):
        raise ValueError("the map has enemies but no enemy sprites were loaded")

    scene = Scene(
        floor_a=canvas.texture_to_image(sprites.floor_a),
        floor_b=canvas.texture_to_image(sprites.floor_b),
        wall=canvas.texture_to_image(sprites.wall),
        coin_frames=(
            canvas.texture_to_image(sprites.coin_1),
            canvas.texture_to_image(sprites.coin_2),
            canvas.texture_to_image(sprites.coin_3),
        ),
        player_right=canvas.texture_to_image(sprites.player_right),
        player_left=canvas.texture_to_image(sprites.player_left),
        exit_closed=canvas.texture_to_image(sprites.exit_closed),
        exit_open=canvas.texture_to_image(sprites.exit_open),
    )
    if has_enemies:
        scene.enemy_a = canvas.texture_to_image(sprites.enemy_a)
        scene.enemy_b = canvas.texture_to_image(sprites.enemy_b)

    _render_floor(canvas, scene, game_map)
    _render_walls(canvas, scene, game_map)
    _render_coins(canvas, scene, game_map)
    for position in _positions(game_map, EXIT):
        _render_pair(canvas, scene.exit_closed, scene.exit_open, position, (20, -23))
    for position in _positions(game_map, PLAYER):
        scene.player = position
        _render_pair(canvas, scene.player_right, scene.player_left, position, (30, -31))
    if has_enemies:
        for position in _positions(game_map, ENEMY):
            scene.enemy_count += 1
            _render_pair(canvas, scene.enemy_a, scene.enemy_b, position, (28, -29))
    return scene