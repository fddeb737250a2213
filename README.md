# solong

A small top-down puzzle game. You walk a reaper around a walled map, pick up
every collectible, avoid the enemies and reach the exit once it opens.

## Installing

```
pip install .
```

## Playing

```
solong maps/level1.ber
```

The `solong` command takes exactly one argument, the path to a map file
ending in `.ber`. Anything else is rejected with an error message and exit
status 1.

- `W`, `A`, `S`, `D` or the arrow keys move the player a few pixels per frame.
- `Esc` quits; closing the window does too.
- Walking onto a collectible picks it up. When all are gone the exit opens.
- Reaching the exit with every collectible taken prints `YOU WIN` and exits
  with status 0.
- Touching an enemy prints `YOU LOSE` and exits with status 1.

The move count is printed to the terminal as `Movimientos:<n>`; one move is
counted for every 64 pixels walked.

Sprites are read as PNG files from a `sprites/` directory in the working
directory: `bfloor1.png`, `bfloor2.png`, `wall.png`, `col1.png`, `col2.png`,
`col3.png`, `Reap1.png`, `Reapl1.png`, `exit1.png` and `exit4.png`, plus
`enemy1.png` and `enemy2.png` when the map has enemies. Each tile is 64×64
pixels. A missing or broken sprite ends the program with an error.

## Map format

A map is a rectangle of these characters, one row per line:

| Char | Meaning                     |
|------|-----------------------------|
| `1`  | wall                        |
| `0`  | empty floor                 |
| `C`  | collectible (at least one)  |
| `E`  | exit (at least one)         |
| `P`  | player start (exactly one)  |
| `X`  | enemy                       |

Every row must have the same length, and the number of columns may not equal
the number of rows. The map must be enclosed by walls and may not contain an
empty line. Every collectible, exit and the start have to be reachable from
the start without walking through walls or enemies. Example:

```
1111111111
1P0C000001
10011110X1
1C0000E001
1111111111
```

A map that breaks any of these rules is rejected with an error message before
the window opens.

## Using the pieces

The map checks work without opening a window:

```python
from solong.gamemap import MapError, load_map

try:
    game_map = load_map("maps/level1.ber")
except MapError as err:
    print(err)
else:
    print(game_map.width, game_map.height, game_map.player, game_map.collectibles)
```

`parse_map(text)` does the same for a string, and `reachable(grid, start)`
returns the set of `(x, y)` cells reachable from a start cell.

`solong.mlx` holds the sprite layer the game is drawn with:

- `solong.mlx.images.Canvas` — images (`new_image`, `texture_to_image`,
  `texture_area_to_image`, `delete_image`) and their instances
  (`image_to_window`, `set_instance_depth`); `draw_order()` returns the
  visible instances sorted back to front by depth.
- `solong.mlx.texture.load_png` and `solong.mlx.xpm42.load_xpm42` /
  `parse_xpm42` — RGBA textures from PNG and XPM42 files.
- `solong.mlx.window.Window` — a pygame window with a frame loop and loop,
  key, close and resize hooks. `set_setting(Setting.HEADLESS, True)` makes
  later windows hidden, using SDL's dummy video driver.
- `solong.mlx.errors.MlxError` — raised on failures, carrying an `MlxErrno`.

## What it does not do

- No text is drawn in the window; the move count goes to the terminal only.
- The window layer has no mouse, cursor or monitor support, only keyboard,
  close and resize events.

## Tests

```
pip install .[test]
pytest
```