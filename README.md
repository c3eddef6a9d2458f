# pigchase

A small tile-based puzzle game. You walk through a walled maze, collect
every pig, and step into the portal once all of them are gathered. A level
may hold a cat that takes a step towards you after each of your moves; if
you walk into it, the level is lost.

## Installing

```
pip install .
```

Tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Playing

Run the game from a directory that holds the level files and the sprite
images:

```
pigchase
```

With no argument the game plays `level1.ber` through `level4.ber` from the
current directory in turn; after the last one it prints
`Final level reached, Congrats!` and stops. Give a single map file to play
just that one:

```
pigchase mymap.ber
```

When you finish a map given on the command line, pressing Enter prints
`Congrats! You have completed the level.` and quits.

Controls:

| Key   | Action                                         |
|-------|------------------------------------------------|
| W     | move up                                        |
| A     | move left                                      |
| S     | move down                                      |
| D     | move right                                     |
| Enter | go on once you stand on the exit               |
| Esc   | quit                                           |

Closing the window also quits. The number of moves made so far, counted
over all levels played, is shown in the top-left corner. When the cat
catches you, `You Lost, Press ESC to exit` is shown and the board stops
being redrawn.

If the map is invalid, the command prints `Error` and `Invalid map.` to
standard error and exits with status 1; it also exits with status 1 when
the map file cannot be opened or a portal frame image cannot be read.

### Files the game expects

The game looks for these files in the current directory:

- `level1.ber` … `level4.ber` when no map is given;
- `Frames/frame0.xpm` … `Frames/frame29.xpm`: the animated wall;
- `portal_frame/frame0.xpm` … `portal_frame/frame29.xpm`: the open exit
  (these are required);
- `char_left.xpm`, `char_right.xpm`, `enemy.xpm`, `pig.xpm`, `ground.xpm`,
  `close_door.xpm`.

A missing wall frame or one of the single sprites is reported on standard
error and simply not drawn.

## Map files

A map is a text file of equal-length lines built from these tiles:

| Tile | Meaning           |
|------|-------------------|
| `1`  | wall              |
| `0`  | floor             |
| `P`  | player start      |
| `C`  | pig (collectible) |
| `E`  | exit              |
| `B`  | cat (enemy)       |

A valid map

- is rectangular and enclosed by walls;
- holds only the tiles above;
- has exactly one `P`, exactly one `E` and at least one `C`;
- has at most one `B`, and not right next to the `P`;
- lets the player reach every `C` without passing through a wall or the
  exit, and reach the exit without passing through a wall or the cat.

The exit stays closed until every pig has been collected. The cat never
steps onto a wall, the exit or a pig.

## Using it as a library

```python
from pigchase.mapfile import load_map
from pigchase.game import Direction, GameState

grid = load_map("level1.ber")      # raises InvalidMapError for a bad map
state = GameState.from_grid(grid)
state.move(Direction.RIGHT)        # True if the player moved
print(state.items_left(), state.exit_open(), state.lost)
state.check_finished()             # True once the player is on the exit
```

The modules:

- `pigchase.mapfile` – `Grid`, `parse_map`, `load_map`, `validate_map`, the
  individual checks (`is_rectangular`, `has_required_tiles`, `is_enclosed`,
  `has_unknown_tiles`, `count_reachable_collectibles`, `exit_is_reachable`,
  `enemy_placement_invalid`), `map_path`, and the exceptions
  `InvalidMapError` and `FinalLevelReached`.
- `pigchase.game` – `Direction`, `GameState` and `manhattan_distance`.
- `pigchase.xpm` – `parse_xpm` and `load_xpm` decode XPM images into an
  `XpmImage` of `0xAARRGGBB` pixels; `XpmError` reports bad data.
- `pigchase.colors` – `lookup_color` resolves X11 colour names such as
  `"navy blue"` to `0xRRGGBB` values, case-insensitively; `"none"` gives
  `-1` and an unknown name gives `None`.
- `pigchase.app` – `Game`, the pygame window and loop, and `main`, the
  `pigchase` command.

## What it does not include

The package ships no level files and no sprite images; you have to provide
the `.ber` maps and `.xpm` images listed above yourself.