"""Loading and validating ``.ber`` level maps."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

WALL = "1"
FLOOR = "0"
PLAYER = "P"
COLLECTIBLE = "C"
EXIT = "E"
ENEMY = "B"

TILES = frozenset(WALL + FLOOR + PLAYER + COLLECTIBLE + EXIT + ENEMY)
LAST_LEVEL = 4

Position = tuple[int, int]


class InvalidMapError(ValueError):
    """Raised when a map breaks one of the level rules."""


class FinalLevelReached(Exception):
    """Raised when no built-in level is left to play."""


class Grid:
    """A mutable grid of single-character tiles, indexed by ``(x, y)``."""

    def __init__(self, rows: Iterable[Iterable[str]] = ()) -> None:
        self.rows: list[list[str]] = [list(row) for row in rows]

    def width(self) -> int:
        """Length of the first row, or 0 for an empty grid."""
        return len(self.rows[0]) if self.rows else 0

    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    def find(self, tile: str) -> Position | None:
        """Position of the first occurrence of ``tile``, scanning row by row."""
        for y, row in enumerate(self.rows):
            for x, value in enumerate(row):
                if value == tile:
                    return (x, y)
        return None

    def count(self, tile: str) -> int:
        """Number of cells holding ``tile``."""
        return sum(row.count(tile) for row in self.rows)

    def copy(self) -> Grid:
        """An independent copy of the grid."""
        return Grid(self.rows)

    def __getitem__(self, pos: Position) -> str:
        x, y = pos
        if x < 0 or y < 0:
            raise IndexError(f"position {pos} is outside the grid")
        return self.rows[y][x]

    def __setitem__(self, pos: Position, tile: str) -> None:
        x, y = pos
        if x < 0 or y < 0:
            raise IndexError(f"position {pos} is outside the grid")
        self.rows[y][x] = tile

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.rows == other.rows

    def __str__(self) -> str:
        return "\n".join("".join(row) for row in self.rows)

    def __repr__(self) -> str:
        return f"Grid({[''.join(row) for row in self.rows]!r})"


def _tile_at(grid: Grid, x: int, y: int) -> str:
    """The tile at ``(x, y)``, or an empty string outside the grid."""
    if 0 <= y < grid.height() and 0 <= x < len(grid.rows[y]):
        return grid.rows[y][x]
    return ""


def _flood(grid: Grid, start: Position, blocked: set[str]) -> Iterator[tuple[Position, str]]:
    """Yield every cell reachable from ``start`` without entering a blocked tile."""
    width, height = grid.width(), grid.height()
    seen: set[Position] = set()
    stack = [start]
    while stack:
        x, y = stack.pop()
        if not (0 <= x < width and 0 <= y < height) or (x, y) in seen:
            continue
        tile = _tile_at(grid, x, y)
        if tile in blocked:
            continue
        seen.add((x, y))
        yield (x, y), tile
        stack.extend(((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)))


def map_path(level: int, filename: str | None) -> str:
    """The map file to open: ``filename`` if given, else the built-in level file."""
    if filename is not None:
        return filename
    if level <= LAST_LEVEL:
        return f"level{level}.ber"
    raise FinalLevelReached("Final level reached, Congrats!")


def parse_map(text: str) -> Grid:
    """Split map text into rows; a trailing newline does not start a new row."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return Grid(lines)


def load_map(path: str | Path) -> Grid:
    """Read, parse and validate the map stored at ``path``."""
    with open(path, encoding="latin-1", newline="") as handle:
        grid = parse_map(handle.read())
    validate_map(grid)
    return grid


def is_rectangular(grid: Grid) -> bool:
    """True when every row is as long as the first."""
    width = grid.width()
    return all(len(row) == width for row in grid.rows)


def has_required_tiles(grid: Grid) -> bool:
    """True for exactly one exit, exactly one player and at least one collectible."""
    return (
        grid.count(EXIT) == 1
        and grid.count(PLAYER) == 1
        and grid.count(COLLECTIBLE) > 0
    )


def is_enclosed(grid: Grid) -> bool:
    """True when the outer border is made entirely of walls."""
    height = grid.height()
    if height == 0:
        return False
    width = grid.width()
    top, bottom = 0, height - 1
    if any(
        _tile_at(grid, x, top) != WALL or _tile_at(grid, x, bottom) != WALL
        for x in range(width)
    ):
        return False
    return all(
        _tile_at(grid, 0, y) == WALL and _tile_at(grid, width - 1, y) == WALL
        for y in range(height)
    )


def has_unknown_tiles(grid: Grid) -> bool:
    """True when some cell holds a character that is not a known tile."""
    return any(tile not in TILES for row in grid.rows for tile in row)


def count_reachable_collectibles(grid: Grid, start: Position) -> int:
    """Collectibles reachable from ``start``; walls and the exit block the way."""
    return sum(
        tile == COLLECTIBLE
        for _, tile in _flood(grid, start, {WALL, EXIT, ""})
    )


def exit_is_reachable(grid: Grid, start: Position) -> bool:
    """True when the exit can be reached from ``start``; walls and enemies block."""
    return any(tile == EXIT for _, tile in _flood(grid, start, {WALL, ENEMY, ""}))


def enemy_placement_invalid(grid: Grid) -> bool:
    """True for more than one enemy, or an enemy right next to the player."""
    if grid.count(ENEMY) > 1:
        return True
    for y, row in enumerate(grid.rows):
        for x, tile in enumerate(row):
            if tile != PLAYER:
                continue
            neighbours = ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1))
            if any(_tile_at(grid, nx, ny) == ENEMY for nx, ny in neighbours):
                return True
    return False


def validate_map(grid: Grid) -> None:
    """Raise :class:`InvalidMapError` unless ``grid`` is a playable level."""
    if grid.height() == 0:
        raise InvalidMapError("Invalid map: the map is empty")
    if not is_rectangular(grid):
        raise InvalidMapError("Invalid map: rows differ in length")
    if not has_required_tiles(grid):
        raise InvalidMapError(
            "Invalid map: needs one exit, one player and at least one collectible"
        )
    if not is_enclosed(grid):
        raise InvalidMapError("Invalid map: the border is not closed by walls")
    if has_unknown_tiles(grid):
        raise InvalidMapError("Invalid map: unknown tile character")
    start = grid.find(PLAYER)
    assert start is not None
    if count_reachable_collectibles(grid, start) != grid.count(COLLECTIBLE):
        raise InvalidMapError("Invalid map: some collectibles cannot be reached")
    if not exit_is_reachable(grid, start):
        raise InvalidMapError("Invalid map: the exit cannot be reached")
    if enemy_placement_invalid(grid):
        raise InvalidMapError("Invalid map: bad enemy placement")