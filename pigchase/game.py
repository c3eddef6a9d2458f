"""Game rules: player movement, the chasing enemy, and the end of a level."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pigchase.mapfile import (
    COLLECTIBLE,
    ENEMY,
    EXIT,
    FLOOR,
    PLAYER,
    WALL,
    Grid,
    InvalidMapError,
    Position,
)

LOSE_MESSAGE = "You Lost, Press ESC to exit"

# Tiles the enemy refuses to step on.
_ENEMY_BLOCKED = frozenset((WALL, EXIT, COLLECTIBLE))


class Direction(Enum):
    """A step of one tile on the grid."""

    RIGHT = (1, 0)
    LEFT = (-1, 0)
    DOWN = (0, 1)
    UP = (0, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def step(self, pos: Position) -> Position:
        """The position one tile away from ``pos`` in this direction."""
        return (pos[0] + self.dx, pos[1] + self.dy)


# The order in which the enemy considers its moves; ties keep this order.
_ENEMY_ORDER = (Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP)


def manhattan_distance(a: Position, b: Position) -> int:
    """Grid distance between two positions."""
    return abs(b[0] - a[0]) + abs(b[1] - a[1])


@dataclass
class GameState:
    """The state of one level being played."""

    grid: Grid
    player: Position
    exit: Position
    enemy: Position | None = None
    moves: int = 0
    finished: bool = False
    lost: bool = False
    _unused: None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_grid(cls, grid: Grid) -> GameState:
        """Start a level on a copy of ``grid``."""
        board = grid.copy()
        player = board.find(PLAYER)
        if player is None:
            raise InvalidMapError("Invalid map: no player")
        exit_pos = board.find(EXIT)
        if exit_pos is None:
            raise InvalidMapError("Invalid map: no exit")
        enemy = board.find(ENEMY) if board.count(ENEMY) == 1 else None
        return cls(grid=board, player=player, exit=exit_pos, enemy=enemy)

    def items_left(self) -> int:
        """Collectibles still on the board."""
        return self.grid.count(COLLECTIBLE)

    def exit_open(self) -> bool:
        """The exit opens once every collectible is taken."""
        return self.items_left() == 0

    def move(self, direction: Direction) -> bool:
        """Move the player one tile; return whether the move happened.

        Walls always block, and the exit blocks while collectibles remain.
        Stepping onto the enemy loses the game. After a move, the enemy
        takes its own step towards the player.
        """
        if self.finished:
            return False
        target = direction.step(self.player)
        tile = self.grid[target]
        if tile == WALL or (tile == EXIT and not self.exit_open()):
            return False
        if self.enemy is not None and target == self.enemy:
            self.lost = True
        self.grid[self.player] = FLOOR
        self.grid[target] = PLAYER
        self.player = target
        self.moves += 1
        if self.enemy is not None:
            self.move_enemy()
        return True

    def move_enemy(self) -> Position | None:
        """Step the enemy towards the player; return its new position, if it moved."""
        if self.enemy is None:
            return None
        candidates = sorted(
            _ENEMY_ORDER,
            key=lambda d: manhattan_distance(d.step(self.enemy), self.player),
        )
        for direction in candidates:
            target = direction.step(self.enemy)
            if self.grid[target] in _ENEMY_BLOCKED:
                continue
            self.grid[self.enemy] = FLOOR
            self.grid[target] = ENEMY
            self.enemy = target
            return target
        return None

    def check_finished(self) -> bool:
        """Freeze the level once the player stands on the exit."""
        if self.player == self.exit:
            self.finished = True
        return self.finished