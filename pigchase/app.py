"""The playable game: window, sprites, key handling and the main loop."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from pigchase.game import LOSE_MESSAGE, Direction, GameState  # noqa: E402
from pigchase.mapfile import (  # noqa: E402
    COLLECTIBLE,
    ENEMY,
    EXIT,
    PLAYER,
    WALL,
    FinalLevelReached,
    InvalidMapError,
    load_map,
    map_path,
)
from pigchase.xpm import XpmError, XpmImage, load_xpm  # noqa: E402

NUM_FRAMES = 30
FRAME_RATE = 30
TILE_SIZE = 32
WINDOW_TITLE = "so_long"
COMPLETED_MESSAGE = "Congrats! You have completed the level."

_TEXT_COLOR = (0xFF, 0xFF, 0xFF)
_LOSE_COLOR = (0xFF, 0xA5, 0x00)
_MOVES_POSITION = (15, 15)

KEY_DIRECTIONS = {
    pygame.K_w: Direction.UP,
    pygame.K_a: Direction.LEFT,
    pygame.K_s: Direction.DOWN,
    pygame.K_d: Direction.RIGHT,
}


def frame_filename(index: int) -> str:
    """Image file of the animated wall for frame ``index``."""
    return f"Frames/frame{index}.xpm"


def exit_frame_filename(index: int) -> str:
    """Image file of the open exit portal for frame ``index``."""
    return f"portal_frame/frame{index}.xpm"


def _surface_from_xpm(image: XpmImage) -> pygame.Surface:
    """Turn decoded XPM pixels into an RGBA surface.

    The top byte of each pixel counts transparency, so it is inverted
    into an alpha value.
    """
    data = bytearray()
    for row in image.pixels:
        for pixel in row:
            data += bytes((
                (pixel >> 16) & 0xFF,
                (pixel >> 8) & 0xFF,
                pixel & 0xFF,
                0xFF - ((pixel >> 24) & 0xFF),
            ))
    return pygame.image.frombuffer(bytes(data), (image.width, image.height), "RGBA").copy()


def _load_optional(path: Path, label: str) -> pygame.Surface | None:
    try:
        return _surface_from_xpm(load_xpm(path))
    except XpmError as error:
        print(f"Error loading {label} image: {error}", file=sys.stderr)
        return None


@dataclass
class _Sprites:
    walls: list[pygame.Surface | None]
    portal: list[pygame.Surface]
    char_left: pygame.Surface | None
    char_right: pygame.Surface | None
    enemy: pygame.Surface | None
    pig: pygame.Surface | None
    ground: pygame.Surface | None
    closed_door: pygame.Surface | None

    @classmethod
    def load(cls, base: Path) -> _Sprites:
        walls = [_load_optional(base / frame_filename(i), "wall") for i in range(NUM_FRAMES)]
        portal = [
            _surface_from_xpm(load_xpm(base / exit_frame_filename(i)))
            for i in range(NUM_FRAMES)
        ]
        return cls(
            walls=walls,
            portal=portal,
            char_left=_load_optional(base / "char_left.xpm", "character"),
            char_right=_load_optional(base / "char_right.xpm", "character"),
            enemy=_load_optional(base / "enemy.xpm", "enemy"),
            pig=_load_optional(base / "pig.xpm", "collectible"),
            ground=_load_optional(base / "ground.xpm", "ground"),
            closed_door=_load_optional(base / "close_door.xpm", "exit"),
        )


class Game:
    """A sequence of levels played in one window."""

    def __init__(
        self,
        filename: str | None = None,
        asset_dir: str | Path = ".",
        level: int = 1,
    ) -> None:
        self.filename = filename
        self.asset_dir = Path(asset_dir)
        self.level = level
        self.current_frame = 0
        self.running = True
        self.facing = Direction.RIGHT
        self._carried_moves = 0
        self._screen: pygame.Surface | None = None
        self._sprites: _Sprites | None = None
        self._font: pygame.font.Font | None = None
        self._lose_shown = False
        self.state = self._load_level()

    @property
    def moves(self) -> int:
        """Moves made so far, counted across every level played."""
        return self._carried_moves + self.state.moves

    def _load_level(self) -> GameState:
        path: str | Path = map_path(self.level, self.filename)
        if self.filename is None:
            path = self.asset_dir / path
        return GameState.from_grid(load_map(path))

    def handle_key(self, key: int) -> None:
        """React to one key press."""
        if key == pygame.K_ESCAPE:
            self.running = False
            return
        direction = KEY_DIRECTIONS.get(key)
        if direction is not None and not self.state.finished:
            if self.state.move(direction) and direction in (Direction.LEFT, Direction.RIGHT):
                self.facing = direction
        if key == pygame.K_RETURN:
            self._advance()
        self._render()

    def _advance(self) -> None:
        """Leave a finished level: quit for a given map, else load the next one."""
        if not self.state.finished:
            return
        if self.filename is not None:
            print(COMPLETED_MESSAGE, end="")
            self.running = False
            return
        self._carried_moves += self.state.moves
        self.level += 1
        try:
            self.state = self._load_level()
        except FinalLevelReached as final:
            print(str(final), end="")
            self.running = False
            return
        self.current_frame = 0
        self.facing = Direction.RIGHT
        self._lose_shown = False
        if self._screen is not None:
            self._open_window()

    def update(self) -> None:
        """Advance the animation by one frame, redraw, and check for the end."""
        self.current_frame = (self.current_frame + 1) % NUM_FRAMES
        self._render()
        self.state.check_finished()

    def _window_size(self) -> tuple[int, int]:
        grid = self.state.grid
        return (grid.width() * TILE_SIZE, grid.height() * TILE_SIZE)

    def _open_window(self) -> None:
        self._screen = pygame.display.set_mode(self._window_size())
        pygame.display.set_caption(WINDOW_TITLE)

    def _render(self) -> None:
        screen, sprites, font = self._screen, self._sprites, self._font
        if screen is None or sprites is None or font is None:
            return
        if self.state.lost:
            if not self._lose_shown:
                text = font.render(LOSE_MESSAGE, True, _LOSE_COLOR)
                width, height = self._window_size()
                screen.blit(text, text.get_rect(center=(width // 2, height // 2)))
                self._lose_shown = True
            return
        if self.state.finished:
            return
        screen.fill((0, 0, 0))
        grid = self.state.grid
        if sprites.ground is not None:
            for y in range(grid.height()):
                for x in range(grid.width()):
                    screen.blit(sprites.ground, (x * TILE_SIZE, y * TILE_SIZE))
        character = sprites.char_left if self.facing is Direction.LEFT else sprites.char_right
        for y, row in enumerate(grid.rows):
            for x, tile in enumerate(row):
                image = None
                if tile == WALL:
                    image = sprites.walls[self.current_frame]
                elif tile == COLLECTIBLE:
                    image = sprites.pig
                elif tile == EXIT:
                    image = (
                        sprites.portal[self.current_frame]
                        if self.state.exit_open()
                        else sprites.closed_door
                    )
                elif tile == PLAYER:
                    image = character
                elif tile == ENEMY:
                    image = sprites.enemy
                if image is not None:
                    screen.blit(image, (x * TILE_SIZE, y * TILE_SIZE))
        screen.blit(font.render(str(self.moves), True, _TEXT_COLOR), _MOVES_POSITION)

    def run(self) -> None:
        """Open the window and play until the game ends or is closed."""
        pygame.init()
        try:
            self._open_window()
            self._sprites = _Sprites.load(self.asset_dir)
            self._font = pygame.font.Font(None, 20)
            clock = pygame.time.Clock()
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN:
                        self.handle_key(event.key)
                    if not self.running:
                        break
                if not self.running:
                    break
                self.update()
                pygame.display.flip()
                clock.tick(FRAME_RATE)
        finally:
            self._screen = None
            pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Play the map named on the command line, or the built-in levels."""
    args = sys.argv[1:] if argv is None else argv
    filename = args[0] if len(args) == 1 else None
    try:
        game = Game(filename)
        game.run()
    except InvalidMapError:
        print("Error\nInvalid map.", file=sys.stderr)
        return 1
    except FinalLevelReached as final:
        print(str(final), end="")
        return 0
    except XpmError as error:
        print(f"Error loading exit image: {error}", file=sys.stderr)
        return 1
    except OSError as error:
        print(f"Error opening .ber file: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())