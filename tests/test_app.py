import pygame
import pytest

from pigchase.app import (
    COMPLETED_MESSAGE,
    NUM_FRAMES,
    Game,
    exit_frame_filename,
    frame_filename,
    main,
)
from pigchase.mapfile import InvalidMapError

SIMPLE = "11111\n1PCE1\n11111\n"
SECOND = "111111\n1EC0P1\n111111\n"


def _write(path, text):
    path.write_text(text)
    return path


def _finish_simple(game):
    game.handle_key(pygame.K_d)
    game.handle_key(pygame.K_d)
    game.update()


def test_frame_filenames():
    assert frame_filename(0) == "Frames/frame0.xpm"
    assert frame_filename(29) == "Frames/frame29.xpm"
    assert exit_frame_filename(7) == "portal_frame/frame7.xpm"


def test_move_right(tmp_path):
    game = Game(str(_write(tmp_path / "m.ber", SIMPLE)))
    game.handle_key(pygame.K_d)
    assert game.state.player == (2, 1)
    assert game.moves == 1
    assert game.facing.name == "RIGHT"


def test_wall_blocks(tmp_path):
    game = Game(str(_write(tmp_path / "m.ber", SIMPLE)))
    game.handle_key(pygame.K_w)
    assert game.state.player == (1, 1)
    assert game.moves == 0


def test_escape_stops(tmp_path):
    game = Game(str(_write(tmp_path / "m.ber", SIMPLE)))
    game.handle_key(pygame.K_ESCAPE)
    assert game.running is False


def test_update_cycles_frames(tmp_path):
    game = Game(str(_write(tmp_path / "m.ber", SIMPLE)))
    game.update()
    assert game.current_frame == 1
    for _ in range(NUM_FRAMES - 1):
        game.update()
    assert game.current_frame == 0


def test_enter_before_finish_does_nothing(tmp_path):
    game = Game(str(_write(tmp_path / "m.ber", SIMPLE)))
    game.handle_key(pygame.K_RETURN)
    assert game.running is True
    assert game.state.finished is False


def test_finish_given_map(tmp_path, capsys):
    game = Game(str(_write(tmp_path / "m.ber", SIMPLE)))
    _finish_simple(game)
    assert game.state.finished is True
    game.handle_key(pygame.K_a)
    assert game.state.player == (3, 1)
    game.handle_key(pygame.K_RETURN)
    assert game.running is False
    assert capsys.readouterr().out == COMPLETED_MESSAGE


def test_next_level_carries_moves(tmp_path):
    _write(tmp_path / "level1.ber", SIMPLE)
    _write(tmp_path / "level2.ber", SECOND)
    game = Game(asset_dir=tmp_path)
    _finish_simple(game)
    game.handle_key(pygame.K_RETURN)
    assert game.running is True
    assert game.level == 2
    assert game.moves == 2
    assert game.state.player == (4, 1)
    assert game.current_frame == 0


def test_final_level(tmp_path, capsys):
    _write(tmp_path / "level4.ber", SIMPLE)
    game = Game(asset_dir=tmp_path, level=4)
    _finish_simple(game)
    game.handle_key(pygame.K_RETURN)
    assert game.running is False
    assert capsys.readouterr().out == "Final level reached, Congrats!"


def test_missing_level_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Game(asset_dir=tmp_path)


def test_invalid_map_raises(tmp_path):
    with pytest.raises(InvalidMapError):
        Game(str(_write(tmp_path / "bad.ber", "111\n1P1\n111\n")))


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.ber")]) == 1
    assert "Error opening .ber file" in capsys.readouterr().err


def test_main_invalid_map(tmp_path, capsys):
    path = _write(tmp_path / "bad.ber", "111\n1P1\n111\n")
    assert main([str(path)]) == 1
    assert "Invalid map." in capsys.readouterr().err