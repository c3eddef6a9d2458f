import pytest

from pigchase.mapfile import (
    COLLECTIBLE,
    ENEMY,
    EXIT,
    FLOOR,
    PLAYER,
    FinalLevelReached,
    Grid,
    InvalidMapError,
    count_reachable_collectibles,
    enemy_placement_invalid,
    exit_is_reachable,
    has_required_tiles,
    has_unknown_tiles,
    is_enclosed,
    is_rectangular,
    load_map,
    map_path,
    parse_map,
    validate_map,
)

VALID = "1111111\n1P0C0E1\n1111111\n"
WITH_ENEMY = "11111111\n1P0C0001\n1000B0E1\n11111111\n"


def test_map_path_prefers_given_filename():
    assert map_path(7, "custom.ber") == "custom.ber"


def test_map_path_builtin_level():
    assert map_path(4, None) == "level4.ber"


def test_map_path_past_last_level():
    with pytest.raises(FinalLevelReached):
        map_path(5, None)


def test_parse_round_trip():
    grid = parse_map(VALID)
    assert str(grid) == VALID.rstrip("\n")
    assert grid.height() == len(VALID.splitlines())
    assert grid.width() == len(VALID.splitlines()[0])


def test_parse_without_trailing_newline_matches():
    assert parse_map(VALID) == parse_map(VALID.rstrip("\n"))


def test_parse_keeps_blank_lines_inside():
    grid = parse_map("111\n\n111\n")
    assert grid.height() == 3
    assert not is_rectangular(grid)


def test_parse_empty_text():
    grid = parse_map("")
    assert grid.height() == 0
    with pytest.raises(InvalidMapError):
        validate_map(grid)


def test_grid_find_and_count():
    grid = parse_map(VALID)
    pos = grid.find(PLAYER)
    assert grid[pos] == PLAYER
    assert grid.count(COLLECTIBLE) == 1
    assert grid.find("X") is None


def test_grid_copy_is_independent():
    grid = parse_map(VALID)
    other = grid.copy()
    other[other.find(PLAYER)] = FLOOR
    assert grid.count(PLAYER) == 1
    assert other.count(PLAYER) == 0
    assert grid != other


def test_grid_negative_index_rejected():
    grid = parse_map(VALID)
    assert grid[(0, 0)] == "1"
    with pytest.raises(IndexError) as info:
        grid[(-1, 0)]
    assert info.type is IndexError


def test_valid_map_passes_unchanged():
    grid = parse_map(VALID)
    before = grid.copy()
    validate_map(grid)
    assert grid == before
    assert is_rectangular(grid) and has_required_tiles(grid) and is_enclosed(grid)


def test_valid_map_with_enemy():
    grid = parse_map(WITH_ENEMY)
    validate_map(grid)
    assert not enemy_placement_invalid(grid)
    assert exit_is_reachable(grid, grid.find(PLAYER))


@pytest.mark.parametrize(
    "text",
    [
        "1111111\n1P0C0E1\n111111\n",  # ragged
        "1111111\n1PEC0E1\n1111111\n",  # two exits
        "1111111\n1P000E1\n1111111\n",  # no collectible
        "1111111\n1PPC0E1\n1111111\n",  # two players
        "1111111\n1P0C0E0\n1111111\n",  # open border
        "1111111\n1P0CXE1\n1111111\n",  # unknown tile
        "1111111\n1P0E0C1\n1111111\n",  # collectible behind the exit
        "111111\n1PC1E1\n111111\n",  # exit walled off
        "1111111\n1PC0BE1\n1111111\n",  # enemy blocks the exit
        "11111\n1PBC1\n1E001\n11111\n",  # enemy next to the player
        "11111111\n1P0C0B01\n1000B0E1\n11111111\n",  # two enemies
    ],
)
def test_invalid_maps_rejected(text):
    with pytest.raises(InvalidMapError):
        validate_map(parse_map(text))


def test_unknown_tiles_detected():
    assert has_unknown_tiles(parse_map("111\n1X1\n111"))
    assert not has_unknown_tiles(parse_map(VALID))


def test_collectibles_blocked_by_exit():
    grid = parse_map("1111111\n1P0E0C1\n1111111\n")
    start = grid.find(PLAYER)
    assert count_reachable_collectibles(grid, start) < grid.count(COLLECTIBLE)


def test_all_collectibles_reachable():
    grid = parse_map("1111111\n1PC0CE1\n10C0001\n1111111\n")
    start = grid.find(PLAYER)
    assert count_reachable_collectibles(grid, start) == grid.count(COLLECTIBLE)


def test_enemy_does_not_block_collectibles():
    grid = parse_map("1111111\n1P0BC01\n11111E1\n1111111\n")
    start = grid.find(PLAYER)
    assert count_reachable_collectibles(grid, start) == grid.count(COLLECTIBLE)
    assert not exit_is_reachable(grid, start)


def test_enemy_adjacent_vertically():
    grid = parse_map("11111\n1P0C1\n1B0E1\n11111\n")
    assert enemy_placement_invalid(grid)
    grid[grid.find(ENEMY)] = FLOOR
    assert not enemy_placement_invalid(grid)


def test_is_enclosed_requires_side_walls():
    assert not is_enclosed(parse_map("1111\n0PE1\n1111"))
    assert not is_enclosed(parse_map("1101\n1PE1\n1111"))


def test_load_map_from_file(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text(VALID)
    grid = load_map(path)
    assert grid == parse_map(VALID)
    assert grid.count(EXIT) == 1


def test_load_map_rejects_invalid_file(tmp_path):
    path = tmp_path / "bad.ber"
    path.write_text("1111\n1P01\n1111\n")
    with pytest.raises(InvalidMapError):
        load_map(path)


def test_load_map_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_map(tmp_path / "missing.ber")