import pytest

from pigchase.colors import TRANSPARENT, lookup_color


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("red", 0xFF0000),
        ("ghost white", 0xF8F8FF),
        ("snow4", 0x8B8989),
        ("gray50", 0x7F7F7F),
    ],
)
def test_known_values(name, value):
    assert lookup_color(name) == value


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_case_is_ignored():
    assert lookup_color("ReD") == lookup_color("red")
    assert lookup_color("GHOST WHITE") == lookup_color("ghost white")


def test_spaced_and_joined_names_agree():
    assert lookup_color("white smoke") == lookup_color("whitesmoke")
    assert lookup_color("navy blue") == lookup_color("navyblue")


def test_gray_and_grey_spellings_agree():
    for number in range(101):
        assert lookup_color(f"gray{number}") == lookup_color(f"grey{number}")


def test_gray_shades_are_neutral_and_increasing():
    values = [lookup_color(f"gray{n}") for n in range(101)]
    assert values[0] == 0
    assert values[-1] == 0xFFFFFF
    assert values == sorted(values)
    for value in values:
        red, green, blue = value >> 16, (value >> 8) & 0xFF, value & 0xFF
        assert red == green == blue


def test_numbered_shade_one_matches_base_for_many_names():
    assert lookup_color("ivory1") == lookup_color("ivory")
    assert lookup_color("gold1") == lookup_color("gold")


def test_none_is_transparent():
    assert lookup_color("none") == TRANSPARENT
    assert lookup_color("None") == -1


def test_unknown_name():
    assert lookup_color("not a colour") is None
    assert lookup_color("") is None