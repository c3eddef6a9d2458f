"""Reading images in the XPM text format."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from pigchase.colors import TRANSPARENT, lookup_color

TRANSPARENT_PIXEL = 0xFF000000
"""Pixel value stored for the transparent colour ``none``."""

_NAME_BUFFER = 63
_HEX_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_DEC_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]*)")


class XpmError(ValueError):
    """Raised when XPM data cannot be turned into an image."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: ``pixels[y][x]`` holds a 32-bit ``0xAARRGGBB`` value."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]


def _to_int32(value: int) -> int:
    value = max(min(value, 2**63 - 1), -(2**63))
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def _atoi(word: str) -> int:
    match = _DEC_PREFIX.match(word)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _find_unquoted(text: str, token: str) -> int:
    """Index of the first ``token`` that is not inside double quotes, or -1."""
    inside = False
    for index, char in enumerate(text):
        if char == '"':
            inside = not inside
        if not inside and text.startswith(token, index):
            return index
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    stop = min(stop, len(text))
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C comments outside quoted strings with spaces; the length is kept."""
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        span = (end - (begin + 2) if end != -1 else -1) + 4
        text = _blank(text, begin, begin + span)
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        span = (end - (begin + 2) if end != -1 else -1) + 3
        text = _blank(text, begin, begin + span)
    return text


def _quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of successive double-quoted strings."""
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            return
        closing = text.find('"', opening + 1)
        if closing == -1:
            return
        yield text[opening + 1:closing]
        pos = closing + 1


def parse_color(name: str, extra: str | None = None) -> int:
    """The colour value of an XPM colour specification.

    ``#`` starts a hexadecimal value; otherwise ``name`` (joined with ``extra``
    by a space when given) is looked up among the named colours. Unknown
    names give 0 and ``none`` gives -1.
    """
    if name.startswith("#"):
        match = _HEX_PREFIX.match(name, 1)
        sign, digits = match.group(1), match.group(2)
        value = int(digits, 16) if digits else 0
        return _to_int32(-value if sign == "-" else value)
    if extra is not None:
        name = f"{name} {extra}"[:_NAME_BUFFER]
    color = lookup_color(name)
    return 0 if color is None else color


def _read_colors(lines: Iterator[str], count: int, cpp: int) -> dict[str, int]:
    colors: dict[str, int] = {}
    for _ in range(count):
        line = next(lines, None)
        if line is None:
            raise XpmError("missing colour definition")
        words = split_words(line[cpp:])
        try:
            position = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour definition without 'c' key: {line!r}") from None
        if position >= len(words):
            raise XpmError(f"colour definition without a value: {line!r}")
        extra = words[position + 1] if position + 1 < len(words) else None
        color = parse_color(words[position], extra)
        key = line[:cpp]
        if cpp <= 2:
            colors[key] = color
        else:
            colors.setdefault(key, color)
    return colors


def parse_xpm(text: str) -> XpmImage:
    """Decode XPM file contents into an :class:`XpmImage`."""
    lines = _quoted_strings(strip_comments(text))
    header = next(lines, None)
    if header is None:
        raise XpmError("missing XPM header")
    words = split_words(header)
    if len(words) < 4:
        raise XpmError(f"incomplete XPM header: {header!r}")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError(f"invalid XPM header: {header!r}")
    colors = _read_colors(lines, ncolors, cpp)
    rows = []
    for _ in range(height):
        line = next(lines, None)
        if line is None:
            raise XpmError("missing pixel row")
        row = []
        for x in range(width):
            color = colors.get(line[cpp * x:cpp * (x + 1)], 0)
            row.append(TRANSPARENT_PIXEL if color == TRANSPARENT else color & 0xFFFFFFFF)
        rows.append(tuple(row))
    return XpmImage(width=width, height=height, pixels=tuple(rows))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode the XPM file at ``path``."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
    except OSError as error:
        raise XpmError(f"cannot read {path}: {error}") from error
    return parse_xpm(text)