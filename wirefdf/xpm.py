"""Reading XPM pictures into images."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from wirefdf.colors import lookup_color
from wirefdf.image import Image

_TRANSPARENT = -1
_TRANSPARENT_PIXEL = 0xFF000000
_WORD_SEPARATORS = re.compile(r"[ \t]+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read."""


def split_words(text: str) -> list[str]:
    """Split ``text`` on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def find_unquoted(text: str, needle: str) -> int:
    """Return the first index of ``needle`` outside double quotes, or -1."""
    if not needle:
        raise ValueError("needle must not be empty")
    if len(needle) > len(text):
        return -1
    quoted = False
    for pos, char in enumerate(text[: len(text) - len(needle) + 1]):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, pos):
            return pos
    return -1


def _blank(text: str, start: int, count: int) -> str:
    count = min(count, len(text) - start)
    return text[:start] + " " * count + text[start + count:]


def strip_comments(text: str) -> str:
    """Replace C comments outside strings with spaces, keeping the length."""
    while (begin := find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        text = _blank(text, begin, end - begin + 2 if end != -1 else 3)
    while (begin := find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        text = _blank(text, begin, end - begin + 1 if end != -1 else 2)
    return text


def _quoted_strings(text: str) -> Iterator[str]:
    pos = 0
    while (start := text.find('"', pos)) != -1:
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from the strings of an XPM picture.

    The first string holds width, height, colour count and characters per
    pixel; colour definitions and pixel rows follow.
    """
    remaining = iter(lines)

    def next_line() -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise XpmError("unexpected end of XPM data") from None

    header = split_words(next_line())
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and characters per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(header[:4])}")

    # Short keys live in a direct table where later definitions win;
    # longer keys are searched so that the first definition wins.
    later_wins = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line()
        words = split_words(line[cpp:])
        try:
            value_at = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without a 'c' entry: {line!r}") from None
        if value_at >= len(words):
            raise XpmError(f"colour line without a colour value: {line!r}")
        suffix = words[value_at + 1] if value_at + 1 < len(words) else None
        value = lookup_color(words[value_at], suffix)
        key = line[:cpp]
        if later_wins:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    image = Image(width, height)
    for y in range(height):
        line = next_line()
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {y} is shorter than {width} pixels")
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            if color == _TRANSPARENT:
                color = _TRANSPARENT_PIXEL
            image.put_pixel(x, y, color)
    return image


def xpm_from_text(text: str) -> Image:
    """Build an image from the source text of an XPM file."""
    return parse_xpm(_quoted_strings(strip_comments(text)))


def read_xpm(path: str | os.PathLike[str]) -> Image:
    """Read an XPM file into an image."""
    return xpm_from_text(Path(path).read_bytes().decode("latin-1"))