"""Reading height maps: lines of whitespace-separated integer altitudes."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

INT_MAX = 2**31 - 1

_C_SPACE = " \t\n\v\f\r"
_LEADING_DIGITS = re.compile(r"[0-9]*")

GRID_ERROR = "parse_map: Error creating grid."
PARSING_ERROR = "parse_map: Error file contents."
READ_ERROR = "get_next_line: Something went wrong."


class MapError(ValueError):
    """Raised when a map file cannot be read or holds invalid data."""


@dataclass(frozen=True)
class HeightMap:
    """A rectangular grid of altitudes; ``heights[y][x]`` is the point (x, y)."""

    width: int
    height: int
    heights: tuple[tuple[int, ...], ...]

    def at(self, x: int, y: int) -> int:
        """Return the altitude of the point in column ``x`` and row ``y``."""
        return self.heights[y][x]


def trim_trailing_whitespace(text: str) -> str:
    """Remove trailing spaces, tabs and newlines."""
    return text.rstrip(" \t\n")


def parse_int(text: str) -> int:
    """Read a whole decimal integer that fits a signed 32-bit value.

    Leading and trailing whitespace and one leading sign are allowed;
    anything else, or a magnitude above 2147483647, raises MapError.
    """
    rest = text.lstrip(_C_SPACE)
    sign = 1
    if rest[:1] in ("+", "-"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = _LEADING_DIGITS.match(rest).group(0)
    if not digits:
        raise MapError(f"not a number: {text!r}")
    value = int(digits)
    if value > INT_MAX:
        raise MapError(f"number out of range: {text!r}")
    if rest[len(digits):].strip(_C_SPACE):
        raise MapError(f"trailing characters after number: {text!r}")
    return sign * value


def count_width(line: str) -> int:
    """Count the space-separated entries of one map line.

    A line that ends in spaces and a newline does not count the newline;
    a line holding only a newline counts as one entry.
    """
    width = 0
    pos = 0
    end = len(line)
    while pos < end:
        if line[pos] != " ":
            width += 1
        while pos < end and line[pos] != " ":
            pos += 1
        while pos < end and line[pos] == " ":
            pos += 1
        if pos < end and line[pos] in "+-":
            pos += 1
        if line[pos:] == "\n":
            pos += 1
    return width


def _parse_entry(entry: str | None) -> int:
    if entry is None:
        return 0
    fields = [field for field in entry.split(",") if field]
    if not fields:
        raise MapError(PARSING_ERROR)
    try:
        return parse_int(fields[0])
    except MapError as exc:
        raise MapError(PARSING_ERROR) from exc


def _parse_row(line: str, width: int) -> tuple[int, ...]:
    entries = [entry for entry in trim_trailing_whitespace(line).split(" ") if entry]
    padded = entries + [None] * (width - len(entries))
    return tuple(_parse_entry(entry) for entry in padded[:width])


def parse_map_lines(lines: Iterable[str]) -> HeightMap:
    """Build a height map from the lines of a map file, newlines included.

    The widest line sets the width; short lines are padded with zeros.
    Entries may carry a comma-separated suffix, which is ignored.
    """
    rows = list(lines)
    if not rows:
        raise MapError(READ_ERROR)
    width = max(count_width(line) for line in rows)
    height = len(rows)
    if width == 0:
        raise MapError(PARSING_ERROR)
    heights = tuple(_parse_row(line, width) for line in rows)
    return HeightMap(width, height, heights)


def _split_lines(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def parse_map(path: str | os.PathLike[str]) -> HeightMap:
    """Read the map file at ``path``."""
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise MapError(f"open: {exc.strerror or exc}") from exc
    return parse_map_lines(_split_lines(raw.decode("latin-1")))