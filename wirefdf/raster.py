"""Drawing a projected grid as a wireframe into an image."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from wirefdf.image import Image

Point = tuple[int, int]


def bresenham(x0: int, y0: int, x1: int, y1: int) -> Iterator[Point]:
    """Yield the pixels of the line from (x0, y0) to (x1, y1), both ends included."""
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def grid_segments(points: Sequence[Sequence[Point]]) -> Iterator[tuple[Point, Point]]:
    """Yield each point joined to its right neighbour, then to the one below."""
    for y, row in enumerate(points):
        below = points[y + 1] if y + 1 < len(points) else None
        for x, start in enumerate(row):
            if x + 1 < len(row):
                yield start, row[x + 1]
            if below is not None:
                yield start, below[x]


def render(image: Image, points: Sequence[Sequence[Point]], color: int) -> None:
    """Draw every grid point and the lines between neighbours in ``color``."""
    for row in points:
        for x, y in row:
            image.put_pixel(x, y, color)
    for (x0, y0), (x1, y1) in grid_segments(points):
        for x, y in bresenham(x0, y0, x1, y1):
            image.put_pixel(x, y, color)