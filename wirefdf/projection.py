"""Isometric projection of a height map and the view settings behind it."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass

from wirefdf.mapfile import HeightMap

_FLT_MAX = 3.4028234663852886e38
_FLT_MIN = 1.1754943508222875e-38

_DEFAULT_ZOOM = 10.0
_DEFAULT_Z_SCALE = 0.1
_DEFAULT_ANGLE = 30.0

assert _FLT_MAX < sys.float_info.max


def deg_to_rad(deg: float) -> float:
    """Convert degrees to radians."""
    return deg * (math.pi / 180)


def _c_round(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class View:
    """Zoom, altitude scale, panning and angles of the projection."""

    zoom: float = _DEFAULT_ZOOM
    z_scale: float = _DEFAULT_Z_SCALE
    x_offset: int = 0
    y_offset: int = 0
    x_angle: float = _DEFAULT_ANGLE
    y_angle: float = _DEFAULT_ANGLE

    def reset(self) -> None:
        """Restore every setting to its default."""
        self.zoom = _DEFAULT_ZOOM
        self.z_scale = _DEFAULT_Z_SCALE
        self.x_offset = 0
        self.y_offset = 0
        self.x_angle = _DEFAULT_ANGLE
        self.y_angle = _DEFAULT_ANGLE

    def move(self, dx: int, dy: int) -> None:
        """Pan the picture by (dx, dy) pixels."""
        self.x_offset += dx
        self.y_offset += dy

    def rotate(self, step: float) -> None:
        """Tilt the picture by ``step`` degrees."""
        self.y_angle += step

    def change_z_scale(self, step: float) -> None:
        """Change the altitude scale by ``step``."""
        self.z_scale += step

    def zoom_in(self) -> None:
        """Increase the zoom by one."""
        self.zoom += 1.0

    def zoom_out(self) -> bool:
        """Decrease the zoom by one unless it is already at most one.

        Returns whether the zoom changed.
        """
        if self.zoom <= 1.0:
            return False
        self.zoom -= 1.0
        return True


def project_point(view: View, x: int, y: int, z: int) -> tuple[float, float]:
    """Project grid point (x, y) at altitude ``z`` before centring.

    The scaled altitude is truncated to a whole number before use.
    """
    scaled_z = math.trunc(z * view.z_scale)
    x_proj = (x - y) * math.cos(deg_to_rad(view.x_angle))
    y_proj = (x + y) * math.sin(deg_to_rad(view.y_angle)) - scaled_z
    return x_proj * view.zoom, y_proj * view.zoom


def project_grid(
    view: View, heightmap: HeightMap, width: int, height: int
) -> list[list[tuple[int, int]]]:
    """Project every point and centre the result in a width x height window.

    Returns integer screen coordinates, one row per map row.
    """
    projected = [
        [project_point(view, x, y, z) for x, z in enumerate(row)]
        for y, row in enumerate(heightmap.heights)
    ]
    flat = [point for row in projected for point in row]
    min_x = min([_FLT_MAX, *(px for px, _ in flat)])
    max_x = max([_FLT_MIN, *(px for px, _ in flat)])
    min_y = min([_FLT_MAX, *(py for _, py in flat)])
    max_y = max([_FLT_MIN, *(py for _, py in flat)])
    mid_x = min_x + (max_x - min_x) / 2.0
    mid_y = min_y + (max_y - min_y) / 2.0
    x_shift = width / 2.0 - mid_x + view.x_offset
    y_shift = height / 2.0 - mid_y + view.y_offset
    return [
        [(_c_round(px + x_shift), _c_round(py + y_shift)) for px, py in row]
        for row in projected
    ]