"""The wireframe viewer: loads a map, draws it and reacts to input."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from enum import IntEnum

from wirefdf.display import Display
from wirefdf.events import EventType
from wirefdf.image import Image
from wirefdf.mapfile import HeightMap, MapError, parse_map
from wirefdf.projection import View, project_grid
from wirefdf.raster import Point, render

WIN_WIDTH = 1280
WIN_HEIGHT = 720
WINDOW_TITLE = "FdF-Wireframe"
DEFAULT_COLOR = 0xFFFFFF

MOVE_STEP = 20
ROTATE_STEP = 5.0
Z_SCALE_STEP = 0.1

SCROLL_UP = 4
SCROLL_DOWN = 5

FILETYPE_ERROR = "is_fdf_file: Invalid file type."


class Key(IntEnum):
    """Key symbols the viewer reacts to."""

    ESCAPE = 0xFF1B
    RESET = 0x20
    W = 0x77
    A = 0x61
    S = 0x73
    D = 0x64
    Q = 0x71
    E = 0x65
    R = 0x72
    F = 0x66
    LEFT = 0xFF51
    UP = 0xFF52
    RIGHT = 0xFF53
    DOWN = 0xFF54


_MOVES = {
    Key.W: (0, -MOVE_STEP),
    Key.UP: (0, -MOVE_STEP),
    Key.S: (0, MOVE_STEP),
    Key.DOWN: (0, MOVE_STEP),
    Key.A: (-MOVE_STEP, 0),
    Key.LEFT: (-MOVE_STEP, 0),
    Key.D: (MOVE_STEP, 0),
    Key.RIGHT: (MOVE_STEP, 0),
}

_ROTATIONS = {Key.R: -ROTATE_STEP, Key.F: ROTATE_STEP}
_Z_STEPS = {Key.Q: Z_SCALE_STEP, Key.E: -Z_SCALE_STEP}


def is_fdf_file(name: str) -> bool:
    """Return whether ``name`` ends in ``.fdf``."""
    return len(name) >= 4 and name.endswith(".fdf")


class FdfApp:
    """A height map shown as an isometric wireframe in one window."""

    def __init__(self, path: str | os.PathLike[str], display: Display | None = None) -> None:
        self.path = path
        self.heightmap: HeightMap = parse_map(path)
        self._owns_display = display is None
        self.display = Display() if display is None else display
        self.window = self.display.new_window(WIN_WIDTH, WIN_HEIGHT, WINDOW_TITLE)
        self.image = Image(WIN_WIDTH, WIN_HEIGHT)
        self.color = DEFAULT_COLOR
        self.view = View()
        self.closed = False
        hooks = self.window.hooks
        hooks.key_hook(self.handle_key)
        hooks.mouse_hook(self.handle_mouse)
        hooks.set_hook(EventType.DESTROY_NOTIFY, self.close, 0)

    def __enter__(self) -> FdfApp:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def render(self) -> list[list[Point]]:
        """Draw the map into the image and return the projected points."""
        points = project_grid(self.view, self.heightmap, WIN_WIDTH, WIN_HEIGHT)
        render(self.image, points, self.color)
        return points

    def refresh(self) -> None:
        """Redraw the map from scratch and show it in the window."""
        if self.closed:
            return
        self.image.clear()
        self.render()
        self.display.put_image(self.window, self.image, 0, 0)

    def handle_key(self, key: int) -> None:
        """React to a released key."""
        if key == Key.ESCAPE:
            self.close()
            return
        if key == Key.RESET:
            self.view.reset()
            self.refresh()
        if key in _Z_STEPS:
            self.view.change_z_scale(_Z_STEPS[key])
            self.refresh()
        if key in _MOVES:
            self.view.move(*_MOVES[key])
            self.refresh()
        if key in _ROTATIONS:
            self.view.rotate(_ROTATIONS[key])
            self.refresh()

    def handle_mouse(self, button: int, x: int, y: int) -> None:
        """Zoom with the scroll wheel; the pointer position is not used."""
        if button == SCROLL_UP:
            self.view.zoom_in()
            self.refresh()
        if button == SCROLL_DOWN and self.view.zoom_out():
            self.refresh()

    def close(self) -> None:
        """Stop the event loop and release the window."""
        if self.closed:
            return
        self.closed = True
        self.display.event_loop.end()
        if self._owns_display:
            self.display.close()
        elif self.window in self.display.windows:
            self.display.destroy_window(self.window)

    def run(self) -> None:
        """Show the map and handle events until the viewer is closed."""
        self.render()
        self.display.put_image(self.window, self.image, 0, 0)
        self.display.loop()
        self.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the viewer on the map file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1 or not args[0]:
        return 1
    path = args[0]
    if not is_fdf_file(path):
        print(FILETYPE_ERROR, file=sys.stderr)
        return 1
    try:
        app = FdfApp(path)
    except MapError as exc:
        print(exc, file=sys.stderr)
        return 1
    except RuntimeError as exc:
        print(f"mlx_init: {exc}", file=sys.stderr)
        return 1
    app.run()
    return 0