"""Windows on screen, drawn into and read for events through pygame."""

from __future__ import annotations

import itertools
from collections import deque
from collections.abc import Iterable

import pygame

from wirefdf.events import Event, EventHooks, EventLoop, EventType
from wirefdf.image import Image

_FONT_SIZE = 16

_SPECIAL_KEYS = {
    pygame.K_ESCAPE: 0xFF1B,
    pygame.K_RETURN: 0xFF0D,
    pygame.K_BACKSPACE: 0xFF08,
    pygame.K_TAB: 0xFF09,
    pygame.K_DELETE: 0xFFFF,
    pygame.K_HOME: 0xFF50,
    pygame.K_LEFT: 0xFF51,
    pygame.K_UP: 0xFF52,
    pygame.K_RIGHT: 0xFF53,
    pygame.K_DOWN: 0xFF54,
    pygame.K_PAGEUP: 0xFF55,
    pygame.K_PAGEDOWN: 0xFF56,
    pygame.K_END: 0xFF57,
    pygame.K_LSHIFT: 0xFFE1,
    pygame.K_RSHIFT: 0xFFE2,
    pygame.K_LCTRL: 0xFFE3,
    pygame.K_RCTRL: 0xFFE4,
    pygame.K_LALT: 0xFFE9,
    pygame.K_RALT: 0xFFEA,
}
_FUNCTION_KEYS = (
    pygame.K_F1, pygame.K_F2, pygame.K_F3, pygame.K_F4, pygame.K_F5, pygame.K_F6,
    pygame.K_F7, pygame.K_F8, pygame.K_F9, pygame.K_F10, pygame.K_F11, pygame.K_F12,
)
_SPECIAL_KEYS.update({key: 0xFFBE + number for number, key in enumerate(_FUNCTION_KEYS)})

_EXPOSE_TYPES = frozenset({pygame.VIDEOEXPOSE, getattr(pygame, "WINDOWEXPOSED", pygame.VIDEOEXPOSE)})


def _keysym(key: int) -> int:
    """Map a pygame key code to the matching X key symbol."""
    return _SPECIAL_KEYS.get(key, key)


def _rgb(color: int) -> pygame.Color:
    return pygame.Color((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)


class Window:
    """A fixed-size window: its canvas and the hooks for its events."""

    def __init__(self, window_id: int, width: int, height: int, title: str) -> None:
        self.id = window_id
        self.width = width
        self.height = height
        self.title = title
        self.canvas = pygame.Surface((width, height), 0, 32)
        self.canvas.fill((0, 0, 0))
        self.hooks = EventHooks()

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at (x, y) as 0xRRGGBB."""
        color = self.canvas.get_at((x, y))
        return (color.r << 16) | (color.g << 8) | color.b

    def __repr__(self) -> str:
        return f"Window(id={self.id}, {self.width}x{self.height}, title={self.title!r})"


class Display:
    """A connection to the screen holding a list of windows.

    The newest live window is the one shown and the one that receives
    input events.
    """

    def __init__(self) -> None:
        try:
            pygame.display.init()
        except pygame.error as exc:
            raise RuntimeError(f"cannot open display: {exc}") from exc
        self.windows: list[Window] = []
        self.event_loop = EventLoop()
        self._queue: deque[Event] = deque()
        self._ids = itertools.count(1)
        self._screen: pygame.Surface | None = None
        self._shown: Window | None = None
        self._font: pygame.font.Font | None = None
        self._open = True

    def __enter__(self) -> Display:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _require_open(self) -> None:
        if not self._open:
            raise RuntimeError("display is closed")

    def _require_window(self, window: Window) -> None:
        self._require_open()
        if window not in self.windows:
            raise ValueError(f"{window!r} does not belong to this display")

    def _show(self, window: Window) -> None:
        # Windows are never resizable: the size given at creation is kept.
        self._screen = pygame.display.set_mode((window.width, window.height))
        pygame.display.set_caption(window.title)
        self._shown = window
        self._present(window)

    def _present(self, window: Window) -> None:
        if window is self._shown and self._screen is not None:
            self._screen.blit(window.canvas, (0, 0))
            pygame.display.flip()

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a window of the given size and queue its first expose event."""
        self._require_open()
        if width <= 0 or height <= 0:
            raise ValueError(f"window size must be positive, got {width}x{height}")
        window = Window(next(self._ids), width, height, title)
        self.windows.insert(0, window)
        self.event_loop.add_window(window.id, window.hooks)
        self._show(window)
        self._queue.append(Event(EventType.EXPOSE, window.id))
        return window

    def destroy_window(self, window: Window) -> None:
        """Close ``window`` and forget its hooks."""
        self._require_window(window)
        self.windows.remove(window)
        self.event_loop.remove_window(window.id)
        self._queue = deque(event for event in self._queue if event.window != window.id)
        if window is self._shown:
            if self.windows:
                self._show(self.windows[0])
            else:
                self._shown = None

    def put_image(self, window: Window, image: Image, x: int, y: int) -> None:
        """Copy ``image`` into ``window`` with its top left corner at (x, y)."""
        self._require_window(window)
        surface = pygame.image.frombuffer(image.to_rgb(), (image.width, image.height), "RGB")
        window.canvas.blit(surface, (x, y))
        self._present(window)

    def pixel_put(self, window: Window, x: int, y: int, color: int) -> None:
        """Draw one pixel of ``color``; points outside the window are dropped."""
        self._require_window(window)
        if 0 <= x < window.width and 0 <= y < window.height:
            window.canvas.set_at((x, y), _rgb(color))
            self._present(window)

    def string_put(self, window: Window, x: int, y: int, color: int, text: str) -> None:
        """Draw ``text`` with its baseline starting at (x, y)."""
        self._require_window(window)
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, _FONT_SIZE)
        rendered = self._font.render(text, False, _rgb(color))
        window.canvas.blit(rendered, (x, y - self._font.get_ascent()))
        self._present(window)

    def clear_window(self, window: Window) -> None:
        """Fill ``window`` with black."""
        self._require_window(window)
        window.canvas.fill((0, 0, 0))
        self._present(window)

    def screen_size(self) -> tuple[int, int]:
        """Return the width and height of the screen."""
        self._require_open()
        sizes = pygame.display.get_desktop_sizes()
        if sizes:
            width, height = sizes[0]
        else:
            info = pygame.display.Info()
            width, height = info.current_w, info.current_h
        return int(width), int(height)

    def mouse_position(self, window: Window) -> tuple[int, int]:
        """Return the pointer position relative to ``window``."""
        self._require_window(window)
        x, y = pygame.mouse.get_pos()
        return int(x), int(y)

    def mouse_move(self, window: Window, x: int, y: int) -> None:
        """Move the pointer to (x, y) inside ``window``."""
        self._require_window(window)
        pygame.mouse.set_pos((x, y))

    def mouse_hide(self, window: Window) -> None:
        """Hide the pointer."""
        self._require_window(window)
        pygame.mouse.set_visible(False)

    def mouse_show(self, window: Window) -> None:
        """Show the pointer again."""
        self._require_window(window)
        pygame.mouse.set_visible(True)

    def flush_events(self) -> None:
        """Throw away every event waiting to be read."""
        self._require_open()
        pygame.event.get()
        self._queue.clear()

    def _translate(self, raw: pygame.event.Event) -> Event | None:
        target = self._shown.id if self._shown is not None else None
        kind = raw.type
        if kind == pygame.QUIT:
            return Event(EventType.CLIENT_MESSAGE, target, delete_request=True)
        if kind in (pygame.KEYDOWN, pygame.KEYUP):
            etype = EventType.KEY_PRESS if kind == pygame.KEYDOWN else EventType.KEY_RELEASE
            return Event(etype, target, key=_keysym(raw.key))
        if kind in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            etype = EventType.BUTTON_PRESS if kind == pygame.MOUSEBUTTONDOWN else EventType.BUTTON_RELEASE
            x, y = raw.pos
            return Event(etype, target, button=raw.button, x=x, y=y)
        if kind == pygame.MOUSEMOTION:
            x, y = raw.pos
            return Event(EventType.MOTION_NOTIFY, target, x=x, y=y)
        if kind in _EXPOSE_TYPES:
            return Event(EventType.EXPOSE, target)
        return None

    def _take(self, raws: Iterable[pygame.event.Event]) -> None:
        for raw in raws:
            event = self._translate(raw)
            if event is not None:
                self._queue.append(event)

    def pending(self) -> bool:
        """Return whether an event can be read without waiting."""
        if not self._open:
            return False
        if not self._queue:
            self._take(pygame.event.get())
        return bool(self._queue)

    def next_event(self) -> Event | None:
        """Return the next event, waiting for one; ``None`` once closed."""
        if not self._open:
            return None
        while not self._queue:
            self._take([pygame.event.wait()])
        return self._queue.popleft()

    def loop(self, event_loop: EventLoop | None = None) -> None:
        """Run ``event_loop`` (the display's own by default) on this display."""
        self._require_open()
        (event_loop or self.event_loop).run(self)

    def close(self) -> None:
        """Close every window and the connection to the screen."""
        if not self._open:
            return
        for window in self.windows:
            self.event_loop.remove_window(window.id)
        self.windows.clear()
        self._queue.clear()
        self._shown = None
        self._screen = None
        self._font = None
        pygame.display.quit()
        self._open = False