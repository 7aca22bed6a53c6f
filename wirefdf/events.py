"""Event hooks per window and the loop that feeds events to them."""

from __future__ import annotations

import operator
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import IntEnum
from functools import reduce
from typing import NamedTuple, Protocol

NO_EVENT_MASK = 0
KEY_PRESS_MASK = 1 << 0
KEY_RELEASE_MASK = 1 << 1
BUTTON_PRESS_MASK = 1 << 2
BUTTON_RELEASE_MASK = 1 << 3
POINTER_MOTION_MASK = 1 << 6
EXPOSURE_MASK = 1 << 15
STRUCTURE_NOTIFY_MASK = 1 << 17

LAST_EVENT = 36

Callback = Callable[..., object]


class EventType(IntEnum):
    """Event type numbers as used by the X protocol."""

    KEY_PRESS = 2
    KEY_RELEASE = 3
    BUTTON_PRESS = 4
    BUTTON_RELEASE = 5
    MOTION_NOTIFY = 6
    ENTER_NOTIFY = 7
    LEAVE_NOTIFY = 8
    FOCUS_IN = 9
    FOCUS_OUT = 10
    KEYMAP_NOTIFY = 11
    EXPOSE = 12
    GRAPHICS_EXPOSE = 13
    NO_EXPOSE = 14
    VISIBILITY_NOTIFY = 15
    CREATE_NOTIFY = 16
    DESTROY_NOTIFY = 17
    UNMAP_NOTIFY = 18
    MAP_NOTIFY = 19
    MAP_REQUEST = 20
    REPARENT_NOTIFY = 21
    CONFIGURE_NOTIFY = 22
    CONFIGURE_REQUEST = 23
    GRAVITY_NOTIFY = 24
    RESIZE_REQUEST = 25
    CIRCULATE_NOTIFY = 26
    CIRCULATE_REQUEST = 27
    PROPERTY_NOTIFY = 28
    SELECTION_CLEAR = 29
    SELECTION_REQUEST = 30
    SELECTION_NOTIFY = 31
    COLORMAP_NOTIFY = 32
    CLIENT_MESSAGE = 33
    MAPPING_NOTIFY = 34
    GENERIC_EVENT = 35


@dataclass(frozen=True)
class Event:
    """One input or window event addressed to a window.

    ``delete_request`` marks a request from the window manager to close
    the window.
    """

    type: int
    window: Hashable | None = None
    key: int = 0
    button: int = 0
    x: int = 0
    y: int = 0
    count: int = 0
    delete_request: bool = False


class _Hook(NamedTuple):
    callback: Callback
    mask: int


class EventHooks:
    """The callbacks registered for one window, one per event type.

    Callbacks get the event's details as arguments: keys get the key
    symbol, button events get (button, x, y), motion gets (x, y), and
    every other event type gets no arguments.
    """

    def __init__(self) -> None:
        self._hooks: dict[int, _Hook] = {}

    def set_hook(self, event: int, callback: Callback | None, mask: int = NO_EVENT_MASK) -> None:
        """Register ``callback`` for ``event``; ``None`` removes the hook."""
        etype = int(event)
        if not 0 <= etype < LAST_EVENT:
            raise ValueError(f"event type out of range: {etype}")
        if callback is None:
            self._hooks.pop(etype, None)
        else:
            self._hooks[etype] = _Hook(callback, mask)

    def key_hook(self, callback: Callback | None) -> None:
        """Call ``callback(key)`` when a key is released."""
        self.set_hook(EventType.KEY_RELEASE, callback, KEY_RELEASE_MASK)

    def mouse_hook(self, callback: Callback | None) -> None:
        """Call ``callback(button, x, y)`` when a mouse button is pressed."""
        self.set_hook(EventType.BUTTON_PRESS, callback, BUTTON_PRESS_MASK)

    def expose_hook(self, callback: Callback | None) -> None:
        """Call ``callback()`` when the window needs redrawing."""
        self.set_hook(EventType.EXPOSE, callback, EXPOSURE_MASK)

    def event_mask(self) -> int:
        """Return the union of the masks of every registered hook."""
        return reduce(operator.or_, (hook.mask for hook in self._hooks.values()), 0)

    def dispatch(self, event: Event) -> bool:
        """Hand ``event`` to its hook; return whether a hook was called."""
        handled = False
        if event.delete_request:
            closer = self._hooks.get(EventType.DESTROY_NOTIFY)
            if closer is not None:
                closer.callback()
                handled = True
        etype = int(event.type)
        if etype < EventType.KEY_PRESS or etype >= LAST_EVENT:
            return handled
        hook = self._hooks.get(etype)
        if hook is None:
            return handled
        if etype in (EventType.KEY_PRESS, EventType.KEY_RELEASE):
            hook.callback(event.key)
        elif etype in (EventType.BUTTON_PRESS, EventType.BUTTON_RELEASE):
            hook.callback(event.button, event.x, event.y)
        elif etype == EventType.MOTION_NOTIFY:
            hook.callback(event.x, event.y)
        elif etype == EventType.EXPOSE:
            if event.count:
                return handled
            hook.callback()
        else:
            hook.callback()
        return True


class EventSource(Protocol):
    """Where the loop takes its events from."""

    def pending(self) -> bool:
        """Return whether an event can be read without waiting."""

    def next_event(self) -> Event | None:
        """Return the next event, waiting for one; ``None`` when closed."""


class EventLoop:
    """Reads events and hands them to the hooks of the window they are for."""

    def __init__(self) -> None:
        self._windows: dict[Hashable, EventHooks] = {}
        self._loop_hook: Callable[[], object] | None = None
        self._ended = False

    @property
    def windows(self) -> list[Hashable]:
        """Identifiers of the registered windows."""
        return list(self._windows)

    @property
    def ended(self) -> bool:
        """Whether :meth:`end` has been called."""
        return self._ended

    def add_window(self, window_id: Hashable, hooks: EventHooks) -> None:
        """Register the hooks that receive events for ``window_id``."""
        self._windows[window_id] = hooks

    def remove_window(self, window_id: Hashable) -> None:
        """Stop delivering events to ``window_id``; unknown ids are ignored."""
        self._windows.pop(window_id, None)

    def set_loop_hook(self, callback: Callable[[], object] | None) -> None:
        """Call ``callback()`` whenever no event is waiting."""
        self._loop_hook = callback

    def end(self) -> None:
        """Make :meth:`run` return; the loop stays ended afterwards."""
        self._ended = True

    def run(self, source: EventSource) -> None:
        """Deliver events until ended, no window is left or the source closes.

        Without a loop hook the loop waits for each event; with one, it
        reads what is pending and then calls the hook.
        """
        while self._windows and not self._ended:
            while (
                self._windows
                and not self._ended
                and (self._loop_hook is None or source.pending())
            ):
                event = source.next_event()
                if event is None:
                    return
                hooks = self._windows.get(event.window)
                if hooks is not None:
                    hooks.dispatch(event)
            if self._loop_hook is not None and not self._ended:
                self._loop_hook()