from collections import deque

import pytest

from wirefdf.events import (
    BUTTON_PRESS_MASK,
    EXPOSURE_MASK,
    KEY_RELEASE_MASK,
    POINTER_MOTION_MASK,
    Event,
    EventHooks,
    EventLoop,
    EventType,
)


class ListSource:
    def __init__(self, events):
        self.queue = deque(events)

    def pending(self):
        return bool(self.queue)

    def next_event(self):
        return self.queue.popleft() if self.queue else None


def test_key_hook_receives_key_on_release():
    hooks = EventHooks()
    seen = []
    hooks.key_hook(seen.append)
    assert hooks.dispatch(Event(EventType.KEY_RELEASE, key=0xFF1B)) is True
    assert seen == [0xFF1B]


def test_key_press_without_hook_is_not_handled():
    hooks = EventHooks()
    seen = []
    hooks.key_hook(seen.append)
    assert hooks.dispatch(Event(EventType.KEY_PRESS, key=65)) is False
    assert seen == []


def test_mouse_hook_gets_button_and_position():
    hooks = EventHooks()
    seen = []
    hooks.mouse_hook(lambda b, x, y: seen.append((b, x, y)))
    hooks.dispatch(Event(EventType.BUTTON_PRESS, button=4, x=10, y=20))
    assert seen == [(4, 10, 20)]


def test_motion_hook_gets_position():
    hooks = EventHooks()
    seen = []
    hooks.set_hook(EventType.MOTION_NOTIFY, lambda x, y: seen.append((x, y)), POINTER_MOTION_MASK)
    hooks.dispatch(Event(EventType.MOTION_NOTIFY, x=3, y=7))
    assert seen == [(3, 7)]


def test_expose_only_on_last_of_series():
    hooks = EventHooks()
    calls = []
    hooks.expose_hook(lambda: calls.append("expose"))
    assert hooks.dispatch(Event(EventType.EXPOSE, count=2)) is False
    assert hooks.dispatch(Event(EventType.EXPOSE, count=0)) is True
    assert calls == ["expose"]


def test_generic_hook_called_without_arguments():
    hooks = EventHooks()
    calls = []
    hooks.set_hook(EventType.FOCUS_IN, lambda: calls.append(1))
    hooks.dispatch(Event(EventType.FOCUS_IN))
    assert calls == [1]


def test_delete_request_calls_destroy_hook():
    hooks = EventHooks()
    calls = []
    hooks.set_hook(EventType.DESTROY_NOTIFY, lambda: calls.append("close"), 0)
    handled = hooks.dispatch(Event(EventType.CLIENT_MESSAGE, delete_request=True))
    assert handled is True
    assert calls == ["close"]


def test_event_mask_unions_hook_masks():
    hooks = EventHooks()
    hooks.key_hook(print)
    hooks.mouse_hook(print)
    hooks.expose_hook(print)
    assert hooks.event_mask() == KEY_RELEASE_MASK | BUTTON_PRESS_MASK | EXPOSURE_MASK


def test_removing_hook_drops_its_mask():
    hooks = EventHooks()
    hooks.key_hook(print)
    hooks.key_hook(None)
    assert hooks.event_mask() == 0


@pytest.mark.parametrize("bad", [-1, 36, 100])
def test_set_hook_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        EventHooks().set_hook(bad, print)


def test_run_delivers_to_matching_window_only():
    loop = EventLoop()
    first, second = EventHooks(), EventHooks()
    got_first, got_second = [], []
    first.key_hook(got_first.append)
    second.key_hook(got_second.append)
    loop.add_window("a", first)
    loop.add_window("b", second)
    loop.run(ListSource([
        Event(EventType.KEY_RELEASE, window="a", key=1),
        Event(EventType.KEY_RELEASE, window="b", key=2),
        Event(EventType.KEY_RELEASE, window="zzz", key=3),
    ]))
    assert got_first == [1]
    assert got_second == [2]


def test_new_window_from_mouse_hook():
    loop = EventLoop()
    log = []
    state = {"current": "win1"}

    def gere_mouse(button, x, y):
        log.append((state["current"], button))
        loop.remove_window(state["current"])
        new_id = "win3" if state["current"] == "win1" else "win4"
        hooks = EventHooks()
        hooks.mouse_hook(gere_mouse)
        loop.add_window(new_id, hooks)
        state["current"] = new_id

    hooks1 = EventHooks()
    hooks1.mouse_hook(gere_mouse)
    loop.add_window("win1", hooks1)
    loop.add_window("win2", EventHooks())
    loop.run(ListSource([
        Event(EventType.BUTTON_PRESS, window="win1", button=1),
        Event(EventType.BUTTON_PRESS, window="win1", button=2),
        Event(EventType.BUTTON_PRESS, window="win3", button=3),
    ]))
    assert log == [("win1", 1), ("win3", 3)]
    assert set(loop.windows) == {"win2", "win4"}


def test_end_from_hook_stops_loop():
    loop = EventLoop()
    hooks = EventHooks()
    seen = []

    def on_key(key):
        seen.append(key)
        loop.end()

    hooks.key_hook(on_key)
    loop.add_window(1, hooks)
    loop.run(ListSource([
        Event(EventType.KEY_RELEASE, window=1, key=5),
        Event(EventType.KEY_RELEASE, window=1, key=6),
    ]))
    assert seen == [5]
    assert loop.ended is True


def test_loop_hook_runs_when_idle():
    loop = EventLoop()
    loop.add_window(1, EventHooks())
    ticks = []

    def tick():
        ticks.append(len(ticks))
        if len(ticks) == 3:
            loop.end()

    loop.set_loop_hook(tick)
    loop.run(ListSource([]))
    assert ticks == [0, 1, 2]
    assert loop.ended is True
    assert loop.windows == [1]


def test_loop_stops_when_last_window_removed():
    loop = EventLoop()
    hooks = EventHooks()
    hooks.key_hook(lambda key: loop.remove_window(1))
    loop.add_window(1, hooks)
    source = ListSource([
        Event(EventType.KEY_RELEASE, window=1, key=1),
        Event(EventType.KEY_RELEASE, window=1, key=2),
    ])
    loop.run(source)
    assert loop.windows == []
    assert len(source.queue) == 1


def test_run_without_windows_returns_immediately():
    loop = EventLoop()
    source = ListSource([Event(EventType.KEY_RELEASE, window=1)])
    loop.run(source)
    assert len(source.queue) == 1