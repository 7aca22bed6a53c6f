import pygame
import pytest

from wirefdf.display import Display
from wirefdf.events import EventType
from wirefdf.image import Image


@pytest.fixture
def display(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    screen = Display()
    yield screen
    screen.close()


def collect(display):
    events = []
    while display.pending():
        events.append(display.next_event())
    return events


def limited_loop(display, ticks=20):
    count = []

    def tick():
        count.append(1)
        if len(count) >= ticks:
            display.event_loop.end()

    display.event_loop.set_loop_hook(tick)
    display.loop()


def test_new_windows_are_listed_newest_first(display):
    first = display.new_window(242, 242, "Title1")
    second = display.new_window(100, 50, "Title2")
    assert display.windows == [second, first]
    assert (second.width, second.height, second.title) == (100, 50, "Title2")
    assert first.id != second.id


def test_new_window_rejects_bad_size(display):
    with pytest.raises(ValueError):
        display.new_window(0, 10, "bad")


def test_first_event_is_expose_for_new_window(display):
    window = display.new_window(40, 30, "expose")
    event = display.next_event()
    assert event.type == EventType.EXPOSE
    assert event.window == window.id


def test_pixel_put_and_clipping(display):
    window = display.new_window(20, 20, "pixels")
    display.pixel_put(window, 5, 6, 0xFF99FF)
    display.pixel_put(window, -1, 0, 0xFFFFFF)
    display.pixel_put(window, 20, 20, 0xFFFFFF)
    assert window.pixel(5, 6) == 0xFF99FF
    assert window.pixel(0, 0) == 0
    assert window.pixel(19, 19) == 0


def test_clear_window_blanks_canvas(display):
    window = display.new_window(10, 10, "clear")
    display.pixel_put(window, 3, 3, 0x00FFFF)
    display.clear_window(window)
    assert window.pixel(3, 3) == 0


def test_put_image_copies_pixels_at_offset(display):
    window = display.new_window(50, 50, "image")
    image = Image(42, 42)
    image.put_pixel(1, 1, 0x123456)
    display.put_image(window, image, 20, 20)
    assert window.pixel(21, 21) == 0x123456
    assert window.pixel(20, 20) == 0
    assert window.pixel(1, 1) == 0


def test_string_put_draws_text(display):
    window = display.new_window(200, 60, "text")
    display.string_put(window, 5, 30, 0x00FFFF, "MinilibX test")
    drawn = {window.pixel(x, y) for x in range(200) for y in range(60)}
    assert 0x00FFFF in drawn


def test_escape_release_becomes_x_keysym(display):
    window = display.new_window(30, 30, "keys")
    display.flush_events()
    pygame.event.post(pygame.event.Event(pygame.KEYUP, key=pygame.K_ESCAPE, mod=0))
    releases = [e for e in collect(display) if e.type == EventType.KEY_RELEASE]
    assert [(e.key, e.window) for e in releases] == [(0xFF1B, window.id)]


def test_letter_key_keeps_its_code(display):
    display.new_window(30, 30, "keys")
    display.flush_events()
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a, mod=0))
    presses = [e for e in collect(display) if e.type == EventType.KEY_PRESS]
    assert [e.key for e in presses] == [ord("a")]


def test_mouse_button_event(display):
    display.new_window(30, 30, "mouse")
    display.flush_events()
    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=4, pos=(7, 9)))
    presses = [e for e in collect(display) if e.type == EventType.BUTTON_PRESS]
    assert [(e.button, e.x, e.y) for e in presses] == [(4, 7, 9)]


def test_loop_calls_key_hook(display):
    window = display.new_window(30, 30, "loop")
    seen = []
    window.hooks.key_hook(seen.append)
    display.flush_events()
    pygame.event.post(pygame.event.Event(pygame.KEYUP, key=pygame.K_ESCAPE, mod=0))
    limited_loop(display)
    assert seen == [0xFF1B]


def test_quit_request_calls_destroy_hook(display):
    window = display.new_window(30, 30, "quit")
    closed = []
    window.hooks.set_hook(EventType.DESTROY_NOTIFY, lambda: closed.append(window.id), 0)
    display.flush_events()
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    limited_loop(display)
    assert closed == [window.id]


def test_destroy_window_twice_raises(display):
    first = display.new_window(30, 30, "one")
    second = display.new_window(30, 30, "two")
    display.destroy_window(second)
    assert display.windows == [first]
    assert display.event_loop.windows == [first.id]
    with pytest.raises(ValueError):
        display.destroy_window(second)


def test_flush_events_drops_queued_expose(display):
    display.new_window(30, 30, "flush")
    display.flush_events()
    exposes = [e for e in collect(display) if e.type == EventType.EXPOSE]
    assert exposes == []
    assert display.pending() is False


def test_screen_size_is_positive(display):
    width, height = display.screen_size()
    assert width > 0 and height > 0


def test_closed_display_refuses_work(display):
    display.new_window(30, 30, "closing")
    display.close()
    assert display.windows == []
    assert display.next_event() is None
    with pytest.raises(RuntimeError):
        display.new_window(10, 10, "late")