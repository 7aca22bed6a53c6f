import math

import pytest

from wirefdf.mapfile import parse_map_lines
from wirefdf.projection import View, deg_to_rad, project_grid, project_point


def test_deg_to_rad():
    assert deg_to_rad(180) == pytest.approx(math.pi)
    assert deg_to_rad(0) == 0


def test_view_defaults():
    view = View()
    assert view.zoom == 10.0
    assert view.z_scale == pytest.approx(0.1)
    assert (view.x_angle, view.y_angle) == (30.0, 30.0)
    assert (view.x_offset, view.y_offset) == (0, 0)


def test_reset_restores_defaults():
    view = View()
    view.move(20, -20)
    view.rotate(-5)
    view.change_z_scale(0.1)
    view.zoom_in()
    view.reset()
    assert view == View()


def test_zoom_out_stops_at_one():
    view = View(zoom=1.0)
    assert view.zoom_out() is False
    assert view.zoom == 1.0
    view.zoom_in()
    assert view.zoom_out() is True
    assert view.zoom == 1.0


def test_project_origin():
    assert project_point(View(), 0, 0, 0) == pytest.approx((0.0, 0.0))


def test_projection_symmetry():
    view = View()
    a = project_point(view, 2, 5, 0)
    b = project_point(view, 5, 2, 0)
    assert a[0] == pytest.approx(-b[0])
    assert a[1] == pytest.approx(b[1])


def test_scaled_altitude_is_truncated():
    view = View()
    flat = project_point(view, 2, 3, 0)
    assert project_point(view, 2, 3, 9)[1] == pytest.approx(flat[1])
    raised = project_point(view, 2, 3, 10)
    assert flat[1] - raised[1] == pytest.approx(view.zoom)
    assert raised[0] == pytest.approx(flat[0])


def test_single_point_lands_in_window_centre():
    hmap = parse_map_lines(["0\n"])
    assert project_grid(View(), hmap, 800, 600) == [[(400, 300)]]


def test_grid_is_centred():
    hmap = parse_map_lines(["0 0 0\n", "0 0 0\n", "0 0 0\n"])
    points = [p for row in project_grid(View(), hmap, 800, 600) for p in row]
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    assert abs((min(xs) + max(xs)) / 2 - 400) <= 1
    assert abs((min(ys) + max(ys)) / 2 - 300) <= 1


def test_move_shifts_every_point():
    hmap = parse_map_lines(["0 3 0\n", "1 0 2\n"])
    base = project_grid(View(), hmap, 800, 600)
    view = View()
    view.move(20, -20)
    moved = project_grid(view, hmap, 800, 600)
    for row_a, row_b in zip(base, moved):
        for (ax, ay), (bx, by) in zip(row_a, row_b):
            assert (bx - ax, by - ay) == (20, -20)