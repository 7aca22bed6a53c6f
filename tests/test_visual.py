import pytest

from wirefdf.visual import channel_shifts, convert_color

RGB888 = (0xFF0000, 0x00FF00, 0x0000FF)
RGB565 = (0xF800, 0x07E0, 0x001F)


def color_map(x, y, w, h):
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


def test_shifts_for_24_bit_visual():
    assert channel_shifts(*RGB888) == (16, 8, 8, 8, 0, 8)


def test_shifts_for_565_visual():
    shifts = channel_shifts(*RGB565)
    assert shifts.red_shift == 11
    assert shifts.red_bits == 5
    assert shifts.green_shift == 5
    assert shifts.green_bits == 6
    assert shifts.blue_shift == 0
    assert shifts.blue_bits == 5


def test_zero_mask_is_rejected():
    with pytest.raises(ValueError):
        channel_shifts(0, 0xFF00, 0xFF)


@pytest.mark.parametrize("x,y", [(0, 0), (41, 0), (20, 20), (241, 241), (100, 7)])
def test_deep_visual_keeps_color(x, y):
    shifts = channel_shifts(*RGB888)
    color = color_map(x, y, 242, 242)
    assert convert_color(color, 24, shifts) == color
    assert convert_color(color, 32, shifts) == color


def test_white_fills_every_channel_on_16_bit_visual():
    shifts = channel_shifts(*RGB565)
    assert convert_color(0xFFFFFF, 16, shifts) == RGB565[0] | RGB565[1] | RGB565[2]


def test_black_is_zero_on_16_bit_visual():
    assert convert_color(0, 16, channel_shifts(*RGB565)) == 0


@pytest.mark.parametrize("color,mask", [(0xFF0000, 0xF800), (0x00FF00, 0x07E0), (0x0000FF, 0x001F)])
def test_primary_colors_map_to_their_mask(color, mask):
    assert convert_color(color, 16, channel_shifts(*RGB565)) == mask