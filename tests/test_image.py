import pytest

from wirefdf.image import Image

IM1 = (42, 42)
IM3 = (242, 242)


def color_map(x, y, w, h, kind):
    if kind == 2:
        return (y * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)
    return (x * 255) // w + ((((w - x) * 255) // w) << 16) + (((y * 255) // h) << 8)


def fill(image, kind):
    for y in range(image.height):
        for x in range(image.width):
            image.put_pixel(x, y, color_map(x, y, image.width, image.height, kind))


def test_new_image_layout():
    image = Image(*IM1)
    assert image.bits_per_pixel == 32
    assert image.size_line == 42 * 4
    assert image.endian == 0
    assert len(image.data) == image.size_line * 42
    assert not any(image.data)


@pytest.mark.parametrize("size,kind", [(IM1, 1), (IM3, 1), (IM3, 2)])
def test_color_map_round_trip(size, kind):
    image = Image(*size)
    fill(image, kind)
    w, h = size
    for x, y in [(0, 0), (w - 1, 0), (0, h - 1), (w - 1, h - 1), (w // 2, h // 3)]:
        assert image.get_pixel(x, y) == color_map(x, y, w, h, kind)


@pytest.mark.parametrize("big_endian,order", [(False, "little"), (True, "big")])
def test_byte_order_matches_endian(big_endian, order):
    image = Image(*IM1, 32, big_endian)
    color = color_map(20, 10, 42, 42, 1)
    image.put_pixel(20, 10, color)
    start = 10 * image.size_line + 20 * 4
    assert bytes(image.data[start:start + 4]) == color.to_bytes(4, order)
    assert image.endian == int(big_endian)


def test_rows_are_padded_to_32_bits():
    image = Image(3, 2, 8)
    assert image.size_line % 4 == 0
    assert image.size_line >= 3


@pytest.mark.parametrize("bpp", [8, 16, 24, 32])
def test_values_are_truncated_to_pixel_size(bpp):
    image = Image(4, 4, bpp)
    image.put_pixel(1, 2, 0x7FFFFFFF)
    assert image.get_pixel(1, 2) == (1 << bpp) - 1
    assert image.get_pixel(2, 1) == 0


def test_outside_points_are_ignored():
    image = Image(5, 5)
    for x, y in [(-1, 0), (0, -1), (5, 0), (0, 5)]:
        image.put_pixel(x, y, 0xFFFFFF)
    assert bytes(image.data) == bytes(image.size_line * 5)
    corners = [image.get_pixel(x, y) for x, y in [(0, 0), (4, 0), (0, 4), (4, 4)]]
    assert corners == [0, 0, 0, 0]


def test_get_pixel_outside_raises():
    with pytest.raises(IndexError):
        Image(5, 5).get_pixel(5, 0)


def test_clear_zeroes_everything():
    image = Image(*IM1)
    fill(image, 1)
    image.clear()
    assert not any(image.data)
    assert len(image.data) == image.size_line * image.height


@pytest.mark.parametrize("args", [(0, 5), (5, 0), (-3, 4), (4, 4, 12), (4, 4, 0)])
def test_invalid_images_are_rejected(args):
    with pytest.raises(ValueError):
        Image(*args)


@pytest.mark.parametrize("big_endian", [False, True])
def test_to_rgb_32_bit(big_endian):
    image = Image(3, 2, 32, big_endian)
    image.put_pixel(0, 0, 0x112233)
    image.put_pixel(2, 1, 0xFFFFFF)
    rgb = image.to_rgb()
    assert len(rgb) == 3 * 2 * 3
    assert rgb[:3] == bytes([0x11, 0x22, 0x33])
    assert rgb[-3:] == bytes([0xFF, 0xFF, 0xFF])
    assert rgb[3:15] == bytes(12)


def test_to_rgb_24_bit_matches_32_bit():
    deep = Image(7, 3, 32)
    packed = Image(7, 3, 24)
    fill(deep, 1)
    fill(packed, 1)
    assert packed.to_rgb() == deep.to_rgb()