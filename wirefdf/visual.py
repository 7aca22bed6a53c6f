"""Conversion of 0xRRGGBB colours to pixel values for a TrueColor visual."""

from __future__ import annotations

from typing import NamedTuple


class ChannelShifts(NamedTuple):
    """Position and width in bits of each colour channel inside a pixel."""

    red_shift: int
    red_bits: int
    green_shift: int
    green_bits: int
    blue_shift: int
    blue_bits: int


def _split_mask(mask: int) -> tuple[int, int]:
    """Return (shift, width) of the contiguous run of ones in ``mask``."""
    if mask <= 0:
        raise ValueError(f"channel mask must be a positive bit mask, got {mask!r}")
    shift = (mask & -mask).bit_length() - 1
    mask >>= shift
    width = 0
    while mask & 1:
        mask >>= 1
        width += 1
    return shift, width


def channel_shifts(red_mask: int, green_mask: int, blue_mask: int) -> ChannelShifts:
    """Work out the channel layout from the visual's red, green and blue masks."""
    red = _split_mask(red_mask)
    green = _split_mask(green_mask)
    blue = _split_mask(blue_mask)
    return ChannelShifts(*red, *green, *blue)


def convert_color(color: int, depth: int, shifts: tuple[int, ...]) -> int:
    """Turn a 0xRRGGBB colour into a pixel value for a visual of ``depth`` bits.

    Visuals of 24 bits or more take the colour unchanged; shallower ones
    get each channel scaled down and placed according to ``shifts``.
    """
    if depth >= 24:
        return color
    red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits = shifts
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - red_bits)) << red_shift)
        + ((green >> (16 - green_bits)) << green_shift)
        + ((blue >> (16 - blue_bits)) << blue_shift)
    )