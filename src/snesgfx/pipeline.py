"""Tile -> colormap -> palette -> color conversions.

All functions are pure; neither the tile nor the palette is modified.
"""

from __future__ import annotations

from typing import List

from .color import Color15, Color24
from .palette import Palette
from .tiles import Tile


def to_native_colors(tile: Tile, palette: Palette) -> List[Color15]:
    """Look every pixel of ``tile`` up in ``palette``.

    Raises :class:`~snesgfx.errors.InvalidColorIndex` on the first pixel value
    the palette cannot hold (a value above 15 with a 16-color palette).
    """

    return [palette.get(index) for index in tile.to_colormap()]


def to_display_colors(tile: Tile, palette: Palette) -> List[Color24]:
    return [color.to_color24() for color in to_native_colors(tile, palette)]


def direct_color(value: int, palette_arg: int) -> Color15:
    """Direct color mode: build a Color15 from an 8-bit pixel ``BBGGGRRR``.

    ``palette_arg`` carries the low bit of each channel (bit 0 red, bit 1
    green, bit 2 blue), normally taken from the tile's palette number.
    """

    red_bit = palette_arg & 1
    green_bit = (palette_arg >> 1) & 1
    blue_bit = (palette_arg >> 2) & 1

    blue = ((value & 0xC0) >> 4) | blue_bit
    green = ((value & 0x38) >> 2) | green_bit
    red = ((value & 0x07) << 1) | red_bit
    return Color15.from_rgb(red, green, blue)


def direct_color_decode(tile: Tile, palette_arg: int) -> List[Color15]:
    return [direct_color(value, palette_arg) for value in tile.to_colormap()]
