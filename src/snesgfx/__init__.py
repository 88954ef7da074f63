"""SNES tile, palette and color codecs.

Converts between the console's bit-plane tile layouts and linear colormaps,
between BGR555 and RGB888 colors, and looks colormaps up in CGRAM palettes.
Run ``python -m snesgfx`` to inspect graphics inside a ROM image.
"""

from .color import Color15, Color24
from .errors import (
    DataLengthMismatch,
    InvalidColorIndex,
    OutOfBounds,
    SnesGfxError,
    UnknownTileFormat,
)
from .palette import Palette, Palette16, Palette256
from .pipeline import direct_color, direct_color_decode, to_display_colors, to_native_colors
from .rom import Addr24, Rom, SnesHeader
from .tiles import (
    TILE_FORMATS,
    Tile,
    Tile1BPP,
    Tile2BPPIntertwined,
    Tile2BPPPlanar,
    Tile3BPPIntertwined,
    Tile3BPPPlanar,
    Tile4BPPIntertwined,
    Tile4BPPPlanar,
    Tile8BPPIntertwined,
    Tile8BPPPlanar,
    TileMode7,
    tile_format,
)

__all__ = [
    "Addr24",
    "Color15",
    "Color24",
    "DataLengthMismatch",
    "InvalidColorIndex",
    "OutOfBounds",
    "Palette",
    "Palette16",
    "Palette256",
    "Rom",
    "SnesGfxError",
    "SnesHeader",
    "TILE_FORMATS",
    "Tile",
    "Tile1BPP",
    "Tile2BPPIntertwined",
    "Tile2BPPPlanar",
    "Tile3BPPIntertwined",
    "Tile3BPPPlanar",
    "Tile4BPPIntertwined",
    "Tile4BPPPlanar",
    "Tile8BPPIntertwined",
    "Tile8BPPPlanar",
    "TileMode7",
    "UnknownTileFormat",
    "direct_color",
    "direct_color_decode",
    "tile_format",
    "to_display_colors",
    "to_native_colors",
]
