import pytest

from snesgfx.color import Color15, Color24
from snesgfx.errors import InvalidColorIndex
from snesgfx.palette import Palette16, Palette256
from snesgfx.pipeline import (
    direct_color,
    direct_color_decode,
    to_display_colors,
    to_native_colors,
)
from snesgfx.tiles import Tile2BPPPlanar, Tile8BPPIntertwined, TileMode7


def _grey_palette(palette_cls):
    return palette_cls.from_colors(
        Color15.from_rgb(i % 32, i % 32, i % 32) for i in range(palette_cls.CAPACITY)
    )


def test_to_native_colors_looks_up_every_pixel() -> None:
    colormap = [i % 4 for i in range(64)]
    tile = Tile2BPPPlanar.from_colormap(colormap)
    palette = _grey_palette(Palette16)

    colors = to_native_colors(tile, palette)

    assert len(colors) == 64
    assert [c.red for c in colors] == colormap


def test_to_display_colors_converts_to_rgb888() -> None:
    tile = Tile2BPPPlanar.from_colormap([3] * 64)
    palette = Palette16()
    palette.set(3, Color15.from_rgb(31, 16, 1))

    colors = to_display_colors(tile, palette)

    assert colors == [Color24(0xF88008)] * 64


def test_palette16_lookup_fails_for_large_pixel_values() -> None:
    tile = TileMode7()
    tile.set_pixel(5, 5, 16)

    with pytest.raises(InvalidColorIndex):
        to_native_colors(tile, _grey_palette(Palette16))
    with pytest.raises(InvalidColorIndex):
        to_display_colors(tile, _grey_palette(Palette16))


def test_palette256_lookup_covers_full_byte() -> None:
    tile = Tile8BPPIntertwined.from_colormap(list(range(192, 256)))
    palette = _grey_palette(Palette256)

    colors = to_native_colors(tile, palette)

    assert colors[-1] == Color15.from_rgb(31, 31, 31)
    assert colors[0] == Color15.from_rgb(0, 0, 0)


def test_pipeline_leaves_inputs_untouched() -> None:
    tile = Tile2BPPPlanar.from_colormap([1] * 64)
    palette = _grey_palette(Palette16)
    tile_bytes, palette_bytes = tile.to_bytes(), palette.to_bytes()

    to_display_colors(tile, palette)

    assert tile.to_bytes() == tile_bytes
    assert palette.to_bytes() == palette_bytes


@pytest.mark.parametrize(
    "value, palette_arg, expected",
    [
        (0x00, 0, (0, 0, 0)),
        (0x00, 1, (1, 0, 0)),
        (0x00, 2, (0, 1, 0)),
        (0x00, 4, (0, 0, 1)),
        (0x07, 0, (14, 0, 0)),
        (0x38, 0, (0, 14, 0)),
        (0xC0, 0, (0, 0, 12)),
        (0xFF, 7, (15, 15, 13)),
        (0xFF, 0xF8, (14, 14, 12)),
    ],
)
def test_direct_color_bit_layout(value, palette_arg, expected) -> None:
    assert direct_color(value, palette_arg).as_tuple() == expected


def test_direct_color_decode_ignores_palettes() -> None:
    tile = TileMode7.from_bytes(bytes([0xFF] * 64))

    colors = direct_color_decode(tile, 7)

    assert colors == [Color15(15 | (15 << 5) | (13 << 10))] * 64
    assert direct_color_decode(TileMode7(), 4) == [Color15(1 << 10)] * 64


def test_native_colors_are_independent_of_palette() -> None:
    palette = Palette16.from_bytes(bytes(32))
    colors = to_native_colors(Tile2BPPPlanar(), palette)

    colors[0].red = 31

    assert palette.to_bytes() == bytes(32)
    assert colors[63] == Color15(0)
