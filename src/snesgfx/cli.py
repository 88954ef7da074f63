"""Command line interface for inspecting tiles and headers in ROM images."""

from __future__ import annotations

import argparse
import sys
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from .color import Color15
from .errors import SnesGfxError
from .palette import Palette, Palette16, Palette256
from .pipeline import direct_color_decode, to_display_colors, to_native_colors
from .rom import Addr24, Rom
from .tiles import TILE_FORMATS, TILE_WIDTH, Tile, tile_format


@dataclass
class DecodeOptions:
    """What to decode and how to print it."""

    tile_format: str = "4bpp-intertwined"
    offset: int = 0
    count: int = 1
    palette_offset: int | None = None
    palette_size: int = 16
    direct_arg: int | None = None
    rgb: bool = False


def _int(text: str) -> int:
    try:
        return int(text, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number: {text}") from exc


def _addr(text: str) -> Addr24:
    try:
        return Addr24.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid address: {text}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Decode SNES tile graphics and palettes from ROM images.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    tile = sub.add_parser("tile", help="Print decoded tiles")
    tile.add_argument("rom", type=Path, help="ROM image or raw graphics file")
    tile.add_argument(
        "--format",
        dest="tile_format",
        choices=sorted(TILE_FORMATS),
        default="4bpp-intertwined",
        help="Tile layout",
    )
    where = tile.add_mutually_exclusive_group()
    where.add_argument("--offset", type=_int, default=0, help="File offset of the first tile")
    where.add_argument("--address", type=_addr, help="Bus address (e.g. C0:8000) of the first tile")
    tile.add_argument("--count", type=_int, default=1, help="Number of consecutive tiles")

    pal = tile.add_mutually_exclusive_group()
    pal.add_argument("--palette-offset", type=_int, help="File offset of the palette")
    pal.add_argument("--palette-address", type=_addr, help="Bus address of the palette")
    tile.add_argument(
        "--palette-size",
        type=int,
        choices=[16, 256],
        default=16,
        help="Number of palette entries",
    )
    tile.add_argument(
        "--direct",
        type=_int,
        metavar="ARG",
        help="Decode in direct color mode with the given 3-bit palette argument",
    )
    tile.add_argument("--rgb", action="store_true", help="Print colors as #rrggbb")

    header = sub.add_parser("header", help="Print the internal cartridge header")
    header.add_argument("rom", type=Path, help="ROM image")

    return parser


def format_rows(cells: Sequence[str]) -> List[str]:
    return [" ".join(cells[i : i + TILE_WIDTH]) for i in range(0, len(cells), TILE_WIDTH)]


def _format_colors(colors: Sequence[Color15], rgb: bool) -> List[str]:
    if rgb:
        return [color.to_color24().to_hex() for color in colors]
    return [f"{color.value:04x}" for color in colors]


def render_tile(tile: Tile, palette: Palette | None, options: DecodeOptions) -> List[str]:
    if options.direct_arg is not None:
        cells = _format_colors(direct_color_decode(tile, options.direct_arg), options.rgb)
    elif palette is not None:
        if options.rgb:
            cells = [color.to_hex() for color in to_display_colors(tile, palette)]
        else:
            cells = _format_colors(to_native_colors(tile, palette), False)
    else:
        cells = [f"{value:02x}" for value in tile.to_colormap()]
    return format_rows(cells)


def run_tile(rom: Rom, options: DecodeOptions) -> None:
    tile_cls = tile_format(options.tile_format)
    palette = None
    if options.palette_offset is not None:
        palette_cls = Palette256 if options.palette_size == 256 else Palette16
        palette = rom.read_palette(options.palette_offset, palette_cls)

    tiles = rom.read_tiles(options.offset, tile_cls, options.count)
    for index, tile in enumerate(tiles):
        if options.count > 1:
            print(f"; tile {index} @ 0x{options.offset + index * tile_cls.SIZE:X}")
        for line in render_tile(tile, palette, options):
            print(line)


def run_header(rom: Rom) -> None:
    header = rom.find_valid_snes_header()
    print(f"title:    {header.title_text}")
    print(f"mapping:  0x{header.mapping_mode:02X}")
    print(f"rom type: 0x{header.rom_type:02X}")
    print(f"rom size: 0x{header.declared_rom_size:X}")
    print(f"version:  {header.version}")
    print(f"checksum: 0x{header.checksum:04X} (computed 0x{rom.checksum():04X})")


def options_from_args(args: argparse.Namespace, rom: Rom) -> DecodeOptions:
    options = DecodeOptions()
    options.tile_format = args.tile_format
    options.offset = args.address.to_offset(rom) if args.address is not None else args.offset
    options.count = args.count
    if args.palette_address is not None:
        options.palette_offset = args.palette_address.to_offset(rom)
    else:
        options.palette_offset = args.palette_offset
    options.palette_size = args.palette_size
    options.direct_arg = args.direct
    options.rgb = args.rgb
    return options


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            rom = Rom.from_file(args.rom)
            if args.command == "header":
                run_header(rom)
            else:
                run_tile(rom, options_from_args(args, rom))
            return 0
        except OSError as exc:
            print(f"Cannot read {args.rom}: {exc}", file=sys.stderr)
            return 1
        except SnesGfxError as exc:
            print(exc, file=sys.stderr)
            return 1
        finally:
            for warning in caught:
                print(f"Warning: {warning.message}", file=sys.stderr)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
