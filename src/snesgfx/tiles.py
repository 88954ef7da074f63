"""8x8 tile codecs for every SNES bit-plane layout plus Mode 7.

Reference: plane byte offsets for row ``y``

Format            | Bytes | Plane offsets
------------------|-------|--------------------------------------------------
1bpp              |     8 | y
2bpp planar       |    16 | y, y+08h
2bpp intertwined  |    16 | 2y, 2y+1
3bpp planar       |    24 | y, y+08h, y+10h
3bpp intertwined  |    24 | 2y, 2y+1, y+10h
4bpp planar       |    32 | y, y+08h, y+10h, y+18h
4bpp intertwined  |    32 | 2y, 2y+1, 2y+10h, 2y+11h
8bpp planar       |    64 | y, y+08h, ... y+38h
8bpp intertwined  |    64 | 2y, 2y+1, 2y+10h, 2y+11h, ... 2y+30h, 2y+31h
Mode 7            |    64 | one byte per pixel at y*8+x, no planes

Inside a plane byte the leftmost pixel is the most significant bit.
"""

from __future__ import annotations

from typing import ClassVar, Dict, List, Sequence, Tuple, Type

from .errors import DataLengthMismatch, InvalidColorIndex, OutOfBounds, UnknownTileFormat

TILE_WIDTH = 8
TILE_HEIGHT = 8
PIXEL_COUNT = TILE_WIDTH * TILE_HEIGHT


class Tile:
    """Common pixel access for the bit-plane tile formats.

    Subclasses describe their layout with ``SIZE``, ``DEPTH`` and
    :meth:`plane_offsets`; the bit twiddling lives here only once.
    ``VALUE_LIMIT`` is the exclusive upper bound checked by
    :meth:`set_pixel`, or ``None`` to accept any byte.
    """

    NAME: ClassVar[str] = ""
    SIZE: ClassVar[int] = 0
    DEPTH: ClassVar[int] = 0
    VALUE_LIMIT: ClassVar[int | None] = None

    def __init__(self) -> None:
        self.data = bytearray(self.SIZE)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> "Tile":
        if len(data) != cls.SIZE:
            raise DataLengthMismatch(cls.SIZE, len(data))
        tile = cls()
        tile.data[:] = data
        return tile

    @classmethod
    def from_colormap(cls, colormap: Sequence[int]) -> "Tile":
        tile = cls()
        for i, value in enumerate(colormap):
            tile.set_pixel(i % TILE_WIDTH, i // TILE_WIDTH, value)
        return tile

    @classmethod
    def plane_offsets(cls, y: int) -> Tuple[int, ...]:
        raise NotImplementedError

    def to_bytes(self) -> bytes:
        return bytes(self.data)

    __bytes__ = to_bytes

    def copy(self) -> "Tile":
        return type(self).from_bytes(self.data)

    @staticmethod
    def _check_coords(x: int, y: int) -> None:
        if not 0 <= x < TILE_WIDTH:
            raise OutOfBounds(x, TILE_WIDTH)
        if not 0 <= y < TILE_HEIGHT:
            raise OutOfBounds(y, TILE_HEIGHT)

    def _check_value(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise InvalidColorIndex(value)
        if self.VALUE_LIMIT is not None and value >= self.VALUE_LIMIT:
            raise InvalidColorIndex(value)

    def get_pixel(self, x: int, y: int) -> int:
        self._check_coords(x, y)

        index = 7 - x
        mask = 1 << index
        value = 0
        for plane, offset in enumerate(self.plane_offsets(y)):
            value |= ((self.data[offset] & mask) >> index) << plane
        return value

    def set_pixel(self, x: int, y: int, value: int) -> None:
        self._check_coords(x, y)
        self._check_value(value)

        index = 7 - x
        mask = 1 << index
        for plane, offset in enumerate(self.plane_offsets(y)):
            self.data[offset] &= mask ^ 0xFF
            self.data[offset] |= ((value >> plane) & 1) << index

    def to_colormap(self) -> List[int]:
        return [
            self.get_pixel(x, y) for y in range(TILE_HEIGHT) for x in range(TILE_WIDTH)
        ]

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.data == other.data  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data.hex()})"


class PlanarTile(Tile):
    """Each plane is 8 contiguous bytes, planes follow one another."""

    @classmethod
    def plane_offsets(cls, y: int) -> Tuple[int, ...]:
        return tuple(y + 0x8 * plane for plane in range(cls.DEPTH))


class IntertwinedTile(Tile):
    """Plane pairs share 16-byte blocks, alternating bytes per row."""

    @classmethod
    def plane_offsets(cls, y: int) -> Tuple[int, ...]:
        offsets: List[int] = []
        for pair in range(cls.DEPTH // 2):
            base = 0x10 * pair + y * 2
            offsets += [base, base + 1]
        return tuple(offsets)


class Tile1BPP(PlanarTile):
    NAME = "1bpp"
    SIZE = 8
    DEPTH = 1
    VALUE_LIMIT = 2


class Tile2BPPPlanar(PlanarTile):
    NAME = "2bpp-planar"
    SIZE = 16
    DEPTH = 2
    VALUE_LIMIT = 4


class Tile2BPPIntertwined(IntertwinedTile):
    NAME = "2bpp-intertwined"
    SIZE = 16
    DEPTH = 2
    VALUE_LIMIT = 4


class Tile3BPPPlanar(PlanarTile):
    NAME = "3bpp-planar"
    SIZE = 24
    DEPTH = 3
    VALUE_LIMIT = 8


class Tile3BPPIntertwined(Tile):
    """Planes 0/1 intertwined like 2bpp, plane 2 appended as a planar block."""

    NAME = "3bpp-intertwined"
    SIZE = 24
    DEPTH = 3
    VALUE_LIMIT = 8

    @classmethod
    def plane_offsets(cls, y: int) -> Tuple[int, ...]:
        return (y * 2, y * 2 + 1, y + 0x10)


class Tile4BPPPlanar(PlanarTile):
    NAME = "4bpp-planar"
    SIZE = 32
    DEPTH = 4
    VALUE_LIMIT = 16


class Tile4BPPIntertwined(IntertwinedTile):
    NAME = "4bpp-intertwined"
    SIZE = 32
    DEPTH = 4
    VALUE_LIMIT = 16


class Tile8BPPPlanar(PlanarTile):
    NAME = "8bpp-planar"
    SIZE = 64
    DEPTH = 8
    # Long-standing behaviour: only values below 16 are accepted here even
    # though the intertwined 8bpp layout takes any byte.
    VALUE_LIMIT = 16


class Tile8BPPIntertwined(IntertwinedTile):
    NAME = "8bpp-intertwined"
    SIZE = 64
    DEPTH = 8
    VALUE_LIMIT = None


class TileMode7(Tile):
    """Mode 7 character: one raw byte per pixel, row-major."""

    NAME = "mode7"
    SIZE = 64
    DEPTH = 8
    VALUE_LIMIT = None

    def get_pixel(self, x: int, y: int) -> int:
        self._check_coords(x, y)
        return self.data[y * TILE_WIDTH + x]

    def set_pixel(self, x: int, y: int, value: int) -> None:
        self._check_coords(x, y)
        self._check_value(value)
        self.data[y * TILE_WIDTH + x] = value


TILE_FORMATS: Dict[str, Type[Tile]] = {
    cls.NAME: cls
    for cls in (
        Tile1BPP,
        Tile2BPPPlanar,
        Tile2BPPIntertwined,
        Tile3BPPPlanar,
        Tile3BPPIntertwined,
        Tile4BPPPlanar,
        Tile4BPPIntertwined,
        Tile8BPPPlanar,
        Tile8BPPIntertwined,
        TileMode7,
    )
}


def tile_format(name: str) -> Type[Tile]:
    """Return the tile class registered under ``name`` (case-insensitive)."""

    try:
        return TILE_FORMATS[name.lower()]
    except KeyError as exc:
        raise UnknownTileFormat(name) from exc
