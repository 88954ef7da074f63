"""Fixed-size CGRAM palettes of Color15 entries."""

from __future__ import annotations

from typing import ClassVar, Iterable, Iterator, List

from .color import Color15
from .errors import DataLengthMismatch, InvalidColorIndex


class Palette:
    """Ordered table of native colors indexed by pixel value.

    Subclasses only choose ``CAPACITY``. Entry 0 belongs to pixel value 0.
    """

    CAPACITY: ClassVar[int] = 0

    def __init__(self) -> None:
        self.colors: List[Color15] = [Color15() for _ in range(self.CAPACITY)]

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> "Palette":
        expected = cls.CAPACITY * 2
        if len(data) != expected:
            raise DataLengthMismatch(expected, len(data))

        palette = cls()
        palette.colors = [
            Color15.from_bytes(data[i : i + 2]) for i in range(0, expected, 2)
        ]
        return palette

    @classmethod
    def from_colors(cls, colors: Iterable[Color15]) -> "Palette":
        entries = [Color15(color.value) for color in colors]
        if len(entries) != cls.CAPACITY:
            raise DataLengthMismatch(cls.CAPACITY, len(entries))
        palette = cls()
        palette.colors = entries
        return palette

    def to_bytes(self) -> bytes:
        return b"".join(color.to_bytes() for color in self.colors)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.CAPACITY:
            raise InvalidColorIndex(index)

    def get(self, index: int) -> Color15:
        self._check_index(index)
        return Color15(self.colors[index].value)

    def set(self, index: int, color: Color15) -> None:
        self._check_index(index)
        self.colors[index] = Color15(color.value)

    __getitem__ = get
    __setitem__ = set

    def __len__(self) -> int:
        return self.CAPACITY

    def __iter__(self) -> Iterator[Color15]:
        return (Color15(color.value) for color in self.colors)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.colors == other.colors  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_bytes().hex()})"


class Palette16(Palette):
    """16-color sub-palette; indices 16 and above are rejected."""

    CAPACITY = 16


class Palette256(Palette):
    """Full 256-color CGRAM; every 8-bit pixel value is a valid index."""

    CAPACITY = 256
