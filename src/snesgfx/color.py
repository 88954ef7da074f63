"""Console-native 15-bit colors and conventional 24-bit colors.

Color15 layout (one little-endian word in CGRAM / ROM)::

    bit  15 14..10 9..5 4..0
         -  blue   green red

Color24 is ``0x00RRGGBB``. Converting Color15 -> Color24 shifts each channel
left by 3, the reverse shifts right by 3, so only the Color15 round trip is
lossless.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .errors import DataLengthMismatch

RGB = Tuple[int, int, int]


@dataclass
class Color15:
    """BGR555 color as stored by the console."""

    value: int = 0

    def __post_init__(self) -> None:
        self.value &= 0xFFFF

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> "Color15":
        color = cls()
        color.red = red
        color.green = green
        color.blue = blue
        return color

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> "Color15":
        if len(data) != 2:
            raise DataLengthMismatch(2, len(data))
        return cls(data[0] | (data[1] << 8))

    def to_bytes(self) -> bytes:
        return bytes([self.value & 0xFF, (self.value >> 8) & 0xFF])

    @property
    def red(self) -> int:
        return self.value & 0x1F

    @red.setter
    def red(self, value: int) -> None:
        self.value = (self.value & ~0x001F & 0xFFFF) | (value & 0x1F)

    @property
    def green(self) -> int:
        return (self.value >> 5) & 0x1F

    @green.setter
    def green(self, value: int) -> None:
        self.value = (self.value & ~0x03E0 & 0xFFFF) | ((value & 0x1F) << 5)

    @property
    def blue(self) -> int:
        return (self.value >> 10) & 0x1F

    @blue.setter
    def blue(self, value: int) -> None:
        self.value = (self.value & ~0x7C00 & 0xFFFF) | ((value & 0x1F) << 10)

    def as_tuple(self) -> RGB:
        return (self.red, self.green, self.blue)

    def to_color24(self) -> "Color24":
        return Color24.from_rgb(self.red << 3, self.green << 3, self.blue << 3)


@dataclass
class Color24:
    """RGB888 color packed as ``0x00RRGGBB``."""

    value: int = 0

    def __post_init__(self) -> None:
        self.value &= 0xFFFFFFFF

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> "Color24":
        color = cls()
        color.red = red
        color.green = green
        color.blue = blue
        return color

    @property
    def red(self) -> int:
        return (self.value >> 16) & 0xFF

    @red.setter
    def red(self, value: int) -> None:
        self.value = (self.value & 0xFF00FFFF) | ((value & 0xFF) << 16)

    @property
    def green(self) -> int:
        return (self.value >> 8) & 0xFF

    @green.setter
    def green(self, value: int) -> None:
        self.value = (self.value & 0xFFFF00FF) | ((value & 0xFF) << 8)

    @property
    def blue(self) -> int:
        return self.value & 0xFF

    @blue.setter
    def blue(self, value: int) -> None:
        self.value = (self.value & 0xFFFFFF00) | (value & 0xFF)

    def as_tuple(self) -> RGB:
        return (self.red, self.green, self.blue)

    def to_hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def to_color15(self) -> Color15:
        # the low 3 bits of each channel are dropped
        return Color15.from_rgb(self.red >> 3, self.green >> 3, self.blue >> 3)
