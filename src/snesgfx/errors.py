"""Exception types raised by the snesgfx codecs and ROM helpers."""

from __future__ import annotations


class SnesGfxError(Exception):
    """Base class for every error raised by this package."""


class DataLengthMismatch(SnesGfxError, ValueError):
    """Raised when a buffer is not exactly the size a format requires."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} bytes of data, got {actual}")


class OutOfBounds(SnesGfxError, IndexError):
    """Raised when a pixel coordinate falls outside the tile."""

    def __init__(self, value: int, limit: int):
        self.value = value
        self.limit = limit
        super().__init__(f"Coordinate {value} is out of bounds (limit {limit})")


class InvalidColorIndex(SnesGfxError, ValueError):
    """Raised for pixel values or palette indices outside the allowed range."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Invalid color index: {value}")


class UnknownTileFormat(SnesGfxError, KeyError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown tile format: {self.name}"


# ---------------------------------------------------------------------------
# ROM container
# ---------------------------------------------------------------------------


class RomReadError(SnesGfxError):
    """Raised when a read or write runs past the end of the ROM image."""

    def __init__(self, offset: int, size: int, length: int):
        self.offset = offset
        self.size = size
        self.length = length
        super().__init__(
            f"Cannot access {size} bytes at offset 0x{offset:X} (image is 0x{length:X} bytes)"
        )


class NoHeader(SnesGfxError):
    """Raised when a copier header is requested from an image without one."""

    def __init__(self) -> None:
        super().__init__("ROM image has no copier header")


class TitleNotAscii(SnesGfxError):
    def __init__(self) -> None:
        super().__init__("Header title contains non-printable characters")


class ChecksumComplementMismatch(SnesGfxError):
    def __init__(self, checksum: int, complement: int):
        self.checksum = checksum
        self.complement = complement
        super().__init__(
            f"Checksum 0x{checksum:04X} and complement 0x{complement:04X} do not add up to 0xFFFF"
        )


class RomSizeMismatch(SnesGfxError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"ROM data is 0x{actual:X} bytes but the header declares 0x{expected:X}"
        )


class InvalidRomAddress(SnesGfxError):
    """Raised when a ROM-mapped address (bank >= C0) was expected."""

    def __init__(self, address: object):
        self.address = address
        super().__init__(f"Not a ROM address: {address!r}")


class InvalidDiskAddress(SnesGfxError):
    """Raised when a disk address cannot be mapped into ROM space."""

    def __init__(self, address: object):
        self.address = address
        super().__init__(f"Not a disk address: {address!r}")
