"""ROM image access: addresses, the internal header and tile/palette slicing.

Reference: internal header (64 bytes at 00:7FC0 for LoROM, 00:FFC0 for HiROM)
Offset | Size | Field
-------|------|-------------------------------------------
+00h   |   21 | Game title (printable ASCII)
+15h   |    1 | Mapping mode
+16h   |    1 | ROM type
+17h   |    1 | ROM size (0x400 << n bytes)
+18h   |    1 | SRAM size
+19h   |    2 | Developer ID
+1Bh   |    1 | Version
+1Ch   |    2 | Checksum complement
+1Eh   |    2 | Checksum
+24h   |   12 | Native mode vectors
+34h   |   12 | Emulation mode vectors
"""

from __future__ import annotations

import struct
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import List, Type, TypeVar

from .errors import (
    ChecksumComplementMismatch,
    DataLengthMismatch,
    InvalidDiskAddress,
    InvalidRomAddress,
    NoHeader,
    RomReadError,
    RomSizeMismatch,
    SnesGfxError,
    TitleNotAscii,
)
from .palette import Palette
from .tiles import Tile

ROM_BANK_BASE = 0xC0
BANK_SIZE = 0x10000
COPIER_HEADER_SIZE = 512
LOROM_HEADER_ADDRESS = 0x7FC0
HIROM_HEADER_ADDRESS = 0xFFC0
HEADER_STRUCT = struct.Struct("<21sBBBBHBHHI6HI6H")

T = TypeVar("T", bound=Tile)
P = TypeVar("P", bound=Palette)


@dataclass(frozen=True)
class Addr24:
    """24-bit bus address split into bank and in-bank address."""

    bank: int
    address: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "bank", self.bank & 0xFF)
        object.__setattr__(self, "address", self.address & 0xFFFF)

    @classmethod
    def from_int(cls, value: int) -> "Addr24":
        return cls((value >> 16) & 0xFF, value & 0xFFFF)

    @classmethod
    def from_offset(cls, rom: "Rom", offset: int) -> "Addr24":
        return cls.from_int(offset - rom.header_size)

    @classmethod
    def parse(cls, text: str) -> "Addr24":
        """Parse ``"C0:8000"`` style text, or any integer literal."""

        if ":" in text:
            bank, address = text.split(":", 1)
            return cls(int(bank, 16), int(address, 16))
        return cls.from_int(int(text, 0))

    def to_int(self) -> int:
        return (self.bank << 16) | self.address

    def is_rom_address(self) -> bool:
        return self.bank >= ROM_BANK_BASE

    def is_disk_address(self) -> bool:
        return not self.is_rom_address()

    def to_rom_address(self) -> "Addr24":
        if self.bank + ROM_BANK_BASE > 0xFF:
            raise InvalidDiskAddress(self)
        return Addr24(self.bank + ROM_BANK_BASE, self.address)

    def to_disk_address(self) -> "Addr24":
        if self.bank < ROM_BANK_BASE:
            raise InvalidRomAddress(self)
        return Addr24(self.bank - ROM_BANK_BASE, self.address)

    def to_offset(self, rom: "Rom") -> int:
        disk = self.to_disk_address() if self.is_rom_address() else self
        return disk.to_int() + rom.header_size

    # arithmetic stays inside the bank
    def __add__(self, other: int) -> "Addr24":
        return Addr24(self.bank, self.address + other)

    def __sub__(self, other: int) -> "Addr24":
        return Addr24(self.bank, self.address - other)

    def __mul__(self, other: int) -> "Addr24":
        return Addr24(self.bank, self.address * other)

    def __repr__(self) -> str:
        return f"Addr24({self.bank:02X}:{self.address:04X})"


@dataclass
class NativeModeVectors:
    cop: int
    brk: int
    abort: int
    nmi: int
    irq: int


@dataclass
class EmulationModeVectors:
    cop: int
    abort: int
    nmi: int
    res: int
    irq_or_brk: int


@dataclass
class SnesHeader:
    """Internal cartridge header."""

    title: bytes
    mapping_mode: int
    rom_type: int
    rom_size: int
    sram_size: int
    developer_id: int
    version: int
    checksum_complement: int
    checksum: int
    native: NativeModeVectors
    emulation: EmulationModeVectors

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> "SnesHeader":
        if len(data) != HEADER_STRUCT.size:
            raise DataLengthMismatch(HEADER_STRUCT.size, len(data))
        fields = HEADER_STRUCT.unpack(bytes(data))
        (
            title,
            mapping_mode,
            rom_type,
            rom_size,
            sram_size,
            developer_id,
            version,
            checksum_complement,
            checksum,
            _padding,
            n_cop,
            n_brk,
            n_abort,
            n_nmi,
            _n_unused,
            n_irq,
            _padding2,
            e_cop,
            _e_unused,
            e_abort,
            e_nmi,
            e_res,
            e_irq,
        ) = fields
        return cls(
            title=title,
            mapping_mode=mapping_mode,
            rom_type=rom_type,
            rom_size=rom_size,
            sram_size=sram_size,
            developer_id=developer_id,
            version=version,
            checksum_complement=checksum_complement,
            checksum=checksum,
            native=NativeModeVectors(n_cop, n_brk, n_abort, n_nmi, n_irq),
            emulation=EmulationModeVectors(e_cop, e_abort, e_nmi, e_res, e_irq),
        )

    @property
    def title_text(self) -> str:
        return self.title.decode("ascii", errors="replace").rstrip()

    @property
    def declared_rom_size(self) -> int:
        return 0x400 << self.rom_size

    def validate(self, rom: "Rom") -> None:
        if any(c < 32 or c >= 127 for c in self.title):
            raise TitleNotAscii()

        if (self.checksum_complement + self.checksum) & 0xFFFF != 0xFFFF:
            raise ChecksumComplementMismatch(self.checksum, self.checksum_complement)

        if rom.rom_size > self.declared_rom_size:
            raise RomSizeMismatch(self.declared_rom_size, rom.rom_size)


class Rom:
    """In-memory ROM image, optionally prefixed by a copier header."""

    def __init__(self, data: bytes | bytearray):
        self.buffer = bytearray(data)
        if self.header_size not in (0, COPIER_HEADER_SIZE):
            warnings.warn(
                f"Unusual copier header size: {self.header_size} bytes",
                RuntimeWarning,
                stacklevel=2,
            )

    @classmethod
    def from_file(cls, path: str | Path) -> "Rom":
        return cls(Path(path).read_bytes())

    def __len__(self) -> int:
        return len(self.buffer)

    def __bytes__(self) -> bytes:
        return bytes(self.buffer)

    @property
    def header_size(self) -> int:
        return len(self.buffer) % 1024

    @property
    def rom_size(self) -> int:
        return len(self.buffer) - self.header_size

    def header(self) -> bytes:
        if self.header_size == 0:
            raise NoHeader()
        return bytes(self.buffer[: self.header_size])

    def banks(self) -> int:
        return self.rom_size // BANK_SIZE

    def get_bank(self, bank: int) -> bytes:
        return self.read(Addr24(bank, 0).to_offset(self), BANK_SIZE)

    def read(self, offset: int, size: int) -> bytes:
        if offset < 0 or size < 0 or offset + size > len(self.buffer):
            raise RomReadError(offset, size, len(self.buffer))
        return bytes(self.buffer[offset : offset + size])

    def write(self, offset: int, data: bytes | bytearray) -> None:
        if offset < 0 or offset + len(data) > len(self.buffer):
            raise RomReadError(offset, len(data), len(self.buffer))
        self.buffer[offset : offset + len(data)] = data

    def resize(self, size: int) -> None:
        if size < len(self.buffer):
            del self.buffer[size:]
        else:
            self.buffer.extend(bytes(size - len(self.buffer)))

    def checksum(self) -> int:
        """16-bit sum of the ROM bytes, copier header excluded.

        3 MiB images count twice to stand in for the mirrored 4 MiB layout.
        """

        checksum = sum(memoryview(self.buffer)[self.header_size :]) & 0xFFFF
        if self.rom_size == 0x300000:
            checksum = (checksum * 2) & 0xFFFF
        return checksum

    # -- codec slices -------------------------------------------------------

    def read_tile(self, offset: int, tile_cls: Type[T]) -> T:
        return tile_cls.from_bytes(self.read(offset, tile_cls.SIZE))  # type: ignore[return-value]

    def read_tiles(self, offset: int, tile_cls: Type[T], count: int) -> List[T]:
        return [self.read_tile(offset + i * tile_cls.SIZE, tile_cls) for i in range(count)]

    def read_palette(self, offset: int, palette_cls: Type[P]) -> P:
        return palette_cls.from_bytes(self.read(offset, palette_cls.CAPACITY * 2))  # type: ignore[return-value]

    # -- internal header ----------------------------------------------------

    def get_snes_header(self, address: Addr24) -> SnesHeader:
        return SnesHeader.from_bytes(self.read(address.to_offset(self), HEADER_STRUCT.size))

    def get_valid_snes_header(self, address: Addr24) -> SnesHeader:
        header = self.get_snes_header(address)
        header.validate(self)
        return header

    def get_lorom_snes_header(self) -> SnesHeader:
        return self.get_snes_header(Addr24(0, LOROM_HEADER_ADDRESS))

    def get_valid_lorom_snes_header(self) -> SnesHeader:
        return self.get_valid_snes_header(Addr24(0, LOROM_HEADER_ADDRESS))

    def get_hirom_snes_header(self) -> SnesHeader:
        return self.get_snes_header(Addr24(0, HIROM_HEADER_ADDRESS))

    def get_valid_hirom_snes_header(self) -> SnesHeader:
        return self.get_valid_snes_header(Addr24(0, HIROM_HEADER_ADDRESS))

    def find_valid_snes_header(self) -> SnesHeader:
        try:
            return self.get_valid_lorom_snes_header()
        except SnesGfxError as lorom_error:
            try:
                return self.get_valid_hirom_snes_header()
            except SnesGfxError:
                raise lorom_error
