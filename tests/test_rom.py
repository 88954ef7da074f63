import struct

import pytest

from snesgfx.errors import (
    ChecksumComplementMismatch,
    DataLengthMismatch,
    InvalidDiskAddress,
    InvalidRomAddress,
    NoHeader,
    RomReadError,
    RomSizeMismatch,
    TitleNotAscii,
)
from snesgfx.palette import Palette16
from snesgfx.rom import Addr24, Rom, SnesHeader
from snesgfx.tiles import Tile1BPP, Tile2BPPPlanar

HEADER_FORMAT = "<21sBBBBHBHHI6HI6H"


def make_header(
    title: bytes = b"TEST ROM",
    rom_size: int = 5,
    checksum: int = 0x1234,
    complement: int = 0xEDCB,
) -> bytes:
    return struct.pack(
        HEADER_FORMAT,
        title.ljust(21, b" "),
        0x20,  # mapping mode
        0x00,  # rom type
        rom_size,
        0x00,  # sram size
        0x0001,  # developer id
        1,  # version
        complement,
        checksum,
        0,
        0x8100, 0x8101, 0x8102, 0x8103, 0, 0x8104,
        0,
        0x8200, 0, 0x8202, 0x8203, 0x8000, 0x8204,
    )


def make_image(size: int = 0x8000, header_at: int = 0x7FC0, **kwargs) -> bytearray:
    image = bytearray(size)
    header = make_header(**kwargs)
    image[header_at : header_at + len(header)] = header
    return image


def test_lorom_header_is_parsed() -> None:
    rom = Rom(make_image())

    header = rom.find_valid_snes_header()

    assert header.title_text == "TEST ROM"
    assert header.mapping_mode == 0x20
    assert header.declared_rom_size == 0x8000
    assert header.checksum == 0x1234
    assert header.checksum_complement == 0xEDCB
    assert header.native.irq == 0x8104
    assert header.native.nmi == 0x8103
    assert header.emulation.res == 0x8000
    assert header.emulation.irq_or_brk == 0x8204


def test_hirom_header_found_when_lorom_invalid() -> None:
    rom = Rom(make_image(size=0x10000, header_at=0xFFC0, rom_size=6, title=b"HIROM"))

    with pytest.raises(TitleNotAscii):
        rom.get_valid_lorom_snes_header()
    assert rom.find_valid_snes_header().title_text == "HIROM"


def test_lorom_error_reported_when_no_header_is_valid() -> None:
    rom = Rom(make_image(complement=0x0000))

    with pytest.raises(ChecksumComplementMismatch):
        rom.find_valid_snes_header()


def test_header_rom_size_must_cover_image() -> None:
    rom = Rom(make_image(rom_size=4))

    with pytest.raises(RomSizeMismatch) as exc:
        rom.get_valid_lorom_snes_header()
    assert (exc.value.expected, exc.value.actual) == (0x4000, 0x8000)


def test_copier_header_shifts_offsets() -> None:
    rom = Rom(bytes(512) + make_image())

    assert rom.header_size == 512
    assert rom.rom_size == 0x8000
    assert rom.header() == bytes(512)
    assert rom.get_valid_lorom_snes_header().title_text == "TEST ROM"


def test_missing_copier_header() -> None:
    with pytest.raises(NoHeader):
        Rom(bytes(1024)).header()


def test_unusual_copier_header_warns() -> None:
    with pytest.warns(RuntimeWarning):
        Rom(bytes(1024 + 100))


def test_addr24_conversions() -> None:
    addr = Addr24.parse("C0:8000")

    assert addr == Addr24(0xC0, 0x8000)
    assert addr.is_rom_address()
    assert addr.to_int() == 0xC08000
    assert Addr24.from_int(0xC08000) == addr
    assert Addr24.parse("0x018000") == Addr24(0x01, 0x8000)
    assert addr.to_disk_address() == Addr24(0x00, 0x8000)
    assert Addr24(0x3F, 0x1234).to_rom_address() == Addr24(0xFF, 0x1234)
    assert repr(addr) == "Addr24(C0:8000)"


def test_addr24_invalid_bank_moves() -> None:
    with pytest.raises(InvalidDiskAddress):
        Addr24(0x40, 0).to_rom_address()
    with pytest.raises(InvalidRomAddress):
        Addr24(0x10, 0).to_disk_address()


def test_addr24_arithmetic_wraps_inside_bank() -> None:
    assert Addr24(1, 0xFFFF) + 1 == Addr24(1, 0)
    assert Addr24(1, 0x0000) - 1 == Addr24(1, 0xFFFF)
    assert Addr24(2, 0x0010) * 4 == Addr24(2, 0x0040)


def test_addr24_offsets_account_for_copier_header() -> None:
    rom = Rom(bytes(512) + bytes(0x20000))

    assert Addr24(0xC1, 0x0010).to_offset(rom) == 0x10010 + 512
    assert Addr24(0x01, 0x0010).to_offset(rom) == 0x10010 + 512
    assert Addr24.from_offset(rom, 0x8200) == Addr24(0, 0x8000)


def test_banks() -> None:
    image = bytearray(0x20000)
    image[0x10000] = 0xAB
    rom = Rom(image)

    assert rom.banks() == 2
    assert rom.get_bank(1)[0] == 0xAB
    with pytest.raises(RomReadError):
        rom.get_bank(2)


def test_read_and_write_bounds() -> None:
    rom = Rom(bytes(1024))

    rom.write(0x3FE, b"\x01\x02")
    assert rom.read(0x3FE, 2) == b"\x01\x02"
    with pytest.raises(RomReadError):
        rom.read(0x3FF, 2)
    with pytest.raises(RomReadError):
        rom.write(0x400, b"\x00")


def test_resize() -> None:
    rom = Rom(bytes(1024))

    rom.resize(2048)
    assert len(rom) == 2048
    rom.resize(1024)
    assert len(rom) == 1024


def test_checksum() -> None:
    assert Rom(bytes([0xFF]) * 1024).checksum() == 0xFC00
    # copier header bytes are not counted
    assert Rom(bytes([0xFF]) * 512 + bytes(1024)).checksum() == 0

    image = bytearray(0x300000)
    image[0] = 1
    assert Rom(image).checksum() == 2


def test_read_tile_and_palette() -> None:
    image = bytearray(1024)
    image[0x10:0x18] = bytes.fromhex("183c7edbff245a81")
    image[0x100:0x102] = b"\x1f\x00"
    rom = Rom(image)

    tile = rom.read_tile(0x10, Tile1BPP)
    palette = rom.read_palette(0x100, Palette16)

    assert tile.get_pixel(3, 0) == 1
    assert palette.get(0).red == 31
    assert len(rom.read_tiles(0, Tile2BPPPlanar, 4)) == 4
    with pytest.raises(RomReadError):
        rom.read_tile(1020, Tile1BPP)


def test_header_requires_64_bytes() -> None:
    with pytest.raises(DataLengthMismatch) as exc:
        SnesHeader.from_bytes(bytes(10))
    assert exc.value.expected == 64
