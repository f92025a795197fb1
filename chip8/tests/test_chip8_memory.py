"""Tests for the CHIP-8 address space."""

from __future__ import annotations

import io

import pytest

from chip8.errors import InvalidMemoryAddress, ProgramTooLarge
from chip8.memory import (
    GLYPH_TABLE,
    GLYPH_TABLE_END,
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
    Chip8Memory,
)

TEST_ROM = bytes([0x01, 0x02, 0x03, 0x04])


def test_new_memory_holds_glyphs_and_empty_program_region() -> None:
    mem = Chip8Memory()

    assert len(mem) == MEMORY_SIZE
    assert mem.glyph_table() == GLYPH_TABLE
    assert GLYPH_TABLE_END == 80
    assert not any(mem.program_space())


def test_max_program_size_constant() -> None:
    assert MAX_PROGRAM_SIZE == 0xFFF - 0x200 == 3583


def test_load_program_copies_bytes_and_fetches_big_endian() -> None:
    mem = Chip8Memory()

    assert mem.load_program(TEST_ROM) == len(TEST_ROM)

    assert mem.program_space()[: len(TEST_ROM)] == TEST_ROM
    assert not any(mem.program_space()[len(TEST_ROM) :])
    assert mem.fetch_opcode(PROGRAM_START).word == 0x0102
    assert mem.fetch_opcode(PROGRAM_START + 2).word == 0x0304


def test_load_program_accepts_max_size() -> None:
    mem = Chip8Memory()
    image = bytes([0xAB]) * MAX_PROGRAM_SIZE

    mem.load_program(image)

    assert mem.read_byte(PROGRAM_START + MAX_PROGRAM_SIZE - 1) == 0xAB
    assert mem.read_byte(MEMORY_SIZE - 1) == 0


def test_load_program_rejects_oversized_image_without_side_effects() -> None:
    mem = Chip8Memory()
    mem.load_program(TEST_ROM)
    before = mem.program_space()

    with pytest.raises(ProgramTooLarge) as excinfo:
        mem.load_program(bytes(MAX_PROGRAM_SIZE + 1))

    assert excinfo.value.length == MAX_PROGRAM_SIZE + 1
    assert mem.program_space() == before


def test_load_program_from_stream_and_path(tmp_path) -> None:
    mem = Chip8Memory()
    mem.load_program(io.BytesIO(TEST_ROM))
    assert mem.fetch_opcode(PROGRAM_START).word == 0x0102

    rom_path = tmp_path / "prog.ch8"
    rom_path.write_bytes(b"\x60\x0a")
    loaded = Chip8Memory.from_program(rom_path)
    assert loaded.fetch_opcode(PROGRAM_START).word == 0x600A


def test_stream_errors_propagate_as_oserror(tmp_path) -> None:
    mem = Chip8Memory()
    with pytest.raises(OSError):
        mem.load_program(tmp_path / "missing.ch8")


def test_reload_overlays_previous_image() -> None:
    mem = Chip8Memory()
    mem.load_program(b"\xAA\xBB\xCC\xDD")
    mem.load_program(b"\x11")

    assert mem.program_space()[:4] == b"\x11\xBB\xCC\xDD"


def test_clear_zeroes_program_region_and_keeps_glyphs() -> None:
    mem = Chip8Memory()
    mem.load_program(TEST_ROM)
    mem.write_byte(0x100, 0x55)

    mem.clear()

    assert not any(mem.program_space())
    assert mem.glyph_table() == GLYPH_TABLE
    # The reserved area between glyphs and program is not program space.
    assert mem.read_byte(0x100) == 0x55


def test_fetch_past_end_of_memory_is_an_error() -> None:
    mem = Chip8Memory()
    mem.fetch_opcode(MEMORY_SIZE - 2)
    with pytest.raises(InvalidMemoryAddress):
        mem.fetch_opcode(MEMORY_SIZE - 1)


def test_glyph_table_is_write_protected() -> None:
    mem = Chip8Memory()
    with pytest.raises(InvalidMemoryAddress):
        mem.write_byte(0x00, 0xFF)
    with pytest.raises(InvalidMemoryAddress):
        mem.write_block(GLYPH_TABLE_END - 1, b"\x00\x00")
    assert mem.glyph_table() == GLYPH_TABLE

    mem.write_byte(GLYPH_TABLE_END, 0x1FF)
    assert mem.read_byte(GLYPH_TABLE_END) == 0xFF


def test_block_access_is_bounds_checked() -> None:
    mem = Chip8Memory()
    assert mem.read_block(MEMORY_SIZE - 2, 2) == b"\x00\x00"
    with pytest.raises(InvalidMemoryAddress):
        mem.read_block(MEMORY_SIZE - 2, 3)
    with pytest.raises(InvalidMemoryAddress):
        mem.write_block(MEMORY_SIZE - 1, b"\x01\x02")
    with pytest.raises(InvalidMemoryAddress):
        mem.read_byte(-1)


def test_glyph_address() -> None:
    assert Chip8Memory.glyph_address(0) == 0
    assert Chip8Memory.glyph_address(0xA) == 50
    with pytest.raises(ValueError):
        Chip8Memory.glyph_address(16)
