"""Flat 4 KiB address space with the built-in hexadecimal glyph table."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO, Union

from .errors import InvalidMemoryAddress, ProgramTooLarge
from .opcode import Opcode, decode

logger = logging.getLogger(__name__)

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = 0xFFF - PROGRAM_START

GLYPH_SIZE = 5
# fmt: off
GLYPH_TABLE = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
# fmt: on
GLYPH_TABLE_END = len(GLYPH_TABLE)

ProgramSource = Union[bytes, bytearray, memoryview, BinaryIO, str, os.PathLike]


def _read_program(source: ProgramSource) -> bytes:
    """Collect a program image from bytes, a binary stream or a path."""

    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, (str, os.PathLike)):
        return Path(source).read_bytes()
    return bytes(source.read())


class Chip8Memory:
    """Interpreter memory: glyphs at 0x000, program image from 0x200."""

    def __init__(self) -> None:
        self._data = bytearray(MEMORY_SIZE)
        self._data[:GLYPH_TABLE_END] = GLYPH_TABLE

    @classmethod
    def from_program(cls, source: ProgramSource) -> "Chip8Memory":
        memory = cls()
        memory.load_program(source)
        return memory

    def __len__(self) -> int:
        return MEMORY_SIZE

    def load_program(self, source: ProgramSource) -> int:
        """Copy a program image to ``PROGRAM_START`` and return its length.

        Bytes past the end of the new image keep whatever a previous load
        left there; call :meth:`clear` first for a clean program region.
        Rejected images leave memory untouched.
        """

        image = _read_program(source)
        if len(image) > MAX_PROGRAM_SIZE:
            raise ProgramTooLarge(len(image), MAX_PROGRAM_SIZE)

        self._data[PROGRAM_START : PROGRAM_START + len(image)] = image
        logger.debug("Loaded %d program bytes at 0x%03X", len(image), PROGRAM_START)
        return len(image)

    def clear(self) -> None:
        """Zero the program region and restore the glyph table."""

        self._data[PROGRAM_START:] = bytes(MEMORY_SIZE - PROGRAM_START)
        self._data[:GLYPH_TABLE_END] = GLYPH_TABLE

    def fetch_opcode(self, pc: int) -> Opcode:
        if pc < 0 or pc + 1 >= MEMORY_SIZE:
            raise InvalidMemoryAddress(pc, "instruction fetch past end of memory")
        return decode(self._data[pc], self._data[pc + 1])

    def read_byte(self, address: int) -> int:
        self._check_range(address, 1)
        return self._data[address]

    def write_byte(self, address: int, value: int) -> None:
        self._check_writable(address, 1)
        self._data[address] = value & 0xFF

    def read_block(self, address: int, length: int) -> bytes:
        self._check_range(address, length)
        return bytes(self._data[address : address + length])

    def write_block(self, address: int, data: bytes) -> None:
        self._check_writable(address, len(data))
        self._data[address : address + len(data)] = data

    def program_space(self) -> bytes:
        return bytes(self._data[PROGRAM_START:])

    def glyph_table(self) -> bytes:
        return bytes(self._data[:GLYPH_TABLE_END])

    @staticmethod
    def glyph_address(digit: int) -> int:
        """Return the address of the built-in sprite for a hex digit."""
        if not 0 <= digit <= 0xF:
            raise ValueError(f"Glyph digit out of range: {digit}")
        return digit * GLYPH_SIZE

    def _check_range(self, address: int, length: int) -> None:
        if address < 0 or address + length > MEMORY_SIZE:
            raise InvalidMemoryAddress(address)

    def _check_writable(self, address: int, length: int) -> None:
        self._check_range(address, length)
        if length and address < GLYPH_TABLE_END:
            raise InvalidMemoryAddress(address, "glyph table is read-only")


__all__ = [
    "Chip8Memory",
    "ProgramSource",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
    "GLYPH_SIZE",
    "GLYPH_TABLE",
    "GLYPH_TABLE_END",
]
