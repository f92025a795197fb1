"""Exception taxonomy for the CHIP-8 interpreter core."""

from __future__ import annotations


class Chip8Error(Exception):
    """Base class for every error raised by the interpreter core."""


class ProgramTooLarge(Chip8Error):
    """Program image does not fit in the program region."""

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"Invalid program size {length} (max {limit} bytes)")


class InvalidOpcode(Chip8Error):
    def __init__(self, word: int, pc: int | None = None) -> None:
        self.word = word
        self.pc = pc
        where = f" at 0x{pc:03X}" if pc is not None else ""
        super().__init__(f"Invalid opcode: 0x{word:04X}{where}")


class InvalidMemoryAddress(Chip8Error):
    """Access outside the address space, or a write into the glyph table."""

    def __init__(self, address: int, reason: str = "out of bounds") -> None:
        self.address = address
        self.reason = reason
        super().__init__(f"Invalid memory address: 0x{address:X} ({reason})")


class InvalidRegister(Chip8Error):
    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"Invalid register: V{index:X}")


class StackOverflow(Chip8Error):
    """CALL executed with all sixteen stack slots in use."""

    def __init__(self, pc: int) -> None:
        self.pc = pc
        super().__init__(f"Stack overflow at 0x{pc:03X}")


class StackUnderflow(Chip8Error):
    """RET executed with an empty stack."""

    def __init__(self, pc: int) -> None:
        self.pc = pc
        super().__init__(f"Stack underflow at 0x{pc:03X}")


__all__ = [
    "Chip8Error",
    "ProgramTooLarge",
    "InvalidOpcode",
    "InvalidMemoryAddress",
    "InvalidRegister",
    "StackOverflow",
    "StackUnderflow",
]
