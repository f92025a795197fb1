"""Field decoder for 16-bit CHIP-8 instruction words."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Opcode:
    """Structured view of one fetched instruction word.

    Every 16-bit value decodes; whether the word names a real instruction
    is decided by the interpreter when it dispatches.
    """

    word: int

    def __post_init__(self) -> None:
        if not 0 <= self.word <= 0xFFFF:
            raise ValueError(f"Opcode word out of range: {self.word!r}")

    @property
    def addr(self) -> int:
        return self.word & 0x0FFF

    @property
    def n(self) -> int:
        return self.word & 0x000F

    @property
    def x(self) -> int:
        return (self.word & 0x0F00) >> 8

    @property
    def y(self) -> int:
        return (self.word & 0x00F0) >> 4

    @property
    def kk(self) -> int:
        return self.word & 0x00FF

    @property
    def hi_nibble(self) -> int:
        """Instruction class (top nibble)."""
        return self.word >> 12

    @property
    def lo_byte(self) -> int:
        """Sub-opcode discriminant for the 0/8/E/F families."""
        return self.word & 0xFF

    def __repr__(self) -> str:
        return f"Opcode(0x{self.word:04X})"


def decode(high: int, low: int) -> Opcode:
    """Build an opcode from two bytes in memory order (big-endian)."""

    return Opcode(((high & 0xFF) << 8) | (low & 0xFF))


__all__ = ["Opcode", "decode"]
