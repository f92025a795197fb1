"""General-purpose register file (V0..VF)."""

from __future__ import annotations

from typing import Iterable, Tuple

from .errors import InvalidRegister

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF


class RegisterFile:
    """Sixteen 8-bit registers; VF doubles as the flag output."""

    def __init__(self) -> None:
        self._values = [0] * REGISTER_COUNT

    def get(self, index: int) -> int:
        self._check(index)
        return self._values[index]

    def set(self, index: int, value: int) -> None:
        self._check(index)
        self._values[index] = value & 0xFF

    def set_flag(self, value: int) -> None:
        self._values[FLAG_REGISTER] = value & 0xFF

    def clear(self) -> None:
        self._values = [0] * REGISTER_COUNT

    def load_from(self, values: Iterable[int]) -> None:
        """Write ``values`` into V0, V1, ... in order."""
        for index, value in enumerate(values):
            self.set(index, value)

    def as_tuple(self) -> Tuple[int, ...]:
        return tuple(self._values)

    def __len__(self) -> int:
        return REGISTER_COUNT

    def __repr__(self) -> str:
        body = " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(self._values))
        return f"RegisterFile({body})"

    @staticmethod
    def _check(index: int) -> None:
        if not 0 <= index < REGISTER_COUNT:
            raise InvalidRegister(index)


__all__ = ["RegisterFile", "REGISTER_COUNT", "FLAG_REGISTER"]
