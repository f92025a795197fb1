"""Hexadecimal keypad symbols delivered by the host."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Union


class Key(IntEnum):
    """The sixteen keys of the COSMAC VIP keypad, valued by their hex digit."""

    KEY_0 = 0x0
    KEY_1 = 0x1
    KEY_2 = 0x2
    KEY_3 = 0x3
    KEY_4 = 0x4
    KEY_5 = 0x5
    KEY_6 = 0x6
    KEY_7 = 0x7
    KEY_8 = 0x8
    KEY_9 = 0x9
    KEY_A = 0xA
    KEY_B = 0xB
    KEY_C = 0xC
    KEY_D = 0xD
    KEY_E = 0xE
    KEY_F = 0xF


KeyLike = Union[Key, int]


def coerce_key(value: Optional[KeyLike]) -> Optional[Key]:
    """Normalise a host-supplied key; ``None`` means no key is pending."""

    if value is None:
        return None
    try:
        return Key(value)
    except ValueError:
        raise ValueError(f"Not a keypad symbol: {value!r}") from None


__all__ = ["Key", "KeyLike", "coerce_key"]
