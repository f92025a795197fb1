"""Behavioural configuration for the CHIP-8 interpreter."""

from dataclasses import dataclass
from enum import Enum
import json
import logging

logger = logging.getLogger(__name__)

DEFAULT_CLOCK_HZ = 700


class ShiftQuirk(Enum):
    """Operand read by 8XY6/8XYE."""

    VX = "vx"  # CHIP-48 / SUPER-CHIP: shift Vx in place
    VY = "vy"  # COSMAC VIP: Vx = Vy shifted


class LoadStoreQuirk(Enum):
    """Effect of FX55/FX65 on the index register."""

    KEEP_INDEX = "keep_index"
    INCREMENT_INDEX = "increment_index"  # COSMAC VIP: I += X + 1


@dataclass(frozen=True)
class Chip8Config:
    """Interpreter configuration, fixed for the lifetime of an emulator."""

    shift: ShiftQuirk = ShiftQuirk.VX
    load_store: LoadStoreQuirk = LoadStoreQuirk.KEEP_INDEX
    clock_hz: int = DEFAULT_CLOCK_HZ  # suggested step rate for host loops

    def __post_init__(self):
        if not isinstance(self.shift, ShiftQuirk):
            raise TypeError(f"shift must be a ShiftQuirk, got {self.shift!r}")
        if not isinstance(self.load_store, LoadStoreQuirk):
            raise TypeError(
                f"load_store must be a LoadStoreQuirk, got {self.load_store!r}"
            )
        if self.clock_hz <= 0:
            raise ValueError(f"clock_hz must be positive, got {self.clock_hz}")

    def to_dict(self) -> dict:
        return {
            "shift": self.shift.value,
            "load_store": self.load_store.value,
            "clock_hz": self.clock_hz,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Chip8Config":
        return cls(
            shift=ShiftQuirk(data.get("shift", ShiftQuirk.VX.value)),
            load_store=LoadStoreQuirk(
                data.get("load_store", LoadStoreQuirk.KEEP_INDEX.value)
            ),
            clock_hz=int(data.get("clock_hz", DEFAULT_CLOCK_HZ)),
        )

    def save(self, path: str) -> None:
        """Save configuration to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str) -> "Chip8Config":
        """Load configuration from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def for_profile(cls, profile: str) -> "Chip8Config":
        """Get configuration for a named interpreter lineage.

        Unknown names fall back to ``"default"``.
        """
        profiles = {
            "default": cls(),
            "chip8": cls(
                shift=ShiftQuirk.VY,
                load_store=LoadStoreQuirk.INCREMENT_INDEX,
            ),
            "chip48": cls(
                shift=ShiftQuirk.VX,
                load_store=LoadStoreQuirk.KEEP_INDEX,
            ),
        }
        if profile not in profiles:
            logger.debug("Unknown profile %r, using default", profile)
        return profiles.get(profile, profiles["default"])


__all__ = ["Chip8Config", "ShiftQuirk", "LoadStoreQuirk", "DEFAULT_CLOCK_HZ"]
