"""Configuration system for the CHIP-8 interpreter."""

from .machine_config import Chip8Config, LoadStoreQuirk, ShiftQuirk

__all__ = ["Chip8Config", "ShiftQuirk", "LoadStoreQuirk"]
