"""CHIP-8 interpreter core package."""

from .config import Chip8Config, LoadStoreQuirk, ShiftQuirk
from .display import Framebuffer, PixelView
from .emulator import Chip8Emulator, StepStatus
from .errors import (
    Chip8Error,
    InvalidMemoryAddress,
    InvalidOpcode,
    InvalidRegister,
    ProgramTooLarge,
    StackOverflow,
    StackUnderflow,
)
from .keypad import Key
from .memory import Chip8Memory, MAX_PROGRAM_SIZE, PROGRAM_START
from .opcode import Opcode
from .registers import RegisterFile
from .state_model import (
    CPUState,
    EmulatorState,
    FieldDiff,
    StateDiff,
    TimerState,
    capture_state,
    diff_states,
    empty_state_diff,
)
from .timers import Chip8Timers

__all__ = [
    "Chip8Emulator",
    "StepStatus",
    "Chip8Config",
    "ShiftQuirk",
    "LoadStoreQuirk",
    "Chip8Memory",
    "Chip8Timers",
    "Framebuffer",
    "PixelView",
    "RegisterFile",
    "Opcode",
    "Key",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
    "Chip8Error",
    "ProgramTooLarge",
    "InvalidOpcode",
    "InvalidMemoryAddress",
    "InvalidRegister",
    "StackOverflow",
    "StackUnderflow",
    "CPUState",
    "TimerState",
    "EmulatorState",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "diff_states",
    "empty_state_diff",
]
