"""Canonical emulator state snapshots and diff utilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from .emulator import Chip8Emulator


@dataclass(frozen=True)
class CPUState:
    """Register file, index register, program counter and call stack."""

    registers: Tuple[int, ...]
    index: int
    pc: int
    sp: int
    stack: Tuple[int, ...]
    instruction_count: int


@dataclass(frozen=True)
class TimerState:
    delay: int
    sound: int


@dataclass(frozen=True)
class EmulatorState:
    """Composite immutable snapshot of emulator subsystems."""

    cpu: CPUState
    timers: TimerState
    program: bytes
    display: bytes
    pending_key: Optional[int]


@dataclass(frozen=True)
class FieldDiff:
    """Difference for a single named field."""

    name: str
    before: object
    after: object


@dataclass(frozen=True)
class StateDiff:
    """Aggregated differences between two emulator states."""

    cpu: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    timers: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    program_changed: bool = False
    display_changed: bool = False
    key_changed: bool = False

    def is_empty(self) -> bool:
        """Return True when no differences were recorded."""

        return (
            not self.cpu
            and not self.timers
            and not self.program_changed
            and not self.display_changed
            and not self.key_changed
        )


def empty_state_diff() -> StateDiff:
    """Return a reusable empty diff instance."""

    return StateDiff()


def capture_state(emulator: Chip8Emulator) -> EmulatorState:
    """Capture the current emulator state as canonical snapshot."""

    cpu = CPUState(
        registers=emulator.registers.as_tuple(),
        index=emulator.index,
        pc=emulator.pc,
        sp=emulator.sp,
        stack=emulator.stack,
        instruction_count=emulator.instruction_count,
    )
    timers = TimerState(delay=emulator.timers.delay, sound=emulator.timers.sound)
    key = emulator.pending_key
    return EmulatorState(
        cpu=cpu,
        timers=timers,
        program=emulator.memory.program_space(),
        display=emulator.framebuffer.as_array().tobytes(),
        pending_key=None if key is None else int(key),
    )


def diff_states(before: Optional[EmulatorState], after: EmulatorState) -> StateDiff:
    """Compute structured differences between two emulator states."""

    if before is None:
        return empty_state_diff()

    return StateDiff(
        cpu=_diff_cpu(before.cpu, after.cpu),
        timers=_diff_timers(before.timers, after.timers),
        program_changed=before.program != after.program,
        display_changed=before.display != after.display,
        key_changed=before.pending_key != after.pending_key,
    )


def _diff_cpu(before: CPUState, after: CPUState) -> Tuple[FieldDiff, ...]:
    diffs: list[FieldDiff] = []
    diffs.extend(_diff_registers(before.registers, after.registers))
    for name in ("index", "pc", "sp", "stack", "instruction_count"):
        previous = getattr(before, name)
        current = getattr(after, name)
        if previous != current:
            diffs.append(FieldDiff(name, previous, current))
    return tuple(diffs)


def _diff_timers(before: TimerState, after: TimerState) -> Tuple[FieldDiff, ...]:
    diffs: list[FieldDiff] = []
    if before.delay != after.delay:
        diffs.append(FieldDiff("delay", before.delay, after.delay))
    if before.sound != after.sound:
        diffs.append(FieldDiff("sound", before.sound, after.sound))
    return tuple(diffs)


def _diff_registers(
    before: Tuple[int, ...], after: Tuple[int, ...]
) -> Iterable[FieldDiff]:
    for index, (previous, current) in enumerate(zip(before, after)):
        if previous != current:
            yield FieldDiff(f"v{index:x}", previous, current)


__all__ = [
    "CPUState",
    "TimerState",
    "EmulatorState",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "diff_states",
    "empty_state_diff",
]
