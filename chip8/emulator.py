"""CHIP-8 interpreter core: fetch, decode and execute one cycle at a time."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from .config import Chip8Config, LoadStoreQuirk, ShiftQuirk
from .display import Framebuffer, PixelView
from .errors import Chip8Error, InvalidOpcode, StackOverflow, StackUnderflow
from .keypad import Key, KeyLike, coerce_key
from .memory import GLYPH_SIZE, PROGRAM_START, Chip8Memory, ProgramSource
from .opcode import Opcode
from .registers import RegisterFile
from .timers import Chip8Timers, Clock

logger = logging.getLogger(__name__)

STACK_DEPTH = 16


class StepStatus(Enum):
    """Outcome of a single :meth:`Chip8Emulator.step`."""

    ADVANCED = "advanced"
    WAITING_FOR_KEY = "waiting_for_key"


class Chip8Emulator:
    """CHIP-8 virtual machine owning memory, registers, display and timers.

    The host calls :meth:`step` once per emulated cycle and feeds input
    through :meth:`set_key`. Nothing here blocks: FX0A with no pending key
    returns ``StepStatus.WAITING_FOR_KEY`` and leaves PC on the same
    instruction.
    """

    def __init__(
        self,
        config: Optional[Chip8Config] = None,
        *,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[Clock] = None,
        program: Optional[ProgramSource] = None,
    ) -> None:
        self._config = config or Chip8Config()
        self._rng = rng if rng is not None else np.random.default_rng()
        self._memory = Chip8Memory()
        self._framebuffer = Framebuffer()
        self._timers = Chip8Timers(clock)
        self._registers = RegisterFile()
        self._index = 0
        self._pc = PROGRAM_START
        self._sp = 0
        self._stack: List[int] = [0] * STACK_DEPTH
        self._pending_key: Optional[Key] = None
        self._instruction_count = 0

        self._families: Tuple[Callable[[Opcode, int], Optional[int]], ...] = (
            self._exec_system,
            self._exec_jump,
            self._exec_call,
            self._exec_skip_eq_imm,
            self._exec_skip_ne_imm,
            self._exec_skip_eq_reg,
            self._exec_load_imm,
            self._exec_add_imm,
            self._exec_alu,
            self._exec_skip_ne_reg,
            self._exec_load_index,
            self._exec_jump_offset,
            self._exec_random,
            self._exec_draw,
            self._exec_key_skip,
            self._exec_misc,
        )

        logger.debug(
            "Chip8Emulator configured: shift=%s load_store=%s",
            self._config.shift.name,
            self._config.load_store.name,
        )
        if program is not None:
            self.load_program(program)

    # ------------------------------------------------------------------
    # Host-facing surface
    # ------------------------------------------------------------------

    @property
    def config(self) -> Chip8Config:
        return self._config

    @property
    def memory(self) -> Chip8Memory:
        return self._memory

    @property
    def framebuffer(self) -> Framebuffer:
        return self._framebuffer

    @property
    def timers(self) -> Chip8Timers:
        return self._timers

    @property
    def registers(self) -> RegisterFile:
        return self._registers

    @property
    def instruction_count(self) -> int:
        """Instructions completed; FX0A polls that hold PC are not counted."""
        return self._instruction_count

    @property
    def pc(self) -> int:
        return self._pc

    @property
    def index(self) -> int:
        return self._index

    @property
    def sp(self) -> int:
        return self._sp

    @property
    def stack(self) -> Tuple[int, ...]:
        """Return addresses currently on the stack, oldest first."""
        return tuple(self._stack[: self._sp])

    @property
    def pending_key(self) -> Optional[Key]:
        return self._pending_key

    def load_program(self, source: ProgramSource) -> int:
        return self.memory.load_program(source)

    def set_key(self, key: Optional[KeyLike]) -> None:
        """Set or clear the single pending key, replacing any earlier one."""
        self._pending_key = coerce_key(key)

    def display(self) -> PixelView:
        return self.framebuffer.pixels()

    def reset(self) -> None:
        """Return to power-on state; the glyph table is kept."""

        self.memory.clear()
        self.framebuffer.clear()
        self.timers.reset()
        self.registers.clear()
        self._index = 0
        self._pc = PROGRAM_START
        self._sp = 0
        self._stack = [0] * STACK_DEPTH
        self._pending_key = None
        self._instruction_count = 0
        logger.debug("Emulator reset")

    def step(self) -> StepStatus:
        """Tick timers, then fetch, decode and execute one instruction."""

        self.timers.tick()
        pc = self._pc
        try:
            opcode = self.memory.fetch_opcode(pc)
            next_pc = self._families[opcode.hi_nibble](opcode, pc + 2)
        except Chip8Error as exc:
            logger.warning("Execution halted at 0x%03X: %s", pc, exc)
            raise

        if next_pc is None:
            return StepStatus.WAITING_FOR_KEY
        self._pc = next_pc
        self._instruction_count += 1
        return StepStatus.ADVANCED

    def run(self, cycles: int) -> int:
        """Step up to ``cycles`` times, stopping early while waiting for a key."""

        executed = 0
        while executed < cycles:
            status = self.step()
            executed += 1
            if status is StepStatus.WAITING_FOR_KEY:
                break
        return executed

    def get_cpu_state(self) -> Dict[str, Any]:
        return {
            "pc": self._pc,
            "i": self._index,
            "sp": self._sp,
            "v": self.registers.as_tuple(),
            "stack": self.stack,
            "delay": self.timers.delay,
            "sound": self.timers.sound,
            "pending_key": self._pending_key,
        }

    # ------------------------------------------------------------------
    # Instruction families; each returns the next PC, or None to hold PC
    # ------------------------------------------------------------------

    def _exec_system(self, op: Opcode, next_pc: int) -> Optional[int]:
        if op.lo_byte == 0xE0:  # CLS
            self.framebuffer.clear()
        elif op.lo_byte == 0xEE:  # RET
            if self._sp == 0:
                raise StackUnderflow(self._pc)
            self._sp -= 1
            next_pc = self._stack[self._sp]
        # 0nnn SYS: machine-code routines are not emulated
        return next_pc

    def _exec_jump(self, op: Opcode, next_pc: int) -> Optional[int]:
        return op.addr

    def _exec_call(self, op: Opcode, next_pc: int) -> Optional[int]:
        if self._sp >= STACK_DEPTH:
            raise StackOverflow(self._pc)
        self._stack[self._sp] = next_pc
        self._sp += 1
        return op.addr

    def _exec_skip_eq_imm(self, op: Opcode, next_pc: int) -> Optional[int]:
        if self.registers.get(op.x) == op.kk:
            next_pc += 2
        return next_pc

    def _exec_skip_ne_imm(self, op: Opcode, next_pc: int) -> Optional[int]:
        if self.registers.get(op.x) != op.kk:
            next_pc += 2
        return next_pc

    def _exec_skip_eq_reg(self, op: Opcode, next_pc: int) -> Optional[int]:
        if self.registers.get(op.x) == self.registers.get(op.y):
            next_pc += 2
        return next_pc

    def _exec_load_imm(self, op: Opcode, next_pc: int) -> Optional[int]:
        self.registers.set(op.x, op.kk)
        return next_pc

    def _exec_add_imm(self, op: Opcode, next_pc: int) -> Optional[int]:
        self.registers.set(op.x, self.registers.get(op.x) + op.kk)
        return next_pc

    def _exec_alu(self, op: Opcode, next_pc: int) -> Optional[int]:
        regs = self.registers
        vx = regs.get(op.x)
        vy = regs.get(op.y)
        sub = op.n

        if sub == 0x0:
            regs.set(op.x, vy)
        elif sub == 0x1:
            regs.set(op.x, vx | vy)
        elif sub == 0x2:
            regs.set(op.x, vx & vy)
        elif sub == 0x3:
            regs.set(op.x, vx ^ vy)
        elif sub == 0x4:
            total = vx + vy
            regs.set(op.x, total)
            regs.set_flag(1 if total > 0xFF else 0)
        elif sub == 0x5:
            regs.set(op.x, vx - vy)
            regs.set_flag(1 if vx >= vy else 0)
        elif sub == 0x7:
            regs.set(op.x, vy - vx)
            regs.set_flag(1 if vy >= vx else 0)
        elif sub == 0x6:
            operand = vx if self._config.shift is ShiftQuirk.VX else vy
            regs.set(op.x, operand >> 1)
            regs.set_flag(operand & 0x01)
        elif sub == 0xE:
            operand = vx if self._config.shift is ShiftQuirk.VX else vy
            regs.set(op.x, operand << 1)
            regs.set_flag(operand >> 7)
        else:
            raise InvalidOpcode(op.word, self._pc)
        return next_pc

    def _exec_skip_ne_reg(self, op: Opcode, next_pc: int) -> Optional[int]:
        if self.registers.get(op.x) != self.registers.get(op.y):
            next_pc += 2
        return next_pc

    def _exec_load_index(self, op: Opcode, next_pc: int) -> Optional[int]:
        self._index = op.addr
        return next_pc

    def _exec_jump_offset(self, op: Opcode, next_pc: int) -> Optional[int]:
        return op.addr + self.registers.get(0)

    def _exec_random(self, op: Opcode, next_pc: int) -> Optional[int]:
        value = int(self._rng.integers(0, 256))
        self.registers.set(op.x, value & op.kk)
        return next_pc

    def _exec_draw(self, op: Opcode, next_pc: int) -> Optional[int]:
        sprite = self.memory.read_block(self._index, op.n)
        collision = self.framebuffer.draw_sprite(
            self.registers.get(op.x), self.registers.get(op.y), sprite
        )
        self.registers.set_flag(1 if collision else 0)
        return next_pc

    def _exec_key_skip(self, op: Opcode, next_pc: int) -> Optional[int]:
        if op.lo_byte not in (0x9E, 0xA1):
            raise InvalidOpcode(op.word, self._pc)

        key = self._take_key()
        vx = self.registers.get(op.x)
        if op.lo_byte == 0x9E:  # SKP
            if key is not None and key == vx:
                next_pc += 2
        elif key is None or key != vx:  # SKNP
            next_pc += 2
        return next_pc

    def _exec_misc(self, op: Opcode, next_pc: int) -> Optional[int]:
        regs = self.registers
        sub = op.lo_byte

        if sub == 0x07:
            regs.set(op.x, self.timers.delay)
        elif sub == 0x0A:
            key = self._take_key()
            if key is None:
                return None
            regs.set(op.x, int(key))
        elif sub == 0x15:
            self.timers.delay = regs.get(op.x)
        elif sub == 0x18:
            self.timers.sound = regs.get(op.x)
        elif sub == 0x1E:
            self._index = (self._index + regs.get(op.x)) & 0xFFFF
        elif sub == 0x29:
            # Not masked to a hex digit: values above 0xF point past the glyph table.
            self._index = regs.get(op.x) * GLYPH_SIZE
        elif sub == 0x33:
            value = regs.get(op.x)
            self.memory.write_block(
                self._index, bytes((value // 100, (value // 10) % 10, value % 10))
            )
        elif sub == 0x55:
            values = regs.as_tuple()[: op.x + 1]
            self.memory.write_block(self._index, bytes(values))
            self._advance_index_after_block(op.x)
        elif sub == 0x65:
            regs.load_from(self.memory.read_block(self._index, op.x + 1))
            self._advance_index_after_block(op.x)
        else:
            raise InvalidOpcode(op.word, self._pc)
        return next_pc

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _take_key(self) -> Optional[Key]:
        key, self._pending_key = self._pending_key, None
        return key

    def _advance_index_after_block(self, x: int) -> None:
        if self._config.load_store is LoadStoreQuirk.INCREMENT_INDEX:
            self._index = (self._index + x + 1) & 0xFFFF


__all__ = ["Chip8Emulator", "StepStatus", "STACK_DEPTH"]
