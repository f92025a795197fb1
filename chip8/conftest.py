"""Shared pytest fixtures for the CHIP-8 core tests."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np
import pytest

from chip8.config import Chip8Config
from chip8.emulator import Chip8Emulator
from chip8.timers import TICK_INTERVAL_NS


class FakeClock:
    """Manually advanced monotonic clock in nanoseconds."""

    def __init__(self, start: int = 1_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ns: int) -> None:
        self.now += ns

    def advance_ticks(self, ticks: float) -> None:
        self.now += int(ticks * TICK_INTERVAL_NS)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_emulator(clock: FakeClock) -> Callable[..., Chip8Emulator]:
    """Build an emulator with a frozen clock, a seeded RNG and a program."""

    def _make(
        words: tuple = (),
        config: Optional[Chip8Config] = None,
        seed: int = 1234,
    ) -> Chip8Emulator:
        program = b"".join(word.to_bytes(2, "big") for word in words)
        return Chip8Emulator(
            config,
            rng=np.random.default_rng(seed),
            clock=clock,
            program=program,
        )

    return _make
