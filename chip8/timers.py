"""Delay and sound timers decremented at a fixed 60 Hz wall-clock rate."""

from __future__ import annotations

import time
from typing import Callable, Optional

TIMER_HZ = 60
TICK_INTERVAL_NS = 1_000_000_000 // TIMER_HZ

Clock = Callable[[], int]


class Chip8Timers:
    """Two saturating 8-bit countdown counters sharing one 60 Hz gate.

    ``tick`` may be called at any rate. Each call decrements both counters by
    at most one, and only once a full interval has passed since the last
    satisfied tick. The check is a comparison against ``clock``; it never
    sleeps.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock or time.monotonic_ns
        self._delay = 0
        self._sound = 0
        self._previous_tick: Optional[int] = None

    @property
    def delay(self) -> int:
        return self._delay

    @delay.setter
    def delay(self, value: int) -> None:
        self._delay = value & 0xFF

    @property
    def sound(self) -> int:
        return self._sound

    @sound.setter
    def sound(self, value: int) -> None:
        self._sound = value & 0xFF

    @property
    def sound_active(self) -> bool:
        return self._sound > 0

    @property
    def previous_tick(self) -> Optional[int]:
        return self._previous_tick

    def tick(self) -> bool:
        """Apply at most one decrement; return True if the gate opened."""

        now = self._clock()
        if self._previous_tick is None:
            current = now
        elif now - self._previous_tick >= TICK_INTERVAL_NS:
            current = self._previous_tick + TICK_INTERVAL_NS
        else:
            return False

        self._delay = max(self._delay - 1, 0)
        self._sound = max(self._sound - 1, 0)
        self._previous_tick = current
        return True

    def reset(self) -> None:
        self._delay = 0
        self._sound = 0
        self._previous_tick = None


__all__ = ["Chip8Timers", "Clock", "TIMER_HZ", "TICK_INTERVAL_NS"]
