"""Monochrome 64x32 framebuffer with XOR sprite blits."""

from __future__ import annotations

from typing import Iterator, Sequence, overload

import numpy as np

WIDTH = 64
HEIGHT = 32


class Framebuffer:
    """Bit grid addressed with wraparound on both axes."""

    def __init__(self) -> None:
        self.width = WIDTH
        self.height = HEIGHT
        self._bits = np.zeros((HEIGHT, WIDTH), dtype=np.bool_)

    def clear(self) -> None:
        self._bits[:, :] = False

    def draw_sprite(self, x: int, y: int, sprite: Sequence[int]) -> bool:
        """XOR ``sprite`` onto the grid at ``(x, y)`` and report collisions.

        Each byte is one row, most-significant bit leftmost. Rows and columns
        that run off an edge wrap to the opposite edge. The return value is
        True iff some lit pixel was turned off by a lit sprite bit.
        """

        collision = False
        for row_offset, row in enumerate(sprite):
            row_bits = np.unpackbits(np.array([row & 0xFF], dtype=np.uint8)).astype(
                np.bool_
            )
            if not row_bits.any():
                continue
            dest_row = (y + row_offset) % self.height
            columns = (x + np.arange(8)) % self.width
            current = self._bits[dest_row, columns]
            if np.any(current & row_bits):
                collision = True
            self._bits[dest_row, columns] = current ^ row_bits
        return collision

    def pixel(self, x: int, y: int) -> bool:
        return bool(self._bits[y % self.height, x % self.width])

    def pixels(self) -> "PixelView":
        return PixelView(self._bits)

    def as_array(self) -> np.ndarray:
        """Return a read-only copy shaped ``(height, width)``."""
        snapshot = self._bits.copy()
        snapshot.setflags(write=False)
        return snapshot

    def lit_count(self) -> int:
        return int(np.count_nonzero(self._bits))


class PixelView(Sequence[bool]):
    """Read-only row-major sequence of pixel states over a live framebuffer.

    Iteration is lazy and restartable; each pass reflects the grid as it is
    when the pass runs.
    """

    def __init__(self, bits: np.ndarray) -> None:
        self._bits = bits

    def __len__(self) -> int:
        return int(self._bits.size)

    @overload
    def __getitem__(self, index: int) -> bool: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[bool]: ...

    def __getitem__(self, index):
        flat = self._bits.reshape(-1)
        if isinstance(index, slice):
            return tuple(bool(value) for value in flat[index])
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("pixel index out of range")
        return bool(flat[index])

    def __iter__(self) -> Iterator[bool]:
        for value in self._bits.flat:
            yield bool(value)


__all__ = ["Framebuffer", "PixelView", "WIDTH", "HEIGHT"]
