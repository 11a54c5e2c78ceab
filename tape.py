from __future__ import annotations

from enum import Enum
from typing import Callable

from brainfuck import TapeBoundsError

DEFAULT_TAPE_SIZE = 30000


class Advisory(Enum):
    OVERFLOW = "Integer overflow"
    UNDERFLOW = "Integer underflow"


class Tape:
    """A fixed number of unsigned 8-bit cells and a cursor into them.

    Cells wrap around on increment and decrement; each wrap is reported to
    ``on_wrap`` and counted in :attr:`wraps`. Moving the cursor off either end
    raises :class:`TapeBoundsError` and leaves the cursor where it was.
    """

    def __init__(self, capacity: int = DEFAULT_TAPE_SIZE, on_wrap: Callable[[Advisory], None] | None = None):
        if capacity < 1:
            raise ValueError(f"Tape capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.cells = bytearray(capacity)
        self.cursor = 0
        self.wraps = 0
        self.on_wrap = on_wrap

    @property
    def value(self) -> int:
        return self.cells[self.cursor]

    def store(self, byte: int):
        self.cells[self.cursor] = byte & 0xFF

    def increment(self):
        if self.cells[self.cursor] == 255:
            self._wrapped(Advisory.OVERFLOW)
            self.cells[self.cursor] = 0
        else:
            self.cells[self.cursor] += 1

    def decrement(self):
        if self.cells[self.cursor] == 0:
            self._wrapped(Advisory.UNDERFLOW)
            self.cells[self.cursor] = 255
        else:
            self.cells[self.cursor] -= 1

    def move_right(self):
        if self.cursor + 1 >= self.capacity:
            raise TapeBoundsError("Array exceeded")
        self.cursor += 1

    def move_left(self):
        if self.cursor == 0:
            raise TapeBoundsError("Array underflow")
        self.cursor -= 1

    def _wrapped(self, advisory: Advisory):
        self.wraps += 1
        if self.on_wrap is not None:
            self.on_wrap(advisory)

    def __repr__(self):
        return f"Tape(capacity={self.capacity}, cursor={self.cursor}, value={self.value})"
