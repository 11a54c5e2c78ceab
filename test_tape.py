from __future__ import annotations

import pytest

from brainfuck import TapeBoundsError
from tape import DEFAULT_TAPE_SIZE, Advisory, Tape


def test_fresh_tape():
    tape = Tape()
    assert tape.capacity == DEFAULT_TAPE_SIZE == 30000
    assert tape.cursor == 0
    assert not any(tape.cells)


def test_increment_then_decrement_is_identity():
    advisories = []
    tape = Tape(4, on_wrap=advisories.append)
    tape.increment()
    tape.decrement()
    assert tape.value == 0
    assert advisories == []


def test_decrement_then_increment_wraps_both_ways():
    advisories = []
    tape = Tape(4, on_wrap=advisories.append)
    tape.decrement()
    assert tape.value == 255
    assert advisories == [Advisory.UNDERFLOW]
    tape.increment()
    assert tape.value == 0
    assert advisories == [Advisory.UNDERFLOW, Advisory.OVERFLOW]
    assert tape.wraps == 2


def test_overflow_advisory_only_at_the_wrap():
    advisories = []
    tape = Tape(1, on_wrap=advisories.append)
    for _ in range(255):
        tape.increment()
    assert tape.value == 255
    assert advisories == []
    tape.increment()
    assert tape.value == 0
    assert advisories == [Advisory.OVERFLOW]


def test_wraps_are_counted_without_a_sink():
    tape = Tape(1)
    tape.decrement()
    assert tape.wraps == 1


@pytest.mark.parametrize("capacity", [1, 2, 5, 100])
def test_move_right_stops_at_last_cell(capacity):
    tape = Tape(capacity)
    for _ in range(capacity - 1):
        tape.move_right()
    assert tape.cursor == capacity - 1
    with pytest.raises(TapeBoundsError):
        tape.move_right()
    assert tape.cursor == capacity - 1


def test_move_left_from_first_cell_fails():
    tape = Tape(10)
    with pytest.raises(TapeBoundsError):
        tape.move_left()
    assert tape.cursor == 0


def test_cells_change_only_under_cursor():
    tape = Tape(3)
    tape.move_right()
    tape.increment()
    tape.store(0x141)
    assert list(tape.cells) == [0, 0x41, 0]
    tape.move_left()
    assert tape.value == 0


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        Tape(0)
