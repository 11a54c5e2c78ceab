from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Callable

from brainfuck import (BrainfuckError, BrainfuckProgram, Decrement, Increment, Input, LoopClose, LoopOpen,
                       MoveLeft, MoveRight, Output, TapeBoundsError, UnmatchedLoopClose, UnmatchedLoopOpen)
from tape import DEFAULT_TAPE_SIZE, Advisory, Tape

logger = logging.getLogger(__name__)

# Cell value stored by ',' once the input stream is exhausted.
EOF_VALUE = 0


class Outcome(Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(frozen=True, slots=True)
class RunResult:
    outcome: Outcome
    pc: int
    steps: int
    advisories: int
    error: BrainfuckError | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.COMPLETED


def find_loop_close(program: BrainfuckProgram, pc: int) -> int:
    """Scan forward from the '[' at ``pc`` and return the position of its matching ']'."""
    depth = 1
    i = pc
    while depth:
        i += 1
        if i >= len(program):
            raise UnmatchedLoopOpen(pc=pc)
        match program[i]:
            case LoopOpen():
                depth += 1
            case LoopClose():
                depth -= 1
    return i


def find_loop_open(program: BrainfuckProgram, pc: int) -> int:
    """Scan backward from the ']' at ``pc`` and return the position of its matching '['."""
    depth = 1
    i = pc
    while depth:
        if i == 0:
            raise UnmatchedLoopClose(pc=pc)
        i -= 1
        match program[i]:
            case LoopClose():
                depth += 1
            case LoopOpen():
                depth -= 1
    return i


def stream_reader(stream: BinaryIO) -> Callable[[], int]:
    def read() -> int:
        data = stream.read(1)
        return data[0] if data else EOF_VALUE

    return read


def stream_writer(stream: BinaryIO, flush: bool = True) -> Callable[[int], None]:
    def write(value: int):
        stream.write(bytes((value,)))
        if flush:
            stream.flush()

    return write


def log_advisory(advisory: Advisory, pc: int):
    logger.warning("%s (PC: %d)", advisory.value, pc)


class Interpreter:
    """Runs one program against a fresh tape.

    ``read`` supplies input bytes (returning :data:`EOF_VALUE` once input is
    exhausted) and ``write`` receives output bytes. Arithmetic wraparound is
    reported to ``on_advisory`` together with the program counter.
    """

    def __init__(self, program: BrainfuckProgram,
                 read: Callable[[], int] = lambda: EOF_VALUE,
                 write: Callable[[int], None] = lambda _: None,
                 tape_size: int = DEFAULT_TAPE_SIZE,
                 on_advisory: Callable[[Advisory, int], None] = log_advisory):
        self.program = program
        self.read = read
        self.write = write
        self.on_advisory = on_advisory
        self.tape = Tape(tape_size, on_wrap=self._advise)
        self.pc = 0
        self.steps = 0

    @property
    def done(self) -> bool:
        return self.pc >= len(self.program)

    def _advise(self, advisory: Advisory):
        self.on_advisory(advisory, self.pc)

    def step(self) -> bool:
        """Execute the instruction at the program counter; returns False once the program has finished."""
        if self.done:
            return False
        ins = self.program[self.pc]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("step %d: pc=%d ins=%s cursor=%d cell=%d",
                         self.steps, self.pc, ins, self.tape.cursor, self.tape.value)
        try:
            match ins:
                case MoveRight():
                    self.tape.move_right()
                case MoveLeft():
                    self.tape.move_left()
                case Increment():
                    self.tape.increment()
                case Decrement():
                    self.tape.decrement()
                case Output():
                    self.write(self.tape.value)
                case Input():
                    self.tape.store(self.read())
                case LoopOpen():
                    if self.tape.value == 0:
                        self.pc = find_loop_close(self.program, self.pc)
                case LoopClose():
                    if self.tape.value != 0:
                        # land one before the '[' so the advance below re-evaluates it
                        self.pc = find_loop_open(self.program, self.pc) - 1
        except TapeBoundsError as e:
            raise e.at(self.pc) from None
        self.pc += 1
        self.steps += 1
        return True

    def run(self, check: bool = True) -> RunResult:
        """Execute until the program counter runs off the end of the program.

        An abort raises the :class:`BrainfuckError` that caused it, unless
        ``check`` is false, in which case it is returned in the result.
        """
        try:
            while self.step():
                pass
        except BrainfuckError as e:
            logger.info("Run aborted after %d steps: %s", self.steps, e)
            if check:
                raise
            return RunResult(Outcome.ABORTED, self.pc, self.steps, self.tape.wraps, e)
        logger.info("Run completed after %d steps", self.steps)
        return RunResult(Outcome.COMPLETED, self.pc, self.steps, self.tape.wraps)


def run_program(source: str | BrainfuckProgram, data: bytes = b"", tape_size: int = DEFAULT_TAPE_SIZE,
                on_advisory: Callable[[Advisory, int], None] = log_advisory) -> tuple[RunResult, bytes]:
    """Load and run ``source`` with ``data`` as its input, returning the result and everything it printed."""
    program = source if isinstance(source, BrainfuckProgram) else BrainfuckProgram.load(source)
    out = io.BytesIO()
    interpreter = Interpreter(program, read=stream_reader(io.BytesIO(data)),
                              write=stream_writer(out, flush=False), tape_size=tape_size, on_advisory=on_advisory)
    return interpreter.run(check=False), out.getvalue()
