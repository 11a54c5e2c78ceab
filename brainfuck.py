from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import ClassVar

from frozendict import frozendict


class BrainfuckError(ValueError):
    def __init__(self, message: str, pc: int | None = None):
        self.message = message
        self.pc = pc
        if pc is not None:
            message = f"{message} (PC: {pc})"
        super(BrainfuckError, self).__init__(message)

    def at(self, pc: int) -> BrainfuckError:
        """Return a copy of this error tagged with the program counter it happened at."""
        return type(self)(self.message, pc)


class NoInstructions(BrainfuckError):
    def __init__(self, message: str = "Input file is empty or contains no valid Brainfuck instructions.",
                 pc: int | None = None):
        super(NoInstructions, self).__init__(message, pc)


class TapeBoundsError(BrainfuckError):
    pass


class MismatchedParentheses(BrainfuckError):
    pass


class UnmatchedLoopOpen(MismatchedParentheses):
    def __init__(self, message: str = "Unmatched '['", pc: int | None = None):
        super(UnmatchedLoopOpen, self).__init__(message, pc)


class UnmatchedLoopClose(MismatchedParentheses):
    def __init__(self, message: str = "Unmatched ']'", pc: int | None = None):
        super(UnmatchedLoopClose, self).__init__(message, pc)


class Instruction(ABC):
    symbol: ClassVar[str]

    def __str__(self):
        return self.symbol


@dataclass(frozen=True)
class MoveRight(Instruction):
    symbol = ">"


@dataclass(frozen=True)
class MoveLeft(Instruction):
    symbol = "<"


@dataclass(frozen=True)
class Increment(Instruction):
    symbol = "+"


@dataclass(frozen=True)
class Decrement(Instruction):
    symbol = "-"


@dataclass(frozen=True)
class Output(Instruction):
    symbol = "."


@dataclass(frozen=True)
class Input(Instruction):
    symbol = ","


@dataclass(frozen=True)
class LoopOpen(Instruction):
    symbol = "["


@dataclass(frozen=True)
class LoopClose(Instruction):
    symbol = "]"


SYMBOLS: frozendict[str, Instruction] = frozendict(
    (ins.symbol, ins) for ins in (
        MoveRight(), MoveLeft(), Increment(), Decrement(), Output(), Input(), LoopOpen(), LoopClose()
    )
)


@dataclass(frozen=True)
class BrainfuckProgram:
    """An immutable, non-empty sequence of instructions.

    ``code`` holds only instruction symbols. Use :meth:`load` to build a program
    from free-form source text; everything that is not a symbol is a comment.
    """
    code: str

    def __post_init__(self):
        if not self.code:
            raise NoInstructions()
        for i, c in enumerate(self.code):
            if c not in SYMBOLS:
                raise ValueError(f"{c!r} at position {i} is not a Brainfuck instruction")

    @classmethod
    def load(cls, source: str) -> BrainfuckProgram:
        return cls("".join(c for c in source if c in SYMBOLS))

    @classmethod
    def from_file(cls, path: str | Path) -> BrainfuckProgram:
        with open(path, encoding="utf-8", errors="replace") as f:
            return cls.load(f.read())

    @cached_property
    def instructions(self) -> tuple[Instruction, ...]:
        return tuple(SYMBOLS[c] for c in self.code)

    def __len__(self):
        return len(self.code)

    def __getitem__(self, pc: int) -> Instruction:
        return self.instructions[pc]

    def __str__(self):
        return self.code
