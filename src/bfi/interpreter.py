from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import BinaryIO, Optional, Sequence

from .errors import InternalIndexError
from .inputs import open_input
from .ops import (
    AddToOffset,
    Decrement,
    Increment,
    JumpIfNonZero,
    JumpIfZero,
    MoveLeft,
    MoveRight,
    MultiplyIntoOffset,
    Op,
    Read,
    SubtractFromOffset,
    Write,
    ZeroCell,
)
from .tape import Tape


@dataclass(frozen=True)
class ExecutionStats:
    executed: int
    program_length: int
    tape_length: int


class Interpreter:
    """
    Executes a linked program.

    The instruction pointer starts at 0 and the run ends when it reaches the
    end of the program. A taken jump sets the pointer to the partner bracket;
    the usual advance by one then lands just past it.

    Args:
        program: output of ``link``
        input_source: object with ``read(count) -> int``; chosen from stdin when omitted
        output: binary sink, ``sys.stdout.buffer`` when omitted
        tape: starting tape, a single zero cell when omitted
    """

    def __init__(self, program: Sequence[Op], input_source=None, output: Optional[BinaryIO] = None,
                 tape: Optional[Tape] = None):
        self.program = tuple(program)
        self.output = sys.stdout.buffer if output is None else output
        self.input = open_input(echo=self.output) if input_source is None else input_source
        self.tape = Tape() if tape is None else tape
        self.pc = 0
        self.head = 0
        self.executed = 0

    @property
    def finished(self) -> bool:
        return self.pc >= len(self.program)

    def stats(self) -> ExecutionStats:
        return ExecutionStats(
            executed=self.executed,
            program_length=len(self.program),
            tape_length=len(self.tape),
        )

    # ===== Execution =====

    def run(self) -> ExecutionStats:
        end = len(self.program)
        while self.pc < end:
            self.step()
        self.output.flush()
        return self.stats()

    def step(self) -> None:
        self.execute(self.program[self.pc])
        self.pc += 1
        self.executed += 1

    def execute(self, op: Op) -> None:
        tape = self.tape
        head = self.head
        if isinstance(op, Increment):
            tape[head] = (tape[head] + op.count) & 0xFF
        elif isinstance(op, Decrement):
            tape[head] = (tape[head] - op.count) & 0xFF
        elif isinstance(op, MoveLeft):
            self.head, _ = tape.ensure(head - op.count)
        elif isinstance(op, MoveRight):
            self.head, _ = tape.ensure(head + op.count)
        elif isinstance(op, Read):
            tape[head] = self.input.read(op.count)
        elif isinstance(op, Write):
            self.output.write(bytes((tape[head],)) * op.count)
            self.output.flush()
        elif isinstance(op, JumpIfZero):
            if tape[head] == 0:
                self.pc = self._target(op.target)
        elif isinstance(op, JumpIfNonZero):
            if tape[head] != 0:
                self.pc = self._target(op.target)
        elif isinstance(op, ZeroCell):
            tape[head] = 0
        elif isinstance(op, AddToOffset):
            value = tape[head]
            self._apply(op.offset, value)
        elif isinstance(op, SubtractFromOffset):
            value = tape[head]
            self._apply(op.offset, -value)
        elif isinstance(op, MultiplyIntoOffset):
            value = tape[head]
            self._apply(op.offset, value * op.multiplier)
        else:
            raise InternalIndexError(message=f"unknown operation at {self.pc}: {op!r}")

    def _target(self, target: int) -> int:
        if not 0 <= target < len(self.program):
            raise InternalIndexError(message=f"jump at {self.pc} targets {target}, outside the program")
        return target

    def _apply(self, offset: int, delta: int) -> None:
        """Add ``delta`` to the cell at ``head + offset``, then clear the current cell."""
        tape = self.tape
        index, shift = tape.ensure(self.head + offset)
        self.head += shift
        tape[index] = (tape[index] + delta) & 0xFF
        tape[self.head] = 0
