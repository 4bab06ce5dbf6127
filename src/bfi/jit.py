from __future__ import annotations

from typing import Tuple

import numpy as np
from numba import njit

from .errors import InternalIndexError
from .interpreter import ExecutionStats, Interpreter
from .ops import (
    AddToOffset,
    Decrement,
    Increment,
    JumpIfNonZero,
    JumpIfZero,
    MoveLeft,
    MoveRight,
    MultiplyIntoOffset,
    Read,
    SubtractFromOffset,
    Write,
    ZeroCell,
)

OP_INC = 0
OP_DEC = 1
OP_LEFT = 2
OP_RIGHT = 3
OP_READ = 4
OP_WRITE = 5
OP_JZ = 6
OP_JNZ = 7
OP_ZERO = 8
OP_ADD_OFFSET = 9
OP_SUB_OFFSET = 10
OP_MUL_OFFSET = 11

STOP_END = 0       # pointer reached the end of the program
STOP_FALLBACK = 1  # op at pc needs Python (I/O or tape growth)
STOP_BUDGET = 2    # max_steps reached

DEFAULT_MAX_STEPS = 1_000_000


def lower(program) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Encode a linked program as (opcode, argument, offset) int64 arrays."""
    n = len(program)
    codes = np.zeros(n, dtype=np.int64)
    args = np.zeros(n, dtype=np.int64)
    offsets = np.zeros(n, dtype=np.int64)
    for i, op in enumerate(program):
        if isinstance(op, Increment):
            codes[i], args[i] = OP_INC, op.count
        elif isinstance(op, Decrement):
            codes[i], args[i] = OP_DEC, op.count
        elif isinstance(op, MoveLeft):
            codes[i], args[i] = OP_LEFT, op.count
        elif isinstance(op, MoveRight):
            codes[i], args[i] = OP_RIGHT, op.count
        elif isinstance(op, Read):
            codes[i], args[i] = OP_READ, op.count
        elif isinstance(op, Write):
            codes[i], args[i] = OP_WRITE, op.count
        elif isinstance(op, JumpIfZero):
            codes[i], args[i] = OP_JZ, op.target
        elif isinstance(op, JumpIfNonZero):
            codes[i], args[i] = OP_JNZ, op.target
        elif isinstance(op, ZeroCell):
            codes[i] = OP_ZERO
        elif isinstance(op, AddToOffset):
            codes[i], offsets[i] = OP_ADD_OFFSET, op.offset
        elif isinstance(op, SubtractFromOffset):
            codes[i], offsets[i] = OP_SUB_OFFSET, op.offset
        elif isinstance(op, MultiplyIntoOffset):
            codes[i], args[i], offsets[i] = OP_MUL_OFFSET, op.multiplier, op.offset
        else:
            raise InternalIndexError(message=f"cannot lower operation at {i}: {op!r}")
    return codes, args, offsets


@njit(cache=True)
def run_kernel(codes, args, offsets, cells, start, length, pc, head, max_steps):
    """
    Run the program until it ends, needs Python, or uses up ``max_steps``.

    ``cells`` is the tape's physical buffer and ``start`` the physical index of
    logical cell 0. The kernel never grows the tape: a move or offset write
    outside ``0 .. length - 1`` stops with STOP_FALLBACK before touching
    anything, as do reads and writes.
    """
    stop_reason = STOP_END
    prog_len = len(codes)
    steps = 0

    while pc < prog_len:
        if steps >= max_steps:
            stop_reason = STOP_BUDGET
            break
        code = codes[pc]
        here = start + head

        if code == OP_INC:
            cells[here] = (cells[here] + args[pc]) & 255
        elif code == OP_DEC:
            cells[here] = (cells[here] - args[pc]) & 255
        elif code == OP_LEFT:
            if head - args[pc] < 0:
                stop_reason = STOP_FALLBACK
                break
            head -= args[pc]
        elif code == OP_RIGHT:
            if head + args[pc] >= length:
                stop_reason = STOP_FALLBACK
                break
            head += args[pc]
        elif code == OP_JZ:
            if cells[here] == 0:
                pc = args[pc]
        elif code == OP_JNZ:
            if cells[here] != 0:
                pc = args[pc]
        elif code == OP_ZERO:
            cells[here] = 0
        elif code == OP_ADD_OFFSET or code == OP_SUB_OFFSET or code == OP_MUL_OFFSET:
            target = head + offsets[pc]
            if target < 0 or target >= length:
                stop_reason = STOP_FALLBACK
                break
            value = np.int64(cells[here])
            if code == OP_SUB_OFFSET:
                value = -value
            elif code == OP_MUL_OFFSET:
                value = value * args[pc]
            cells[start + target] = (cells[start + target] + value) & 255
            cells[here] = 0
        else:
            stop_reason = STOP_FALLBACK
            break

        pc += 1
        steps += 1

    return pc, head, stop_reason, steps


class JitInterpreter(Interpreter):
    """
    Interpreter whose hot loop runs in a numba kernel.

    The kernel works on a numpy view of the tape buffer. Whenever it stops for
    an op it cannot run (I/O or tape growth) that single op goes through
    ``Interpreter.step`` and the kernel resumes after it.
    """

    def __init__(self, program, input_source=None, output=None, tape=None,
                 max_steps: int = DEFAULT_MAX_STEPS):
        super().__init__(program, input_source=input_source, output=output, tape=tape)
        self.codes, self.args, self.offsets = lower(self.program)
        self.max_steps = max_steps

    def run(self) -> ExecutionStats:
        end = len(self.program)
        while self.pc < end:
            # The view must be gone before step() may resize the buffer.
            cells = np.frombuffer(self.tape.buffer, dtype=np.uint8)
            pc, head, reason, steps = run_kernel(
                self.codes, self.args, self.offsets, cells,
                self.tape.start, len(self.tape), self.pc, self.head, self.max_steps,
            )
            del cells
            self.pc, self.head = int(pc), int(head)
            self.executed += int(steps)
            if reason == STOP_FALLBACK:
                self.step()
        self.output.flush()
        return self.stats()
