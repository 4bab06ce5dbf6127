from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence, Tuple

from .errors import InternalIndexError
from .ops import JumpIfNonZero, JumpIfZero, Op


def link(program: Sequence[Op]) -> Tuple[Op, ...]:
    """Point every jump at its partner bracket's index.

    Any targets already present (the parser's back references) are discarded,
    so the program may be linked after any amount of optimization.
    """
    ops = list(program)
    stack: List[int] = []
    for i, op in enumerate(ops):
        if isinstance(op, JumpIfZero):
            stack.append(i)
        elif isinstance(op, JumpIfNonZero):
            if not stack:
                raise InternalIndexError(message=f"linker: no open bracket for jump at {i}")
            open_index = stack.pop()
            ops[i] = replace(op, target=open_index)
            ops[open_index] = replace(ops[open_index], target=i)
    if stack:
        raise InternalIndexError(message=f"linker: jump at {stack[-1]} is never closed")
    return tuple(ops)
