from __future__ import annotations

from itertools import groupby
from typing import Callable, Dict, List, Tuple

from .errors import make_bracket_error
from .lexer import tokenize
from .ops import Decrement, Increment, JumpIfNonZero, JumpIfZero, MoveLeft, MoveRight, Op, Read, Write

CELL_SIZE = 256

_COUNTED: Dict[str, Callable[[int], Op]] = {
    "+": lambda n: Increment(n % CELL_SIZE),
    "-": lambda n: Decrement(n % CELL_SIZE),
    "<": MoveLeft,
    ">": MoveRight,
    ",": Read,
    ".": Write,
}


def parse(source: str) -> List[Op]:
    """Parse source text into a run-length encoded program.

    Jump targets are not final: ``JumpIfNonZero`` records the index of its
    opening bracket and ``JumpIfZero`` keeps the placeholder 0. The linker
    resolves both once optimization is done.
    """
    ops: List[Op] = []
    stack: List[Tuple[int, int]] = []  # (op index, source offset)

    for ch, run in groupby(tokenize(source), key=lambda tok: tok[1]):
        if ch in _COUNTED:
            ops.append(_COUNTED[ch](sum(1 for _ in run)))
            continue
        for offset, _ in run:
            if ch == "[":
                stack.append((len(ops), offset))
                ops.append(JumpIfZero())
            else:
                if not stack:
                    raise make_bracket_error(source=source, offset=offset, opening=False)
                open_index, _ = stack.pop()
                ops.append(JumpIfNonZero(open_index))

    if stack:
        _, offset = stack[-1]
        raise make_bracket_error(source=source, offset=offset, opening=True)
    return ops
