#!/usr/bin/env python3
# bfi/optimizer.py
#
# Peephole optimizer over the run-length encoded program.
# Families, tried in this order at every position (first match wins):
#   chain:    runs of +/- ops -> one op with the net sum (mod 256), or nothing
#   clear:    [-] / [+]       -> ZeroCell
#   transfer: [->+<] [>+<-] [-<+>] [<+>-] and the multiply / subtract forms
#             -> AddToOffset / MultiplyIntoOffset / SubtractFromOffset
#
# Each pass reads the old list through a cursor and writes a new one; passes
# repeat until one of them changes nothing. Every rewrite shortens the program,
# so the loop always terminates.
#
# Jump targets are ignored here. Link after optimizing.
#
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

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
    SubtractFromOffset,
    ZeroCell,
)
from .parser import CELL_SIZE

Rewrite = Tuple[List[Op], int]  # (replacement, number of ops consumed)


@dataclass
class OptimizeStats:
    chains_folded: int = 0  # ops removed or combined by chain folding
    zero_cells: int = 0
    transfers: int = 0
    passes: int = 0

    @property
    def total(self) -> int:
        return self.chains_folded + self.zero_cells + self.transfers


@dataclass(frozen=True)
class OptimizeResult:
    program: List[Op]
    stats: OptimizeStats


# ---------------- Patterns ----------------
def _signed(op: Op) -> Optional[int]:
    if isinstance(op, Increment):
        return op.count
    if isinstance(op, Decrement):
        return -op.count
    return None


def fold_chain(ops: Sequence[Op], i: int) -> Optional[Rewrite]:
    """Fold a maximal run of Increment/Decrement starting at ``i``."""
    total = 0
    j = i
    while j < len(ops):
        n = _signed(ops[j])
        if n is None:
            break
        total += n
        j += 1
    count = j - i
    if count < 2:
        return None
    if total % CELL_SIZE == 0:
        return [], count
    if total > 0:
        return [Increment(total % CELL_SIZE)], count
    return [Decrement(-total % CELL_SIZE)], count


def fold_zero_cell(ops: Sequence[Op], i: int) -> Optional[Rewrite]:
    w = ops[i:i + 3]
    if (
        len(w) == 3
        and isinstance(w[0], JumpIfZero)
        and w[1] in (Increment(1), Decrement(1))
        and isinstance(w[2], JumpIfNonZero)
    ):
        return [ZeroCell()], 3
    return None


def fold_transfer(ops: Sequence[Op], i: int) -> Optional[Rewrite]:
    """Recognize ``[- >n +v <n]`` style loops (either order, either direction)."""
    w = ops[i:i + 6]
    if len(w) != 6 or not isinstance(w[0], JumpIfZero) or not isinstance(w[5], JumpIfNonZero):
        return None

    if w[1] == Decrement(1):
        out, step, back = w[2], w[3], w[4]
    elif w[4] == Decrement(1):
        out, step, back = w[1], w[2], w[3]
    else:
        return None

    if isinstance(out, MoveRight) and isinstance(back, MoveLeft):
        offset = out.count
    elif isinstance(out, MoveLeft) and isinstance(back, MoveRight):
        offset = -out.count
    else:
        return None
    if out.count != back.count:
        return None

    if isinstance(step, Increment):
        if step.count == 1:
            return [AddToOffset(offset)], 6
        return [MultiplyIntoOffset(step.count, offset)], 6
    if step == Decrement(1):
        return [SubtractFromOffset(offset)], 6
    return None


# ---------------- Driver ----------------
def optimize_pass(ops: Sequence[Op], stats: OptimizeStats) -> List[Op]:
    out: List[Op] = []
    i = 0
    while i < len(ops):
        hit = fold_chain(ops, i)
        if hit is not None:
            replacement, consumed = hit
            stats.chains_folded += consumed - len(replacement)
        else:
            hit = fold_zero_cell(ops, i)
            if hit is not None:
                stats.zero_cells += 1
            else:
                hit = fold_transfer(ops, i)
                if hit is not None:
                    stats.transfers += 1

        if hit is None:
            out.append(ops[i])
            i += 1
            continue
        replacement, consumed = hit
        out.extend(replacement)
        i += consumed

    stats.passes += 1
    return out


def optimize(program: Sequence[Op]) -> OptimizeResult:
    stats = OptimizeStats()
    cur = list(program)
    while True:
        before = stats.total
        cur = optimize_pass(cur, stats)
        if stats.total == before:
            return OptimizeResult(program=cur, stats=stats)
