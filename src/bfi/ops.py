from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Union


# ---------------- Primitive ops ----------------
@dataclass(frozen=True)
class Increment:
    count: int  # already reduced mod 256


@dataclass(frozen=True)
class Decrement:
    count: int


@dataclass(frozen=True)
class MoveLeft:
    count: int


@dataclass(frozen=True)
class MoveRight:
    count: int


@dataclass(frozen=True)
class Read:
    count: int


@dataclass(frozen=True)
class Write:
    count: int


@dataclass(frozen=True)
class JumpIfZero:
    target: int = 0  # placeholder until linked


@dataclass(frozen=True)
class JumpIfNonZero:
    target: int = 0


# ---------------- Composite ops (optimizer only) ----------------
@dataclass(frozen=True)
class ZeroCell:
    pass  # emits "[-]"


@dataclass(frozen=True)
class AddToOffset:
    offset: int  # signed, negative is left of the head


@dataclass(frozen=True)
class SubtractFromOffset:
    offset: int


@dataclass(frozen=True)
class MultiplyIntoOffset:
    multiplier: int
    offset: int


Op = Union[
    Increment, Decrement, MoveLeft, MoveRight, Read, Write, JumpIfZero, JumpIfNonZero,
    ZeroCell, AddToOffset, SubtractFromOffset, MultiplyIntoOffset,
]

BF_OPS = set("+-<>[],.")


# ---------------- Emit ----------------
def _move(offset: int) -> str:
    return (">" * offset) if offset > 0 else ("<" * (-offset))


def _transfer(offset: int, step: str) -> str:
    return "[-" + _move(offset) + step + _move(-offset) + "]"


def emit(program: Sequence[Op]) -> str:
    """Render a program back to source.

    Composite ops are expanded to the loop idioms they were folded from, so the
    result parses (unoptimized) to a program with the same behavior.
    """
    out: List[str] = []
    for op in program:
        if isinstance(op, Increment):
            out.append("+" * op.count)
        elif isinstance(op, Decrement):
            out.append("-" * op.count)
        elif isinstance(op, MoveLeft):
            out.append("<" * op.count)
        elif isinstance(op, MoveRight):
            out.append(">" * op.count)
        elif isinstance(op, Read):
            out.append("," * op.count)
        elif isinstance(op, Write):
            out.append("." * op.count)
        elif isinstance(op, JumpIfZero):
            out.append("[")
        elif isinstance(op, JumpIfNonZero):
            out.append("]")
        elif isinstance(op, ZeroCell):
            out.append("[-]")
        elif isinstance(op, AddToOffset):
            out.append(_transfer(op.offset, "+"))
        elif isinstance(op, SubtractFromOffset):
            out.append(_transfer(op.offset, "-"))
        elif isinstance(op, MultiplyIntoOffset):
            out.append(_transfer(op.offset, "+" * op.multiplier))
        else:
            raise TypeError(f"not an operation: {op!r}")
    return "".join(out)
