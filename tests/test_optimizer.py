#!/usr/bin/env python3
"""
Optimizer tests: each idiom, the rejected near-misses, fixpoint behavior.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfi.ops import (
    AddToOffset,
    Decrement,
    Increment,
    JumpIfNonZero,
    JumpIfZero,
    MoveLeft,
    MoveRight,
    MultiplyIntoOffset,
    SubtractFromOffset,
    Write,
    ZeroCell,
    emit,
)
from bfi.optimizer import fold_chain, optimize
from bfi.parser import parse


def optimized(source):
    return optimize(parse(source)).program


# ===== Chain folding =====

def test_chain_nets_out():
    ops = [Increment(5), Decrement(2), Increment(1)]
    assert fold_chain(ops, 0) == ([Increment(4)], 3)


def test_chain_goes_negative():
    ops = [Increment(1), Decrement(3)]
    assert fold_chain(ops, 0) == ([Decrement(2)], 2)


def test_chain_wraps():
    ops = [Increment(200), Decrement(0), Increment(100)]
    assert fold_chain(ops, 0) == ([Increment(44)], 3)


def test_chain_needs_two_ops():
    assert fold_chain([Increment(3), Write(1)], 0) is None


def test_chain_cancels():
    result = optimize(parse("+>+-+-<"))
    assert result.program == [Increment(1), MoveRight(1), MoveLeft(1)]
    assert result.stats.chains_folded == 4


def test_chain_cancelling_to_a_multiple_of_256():
    assert optimized(">" + "+" * 200 + "-" * 100 + "+" * 156 + ".") == [MoveRight(1), Write(1)]


# ===== Zero cell =====

@pytest.mark.parametrize("source", ["[-]", "[+]"])
def test_zero_cell(source):
    result = optimize(parse(source))
    assert result.program == [ZeroCell()]
    assert result.stats.zero_cells == 1


def test_zero_cell_requires_single_step():
    assert optimized("[--]") == [JumpIfZero(), Decrement(2), JumpIfNonZero(0)]


def test_zero_cell_after_chain_folding():
    # [+-+] only becomes [+] after the first pass
    result = optimize(parse("[+-+]"))
    assert result.program == [ZeroCell()]
    assert result.stats.chains_folded == 2
    assert result.stats.zero_cells == 1
    assert result.stats.passes == 3


# ===== Transfer / multiply =====

@pytest.mark.parametrize("source, expected", [
    ("[->+<]", AddToOffset(1)),
    ("[>+<-]", AddToOffset(1)),
    ("[-<+>]", AddToOffset(-1)),
    ("[<+>-]", AddToOffset(-1)),
    ("[->>>+<<<]", AddToOffset(3)),
    ("[-<<++++>>]", MultiplyIntoOffset(4, -2)),
    ("[>+++<-]", MultiplyIntoOffset(3, 1)),
    ("[->-<]", SubtractFromOffset(1)),
    ("[>-<-]", SubtractFromOffset(1)),
    ("[-<<->>]", SubtractFromOffset(-2)),
    ("[<->-]", SubtractFromOffset(-1)),
])
def test_transfer_idioms(source, expected):
    result = optimize(parse(source))
    assert result.program == [expected]
    assert result.stats.transfers == 1


@pytest.mark.parametrize("source", [
    "[->>+<]",     # asymmetric
    "[-<+<]",      # same direction twice
    "[->--<]",     # decrement by more than one
    "[->+<<]",     # asymmetric the other way
    "[+>+<]",      # source incremented
    "[->.<]",      # not an arithmetic step
])
def test_transfer_near_misses_are_kept(source):
    result = optimize(parse(source))
    assert result.stats.transfers == 0
    assert emit(result.program) == source


def test_scenario_transfer_left():
    assert optimized(">+++++[<+>-]<.") == [MoveRight(1), Increment(5), AddToOffset(-1), MoveLeft(1), Write(1)]


def test_nested_loops_fold_inside_out():
    result = optimize(parse("+[>[-]<-]"))
    # inner clear folds first, the outer loop is not an idiom
    assert result.program == [
        Increment(1), JumpIfZero(), MoveRight(1), ZeroCell(), MoveLeft(1), Decrement(1), JumpIfNonZero(1),
    ]


# ===== Fixpoint =====

@pytest.mark.parametrize("source", [
    "++[>+++<-]>[-]<<->+-+[<+>-]",
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.",
    "[+-+]+-[-]",
])
def test_optimizer_fixpoint(source):
    first = optimize(parse(source))
    second = optimize(first.program)
    assert second.program == first.program
    assert second.stats.total == 0
    assert second.stats.passes == 1


def test_optimizer_never_grows_program():
    ops = parse("+-+-[->+<]>>[-]<<,.")
    assert len(optimize(ops).program) <= len(ops)


def test_optimizer_leaves_input_alone():
    ops = parse("+-")
    optimize(ops)
    assert ops == [Increment(1), Decrement(1)]
