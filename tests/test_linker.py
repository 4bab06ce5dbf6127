#!/usr/bin/env python3
"""
Linker tests: partner indices, relinking after optimization shifted them.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfi.errors import InternalIndexError
from bfi.linker import link
from bfi.ops import Increment, JumpIfNonZero, JumpIfZero, Write
from bfi.optimizer import optimize
from bfi.parser import parse


def assert_paired(program):
    for i, op in enumerate(program):
        if isinstance(op, JumpIfZero):
            assert isinstance(program[op.target], JumpIfNonZero)
            assert program[op.target].target == i
        elif isinstance(op, JumpIfNonZero):
            assert isinstance(program[op.target], JumpIfZero)
            assert program[op.target].target == i


def test_simple_loop():
    assert link(parse("+[.]")) == (Increment(1), JumpIfZero(3), Write(1), JumpIfNonZero(1))


def test_nested_loops():
    program = link(parse("[[][[]]]"))
    assert [op.target for op in program] == [7, 2, 1, 6, 5, 4, 3, 0]
    assert_paired(program)


def test_link_returns_tuple():
    assert isinstance(link(parse("[]")), tuple)


def test_relink_after_optimization():
    # the parser's back references point at pre-optimization indices
    ops = parse("[-]+[->+<]>[>[-]<-]")
    optimized = optimize(ops).program
    program = link(optimized)
    assert_paired(program)
    assert program[4] == JumpIfZero(9)
    assert program[9] == JumpIfNonZero(4)


def test_stale_targets_are_ignored():
    program = link([JumpIfZero(99), JumpIfNonZero(42)])
    assert program == (JumpIfZero(1), JumpIfNonZero(0))


def test_unbalanced_program_is_an_internal_error():
    with pytest.raises(InternalIndexError):
        link([JumpIfNonZero()])
    with pytest.raises(InternalIndexError):
        link([JumpIfZero()])
