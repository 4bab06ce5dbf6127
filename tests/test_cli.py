#!/usr/bin/env python3
"""
Command line tests: exit codes, stats lines, --emit.
"""

import io
import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bfi.cli import main

from test_execution import HELLO_WORLD


def run_cli(tmp_path, source, *flags, input_data=b""):
    path = tmp_path / "prog.bf"
    path.write_text(source, encoding="utf-8")
    stdout = io.BytesIO()
    stderr = io.StringIO()
    code = main([str(path), *flags], stdin=io.BytesIO(input_data), stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


def test_runs_program(tmp_path):
    code, out, err = run_cli(tmp_path, HELLO_WORLD)
    assert code == 0
    assert out == b"Hello World!\n"
    assert err == ""


def test_reads_stdin(tmp_path):
    code, out, _ = run_cli(tmp_path, ",+.,+.", input_data=b"HA")
    assert code == 0
    assert out == b"IB"


def test_missing_file(tmp_path):
    stderr = io.StringIO()
    code = main([str(tmp_path / "nope.bf")], stdin=io.BytesIO(), stdout=io.BytesIO(), stderr=stderr)
    assert code == 1
    assert "SourceError" in stderr.getvalue()


def test_unmatched_bracket(tmp_path):
    code, out, err = run_cli(tmp_path, "+[.")
    assert code == 1
    assert out == b""
    assert "unmatched opening bracket" in err


def test_input_exhausted(tmp_path):
    code, out, err = run_cli(tmp_path, "+.,", "--buffered")
    assert code == 1
    assert out == b"\x01"
    assert "no more input" in err


def test_stats(tmp_path):
    code, out, err = run_cli(tmp_path, "+[-]>++[<+>-]<.", "--stats")
    assert code == 0
    assert out == b"\x02"
    assert "optimized: created 1 set to zero commands" in err
    assert "optimized: created 1 transfer and multiply commands" in err
    assert "executed 7 instructions" in err
    assert "the program has 7 commands" in err


def test_stats_without_optimizer(tmp_path):
    code, _, err = run_cli(tmp_path, "+.", "--stats", "--no-optimize")
    assert code == 0
    assert "optimized:" not in err
    assert "executed 2 instructions" in err


def test_emit(tmp_path):
    code, out, _ = run_cli(tmp_path, "comment +-+ [ - ] [>+++<-]", "--emit")
    assert code == 0
    assert out == b"+[-][->+++<]\n"


def test_jit_flag(tmp_path):
    code, out, _ = run_cli(tmp_path, HELLO_WORLD, "--jit")
    assert code == 0
    assert out == b"Hello World!\n"
