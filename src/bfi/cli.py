#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, List, Optional, TextIO

from .api import RunOptions, compile_string, load_source, make_interpreter
from .errors import BFError
from .inputs import open_input
from .ops import emit


def _print_optimize_stats(stats, err: TextIO) -> None:
    print(f"optimized: removed/combined {stats.chains_folded} add/sub commands", file=err)
    print(f"optimized: created {stats.zero_cells} set to zero commands", file=err)
    print(f"optimized: created {stats.transfers} transfer and multiply commands", file=err)
    print(f"optimized: {stats.passes} passes", file=err)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfi",
        description="Optimizing interpreter for the eight-instruction tape language.",
    )
    parser.add_argument("file", help="program source file")
    parser.add_argument("--no-optimize", action="store_true", help="Skip the peephole optimizer")
    parser.add_argument("--jit", action="store_true", help="Run the numba-compiled engine")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--interactive", dest="input_mode", action="store_const", const="interactive",
                      help="Read input key by key from the terminal, with echo")
    mode.add_argument("--buffered", dest="input_mode", action="store_const", const="buffered",
                      help="Read input as a raw byte stream")
    parser.add_argument("--stats", action="store_true", help="Print optimizer and execution counts to stderr")
    parser.add_argument("--emit", action="store_true", help="Print the (optimized) program as source and exit")
    return parser


def main(argv: Optional[List[str]] = None, *, stdin: Optional[TextIO] = None,
         stdout: Optional[BinaryIO] = None, stderr: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout.buffer if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    options = RunOptions(
        optimize=not args.no_optimize,
        engine="jit" if args.jit else "python",
        input_mode=args.input_mode,
    )

    try:
        source = load_source(args.file)
        compiled = compile_string(source, optimize_program=options.optimize)
        if args.stats and compiled.optimize_stats is not None:
            _print_optimize_stats(compiled.optimize_stats, stderr)

        if args.emit:
            stdout.write(emit(compiled.program).encode("ascii") + b"\n")
            stdout.flush()
            return 0

        input_source = open_input(stdin, stdout, mode=options.input_mode)
        interp = make_interpreter(compiled.program, input_source, stdout, engine=options.engine)
        stats = interp.run()
    except BFError as e:
        stdout.flush()
        print(f"Error: {e}", file=stderr)
        return 1

    if args.stats:
        print(f"executed {stats.executed} instructions", file=stderr)
        print(f"the program has {stats.program_length} commands", file=stderr)
        print(f"the tape grew to {stats.tape_length} cells", file=stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
