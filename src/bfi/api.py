from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .errors import SourceUnavailable
from .inputs import BufferedInput
from .interpreter import ExecutionStats, Interpreter
from .linker import link
from .ops import Op
from .optimizer import OptimizeStats, optimize
from .parser import parse

ENGINES = ("python", "jit")


@dataclass(frozen=True)
class RunOptions:
    optimize: bool = True
    engine: str = "python"
    input_mode: Optional[str] = None  # "interactive", "buffered" or None to detect


@dataclass(frozen=True)
class CompileResult:
    program: Tuple[Op, ...]
    optimize_stats: Optional[OptimizeStats]


@dataclass(frozen=True)
class RunResult:
    output: bytes
    tape: bytes
    head: int
    stats: ExecutionStats
    optimize_stats: Optional[OptimizeStats]


def compile_string(source: str, *, optimize_program: bool = True) -> CompileResult:
    ops = parse(source)
    stats = None
    if optimize_program:
        result = optimize(ops)
        ops, stats = result.program, result.stats
    return CompileResult(program=link(ops), optimize_stats=stats)


def load_source(path: str | Path, *, encoding: str = "utf-8") -> str:
    p = Path(path)
    try:
        return p.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(message=f"SourceError: cannot read {p}: {e}", path=str(p)) from e


def make_interpreter(program, input_source, output, *, engine: str = "python") -> Interpreter:
    if engine == "python":
        return Interpreter(program, input_source=input_source, output=output)
    if engine == "jit":
        from .jit import JitInterpreter
        return JitInterpreter(program, input_source=input_source, output=output)
    raise ValueError(f"unknown engine: {engine!r} (expected one of {', '.join(ENGINES)})")


def run_string(source: str, input_data: bytes = b"", *, options: Optional[RunOptions] = None) -> RunResult:
    """Compile and run ``source`` against in-memory input and output."""
    options = RunOptions() if options is None else options
    compiled = compile_string(source, optimize_program=options.optimize)
    output = io.BytesIO()
    interp = make_interpreter(
        compiled.program, BufferedInput(io.BytesIO(input_data)), output, engine=options.engine,
    )
    stats = interp.run()
    return RunResult(
        output=output.getvalue(),
        tape=interp.tape.to_bytes(),
        head=interp.head,
        stats=stats,
        optimize_stats=compiled.optimize_stats,
    )


def run_file(path: str | Path, input_data: bytes = b"", *, options: Optional[RunOptions] = None,
             encoding: str = "utf-8") -> RunResult:
    return run_string(load_source(path, encoding=encoding), input_data, options=options)
