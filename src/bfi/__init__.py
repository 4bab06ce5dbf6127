from .api import RunOptions, RunResult, compile_string, run_file, run_string
from .errors import (
    BFError,
    InputExhausted,
    InternalIndexError,
    SourceUnavailable,
    UnmatchedClosingBracket,
    UnmatchedOpeningBracket,
)
from .interpreter import Interpreter
from .lexer import lex, tokenize
from .linker import link
from .optimizer import optimize
from .parser import parse

__all__ = [
    'BFError',
    'InputExhausted',
    'InternalIndexError',
    'Interpreter',
    'RunOptions',
    'RunResult',
    'SourceUnavailable',
    'UnmatchedClosingBracket',
    'UnmatchedOpeningBracket',
    'compile_string',
    'lex',
    'link',
    'optimize',
    'parse',
    'run_file',
    'run_string',
    'tokenize',
]
