from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _position(source: str, offset: int) -> Tuple[int, int]:
    line = source.count('\n', 0, offset) + 1
    column = offset - (source.rfind('\n', 0, offset) + 1) + 1
    return line, column


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'opening':
        return 'Every "[" needs a matching "]" later in the program.'
    if kind == 'closing':
        return 'This "]" has no "[" before it. Check for an extra "]" or a missing "[".'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class SourceUnavailable(BFError):
    path: str


@dataclass
class BracketError(BFError):
    line: int
    column: int
    context: str


@dataclass
class UnmatchedOpeningBracket(BracketError):
    pass


@dataclass
class UnmatchedClosingBracket(BracketError):
    pass


@dataclass
class InputExhausted(BFError):
    pass


@dataclass
class InternalIndexError(BFError):
    pass


def make_bracket_error(*, source: str, offset: int, opening: bool) -> BracketError:
    line, column = _position(source, offset)
    ctx = _build_context(source.split('\n'), line, column)
    kind = 'opening' if opening else 'closing'
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    cls = UnmatchedOpeningBracket if opening else UnmatchedClosingBracket
    return cls(
        message=f"ParseError: unmatched {kind} bracket (line {line}, column {column})\n{ctx}{hint_block}",
        line=line,
        column=column,
        context=ctx,
    )
