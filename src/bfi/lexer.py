from typing import Iterator, Tuple

from .ops import BF_OPS


def tokenize(source: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(offset, char)`` for every instruction character in ``source``."""
    for offset, ch in enumerate(source):
        if ch in BF_OPS:
            yield offset, ch


def lex(source: str) -> Iterator[str]:
    return (ch for _, ch in tokenize(source))
