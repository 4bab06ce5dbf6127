from __future__ import annotations

from typing import Tuple


class Tape:
    """
    Growable byte tape, unbounded in both directions.

    Logical cells are ``0 .. len(tape) - 1``. Growing on the left prepends zero
    cells, so every existing cell's logical index moves up by the amount grown.

    Memory Layout:
    - ``_buf`` holds zeroed slack on both sides of the live cells
    - ``_start`` is the physical index of logical cell 0, ``_end`` is one past
      the last live cell
    - slack is only ever handed out, never written, so it stays zero
    """

    def __init__(self, size: int = 1):
        self._buf = bytearray(size)
        self._start = 0
        self._end = size

    def __len__(self) -> int:
        return self._end - self._start

    def __getitem__(self, index: int) -> int:
        return self._buf[self._start + index]

    def __setitem__(self, index: int, value: int) -> None:
        self._buf[self._start + index] = value

    def __repr__(self) -> str:
        return f"Tape({self.to_bytes()!r})"

    # ===== Growth =====

    def grow_left(self, n: int) -> None:
        if n <= 0:
            return
        if self._start < n:
            slack = max(n, len(self._buf))
            self._buf[0:0] = bytes(slack)
            self._start += slack
            self._end += slack
        self._start -= n

    def grow_right(self, n: int) -> None:
        if n <= 0:
            return
        room = len(self._buf) - self._end
        if room < n:
            self._buf.extend(bytes(max(n - room, len(self._buf))))
        self._end += n

    def ensure(self, index: int) -> Tuple[int, int]:
        """Grow the tape so ``index`` is a live cell.

        Returns ``(index, shift)``: the cell's index after growth and how far
        every pre-existing cell moved up (non-zero only when growing left).
        """
        if index < 0:
            self.grow_left(-index)
            return 0, -index
        if index >= len(self):
            self.grow_right(index - len(self) + 1)
        return index, 0

    # ===== Views =====

    @property
    def buffer(self) -> bytearray:
        """Physical storage, including slack. Index with ``start``."""
        return self._buf

    @property
    def start(self) -> int:
        return self._start

    def to_bytes(self) -> bytes:
        return bytes(self._buf[self._start:self._end])
