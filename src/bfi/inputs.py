from __future__ import annotations

import sys
from typing import BinaryIO, Callable, Optional, TextIO

from .errors import InputExhausted


class BufferedInput:
    """Finite byte stream (a pipe, a file, ``io.BytesIO``)."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def read(self, count: int) -> int:
        # Reading n bytes keeps only the last one.
        data = self.stream.read(count)
        if len(data) < count:
            raise InputExhausted(message="InputError: no more input")
        return data[-1]


class InteractiveInput:
    """Live terminal, read one key at a time with echo."""

    def __init__(self, stream: TextIO, echo: BinaryIO):
        self.stream = stream
        self.echo = echo
        self._getch = self._make_getch()

    def _make_getch(self) -> Callable[[], str]:
        try:
            import termios
            import tty
        except ImportError:
            return lambda: self.stream.read(1)
        try:
            fd = self.stream.fileno()
            termios.tcgetattr(fd)
        except (termios.error, OSError, ValueError, AttributeError):
            return lambda: self.stream.read(1)

        def getch() -> str:
            old_settings = termios.tcgetattr(fd)
            try:
                tty.setraw(fd)
                return self.stream.read(1)
            finally:
                termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
        return getch

    def getch(self) -> str:
        ch = self._getch()
        if ch == '\x03':
            raise KeyboardInterrupt
        if ch == '' or ch == '\x04':
            raise InputExhausted(message="InputError: no more input")
        if ch == '\r':
            return '\n'
        return ch

    def read(self, count: int) -> int:
        self.echo.flush()
        value = 0
        for _ in range(count):
            ch = self.getch()
            self.echo.write(ch.encode('utf-8', 'replace'))
            self.echo.flush()
            value = ord(ch) & 0xFF
        return value


def open_input(stream: Optional[TextIO] = None, echo: Optional[BinaryIO] = None, mode: Optional[str] = None):
    """Pick the input source once for the whole run.

    ``mode`` is ``"interactive"``, ``"buffered"`` or ``None`` to ask the
    stream whether it is a terminal.
    """
    stream = sys.stdin if stream is None else stream
    echo = sys.stdout.buffer if echo is None else echo
    if mode is None:
        mode = "interactive" if stream.isatty() else "buffered"
    if mode == "interactive":
        return InteractiveInput(stream, echo)
    if mode == "buffered":
        return BufferedInput(getattr(stream, "buffer", stream))
    raise ValueError(f"unknown input mode: {mode!r}")
