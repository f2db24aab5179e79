"""Reading command lines from a file descriptor or binary stream."""

from __future__ import annotations

import os
import sys
from typing import BinaryIO, Optional, Union

from .syntax import MAX_LINE_LENGTH, SYNTAX_ERROR_STR

_NEWLINE = ord("\n")
_END = 0


class LineTooLongError(ValueError):
    """Raised when a line exceeds the limit; the rest of it has been discarded."""

    def __init__(self, message: str = SYNTAX_ERROR_STR) -> None:
        super().__init__(message)


class LineReader:
    """Splits raw input into lines, reading it in chunks.

    A NUL byte behaves like end of input: it ends a partial line, and at the
    start of a line it ends reading altogether.
    """

    def __init__(
        self,
        source: Union[int, BinaryIO, None] = None,
        max_length: int = MAX_LINE_LENGTH,
    ) -> None:
        if source is None:
            source = sys.stdin.fileno()
        self._source = source
        self.max_length = max_length
        self._buffer = b""
        self._pos = 0
        self._finished = False

    def _read_chunk(self) -> bytes:
        size = self.max_length + 2
        if isinstance(self._source, int):
            return os.read(self._source, size)
        reader = getattr(self._source, "read1", None) or self._source.read
        return reader(size)

    def _next_byte(self) -> int:
        if self._pos >= len(self._buffer):
            chunk = self._read_chunk()
            if not chunk:
                return _END
            self._buffer, self._pos = chunk, 0
        byte = self._buffer[self._pos]
        self._pos += 1
        return byte

    def _discard_rest(self) -> None:
        while True:
            byte = self._next_byte()
            if byte == _NEWLINE:
                return
            if byte == _END:
                self._finished = True
                return

    def read_line(self) -> Optional[str]:
        """Return the next line without its newline, or None at end of input."""
        if self._finished:
            return None
        line = bytearray()
        while True:
            byte = self._next_byte()
            if byte == _END:
                if line:
                    return line.decode("utf-8", "surrogateescape")
                self._finished = True
                return None
            if byte == _NEWLINE:
                return line.decode("utf-8", "surrogateescape")
            if len(line) >= self.max_length:
                self._discard_rest()
                raise LineTooLongError()
            line.append(byte)