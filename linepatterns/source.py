"""
Line Source — Bounded Line Reader

Adapts whatever the caller hands in as "the text" into a lazy
sequence of lines for the scan engine:

  - binary readers (files opened "rb", BytesIO, sockets' makefile)
  - text readers (files opened "r", StringIO)
  - plain iterables of lines (lists, generators)

Lines are split on "\\n" with one trailing "\\r" dropped, the final
unterminated line is still a line, and an empty input yields no lines.
A line longer than max_line_size raises LineTooLongError.

The reader is buffered one line at a time and closed exactly once.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from linepatterns.config import settings
from linepatterns.errors import LineTooLongError, SourceUnavailableError

logger = logging.getLogger(__name__)


class LineReader:
    """
    Lazy, closable line iterator over a reader or an iterable of lines.

    max_line_size counts bytes for binary sources and characters for
    text sources, so a text line of multi-byte characters may hold more
    than max_line_size bytes.

    Usage:
        with LineReader(open("app.log", "rb")) as lines:
            for line in lines:
                ...
    """

    def __init__(
        self,
        source: object,
        max_line_size: Optional[int] = None,
        encoding: Optional[str] = None,
    ):
        self._source = source
        self._max_line_size = max_line_size if max_line_size is not None else settings.MAX_LINE_SIZE
        if self._max_line_size < 1:
            raise ValueError(f"max_line_size must be at least 1, got {self._max_line_size}")
        self._encoding = encoding or settings.SOURCE_ENCODING
        self._closed = False
        self.lines_read = 0

        readline = getattr(source, "readline", None)
        if callable(readline):
            self._readline = readline
            self._iterable = None
        elif isinstance(source, (str, bytes)) or not isinstance(source, Iterable):
            raise SourceUnavailableError(
                f"expected a readable stream or an iterable of lines, got {type(source).__name__}"
            )
        else:
            self._readline = None
            self._iterable = source

    @property
    def max_line_size(self) -> int:
        return self._max_line_size

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[str]:
        if self._readline is not None:
            return self._read_lines()
        return self._iter_lines()

    def _read_lines(self) -> Iterator[str]:
        # Room for the longest allowed line plus "\r\n"
        limit = self._max_line_size + 2
        while True:
            chunk = self._readline(limit)
            if not chunk:
                return
            yield self._finish(chunk)

    def _iter_lines(self) -> Iterator[str]:
        for chunk in self._iterable:
            yield self._finish(chunk)

    def _finish(self, chunk) -> str:
        """Strip the terminator, enforce the size limit and decode."""
        if isinstance(chunk, (bytes, bytearray)):
            newline, cr = b"\n", b"\r"
        elif isinstance(chunk, str):
            newline, cr = "\n", "\r"
        else:
            raise SourceUnavailableError(
                f"source produced {type(chunk).__name__}, expected str or bytes"
            )

        if chunk.endswith(newline):
            chunk = chunk[:-1]
        if chunk.endswith(cr):
            chunk = chunk[:-1]

        if len(chunk) > self._max_line_size:
            logger.warning(
                "Line exceeds maximum size",
                extra={"limit": self._max_line_size, "lines_scanned": self.lines_read},
            )
            raise LineTooLongError(self._max_line_size)

        self.lines_read += 1
        if isinstance(chunk, str):
            return chunk
        return bytes(chunk).decode(self._encoding, errors="replace")

    def close(self) -> None:
        """Release the underlying reader. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        close = getattr(self._source, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "LineReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
