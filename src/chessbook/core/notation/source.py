"""Buffered character reader with line/column tracking and rewind."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import NamedTuple, TextIO, TypeAlias

from chessbook.core.errors import BacktrackError, EndOfInput

# Longest rewind the move grammar needs is "Nd4xe" -> 4 characters
# (departure file, departure rank, capture, destination file).
DEFAULT_WINDOW = 8

CharTest: TypeAlias = "str | Callable[[str], bool]"


class SourceMark(NamedTuple):
    """Restore point: characters consumed so far plus the location."""

    offset: int
    line: int
    column: int


class CharacterSource:
    """Reads characters from a text stream one at a time.

    The stream is pulled in chunks (one line, or at most ``chunk_size``
    characters of it).  When a chunk is exhausted the last ``window``
    characters are carried over to the front of the next buffer, so a
    :meth:`restore` can reach back across the refill.
    """

    __slots__ = (
        "_stream",
        "_window",
        "_chunk_size",
        "_buffer",
        "_cursor",
        "_offset",
        "_line",
        "_column",
        "_exhausted",
    )

    def __init__(
        self,
        stream: TextIO | str,
        *,
        window: int = DEFAULT_WINDOW,
        chunk_size: int = -1,
    ) -> None:
        if window < 0:
            raise ValueError("window must not be negative")
        if chunk_size == 0:
            raise ValueError("chunk_size must be positive, or negative for whole lines")
        self._stream: TextIO = io.StringIO(stream) if isinstance(stream, str) else stream
        self._window = window
        self._chunk_size = chunk_size
        self._buffer = ""
        self._cursor = 0
        self._offset = 0
        self._line = 1
        self._column = 1
        self._exhausted = False

    # ── Location ─────────────────────────────────────────────────────────

    @property
    def offset(self) -> int:
        """Total characters consumed."""
        return self._offset

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    def save(self) -> SourceMark:
        return SourceMark(self._offset, self._line, self._column)

    def restore(self, mark: SourceMark) -> None:
        """Rewind to *mark*; only as far back as the look-back window reaches."""
        distance = self._offset - mark.offset
        if distance < 0:
            raise BacktrackError(f"Cannot restore forward by {-distance} characters")
        if distance > self._cursor:
            raise BacktrackError(
                f"Cannot rewind {distance} characters, only {self._cursor} buffered"
            )
        self._cursor -= distance
        self._offset = mark.offset
        self._line = mark.line
        self._column = mark.column

    # ── Reading ──────────────────────────────────────────────────────────

    def peek(self) -> str | None:
        """Next character without consuming it, ``None`` at end of input."""
        if self._cursor == len(self._buffer) and not self._refill():
            return None
        return self._buffer[self._cursor]

    def at_end(self) -> bool:
        return self.peek() is None

    def read(self) -> str:
        """Consume one character; raises :class:`EndOfInput` if none is left."""
        char = self.peek()
        if char is None:
            raise EndOfInput(line=self._line, column=self._column)
        self._advance(char)
        return char

    def read_if(self, accept: CharTest) -> str | None:
        """Consume the next character if it matches, else leave it alone.

        *accept* is either a string of allowed characters or a predicate.
        Returns the character, or ``None`` on mismatch or end of input.
        """
        char = self.peek()
        if char is None:
            return None
        matched = char in accept if isinstance(accept, str) else accept(char)
        if not matched:
            return None
        self._advance(char)
        return char

    def _advance(self, char: str) -> None:
        self._cursor += 1
        self._offset += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

    def _refill(self) -> bool:
        if self._exhausted:
            return False
        chunk = self._stream.readline(self._chunk_size)
        if not chunk:
            self._exhausted = True
            return False
        keep = self._buffer[-self._window :] if self._window else ""
        self._buffer = keep + chunk
        self._cursor = len(keep)
        return True
