"""Exception hierarchy for notation parsing and board application."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessbook.core.move import Move


class ChessbookError(Exception):
    """Base class for every error raised by this package."""


class NotationError(ChessbookError, ValueError):
    """Malformed notation, optionally located at a line and column."""

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def at(self, line: int, column: int) -> NotationError:
        """Attach a location if none is known yet; returns ``self``."""
        if self.line is None:
            self.line = line
            self.column = column
        return self

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} at line {self.line}, column {self.column}"


class EndOfInput(NotationError):
    def __init__(self, message: str = "Unexpected end of input", **kwargs: int) -> None:
        super().__init__(message, **kwargs)


class UnexpectedCharacter(NotationError):
    """A character did not belong to the expected class."""

    def __init__(self, expected: str, actual: str, **kwargs: int) -> None:
        super().__init__(f"Expected {expected}, got {actual!r}", **kwargs)
        self.expected = expected
        self.actual = actual


class UnterminatedString(NotationError):
    def __init__(self, message: str = "Unterminated quoted string", **kwargs: int) -> None:
        super().__init__(message, **kwargs)


class TokenTooLong(NotationError):
    pass


class InvalidTagValue(NotationError):
    """A header tag value could not be interpreted (e.g. a malformed FEN)."""


class MoveNumberSkipped(NotationError):
    pass


class MoveNumberMismatch(NotationError):
    """A move number that cannot be placed in the tree."""


class InvalidPromotionPiece(NotationError):
    pass


class LayoutError(NotationError):
    """Bad indentation in the tab-indented book layout."""


class BacktrackError(ChessbookError, RuntimeError):
    """The parser tried to rewind further than its look-back allows."""


class BoardMoveUnresolvable(ChessbookError, ValueError):
    """No piece on the board can make the given move."""

    def __init__(self, move: Move, reason: str = "no piece can make this move") -> None:
        super().__init__(f"Cannot play {move}: {reason}")
        self.move = move
        self.reason = reason
