"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def sign(self) -> int:
        """Sign of this side's piece codes on the board grid."""
        return 1 if self == Color.WHITE else -1

    @property
    def forward(self) -> int:
        """Rank direction this side's pawns advance in."""
        return self.sign

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value.

    ``PAWN`` doubles as "no promotion" on :class:`~chessbook.core.move.Move`.
    """

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class File(IntEnum):
    """Board file; 0 is reserved for "not given in notation"."""

    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7
    H = 8

    @property
    def letter(self) -> str:
        return self.name.lower()

    @classmethod
    def from_letter(cls, letter: str) -> File:
        try:
            return cls[letter.upper()]
        except KeyError:
            raise ValueError(f"Invalid file letter: {letter!r}") from None


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = 1
    WHITE_QUEENSIDE = 2
    BLACK_KINGSIDE = 4
    BLACK_QUEENSIDE = 8

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH
