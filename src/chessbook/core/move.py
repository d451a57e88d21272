"""Move value object as written in algebraic notation."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessbook.core.enums import Color, PieceType
from chessbook.core.types import Position


@dataclass(slots=True)
class Move:
    """A single move, possibly only partly specified.

    The departure square is whatever disambiguation the notation gave;
    resolving it against a board is the job of
    :mod:`chessbook.core.resolver`.  Castling moves carry neither departure
    nor destination.
    """

    piece: PieceType = PieceType.PAWN
    side: Color = Color.WHITE
    departure: Position = field(default_factory=Position)
    destination: Position = field(default_factory=Position)
    promotion: PieceType = PieceType.PAWN
    is_capture: bool = False
    is_check: bool = False
    is_checkmate: bool = False
    is_short_castling: bool = False
    is_long_castling: bool = False

    @property
    def is_castling(self) -> bool:
        return self.is_short_castling or self.is_long_castling

    @property
    def is_promotion(self) -> bool:
        return self.promotion != PieceType.PAWN

    def same_path(self, other: Move) -> bool:
        """Equal departure, piece and destination.

        Capture, check and promotion flags are not compared.  The castling
        side is, since both castlings have the same (empty) squares.
        """
        return (
            self.is_short_castling == other.is_short_castling
            and self.is_long_castling == other.is_long_castling
            and self.departure == other.departure
            and self.piece == other.piece
            and self.destination == other.destination
        )

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def san(self) -> str:
        from chessbook.core.notation.san import format_move

        return format_move(self)

    def __str__(self) -> str:
        return self.san
