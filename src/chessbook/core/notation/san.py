"""Printing moves in algebraic notation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessbook.core.enums import PieceType

if TYPE_CHECKING:
    from chessbook.core.move import Move

PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
LETTER_PIECES: dict[str, PieceType] = {v: k for k, v in PIECE_LETTERS.items()}


def format_move(move: Move) -> str:
    """Render *move* exactly as the parser accepts it.

    Departure hints are printed only as far as the move carries them, so a
    parsed move re-renders to its source text.
    """
    if move.is_short_castling:
        san = "O-O"
    elif move.is_long_castling:
        san = "O-O-O"
    else:
        san = PIECE_LETTERS.get(move.piece, "")
        san += move.departure.name
        if move.is_capture:
            san += "x"
        san += move.destination.name
        if move.is_promotion:
            san += "=" + PIECE_LETTERS[move.promotion]

    if move.is_checkmate:
        san += "#"
    elif move.is_check:
        san += "+"
    return san
