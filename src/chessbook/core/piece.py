"""Signed piece codes used on the board grid.

A code is ``sign * piece_type`` where the sign is +1 for white and -1 for
black; 0 is an empty square.
"""

from __future__ import annotations

from chessbook.core.enums import Color, PieceType

EMPTY = 0

# FEN character -> (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

# Black glyphs for both sides; the renderer colours them.
_UNICODE: dict[PieceType, str] = {
    PieceType.PAWN: "♟",
    PieceType.KNIGHT: "♞",
    PieceType.BISHOP: "♝",
    PieceType.ROOK: "♜",
    PieceType.QUEEN: "♛",
    PieceType.KING: "♚",
}


def make_piece(color: Color, piece_type: PieceType) -> int:
    return color.sign * int(piece_type)


def color_of(code: int) -> Color:
    if code == EMPTY:
        raise ValueError("Empty square has no color")
    return Color.WHITE if code > 0 else Color.BLACK


def type_of(code: int) -> PieceType:
    if code == EMPTY:
        raise ValueError("Empty square has no piece type")
    return PieceType(abs(code))


def piece_from_char(char: str) -> int:
    """Piece code from a FEN character, e.g. ``'n'`` -> -2."""
    try:
        color, ptype = _CHAR_MAP[char]
    except KeyError:
        raise ValueError(f"Invalid piece character: {char!r}") from None
    return make_piece(color, ptype)


def piece_to_char(code: int) -> str:
    """FEN character (uppercase = white, lowercase = black)."""
    return _FEN_CHARS[(color_of(code), type_of(code))]


def piece_symbol(code: int) -> str:
    """Unicode glyph for a piece, a space for an empty square."""
    if code == EMPTY:
        return " "
    return _UNICODE[type_of(code)]
