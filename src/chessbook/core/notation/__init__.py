"""Notation package: book and move parsing, FEN and move printing."""

from chessbook.core.notation.fen import STARTING_FEN, board_from_fen, board_to_fen
from chessbook.core.notation.parser import (
    Layout,
    NotationParser,
    load_book,
    parse_book,
    parse_move,
)
from chessbook.core.notation.san import format_move
from chessbook.core.notation.source import CharacterSource

__all__ = [
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "format_move",
    "CharacterSource",
    "Layout",
    "NotationParser",
    "load_book",
    "parse_book",
    "parse_move",
]
