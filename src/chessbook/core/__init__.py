"""Core domain layer: board, moves and the notation they are written in.

Quick start::

    from chessbook.core import Board, apply_move
    from chessbook.core.notation import parse_move

    board = Board.initial()
    apply_move(board, parse_move("e4"))
"""

from chessbook.core.board import Board
from chessbook.core.enums import CastlingRights, Color, File, PieceType
from chessbook.core.errors import (
    BacktrackError,
    BoardMoveUnresolvable,
    ChessbookError,
    NotationError,
)
from chessbook.core.move import Move
from chessbook.core.resolver import apply_move, resolve_origin
from chessbook.core.types import Position, parse_position

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "File",
    "PieceType",
    # Domain objects
    "Board",
    "Move",
    "Position",
    "parse_position",
    # Board resolution
    "apply_move",
    "resolve_origin",
    # Errors
    "BacktrackError",
    "BoardMoveUnresolvable",
    "ChessbookError",
    "NotationError",
]
