"""Board resolution: find where a notated move comes from and play it.

Notation usually names only the piece and the destination.  The origin is
reconstructed geometrically: every offset the piece can move by is tried in a
fixed order and the first square that holds a matching piece, agrees with the
departure hints and has a clear path wins.  When two pieces of the same kind
could both reach the destination the first one generated is taken; checks
and pins are not considered.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from chessbook.core.board import Board
from chessbook.core.enums import CastlingRights, Color, PieceType
from chessbook.core.errors import BoardMoveUnresolvable
from chessbook.core.move import Move
from chessbook.core.piece import EMPTY, color_of, make_piece
from chessbook.core.types import Position

_LOGGER = logging.getLogger(__name__)

# (file_delta, rank_delta) from origin to destination.
KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}
_MAX_DISTANCE = 7
_PAWN_RANK: dict[Color, int] = {Color.WHITE: 2, Color.BLACK: 7}


@dataclass(frozen=True, slots=True)
class _Castling:
    king_from: Position
    king_to: Position
    rook_from: Position
    rook_to: Position
    right: CastlingRights


# Keyed by (side, is_short).
_CASTLINGS: dict[tuple[Color, bool], _Castling] = {
    (Color.WHITE, True): _Castling(
        Position(5, 1), Position(7, 1), Position(8, 1), Position(6, 1),
        CastlingRights.WHITE_KINGSIDE,
    ),
    (Color.WHITE, False): _Castling(
        Position(5, 1), Position(3, 1), Position(1, 1), Position(4, 1),
        CastlingRights.WHITE_QUEENSIDE,
    ),
    (Color.BLACK, True): _Castling(
        Position(5, 8), Position(7, 8), Position(8, 8), Position(6, 8),
        CastlingRights.BLACK_KINGSIDE,
    ),
    (Color.BLACK, False): _Castling(
        Position(5, 8), Position(3, 8), Position(1, 8), Position(4, 8),
        CastlingRights.BLACK_QUEENSIDE,
    ),
}

# Moving from or capturing on these squares drops the listed rights.
_RIGHTS_BY_SQUARE: dict[Position, CastlingRights] = {
    Position(5, 1): CastlingRights.WHITE_BOTH,
    Position(1, 1): CastlingRights.WHITE_QUEENSIDE,
    Position(8, 1): CastlingRights.WHITE_KINGSIDE,
    Position(5, 8): CastlingRights.BLACK_BOTH,
    Position(1, 8): CastlingRights.BLACK_QUEENSIDE,
    Position(8, 8): CastlingRights.BLACK_KINGSIDE,
}


def candidate_offsets(
    piece: PieceType,
    side: Color,
    is_capture: bool = False,
) -> Iterator[tuple[int, int]]:
    """Offsets (origin to destination) in the order they are tried."""
    if piece == PieceType.PAWN:
        forward = side.forward
        if is_capture:
            yield (-1, forward)
            yield (1, forward)
        else:
            yield (0, forward)
            yield (0, 2 * forward)
    elif piece == PieceType.KNIGHT:
        yield from KNIGHT_OFFSETS
    elif piece == PieceType.KING:
        yield from KING_OFFSETS
    else:
        for df, dr in _SLIDER_DIRS[piece]:
            for distance in range(1, _MAX_DISTANCE + 1):
                yield (df * distance, dr * distance)


def _path_clear(board: Board, origin: Position, destination: Position) -> bool:
    """Whether every square strictly between the two is empty."""
    df = (destination.file > origin.file) - (destination.file < origin.file)
    dr = (destination.rank > origin.rank) - (destination.rank < origin.rank)
    square = origin.shifted(df, dr)
    while square != destination:
        if not board.is_empty(square):
            return False
        square = square.shifted(df, dr)
    return True


def _qualifies(board: Board, move: Move, origin: Position, offset: tuple[int, int]) -> bool:
    if not origin.is_on_board or not move.departure.covers(origin):
        return False
    if board[origin] != make_piece(move.side, move.piece):
        return False
    target = board[move.destination]
    if target != EMPTY and color_of(target) == move.side:
        return False

    if move.piece == PieceType.PAWN:
        if offset[0] == 0:
            if target != EMPTY:
                return False
            if abs(offset[1]) == 2 and origin.rank != _PAWN_RANK[move.side]:
                return False
        elif target == EMPTY and move.destination != board.en_passant:
            return False

    if move.piece in (PieceType.KNIGHT, PieceType.KING):
        return True
    return _path_clear(board, origin, move.destination)


def resolve_origin(board: Board, move: Move) -> Position:
    """Square the piece of a non-castling *move* starts from.

    Raises :class:`BoardMoveUnresolvable` if no piece qualifies.
    """
    if move.is_castling:
        raise BoardMoveUnresolvable(move, "castling has no single origin square")
    if not move.destination.is_complete:
        raise BoardMoveUnresolvable(move, "destination square is incomplete")

    for offset in candidate_offsets(move.piece, move.side, move.is_capture):
        origin = move.destination.shifted(-offset[0], -offset[1])
        if _qualifies(board, move, origin, offset):
            return origin
    raise BoardMoveUnresolvable(move)


def _castle(board: Board, move: Move) -> Position:
    castling = _CASTLINGS[(move.side, move.is_short_castling)]
    if not board.castling & castling.right:
        raise BoardMoveUnresolvable(move, f"{move.side} may no longer castle this way")
    if board[castling.king_from] != make_piece(move.side, PieceType.KING):
        raise BoardMoveUnresolvable(move, "king is not on its home square")
    if board[castling.rook_from] != make_piece(move.side, PieceType.ROOK):
        raise BoardMoveUnresolvable(move, "rook is not on its home square")
    if not _path_clear(board, castling.king_from, castling.rook_from):
        raise BoardMoveUnresolvable(move, "squares between king and rook are occupied")

    board[castling.king_from] = EMPTY
    board[castling.rook_from] = EMPTY
    board[castling.king_to] = make_piece(move.side, PieceType.KING)
    board[castling.rook_to] = make_piece(move.side, PieceType.ROOK)
    return castling.king_from


def apply_move(board: Board, move: Move) -> Position:
    """Play *move* on *board* in place and return the origin square.

    The board is left untouched when the move cannot be resolved.
    """
    if move.is_castling:
        origin = _castle(board, move)
        board.castling &= ~(
            CastlingRights.WHITE_BOTH if move.side == Color.WHITE else CastlingRights.BLACK_BOTH
        )
        board.en_passant = None
        board.halfmove_clock += 1
    else:
        origin = resolve_origin(board, move)
        destination = move.destination
        captured = board[destination]
        if (
            move.piece == PieceType.PAWN
            and origin.file != destination.file
            and captured == EMPTY
        ):
            victim = Position(destination.file, origin.rank)
            captured = board[victim]
            board[victim] = EMPTY

        placed = move.promotion if move.is_promotion else move.piece
        board[origin] = EMPTY
        board[destination] = make_piece(move.side, placed)

        if move.piece == PieceType.PAWN and abs(destination.rank - origin.rank) == 2:
            board.en_passant = Position(origin.file, origin.rank + move.side.forward)
        else:
            board.en_passant = None
        if move.piece == PieceType.PAWN or captured != EMPTY:
            board.halfmove_clock = 0
        else:
            board.halfmove_clock += 1
        for square in (origin, destination):
            right = _RIGHTS_BY_SQUARE.get(square)
            if right is not None:
                board.castling &= ~right

    if move.side == Color.BLACK:
        board.fullmove_number += 1
    board.side_to_move = move.side.opposite
    _LOGGER.debug("Played %s from %s", move.san, origin)
    return origin
