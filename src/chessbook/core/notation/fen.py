"""FEN parsing and serialization."""

from __future__ import annotations

from chessbook.core.board import Board
from chessbook.core.enums import CastlingRights, Color
from chessbook.core.errors import InvalidTagValue
from chessbook.core.piece import piece_from_char, piece_to_char
from chessbook.core.types import Position, parse_position

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def board_from_fen(fen: str) -> Board:
    """Parse a FEN record into a :class:`Board`.

    Fields are consumed left to right: placement, side to move, castling,
    en passant, then the optional half-move clock and full-move number.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise InvalidTagValue(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = Board()

    # 1. Piece placement, rank 8 first
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise InvalidTagValue(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    for rank_idx, rank_text in enumerate(ranks):
        rank = 8 - rank_idx
        file = 1
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise InvalidTagValue(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file > 8:
                    raise InvalidTagValue(f"Invalid FEN rank width: {fen!r}")
                try:
                    board[Position(file, rank)] = piece_from_char(ch)
                except ValueError as exc:
                    raise InvalidTagValue(f"{exc} in FEN {fen!r}") from None
                file += 1
            if file > 9:
                raise InvalidTagValue(f"Invalid FEN rank width: {fen!r}")
        if file != 9:
            raise InvalidTagValue(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        board.side_to_move = Color.WHITE
    elif side_part == "b":
        board.side_to_move = Color.BLACK
    else:
        raise InvalidTagValue(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise InvalidTagValue(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right
    board.castling = castling

    # 4. En passant
    if ep_part != "-":
        try:
            ep = parse_position(ep_part)
        except ValueError:
            raise InvalidTagValue(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_rank = 6 if board.side_to_move == Color.WHITE else 3
        if ep.rank != expected_rank:
            raise InvalidTagValue(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        board.en_passant = ep

    # 5-6. Clocks (optional)
    if len(parts) > 4:
        board.halfmove_clock = _parse_counter(parts[4], "halfmove clock", minimum=0)
    if len(parts) > 5:
        board.fullmove_number = _parse_counter(parts[5], "fullmove number", minimum=1)

    return board


def _parse_counter(text: str, what: str, *, minimum: int) -> int:
    if not text.isdigit() or int(text) < minimum:
        raise InvalidTagValue(f"Invalid FEN {what}: {text!r}")
    return int(text)


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(8, 0, -1):
        empty = 0
        row = ""
        for file in range(1, 9):
            code = board.piece_at(file, rank)
            if not code:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += piece_to_char(code)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if board.castling & right
    )
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = board.en_passant.name if board.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )
