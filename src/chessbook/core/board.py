"""Board - piece placement on an 8x8 grid plus game bookkeeping."""

from __future__ import annotations

from chessbook.core.enums import CastlingRights, Color, PieceType
from chessbook.core.piece import EMPTY, make_piece, piece_to_char
from chessbook.core.types import Position

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable board of signed piece codes.

    The grid is indexed ``[rank - 1][file - 1]``; a cell holds
    ``+piece_type`` for white, ``-piece_type`` for black and 0 when empty.
    """

    __slots__ = (
        "_grid",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
    )

    def __init__(
        self,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.NONE,
        en_passant: Position | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self._grid: list[list[int]] = [[EMPTY] * 8 for _ in range(8)]
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number

    # -- Element access -----------------------------------------------------

    def __getitem__(self, pos: Position) -> int:
        return self._grid[pos.rank - 1][pos.file - 1]

    def __setitem__(self, pos: Position, code: int) -> None:
        if not pos.is_on_board:
            raise ValueError(f"Square off the board: {pos!r}")
        self._grid[pos.rank - 1][pos.file - 1] = code

    def piece_at(self, file: int, rank: int) -> int:
        return self._grid[rank - 1][file - 1]

    def is_empty(self, pos: Position) -> bool:
        return self[pos] == EMPTY

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board(
            self.side_to_move,
            self.castling,
            self.en_passant,
            self.halfmove_clock,
            self.fullmove_number,
        )
        b._grid = [row.copy() for row in self._grid]
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls(castling=CastlingRights.ALL)
        for f in range(1, 9):
            b[Position(f, 2)] = make_piece(Color.WHITE, PieceType.PAWN)
            b[Position(f, 7)] = make_piece(Color.BLACK, PieceType.PAWN)
        for f, pt in enumerate(_BACK_RANK, start=1):
            b[Position(f, 1)] = make_piece(Color.WHITE, pt)
            b[Position(f, 8)] = make_piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._grid == other._grid
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
            and self.halfmove_clock == other.halfmove_clock
            and self.fullmove_number == other.fullmove_number
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8, 0, -1):
            row = []
            for file in range(1, 9):
                code = self.piece_at(file, rank)
                row.append(piece_to_char(code) if code else ".")
            rows.append(f"{rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
