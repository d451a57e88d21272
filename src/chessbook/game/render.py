"""Drawing a board in the terminal."""

from __future__ import annotations

from chessbook.core.board import Board
from chessbook.core.piece import piece_symbol

# xterm 256-colour palette indices
DARK_TILE_COLOR = 130
LIGHT_TILE_COLOR = 223
WHITE_PIECE_COLOR = 250
BLACK_PIECE_COLOR = 0

_RESET = "\x1b[0m"


def _tile(code: int, dark: bool) -> str:
    fg = WHITE_PIECE_COLOR if code > 0 else BLACK_PIECE_COLOR
    bg = DARK_TILE_COLOR if dark else LIGHT_TILE_COLOR
    # The trailing space keeps wide glyphs from being clipped.
    return f"\x1b[38;5;{fg}m\x1b[48;5;{bg}m {piece_symbol(code)} "


def render_board(board: Board, *, color: bool = True) -> str:
    """Rank 8 at the top, a1 on a dark square.

    With ``color=False`` the board is drawn with FEN letters and dots.
    """
    if not color:
        return repr(board) + "\n"
    rows: list[str] = []
    for rank in range(8, 0, -1):
        tiles = "".join(
            _tile(board.piece_at(file, rank), (rank + file) % 2 == 0)
            for file in range(1, 9)
        )
        rows.append(tiles + _RESET)
    return "\n".join(rows) + "\n"
