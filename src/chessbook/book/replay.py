"""Playing book lines on a board."""

from __future__ import annotations

import logging

from chessbook.book.export import format_line
from chessbook.book.tree import MoveTreeNode, OpeningBook
from chessbook.core.board import Board
from chessbook.core.errors import BoardMoveUnresolvable
from chessbook.core.resolver import apply_move

_LOGGER = logging.getLogger(__name__)


def board_at(book: OpeningBook, node: MoveTreeNode) -> Board:
    """Board after every move from the root down to *node*."""
    board = book.board.copy()
    for step in node.path():
        apply_move(board, step.move)
    return board


def check_book(book: OpeningBook) -> int:
    """Play every line of *book* and return how many lines there are.

    Raises :class:`BoardMoveUnresolvable` for the first move that cannot be
    placed on the board.
    """
    lines = 0
    stack: list[tuple[MoveTreeNode, Board]] = [(book.root, book.board)]
    while stack:
        node, board = stack.pop()
        if not node.children:
            lines += 0 if node.is_root else 1
            continue
        for child in reversed(node.children):
            child_board = board.copy()
            try:
                apply_move(child_board, child.move)
            except BoardMoveUnresolvable:
                _LOGGER.warning("Book line cannot be played: %s", format_line(child))
                raise
            stack.append((child, child_board))
    _LOGGER.info("Checked %d book lines", lines)
    return lines
