"""Opening books: the variation tree, printing and replay."""

from chessbook.book.tree import (
    DEFAULT_WEIGHT,
    MoveTreeNode,
    OpeningBook,
    append,
    choose_weighted,
    find_matching_child,
)
from chessbook.book.export import format_book, format_indented, format_line
from chessbook.book.replay import board_at, check_book

__all__ = [
    "DEFAULT_WEIGHT",
    "MoveTreeNode",
    "OpeningBook",
    "append",
    "choose_weighted",
    "find_matching_child",
    "format_book",
    "format_indented",
    "format_line",
    "board_at",
    "check_book",
]
