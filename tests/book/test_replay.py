"""Tests for replaying book lines on a board."""

import logging

import pytest

from chessbook.book.replay import board_at, check_book
from chessbook.core.enums import Color, PieceType
from chessbook.core.errors import BoardMoveUnresolvable
from chessbook.core.notation.parser import parse_book
from chessbook.core.piece import EMPTY, make_piece
from chessbook.core.types import parse_position


class TestBoardAt:
    def test_plays_the_path(self) -> None:
        book = parse_book("1. e4 e5 2. Nf3")
        leaf = next(book.leaves())
        board = board_at(book, leaf)
        assert board[parse_position("f3")] == make_piece(Color.WHITE, PieceType.KNIGHT)
        assert board[parse_position("g1")] == EMPTY
        assert board.side_to_move == Color.BLACK

    def test_book_board_is_untouched(self) -> None:
        book = parse_book("1. e4")
        before = book.board.copy()
        board_at(book, book.root.children[0])
        assert book.board == before


class TestCheckBook:
    def test_counts_lines(self) -> None:
        book = parse_book("1. e4 e5 2. Nf3 Nc6 2. Bc4\n1... c5\n1. d4 d5")
        assert check_book(book) == 4

    def test_empty_book(self) -> None:
        assert check_book(parse_book("")) == 0

    def test_fen_start(self) -> None:
        fen = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
        book = parse_book(f'[FEN "{fen}"]\n1. O-O O-O-O\n1. O-O-O O-O')
        assert check_book(book) == 2

    def test_bad_line(self, caplog: pytest.LogCaptureFixture) -> None:
        book = parse_book("1. e4 e5 2. Nf3\n2. Bb6")
        with pytest.raises(BoardMoveUnresolvable):
            check_book(book)
        assert "1. e4 e5 2. Bb6" in caplog.text
