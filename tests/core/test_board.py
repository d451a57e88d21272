"""Tests for Board and its coordinates."""

import pytest

from chessbook.core.board import Board
from chessbook.core.enums import CastlingRights, Color, File, PieceType
from chessbook.core.piece import (
    EMPTY,
    color_of,
    make_piece,
    piece_from_char,
    piece_symbol,
    piece_to_char,
    type_of,
)
from chessbook.core.types import Position, parse_position


class TestBoardInitial:
    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            PieceType.ROOK, PieceType.KNIGHT, PieceType.BISHOP, PieceType.QUEEN,
            PieceType.KING, PieceType.BISHOP, PieceType.KNIGHT, PieceType.ROOK,
        ]
        for file, pt in enumerate(expected, start=1):
            assert board.piece_at(file, 1) == make_piece(Color.WHITE, pt)
            assert board.piece_at(file, 8) == make_piece(Color.BLACK, pt)

    def test_pawns(self) -> None:
        board = Board.initial()
        for file in range(1, 9):
            assert board.piece_at(file, 2) == make_piece(Color.WHITE, PieceType.PAWN)
            assert board.piece_at(file, 7) == make_piece(Color.BLACK, PieceType.PAWN)

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for rank in range(3, 7):
            for file in range(1, 9):
                assert board.is_empty(Position(file, rank))

    def test_state(self) -> None:
        board = Board.initial()
        assert board.side_to_move == Color.WHITE
        assert board.castling == CastlingRights.ALL
        assert board.en_passant is None


class TestBoardMutation:
    def test_copy_is_independent(self) -> None:
        board = Board.initial()
        clone = board.copy()
        clone[parse_position("e2")] = EMPTY
        assert board[parse_position("e2")] != EMPTY
        assert board != clone

    def test_set_off_board_raises(self) -> None:
        with pytest.raises(ValueError):
            Board()[Position(0, 4)] = make_piece(Color.WHITE, PieceType.ROOK)

    def test_repr(self) -> None:
        lines = repr(Board.initial()).splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[4] == "4 . . . . . . . ."
        assert lines[-1] == "  a b c d e f g h"


class TestPieceCodes:
    def test_signs(self) -> None:
        assert make_piece(Color.WHITE, PieceType.QUEEN) == 5
        assert make_piece(Color.BLACK, PieceType.KNIGHT) == -2

    def test_decode(self) -> None:
        assert color_of(-6) == Color.BLACK
        assert type_of(-6) == PieceType.KING

    def test_empty_has_no_color(self) -> None:
        with pytest.raises(ValueError):
            color_of(EMPTY)

    def test_fen_chars(self) -> None:
        assert piece_from_char("n") == -2
        assert piece_to_char(4) == "R"
        with pytest.raises(ValueError):
            piece_from_char("x")

    def test_symbols(self) -> None:
        assert piece_symbol(EMPTY) == " "
        assert piece_symbol(1) == piece_symbol(-1) == "♟"


class TestPosition:
    def test_name(self) -> None:
        assert Position(5, 4).name == "e4"
        assert Position(file=5).name == "e"
        assert Position(rank=4).name == "4"
        assert Position().name == ""

    def test_partial_covers(self) -> None:
        square = parse_position("g1")
        assert Position().covers(square)
        assert Position(file=7).covers(square)
        assert not Position(rank=2).covers(square)
        assert square.covers(square)

    def test_flags(self) -> None:
        assert Position(1, 1).is_complete
        assert not Position(file=1).is_complete
        assert Position().is_unspecified
        assert not Position(9, 1).is_on_board

    def test_parse_rejects_bad_names(self) -> None:
        with pytest.raises(ValueError):
            parse_position("i9")

    def test_file_letters(self) -> None:
        assert File.from_letter("c") is File.C
        assert File.H.letter == "h"
        with pytest.raises(ValueError):
            File.from_letter("z")
