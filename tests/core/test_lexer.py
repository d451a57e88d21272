"""Tests for the lexical primitives."""

import pytest

from chessbook.core.enums import Color, File, PieceType
from chessbook.core.errors import (
    EndOfInput,
    TokenTooLong,
    UnexpectedCharacter,
    UnterminatedString,
)
from chessbook.core.notation import lexer
from chessbook.core.notation.source import CharacterSource


class TestCharacterReaders:
    def test_read_integer_stops_at_non_digit(self) -> None:
        source = CharacterSource("123x")
        assert lexer.read_integer(source) == 123
        assert source.peek() == "x"

    def test_read_integer_too_long(self) -> None:
        with pytest.raises(TokenTooLong):
            lexer.read_integer(CharacterSource("1" * 300))

    def test_read_file(self) -> None:
        assert lexer.read_file(CharacterSource("e")) is File.E

    def test_read_file_failure_is_located_and_consumes_nothing(self) -> None:
        source = CharacterSource("Ni")
        source.read()
        with pytest.raises(UnexpectedCharacter) as excinfo:
            lexer.read_file(source)
        assert excinfo.value.actual == "i"
        assert (excinfo.value.line, excinfo.value.column) == (1, 2)
        assert source.peek() == "i"
        assert "at line 1, column 2" in str(excinfo.value)

    def test_read_rank_rejects_nine(self) -> None:
        with pytest.raises(UnexpectedCharacter):
            lexer.read_rank(CharacterSource("9"))

    def test_read_piece(self) -> None:
        assert lexer.read_piece(CharacterSource("Q")) is PieceType.QUEEN

    def test_promotion_piece_excludes_king(self) -> None:
        assert lexer.read_promotion_piece(CharacterSource("N")) is PieceType.KNIGHT
        with pytest.raises(UnexpectedCharacter):
            lexer.read_promotion_piece(CharacterSource("K"))

    @pytest.mark.parametrize(
        ("reader", "char"),
        [
            (lexer.read_capture, "x"),
            (lexer.read_check, "+"),
            (lexer.read_checkmate, "#"),
            (lexer.read_dash, "-"),
            (lexer.read_equals, "="),
            (lexer.read_castling_symbol, "O"),
        ],
    )
    def test_symbols(self, reader, char: str) -> None:
        assert reader(CharacterSource(char)) == char
        with pytest.raises(UnexpectedCharacter):
            reader(CharacterSource("?"))

    def test_end_of_input(self) -> None:
        with pytest.raises(EndOfInput):
            lexer.read_integer(CharacterSource(""))


class TestWhitespace:
    def test_skip_whitespace_may_be_empty(self) -> None:
        assert lexer.skip_whitespace(CharacterSource("x")) == ""

    def test_read_whitespace_returns_run(self) -> None:
        source = CharacterSource(" \t\n x")
        assert lexer.read_whitespace(source) == " \t\n "
        assert source.peek() == "x"

    def test_read_whitespace_requires_one(self) -> None:
        with pytest.raises(UnexpectedCharacter, match="whitespace"):
            lexer.read_whitespace(CharacterSource("x"))


class TestQuotedString:
    def test_plain(self) -> None:
        assert lexer.read_quoted_string(CharacterSource('"Ruy Lopez"')) == "Ruy Lopez"

    def test_escapes(self) -> None:
        source = CharacterSource(r'"say \"hi\" \\ bye"')
        assert lexer.read_quoted_string(source) == 'say "hi" \\ bye'

    def test_unterminated_points_at_opening_quote(self) -> None:
        source = CharacterSource('  "abc')
        lexer.skip_whitespace(source)
        with pytest.raises(UnterminatedString) as excinfo:
            lexer.read_quoted_string(source)
        assert (excinfo.value.line, excinfo.value.column) == (1, 3)


class TestTokens:
    def test_classification(self) -> None:
        source = CharacterSource('[Event "Open games"] 12. 12... 45% Nf3')
        tokens = []
        while (token := lexer.read_token(source)) is not None:
            tokens.append(token)
        assert [t.kind for t in tokens] == [
            lexer.TokenKind.OPEN_TAG,
            lexer.TokenKind.SYMBOL,
            lexer.TokenKind.QUOTED_STRING,
            lexer.TokenKind.CLOSE_TAG,
            lexer.TokenKind.FULL_MOVE,
            lexer.TokenKind.FULL_MOVE,
            lexer.TokenKind.PROBABILITY,
            lexer.TokenKind.SYMBOL,
        ]
        assert tokens[1].text == "Event"
        assert tokens[2].text == "Open games"
        assert (tokens[4].number, tokens[4].side) == (12, Color.WHITE)
        assert (tokens[5].number, tokens[5].side) == (12, Color.BLACK)
        assert tokens[6].number == 45
        assert tokens[7].text == "Nf3"

    def test_token_location(self) -> None:
        source = CharacterSource("\n  Nf3")
        token = lexer.read_token(source)
        assert token is not None
        assert (token.line, token.column) == (2, 3)

    def test_end_of_input_is_none(self) -> None:
        assert lexer.read_token(CharacterSource("   ")) is None

    def test_token_too_long(self) -> None:
        with pytest.raises(TokenTooLong):
            lexer.read_token(CharacterSource("a" * 300))
