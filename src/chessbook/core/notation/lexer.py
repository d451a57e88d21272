"""Lexical primitives over a :class:`CharacterSource`.

Every reader either returns a typed value or raises a
:class:`~chessbook.core.errors.NotationError` located at the offending
character.  Nothing is consumed on failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from chessbook.core.enums import Color, File, PieceType
from chessbook.core.errors import (
    EndOfInput,
    NotationError,
    TokenTooLong,
    UnexpectedCharacter,
    UnterminatedString,
)
from chessbook.core.notation.san import LETTER_PIECES
from chessbook.core.notation.source import CharacterSource

DIGITS = "0123456789"
FILES = "abcdefgh"
RANKS = "12345678"
PIECES = "NBRQK"
PROMOTION_PIECES = "NBRQ"
WHITESPACE = " \t\r\n"

CAPTURE = "x"
CHECK = "+"
CHECKMATE = "#"
DASH = "-"
EQUALS = "="
CASTLING = "O"
OPEN_TAG = "["
CLOSE_TAG = "]"
QUOTE = '"'
ESCAPE = "\\"

MAX_TOKEN_LENGTH = 256
_TOKEN_DELIMITERS = WHITESPACE + OPEN_TAG + CLOSE_TAG + QUOTE


def unexpected(source: CharacterSource, expected: str) -> NotationError:
    """Build the failure for the character currently under the cursor."""
    actual = source.peek()
    if actual is None:
        return EndOfInput(
            f"Expected {expected}, got end of input",
            line=source.line,
            column=source.column,
        )
    return UnexpectedCharacter(expected, actual, line=source.line, column=source.column)


def read_one_of(source: CharacterSource, chars: str, expected: str) -> str:
    char = source.read_if(chars)
    if char is None:
        raise unexpected(source, expected)
    return char


def expect(source: CharacterSource, char: str) -> str:
    return read_one_of(source, char, repr(char))


# ── Typed characters ─────────────────────────────────────────────────────────


def read_integer(source: CharacterSource) -> int:
    """One or more digits."""
    digits = read_one_of(source, DIGITS, "a number")
    while (char := source.read_if(DIGITS)) is not None:
        digits += char
        if len(digits) > MAX_TOKEN_LENGTH:
            raise TokenTooLong(
                f"Number longer than {MAX_TOKEN_LENGTH} digits",
                line=source.line,
                column=source.column,
            )
    return int(digits)


def read_file(source: CharacterSource) -> File:
    return File.from_letter(read_one_of(source, FILES, "a file (a-h)"))


def read_rank(source: CharacterSource) -> int:
    return int(read_one_of(source, RANKS, "a rank (1-8)"))


def read_piece(source: CharacterSource) -> PieceType:
    return LETTER_PIECES[read_one_of(source, PIECES, "a piece symbol (N, B, R, Q, K)")]


def read_promotion_piece(source: CharacterSource) -> PieceType:
    return LETTER_PIECES[
        read_one_of(source, PROMOTION_PIECES, "a promotion piece (N, B, R, Q)")
    ]


def read_capture(source: CharacterSource) -> str:
    return expect(source, CAPTURE)


def read_check(source: CharacterSource) -> str:
    return expect(source, CHECK)


def read_checkmate(source: CharacterSource) -> str:
    return expect(source, CHECKMATE)


def read_dash(source: CharacterSource) -> str:
    return expect(source, DASH)


def read_equals(source: CharacterSource) -> str:
    return expect(source, EQUALS)


def read_castling_symbol(source: CharacterSource) -> str:
    return expect(source, CASTLING)


# ── Runs ─────────────────────────────────────────────────────────────────────


def skip_whitespace(source: CharacterSource) -> str:
    """Consume a possibly empty whitespace run and return it."""
    run = ""
    while (char := source.read_if(WHITESPACE)) is not None:
        run += char
    return run


def read_whitespace(source: CharacterSource) -> str:
    """Consume one or more whitespace characters as a single run."""
    first = read_one_of(source, WHITESPACE, "whitespace")
    return first + skip_whitespace(source)


def read_quoted_string(source: CharacterSource) -> str:
    """Read ``"..."``; a backslash escapes the character after it."""
    line, column = source.line, source.column
    expect(source, QUOTE)
    chars: list[str] = []
    escaped = False
    while True:
        char = source.peek()
        if char is None:
            raise UnterminatedString(line=line, column=column)
        source.read()
        if escaped:
            escaped = False
        elif char == ESCAPE:
            escaped = True
            continue
        elif char == QUOTE:
            return "".join(chars)
        chars.append(char)
        if len(chars) > MAX_TOKEN_LENGTH:
            raise TokenTooLong(
                f"Quoted string longer than {MAX_TOKEN_LENGTH} characters",
                line=line,
                column=column,
            )


# ── Bare tokens ──────────────────────────────────────────────────────────────


class TokenKind(Enum):
    SYMBOL = auto()
    FULL_MOVE = auto()
    OPEN_TAG = auto()
    CLOSE_TAG = auto()
    QUOTED_STRING = auto()
    PROBABILITY = auto()


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    line: int
    column: int
    number: int = 0
    side: Color = Color.WHITE


def read_token(source: CharacterSource) -> Token | None:
    """Skip whitespace and read one bare token, ``None`` at end of input.

    Brackets are single-character tokens and a leading quote starts a
    quoted string.  Any other maximal run is a full-move marker if it is
    a number followed by dots (two or more dots: Black to move), a
    probability if it is a number followed by ``%``, else a symbol.
    """
    skip_whitespace(source)
    line, column = source.line, source.column
    char = source.peek()
    if char is None:
        return None
    if char == OPEN_TAG:
        source.read()
        return Token(TokenKind.OPEN_TAG, char, line, column)
    if char == CLOSE_TAG:
        source.read()
        return Token(TokenKind.CLOSE_TAG, char, line, column)
    if char == QUOTE:
        text = read_quoted_string(source)
        return Token(TokenKind.QUOTED_STRING, text, line, column)

    text = ""
    while (char := source.read_if(lambda c: c not in _TOKEN_DELIMITERS)) is not None:
        text += char
        if len(text) > MAX_TOKEN_LENGTH:
            raise TokenTooLong(
                f"Token longer than {MAX_TOKEN_LENGTH} characters",
                line=line,
                column=column,
            )

    number = text.rstrip(".")
    if len(text) > 1 and text.endswith(".") and number.isdigit():
        side = Color.BLACK if text.endswith("..") else Color.WHITE
        return Token(TokenKind.FULL_MOVE, text, line, column, int(number), side)
    number = text[:-1]
    if len(text) > 1 and text.endswith("%") and number.isdigit():
        return Token(TokenKind.PROBABILITY, text, line, column, int(number))
    return Token(TokenKind.SYMBOL, text, line, column)
