"""State-machine parser for opening books and single moves.

A book is an optional block of ``[Tag "value"]`` headers followed by moves.
Each move may be preceded by a move number (``12.`` for White, ``12...``
for Black) and a probability weight (``25%``).  Re-issuing an earlier move
number starts a new variation from that point::

    [Event "Open games"]
    1. e4 e5 2. Nf3 Nc6
    1... 30% c5 2. Nf3

In the indented layout the variation structure is given by leading tabs
instead; see :meth:`NotationParser._begin_line`.

The only ambiguous decision in the move grammar is whether a file/rank pair
right after the piece letter is a departure hint (``Nd2xa8``) or already the
destination (``Nd2``).  The parser tries the departure reading first and
rewinds to the saved position if no destination follows.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TextIO

from chessbook.book.tree import (
    DEFAULT_WEIGHT,
    MoveTreeNode,
    OpeningBook,
    append,
    find_matching_child,
)
from chessbook.core.enums import Color, PieceType
from chessbook.core.errors import (
    BacktrackError,
    EndOfInput,
    InvalidPromotionPiece,
    InvalidTagValue,
    LayoutError,
    MoveNumberMismatch,
    MoveNumberSkipped,
    NotationError,
    UnexpectedCharacter,
)
from chessbook.core.move import Move
from chessbook.core.notation import lexer
from chessbook.core.notation.fen import board_from_fen
from chessbook.core.notation.source import CharacterSource, SourceMark
from chessbook.core.types import Position

_LOGGER = logging.getLogger(__name__)

# One ambiguous decision in the grammar, so one pending attempt at most.
MAX_PENDING_ATTEMPTS = 1
MAX_WEIGHT = 100


class Layout(Enum):
    """How variations are laid out in a book file."""

    NUMBERED = "numbered"
    INDENTED = "indented"


class ParserState(Enum):
    START = auto()
    TAG_BLOCK = auto()
    MOVE_NUMBER_OR_PROBABILITY = auto()
    MOVE_NUMBER = auto()
    PROBABILITY = auto()
    ALGEBRAIC_NOTATION = auto()
    SHORT_CASTLING = auto()
    LONG_CASTLING = auto()
    PIECE = auto()
    DEPARTURE_OR_DESTINATION = auto()
    DEPARTURE_FILE = auto()
    DEPARTURE_RANK = auto()
    NO_DEPARTURE = auto()
    CAPTURE = auto()
    DESTINATION = auto()
    PROMOTION = auto()
    CHECK = auto()
    CHECKMATE = auto()
    FINISH_MOVE = auto()
    WHITESPACE = auto()
    END = auto()


@dataclass(frozen=True, slots=True)
class ParserAttempt:
    """Where to rewind to, and which state to resume in, if a guess fails."""

    mark: SourceMark
    state_on_failure: ParserState


class AttemptStack:
    """Bounded stack of pending :class:`ParserAttempt` restore points."""

    __slots__ = ("_capacity", "_items")

    def __init__(self, capacity: int = MAX_PENDING_ATTEMPTS) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._items: list[ParserAttempt] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def push(self, attempt: ParserAttempt) -> None:
        if len(self._items) >= self._capacity:
            raise BacktrackError(
                f"More than {self._capacity} pending parse attempt(s)"
            )
        self._items.append(attempt)

    def pop(self) -> ParserAttempt | None:
        """Remove and return the newest attempt, ``None`` if there is none."""
        return self._items.pop() if self._items else None


class NotationParser:
    """Reads notation from a :class:`CharacterSource`.

    One parser instance reads one book (:meth:`parse_book`) or one move
    (:meth:`parse_move`).
    """

    def __init__(
        self,
        source: CharacterSource,
        *,
        layout: Layout = Layout.NUMBERED,
    ) -> None:
        self._source = source
        self._layout = layout
        self._state = ParserState.START
        self._attempts = AttemptStack()
        self._book = OpeningBook()
        self._cursor = self._book.root
        self._cursor.half_move = 0
        self._anchors: list[MoveTreeNode] = [self._book.root]
        self._move = Move()
        self._move_side = Color.WHITE
        self._weight = DEFAULT_WEIGHT
        self._number: int | None = None
        self._number_at = (1, 1)
        self._handlers: dict[ParserState, Callable[[], None]] = {
            ParserState.START: self._on_start,
            ParserState.TAG_BLOCK: self._on_tag_block,
            ParserState.MOVE_NUMBER_OR_PROBABILITY: self._on_move_number_or_probability,
            ParserState.MOVE_NUMBER: self._on_move_number,
            ParserState.PROBABILITY: self._on_probability,
            ParserState.ALGEBRAIC_NOTATION: self._on_algebraic_notation,
            ParserState.SHORT_CASTLING: self._on_short_castling,
            ParserState.LONG_CASTLING: self._on_long_castling,
            ParserState.PIECE: self._on_piece,
            ParserState.DEPARTURE_OR_DESTINATION: self._on_departure_or_destination,
            ParserState.DEPARTURE_FILE: self._on_departure_file,
            ParserState.DEPARTURE_RANK: self._on_departure_rank,
            ParserState.NO_DEPARTURE: self._on_no_departure,
            ParserState.CAPTURE: self._on_capture,
            ParserState.DESTINATION: self._on_destination,
            ParserState.PROMOTION: self._on_promotion,
            ParserState.CHECK: self._on_check,
            ParserState.CHECKMATE: self._on_checkmate,
            ParserState.FINISH_MOVE: self._on_finish_move,
            ParserState.WHITESPACE: self._on_whitespace,
        }

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def state(self) -> ParserState:
        return self._state

    def parse_book(self) -> OpeningBook:
        """Read headers and moves up to the end of input."""
        self._state = ParserState.START
        self._run(ParserState.END)
        return self._book

    def parse_move(self, side: Color = Color.WHITE) -> Move:
        """Read a single move in algebraic notation."""
        self._move_side = side
        self._state = ParserState.ALGEBRAIC_NOTATION
        self._run(ParserState.FINISH_MOVE)
        return self._move

    # ── Driver ───────────────────────────────────────────────────────────

    def _run(self, until: ParserState) -> None:
        while self._state is not until:
            state = self._state
            try:
                self._handlers[state]()
            except NotationError as exc:
                attempt = self._attempts.pop()
                if attempt is None:
                    exc.at(self._source.line, self._source.column)
                    raise
                _LOGGER.debug(
                    "Backtracking from %s to %s (line %d, column %d): %s",
                    state.name,
                    attempt.state_on_failure.name,
                    attempt.mark.line,
                    attempt.mark.column,
                    exc.message,
                )
                self._source.restore(attempt.mark)
                self._state = attempt.state_on_failure
            else:
                if self._state is not state:
                    _LOGGER.debug(
                        "%s -> %s at line %d, column %d",
                        state.name,
                        self._state.name,
                        self._source.line,
                        self._source.column,
                    )

    # ── Header ───────────────────────────────────────────────────────────

    def _on_start(self) -> None:
        self._state = ParserState.TAG_BLOCK

    def _on_tag_block(self) -> None:
        column = self._source.column
        run = lexer.skip_whitespace(self._source)
        char = self._source.peek()
        if char is None:
            self._state = ParserState.END
            return
        if char != lexer.OPEN_TAG:
            if self._layout is Layout.INDENTED:
                if "\n" in run:
                    indent = run.rsplit("\n", 1)[1]
                elif column == 1:
                    indent = run
                else:
                    indent = ""
                self._begin_line(indent)
            self._state = ParserState.MOVE_NUMBER_OR_PROBABILITY
            return
        self._read_tag()

    def _read_tag(self) -> None:
        lexer.read_token(self._source)  # "["
        name = self._expect_token(lexer.TokenKind.SYMBOL, "a tag name")
        value = self._expect_token(lexer.TokenKind.QUOTED_STRING, "a quoted tag value")
        self._expect_token(lexer.TokenKind.CLOSE_TAG, "']'")
        self._book.tags[name.text] = value.text
        _LOGGER.debug("Tag %s = %r", name.text, value.text)
        if name.text == "FEN":
            self._load_fen(value)

    def _expect_token(self, kind: lexer.TokenKind, expected: str) -> lexer.Token:
        token = lexer.read_token(self._source)
        if token is None:
            raise EndOfInput(
                f"Expected {expected}, got end of input",
                line=self._source.line,
                column=self._source.column,
            )
        if token.kind is not kind:
            raise UnexpectedCharacter(
                expected, token.text, line=token.line, column=token.column
            )
        return token

    def _load_fen(self, token: lexer.Token) -> None:
        try:
            board = board_from_fen(token.text)
        except InvalidTagValue as exc:
            exc.at(token.line, token.column)
            raise
        self._book.board = board
        self._book.root.half_move = 2 * (board.fullmove_number - 1) + (
            1 if board.side_to_move is Color.BLACK else 0
        )

    # ── Move number and probability ──────────────────────────────────────

    def _on_move_number_or_probability(self) -> None:
        char = self._source.peek()
        if char is None:
            self._state = ParserState.END
            return
        if char not in lexer.DIGITS:
            self._number = None
            self._state = ParserState.PROBABILITY
            return
        # Both prefixes start with a number; the character after it decides.
        self._number_at = (self._source.line, self._source.column)
        self._number = lexer.read_integer(self._source)
        char = self._source.peek()
        if char == ".":
            self._state = ParserState.MOVE_NUMBER
        elif char == "%":
            self._state = ParserState.PROBABILITY
        else:
            raise lexer.unexpected(self._source, "'.' or '%' after a number")

    def _on_move_number(self) -> None:
        number = self._number
        assert number is not None
        self._number = None
        lexer.expect(self._source, ".")
        side = Color.WHITE
        if self._source.read_if("."):
            lexer.expect(self._source, ".")
            side = Color.BLACK
        lexer.skip_whitespace(self._source)
        self._go_to_move(number, side)
        self._state = ParserState.PROBABILITY

    def _go_to_move(self, number: int, side: Color) -> None:
        """Move the cursor to the node the numbered move will follow."""
        line, column = self._number_at
        marker = f"{number}." if side is Color.WHITE else f"{number}..."
        if number < 1:
            raise MoveNumberMismatch(
                f"Move number cannot be less than 1, got {marker}",
                line=line,
                column=column,
            )
        target = 2 * (number - 1) + 1 + (1 if side is Color.BLACK else 0)
        cursor = self._cursor

        if cursor.is_root and not cursor.children:
            if side is not self._book.board.side_to_move:
                raise MoveNumberMismatch(
                    f"Move {marker} does not match {self._book.board.side_to_move} to move",
                    line=line,
                    column=column,
                )
            cursor.half_move = target - 1
            return

        if target == cursor.half_move + 1:
            return
        if target > cursor.half_move + 1:
            raise MoveNumberSkipped(
                f"Skipped move number: next is {_marker_for(cursor.half_move + 1)}, got {marker}",
                line=line,
                column=column,
            )
        ancestor = cursor.ancestor_at(target - 1)
        if ancestor is None:
            raise MoveNumberMismatch(
                f"Move {marker} comes before the start of the book",
                line=line,
                column=column,
            )
        _LOGGER.debug("Branching at %s from ply %d", marker, cursor.half_move)
        self._cursor = ancestor

    def _on_probability(self) -> None:
        line, column = self._number_at
        if self._number is not None:
            weight = self._number
            self._number = None
            lexer.expect(self._source, "%")
        elif self._next_is(lexer.DIGITS):
            line, column = self._source.line, self._source.column
            weight = lexer.read_integer(self._source)
            lexer.expect(self._source, "%")
        else:
            weight = DEFAULT_WEIGHT
        if weight > MAX_WEIGHT:
            raise NotationError(
                f"Probability must be between 0 and {MAX_WEIGHT}%, got {weight}%",
                line=line,
                column=column,
            )
        self._weight = weight
        lexer.skip_whitespace(self._source)
        self._state = ParserState.ALGEBRAIC_NOTATION

    # ── Algebraic notation ───────────────────────────────────────────────

    def _on_algebraic_notation(self) -> None:
        self._move = Move(side=self._move_side)
        if self._source.read_if(lexer.CASTLING):
            lexer.read_dash(self._source)
            self._state = ParserState.SHORT_CASTLING
        else:
            self._state = ParserState.PIECE

    def _on_short_castling(self) -> None:
        lexer.read_castling_symbol(self._source)
        if self._source.read_if(lexer.DASH):
            self._state = ParserState.LONG_CASTLING
            return
        self._move.piece = PieceType.KING
        self._move.is_short_castling = True
        self._state = ParserState.CHECK

    def _on_long_castling(self) -> None:
        lexer.read_castling_symbol(self._source)
        self._move.piece = PieceType.KING
        self._move.is_long_castling = True
        self._state = ParserState.CHECK

    def _on_piece(self) -> None:
        if self._next_is(lexer.PIECES):
            self._move.piece = lexer.read_piece(self._source)
        else:
            self._move.piece = PieceType.PAWN
        self._state = ParserState.DEPARTURE_OR_DESTINATION

    def _on_departure_or_destination(self) -> None:
        self._attempts.push(
            ParserAttempt(self._source.save(), ParserState.NO_DEPARTURE)
        )
        self._state = ParserState.DEPARTURE_FILE

    def _on_departure_file(self) -> None:
        if self._next_is(lexer.FILES):
            self._move.departure = Position(
                lexer.read_file(self._source), self._move.departure.rank
            )
        self._state = ParserState.DEPARTURE_RANK

    def _on_departure_rank(self) -> None:
        if self._next_is(lexer.RANKS):
            self._move.departure = Position(
                self._move.departure.file, lexer.read_rank(self._source)
            )
        if self._move.departure.is_unspecified:
            # Nothing was read, so there is nothing to take back.
            self._attempts.pop()
        self._state = ParserState.CAPTURE

    def _on_no_departure(self) -> None:
        self._move.departure = Position()
        self._move.is_capture = False
        self._state = ParserState.DESTINATION

    def _on_capture(self) -> None:
        if self._next_is(lexer.CAPTURE):
            lexer.read_capture(self._source)
            self._move.is_capture = True
        self._state = ParserState.DESTINATION

    def _on_destination(self) -> None:
        file = lexer.read_file(self._source)
        rank = lexer.read_rank(self._source)
        self._move.destination = Position(file, rank)
        self._attempts.pop()
        self._state = ParserState.PROMOTION

    def _on_promotion(self) -> None:
        if self._next_is(lexer.EQUALS):
            lexer.read_equals(self._source)
            line, column = self._source.line, self._source.column
            try:
                self._move.promotion = lexer.read_promotion_piece(self._source)
            except NotationError as exc:
                raise InvalidPromotionPiece(
                    f"Invalid promotion: {exc.message}", line=line, column=column
                ) from exc
        self._state = ParserState.CHECK

    def _on_check(self) -> None:
        if self._next_is(lexer.CHECK):
            lexer.read_check(self._source)
            self._move.is_check = True
            self._state = ParserState.FINISH_MOVE
        else:
            self._state = ParserState.CHECKMATE

    def _on_checkmate(self) -> None:
        if self._next_is(lexer.CHECKMATE):
            lexer.read_checkmate(self._source)
            self._move.is_checkmate = True
        self._state = ParserState.FINISH_MOVE

    def _next_is(self, chars: str) -> bool:
        char = self._source.peek()
        return char is not None and char in chars

    # ── Tree building ────────────────────────────────────────────────────

    def _on_finish_move(self) -> None:
        # A line that repeats known moves shares their nodes; the weight
        # given first wins.
        node = find_matching_child(self._cursor, self._move)
        if node is None:
            node = append(self._cursor, MoveTreeNode(self._move, self._weight))
            _LOGGER.debug(
                "Added %s at ply %d (weight %d)", node.move.san, node.half_move, node.weight
            )
        self._cursor = node
        self._weight = DEFAULT_WEIGHT
        self._state = ParserState.WHITESPACE

    def _on_whitespace(self) -> None:
        if self._source.peek() is None:
            self._state = ParserState.END
            return
        run = lexer.read_whitespace(self._source)
        if (
            self._layout is Layout.INDENTED
            and "\n" in run
            and self._source.peek() is not None
        ):
            self._begin_line(run.rsplit("\n", 1)[1])
        self._state = ParserState.MOVE_NUMBER_OR_PROBABILITY

    def _begin_line(self, indent: str) -> None:
        """Position the cursor for a new line of the indented layout.

        A depth-0 line branches from the root.  A line one tab deeper than
        the previous line continues from that line's last move; a line at
        depth ``k`` otherwise branches from the same node as the previous
        depth-``k`` line.
        """
        line = self._source.line
        if indent.strip("\t"):
            raise LayoutError("Indentation must use tabs", line=line, column=1)
        depth = len(indent)
        if depth > len(self._anchors):
            raise LayoutError(
                f"Indentation grew from {len(self._anchors) - 1} to {depth} tabs",
                line=line,
                column=1,
            )
        if depth == len(self._anchors):
            if self._cursor is self._anchors[-1]:
                raise LayoutError(
                    "Indented line has no line to continue from", line=line, column=1
                )
            self._anchors.append(self._cursor)
        else:
            del self._anchors[depth + 1 :]
        self._cursor = self._anchors[depth]


def _marker_for(half_move: int) -> str:
    number = (half_move + 1) // 2
    return f"{number}." if half_move % 2 == 1 else f"{number}..."


# ── Convenience entry points ─────────────────────────────────────────────────


def parse_book(text: str | TextIO, *, layout: Layout = Layout.NUMBERED) -> OpeningBook:
    """Parse a whole book from a string or text stream."""
    return NotationParser(CharacterSource(text), layout=layout).parse_book()


def load_book(
    path: str | os.PathLike[str],
    *,
    layout: Layout = Layout.NUMBERED,
) -> OpeningBook:
    """Open and parse a book file."""
    with open(path, encoding="utf-8") as handle:
        book = parse_book(handle, layout=layout)
    _LOGGER.info(
        "Loaded %d moves and %d tags from %s",
        sum(1 for _ in book.nodes()),
        len(book.tags),
        path,
    )
    return book


def parse_move(text: str, side: Color = Color.WHITE) -> Move:
    """Parse one move such as ``"Nbd7"`` or ``"exd8=Q+"``.

    Surrounding whitespace is ignored; anything else after the move is an
    error.
    """
    source = CharacterSource(text.strip())
    move = NotationParser(source).parse_move(side)
    if not source.at_end():
        raise lexer.unexpected(source, "end of move")
    return move
