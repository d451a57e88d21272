"""Interactive drill: the player reproduces book lines move by move.

The book plays its side by weighted random choice; the player must answer
with any continuation the book knows.  A line ends at a leaf.
"""

from __future__ import annotations

import logging
import random
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from chessbook.book.tree import MoveTreeNode, OpeningBook, choose_weighted, find_matching_child
from chessbook.core.board import Board
from chessbook.core.enums import Color
from chessbook.core.errors import BoardMoveUnresolvable, NotationError
from chessbook.core.move import Move
from chessbook.core.notation.parser import parse_move
from chessbook.core.resolver import apply_move, resolve_origin
from chessbook.game import messages
from chessbook.game.render import render_board

_LOGGER = logging.getLogger(__name__)

InputFn = Callable[[str], str]

EXIT_COMMAND = "exit"


@dataclass(frozen=True, slots=True)
class SessionOptions:
    user_side: Color = Color.WHITE
    blind: bool = False
    color: bool = True


class TrainingSession:
    """Runs one pass through a book on the terminal.

    Args:
        book: Parsed opening book.  Its board is copied, never modified.
        options: Side to play and display settings.
        input_fn: ``input``-like callable; raising :class:`EOFError` ends
            the session.
        output: Stream for everything shown to the player.
        rng: Random source for the book's choices and the messages.
    """

    __slots__ = ("_book", "_options", "_board", "_node", "_input", "_out", "_rng")

    def __init__(
        self,
        book: OpeningBook,
        options: SessionOptions | None = None,
        *,
        input_fn: InputFn = input,
        output: TextIO | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._book = book
        self._options = options if options is not None else SessionOptions()
        self._board = book.board.copy()
        self._node = book.root
        self._input = input_fn
        self._out = output if output is not None else sys.stdout
        self._rng = rng if rng is not None else random.Random()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def node(self) -> MoveTreeNode:
        """Last move played (the root before the first move)."""
        return self._node

    # ── Main loop ────────────────────────────────────────────────────────

    def run(self) -> int:
        """Play until the line ends or the player leaves.  Returns 0."""
        self._say(messages.pick(messages.GREETINGS, self._rng))
        self._show_board()
        if self._options.user_side != self._book.first_side and not self._book_reply():
            return 0

        while self._node.children:
            if self._read_user_move() is None:
                self._say(messages.pick(messages.GOODBYES, self._rng))
                return 0
            self._show_board()
            if not self._book_reply():
                return 0

        self._say(messages.LINE_COMPLETE)
        return 0

    def _book_reply(self) -> bool:
        """Play the book's answer; ``False`` if the line had to be abandoned."""
        node = choose_weighted(self._node, self._rng)
        if node is None:
            return True
        if not self._advance(node):
            self._say(messages.BOOK_CANNOT_CONTINUE)
            return False
        self._say(node.move.san)
        self._show_board()
        return True

    def _advance(self, node: MoveTreeNode) -> bool:
        try:
            apply_move(self._board, node.move)
        except BoardMoveUnresolvable as exc:
            _LOGGER.warning("Book move cannot be played: %s", exc)
            return False
        self._node = node
        return True

    def _read_user_move(self) -> MoveTreeNode | None:
        """Prompt until the player makes a playable book move, then play it."""
        side = self._node.side.opposite
        while True:
            try:
                line = self._input(messages.PROMPT)
            except EOFError:
                self._say("")
                return None
            text = line.strip()
            if text == EXIT_COMMAND:
                return None
            try:
                move = parse_move(text, side)
            except NotationError as exc:
                _LOGGER.debug("Could not parse %r: %s", text, exc)
                self._say(messages.pick(messages.NOT_UNDERSTOOD, self._rng))
                continue
            node = self._match(move)
            if node is None:
                self._say(messages.WRONG_MOVE)
                continue
            if not self._advance(node):
                self._say(messages.CANNOT_PLAY)
                continue
            return node

    def _match(self, move: Move) -> MoveTreeNode | None:
        """Book continuation the player's *move* stands for, if any.

        Notation may differ in disambiguation (``Nf3`` and ``Ngf3``), so
        moves that do not match literally are compared by origin square.
        """
        node = find_matching_child(self._node, move)
        if node is not None or move.is_castling:
            return node
        try:
            origin = resolve_origin(self._board, move)
        except BoardMoveUnresolvable:
            return None
        for child in self._node.children:
            book_move = child.move
            if (
                book_move.is_castling
                or book_move.piece != move.piece
                or book_move.destination != move.destination
            ):
                continue
            try:
                if resolve_origin(self._board, book_move) == origin:
                    return child
            except BoardMoveUnresolvable:
                continue
        return None

    # ── Output ───────────────────────────────────────────────────────────

    def _say(self, text: str) -> None:
        print(text, file=self._out)

    def _show_board(self) -> None:
        if not self._options.blind:
            self._out.write(render_board(self._board, color=self._options.color))
