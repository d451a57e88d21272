"""Terminal training session.

Quick start::

    from chessbook.core.notation import load_book
    from chessbook.game import SessionOptions, TrainingSession

    TrainingSession(load_book("ruy-lopez.txt"), SessionOptions(blind=True)).run()
"""

from chessbook.game.render import render_board
from chessbook.game.session import SessionOptions, TrainingSession

__all__ = [
    "SessionOptions",
    "TrainingSession",
    "render_board",
]
