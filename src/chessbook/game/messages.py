"""Text shown to the player during a session."""

from __future__ import annotations

import random

GREETINGS: tuple[str, ...] = (
    "Let's play chess!",
    "Good luck, have fun!",
    "Let's go!",
    "Let's see if you know how to play this opening.",
)

GOODBYES: tuple[str, ...] = (
    "Goodbye!",
    "See you again soon!",
)

NOT_UNDERSTOOD: tuple[str, ...] = (
    "Sorry, I did not understand.",
    "That doesn't look like a move nor a command.",
    "Sorry, please rephrase.",
    "Are you sure that's a move (or command)?",
)

WRONG_MOVE = "Wrong move! Try again."
CANNOT_PLAY = "That move cannot be played on this board."
BOOK_CANNOT_CONTINUE = "The book's next move cannot be played here. Ending this line."
LINE_COMPLETE = "Line played correctly. Good job!"
PROMPT = "> "


def pick(pool: tuple[str, ...], rng: random.Random) -> str:
    return rng.choice(pool)
