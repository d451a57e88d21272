"""Board coordinates as written in notation.

Files and ranks are 1-based (a1 = file 1, rank 1).  A component of 0 means
the notation did not give it, so ``Position(file=5)`` is "somewhere on the
e-file" and ``Position()`` is "anywhere".
"""

from __future__ import annotations

from dataclasses import dataclass

from chessbook.core.enums import File

UNSPECIFIED = 0


@dataclass(frozen=True, slots=True)
class Position:
    """Possibly partial board coordinate."""

    file: int = UNSPECIFIED
    rank: int = UNSPECIFIED

    @property
    def is_complete(self) -> bool:
        return self.file != UNSPECIFIED and self.rank != UNSPECIFIED

    @property
    def is_unspecified(self) -> bool:
        return self.file == UNSPECIFIED and self.rank == UNSPECIFIED

    @property
    def is_on_board(self) -> bool:
        return 1 <= self.file <= 8 and 1 <= self.rank <= 8

    def covers(self, square: Position) -> bool:
        """Whether the concrete *square* agrees with every given component."""
        return (self.file == UNSPECIFIED or self.file == square.file) and (
            self.rank == UNSPECIFIED or self.rank == square.rank
        )

    def shifted(self, file_delta: int, rank_delta: int) -> Position:
        return Position(self.file + file_delta, self.rank + rank_delta)

    @property
    def name(self) -> str:
        """Notation text, e.g. ``"e4"``, ``"e"``, ``"4"`` or ``""``."""
        text = ""
        if self.file != UNSPECIFIED:
            text += File(self.file).letter
        if self.rank != UNSPECIFIED:
            text += str(self.rank)
        return text

    def __str__(self) -> str:
        return self.name


def parse_position(name: str) -> Position:
    """Parse a complete square name, e.g. ``'e4'`` -> ``Position(5, 4)``."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(File.from_letter(name[0]), int(name[1]))
