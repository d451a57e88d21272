"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from chessbook.book.export import format_book, format_indented
from chessbook.book.replay import check_book
from chessbook.core.enums import Color
from chessbook.core.errors import BoardMoveUnresolvable, NotationError
from chessbook.core.notation.parser import Layout, load_book
from chessbook.game.session import SessionOptions, TrainingSession

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CliOptions:
    book_path: Path
    user_side: Color = Color.WHITE
    blind: bool = False
    layout: Layout = Layout.NUMBERED
    seed: int | None = None
    list_only: bool = False
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessbook",
        description="Practise chess openings from a book of annotated lines",
    )
    parser.add_argument("book", type=Path, help="Path to the opening book")
    side = parser.add_mutually_exclusive_group()
    side.add_argument(
        "--white", dest="side", action="store_const", const=Color.WHITE,
        help="Play the white pieces (default)",
    )
    side.add_argument(
        "--black", dest="side", action="store_const", const=Color.BLACK,
        help="Play the black pieces",
    )
    parser.add_argument("--blind", action="store_true", help="Do not draw the board")
    parser.add_argument(
        "--indented", action="store_true",
        help="Book variations are given by tab indentation",
    )
    parser.add_argument("--seed", type=int, help="Seed for the book's move choices")
    parser.add_argument("--list", action="store_true", help="Print the parsed book and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def parse_options(argv: Sequence[str] | None = None) -> CliOptions:
    args = build_parser().parse_args(argv)
    return CliOptions(
        book_path=args.book,
        user_side=args.side if args.side is not None else Color.WHITE,
        blind=args.blind,
        layout=Layout.INDENTED if args.indented else Layout.NUMBERED,
        seed=args.seed,
        list_only=args.list,
        verbose=args.verbose,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the trainer; returns the process exit status."""
    options = parse_options(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _LOGGER.debug("Options: %s", options)

    try:
        book = load_book(options.book_path, layout=options.layout)
        if options.list_only:
            render = format_indented if options.layout is Layout.INDENTED else format_book
            sys.stdout.write(render(book))
            return 0
        check_book(book)
    except OSError as exc:
        print(f"chessbook: cannot read {options.book_path}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except NotationError as exc:
        print(f"chessbook: parser error: {exc}", file=sys.stderr)
        return 1
    except BoardMoveUnresolvable as exc:
        print(f"chessbook: {exc}", file=sys.stderr)
        return 1

    session = TrainingSession(
        book,
        SessionOptions(
            user_side=options.user_side,
            blind=options.blind,
            color=sys.stdout.isatty(),
        ),
        rng=random.Random(options.seed),
    )
    return session.run()


if __name__ == "__main__":
    sys.exit(main())
