"""Writing an :class:`OpeningBook` back out as notation text.

Both layouts print every variation exactly once and re-parse to the same
tree.
"""

from __future__ import annotations

from chessbook.book.tree import DEFAULT_WEIGHT, MoveTreeNode, OpeningBook
from chessbook.core.enums import Color


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def format_tags(book: OpeningBook) -> list[str]:
    return [f'[{name} "{_escape(value)}"]' for name, value in book.tags.items()]


def format_node(node: MoveTreeNode, *, numbered: bool = False) -> str:
    """One move with its marker and weight, e.g. ``"2... 30% Nc6"``.

    White moves always carry their number; black moves only when
    *numbered* is set (start of a line).
    """
    parts: list[str] = []
    if node.side == Color.WHITE:
        parts.append(f"{node.full_move_number}.")
    elif numbered:
        parts.append(f"{node.full_move_number}...")
    if node.weight != DEFAULT_WEIGHT:
        parts.append(f"{node.weight}%")
    parts.append(node.move.san)
    return " ".join(parts)


def format_line(node: MoveTreeNode) -> str:
    """The moves leading from the root to *node* on one line."""
    return " ".join(
        format_node(step, numbered=i == 0) for i, step in enumerate(node.path())
    )


def _numbered_lines(root: MoveTreeNode) -> list[str]:
    # The first child continues the current line.  Other children start a
    # new line after the first child's subtree; its marker sends the parser
    # back to the branch point.
    lines: list[str] = []
    pending = list(reversed(root.children))
    while pending:
        node = pending.pop()
        words = [format_node(node, numbered=True)]
        while node.children:
            pending.extend(reversed(node.children[1:]))
            node = node.children[0]
            words.append(format_node(node))
        lines.append(" ".join(words))
    return lines


def _indented_lines(root: MoveTreeNode) -> list[str]:
    # A line runs until a leaf or a branch; each branch is one tab deeper.
    lines: list[str] = []
    pending = [(child, 0) for child in reversed(root.children)]
    while pending:
        node, depth = pending.pop()
        words = [format_node(node, numbered=True)]
        while len(node.children) == 1:
            node = node.children[0]
            words.append(format_node(node))
        lines.append("\t" * depth + " ".join(words))
        pending.extend((child, depth + 1) for child in reversed(node.children))
    return lines


def _join(book: OpeningBook, move_lines: list[str]) -> str:
    sections = [format_tags(book), move_lines]
    return "\n\n".join("\n".join(s) for s in sections if s) + "\n"


def format_book(book: OpeningBook) -> str:
    """Render *book* in the numbered layout."""
    return _join(book, _numbered_lines(book.root))


def format_indented(book: OpeningBook) -> str:
    """Render *book* in the tab-indented layout."""
    return _join(book, _indented_lines(book.root))
