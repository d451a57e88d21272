"""Variation tree of an opening book.

Each node owns its children (alternative continuations, kept in the order
they were declared) and holds only a weak reference to its parent.
"""

from __future__ import annotations

import random
import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field

from chessbook.core.board import Board
from chessbook.core.enums import Color
from chessbook.core.move import Move

DEFAULT_WEIGHT = 100


class MoveTreeNode:
    """One ply of a book line.

    ``half_move`` counts plies from the start of the game (not the draw
    clock), so white moves are odd and black moves even.  The root holds no
    real move; its ``half_move`` is the ply already played before the book
    starts.
    """

    __slots__ = ("move", "weight", "is_root", "half_move", "children", "_parent", "__weakref__")

    def __init__(
        self,
        move: Move | None = None,
        weight: int = DEFAULT_WEIGHT,
        *,
        is_root: bool = False,
        half_move: int = 0,
    ) -> None:
        self.move = move if move is not None else Move()
        self.weight = weight
        self.is_root = is_root
        self.half_move = half_move
        self.children: list[MoveTreeNode] = []
        self._parent: weakref.ref[MoveTreeNode] | None = None

    @property
    def parent(self) -> MoveTreeNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def side(self) -> Color:
        """Side that plays this node's move."""
        return Color.WHITE if self.half_move % 2 == 1 else Color.BLACK

    @property
    def full_move_number(self) -> int:
        return (self.half_move + 1) // 2

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def append(self, child: MoveTreeNode) -> MoveTreeNode:
        """Add *child* as the last alternative after this node."""
        return append(self, child)

    def ancestor_at(self, half_move: int) -> MoveTreeNode | None:
        """Nearest node on the path to the root with the given ply."""
        node: MoveTreeNode | None = self
        while node is not None and node.half_move > half_move:
            node = node.parent
        if node is None or node.half_move != half_move:
            return None
        return node

    def path(self) -> list[MoveTreeNode]:
        """Nodes from the first move down to this one (root excluded)."""
        nodes: list[MoveTreeNode] = []
        node: MoveTreeNode | None = self
        while node is not None and not node.is_root:
            nodes.append(node)
            node = node.parent
        nodes.reverse()
        return nodes

    def walk(self) -> Iterator[MoveTreeNode]:
        """Depth-first pre-order over this node and its descendants."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        label = "root" if self.is_root else self.move.san
        return f"MoveTreeNode({label}, half_move={self.half_move}, weight={self.weight})"


def append(parent: MoveTreeNode, node: MoveTreeNode) -> MoveTreeNode:
    """Insert *node* as the last child of *parent* and return it."""
    node._parent = weakref.ref(parent)
    node.half_move = parent.half_move + 1
    node.move.side = node.side
    parent.children.append(node)
    return node


def find_matching_child(parent: MoveTreeNode, move: Move) -> MoveTreeNode | None:
    """First child with the same departure, piece and destination as *move*."""
    for child in parent.children:
        if child.move.same_path(move):
            return child
    return None


def choose_weighted(
    parent: MoveTreeNode,
    rng: random.Random | None = None,
) -> MoveTreeNode | None:
    """Pick a child with probability proportional to its weight.

    Weights are relative and need not sum to 100.  When every weight is 0
    the pick is uniform.  Returns ``None`` for a leaf.
    """
    if not parent.children:
        return None
    rng = rng if rng is not None else random.Random()
    total = sum(child.weight for child in parent.children)
    if total <= 0:
        return rng.choice(parent.children)
    draw = rng.randrange(total)
    running = 0
    for child in parent.children:
        running += child.weight
        if running > draw:
            return child
    return parent.children[-1]


@dataclass
class OpeningBook:
    """A parsed book: header tags, starting board and the variation tree."""

    root: MoveTreeNode = field(default_factory=lambda: MoveTreeNode(is_root=True))
    board: Board = field(default_factory=Board.initial)
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def first_side(self) -> Color:
        """Side that plays the first move of the book."""
        return self.root.side.opposite

    def nodes(self) -> Iterator[MoveTreeNode]:
        """Every move node, depth first, in declaration order."""
        for node in self.root.walk():
            if not node.is_root:
                yield node

    def leaves(self) -> Iterator[MoveTreeNode]:
        return (node for node in self.nodes() if node.is_leaf)
