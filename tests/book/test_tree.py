"""Tests for the variation tree."""

import gc
import random

from chessbook.book.tree import (
    DEFAULT_WEIGHT,
    MoveTreeNode,
    OpeningBook,
    append,
    choose_weighted,
    find_matching_child,
)
from chessbook.core.enums import Color
from chessbook.core.notation.parser import parse_book, parse_move


def _root_with(*weights: int) -> MoveTreeNode:
    root = MoveTreeNode(is_root=True)
    for i, weight in enumerate(weights):
        append(root, MoveTreeNode(parse_move("abcdefgh"[i] + "4"), weight))
    return root


class TestAppend:
    def test_links_and_numbering(self) -> None:
        root = MoveTreeNode(is_root=True)
        e4 = append(root, MoveTreeNode(parse_move("e4")))
        e5 = e4.append(MoveTreeNode(parse_move("e5")))
        assert root.children == [e4]
        assert e5.parent is e4
        assert (e4.half_move, e5.half_move) == (1, 2)
        assert e5.move.side == Color.BLACK
        assert e5.full_move_number == 1

    def test_declaration_order(self) -> None:
        root = _root_with(10, 90, 50)
        assert [c.move.san for c in root.children] == ["a4", "b4", "c4"]

    def test_default_weight(self) -> None:
        assert MoveTreeNode().weight == DEFAULT_WEIGHT == 100

    def test_parent_is_not_owned(self) -> None:
        root = MoveTreeNode(is_root=True)
        child = append(root, MoveTreeNode(parse_move("e4")))
        del root
        gc.collect()
        assert child.parent is None


class TestNavigation:
    def test_ancestor_at(self) -> None:
        book = parse_book("1. e4 e5 2. Nf3 Nc6")
        leaf = next(book.leaves())
        assert leaf.ancestor_at(1).move.san == "e4"
        assert leaf.ancestor_at(0) is book.root
        assert leaf.ancestor_at(4) is leaf
        assert leaf.ancestor_at(-1) is None

    def test_path_and_walk(self) -> None:
        book = parse_book("1. e4 e5 2. Nf3 1... c5")
        leaf = book.root.children[0].children[0].children[0]
        assert [n.move.san for n in leaf.path()] == ["e4", "e5", "Nf3"]
        assert [n.move.san for n in book.nodes()] == ["e4", "e5", "Nf3", "c5"]
        assert [n.move.san for n in book.leaves()] == ["Nf3", "c5"]

    def test_first_side(self) -> None:
        assert OpeningBook().first_side == Color.WHITE


class TestFindMatchingChild:
    def test_ignores_flags(self) -> None:
        book = parse_book("1. e4 e5 2. Qh5 2. Nf3")
        e5 = book.root.children[0].children[0]
        found = find_matching_child(e5, parse_move("Nf3+"))
        assert found is e5.children[1]

    def test_not_found(self) -> None:
        book = parse_book("1. e4 e5")
        assert find_matching_child(book.root, parse_move("d4")) is None

    def test_leaf(self) -> None:
        assert find_matching_child(MoveTreeNode(is_root=True), parse_move("e4")) is None


class TestChooseWeighted:
    def test_leaf_returns_none(self, rng: random.Random) -> None:
        assert choose_weighted(MoveTreeNode(is_root=True), rng) is None

    def test_single_child(self, rng: random.Random) -> None:
        root = _root_with(40)
        assert choose_weighted(root, rng) is root.children[0]

    def test_distribution(self, rng: random.Random) -> None:
        root = _root_with(25, 75)
        first = root.children[0]
        picks = sum(choose_weighted(root, rng) is first for _ in range(10_000))
        assert 0.23 <= picks / 10_000 <= 0.27

    def test_zero_weight_is_never_chosen(self, rng: random.Random) -> None:
        root = _root_with(0, 10)
        for _ in range(200):
            assert choose_weighted(root, rng) is root.children[1]

    def test_all_zero_is_uniform(self, rng: random.Random) -> None:
        root = _root_with(0, 0)
        picks = {id(choose_weighted(root, rng)) for _ in range(200)}
        assert picks == {id(c) for c in root.children}

    def test_weights_need_not_sum_to_hundred(self, rng: random.Random) -> None:
        root = _root_with(1, 1)
        picks = sum(choose_weighted(root, rng) is root.children[0] for _ in range(2_000))
        assert 800 <= picks <= 1_200

    def test_seeded_choice_is_reproducible(self) -> None:
        root = _root_with(30, 30, 40)
        first = [choose_weighted(root, random.Random(7)) for _ in range(5)]
        assert len({id(node) for node in first}) == 1
