"""Tests for the recorded search tree."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from othello.core.bitboard import BLACK, WHITE
from othello.core.state import BoardState
from othello.ai.minimax import Minimax, SearchConfig
from othello.ai.tree import SearchTree, SearchNode, ROOT_LABEL


@pytest.fixture
def opening_tree():
    """Depth-2 search from the opening: 1 root, 4 replies, 12 leaves."""
    return Minimax(SearchConfig(depth=2)).search(BoardState.new_game()).tree


class TestSearchNode:
    def test_defaults(self):
        node = SearchNode(index=0)
        assert node.is_root
        assert node.is_leaf
        assert node.move == (-1, -1)

    def test_child_flags(self):
        node = SearchNode(index=3, parent=0, row=2, col=3, children=[4])
        assert not node.is_root
        assert not node.is_leaf
        assert node.move == (2, 3)


class TestConstruction:
    def test_empty_tree(self):
        tree = SearchTree()
        assert tree.root is None
        assert tree.size == 0
        assert tree.get_path(2, 3) == []
        assert tree.get_max_depth() == 0

        visited = []
        tree.traverse(visited.append)
        assert visited == []

    def test_add_nodes(self):
        tree = SearchTree()
        root = tree.add_root(depth=1)
        child = tree.add_child(root, row=2, col=3, depth=0)

        assert tree.root is root
        assert len(tree) == 2
        assert root.children == [child.index]
        assert tree.parent(child) is root
        assert tree.parent(root) is None
        assert tree.children(root) == [child]
        assert tree.node(1) is child

    def test_add_root_resets(self):
        tree = SearchTree()
        root = tree.add_root()
        tree.add_child(root, row=0, col=0)
        tree.add_root()
        assert tree.size == 1
        assert tree.root.is_leaf


class TestOpeningTree:
    def test_size(self, opening_tree):
        assert opening_tree.size == 17
        assert opening_tree.get_max_depth() == 2

    def test_root(self, opening_tree):
        root = opening_tree.root
        assert root.turn == BLACK
        assert root.depth == 2
        assert not root.maximizing
        assert (root.black_score, root.white_score) == (2, 2)
        assert [c.move for c in opening_tree.children(root)] == [(2, 3), (3, 2), (4, 5), (5, 4)]

    def test_levels(self, opening_tree):
        for node in opening_tree:
            level = opening_tree.level(node)
            assert node.depth == 2 - level
            assert node.maximizing == (level % 2 == 1)
            assert node.turn == (WHITE if level % 2 == 1 else BLACK)

    def test_leaf_scores(self, opening_tree):
        leaves = [n for n in opening_tree if n.is_leaf]
        assert len(leaves) == 12
        assert all(n.heuristic == 0 for n in leaves)
        assert all((n.black_score, n.white_score) == (3, 3) for n in leaves)

    def test_traverse_preorder(self, opening_tree):
        order = []
        opening_tree.traverse(lambda n: order.append(opening_tree.move_sequence(n)))
        assert len(order) == 17
        assert order[:5] == [ROOT_LABEL, "2:3", "2:3 -> 2:2", "2:3 -> 2:4", "2:3 -> 4:2"]

    def test_get_path(self, opening_tree):
        path = opening_tree.get_path(2, 2)
        assert [n.move for n in path] == [(-1, -1), (2, 3), (2, 2)]
        assert path[0] is opening_tree.root
        assert opening_tree.move_sequence(path[-1]) == "2:3 -> 2:2"

    def test_get_path_to_root_move(self, opening_tree):
        path = opening_tree.get_path(4, 5)
        assert len(path) == 2
        assert opening_tree.move_sequence(path[-1]) == "4:5"

    def test_get_path_missing(self, opening_tree):
        assert opening_tree.get_path(7, 7) == []

    def test_get_path_root(self, opening_tree):
        path = opening_tree.get_path(-1, -1)
        assert path == [opening_tree.root]
        assert opening_tree.move_sequence(path[0]) == ROOT_LABEL

    def test_moves_to(self, opening_tree):
        leaf = opening_tree.get_path(2, 4)[-1]
        assert opening_tree.moves_to(leaf) == [(2, 3), (2, 4)]
        assert opening_tree.moves_to(opening_tree.root) == []

    def test_format(self, opening_tree):
        lines = opening_tree.format(max_level=1).splitlines()
        assert len(lines) == 5
        assert lines[0].startswith(ROOT_LABEL)
        assert "[min]" in lines[0]
        assert lines[1].startswith("  2:3")
        assert "[max]" in lines[1]

        assert len(opening_tree.format(max_level=2).splitlines()) == 17
