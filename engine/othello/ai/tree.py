"""
Search tree recorded by the minimax engine.

Nodes live in a flat list and refer to each other by index, so a tree is
torn down in one go when the next search replaces it. The engine is the
only writer; once a search returns, its tree is read-only.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from ..core.notation import coord_to_key

Coord = tuple[int, int]

ROOT_LABEL = "Root"
PATH_SEPARATOR = " -> "


@dataclass
class SearchNode:
    """One decision point of an explored game-tree branch."""
    index: int
    parent: Optional[int] = None
    row: int = -1
    col: int = -1
    turn: int = 0  # side to move at this node
    white_score: int = 0
    black_score: int = 0
    depth: int = 0  # search depth remaining here
    maximizing: bool = False
    heuristic: int = 0
    children: list[int] = field(default_factory=list)

    @property
    def move(self) -> Coord:
        return self.row, self.col

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children


class SearchTree:
    """Arena of SearchNodes rooted at nodes[0]."""

    def __init__(self):
        self._nodes: list[SearchNode] = []

    # Construction (engine side)

    def add_root(self, **fields) -> SearchNode:
        self._nodes = []
        node = SearchNode(index=0, **fields)
        self._nodes.append(node)
        return node

    def add_child(self, parent: SearchNode, **fields) -> SearchNode:
        node = SearchNode(index=len(self._nodes), parent=parent.index, **fields)
        self._nodes.append(node)
        parent.children.append(node.index)
        return node

    # Read-only access

    @property
    def root(self) -> Optional[SearchNode]:
        return self._nodes[0] if self._nodes else None

    @property
    def size(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[SearchNode]:
        """Nodes in creation order (the order the search visited them)."""
        return iter(self._nodes)

    def node(self, index: int) -> SearchNode:
        return self._nodes[index]

    def children(self, node: SearchNode) -> list[SearchNode]:
        return [self._nodes[i] for i in node.children]

    def parent(self, node: SearchNode) -> Optional[SearchNode]:
        if node.parent is None:
            return None
        return self._nodes[node.parent]

    def traverse(self, visit: Callable[[SearchNode], None]) -> None:
        """Visit every node pre-order: parent first, children in order."""
        if not self._nodes:
            return
        stack = [0]
        while stack:
            node = self._nodes[stack.pop()]
            visit(node)
            stack.extend(reversed(node.children))

    def get_path(self, target_row: int, target_col: int) -> list[SearchNode]:
        """
        Root-to-node path to the first node (depth-first) played at the
        given coordinate, or [] when the search never reached one.
        """
        if not self._nodes:
            return []
        path: list[SearchNode] = []
        if self._find_path(self._nodes[0], target_row, target_col, path):
            return path
        return []

    def _find_path(self, node: SearchNode, row: int, col: int, path: list[SearchNode]) -> bool:
        path.append(node)
        if node.row == row and node.col == col:
            return True
        for child_index in node.children:
            if self._find_path(self._nodes[child_index], row, col, path):
                return True
        path.pop()
        return False

    def get_max_depth(self) -> int:
        """Number of edges on the longest root-to-leaf path."""
        if not self._nodes:
            return 0
        levels = [0] * len(self._nodes)
        # Children are always appended after their parent
        for node in self._nodes[1:]:
            levels[node.index] = levels[node.parent] + 1
        return max(levels)

    def level(self, node: SearchNode) -> int:
        """Edges between the root and node."""
        level = 0
        while node.parent is not None:
            node = self._nodes[node.parent]
            level += 1
        return level

    def moves_to(self, node: SearchNode) -> list[Coord]:
        """Coordinates played from the root to reach node."""
        moves = []
        while node.parent is not None:
            moves.append(node.move)
            node = self._nodes[node.parent]
        moves.reverse()
        return moves

    def move_sequence(self, node: SearchNode) -> str:
        """Human-readable trail such as '2:3 -> 2:2'; 'Root' for the root."""
        if node.parent is None:
            return ROOT_LABEL
        return PATH_SEPARATOR.join(coord_to_key(move) for move in self.moves_to(node))

    def format(self, max_level: int = 2) -> str:
        """Indented text dump of the top levels of the tree."""
        lines = []

        def visit(node: SearchNode) -> None:
            level = self.level(node)
            if level > max_level:
                return
            side = "max" if node.maximizing else "min"
            lines.append(
                f"{'  ' * level}{self.move_sequence(node)}  "
                f"h={node.heuristic} [{side}] w={node.white_score} b={node.black_score}"
            )

        self.traverse(visit)
        return "\n".join(lines)
