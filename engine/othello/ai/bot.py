"""
Minimax player bound to one color.

Each bot owns its engine settings and the tree of its most recent
search; two bots never share anything.
"""

from __future__ import annotations
from concurrent.futures import Executor
from dataclasses import replace
from typing import Optional

from ..core.bitboard import COLOR_NAMES
from ..core.state import BoardState
from .minimax import Minimax, SearchConfig, SearchResult, Coord
from .tree import SearchTree
from .worker import SearchTask


class OthelloBot:
    def __init__(self, color: int, config: Optional[SearchConfig] = None):
        self.color = color
        self.config = config or SearchConfig()
        self.last_result: Optional[SearchResult] = None
        self._empty_tree = SearchTree()

    @property
    def name(self) -> str:
        mode = "alpha-beta" if self.config.alpha_beta else "minimax"
        return f"{COLOR_NAMES[self.color]} {mode} depth {self.config.depth}"

    @property
    def depth(self) -> int:
        return self.config.depth

    def set_depth(self, depth: int) -> None:
        self.config = replace(self.config, depth=depth)

    def toggle_alpha_beta(self) -> None:
        self.config = replace(self.config, alpha_beta=not self.config.alpha_beta)

    @property
    def alpha_beta_enabled(self) -> bool:
        return self.config.alpha_beta

    @property
    def search_tree(self) -> SearchTree:
        """Tree of the last search (empty before the first one)."""
        if self.last_result is None:
            return self._empty_tree
        return self.last_result.tree

    @property
    def tree_size(self) -> int:
        """States examined by the last search."""
        if self.last_result is None:
            return 0
        return self.last_result.nodes_visited

    def search(self, state: BoardState) -> SearchResult:
        """Search a private copy of state and remember the result."""
        result = Minimax(self.config).search(state.copy())
        self.last_result = result
        return result

    def get_best_move(self, state: BoardState) -> Coord:
        return self.search(state).move

    def think(self, state: BoardState, executor: Optional[Executor] = None) -> SearchTask:
        """Start searching state in the background."""
        return SearchTask.launch(self.search, state, executor)
