"""
Minimax search for Othello, with optional alpha-beta pruning.

White is always the maximizing side and black the minimizing side of a
single white-minus-black score. Every node the search constructs is
recorded in a SearchTree so the decision can be inspected afterwards.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import logging
import math
import time

from ..core.bitboard import WHITE, COLOR_NAMES
from ..core.state import BoardState
from ..core.moves import get_legal_moves, NO_MOVE
from ..core.notation import coord_to_algebraic, coord_to_key
from .evaluator import Evaluator, DiscEvaluator
from .tree import SearchTree, SearchNode

logger = logging.getLogger(__name__)

Coord = tuple[int, int]

MIN_DEPTH = 1
MAX_DEPTH = 10


@dataclass
class SearchConfig:
    """Configuration for minimax search."""
    depth: int = 4  # plies searched below the root
    alpha_beta: bool = False

    def __post_init__(self):
        if not MIN_DEPTH <= self.depth <= MAX_DEPTH:
            raise ValueError(f"Search depth must be in [{MIN_DEPTH}, {MAX_DEPTH}], got {self.depth}")


@dataclass
class SearchContext:
    """Mutable bookkeeping owned by a single search call."""
    tree: SearchTree = field(default_factory=SearchTree)
    nodes_visited: int = 0

    def new_root(self, state: BoardState, depth: int) -> SearchNode:
        self.nodes_visited += 1
        return self.tree.add_root(
            turn=state.turn,
            white_score=state.white,
            black_score=state.black,
            depth=depth,
            maximizing=state.turn == WHITE,
        )

    def new_child(self, parent: SearchNode, move: Coord, state: BoardState) -> SearchNode:
        self.nodes_visited += 1
        return self.tree.add_child(
            parent,
            row=move[0],
            col=move[1],
            turn=state.turn,
            white_score=state.white,
            black_score=state.black,
            depth=parent.depth - 1,
            maximizing=not parent.maximizing,
        )


@dataclass
class SearchResult:
    """Outcome of one best-move search."""
    move: Coord
    value: int  # backed-up root score
    tree: SearchTree
    nodes_visited: int
    depth: int
    alpha_beta: bool
    elapsed: float = 0.0

    @property
    def has_move(self) -> bool:
        return self.move != NO_MOVE


class Minimax:
    """
    Fixed-depth minimax with optional alpha-beta pruning.

    Holds no per-search state, so one instance may serve several
    searches at once.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        evaluator: Optional[Evaluator] = None
    ):
        self.config = config or SearchConfig()
        self.evaluator = evaluator or DiscEvaluator()

    def search(self, state: BoardState) -> SearchResult:
        """
        Search from state and return the best move with its tree.

        Each root move is searched with a full window; ties keep the
        earliest move in row-major order. A position with no legal moves
        returns NO_MOVE and a single-node tree.
        """
        start_time = time.time()
        depth = self.config.depth
        ctx = SearchContext()
        root = ctx.new_root(state, depth)

        moves = get_legal_moves(state)
        if not moves:
            root.heuristic = self.evaluator.evaluate(state)
            return SearchResult(
                move=NO_MOVE,
                value=root.heuristic,
                tree=ctx.tree,
                nodes_visited=ctx.nodes_visited,
                depth=depth,
                alpha_beta=self.config.alpha_beta,
                elapsed=time.time() - start_time,
            )

        maximizing = root.maximizing
        best_value = -math.inf if maximizing else math.inf
        best_move = NO_MOVE

        for move, next_state in moves.items():
            child = ctx.new_child(root, move, next_state)

            if self.config.alpha_beta:
                value = self._alphabeta(ctx, next_state, child, depth - 1, not maximizing, -math.inf, math.inf)
            else:
                value = self._minimax(ctx, next_state, child, depth - 1, not maximizing)

            if (maximizing and value > best_value) or (not maximizing and value < best_value):
                best_value = value
                best_move = move

        root.heuristic = best_value
        elapsed = time.time() - start_time

        logger.debug(
            f"{COLOR_NAMES[state.turn]} depth={depth} alpha_beta={self.config.alpha_beta}: "
            f"best {coord_to_algebraic(best_move)} value={best_value} "
            f"nodes={ctx.nodes_visited} ({elapsed:.3f}s)"
        )

        return SearchResult(
            move=best_move,
            value=best_value,
            tree=ctx.tree,
            nodes_visited=ctx.nodes_visited,
            depth=depth,
            alpha_beta=self.config.alpha_beta,
            elapsed=elapsed,
        )

    def get_best_move(self, state: BoardState) -> Coord:
        """Convenience method: search and return only the move."""
        return self.search(state).move

    def _minimax(
        self,
        ctx: SearchContext,
        state: BoardState,
        node: SearchNode,
        depth: int,
        maximizing: bool
    ) -> int:
        """Plain minimax; backs the extreme child value up into node."""
        if depth == 0:
            node.heuristic = self.evaluator.evaluate(state)
            return node.heuristic

        moves = get_legal_moves(state)

        # No moves for the side to move: score it like a leaf
        if not moves:
            node.heuristic = self.evaluator.evaluate(state)
            return node.heuristic

        best = -math.inf if maximizing else math.inf
        for move, next_state in moves.items():
            child = ctx.new_child(node, move, next_state)
            value = self._minimax(ctx, next_state, child, depth - 1, not maximizing)
            best = max(best, value) if maximizing else min(best, value)

        node.heuristic = best
        return best

    def _alphabeta(
        self,
        ctx: SearchContext,
        state: BoardState,
        node: SearchNode,
        depth: int,
        maximizing: bool,
        alpha: float,
        beta: float
    ) -> int:
        """
        Minimax with alpha-beta pruning.

        alpha is the best score white can already guarantee, beta the best
        black can. Remaining siblings are skipped once beta <= alpha and
        never enter the tree.
        """
        if depth == 0:
            node.heuristic = self.evaluator.evaluate(state)
            return node.heuristic

        moves = get_legal_moves(state)

        if not moves:
            node.heuristic = self.evaluator.evaluate(state)
            return node.heuristic

        if maximizing:
            best = -math.inf
            for move, next_state in moves.items():
                child = ctx.new_child(node, move, next_state)
                value = self._alphabeta(ctx, next_state, child, depth - 1, False, alpha, beta)
                best = max(best, value)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
        else:
            best = math.inf
            for move, next_state in moves.items():
                child = ctx.new_child(node, move, next_state)
                value = self._alphabeta(ctx, next_state, child, depth - 1, True, alpha, beta)
                best = min(best, value)
                beta = min(beta, value)
                if beta <= alpha:
                    break

        node.heuristic = best
        return best

    def analyze(self, result: SearchResult, top_k: int = 5) -> list[dict]:
        """
        Summarize the root moves of a search, best first for the side
        that was to move.
        """
        root = result.tree.root
        if root is None:
            return []

        moves = []
        for child in result.tree.children(root):
            moves.append({
                'move': child.move,
                'key': coord_to_key(child.move),
                'algebraic': coord_to_algebraic(child.move),
                'value': child.heuristic,
                'white': child.white_score,
                'black': child.black_score,
            })

        # Stable sort keeps row-major order among equal values
        moves.sort(key=lambda m: m['value'], reverse=root.maximizing)
        return moves[:top_k]


def play_move(
    state: BoardState,
    depth: int = 4,
    alpha_beta: bool = False
) -> tuple[Coord, SearchResult]:
    """
    Pick a move for the side to move.

    Returns (move, search_result).
    """
    engine = Minimax(SearchConfig(depth=depth, alpha_beta=alpha_beta))
    result = engine.search(state)
    return result.move, result
