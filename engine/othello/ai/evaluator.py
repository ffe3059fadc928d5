"""
Position evaluation for minimax search.

White maximizes and black minimizes a single signed score: the disc
differential white - black.
"""

from __future__ import annotations
from typing import Protocol

from ..core.state import BoardState


class Evaluator(Protocol):
    """Protocol for position evaluators."""
    def evaluate(self, state: BoardState) -> int:
        """Return the score of state from white's point of view."""
        ...


def disc_difference(state: BoardState) -> int:
    """White discs minus black discs."""
    return state.white - state.black


class DiscEvaluator:
    """Stateless disc-differential evaluator."""

    def evaluate(self, state: BoardState) -> int:
        return disc_difference(state)
