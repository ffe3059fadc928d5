"""
Move generation for Othello.

Enumerates legal moves with their successor states and classifies the
outcome of a requested move.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .bitboard import ROWS, COLS, opponent
from .state import BoardState, is_legal_move, resolve, update_score, has_legal_move

Coord = tuple[int, int]

# Returned when the side to move has nothing to play
NO_MOVE: Coord = (-1, -1)


class MoveOutcome(Enum):
    """What happened to a requested move."""
    APPLIED = "applied"
    ILLEGAL = "illegal"
    NO_MOVES = "no_moves"    # side to move is blocked, opponent is not
    GAME_OVER = "game_over"  # both sides are blocked


@dataclass
class MoveResult:
    outcome: MoveOutcome
    state: BoardState
    move: Optional[Coord] = None

    @property
    def applied(self) -> bool:
        return self.outcome is MoveOutcome.APPLIED


class MoveGenerator:
    """Generates legal moves for a board state."""

    @staticmethod
    def get_legal_moves(state: BoardState) -> dict[Coord, BoardState]:
        """
        Map every legal coordinate to the state that results from it.

        Cells are scanned in row-major order and the dict keeps that order,
        which fixes child ordering in the search tree and tie-breaking
        between equally scored moves.
        """
        moves: dict[Coord, BoardState] = {}
        for row in range(ROWS):
            for col in range(COLS):
                if is_legal_move(row, col, state):
                    new_state = resolve(row, col, state)
                    new_state.turn = opponent(state.turn)
                    update_score(new_state)
                    moves[(row, col)] = new_state
        return moves

    @staticmethod
    def legal_coordinates(state: BoardState) -> list[Coord]:
        """Legal coordinates only, row-major."""
        return [
            (row, col)
            for row in range(ROWS)
            for col in range(COLS)
            if is_legal_move(row, col, state)
        ]

    @staticmethod
    def game_status(state: BoardState) -> Optional[MoveOutcome]:
        """
        NO_MOVES or GAME_OVER when the side to move cannot play, else None.
        """
        if has_legal_move(state):
            return None
        if has_legal_move(state, opponent(state.turn)):
            return MoveOutcome.NO_MOVES
        return MoveOutcome.GAME_OVER

    @staticmethod
    def place(state: BoardState, row: int, col: int) -> MoveResult:
        """
        Try to play (row, col) for the side to move.

        Rejected moves carry the unchanged input state. There is no pass
        transition: a blocked side stays on move.
        """
        status = MoveGenerator.game_status(state)
        if status is not None:
            return MoveResult(status, state)
        if not is_legal_move(row, col, state):
            return MoveResult(MoveOutcome.ILLEGAL, state, (row, col))
        return MoveResult(MoveOutcome.APPLIED, resolve(row, col, state), (row, col))


# Convenience functions
def get_legal_moves(state: BoardState) -> dict[Coord, BoardState]:
    """Get all legal moves and their successor states."""
    return MoveGenerator.get_legal_moves(state)


def legal_coordinates(state: BoardState) -> list[Coord]:
    return MoveGenerator.legal_coordinates(state)


def game_status(state: BoardState) -> Optional[MoveOutcome]:
    return MoveGenerator.game_status(state)


def place(state: BoardState, row: int, col: int) -> MoveResult:
    """Play a move and report the outcome."""
    return MoveGenerator.place(state, row, col)


def get_move_count(state: BoardState) -> int:
    """Get number of legal moves."""
    return len(MoveGenerator.legal_coordinates(state))
