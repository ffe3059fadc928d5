"""
Board state representation and rules for Othello.

Uses one bitboard per color. A BoardState is treated as a value: rule
functions never modify their input and always hand back fresh states.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional
import numpy as np

from .bitboard import (
    ROWS, COLS, FULL_MASK,
    BLACK, WHITE, EMPTY, COLOR_NAMES, COLOR_SYMBOLS,
    BLACK_START, WHITE_START, RAYS,
    VERTICAL_DIRS, HORIZONTAL_DIRS, DIAGONAL_DIRS, DIRECTIONS,
    bit, popcount, iter_bits, squares_to_bb, rowcol_to_sq, is_valid_sq, opponent,
)


@dataclass
class BoardState:
    """
    Snapshot of an Othello position.

    Attributes:
        discs: Tuple of (black, white) bitboards
        turn: Color to move next (BLACK or WHITE)
        black: Cached black disc count (see update_score)
        white: Cached white disc count (see update_score)
    """
    discs: tuple[int, int] = (BLACK_START, WHITE_START)
    turn: int = BLACK
    black: int = 2
    white: int = 2

    @classmethod
    def new_game(cls) -> BoardState:
        """Create a new game in the starting position."""
        return cls()

    @classmethod
    def from_rows(cls, rows: list[str], turn: int = BLACK) -> BoardState:
        """
        Build a position from eight strings of 'b', 'w' and '.'.

        Row 0 is the first string. Counts are recomputed.
        """
        if len(rows) != ROWS or any(len(r) != COLS for r in rows):
            raise ValueError("Expected 8 rows of 8 cells")
        black = white = 0
        for row, line in enumerate(rows):
            for col, ch in enumerate(line):
                sq_bit = bit(rowcol_to_sq(row, col))
                if ch == 'b':
                    black |= sq_bit
                elif ch == 'w':
                    white |= sq_bit
                elif ch != '.':
                    raise ValueError(f"Unknown cell {ch!r} at {row}:{col}")
        state = cls(discs=(black, white), turn=turn)
        update_score(state)
        return state

    @property
    def occupied(self) -> int:
        """Bitboard of all occupied squares."""
        return self.discs[BLACK] | self.discs[WHITE]

    @property
    def empty(self) -> int:
        """Bitboard of all empty squares."""
        return ~self.occupied & FULL_MASK

    def cell(self, row: int, col: int) -> int:
        """Color of the disc at (row, col), or EMPTY."""
        sq_bit = bit(rowcol_to_sq(row, col))
        if self.discs[BLACK] & sq_bit:
            return BLACK
        if self.discs[WHITE] & sq_bit:
            return WHITE
        return EMPTY

    def count(self, color: int) -> int:
        return self.black if color == BLACK else self.white

    def grid(self) -> np.ndarray:
        """8x8 int8 array of EMPTY / BLACK / WHITE for rendering."""
        grid = np.full((ROWS, COLS), EMPTY, dtype=np.int8)
        for color in (BLACK, WHITE):
            for sq in iter_bits(self.discs[color]):
                grid[sq // COLS, sq % COLS] = color
        return grid

    def copy(self) -> BoardState:
        return replace(self)

    def __hash__(self) -> int:
        return hash((self.discs, self.turn))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return False
        return self.discs == other.discs and self.turn == other.turn

    def __repr__(self) -> str:
        """Pretty print the board."""
        lines = ["   " + " ".join("abcdefgh")]
        for row in range(ROWS):
            rank = f"{row + 1} |"
            for col in range(COLS):
                rank += " " + COLOR_SYMBOLS[self.cell(row, col)]
            lines.append(rank)
        lines.append(f"\n{COLOR_NAMES[self.turn]} to move (b={self.black} w={self.white})")
        return "\n".join(lines)


def _capture_run(state: BoardState, sq: int, dir_idx: int) -> list[int]:
    """
    Shoot a ray from sq and return the opponent squares it would capture.

    The run must be one or more contiguous opponent discs closed off by a
    disc of the mover's color. Anything else captures nothing.
    """
    mine = state.discs[state.turn]
    theirs = state.discs[opponent(state.turn)]
    run = []
    for target in RAYS[sq][dir_idx]:
        target_bit = bit(target)
        if theirs & target_bit:
            run.append(target)
        elif mine & target_bit:
            return run
        else:
            break
    return []


def _captures_any(row: int, col: int, state: BoardState, dirs: list[int]) -> bool:
    sq = rowcol_to_sq(row, col)
    if state.occupied & bit(sq):
        return False
    return any(_capture_run(state, sq, d) for d in dirs)


def check_vertical(row: int, col: int, state: BoardState) -> bool:
    """Does a disc at (row, col) capture upwards or downwards?"""
    return _captures_any(row, col, state, VERTICAL_DIRS)


def check_horizontal(row: int, col: int, state: BoardState) -> bool:
    """Does a disc at (row, col) capture to the left or right?"""
    return _captures_any(row, col, state, HORIZONTAL_DIRS)


def check_diagonal(row: int, col: int, state: BoardState) -> bool:
    """Does a disc at (row, col) capture along any of the four diagonals?"""
    return _captures_any(row, col, state, DIAGONAL_DIRS)


def is_legal_move(row: int, col: int, state: BoardState) -> bool:
    """Check bounds, vacancy, then each capture direction."""
    if not is_valid_sq(row, col):
        return False
    if state.occupied & bit(rowcol_to_sq(row, col)):
        return False
    return (check_vertical(row, col, state) or
            check_horizontal(row, col, state) or
            check_diagonal(row, col, state))


def flips(row: int, col: int, state: BoardState) -> list[int]:
    """Squares flipped by playing (row, col), in direction order."""
    if not is_valid_sq(row, col):
        return []
    sq = rowcol_to_sq(row, col)
    if state.occupied & bit(sq):
        return []
    flipped = []
    for dir_idx in range(len(DIRECTIONS)):
        flipped.extend(_capture_run(state, sq, dir_idx))
    return flipped


def resolve(row: int, col: int, state: BoardState) -> BoardState:
    """
    Play (row, col) for the side to move.

    Illegal moves return the input state itself. Otherwise a new state is
    built with the disc placed, every bounded run flipped, the turn passed
    to the opponent and the counts refreshed.
    """
    if not is_legal_move(row, col, state):
        return state

    mover = state.turn
    flipped = squares_to_bb(flips(row, col, state))

    new_discs = list(state.discs)
    new_discs[mover] |= bit(rowcol_to_sq(row, col)) | flipped
    new_discs[opponent(mover)] &= ~flipped

    new_state = BoardState(discs=tuple(new_discs), turn=opponent(mover))
    update_score(new_state)
    return new_state


def update_score(state: BoardState) -> None:
    """Recount each color's discs into the state's cached counts."""
    state.black = popcount(state.discs[BLACK])
    state.white = popcount(state.discs[WHITE])


def has_legal_move(state: BoardState, color: Optional[int] = None) -> bool:
    """Whether color (default: side to move) has any legal move."""
    if color is not None and color != state.turn:
        state = replace(state, turn=color)
    for sq in iter_bits(state.empty):
        if is_legal_move(sq // COLS, sq % COLS, state):
            return True
    return False


def is_terminal(state: BoardState) -> bool:
    """
    Game over when neither side can move.

    There is no pass rule: a side with no moves only ends the game once the
    opponent is blocked as well.
    """
    if has_legal_move(state):
        return False
    return not has_legal_move(state, opponent(state.turn))


def winner(state: BoardState) -> Optional[int]:
    """Color with more discs, or None on a tie."""
    if state.black > state.white:
        return BLACK
    if state.white > state.black:
        return WHITE
    return None