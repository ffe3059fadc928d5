"""Core game logic: bitboards, board state, rules and move generation."""

from .bitboard import *
from .state import BoardState
from .moves import MoveGenerator, MoveOutcome, MoveResult, NO_MOVE
