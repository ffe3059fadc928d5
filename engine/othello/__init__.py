"""Othello engine with a minimax player that records its search tree."""

from .core.state import BoardState
from .core.moves import MoveOutcome, MoveResult, NO_MOVE
from .ai.minimax import Minimax, SearchConfig, SearchResult
from .ai.bot import OthelloBot
from .game import GameSession
