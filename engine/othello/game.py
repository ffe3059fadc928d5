"""
Headless game driver.

Owns the live board, one bot per color and the move history. A front end
(terminal client, GUI) feeds it human moves and drives the bots, either
synchronously with step_bot() or in the background with start_bot_turn()
followed by poll_bot() once per frame.
"""

from __future__ import annotations
from concurrent.futures import Executor
from typing import Optional
import logging

from .core.bitboard import BLACK, WHITE, COLOR_NAMES
from .core.state import BoardState, winner
from .core.moves import MoveOutcome, MoveResult, place, game_status
from .core.notation import GameRecord, coord_to_algebraic
from .ai.bot import OthelloBot
from .ai.minimax import SearchConfig, SearchResult
from .ai.worker import SearchTask

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(
        self,
        black_config: Optional[SearchConfig] = None,
        white_config: Optional[SearchConfig] = None,
        black_ai: bool = False,
        white_ai: bool = False,
        executor: Optional[Executor] = None
    ):
        self.board = BoardState.new_game()
        self.bots = {
            BLACK: OthelloBot(BLACK, black_config),
            WHITE: OthelloBot(WHITE, white_config),
        }
        self.ai_enabled = {BLACK: black_ai, WHITE: white_ai}
        self.paused = False
        self.history: list[tuple[int, int, int]] = []
        self.executor = executor
        self._task: Optional[SearchTask] = None

    def reset(self) -> None:
        """Back to the opening. A search still running is abandoned."""
        self.board = BoardState.new_game()
        self.history = []
        self._task = None

    @property
    def status(self) -> Optional[MoveOutcome]:
        """NO_MOVES / GAME_OVER when the side to move is blocked, else None."""
        return game_status(self.board)

    @property
    def is_over(self) -> bool:
        return self.status is MoveOutcome.GAME_OVER

    @property
    def is_blocked(self) -> bool:
        """Side to move cannot play. Without a pass rule, play stops here."""
        return self.status is not None

    @property
    def scores(self) -> tuple[int, int]:
        """(black, white) disc counts."""
        return self.board.black, self.board.white

    @property
    def winner(self) -> Optional[int]:
        return winner(self.board)

    @property
    def bot_to_move(self) -> bool:
        return self.ai_enabled[self.board.turn]

    @property
    def thinking(self) -> bool:
        return self._task is not None

    def current_bot(self) -> OthelloBot:
        return self.bots[self.board.turn]

    def play(self, row: int, col: int) -> MoveResult:
        """Play a move for whoever is to move (human input)."""
        result = place(self.board, row, col)
        if result.applied:
            self._commit(result)
        return result

    def step_bot(self) -> Optional[MoveResult]:
        """Let the bot to move search and play right now (blocking)."""
        if not self.bot_to_move:
            return None
        search = self.current_bot().search(self.board)
        return self._apply_search(search)

    def start_bot_turn(self) -> bool:
        """Launch a background search if a bot is to move and idle."""
        if self.paused or self._task is not None:
            return False
        if not self.bot_to_move or self.is_blocked:
            return False
        self._task = self.current_bot().think(self.board, self.executor)
        return True

    def poll_bot(self) -> Optional[MoveResult]:
        """
        Collect a finished background search and play its move.

        Returns None while the search is running. A result computed for a
        board that has since changed is discarded.
        """
        if self._task is None:
            return None
        search = self._task.poll()
        if search is None:
            return None
        return self._finish(search)

    def wait_bot(self, timeout: Optional[float] = None) -> Optional[MoveResult]:
        """Block until the background search finishes, then play it."""
        if self._task is None:
            return None
        return self._finish(self._task.wait(timeout))

    def _finish(self, search: SearchResult) -> Optional[MoveResult]:
        task, self._task = self._task, None
        if task.state != self.board:
            logger.warning("Discarding search result for a stale position")
            return None
        return self._apply_search(search)

    def _apply_search(self, search: SearchResult) -> MoveResult:
        if not search.has_move:
            return MoveResult(self.status or MoveOutcome.NO_MOVES, self.board)
        result = place(self.board, *search.move)
        if result.applied:
            self._commit(result)
        return result

    def _commit(self, result: MoveResult) -> None:
        color = self.board.turn
        row, col = result.move
        self.board = result.state
        self.history.append((color, row, col))
        logger.info(
            f"{COLOR_NAMES[color]} plays {coord_to_algebraic(result.move)} "
            f"(b={self.board.black} w={self.board.white})"
        )
        if self.is_over:
            logger.info(f"Game over: black {self.board.black}, white {self.board.white}")

    def player_label(self, color: int) -> str:
        if self.ai_enabled[color]:
            return self.bots[color].name
        return "Human"

    def record(self, **metadata) -> GameRecord:
        """Move history as a GameRecord."""
        metadata.setdefault('black', self.player_label(BLACK))
        metadata.setdefault('white', self.player_label(WHITE))
        return GameRecord.from_history(self.history, final_state=self.board, **metadata)
