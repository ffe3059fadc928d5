"""Tests for the per-color bot and background search handles."""

import pytest
import sys
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from othello.core.bitboard import BLACK, WHITE
from othello.core.state import BoardState
from othello.ai.minimax import SearchConfig
from othello.ai.bot import OthelloBot
from othello.ai.worker import SearchTask, default_executor


@pytest.fixture
def executor():
    pool = ThreadPoolExecutor(max_workers=2)
    yield pool
    pool.shutdown(wait=True)


class TestOthelloBot:
    def test_defaults(self):
        bot = OthelloBot(BLACK)
        assert bot.depth == 4
        assert not bot.alpha_beta_enabled
        assert bot.name == "Black minimax depth 4"

    def test_set_depth(self):
        bot = OthelloBot(WHITE)
        bot.set_depth(2)
        assert bot.depth == 2
        assert bot.name == "White minimax depth 2"

    def test_set_depth_rejects_out_of_range(self):
        bot = OthelloBot(WHITE, SearchConfig(depth=3))
        with pytest.raises(ValueError):
            bot.set_depth(11)
        assert bot.depth == 3

    def test_toggle_alpha_beta(self):
        bot = OthelloBot(BLACK)
        bot.toggle_alpha_beta()
        assert bot.alpha_beta_enabled
        assert "alpha-beta" in bot.name
        bot.toggle_alpha_beta()
        assert not bot.alpha_beta_enabled

    def test_tree_before_search(self):
        bot = OthelloBot(BLACK)
        assert bot.search_tree.size == 0
        assert bot.search_tree.root is None
        assert bot.tree_size == 0

    def test_search_records_tree(self):
        bot = OthelloBot(BLACK, SearchConfig(depth=2))
        result = bot.search(BoardState.new_game())
        assert result.move == (2, 3)
        assert bot.last_result is result
        assert bot.tree_size == 17
        assert bot.search_tree.size == 17

    def test_search_does_not_touch_board(self):
        state = BoardState.new_game()
        OthelloBot(BLACK, SearchConfig(depth=3)).get_best_move(state)
        assert state == BoardState.new_game()

    def test_bots_keep_separate_trees(self):
        black = OthelloBot(BLACK, SearchConfig(depth=1))
        white = OthelloBot(WHITE, SearchConfig(depth=2))
        black.search(BoardState.new_game())
        assert white.tree_size == 0
        white.search(BoardState(turn=WHITE))
        assert black.tree_size == 5
        assert black.search_tree is not white.search_tree

    def test_think(self, executor):
        bot = OthelloBot(BLACK, SearchConfig(depth=2))
        state = BoardState.new_game()
        task = bot.think(state, executor)
        result = task.wait(timeout=30)
        assert result.move == (2, 3)
        assert bot.last_result is result
        assert task.state == state
        assert task.state is not state


class TestSearchTask:
    def test_poll_before_done(self):
        future = Future()
        task = SearchTask(future, BoardState.new_game())
        assert not task.done
        assert task.poll() is None
        assert not task.collected

    def test_result_taken_once(self):
        future = Future()
        task = SearchTask(future, BoardState.new_game())
        sentinel = object()
        future.set_result(sentinel)

        assert task.done
        assert task.poll() is sentinel
        assert task.collected
        with pytest.raises(RuntimeError):
            task.wait()
        with pytest.raises(RuntimeError):
            task.poll()

    def test_exception_propagates(self):
        future = Future()
        task = SearchTask(future, BoardState.new_game())
        future.set_exception(ValueError("boom"))
        with pytest.raises(ValueError, match="boom"):
            task.wait()

    def test_launch_copies_state(self, executor):
        seen = []

        def search(state):
            seen.append(state)
            return state.turn

        state = BoardState.new_game()
        task = SearchTask.launch(search, state, executor)
        assert task.wait(timeout=30) == BLACK
        assert seen[0] is task.state
        assert seen[0] is not state
        assert seen[0] == state

    def test_default_executor_shared(self):
        assert default_executor() is default_executor()
        task = SearchTask.launch(lambda s: s.black, BoardState.new_game())
        assert task.wait(timeout=30) == 2
