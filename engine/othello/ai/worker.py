"""
Background search handle.

A search is launched now and collected later: the caller polls without
blocking (e.g. once per frame) or waits, and the result can be taken
exactly once.
"""

from __future__ import annotations
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from threading import Lock
from typing import Callable, Optional

from ..core.state import BoardState
from .minimax import SearchResult

# Shared pool for searches launched without an explicit executor
_default_executor: Optional[ThreadPoolExecutor] = None
_default_lock = Lock()


def default_executor() -> ThreadPoolExecutor:
    global _default_executor
    with _default_lock:
        if _default_executor is None:
            # One worker per color so both bots can think at once
            _default_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="othello-search")
        return _default_executor


class SearchTask:
    """Single-producer, single-consumer handle on a running search."""

    def __init__(self, future: Future, state: BoardState):
        self._future = future
        self.state = state  # the copy the search runs on
        self._collected = False

    @classmethod
    def launch(
        cls,
        search: Callable[[BoardState], SearchResult],
        state: BoardState,
        executor: Optional[Executor] = None
    ) -> SearchTask:
        """Run search on a private copy of state in the background."""
        board_copy = state.copy()
        executor = executor or default_executor()
        return cls(executor.submit(search, board_copy), board_copy)

    @property
    def done(self) -> bool:
        return self._future.done()

    @property
    def collected(self) -> bool:
        return self._collected

    def poll(self) -> Optional[SearchResult]:
        """Return the result if the search has finished, else None."""
        if not self._future.done():
            return None
        return self.wait()

    def wait(self, timeout: Optional[float] = None) -> SearchResult:
        """
        Block until the search finishes and return its result.

        Raises concurrent.futures.TimeoutError on timeout, re-raises any
        exception from the search, and RuntimeError if already collected.
        """
        if self._collected:
            raise RuntimeError("Search result already collected")
        result = self._future.result(timeout=timeout)
        self._collected = True
        return result
