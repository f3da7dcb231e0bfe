"""
AI engine integration: runs the search off the caller's thread.
"""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional
import copy
import logging
import time

from boardai.engine import GameVariant
from boardai.search import SearchResult, SearchStrategy, get_search_strategy

logger = logging.getLogger(__name__)


class EngineIntegration:
    """Handles the deferred AI turn.

    One worker thread: a search waits `think_delay` seconds (so a thinking
    indicator can be shown), runs to completion and hands its result to the
    callback on the worker thread. There is no cancellation.
    """

    def __init__(self, strategy: Optional[SearchStrategy] = None, think_delay: float = 0.0):
        self.strategy = strategy or get_search_strategy()
        self.think_delay = max(0.0, float(think_delay))
        self.is_thinking = False
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="boardai-ai")

    def search_async(self, variant: GameVariant, board: Any, depth: int,
                     callback: Callable[[SearchResult, float], None],
                     on_error: Optional[Callable[[BaseException], None]] = None) -> Optional[Future]:
        """Schedule a search; returns None if one is already running.

        A failing search calls `on_error` on the worker thread, then re-raises
        so the future carries the exception.
        """
        if self.is_thinking:
            return None

        self.is_thinking = True
        board_copy = copy.deepcopy(board)

        def worker() -> None:
            try:
                if self.think_delay:
                    time.sleep(self.think_delay)
                start_time = time.time()
                result = self.strategy.search(variant, board_copy, depth)
                elapsed_time = time.time() - start_time
            except Exception as exc:
                logger.exception("%s search at depth %d failed", variant.name, depth)
                self.is_thinking = False
                if on_error is not None:
                    on_error(exc)
                raise
            self.is_thinking = False
            callback(result, elapsed_time)

        return self._executor.submit(worker)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
