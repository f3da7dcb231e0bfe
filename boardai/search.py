"""
Minimax search with alpha-beta pruning over any GameVariant, plus the
strategy interface used by the turn controller.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from boardai.types import Color, GameVariantProtocol, Score

logger = logging.getLogger(__name__)

INFINITY: float = float("inf")


class SearchResult(NamedTuple):
    score: Score
    move: Any


@dataclass
class SearchStats:
    """Counters collected during one search."""
    nodes: int = 0
    cutoffs: int = 0


def _dead_end(variant: GameVariantProtocol, board: Any, color: Color, maximizing: bool) -> SearchResult:
    """Result for a node where `color` has no playable move."""
    decided = variant.terminal_score(board, color, maximizing)
    if decided is None:
        decided = variant.no_move_score(board)
    return SearchResult(decided, None)


def alphabeta(variant: GameVariantProtocol, board: Any, depth: int, alpha: Score = -INFINITY,
              beta: Score = INFINITY, maximizing: bool = True,
              stats: Optional[SearchStats] = None) -> SearchResult:
    """Best score and move for the side to move, searched `depth` plies deep.

    The maximizing side is the variant's AI color. Children that leave the
    mover's king attacked are skipped. Moves are tried in generation order.
    """
    if stats is not None:
        stats.nodes += 1
    if depth == 0:
        return SearchResult(variant.evaluate(board), None)

    color = variant.color_to_move(maximizing)
    best_score: Score = -INFINITY if maximizing else INFINITY
    best_move: Any = None
    explored = False
    for move in variant.generate(board, color):
        child = variant.apply(board, move, color)
        if variant.exposes_mover(child, color):
            continue
        explored = True
        result = alphabeta(variant, child, depth - 1, alpha, beta, not maximizing, stats)
        if maximizing:
            if result.score > best_score:
                best_score = result.score
                best_move = move
            alpha = max(alpha, result.score)
        else:
            if result.score < best_score:
                best_score = result.score
                best_move = move
            beta = min(beta, result.score)
        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break

    if not explored:
        return _dead_end(variant, board, color, maximizing)
    return SearchResult(best_score, best_move)


def minimax(variant: GameVariantProtocol, board: Any, depth: int, maximizing: bool = True) -> SearchResult:
    """Plain minimax with the same rules as `alphabeta`, no pruning."""
    if depth == 0:
        return SearchResult(variant.evaluate(board), None)

    color = variant.color_to_move(maximizing)
    best_score: Score = -INFINITY if maximizing else INFINITY
    best_move: Any = None
    explored = False
    for move in variant.generate(board, color):
        child = variant.apply(board, move, color)
        if variant.exposes_mover(child, color):
            continue
        explored = True
        score = minimax(variant, child, depth - 1, not maximizing).score
        if (maximizing and score > best_score) or (not maximizing and score < best_score):
            best_score = score
            best_move = move

    if not explored:
        return _dead_end(variant, board, color, maximizing)
    return SearchResult(best_score, best_move)


class SearchStrategy(ABC):
    """Abstract interface for search strategies."""

    @abstractmethod
    def search(self, variant: GameVariantProtocol, board: Any, depth: int) -> SearchResult:  # pragma: no cover
        raise NotImplementedError


class AlphaBetaSearchStrategy(SearchStrategy):
    """Root search for the AI side."""

    def __init__(self) -> None:
        self.last_stats = SearchStats()

    def search(self, variant: GameVariantProtocol, board: Any, depth: int) -> SearchResult:
        stats = SearchStats()
        start_time = time.time()
        result = alphabeta(variant, board, depth, -INFINITY, INFINITY, True, stats)
        elapsed = time.time() - start_time
        self.last_stats = stats
        logger.debug("%s search depth=%d score=%s move=%s nodes=%d cutoffs=%d in %.3fs",
                     variant.name, depth, result.score, result.move,
                     stats.nodes, stats.cutoffs, elapsed)
        return result


def get_search_strategy() -> SearchStrategy:
    """Factory for a default search strategy (alpha-beta)."""
    return AlphaBetaSearchStrategy()


__all__ = [
    "INFINITY",
    "SearchResult",
    "SearchStats",
    "alphabeta",
    "minimax",
    "SearchStrategy",
    "AlphaBetaSearchStrategy",
    "get_search_strategy",
]
