"""Board game AI package: thin re-exports.

Usage examples:
    from boardai import ChessVariant, alphabeta
    from boardai import TurnController
"""
from __future__ import annotations

# Engine API
from .engine import (
    GAMES,
    MATE_SCORE,
    GameVariant,
    ChessVariant,
    OthelloVariant,
    get_variant,
)

# Evaluation
from .eval import Evaluator, ChessEvaluator, OthelloEvaluator, get_evaluator

# Search
from .search import (
    SearchResult,
    SearchStats,
    alphabeta,
    minimax,
    AlphaBetaSearchStrategy,
    get_search_strategy,
)

# Tic-tac-toe
from .tictactoe import calculate_winner

# Turn control
from .game.controller import Phase, TurnController
