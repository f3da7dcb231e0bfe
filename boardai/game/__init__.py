"""
Game session components: state, selection, deferred AI turns, turn control.
"""
from __future__ import annotations

from .constants import *
from .game_state import GameState, ChessGameState, OthelloGameState, make_game_state
from .move_manager import MoveManager, group_moves_by_source, group_moves_by_target, move_target
from .engine_integration import EngineIntegration
from .controller import Phase, TurnController
from .text_renderer import TextRenderer

__all__ = [
    # Constants
    "CHESS_DIFFICULTIES", "OTHELLO_DIFFICULTIES", "DIFFICULTIES",
    "STATUS_YOUR_TURN", "STATUS_THINKING",

    # Core components
    "GameState",
    "ChessGameState",
    "OthelloGameState",
    "make_game_state",
    "MoveManager",
    "EngineIntegration",
    "Phase",
    "TurnController",

    # Rendering
    "TextRenderer",

    # Utility functions
    "group_moves_by_source",
    "group_moves_by_target",
    "move_target",
]
