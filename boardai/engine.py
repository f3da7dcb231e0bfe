"""
Game variants: the capability set the generic search core runs on.

Each variant bundles move generation, move application, static evaluation
and the terminal rules of one game, with the AI and human colors fixed.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from boardai import chess_moves as cm
from boardai import othello_moves as om
from boardai.eval import ChessEvaluator, OthelloEvaluator
from boardai.types import Color, EvaluatorProtocol, Score

GAMES = ("chess", "othello")

# Dominates any finite material evaluation
MATE_SCORE: int = 50000


class GameVariant(ABC):
    """Strategy object for one game."""

    name: str = ""

    def __init__(self, ai_color: Color, evaluator: EvaluatorProtocol) -> None:
        self.ai_color = ai_color
        self.human_color = -ai_color
        self.evaluator = evaluator

    def color_to_move(self, maximizing: bool) -> Color:
        return self.ai_color if maximizing else self.human_color

    @abstractmethod
    def initial_board(self) -> Any:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def generate(self, board: Any, color: Color) -> List[Any]:  # pragma: no cover
        """Pseudo-legal moves in generation order."""
        raise NotImplementedError

    @abstractmethod
    def apply(self, board: Any, move: Any, color: Color) -> Any:  # pragma: no cover
        """New board after `color` plays `move`."""
        raise NotImplementedError

    def evaluate(self, board: Any) -> int:
        return self.evaluator.evaluate(board)

    def exposes_mover(self, board: Any, color: Color) -> bool:
        """Whether the position reached leaves the mover's own king attacked."""
        return False

    def terminal_score(self, board: Any, color: Color, maximizing: bool) -> Optional[Score]:
        """Score when `color` has no playable move and the game is decided, else None."""
        return None

    @abstractmethod
    def no_move_score(self, board: Any) -> Score:  # pragma: no cover
        """Score when the side to move has nothing to play."""
        raise NotImplementedError


class ChessVariant(GameVariant):
    name = "chess"

    def __init__(self, ai_color: Color = cm.BLACK) -> None:
        super().__init__(ai_color, ChessEvaluator(ai_color))
        self.generator = cm.ChessMoveGenerator()

    def initial_board(self) -> cm.Board:
        return cm.initial_board()

    def generate(self, board: cm.Board, color: Color) -> List[cm.ChessMove]:
        return self.generator.generate(board, color)

    def apply(self, board: cm.Board, move: cm.ChessMove, color: Color) -> cm.Board:
        nb, _ = cm.apply_move(board, move)
        return nb

    def exposes_mover(self, board: cm.Board, color: Color) -> bool:
        return cm.in_check(board, color)

    def terminal_score(self, board: cm.Board, color: Color, maximizing: bool) -> Optional[Score]:
        # `color` has no legal move here, so check means checkmate
        if cm.in_check(board, color):
            return -MATE_SCORE if maximizing else MATE_SCORE
        return None

    def no_move_score(self, board: cm.Board) -> Score:
        # Stalemate and draw are not told apart
        return 0


class OthelloVariant(GameVariant):
    name = "othello"

    def __init__(self, ai_color: Color = om.WHITE) -> None:
        super().__init__(ai_color, OthelloEvaluator(ai_color))
        self.generator = om.OthelloMoveGenerator()

    def initial_board(self) -> om.Board:
        return om.initial_board()

    def generate(self, board: om.Board, color: Color) -> List[Any]:
        return self.generator.generate(board, color)

    def apply(self, board: om.Board, move: Any, color: Color) -> om.Board:
        nb, _ = om.apply_move(board, move, color)
        return nb

    def no_move_score(self, board: om.Board) -> Score:
        return self.evaluate(board)


def get_variant(game: str) -> GameVariant:
    """Factory for a variant with the default human/AI color mapping."""
    if game == "chess":
        return ChessVariant()
    if game == "othello":
        return OthelloVariant()
    raise ValueError(f"Unknown game: {game}")


__all__ = [
    "GAMES",
    "MATE_SCORE",
    "GameVariant",
    "ChessVariant",
    "OthelloVariant",
    "get_variant",
]
