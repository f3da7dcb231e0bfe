"""
Static evaluation of chess and Othello positions.

Scores are always from the AI's point of view: positive numbers favour the
side the computer plays. Mobility terms count pseudo-legal moves for both
sides, so chess mobility may include moves that would expose the king.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict

import numpy as np

from boardai import chess_moves as cm
from boardai import othello_moves as om
from boardai.board import BOARD_SIZE, CENTER_SQUARES, CORNER_SQUARES
from boardai.types import Color

# Chess weights
PIECE_VALUES: Dict[str, int] = {
    cm.PAWN: 100,
    cm.KNIGHT: 320,
    cm.BISHOP: 330,
    cm.ROOK: 500,
    cm.QUEEN: 900,
    cm.KING: 20000,
}
PAWN_ADVANCE_BONUS = 10  # per row travelled from the start rank
CENTER_BONUS = 30
CHESS_MOBILITY_WEIGHT = 10

# Othello weights
DISC_WEIGHT = 1
CORNER_BONUS = 25
EDGE_BONUS = 5
OTHELLO_MOBILITY_WEIGHT = 2

_CORNER_ROWS = np.array([r for r, _ in CORNER_SQUARES])
_CORNER_COLS = np.array([c for _, c in CORNER_SQUARES])
EDGE_MASK = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=bool)
EDGE_MASK[0, :] = EDGE_MASK[-1, :] = EDGE_MASK[:, 0] = EDGE_MASK[:, -1] = True


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    def __init__(self, ai_color: Color) -> None:
        self.ai_color = ai_color
        self.human_color = -ai_color

    @abstractmethod
    def evaluate(self, board) -> int:  # pragma: no cover
        """Score `board` from the AI's perspective."""
        raise NotImplementedError


class ChessEvaluator(Evaluator):
    """Material, pawn advancement, centre occupation and mobility."""

    def __init__(self, ai_color: Color = cm.BLACK) -> None:
        super().__init__(ai_color)
        self._generator = cm.ChessMoveGenerator()

    def piece_score(self, piece: cm.Piece, row: int, col: int) -> int:
        score = PIECE_VALUES[piece.kind]
        if piece.kind == cm.PAWN:
            travelled = abs(row - cm.PAWN_START_ROW[piece.color])
            score += travelled * PAWN_ADVANCE_BONUS
        if (row, col) in CENTER_SQUARES:
            score += CENTER_BONUS
        return score

    def mobility(self, board: cm.Board) -> int:
        ai_moves = len(self._generator.generate(board, self.ai_color))
        human_moves = len(self._generator.generate(board, self.human_color))
        return (ai_moves - human_moves) * CHESS_MOBILITY_WEIGHT

    def evaluate(self, board: cm.Board) -> int:
        score = 0
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                piece = board[r][c]
                if piece is None:
                    continue
                value = self.piece_score(piece, r, c)
                score += value if piece.color == self.ai_color else -value
        return score + self.mobility(board)


class OthelloEvaluator(Evaluator):
    """Disc count, corners, edges and mobility."""

    def __init__(self, ai_color: Color = om.WHITE) -> None:
        super().__init__(ai_color)
        self._generator = om.OthelloMoveGenerator()

    def evaluate(self, board: om.Board) -> int:
        # Cells hold +1/-1, so sums are (BLACK - WHITE) counts; flip to AI side
        sign = 1 if self.ai_color == om.BLACK else -1
        discs = int(board.sum(dtype=np.int32)) * DISC_WEIGHT
        corners = int(board[_CORNER_ROWS, _CORNER_COLS].sum(dtype=np.int32)) * CORNER_BONUS
        edges = int(board[EDGE_MASK].sum(dtype=np.int32)) * EDGE_BONUS
        score = sign * (discs + corners + edges)

        ai_moves = len(self._generator.generate(board, self.ai_color))
        human_moves = len(self._generator.generate(board, self.human_color))
        return score + (ai_moves - human_moves) * OTHELLO_MOBILITY_WEIGHT


def get_evaluator(game: str, ai_color: Color) -> Evaluator:
    if game == "chess":
        return ChessEvaluator(ai_color)
    if game == "othello":
        return OthelloEvaluator(ai_color)
    raise ValueError(f"Unknown game: {game}")


__all__ = [
    "Evaluator",
    "ChessEvaluator",
    "OthelloEvaluator",
    "get_evaluator",
    "PIECE_VALUES",
]
