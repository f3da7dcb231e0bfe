"""
Game state management: board, side to move, terminal detection, bookkeeping.
"""
from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from boardai import chess_moves as cm
from boardai import othello_moves as om
from boardai.engine import GameVariant
from boardai.game.constants import (
    STATUS_YOUR_TURN, STATUS_THINKING, STATUS_YOU_IN_CHECK, STATUS_AI_IN_CHECK,
    STATUS_YOU_WIN_MATE, STATUS_AI_WINS_MATE, STATUS_STALEMATE, STATUS_NO_MOVE,
    STATUS_YOU_WIN, STATUS_AI_WINS, STATUS_DRAW, STATUS_AI_PASSES, STATUS_YOU_PASS,
)
from boardai.types import Color, Position

logger = logging.getLogger(__name__)


class GameState(ABC):
    """Core state of one game between the human and the AI.

    Every change goes through `make_move` / `end_without_move` / `reset_game`,
    each of which leaves the state fully consistent (move applied, terminal
    status recomputed, side to move swapped).
    """

    game: str = ""
    needs_selection: bool = False

    def __init__(self, variant: GameVariant, depth: int):
        self.variant = variant
        self.human_color: Color = variant.human_color
        self.ai_color: Color = variant.ai_color
        self.depth = depth
        self.reset_game()

    def reset_game(self) -> None:
        """Reset the game to its initial position; the human moves first."""
        self.board = self.variant.initial_board()
        self.current_player: Color = self.human_color
        self.last_move: Any = None
        self.game_over = False
        self.winner: Optional[Color] = None
        self.status = STATUS_YOUR_TURN
        self._reset_bookkeeping()

    def make_move(self, move: Any) -> bool:
        """Apply a legal move for the side to move and return success."""
        if self.game_over:
            return False
        if move not in self.legal_moves():
            logger.debug("Rejected illegal %s move %s", self.game, move)
            return False

        mover = self.current_player
        self._apply(move, mover)
        self.last_move = move
        self._after_move(mover)
        return True

    def end_without_move(self, status: str = STATUS_NO_MOVE) -> None:
        """Close the game when the AI search produced no move."""
        self.game_over = True
        self.winner = None
        self.status = status

    def is_human_turn(self) -> bool:
        return not self.game_over and self.current_player == self.human_color

    def get_board_copy(self) -> Any:
        return copy.deepcopy(self.board)

    def _turn_status(self, color: Color) -> str:
        return STATUS_YOUR_TURN if color == self.human_color else STATUS_THINKING

    @abstractmethod
    def legal_moves(self, color: Optional[Color] = None) -> List[Any]:
        """Moves the side to move (or `color`) may actually play."""
        raise NotImplementedError

    @abstractmethod
    def moves_from(self, pos: Position) -> List[Any]:
        """Legal moves selected by clicking `pos`."""
        raise NotImplementedError

    @abstractmethod
    def _reset_bookkeeping(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def _apply(self, move: Any, mover: Color) -> None:
        raise NotImplementedError

    @abstractmethod
    def _after_move(self, mover: Color) -> None:
        raise NotImplementedError


class ChessGameState(GameState):
    game = "chess"
    needs_selection = True

    def _reset_bookkeeping(self) -> None:
        # Pieces taken, keyed by the color that captured them
        self.captured: Dict[Color, List[cm.Piece]] = {cm.WHITE: [], cm.BLACK: []}
        self.in_check = False

    def legal_moves(self, color: Optional[Color] = None) -> List[cm.ChessMove]:
        return cm.legal_moves(self.board, self.current_player if color is None else color)

    def moves_from(self, pos: Position) -> List[cm.ChessMove]:
        piece = cm.piece_at(self.board, pos)
        if piece is None or piece.color != self.current_player:
            return []
        return cm.legal_moves_from(self.board, pos)

    def is_own_piece(self, pos: Position, color: Color) -> bool:
        piece = cm.piece_at(self.board, pos)
        return piece is not None and piece.color == color

    def _apply(self, move: cm.ChessMove, mover: Color) -> None:
        self.board, taken = cm.apply_move(self.board, move)
        if taken is not None:
            self.captured[mover].append(taken)

    def _after_move(self, mover: Color) -> None:
        other = -mover
        if cm.checkmate(self.board, other):
            self.game_over = True
            self.winner = mover
            self.in_check = True
            self.status = STATUS_YOU_WIN_MATE if mover == self.human_color else STATUS_AI_WINS_MATE
            return
        if not cm.has_legal_move(self.board, other):
            self.game_over = True
            self.winner = None
            self.in_check = False
            self.status = STATUS_STALEMATE
            return

        self.current_player = other
        self.in_check = cm.in_check(self.board, other)
        if self.in_check:
            self.status = STATUS_YOU_IN_CHECK if other == self.human_color else STATUS_AI_IN_CHECK
        else:
            self.status = self._turn_status(other)


class OthelloGameState(GameState):
    game = "othello"

    def _reset_bookkeeping(self) -> None:
        self.tally: Dict[Color, int] = om.count_discs(self.board)

    def legal_moves(self, color: Optional[Color] = None) -> List[Position]:
        return om.generate_moves(self.board, self.current_player if color is None else color)

    def moves_from(self, pos: Position) -> List[Position]:
        return [pos] if pos in self.legal_moves() else []

    def _apply(self, move: Position, mover: Color) -> None:
        self.board, _ = om.apply_move(self.board, move, mover)
        self.tally = om.count_discs(self.board)

    def _after_move(self, mover: Color) -> None:
        other = -mover
        if om.has_legal_move(self.board, other):
            self.current_player = other
            self.status = self._turn_status(other)
        elif om.has_legal_move(self.board, mover):
            # `other` passes, `mover` plays again
            self.current_player = mover
            self.status = STATUS_AI_PASSES if other == self.ai_color else STATUS_YOU_PASS
        else:
            self.game_over = True
            human, ai = self.tally[self.human_color], self.tally[self.ai_color]
            if human > ai:
                self.winner, self.status = self.human_color, STATUS_YOU_WIN
            elif ai > human:
                self.winner, self.status = self.ai_color, STATUS_AI_WINS
            else:
                self.winner, self.status = None, STATUS_DRAW


def make_game_state(variant: GameVariant, depth: int) -> GameState:
    if variant.name == "chess":
        return ChessGameState(variant, depth)
    if variant.name == "othello":
        return OthelloGameState(variant, depth)
    raise ValueError(f"Unknown game: {variant.name}")
