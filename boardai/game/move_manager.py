"""
Square selection handling: which moves a click offers and which one it plays.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from boardai.game.game_state import GameState
from boardai.types import Position


def move_target(move: Any) -> Position:
    """Destination square of a chess move or an Othello placement."""
    return getattr(move, "target", move)


def group_moves_by_source(moves: List[Any]) -> Dict[Position, List[Any]]:
    """Group chess moves by their starting square."""
    result: Dict[Position, List[Any]] = {}
    for move in moves:
        result.setdefault(move.source, []).append(move)
    return result


def group_moves_by_target(moves: List[Any]) -> Dict[Position, Any]:
    """Map each destination to the move reaching it (first one wins)."""
    result: Dict[Position, Any] = {}
    for move in moves:
        result.setdefault(move_target(move), move)
    return result


class MoveManager:
    """Tracks the human's current selection.

    Chess is two-click: pick one of your pieces, then one of its legal
    destinations. Othello is one-click: a legal placement is played directly.
    """

    def __init__(self, state: GameState):
        self.state = state
        self.selected: Optional[Position] = None
        self.moves_by_target: Dict[Position, Any] = {}

    def clear_selection(self) -> None:
        self.selected = None
        self.moves_by_target = {}

    def select(self, pos: Position) -> Optional[Any]:
        """Handle a click on `pos`; return the move to play, if any."""
        if not self.state.needs_selection:
            moves = self.state.moves_from(pos)
            return moves[0] if moves else None

        if self.selected is not None and pos in self.moves_by_target:
            move = self.moves_by_target[pos]
            self.clear_selection()
            return move

        if self.state.is_own_piece(pos, self.state.human_color):
            self.selected = pos
            self.moves_by_target = group_moves_by_target(self.state.moves_from(pos))
        else:
            self.clear_selection()
        return None

    def destinations(self) -> List[Position]:
        """Squares a renderer should highlight for the human."""
        if not self.state.is_human_turn():
            return []
        if not self.state.needs_selection:
            return [move_target(m) for m in self.state.legal_moves()]
        return list(self.moves_by_target)
