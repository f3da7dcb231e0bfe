"""
Type definitions and protocols for the board game AI.

This module provides:
- Type aliases shared by the chess and Othello rule modules
- Protocol definitions for the search and evaluation seams
- The immutable snapshot handed to renderers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, List, Tuple, Dict, Any, Optional

# Basic type aliases
Position = Tuple[int, int]  # (row, col), zero-indexed
Color = int  # 1 or -1; the opponent of c is -c
Score = float  # evaluation score, +/-inf at the search bounds


@dataclass(frozen=True)
class GameSnapshot:
    """
    Immutable view of a game for rendering collaborators.

    `destinations` holds the legal targets of the selected chess piece, or
    every legal placement when it is the human's turn in Othello.
    """
    game: str
    board: Any
    current_player: Color
    phase: str
    status: str
    depth: int
    thinking: bool = False
    game_over: bool = False
    winner: Optional[Color] = None
    selected: Optional[Position] = None
    destinations: Tuple[Position, ...] = ()
    last_move: Any = None
    captured: Dict[Color, Tuple[Any, ...]] = field(default_factory=dict)
    tally: Dict[Color, int] = field(default_factory=dict)


class EvaluatorProtocol(Protocol):
    """Protocol for static evaluation functions."""

    def evaluate(self, board: Any) -> int:
        """Score a position from the AI's perspective."""
        ...


class GameVariantProtocol(Protocol):
    """Capability set the generic search core is written against."""

    ai_color: Color
    human_color: Color

    def color_to_move(self, maximizing: bool) -> Color:
        ...

    def generate(self, board: Any, color: Color) -> List[Any]:
        ...

    def apply(self, board: Any, move: Any, color: Color) -> Any:
        ...

    def evaluate(self, board: Any) -> int:
        ...

    def exposes_mover(self, board: Any, color: Color) -> bool:
        ...

    def terminal_score(self, board: Any, color: Color, maximizing: bool) -> Optional[Score]:
        ...

    def no_move_score(self, board: Any) -> Score:
        ...

