"""
Plain-text board rendering for the terminal driver.
"""
from __future__ import annotations

from typing import List, Optional

from config import UISettings
from boardai.board import BOARD_SIZE
from boardai.game.constants import (
    CHESS_SYMBOLS, CHESS_LETTERS, OTHELLO_SYMBOLS, OTHELLO_LETTERS, HINT_SYMBOL,
)
from boardai.types import GameSnapshot

_REVERSE = "\033[7m"
_RESET = "\033[0m"


class TextRenderer:
    """Turns a GameSnapshot into printable lines."""

    def __init__(self, settings: Optional[UISettings] = None):
        self.settings = settings or UISettings()

    def _chess_cell(self, piece) -> str:
        if piece is None:
            return "."
        if self.settings.use_unicode:
            return CHESS_SYMBOLS[piece.color][piece.kind]
        letter = CHESS_LETTERS[piece.kind]
        return letter.upper() if piece.color == 1 else letter

    def _othello_cell(self, value: int) -> str:
        table = OTHELLO_SYMBOLS if self.settings.use_unicode else OTHELLO_LETTERS
        return table[int(value)]

    def render_board(self, snap: GameSnapshot) -> List[str]:
        lines: List[str] = []
        if self.settings.show_coordinates:
            lines.append("  " + " ".join(str(c) for c in range(BOARD_SIZE)))
        hints = set(snap.destinations)
        for r in range(BOARD_SIZE):
            cells = []
            for c in range(BOARD_SIZE):
                if snap.game == "chess":
                    text = self._chess_cell(snap.board[r][c])
                else:
                    text = self._othello_cell(snap.board[r, c])
                if (r, c) in hints and text in (".", "·"):
                    text = HINT_SYMBOL
                if self.settings.use_color and (r, c) == snap.selected:
                    text = f"{_REVERSE}{text}{_RESET}"
                cells.append(text)
            prefix = f"{r} " if self.settings.show_coordinates else ""
            lines.append(prefix + " ".join(cells))
        return lines

    def render_info(self, snap: GameSnapshot) -> List[str]:
        lines = [f"Depth {snap.depth} | {snap.status}"]
        if snap.game == "chess":
            for color, label in ((1, "Captured by you"), (-1, "Captured by AI")):
                taken = " ".join(self._chess_cell(p) for p in snap.captured.get(color, ()))
                lines.append(f"{label}: {taken}")
        else:
            lines.append(f"You: {snap.tally.get(1, 0)}  AI: {snap.tally.get(-1, 0)}")
        return lines

    def render(self, snap: GameSnapshot) -> str:
        return "\n".join(self.render_board(snap) + self.render_info(snap))
