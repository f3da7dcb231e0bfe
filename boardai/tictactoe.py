from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

WINNING_LINES: List[Tuple[int, int, int]] = [
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
]


def calculate_winner(squares: Sequence[Optional[str]]) -> Optional[Tuple[str, Tuple[int, int, int]]]:
    """Return (winner, line) for the first completed line, or None."""
    for line in WINNING_LINES:
        a, b, c = line
        if squares[a] and squares[a] == squares[b] == squares[c]:
            return squares[a], line
    return None
