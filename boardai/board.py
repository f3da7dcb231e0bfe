from __future__ import annotations

from numbers import Integral
from typing import Any, List, Tuple

from boardai.types import Position

BOARD_SIZE: int = 8

# Eight compass directions, row-major order
DIRECTIONS: List[Tuple[int, int]] = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]

CENTER_SQUARES: Tuple[Position, ...] = ((3, 3), (3, 4), (4, 3), (4, 4))
CORNER_SQUARES: Tuple[Position, ...] = ((0, 0), (0, 7), (7, 0), (7, 7))


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_valid_position(pos: Any) -> bool:
    """Check if an object is an on-board (row, col) pair of integers."""
    return (isinstance(pos, (tuple, list)) and len(pos) == 2 and
            all(isinstance(x, Integral) and not isinstance(x, bool) for x in pos) and
            in_bounds(int(pos[0]), int(pos[1])))


def all_positions() -> List[Position]:
    """Every square, row-major."""
    return [(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]
