from __future__ import annotations

from typing import Dict, List, Tuple

import numpy as np

from boardai.board import BOARD_SIZE, DIRECTIONS, all_positions, in_bounds
from boardai.types import Color, Position

EMPTY: int = 0
BLACK: Color = 1
WHITE: Color = -1

Board = np.ndarray  # (8, 8) int8: EMPTY, BLACK or WHITE
# Nested-list copy of a board, faster for cell-by-cell scans
Grid = List[List[int]]


# -----------------------------
# Board setup and utilities
# -----------------------------
def empty_board() -> Board:
    return np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)


def initial_board() -> Board:
    """Four discs in the centre, White on the main diagonal."""
    b = empty_board()
    b[3, 3] = WHITE
    b[3, 4] = BLACK
    b[4, 3] = BLACK
    b[4, 4] = WHITE
    return b


def cell_at(board: Board, pos: Position) -> int:
    """Bounds-checked lookup; off-board cells read as EMPTY."""
    r, c = pos
    if not in_bounds(r, c):
        return EMPTY
    return int(board[r, c])


def is_empty(board: Board, pos: Position) -> bool:
    return cell_at(board, pos) == EMPTY


def clone_board(board: Board) -> Board:
    return board.copy()


def count_discs(board: Board) -> Dict[Color, int]:
    return {
        BLACK: int(np.count_nonzero(board == BLACK)),
        WHITE: int(np.count_nonzero(board == WHITE)),
    }


def _run_to_flip(grid: Grid, row: int, col: int, dr: int, dc: int,
                 color: Color) -> List[Position]:
    """Opponent discs captured in one direction from (row, col), or []."""
    run: List[Position] = []
    r, c = row + dr, col + dc
    while in_bounds(r, c) and grid[r][c] == -color:
        run.append((r, c))
        r += dr
        c += dc
    if run and in_bounds(r, c) and grid[r][c] == color:
        return run
    return []


def _flanks(grid: Grid, row: int, col: int, color: Color) -> bool:
    return any(_run_to_flip(grid, row, col, dr, dc, color) for dr, dc in DIRECTIONS)


# -----------------------------
# Move generation
# -----------------------------
class OthelloMoveGenerator:
    """Generates disc placements for a given board and color."""

    def is_legal(self, board: Board, pos: Position, color: Color) -> bool:
        r, c = pos
        if not in_bounds(r, c) or board[r, c] != EMPTY:
            return False
        return _flanks(board.tolist(), r, c, color)

    def generate(self, board: Board, color: Color) -> List[Position]:
        grid = board.tolist()
        return [(r, c) for r, c in all_positions()
                if grid[r][c] == EMPTY and _flanks(grid, r, c, color)]


_generator = OthelloMoveGenerator()


# -----------------------------
# Applying moves
# -----------------------------
def apply_move(board: Board, pos: Position, color: Color) -> Tuple[Board, List[Position]]:
    """Place a disc of `color` at `pos`; return the new board and flipped cells."""
    grid = board.tolist()
    r, c = pos
    flipped: List[Position] = []
    for dr, dc in DIRECTIONS:
        flipped.extend(_run_to_flip(grid, r, c, dr, dc, color))
    nb = clone_board(board)
    nb[r, c] = color
    for fr, fc in flipped:
        nb[fr, fc] = color
    return nb, flipped


# Convenience functional API

def generate_moves(board: Board, color: Color) -> List[Position]:
    return _generator.generate(board, color)


def has_legal_move(board: Board, color: Color) -> bool:
    return bool(_generator.generate(board, color))
