from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Optional, Dict

from boardai.board import BOARD_SIZE, in_bounds
from boardai.types import Color, Position

WHITE: Color = 1
BLACK: Color = -1

PAWN = "pawn"
ROOK = "rook"
KNIGHT = "knight"
BISHOP = "bishop"
QUEEN = "queen"
KING = "king"


@dataclass(frozen=True)
class Piece:
    kind: str
    color: Color


@dataclass(frozen=True)
class ChessMove:
    source: Position
    target: Position
    captured: Optional[Piece] = None


Board = List[List[Optional[Piece]]]

# White moves toward row 0 and starts its pawns on row 6
PAWN_DIRECTION: Dict[Color, int] = {WHITE: -1, BLACK: 1}
PAWN_START_ROW: Dict[Color, int] = {WHITE: 6, BLACK: 1}

ROOK_DIRS: List[Tuple[int, int]] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
BISHOP_DIRS: List[Tuple[int, int]] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
QUEEN_DIRS: List[Tuple[int, int]] = ROOK_DIRS + BISHOP_DIRS
KNIGHT_OFFSETS: List[Tuple[int, int]] = [
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
]
KING_OFFSETS: List[Tuple[int, int]] = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
]

_SLIDE_DIRS: Dict[str, List[Tuple[int, int]]] = {
    ROOK: ROOK_DIRS,
    BISHOP: BISHOP_DIRS,
    QUEEN: QUEEN_DIRS,
}
_STEP_OFFSETS: Dict[str, List[Tuple[int, int]]] = {
    KNIGHT: KNIGHT_OFFSETS,
    KING: KING_OFFSETS,
}

_BACK_RANK = [ROOK, KNIGHT, BISHOP, QUEEN, KING, BISHOP, KNIGHT, ROOK]


# -----------------------------
# Board setup and utilities
# -----------------------------
def empty_board() -> Board:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def initial_board() -> Board:
    """Standard layout: Black on rows 0..1, White on rows 6..7."""
    b = empty_board()
    for col in range(BOARD_SIZE):
        b[1][col] = Piece(PAWN, BLACK)
        b[6][col] = Piece(PAWN, WHITE)
        b[0][col] = Piece(_BACK_RANK[col], BLACK)
        b[7][col] = Piece(_BACK_RANK[col], WHITE)
    return b


def piece_at(board: Board, pos: Position) -> Optional[Piece]:
    """Bounds-checked lookup; off-board squares read as empty."""
    r, c = pos
    if not in_bounds(r, c):
        return None
    return board[r][c]


def is_empty(board: Board, pos: Position) -> bool:
    return piece_at(board, pos) is None


def clone_board(board: Board) -> Board:
    # Pieces are frozen, copying the rows is enough to avoid aliasing
    return [row[:] for row in board]


def count_material(board: Board) -> Dict[Color, int]:
    """Number of pieces per color."""
    counts = {WHITE: 0, BLACK: 0}
    for row in board:
        for p in row:
            if p is not None:
                counts[p.color] += 1
    return counts


# -----------------------------
# Move generation
# -----------------------------
class ChessMoveGenerator:
    """Generates pseudo-legal moves for a given board and color.

    King safety is not checked here; callers filter with `leaves_king_in_check`
    where it matters. Mobility counting and attack detection rely on the raw
    set.
    """

    def _target_move(self, board: Board, src: Position, r: int, c: int,
                     color: Color) -> Optional[ChessMove]:
        if not in_bounds(r, c):
            return None
        target = board[r][c]
        if target is None:
            return ChessMove(src, (r, c))
        if target.color != color:
            return ChessMove(src, (r, c), target)
        return None

    def _gen_pawn_moves(self, board: Board, src: Position, color: Color) -> List[ChessMove]:
        row, col = src
        step = PAWN_DIRECTION[color]
        moves: List[ChessMove] = []
        one = row + step
        if in_bounds(one, col) and board[one][col] is None:
            moves.append(ChessMove(src, (one, col)))
            two = row + 2 * step
            if row == PAWN_START_ROW[color] and in_bounds(two, col) and board[two][col] is None:
                moves.append(ChessMove(src, (two, col)))
        for dc in (-1, 1):
            r, c = one, col + dc
            if in_bounds(r, c):
                target = board[r][c]
                if target is not None and target.color != color:
                    moves.append(ChessMove(src, (r, c), target))
        return moves

    def _gen_sliding_moves(self, board: Board, src: Position, color: Color,
                           dirs: List[Tuple[int, int]]) -> List[ChessMove]:
        row, col = src
        moves: List[ChessMove] = []
        for dr, dc in dirs:
            r, c = row + dr, col + dc
            while in_bounds(r, c):
                target = board[r][c]
                if target is None:
                    moves.append(ChessMove(src, (r, c)))
                else:
                    if target.color != color:
                        moves.append(ChessMove(src, (r, c), target))
                    break
                r += dr
                c += dc
        return moves

    def _gen_step_moves(self, board: Board, src: Position, color: Color,
                        offsets: List[Tuple[int, int]]) -> List[ChessMove]:
        row, col = src
        moves: List[ChessMove] = []
        for dr, dc in offsets:
            mv = self._target_move(board, src, row + dr, col + dc, color)
            if mv is not None:
                moves.append(mv)
        return moves

    def moves_from(self, board: Board, src: Position) -> List[ChessMove]:
        """Pseudo-legal moves of the piece standing on `src`."""
        piece = piece_at(board, src)
        if piece is None:
            return []
        if piece.kind == PAWN:
            return self._gen_pawn_moves(board, src, piece.color)
        if piece.kind in _SLIDE_DIRS:
            return self._gen_sliding_moves(board, src, piece.color, _SLIDE_DIRS[piece.kind])
        return self._gen_step_moves(board, src, piece.color, _STEP_OFFSETS[piece.kind])

    def generate(self, board: Board, color: Color) -> List[ChessMove]:
        moves: List[ChessMove] = []
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                p = board[r][c]
                if p is not None and p.color == color:
                    moves.extend(self.moves_from(board, (r, c)))
        return moves


_generator = ChessMoveGenerator()


# -----------------------------
# Applying moves
# -----------------------------
def apply_move(board: Board, move: ChessMove) -> Tuple[Board, Optional[Piece]]:
    """Return the board after `move` and the piece it displaced, if any."""
    nb = clone_board(board)
    sr, sc = move.source
    tr, tc = move.target
    piece = nb[sr][sc]
    captured = nb[tr][tc]
    nb[tr][tc] = piece
    nb[sr][sc] = None
    return nb, captured


# -----------------------------
# Check detection
# -----------------------------
def find_king(board: Board, color: Color) -> Position:
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            p = board[r][c]
            if p is not None and p.kind == KING and p.color == color:
                return (r, c)
    raise AssertionError(f"no king of color {color} on the board")


def in_check(board: Board, color: Color) -> bool:
    """True if the king of `color` is a target of the opponent's pseudo-legal moves."""
    king = find_king(board, color)
    return any(m.target == king for m in _generator.generate(board, -color))


def leaves_king_in_check(board: Board, move: ChessMove, color: Color) -> bool:
    after, _ = apply_move(board, move)
    return in_check(after, color)


def checkmate(board: Board, color: Color) -> bool:
    if not in_check(board, color):
        return False
    for move in _generator.generate(board, color):
        if not leaves_king_in_check(board, move, color):
            return False
    return True


def legal_moves(board: Board, color: Color) -> List[ChessMove]:
    """Pseudo-legal moves that keep the mover's king safe."""
    return [m for m in _generator.generate(board, color)
            if not leaves_king_in_check(board, m, color)]


def legal_moves_from(board: Board, src: Position) -> List[ChessMove]:
    piece = piece_at(board, src)
    if piece is None:
        return []
    return [m for m in _generator.moves_from(board, src)
            if not leaves_king_in_check(board, m, piece.color)]


def has_legal_move(board: Board, color: Color) -> bool:
    for move in _generator.generate(board, color):
        if not leaves_king_in_check(board, move, color):
            return True
    return False


# Convenience functional API

def generate_moves(board: Board, color: Color) -> List[ChessMove]:
    return _generator.generate(board, color)
