import numpy as np
import pytest

from boardai import chess_moves as cm
from boardai import othello_moves as om
from boardai.engine import ChessVariant, OthelloVariant, MATE_SCORE, get_variant
from boardai.search import (
    INFINITY, SearchResult, SearchStats, alphabeta, minimax,
    AlphaBetaSearchStrategy, get_search_strategy,
)


def place(board, pos, kind, color):
    board[pos[0]][pos[1]] = cm.Piece(kind, color)


def small_chess_position():
    board = cm.empty_board()
    place(board, (7, 4), cm.KING, cm.WHITE)
    place(board, (7, 0), cm.ROOK, cm.WHITE)
    place(board, (5, 2), cm.KNIGHT, cm.WHITE)
    place(board, (6, 6), cm.PAWN, cm.WHITE)
    place(board, (0, 4), cm.KING, cm.BLACK)
    place(board, (2, 2), cm.BISHOP, cm.BLACK)
    place(board, (1, 5), cm.PAWN, cm.BLACK)
    return board


def test_depth_zero_is_static_evaluation():
    chess = ChessVariant()
    board = cm.initial_board()
    assert alphabeta(chess, board, 0, -INFINITY, INFINITY, True) == SearchResult(chess.evaluate(board), None)
    assert alphabeta(chess, board, 0, -INFINITY, INFINITY, False) == SearchResult(chess.evaluate(board), None)

    othello = OthelloVariant()
    board = om.initial_board()
    assert alphabeta(othello, board, 0) == SearchResult(othello.evaluate(board), None)


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_alphabeta_matches_minimax_on_othello(depth):
    variant = OthelloVariant()
    board = om.initial_board()
    board, _ = om.apply_move(board, (2, 3), om.BLACK)
    assert alphabeta(variant, board, depth).score == minimax(variant, board, depth).score

    board, _ = om.apply_move(board, (2, 2), om.WHITE)
    assert (alphabeta(variant, board, depth, maximizing=False).score ==
            minimax(variant, board, depth, maximizing=False).score)


@pytest.mark.parametrize("maximizing", [True, False])
def test_alphabeta_matches_minimax_on_small_chess_position(maximizing):
    variant = ChessVariant()
    board = small_chess_position()
    assert (alphabeta(variant, board, 2, maximizing=maximizing).score ==
            minimax(variant, board, 2, maximizing=maximizing).score)


def test_search_leaves_board_untouched():
    variant = ChessVariant()
    board = cm.initial_board()
    before = cm.clone_board(board)
    alphabeta(variant, board, 2)
    assert board == before

    variant = OthelloVariant()
    board = om.initial_board()
    before = board.copy()
    alphabeta(variant, board, 3, maximizing=False)
    assert np.array_equal(board, before)


def test_ai_finds_mate_in_one():
    board = cm.empty_board()
    place(board, (7, 0), cm.KING, cm.WHITE)
    place(board, (5, 1), cm.KING, cm.BLACK)
    place(board, (0, 6), cm.QUEEN, cm.BLACK)
    result = alphabeta(ChessVariant(), board, 2)
    assert result.score == MATE_SCORE
    after, _ = cm.apply_move(board, result.move)
    assert cm.checkmate(after, cm.WHITE)


def test_mated_side_to_move_scores_mate():
    board = cm.empty_board()
    place(board, (0, 0), cm.KING, cm.BLACK)
    place(board, (1, 1), cm.QUEEN, cm.WHITE)
    place(board, (2, 2), cm.KING, cm.WHITE)
    assert alphabeta(ChessVariant(), board, 2) == SearchResult(-MATE_SCORE, None)

    # Same shape with the human mated and the minimizing side to move
    board = cm.empty_board()
    place(board, (7, 7), cm.KING, cm.WHITE)
    place(board, (6, 6), cm.QUEEN, cm.BLACK)
    place(board, (5, 5), cm.KING, cm.BLACK)
    assert alphabeta(ChessVariant(), board, 2, maximizing=False) == SearchResult(MATE_SCORE, None)


def test_stalemate_scores_zero():
    board = cm.empty_board()
    place(board, (0, 0), cm.KING, cm.BLACK)
    place(board, (2, 1), cm.QUEEN, cm.WHITE)
    place(board, (7, 7), cm.KING, cm.WHITE)
    assert alphabeta(ChessVariant(), board, 3) == SearchResult(0, None)


def test_only_check_escape_is_chosen():
    board = cm.empty_board()
    place(board, (0, 0), cm.KING, cm.BLACK)
    place(board, (1, 1), cm.QUEEN, cm.WHITE)
    place(board, (7, 7), cm.KING, cm.WHITE)
    result = alphabeta(ChessVariant(), board, 1)
    assert result.move == cm.ChessMove((0, 0), (1, 1), cm.Piece(cm.QUEEN, cm.WHITE))


def test_othello_without_moves_returns_evaluation():
    variant = OthelloVariant()
    board = om.empty_board()
    board[0, 0] = om.WHITE
    board[7, 7] = om.BLACK
    assert alphabeta(variant, board, 4) == SearchResult(variant.evaluate(board), None)


def test_strategy_collects_stats():
    strategy = get_search_strategy()
    assert isinstance(strategy, AlphaBetaSearchStrategy)
    result = strategy.search(get_variant("chess"), cm.initial_board(), 1)
    assert result.move in cm.legal_moves(cm.initial_board(), cm.BLACK)
    assert strategy.last_stats.nodes == 21
    assert strategy.last_stats.cutoffs == 0


def test_pruning_cuts_branches():
    variant = OthelloVariant()
    board = om.initial_board()
    stats = SearchStats()
    alphabeta(variant, board, 4, maximizing=False, stats=stats)
    assert stats.cutoffs > 0


def test_unknown_variant():
    with pytest.raises(ValueError):
        get_variant("checkers")


class CountingChessVariant(ChessVariant):
    def __init__(self):
        super().__init__()
        self.terminal_calls = 0

    def terminal_score(self, board, color, maximizing):
        self.terminal_calls += 1
        return super().terminal_score(board, color, maximizing)


def test_terminal_rules_only_checked_where_nothing_is_playable():
    variant = CountingChessVariant()
    alphabeta(variant, cm.initial_board(), 2)
    assert variant.terminal_calls == 0

    board = cm.empty_board()
    place(board, (0, 0), cm.KING, cm.BLACK)
    place(board, (1, 1), cm.QUEEN, cm.WHITE)
    place(board, (2, 2), cm.KING, cm.WHITE)
    assert alphabeta(variant, board, 3) == SearchResult(-MATE_SCORE, None)
    assert variant.terminal_calls == 1


def test_mate_found_below_the_root_matches_minimax():
    board = cm.empty_board()
    place(board, (7, 0), cm.KING, cm.WHITE)
    place(board, (5, 1), cm.KING, cm.BLACK)
    place(board, (0, 6), cm.QUEEN, cm.BLACK)
    variant = ChessVariant()
    assert alphabeta(variant, board, 2).score == minimax(variant, board, 2).score == MATE_SCORE
