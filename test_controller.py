from __future__ import annotations

import threading

import numpy as np
import pytest

from boardai import chess_moves as cm
from boardai import othello_moves as om
from boardai.game import (
    TurnController, Phase, STATUS_YOUR_TURN,
)
from boardai.game.constants import (
    STATUS_YOU_WIN_MATE, STATUS_AI_PASSES, STATUS_YOU_WIN, STATUS_NO_MOVE,
    STATUS_YOU_PASS, STATUS_AI_WINS, STATUS_STALEMATE, STATUS_AI_FAILED,
)
from boardai.search import AlphaBetaSearchStrategy, SearchResult, SearchStrategy


class BlockingStrategy(SearchStrategy):
    """Holds the AI turn until released."""

    def __init__(self) -> None:
        self.release = threading.Event()
        self.started = threading.Event()
        self._inner = AlphaBetaSearchStrategy()

    def search(self, variant, board, depth):
        self.started.set()
        self.release.wait(timeout=10)
        return self._inner.search(variant, board, depth)


class RecordingStrategy(SearchStrategy):
    """Notes the controller status each time a search starts."""

    def __init__(self) -> None:
        self.controller = None
        self.statuses = []
        self._inner = AlphaBetaSearchStrategy()

    def search(self, variant, board, depth):
        self.statuses.append(self.controller.state.status)
        return self._inner.search(variant, board, depth)


class NoMoveStrategy(SearchStrategy):
    def search(self, variant, board, depth):
        return SearchResult(0, None)


class FailingStrategy(SearchStrategy):
    def search(self, variant, board, depth):
        raise RuntimeError("boom")


def make(game, depth=2, strategy=None):
    return TurnController(game, depth=depth, think_delay=0.0, strategy=strategy)


def test_chess_human_move_then_ai_reply():
    ctl = make("chess")
    try:
        assert ctl.phase is Phase.HUMAN_TO_MOVE
        assert ctl.select_square((6, 4)) is False  # selection only
        snap = ctl.snapshot()
        assert snap.selected == (6, 4)
        assert set(snap.destinations) == {(5, 4), (4, 4)}

        assert ctl.select_square((4, 4)) is True
        ctl.wait()
        assert ctl.phase is Phase.HUMAN_TO_MOVE
        board = ctl.state.board
        assert board[4][4] == cm.Piece(cm.PAWN, cm.WHITE)
        assert board[6][4] is None
        # The AI replied with one of its own pieces
        reply = ctl.state.last_move
        assert isinstance(reply, cm.ChessMove)
        assert board[reply.target[0]][reply.target[1]].color == cm.BLACK
        assert ctl.state.current_player == cm.WHITE
        assert ctl.state.status == STATUS_YOUR_TURN
    finally:
        ctl.shutdown()


def test_chess_selection_rules():
    ctl = make("chess")
    try:
        # Enemy piece and empty squares do not select
        assert ctl.select_square((1, 0)) is False
        assert ctl.moves.selected is None
        ctl.select_square((7, 1))
        assert set(ctl.snapshot().destinations) == {(5, 0), (5, 2)}
        # Reselect another own piece
        ctl.select_square((6, 0))
        assert ctl.moves.selected == (6, 0)
        # Non-destination clears the selection
        assert ctl.select_square((3, 3)) is False
        assert ctl.select_square((8, 0)) is False
        assert ctl.select_square((-1, 2)) is False
        assert ctl.moves.selected is None
        assert ctl.state.board == cm.initial_board()
    finally:
        ctl.shutdown()


def test_human_checkmate_ends_game():
    ctl = make("chess")
    try:
        board = cm.empty_board()
        board[0][0] = cm.Piece(cm.KING, cm.BLACK)
        board[2][1] = cm.Piece(cm.KING, cm.WHITE)
        board[7][6] = cm.Piece(cm.QUEEN, cm.WHITE)
        ctl.state.board = board
        ctl.select_square((7, 6))
        assert ctl.select_square((0, 6)) is True
        assert ctl.phase is Phase.GAME_OVER
        assert ctl.state.winner == cm.WHITE
        assert ctl.state.status == STATUS_YOU_WIN_MATE
        # Input after game over is ignored
        assert ctl.select_square((2, 1)) is False
        assert ctl.reset() is True
        assert ctl.phase is Phase.HUMAN_TO_MOVE
        assert ctl.state.board == cm.initial_board()
    finally:
        ctl.shutdown()


def test_capture_bookkeeping():
    ctl = make("chess")
    try:
        board = cm.empty_board()
        board[7][4] = cm.Piece(cm.KING, cm.WHITE)
        board[0][4] = cm.Piece(cm.KING, cm.BLACK)
        board[4][5] = cm.Piece(cm.ROOK, cm.WHITE)
        board[4][0] = cm.Piece(cm.KNIGHT, cm.BLACK)
        ctl.state.board = board
        ctl.select_square((4, 5))
        assert ctl.select_square((4, 0)) is True
        ctl.wait()
        assert ctl.snapshot().captured[cm.WHITE] == (cm.Piece(cm.KNIGHT, cm.BLACK),)
    finally:
        ctl.shutdown()


def test_input_ignored_while_ai_thinking():
    strategy = BlockingStrategy()
    ctl = make("othello", depth=2, strategy=strategy)
    try:
        assert ctl.select_square((2, 3)) is True
        assert strategy.started.wait(timeout=5)
        assert ctl.phase is Phase.AI_THINKING
        assert ctl.snapshot().thinking is True

        before = ctl.state.board.copy()
        assert ctl.select_square((2, 2)) is False
        assert ctl.reset() is False
        assert ctl.set_difficulty(4) is False
        assert np.array_equal(ctl.state.board, before)

        strategy.release.set()
        ctl.wait()
        assert ctl.phase is Phase.HUMAN_TO_MOVE
        assert ctl.state.tally[om.WHITE] >= 2
        assert sum(ctl.state.tally.values()) == 6
    finally:
        strategy.release.set()
        ctl.shutdown()


def test_othello_pass_and_game_over():
    ctl = make("othello")
    try:
        board = om.empty_board()
        board[0, 0] = om.BLACK
        board[0, 1] = om.WHITE
        board[7, 6] = om.WHITE
        board[7, 7] = om.BLACK
        ctl.state.board = board

        assert set(ctl.snapshot().destinations) == {(0, 2), (7, 5)}
        assert ctl.select_square((0, 2)) is True
        # White has no placement, so the human moves again
        assert ctl.phase is Phase.HUMAN_TO_MOVE
        assert ctl.state.status == STATUS_AI_PASSES
        assert ctl.state.current_player == om.BLACK

        assert ctl.select_square((7, 5)) is True
        assert ctl.phase is Phase.GAME_OVER
        assert ctl.state.winner == om.BLACK
        assert ctl.state.status == STATUS_YOU_WIN
        assert ctl.state.tally == {om.BLACK: 6, om.WHITE: 0}
    finally:
        ctl.shutdown()


def test_illegal_othello_placement_is_noop():
    ctl = make("othello")
    try:
        assert ctl.select_square((0, 0)) is False
        assert ctl.select_square((3, 3)) is False
        assert ctl.phase is Phase.HUMAN_TO_MOVE
        assert np.array_equal(ctl.state.board, om.initial_board())
    finally:
        ctl.shutdown()


def test_reset_is_deterministic():
    for game in ("chess", "othello"):
        ctl = make(game)
        try:
            ctl.reset()
            first = ctl.snapshot().board
            ctl.reset()
            second = ctl.snapshot().board
            if game == "othello":
                assert np.array_equal(first, second)
                assert first.tobytes() == second.tobytes()
            else:
                assert first == second
        finally:
            ctl.shutdown()


def test_difficulty_levels():
    ctl = make("chess", depth=3)
    try:
        assert ctl.set_difficulty(5) is True
        assert ctl.state.depth == 5
        assert ctl.set_difficulty(6) is False
        assert ctl.state.depth == 5
    finally:
        ctl.shutdown()

    with pytest.raises(ValueError):
        TurnController("othello", depth=3, think_delay=0.0)
    with pytest.raises(ValueError):
        TurnController("go")


def test_search_without_move_ends_game():
    ctl = make("othello", strategy=NoMoveStrategy())
    try:
        ctl.select_square((2, 3))
        ctl.wait()
        assert ctl.phase is Phase.GAME_OVER
        assert ctl.state.status == STATUS_NO_MOVE
        assert ctl.state.winner is None
    finally:
        ctl.shutdown()


def test_failed_search_is_reraised_then_recoverable():
    ctl = make("othello", strategy=FailingStrategy())
    try:
        ctl.select_square((2, 3))
        with pytest.raises(RuntimeError):
            ctl.wait()
        assert ctl.phase is Phase.GAME_OVER
        assert ctl.state.status == STATUS_AI_FAILED
        assert ctl.state.winner is None
        # Reported once, then the session is usable again
        ctl.wait()
        assert ctl.reset() is True
        assert ctl.phase is Phase.HUMAN_TO_MOVE
        assert np.array_equal(ctl.state.board, om.initial_board())
    finally:
        ctl.shutdown()


def test_ai_moves_again_when_human_must_pass():
    strategy = RecordingStrategy()
    ctl = make("othello", strategy=strategy)
    strategy.controller = ctl
    try:
        board = om.empty_board()
        board[0, 1] = om.BLACK
        board[7, 1] = om.BLACK
        board[4, 4] = om.BLACK
        board[0, 0] = om.WHITE
        board[7, 0] = om.WHITE
        board[4, 5] = om.WHITE
        ctl.state.board = board

        assert ctl.select_square((4, 6)) is True
        ctl.wait()
        # Two AI searches in a row, the second after the human passed
        assert len(strategy.statuses) == 2
        assert strategy.statuses[1] == STATUS_YOU_PASS
        assert ctl.phase is Phase.GAME_OVER
        assert ctl.state.status == STATUS_AI_WINS
        assert ctl.state.winner == om.WHITE
        assert ctl.state.tally == {om.BLACK: 3, om.WHITE: 6}
        final = ctl.state.board
        assert final[0, 2] == om.WHITE and final[7, 2] == om.WHITE
    finally:
        ctl.shutdown()


def test_chess_stalemate_is_a_draw():
    ctl = make("chess")
    try:
        board = cm.empty_board()
        board[0][0] = cm.Piece(cm.KING, cm.BLACK)
        board[7][7] = cm.Piece(cm.KING, cm.WHITE)
        board[3][1] = cm.Piece(cm.QUEEN, cm.WHITE)
        ctl.state.board = board
        ctl.select_square((3, 1))
        assert ctl.select_square((2, 1)) is True
        assert ctl.phase is Phase.GAME_OVER
        assert ctl.state.status == STATUS_STALEMATE
        assert ctl.state.winner is None
        assert ctl.snapshot().game_over is True
    finally:
        ctl.shutdown()


@pytest.mark.parametrize("pos", [None, (1,), "ab", (1.5, 2), (True, 0), (2, 3, 4)])
def test_malformed_selection_is_ignored(pos):
    ctl = make("othello")
    try:
        assert ctl.select_square(pos) is False
        assert ctl.phase is Phase.HUMAN_TO_MOVE
        assert np.array_equal(ctl.state.board, om.initial_board())
    finally:
        ctl.shutdown()


def test_numpy_integer_selection_is_accepted():
    ctl = make("othello", strategy=NoMoveStrategy())
    try:
        assert ctl.select_square((np.int64(2), np.int64(3))) is True
        assert ctl.state.board[2, 3] == om.BLACK
        ctl.wait()
    finally:
        ctl.shutdown()
