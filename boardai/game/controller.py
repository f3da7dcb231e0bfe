"""
Turn controller: the HumanToMove / AIThinking / GameOver state machine.
"""
from __future__ import annotations

from concurrent.futures import Future
from enum import Enum
from typing import Optional
import logging
import threading

from config import EngineSettings, get_engine_settings
from boardai.board import is_valid_position
from boardai.engine import GAMES, get_variant
from boardai.game.constants import DIFFICULTIES, STATUS_AI_FAILED
from boardai.game.engine_integration import EngineIntegration
from boardai.game.game_state import GameState, make_game_state
from boardai.game.move_manager import MoveManager
from boardai.search import SearchResult, SearchStrategy
from boardai.types import GameSnapshot, Position

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    HUMAN_TO_MOVE = "human_to_move"
    AI_THINKING = "ai_thinking"
    GAME_OVER = "game_over"


class TurnController:
    """Drives one game for a renderer.

    Inputs (`select_square`, `reset`, `set_difficulty`) are silent no-ops
    returning False when they do not apply, including every input received
    while the AI is thinking. AI turns start on their own.
    """

    def __init__(self, game: str = "chess", depth: Optional[int] = None,
                 think_delay: Optional[float] = None,
                 strategy: Optional[SearchStrategy] = None,
                 settings: Optional[EngineSettings] = None):
        if game not in GAMES:
            raise ValueError(f"Unknown game: {game}")
        settings = settings or get_engine_settings()
        depth = settings.depth_for(game) if depth is None else depth
        if depth not in DIFFICULTIES[game]:
            raise ValueError(f"{game} depth must be one of {sorted(DIFFICULTIES[game])}")
        if think_delay is None:
            think_delay = settings.think_delay_for(game)

        self.game = game
        self.variant = get_variant(game)
        self.state: GameState = make_game_state(self.variant, depth)
        self.moves = MoveManager(self.state)
        self.engine = EngineIntegration(strategy, think_delay)
        self.phase = Phase.HUMAN_TO_MOVE
        self._lock = threading.RLock()
        self._pending: Optional[Future] = None
        logger.info("New %s game at depth %d", game, depth)

    @property
    def thinking(self) -> bool:
        return self.phase is Phase.AI_THINKING

    def select_square(self, pos: Position) -> bool:
        """Handle a click; return True if it played a move."""
        if not is_valid_position(pos):
            logger.debug("Ignoring invalid selection %r", pos)
            return False
        pos = (int(pos[0]), int(pos[1]))
        with self._lock:
            if self.phase is not Phase.HUMAN_TO_MOVE:
                logger.debug("Ignoring selection %s while %s", pos, self.phase.value)
                return False
            move = self.moves.select(pos)
            if move is None or not self.state.make_move(move):
                return False
            logger.info("Human played %s", move)
            self._advance()
            return True

    def reset(self) -> bool:
        with self._lock:
            if self.phase is Phase.AI_THINKING:
                logger.debug("Ignoring reset while the AI is thinking")
                return False
            self.state.reset_game()
            self.moves.clear_selection()
            self.phase = Phase.HUMAN_TO_MOVE
            logger.info("New %s game at depth %d", self.game, self.state.depth)
            return True

    def set_difficulty(self, depth: int) -> bool:
        with self._lock:
            if self.phase is Phase.AI_THINKING:
                logger.debug("Ignoring difficulty change while the AI is thinking")
                return False
            if depth not in DIFFICULTIES[self.game]:
                logger.debug("Ignoring unsupported %s depth %s", self.game, depth)
                return False
            self.state.depth = depth
            logger.info("%s difficulty set to %s (depth %d)",
                        self.game, DIFFICULTIES[self.game][depth], depth)
            return True

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until no AI turn is pending; re-raises a failed search once."""
        while True:
            with self._lock:
                pending = self._pending
            if pending is None:
                return
            try:
                pending.result(timeout=timeout)
            except Exception:
                with self._lock:
                    if self._pending is pending and pending.done():
                        self._pending = None
                raise
            with self._lock:
                if self._pending is pending:
                    self._pending = None
                    return

    def shutdown(self) -> None:
        self.engine.shutdown()

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            state = self.state
            return GameSnapshot(
                game=self.game,
                board=state.get_board_copy(),
                current_player=state.current_player,
                phase=self.phase.value,
                status=state.status,
                depth=state.depth,
                thinking=self.thinking,
                game_over=state.game_over,
                winner=state.winner,
                selected=self.moves.selected,
                destinations=tuple(self.moves.destinations()),
                last_move=state.last_move,
                captured={c: tuple(p) for c, p in getattr(state, "captured", {}).items()},
                tally=dict(getattr(state, "tally", {})),
            )

    def _advance(self) -> None:
        """Pick the next phase after a move; must hold the lock."""
        self.moves.clear_selection()
        if self.state.game_over:
            self.phase = Phase.GAME_OVER
            logger.info("Game over: %s", self.state.status)
        elif self.state.current_player == self.state.ai_color:
            self.phase = Phase.AI_THINKING
            self._pending = self.engine.search_async(
                self.variant, self.state.board, self.state.depth,
                self._on_ai_result, self._on_ai_error,
            )
        else:
            self.phase = Phase.HUMAN_TO_MOVE

    def _on_ai_result(self, result: SearchResult, elapsed: float) -> None:
        with self._lock:
            self._pending = None
            if result.move is None:
                logger.warning("%s search returned no move", self.game)
                self.state.end_without_move()
            elif not self.state.make_move(result.move):
                logger.error("AI returned an illegal move %s", result.move)
                self.state.end_without_move()
            else:
                logger.info("AI played %s (score %s, %.2fs)", result.move, result.score, elapsed)
            self._advance()

    def _on_ai_error(self, exc: BaseException) -> None:
        with self._lock:
            self.state.end_without_move(STATUS_AI_FAILED)
            self.moves.clear_selection()
            self.phase = Phase.GAME_OVER
            logger.info("Game over: %s", self.state.status)
