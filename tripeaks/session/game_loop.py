"""
Game Loop - Drives one session from deal to reward.

The loop:
1. Player asks for a play or a draw
2. Reducer validates and applies it
3. If the deal is now won or lost, the result is recorded in progress,
   the reward fragment is rolled and progress is saved
4. Repeat until the deal is over
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging

from ..engine_core.action import Action, ErrorCode
from ..engine_core.reducer import Reducer
from ..progression.fragments import Fragment
from ..progression.progress import record_game_result
from .manager import Session, SessionManager, SessionState

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_MOVE = "waiting_move"
    GAME_WON = "game_won"
    GAME_LOST = "game_lost"


@dataclass
class TurnResult:
    """
    Result of processing one move.
    """
    success: bool
    loop_state: LoopState

    changes: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    error_code: ErrorCode | None = None

    # Set on the move that finished the deal
    reward: Fragment | None = None
    progress_saved: bool | None = None


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session, manager)

        result = loop.play(card_id)
        if result.loop_state != LoopState.WAITING_MOVE:
            show_reward(result.reward)
    """

    def __init__(self, session: Session, manager: SessionManager, reducer: Reducer | None = None):
        self.session = session
        self.manager = manager
        self.reducer = reducer or Reducer()

    @property
    def state(self) -> LoopState:
        game_state = self.session.game_state
        if game_state.won:
            return LoopState.GAME_WON
        if game_state.lost:
            return LoopState.GAME_LOST
        return LoopState.WAITING_MOVE

    def play(self, card_id: str) -> TurnResult:
        """Play a tableau card onto the waste pile."""
        return self._process(Action.play(card_id))

    def draw(self) -> TurnResult:
        """Draw the next stock card."""
        return self._process(Action.draw())

    def _process(self, action: Action) -> TurnResult:
        result = self.reducer.apply(self.session.game_state, action)
        if not result.success:
            return TurnResult(
                success=False,
                loop_state=self.state,
                errors=[result.error] if result.error else [],
                error_code=result.error_code,
            )

        self.session.game_state = result.new_state
        turn = TurnResult(
            success=True,
            loop_state=self.state,
            changes=list(result.state_changes),
        )

        if result.new_state.is_terminal and not self.session.result_recorded:
            self._finish(turn)

        return turn

    def _finish(self, turn: TurnResult):
        """Record the finished deal in progress and roll the reward."""
        session = self.session
        progress, fragment = record_game_result(
            self.manager.progress,
            session.game_state,
            session.rng,
        )
        turn.progress_saved = self.manager.save_progress(progress)
        turn.reward = fragment

        session.reward = fragment
        session.result_recorded = True
        session.state = SessionState.GAME_OVER

        logger.info(
            "Session %s finished: %s, score %d",
            session.session_id,
            session.game_state.phase.value,
            session.game_state.score,
        )
