"""
Action System - Actions, payloads, and results.

Actions represent the two player moves in TriPeaks:
1. Playing an uncovered tableau card onto the waste pile
2. Drawing the next stock card onto the waste pile

State changes requested by callers flow through actions and the reducer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    PLAY_CARD = "play_card"
    DRAW_STOCK = "draw_stock"


class ErrorCode(Enum):
    """Reasons the reducer rejects an action."""
    GAME_OVER = "GAME_OVER"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    CARD_NOT_PLAYABLE = "CARD_NOT_PLAYABLE"
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    NO_HANDLER = "NO_HANDLER"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Validation happens in the reducer.
    """
    card_id: str | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are validated before application and applied atomically
    by the reducer.
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def play(cls, card_id: str) -> Action:
        """Factory for a tableau play."""
        return cls(
            action_type=ActionType.PLAY_CARD,
            payload=ActionPayload(card_id=card_id),
        )

    @classmethod
    def draw(cls) -> Action:
        """Factory for a stock draw."""
        return cls(action_type=ActionType.DRAW_STOCK)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - Human-readable changes (for UI updates)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None

    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
