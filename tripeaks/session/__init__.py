"""
Session Module - Manages ephemeral game sessions.

A session represents one deal:
- Created when the player starts a game
- Holds the current game state
- Records the result and rolls the reward when the deal ends
- Discarded afterwards

Sessions are EPHEMERAL. The only persistence is player progress.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
]
