"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Player starts a session -> a fresh deck is shuffled and dealt
2. During the game:
   - Player plays uncovered cards or draws from the stock
   - The reducer validates every move
3. Game reaches WON or LOST -> the result is folded into the player's
   progress, the reward is rolled, progress is saved
4. Session is ended and discarded; a new deal means a new session

PERSISTENCE RULES:
- Sessions are in-memory only
- Only persistence: player progress, through the ProgressStore
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import time
import uuid

from ..engine_core.deck import new_game
from ..engine_core.state import GameState
from ..progression.artifacts import Artifact
from ..progression.fragments import Fragment, Rarity
from ..progression.progress import PlayerProgress, craft_artifact
from ..storage import ProgressStore

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Deal won or lost, result recorded
    ABANDONED = "abandoned"  # Player quit


@dataclass
class Session:
    """
    An ephemeral game session: one deal.

    The session owns its random source, so a seeded session replays
    the same deal and the same reward roll.
    """
    session_id: str
    game_state: GameState
    created_at: float
    rng: random.Random = field(default_factory=random.Random)
    seed: int | None = None

    state: SessionState = SessionState.ACTIVE

    # Set once the deal finishes
    reward: Fragment | None = None
    result_recorded: bool = False

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state == SessionState.ACTIVE


class SessionManager:
    """
    Manages game sessions and the player's progress.

    Responsibilities:
    - Create sessions with freshly dealt games
    - Track active sessions
    - Hold the current PlayerProgress and save it through the store
    """

    def __init__(self, store: ProgressStore | None = None):
        self.store = store
        self._sessions: dict[str, Session] = {}
        self._progress: PlayerProgress | None = None

    @property
    def progress(self) -> PlayerProgress:
        """Current progress, loaded from the store on first use."""
        if self._progress is None:
            self._progress = self.store.load() if self.store else PlayerProgress()
        return self._progress

    def save_progress(self, progress: PlayerProgress) -> bool:
        """Replace the current progress and persist it."""
        self._progress = progress
        if not self.store:
            return True
        return self.store.save(progress)

    def craft(self, rarity: Rarity) -> Artifact:
        """
        Craft an artifact from the current inventory and save.

        Raises:
            InsufficientFragmentsError: not enough fragments of the rarity
            ArtifactAlreadyCraftedError: the artifact is already owned
        """
        progress, artifact = craft_artifact(self.progress, rarity)
        self.save_progress(progress)
        return artifact

    def create_session(self, seed: int | None = None) -> Session:
        """
        Create a new game session with a freshly dealt game.

        Args:
            seed: Optional seed for a reproducible deal

        Returns:
            New Session ready to play
        """
        rng = random.Random(seed)
        session = Session(
            session_id=str(uuid.uuid4()),
            game_state=new_game(rng),
            created_at=time.time(),
            rng=rng,
            seed=seed,
        )
        self._sessions[session.session_id] = session
        logger.info("Session %s created (seed=%s)", session.session_id, seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it from memory.

        Returns False if the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        if session.state == SessionState.ACTIVE:
            session.state = SessionState.ABANDONED
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Drop finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
