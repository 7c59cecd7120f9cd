"""
Player Progress - Aggregate counters, fragment inventory and artifact
collection for one player.

PlayerProgress is the unit of persistence. All updates return a new
value; nothing here touches storage.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging
import random

from ..engine_core.state import GameState
from .fragments import Fragment, Rarity, roll_fragment_drop
from .artifacts import Artifact, complete_artifact

logger = logging.getLogger(__name__)


@dataclass
class PlayerProgress:
    """
    Everything that survives between games.

    current_streak counts consecutive won games; best_streak is its maximum.
    """
    games_played: int = 0
    games_won: int = 0
    total_score: int = 0
    current_streak: int = 0
    best_streak: int = 0
    fragments: list[Fragment] = field(default_factory=list)
    artifacts: list[Artifact] = field(default_factory=list)

    def _copy_with(self, **kwargs) -> PlayerProgress:
        """Create a copy with some fields replaced."""
        return PlayerProgress(
            games_played=kwargs.get("games_played", self.games_played),
            games_won=kwargs.get("games_won", self.games_won),
            total_score=kwargs.get("total_score", self.total_score),
            current_streak=kwargs.get("current_streak", self.current_streak),
            best_streak=kwargs.get("best_streak", self.best_streak),
            fragments=kwargs.get("fragments", self.fragments),
            artifacts=kwargs.get("artifacts", self.artifacts),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "games_played": self.games_played,
            "games_won": self.games_won,
            "total_score": self.total_score,
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "fragments": [f.to_dict() for f in self.fragments],
            "artifacts": [a.to_dict() for a in self.artifacts],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerProgress:
        """Create from the persisted format. Missing counters default to 0."""
        return cls(
            games_played=data.get("games_played", 0),
            games_won=data.get("games_won", 0),
            total_score=data.get("total_score", 0),
            current_streak=data.get("current_streak", 0),
            best_streak=data.get("best_streak", 0),
            fragments=[Fragment.from_dict(f) for f in data.get("fragments", [])],
            artifacts=[Artifact.from_dict(a) for a in data.get("artifacts", [])],
        )


def record_game_result(
    progress: PlayerProgress,
    state: GameState,
    rng: random.Random | None = None,
) -> tuple[PlayerProgress, Fragment | None]:
    """
    Fold a finished game into the player's progress and roll its reward.

    A win extends the win streak and rolls with it; a loss resets the
    streak and rolls on the loss table with streak 0.

    Returns:
        (updated progress, dropped fragment or None)

    Raises:
        ValueError: if the game has not finished
    """
    if not state.is_terminal:
        raise ValueError(f"Game is still {state.phase.value}; only finished games can be recorded")

    if state.won:
        new_streak = progress.current_streak + 1
        fragment = roll_fragment_drop(True, new_streak, rng)
        updated = progress._copy_with(
            games_played=progress.games_played + 1,
            games_won=progress.games_won + 1,
            total_score=progress.total_score + state.score,
            current_streak=new_streak,
            best_streak=max(new_streak, progress.best_streak),
        )
    else:
        fragment = roll_fragment_drop(False, 0, rng)
        updated = progress._copy_with(
            games_played=progress.games_played + 1,
            total_score=progress.total_score + state.score,
            current_streak=0,
        )

    if fragment:
        updated = updated._copy_with(fragments=list(progress.fragments) + [fragment])
        logger.info("Fragment dropped: %s (%s)", fragment.name, fragment.rarity.value)

    return updated, fragment


def craft_artifact(
    progress: PlayerProgress,
    rarity: Rarity,
) -> tuple[PlayerProgress, Artifact]:
    """
    Craft the artifact of a rarity into the player's collection.

    Raises:
        InsufficientFragmentsError: if the rarity's requirement is not met
        ArtifactAlreadyCraftedError: if the artifact is already owned
    """
    remaining, artifact = complete_artifact(
        progress.fragments,
        rarity,
        completed_artifacts=progress.artifacts,
    )
    updated = progress._copy_with(
        fragments=remaining,
        artifacts=list(progress.artifacts) + [artifact],
    )
    logger.info("Crafted artifact %s", artifact.artifact_id)
    return updated, artifact
