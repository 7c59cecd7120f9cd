"""
Progression - Fragment drops, artifact crafting and player progress.

Independent of the engine's move logic: the caller hands over a finished
game and gets back updated progress and the rolled reward.
"""

from .fragments import (
    FRAGMENT_TEMPLATES,
    LOSS_DROP_RATES,
    RARITY_ORDER,
    WIN_DROP_RATES,
    DropRates,
    Fragment,
    Rarity,
    drop_chances,
    generate_fragment,
    roll_fragment_drop,
)
from .artifacts import (
    ARTIFACT_TEMPLATES,
    FRAGMENT_REQUIREMENTS,
    Artifact,
    ArtifactAlreadyCraftedError,
    ArtifactProgress,
    ArtifactTemplate,
    InsufficientFragmentsError,
    can_complete_artifact,
    complete_artifact,
    get_artifact_progress,
    get_next_craftable_artifact,
    get_rarity_color,
)
from .progress import PlayerProgress, craft_artifact, record_game_result

__all__ = [
    "FRAGMENT_TEMPLATES",
    "LOSS_DROP_RATES",
    "RARITY_ORDER",
    "WIN_DROP_RATES",
    "DropRates",
    "Fragment",
    "Rarity",
    "drop_chances",
    "generate_fragment",
    "roll_fragment_drop",
    "ARTIFACT_TEMPLATES",
    "FRAGMENT_REQUIREMENTS",
    "Artifact",
    "ArtifactAlreadyCraftedError",
    "ArtifactProgress",
    "ArtifactTemplate",
    "InsufficientFragmentsError",
    "can_complete_artifact",
    "complete_artifact",
    "get_artifact_progress",
    "get_next_craftable_artifact",
    "get_rarity_color",
    "PlayerProgress",
    "craft_artifact",
    "record_game_result",
]
