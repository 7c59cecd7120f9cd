"""
Fragments - Collectible reward units dropped at the end of a game.

A fragment has a rarity tier and a name/icon/description picked from a
small per-tier template pool. Fragments are consumed in sets to craft
artifacts (see artifacts.py).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Any
import random
import uuid


@total_ordering
class Rarity(Enum):
    """Fragment and artifact tiers, common < rare < epic < legendary."""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def tier(self) -> int:
        return RARITY_ORDER.index(self)

    def __lt__(self, other: Rarity) -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.tier < other.tier


RARITY_ORDER = (Rarity.COMMON, Rarity.RARE, Rarity.EPIC, Rarity.LEGENDARY)


@dataclass(frozen=True)
class DropRates:
    """Per-tier drop probabilities for one game outcome."""
    common: float
    rare: float
    epic: float
    legendary: float

    def for_rarity(self, rarity: Rarity) -> float:
        return getattr(self, rarity.value)


WIN_DROP_RATES = DropRates(common=0.70, rare=0.22, epic=0.07, legendary=0.01)
LOSS_DROP_RATES = DropRates(common=0.40, rare=0.10, epic=0.0, legendary=0.0)

# Multiplier on every tier once the win streak reaches STREAK_BONUS_THRESHOLD
STREAK_BONUS = 1.10
STREAK_BONUS_THRESHOLD = 3

# Rarest first, so the narrow intervals sit at the bottom of [0, 1)
ROLL_ORDER = (Rarity.LEGENDARY, Rarity.EPIC, Rarity.RARE, Rarity.COMMON)


@dataclass(frozen=True)
class FragmentTemplate:
    name: str
    icon: str
    description: str


FRAGMENT_TEMPLATES: dict[Rarity, tuple[FragmentTemplate, ...]] = {
    Rarity.COMMON: (
        FragmentTemplate("Sand Grain", "🏜️", "Ancient desert sand"),
        FragmentTemplate("Pottery Shard", "🏺", "Broken ceramic piece"),
        FragmentTemplate("Stone Chip", "🪨", "Weathered stone fragment"),
    ),
    Rarity.RARE: (
        FragmentTemplate("Bronze Coin", "🪙", "Ancient currency"),
        FragmentTemplate("Hieroglyph Tablet", "📜", "Carved symbols"),
        FragmentTemplate("Golden Thread", "✨", "Royal textile remnant"),
    ),
    Rarity.EPIC: (
        FragmentTemplate("Scarab Amulet", "🪲", "Sacred beetle charm"),
        FragmentTemplate("Pharaoh's Seal", "💍", "Royal signet"),
        FragmentTemplate("Obelisk Piece", "🗿", "Monument fragment"),
    ),
    Rarity.LEGENDARY: (
        FragmentTemplate("Sun Stone", "☀️", "Radiant ancient relic"),
        FragmentTemplate("Ankh Key", "⚱️", "Symbol of eternal life"),
        FragmentTemplate("Crown Fragment", "👑", "Lost royal treasure"),
    ),
}


@dataclass(frozen=True)
class Fragment:
    """A collected fragment. Immutable once created."""
    fragment_id: str
    rarity: Rarity
    name: str
    description: str
    icon: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "fragment_id": self.fragment_id,
            "rarity": self.rarity.value,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Fragment:
        return cls(
            fragment_id=data["fragment_id"],
            rarity=Rarity(data["rarity"]),
            name=data["name"],
            description=data.get("description", ""),
            icon=data.get("icon", ""),
        )


def _new_id(rng: random.Random) -> str:
    """Random 128-bit identifier drawn from the given source."""
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def generate_fragment(rarity: Rarity, rng: random.Random | None = None) -> Fragment:
    """Create a fragment of the given tier from a random template."""
    rng = rng if rng is not None else random.Random()
    template = rng.choice(FRAGMENT_TEMPLATES[rarity])
    return Fragment(
        fragment_id=_new_id(rng),
        rarity=rarity,
        name=template.name,
        description=template.description,
        icon=template.icon,
    )


def drop_chances(is_win: bool, win_streak: int) -> dict[Rarity, float]:
    """Effective per-tier probabilities for a game outcome."""
    rates = WIN_DROP_RATES if is_win else LOSS_DROP_RATES
    bonus = STREAK_BONUS if win_streak >= STREAK_BONUS_THRESHOLD else 1.0
    return {rarity: rates.for_rarity(rarity) * bonus for rarity in ROLL_ORDER}


def roll_fragment_drop(
    is_win: bool,
    win_streak: int,
    rng: random.Random | None = None,
) -> Fragment | None:
    """
    Roll the end-of-game reward.

    One uniform draw in [0, 1) is compared against cumulative thresholds,
    legendary first. A win always drops something; a loss drops nothing
    half the time and never drops epic or legendary.

    Returns:
        The dropped Fragment, or None when no tier is hit
    """
    rng = rng if rng is not None else random.Random()
    roll = rng.random()

    cumulative = 0.0
    for rarity, chance in drop_chances(is_win, win_streak).items():
        cumulative += chance
        if roll < cumulative:
            return generate_fragment(rarity, rng)

    return None
