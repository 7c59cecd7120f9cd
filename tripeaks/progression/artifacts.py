"""
Artifacts - Permanent collection items crafted from fragments.

There is exactly one artifact template per rarity. Crafting consumes a
fixed number of fragments of that rarity (5/7/9/12).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Sequence

from .fragments import RARITY_ORDER, Fragment, Rarity

FRAGMENT_REQUIREMENTS: dict[Rarity, int] = {
    Rarity.COMMON: 5,
    Rarity.RARE: 7,
    Rarity.EPIC: 9,
    Rarity.LEGENDARY: 12,
}

RARITY_COLORS: dict[Rarity, str] = {
    Rarity.COMMON: "#9E9E9E",
    Rarity.RARE: "#2196F3",
    Rarity.EPIC: "#9C27B0",
    Rarity.LEGENDARY: "#FF9800",
}


class InsufficientFragmentsError(ValueError):
    """Raised when crafting without enough fragments of a rarity."""

    def __init__(self, rarity: Rarity, current: int, required: int):
        self.rarity = rarity
        self.current = current
        self.required = required
        super().__init__(
            f"Not enough {rarity.value} fragments: have {current}, need {required}"
        )


class ArtifactAlreadyCraftedError(ValueError):
    """Raised when crafting an artifact the player already owns."""

    def __init__(self, artifact_id: str):
        self.artifact_id = artifact_id
        super().__init__(f"Artifact '{artifact_id}' has already been crafted")


@dataclass(frozen=True)
class ArtifactTemplate:
    """Fixed definition of a craftable artifact."""
    artifact_id: str
    name: str
    description: str
    rarity: Rarity
    icon: str
    effect: str


# Declared order is the order get_next_craftable_artifact() checks in
ARTIFACT_TEMPLATES: tuple[ArtifactTemplate, ...] = (
    ArtifactTemplate(
        artifact_id="sun-stone-tablet",
        name="Sun Stone Tablet",
        description="Grants bonus coins from victories",
        rarity=Rarity.COMMON,
        icon="☀️",
        effect="+5% coins",
    ),
    ArtifactTemplate(
        artifact_id="moon-scarab",
        name="Moon Scarab",
        description="Increases fragment drop rate",
        rarity=Rarity.RARE,
        icon="🌙",
        effect="+10% fragments",
    ),
    ArtifactTemplate(
        artifact_id="desert-wind-charm",
        name="Desert Wind Charm",
        description="Daily free undo",
        rarity=Rarity.EPIC,
        icon="🌪️",
        effect="1 free undo/day",
    ),
    ArtifactTemplate(
        artifact_id="lost-crown",
        name="Lost Crown of the Sands",
        description="Unlocks special desert theme",
        rarity=Rarity.LEGENDARY,
        icon="👑",
        effect="Special theme",
    ),
)


@dataclass(frozen=True)
class Artifact:
    """
    An artifact record.

    completed=True for crafted artifacts in the collection;
    completed=False for a "ready to craft" projection.
    """
    artifact_id: str
    name: str
    description: str
    rarity: Rarity
    icon: str
    effect: str
    required_fragments: int
    current_fragments: int
    completed: bool

    @classmethod
    def from_template(
        cls,
        template: ArtifactTemplate,
        current_fragments: int,
        completed: bool,
    ) -> Artifact:
        return cls(
            artifact_id=template.artifact_id,
            name=template.name,
            description=template.description,
            rarity=template.rarity,
            icon=template.icon,
            effect=template.effect,
            required_fragments=FRAGMENT_REQUIREMENTS[template.rarity],
            current_fragments=current_fragments,
            completed=completed,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "artifact_id": self.artifact_id,
            "name": self.name,
            "description": self.description,
            "rarity": self.rarity.value,
            "icon": self.icon,
            "effect": self.effect,
            "required_fragments": self.required_fragments,
            "current_fragments": self.current_fragments,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Artifact:
        rarity = Rarity(data["rarity"])
        required = data.get("required_fragments", FRAGMENT_REQUIREMENTS[rarity])
        return cls(
            artifact_id=data["artifact_id"],
            name=data["name"],
            description=data.get("description", ""),
            rarity=rarity,
            icon=data.get("icon", ""),
            effect=data.get("effect", ""),
            required_fragments=required,
            current_fragments=data.get("current_fragments", required),
            completed=data.get("completed", True),
        )


@dataclass(frozen=True)
class ArtifactProgress:
    """Owned vs. required fragment count for one rarity."""
    current: int
    required: int

    @property
    def ready(self) -> bool:
        return self.current >= self.required


def get_template(rarity: Rarity) -> ArtifactTemplate:
    """The single artifact template for a rarity."""
    for template in ARTIFACT_TEMPLATES:
        if template.rarity == rarity:
            return template
    raise KeyError(f"No artifact template for rarity {rarity.value}")


def count_fragments(fragments: Sequence[Fragment], rarity: Rarity) -> int:
    return sum(1 for f in fragments if f.rarity == rarity)


def can_complete_artifact(fragments: Sequence[Fragment], rarity: Rarity) -> bool:
    """True when the inventory holds enough fragments of the rarity."""
    return count_fragments(fragments, rarity) >= FRAGMENT_REQUIREMENTS[rarity]


def complete_artifact(
    fragments: Sequence[Fragment],
    rarity: Rarity,
    completed_artifacts: Sequence[Artifact] | None = None,
) -> tuple[list[Fragment], Artifact]:
    """
    Craft the artifact of a rarity, consuming fragments.

    The first `required` fragments of that rarity, in inventory order,
    are removed; every other fragment keeps its place.

    Args:
        fragments: Current inventory
        rarity: Tier to craft
        completed_artifacts: Owned artifacts. When given, crafting an
            artifact that is already owned is rejected.

    Returns:
        (remaining inventory, crafted artifact)

    Raises:
        InsufficientFragmentsError: if the rarity's requirement is not met
        ArtifactAlreadyCraftedError: if completed_artifacts already holds it
    """
    template = get_template(rarity)
    required = FRAGMENT_REQUIREMENTS[rarity]

    if completed_artifacts is not None and any(
        a.artifact_id == template.artifact_id for a in completed_artifacts
    ):
        raise ArtifactAlreadyCraftedError(template.artifact_id)

    available = count_fragments(fragments, rarity)
    if available < required:
        raise InsufficientFragmentsError(rarity, available, required)

    remaining: list[Fragment] = []
    to_consume = required
    for fragment in fragments:
        if to_consume and fragment.rarity == rarity:
            to_consume -= 1
            continue
        remaining.append(fragment)

    artifact = Artifact.from_template(template, current_fragments=required, completed=True)
    return remaining, artifact


def get_artifact_progress(fragments: Sequence[Fragment]) -> dict[Rarity, ArtifactProgress]:
    """Owned and required fragment counts for every rarity."""
    return {
        rarity: ArtifactProgress(
            current=count_fragments(fragments, rarity),
            required=FRAGMENT_REQUIREMENTS[rarity],
        )
        for rarity in RARITY_ORDER
    }


def get_next_craftable_artifact(
    fragments: Sequence[Fragment],
    completed_artifacts: Sequence[Artifact],
) -> Artifact | None:
    """
    First artifact, in template order, that is not yet owned and has
    enough fragments. Returned with completed=False.
    """
    completed_ids = {a.artifact_id for a in completed_artifacts}
    progress = get_artifact_progress(fragments)

    for template in ARTIFACT_TEMPLATES:
        if template.artifact_id in completed_ids:
            continue
        rarity_progress = progress[template.rarity]
        if rarity_progress.ready:
            return Artifact.from_template(
                template,
                current_fragments=rarity_progress.current,
                completed=False,
            )

    return None


def get_rarity_color(rarity: Rarity) -> str:
    """Display color for a rarity."""
    return RARITY_COLORS[rarity]
