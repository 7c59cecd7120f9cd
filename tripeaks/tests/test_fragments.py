"""
Tests for fragment generation and drop rolls.

Tests:
- Fragment fields come from the tier's templates
- Drop tables and the streak bonus
- Observed drop frequencies over many seeded rolls
"""

import random
import uuid
from collections import Counter

import pytest

from ..progression.fragments import (
    FRAGMENT_TEMPLATES,
    LOSS_DROP_RATES,
    RARITY_ORDER,
    STREAK_BONUS,
    WIN_DROP_RATES,
    Fragment,
    Rarity,
    drop_chances,
    generate_fragment,
    roll_fragment_drop,
)

ROLLS = 20000


def frequencies(is_win, win_streak, seed):
    rng = random.Random(seed)
    counts = Counter()
    for _ in range(ROLLS):
        fragment = roll_fragment_drop(is_win, win_streak, rng)
        counts[fragment.rarity if fragment else None] += 1
    return {key: count / ROLLS for key, count in counts.items()}


class TestRarity:
    """Tests for Rarity ordering."""

    def test_order(self):
        assert RARITY_ORDER == (Rarity.COMMON, Rarity.RARE, Rarity.EPIC, Rarity.LEGENDARY)
        assert sorted(reversed(RARITY_ORDER)) == list(RARITY_ORDER)
        assert Rarity.COMMON < Rarity.LEGENDARY

    def test_full_comparisons(self):
        assert Rarity.COMMON <= Rarity.RARE
        assert Rarity.RARE <= Rarity.RARE
        assert Rarity.LEGENDARY >= Rarity.EPIC
        assert Rarity.EPIC > Rarity.RARE
        assert not Rarity.RARE >= Rarity.EPIC
        assert max(Rarity) == Rarity.LEGENDARY


class TestGenerateFragment:
    """Tests for generate_fragment."""

    @pytest.mark.parametrize("rarity", list(Rarity))
    def test_uses_tier_template(self, rng, rarity):
        fragment = generate_fragment(rarity, rng)
        names = {t.name for t in FRAGMENT_TEMPLATES[rarity]}

        assert fragment.rarity == rarity
        assert fragment.name in names
        assert fragment.icon
        assert fragment.description

    def test_id_is_uuid(self, rng):
        fragment = generate_fragment(Rarity.COMMON, rng)

        assert uuid.UUID(fragment.fragment_id).version == 4

    def test_ids_unique(self, rng):
        ids = {generate_fragment(Rarity.RARE, rng).fragment_id for _ in range(500)}

        assert len(ids) == 500

    def test_seeded_generation_reproducible(self):
        first = generate_fragment(Rarity.EPIC, random.Random(3))
        second = generate_fragment(Rarity.EPIC, random.Random(3))

        assert first == second

    def test_dict_round_trip(self, rng):
        fragment = generate_fragment(Rarity.LEGENDARY, rng)

        assert Fragment.from_dict(fragment.to_dict()) == fragment
        assert fragment.to_dict()["rarity"] == "legendary"


class TestDropChances:
    """Tests for drop_chances."""

    def test_win_table(self):
        chances = drop_chances(True, 0)

        assert chances[Rarity.COMMON] == pytest.approx(0.70)
        assert chances[Rarity.RARE] == pytest.approx(0.22)
        assert chances[Rarity.EPIC] == pytest.approx(0.07)
        assert chances[Rarity.LEGENDARY] == pytest.approx(0.01)

    def test_loss_table(self):
        chances = drop_chances(False, 0)

        assert chances[Rarity.COMMON] == pytest.approx(0.40)
        assert chances[Rarity.RARE] == pytest.approx(0.10)
        assert chances[Rarity.EPIC] == 0
        assert chances[Rarity.LEGENDARY] == 0

    def test_streak_bonus_from_three(self):
        assert drop_chances(True, 2) == drop_chances(True, 0)
        for rarity, chance in drop_chances(True, 3).items():
            assert chance == pytest.approx(WIN_DROP_RATES.for_rarity(rarity) * STREAK_BONUS)

    def test_rolled_rarest_first(self):
        assert list(drop_chances(True, 0)) == [
            Rarity.LEGENDARY, Rarity.EPIC, Rarity.RARE, Rarity.COMMON,
        ]


class TestRollFragmentDrop:
    """Tests for roll_fragment_drop."""

    def test_win_always_drops(self):
        rng = random.Random(11)

        assert all(roll_fragment_drop(True, 0, rng) for _ in range(2000))

    def test_loss_never_drops_epic_or_legendary(self):
        observed = frequencies(False, 0, seed=12)

        assert Rarity.EPIC not in observed
        assert Rarity.LEGENDARY not in observed

    def test_win_frequencies(self):
        observed = frequencies(True, 0, seed=13)

        assert None not in observed
        assert observed[Rarity.COMMON] == pytest.approx(0.70, abs=0.02)
        assert observed[Rarity.RARE] == pytest.approx(0.22, abs=0.02)
        assert observed[Rarity.EPIC] == pytest.approx(0.07, abs=0.01)
        assert observed[Rarity.LEGENDARY] == pytest.approx(0.01, abs=0.005)

    def test_loss_frequencies(self):
        observed = frequencies(False, 0, seed=14)

        assert observed[None] == pytest.approx(0.50, abs=0.02)
        assert observed[Rarity.COMMON] == pytest.approx(LOSS_DROP_RATES.common, abs=0.02)
        assert observed[Rarity.RARE] == pytest.approx(LOSS_DROP_RATES.rare, abs=0.02)

    def test_streak_raises_rare_tiers(self):
        """With the bonus every non-common tier is 10% likelier."""
        observed = frequencies(True, 5, seed=15)

        assert observed[Rarity.RARE] == pytest.approx(0.22 * STREAK_BONUS, abs=0.02)
        assert observed[Rarity.EPIC] == pytest.approx(0.07 * STREAK_BONUS, abs=0.01)

    def test_seeded_roll_reproducible(self):
        first = roll_fragment_drop(True, 1, random.Random(8))
        second = roll_fragment_drop(True, 1, random.Random(8))

        assert first == second
