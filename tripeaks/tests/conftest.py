"""
Pytest fixtures for TriPeaks tests.
"""

import random

import pytest

from ..engine_core.deck import deal_tri_peaks
from ..engine_core.state import Card, GamePhase, GameState, Position, Rank, Suit
from ..session import SessionManager
from ..storage import ProgressStore


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible rolls and deals."""
    return random.Random(42)


@pytest.fixture
def ordered_deck() -> list[Card]:
    """
    Unshuffled deck: hearts A-K, diamonds A-K, clubs A-K, spades A-K.

    Dealt, it lays out as:
        row 0: A♥ 2♥ 3♥
        row 1: 4♥ .. 9♥
        row 2: 10♥ J♥ Q♥ K♥ A♦ 2♦ 3♦ 4♦ 5♦
        row 3: 6♦ 7♦ 8♦ 9♦ 10♦ J♦ Q♦ K♦ A♣ 2♣
        waste: 3♣   stock: 4♣ .. K♠ (23 cards)
    """
    return [
        Card(card_id=f"{suit.value}-{rank.label}", suit=suit, rank=rank)
        for suit in Suit
        for rank in Rank
    ]


@pytest.fixture
def ordered_state(ordered_deck) -> GameState:
    """Freshly dealt game from the unshuffled deck."""
    return deal_tri_peaks(ordered_deck)


@pytest.fixture
def make_card():
    """Factory for single cards, optionally placed in the tableau."""
    def _make(rank: Rank, suit: Suit = Suit.SPADES, row=None, col=None, face_up=True) -> Card:
        position = Position(row, col) if row is not None else None
        return Card(
            card_id=f"{suit.value}-{rank.label}",
            suit=suit,
            rank=rank,
            face_up=face_up,
            position=position,
        )
    return _make


@pytest.fixture
def one_move_from_win(make_card) -> GameState:
    """A single base card left that plays onto the waste top."""
    return GameState(
        tableau=[[], [], [], [make_card(Rank.FIVE, Suit.HEARTS, row=3, col=0)]],
        stock=[],
        waste=[make_card(Rank.FOUR, Suit.CLUBS)],
        score=120,
        moves=20,
        streak=2,
        phase=GamePhase.ACTIVE,
    )


@pytest.fixture
def one_move_from_loss(make_card) -> GameState:
    """Playing the 6 leaves only a 9 with an empty stock."""
    return GameState(
        tableau=[
            [],
            [],
            [],
            [
                make_card(Rank.SIX, Suit.HEARTS, row=3, col=0),
                make_card(Rank.NINE, Suit.CLUBS, row=3, col=1),
            ],
        ],
        stock=[],
        waste=[make_card(Rank.FIVE, Suit.DIAMONDS)],
        score=40,
        moves=10,
        streak=0,
        phase=GamePhase.ACTIVE,
    )


@pytest.fixture
def store(tmp_path) -> ProgressStore:
    """Progress store in a temporary directory."""
    return ProgressStore(tmp_path / "data")


@pytest.fixture
def session_manager(store) -> SessionManager:
    """Session manager persisting to the temporary store."""
    return SessionManager(store=store)
