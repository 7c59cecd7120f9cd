"""
Deck Setup - Creates, shuffles and deals the TriPeaks layout.

This module handles:
- Creating the 52-card deck
- Shuffling with an injectable random source
- Dealing the three peaks, the base row, the waste card and the stock

Layout:
      [X]       [X]       [X]          <- row 0, peak apexes (cols 0, 3, 6)
     [X][X]    [X][X]    [X][X]        <- row 1
    [X][X][X] [X][X][X] [X][X][X]      <- row 2
   [X][X][X][X][X][X][X][X][X][X]      <- row 3, base row (face up)
"""

from __future__ import annotations
import random
from typing import Sequence

from .state import (
    BASE_ROW,
    PEAK_COLUMNS,
    ROW_SIZES,
    Card,
    GamePhase,
    GameState,
    Rank,
    Suit,
)

DECK_SIZE = 52
TABLEAU_SIZE = sum(ROW_SIZES)


class InvalidDeckError(ValueError):
    """Raised when a deck cannot be dealt."""


def create_deck(rng: random.Random | None = None) -> list[Card]:
    """
    Create a shuffled 52-card deck.

    Every card starts face-down with no tableau position.
    """
    deck = [
        Card(card_id=f"{suit.value}-{rank.label}", suit=suit, rank=rank)
        for suit in Suit
        for rank in Rank
    ]
    return shuffle_deck(deck, rng)


def shuffle_deck(deck: Sequence[Card], rng: random.Random | None = None) -> list[Card]:
    """
    Fisher-Yates shuffle.

    Returns a new list; the input sequence is left untouched.
    """
    rng = rng if rng is not None else random.Random()
    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def deal_tri_peaks(deck: Sequence[Card]) -> GameState:
    """
    Deal a shuffled deck into a new game.

    Cards are consumed by position: 3 peaks, 6, 9, 10 base cards,
    one waste card, and the remainder to the stock in order.

    Raises:
        InvalidDeckError: if the deck holds fewer than 52 cards
    """
    if len(deck) < DECK_SIZE:
        raise InvalidDeckError(
            f"TriPeaks needs a full {DECK_SIZE}-card deck, got {len(deck)}"
        )

    cards = iter(deck)
    tableau: list[list[Card]] = []

    for row, size in enumerate(ROW_SIZES):
        columns = PEAK_COLUMNS if row == 0 else range(size)
        dealt = []
        for col in columns:
            card = next(cards).at(row, col)
            card = card.turned_up() if row == BASE_ROW else card.turned_down()
            dealt.append(card)
        tableau.append(dealt)

    rest = list(cards)
    waste = [rest[0].turned_up()]
    stock = [card.turned_down() for card in rest[1:]]

    return GameState(
        tableau=tableau,
        stock=stock,
        waste=waste,
        score=0,
        moves=0,
        streak=0,
        phase=GamePhase.DEALT,
    )


def new_game(rng: random.Random | None = None) -> GameState:
    """Create a deck and deal it."""
    return deal_tri_peaks(create_deck(rng))
