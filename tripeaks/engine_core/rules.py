"""
Rules - Move legality, card visibility and terminal-state checks.

All functions are pure and never modify their arguments.
"""

from __future__ import annotations
from typing import Sequence

from .state import BASE_ROW, PEAK_COLUMNS, Card, GameState, Rank

Tableau = Sequence[Sequence[Card]]


def can_play_card(card: Card, waste_top: Card) -> bool:
    """
    Check if a card can go onto the waste pile.

    Ranks must be exactly one apart; ace and king wrap in both directions.
    """
    if {card.rank, waste_top.rank} == {Rank.ACE, Rank.KING}:
        return True
    return abs(int(card.rank) - int(waste_top.rank)) == 1


def covering_columns(row: int, col: int) -> tuple[int, ...]:
    """
    Columns in row + 1 that sit on top of the card at (row, col).

    Peak k (dealt at column PEAK_COLUMNS[k]) is covered by row-1 columns
    2k and 2k+1; a card at column c in rows 1 and 2 is covered by
    columns c and c+1 of the next row. The base row is never covered.

    Raises ValueError for a row-0 column that is not a peak column.
    """
    if row >= BASE_ROW:
        return ()
    if row == 0:
        if col not in PEAK_COLUMNS:
            raise ValueError(f"Column {col} is not a peak column")
        peak = PEAK_COLUMNS.index(col)
        return (2 * peak, 2 * peak + 1)
    return (col, col + 1)


def is_uncovered(card: Card, tableau: Tableau) -> bool:
    """True when no card in the next row occupies a covering slot."""
    if card.position is None:
        return False
    row, col = card.position.row, card.position.col
    if row >= BASE_ROW:
        return True
    covering = covering_columns(row, col)
    return not any(
        below.position is not None and below.position.col in covering
        for below in tableau[row + 1]
    )


def is_card_playable(card: Card, tableau: Tableau) -> bool:
    """
    Check if a tableau card can be picked up.

    Face-down cards never are; face-up base-row cards always are;
    other face-up cards are playable once uncovered.
    """
    if not card.face_up:
        return False
    return is_uncovered(card, tableau)


def get_playable_cards(tableau: Tableau) -> list[Card]:
    """All tableau cards that are currently playable."""
    return [
        card
        for row in tableau
        for card in row
        if is_card_playable(card, tableau)
    ]


def is_legal_play(state: GameState, card: Card) -> bool:
    """Full legality of a tableau-to-waste move."""
    waste_top = state.waste_top
    if waste_top is None:
        return False
    return is_card_playable(card, state.tableau) and can_play_card(card, waste_top)


def is_game_won(state: GameState) -> bool:
    """The game is won once every tableau row is empty."""
    return all(len(row) == 0 for row in state.tableau)


def is_game_lost(state: GameState) -> bool:
    """
    The game is lost when the stock is empty and no tableau play remains.

    A non-empty stock always leaves a draw available, so such a game
    is never lost.
    """
    if state.stock:
        return False
    return not any(
        is_legal_play(state, card) for card in get_playable_cards(state.tableau)
    )
