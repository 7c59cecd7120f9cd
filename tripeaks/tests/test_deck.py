"""
Tests for deck creation, shuffling and the deal.

Tests:
- 52 distinct cards
- Shuffle is a permutation and reproducible with a seed
- Deal geometry, facing and card conservation
- Short decks are rejected
"""

import random
from collections import Counter

import pytest

from ..engine_core.deck import (
    DECK_SIZE,
    InvalidDeckError,
    create_deck,
    deal_tri_peaks,
    new_game,
    shuffle_deck,
)
from ..engine_core.state import BASE_ROW, PEAK_COLUMNS, ROW_SIZES, Card, GamePhase, Rank, Suit


class TestCreateDeck:
    """Tests for create_deck."""

    def test_has_52_distinct_cards(self):
        """Every suit/rank pair appears exactly once."""
        deck = create_deck(random.Random(1))

        assert len(deck) == DECK_SIZE
        assert len({card.card_id for card in deck}) == DECK_SIZE
        assert len({(card.suit, card.rank) for card in deck}) == DECK_SIZE

    def test_cards_start_face_down_and_unplaced(self):
        deck = create_deck(random.Random(1))

        assert all(not card.face_up for card in deck)
        assert all(card.position is None for card in deck)

    def test_card_ids_name_suit_and_rank(self):
        deck = create_deck(random.Random(1))
        ids = {card.card_id for card in deck}

        assert "hearts-A" in ids
        assert "spades-10" in ids
        assert "clubs-K" in ids

    def test_same_seed_same_order(self):
        """A seeded source reproduces the shuffle."""
        first = [c.card_id for c in create_deck(random.Random(99))]
        second = [c.card_id for c in create_deck(random.Random(99))]

        assert first == second

    def test_different_seeds_differ(self):
        first = [c.card_id for c in create_deck(random.Random(1))]
        second = [c.card_id for c in create_deck(random.Random(2))]

        assert first != second


class TestShuffleDeck:
    """Tests for shuffle_deck."""

    def test_is_a_permutation(self, ordered_deck):
        shuffled = shuffle_deck(ordered_deck, random.Random(5))

        assert Counter(c.card_id for c in shuffled) == Counter(c.card_id for c in ordered_deck)

    def test_input_is_untouched(self, ordered_deck):
        """Shuffling returns a new list."""
        before = list(ordered_deck)
        shuffled = shuffle_deck(ordered_deck, random.Random(5))

        assert ordered_deck == before
        assert shuffled is not ordered_deck

    def test_every_position_reachable(self, ordered_deck):
        """The ace of hearts lands in many different slots over many shuffles."""
        rng = random.Random(2024)
        positions = {
            [c.card_id for c in shuffle_deck(ordered_deck, rng)].index("hearts-A")
            for _ in range(2000)
        }

        assert len(positions) == DECK_SIZE

    def test_empty_and_single_card(self, make_card):
        assert shuffle_deck([], random.Random(1)) == []
        single = [make_card(Rank.ACE)]
        assert shuffle_deck(single, random.Random(1)) == single


class TestDealTriPeaks:
    """Tests for deal_tri_peaks."""

    def test_row_sizes(self, ordered_state):
        assert [len(row) for row in ordered_state.tableau] == list(ROW_SIZES)

    def test_peaks_use_peak_columns(self, ordered_state):
        """Row 0 holds the three apexes at columns 0, 3 and 6."""
        cols = tuple(card.position.col for card in ordered_state.tableau[0])

        assert cols == PEAK_COLUMNS

    def test_lower_rows_use_consecutive_columns(self, ordered_state):
        for row_index in range(1, len(ROW_SIZES)):
            row = ordered_state.tableau[row_index]
            assert [card.position.col for card in row] == list(range(len(row)))
            assert all(card.position.row == row_index for card in row)

    def test_only_base_row_face_up(self, ordered_state):
        for row_index, row in enumerate(ordered_state.tableau):
            expected = row_index == BASE_ROW
            assert all(card.face_up == expected for card in row)

    def test_waste_and_stock(self, ordered_state):
        """One face-up waste card, 23 face-down stock cards."""
        assert len(ordered_state.waste) == 1
        assert ordered_state.waste_top.face_up
        assert len(ordered_state.stock) == 23
        assert all(not card.face_up for card in ordered_state.stock)

    def test_cards_consumed_in_order(self, ordered_state):
        """Tableau first, then the waste card, then the stock in order."""
        assert ordered_state.tableau[0][0].card_id == "hearts-A"
        assert ordered_state.tableau[3][0].card_id == "diamonds-6"
        assert ordered_state.tableau[3][9].card_id == "clubs-2"
        assert ordered_state.waste_top.card_id == "clubs-3"
        assert ordered_state.stock[0].card_id == "clubs-4"
        assert ordered_state.stock[-1].card_id == "spades-K"

    def test_cards_partitioned(self, ordered_state):
        """All 52 cards, each in exactly one pile."""
        ids = [card.card_id for card in ordered_state.all_cards()]

        assert len(ids) == DECK_SIZE
        assert len(set(ids)) == DECK_SIZE

    def test_initial_counters(self, ordered_state):
        assert ordered_state.score == 0
        assert ordered_state.moves == 0
        assert ordered_state.streak == 0
        assert ordered_state.phase == GamePhase.DEALT

    def test_short_deck_rejected(self, ordered_deck):
        with pytest.raises(InvalidDeckError):
            deal_tri_peaks(ordered_deck[:51])

    def test_extra_cards_go_to_stock(self, ordered_deck):
        extra = Card(card_id="joker", suit=Suit.SPADES, rank=Rank.ACE)
        state = deal_tri_peaks(ordered_deck + [extra])

        assert len(state.stock) == 24
        assert state.stock[-1].card_id == "joker"

    def test_deal_ignores_incoming_facing(self, ordered_deck):
        """Face-up cards in the deck are still dealt face-down above the base row."""
        flipped = [card.turned_up() for card in ordered_deck]
        state = deal_tri_peaks(flipped)

        assert all(not card.face_up for card in state.tableau[0])
        assert all(not card.face_up for card in state.stock)


class TestNewGame:
    """Tests for new_game."""

    def test_seeded_game_reproducible(self):
        first = new_game(random.Random(7))
        second = new_game(random.Random(7))

        assert first.to_dict() == second.to_dict()
        assert [c.card_id for c in first.stock] == [c.card_id for c in second.stock]

    def test_unseeded_game_is_valid(self):
        state = new_game()

        assert len(state.all_cards()) == DECK_SIZE
        assert state.phase == GamePhase.DEALT
