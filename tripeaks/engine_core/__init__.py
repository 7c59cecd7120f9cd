"""
Engine Core - TriPeaks rules and state transitions.

The engine:
1. Creates and shuffles the deck
2. Deals the three peaks, base row, waste and stock
3. Decides which cards are uncovered and which moves are legal
4. Applies plays and draws via the reducer
5. Detects won and lost deals
"""

from .state import Card, GamePhase, GameState, Position, Rank, Suit
from .deck import InvalidDeckError, create_deck, deal_tri_peaks, new_game, shuffle_deck
from .rules import (
    can_play_card,
    covering_columns,
    get_playable_cards,
    is_card_playable,
    is_game_lost,
    is_game_won,
)
from .action import Action, ActionPayload, ActionResult, ActionType, ErrorCode
from .reducer import Reducer, apply_action, draw_from_stock, flip_uncovered_cards, play_card
from .action_generator import ActionGenerator, is_legal, legal_actions

__all__ = [
    "Card",
    "GamePhase",
    "GameState",
    "Position",
    "Rank",
    "Suit",
    "InvalidDeckError",
    "create_deck",
    "deal_tri_peaks",
    "new_game",
    "shuffle_deck",
    "can_play_card",
    "covering_columns",
    "get_playable_cards",
    "is_card_playable",
    "is_game_lost",
    "is_game_won",
    "Action",
    "ActionPayload",
    "ActionResult",
    "ActionType",
    "ErrorCode",
    "Reducer",
    "apply_action",
    "draw_from_stock",
    "flip_uncovered_cards",
    "play_card",
    "ActionGenerator",
    "is_legal",
    "legal_actions",
]
