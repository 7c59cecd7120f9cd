"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. The UI to highlight playable cards
2. The API to report available moves
3. Validation (is this action in legal_actions?)

Design: Generates Action objects, not just action types.
"""

from __future__ import annotations

from .state import GameState
from .action import Action, ActionType
from .rules import can_play_card, get_playable_cards


class ActionGenerator:
    """
    Generates legal actions for the current game state.

    Plays come first, in tableau order, followed by the draw.
    """

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions.

        Returns a list of fully-specified Action objects.
        """
        if state.is_terminal:
            return []

        actions = self._generate_play_actions(state)
        if state.stock:
            actions.append(Action.draw())
        return actions

    def _generate_play_actions(self, state: GameState) -> list[Action]:
        """One play per uncovered card that fits the waste top."""
        waste_top = state.waste_top
        if waste_top is None:
            return []

        return [
            Action.play(card.card_id)
            for card in get_playable_cards(state.tableau)
            if can_play_card(card, waste_top)
        ]


def legal_actions(state: GameState) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    return ActionGenerator().generate(state)


def is_legal(state: GameState, action: Action) -> bool:
    """Check if a specific action is legal."""
    for a in legal_actions(state):
        if (
            a.action_type == action.action_type
            and (
                action.action_type == ActionType.DRAW_STOCK
                or a.payload.card_id == action.payload.card_id
            )
        ):
            return True
    return False
