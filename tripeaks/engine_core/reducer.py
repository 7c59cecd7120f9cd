"""
Reducer - Applies moves to game state.

Two layers:
- play_card() / draw_from_stock(): the raw transitions. Pure functions
  (state, move) -> new_state. play_card() trusts its caller and does not
  check legality.
- Reducer.apply(): the gated entry point. Validates the action against
  the rules and returns an ActionResult with success/failure.
"""

from __future__ import annotations
from typing import Callable

from .state import Card, GamePhase, GameState
from .action import Action, ActionResult, ActionType, ErrorCode
from .rules import (
    Tableau,
    can_play_card,
    is_card_playable,
    is_game_lost,
    is_game_won,
    is_uncovered,
)

POINTS_PER_STREAK = 10


def flip_uncovered_cards(tableau: Tableau) -> list[list[Card]]:
    """
    Return a new tableau with every uncovered face-down card turned up.

    Flips are one-way; face-up cards are never turned back.
    """
    return [
        [
            card.turned_up() if not card.face_up and is_uncovered(card, tableau) else card
            for card in row
        ]
        for row in tableau
    ]


def settle_phase(state: GameState) -> GameState:
    """Move a state to WON, LOST or ACTIVE after a move."""
    if is_game_won(state):
        phase = GamePhase.WON
    elif is_game_lost(state):
        phase = GamePhase.LOST
    else:
        phase = GamePhase.ACTIVE
    if phase == state.phase:
        return state
    return state._copy_with(phase=phase)


def play_card(state: GameState, card: Card) -> GameState:
    """
    Move a tableau card onto the waste pile.

    Callers must check can_play_card() and is_card_playable() first:
    an illegal move is executed as given.

    Score grows by 10 x the streak after this play, so consecutive
    plays earn 10, 20, 30, ...
    """
    remaining = [
        [c for c in row if c.card_id != card.card_id]
        for row in state.tableau
    ]
    new_streak = state.streak + 1

    new_state = state._copy_with(
        tableau=flip_uncovered_cards(remaining),
        waste=list(state.waste) + [card],
        moves=state.moves + 1,
        streak=new_streak,
        score=state.score + POINTS_PER_STREAK * new_streak,
    )
    return settle_phase(new_state)


def draw_from_stock(state: GameState) -> GameState:
    """
    Turn the next stock card onto the waste pile.

    Resets the streak. An empty stock leaves the state unchanged.
    """
    if not state.stock:
        return state

    drawn = state.stock[0].turned_up()
    new_state = state._copy_with(
        stock=list(state.stock[1:]),
        waste=list(state.waste) + [drawn],
        streak=0,
    )
    return settle_phase(new_state)


class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        if state.is_terminal:
            return ActionResult.failure(
                f"Game is over ({state.phase.value}) - no actions allowed",
                error_code=ErrorCode.GAME_OVER,
            )

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )
        return handler(state, action)

    def _get_handler(
        self, action_type: ActionType
    ) -> Callable[[GameState, Action], ActionResult] | None:
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLAY_CARD: self._handle_play,
            ActionType.DRAW_STOCK: self._handle_draw,
        }
        return handlers.get(action_type)

    def _handle_play(self, state: GameState, action: Action) -> ActionResult:
        """Handle a tableau play."""
        card_id = action.payload.card_id
        card = state.find_tableau_card(card_id) if card_id else None
        if not card:
            return ActionResult.failure(
                f"Card {card_id} is not in the tableau",
                error_code=ErrorCode.CARD_NOT_FOUND,
            )

        if not is_card_playable(card, state.tableau):
            return ActionResult.failure(
                f"Card {card.label} is covered or face down",
                error_code=ErrorCode.CARD_NOT_PLAYABLE,
            )

        waste_top = state.waste_top
        if waste_top is None or not can_play_card(card, waste_top):
            target = waste_top.label if waste_top else "an empty waste pile"
            return ActionResult.failure(
                f"{card.label} cannot be played on {target}",
                error_code=ErrorCode.ILLEGAL_MOVE,
            )

        new_state = play_card(state, card)
        changes = [f"Played {card.label} (+{new_state.score - state.score})"]
        if new_state.won:
            changes.append("All peaks cleared")
        elif new_state.lost:
            changes.append("No moves left")
        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_draw(self, state: GameState, action: Action) -> ActionResult:
        """Handle a stock draw."""
        if not state.stock:
            return ActionResult.success_with_state(state, changes=["Stock is empty"])

        new_state = draw_from_stock(state)
        changes = [f"Drew {new_state.waste_top.label} from the stock"]
        if new_state.lost:
            changes.append("No moves left")
        return ActionResult.success_with_state(new_state, changes=changes)


def apply_action(state: GameState, action: Action) -> ActionResult:
    """Convenience wrapper around Reducer().apply()."""
    return Reducer().apply(state, action)
