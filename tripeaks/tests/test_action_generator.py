"""
Tests for legal action generation.
"""

from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import ActionGenerator, is_legal, legal_actions
from ..engine_core.rules import is_legal_play
from ..engine_core.state import GamePhase


class TestActionGenerator:
    """Tests for ActionGenerator."""

    def test_fresh_deal(self, ordered_state):
        """Only 2♣ fits 3♣; the stock offers a draw."""
        actions = ActionGenerator().generate(ordered_state)

        assert [a.action_type for a in actions] == [ActionType.PLAY_CARD, ActionType.DRAW_STOCK]
        assert actions[0].payload.card_id == "clubs-2"

    def test_plays_match_gated_legality(self, ordered_state):
        state = ordered_state
        for _ in range(6):
            state = state._copy_with(
                stock=state.stock[1:],
                waste=state.waste + [state.stock[0].turned_up()],
            )
            plays = {a.payload.card_id for a in legal_actions(state) if a.action_type == ActionType.PLAY_CARD}
            expected = {c.card_id for c in state.tableau_cards if is_legal_play(state, c)}
            assert plays == expected

    def test_no_draw_with_empty_stock(self, ordered_state):
        state = ordered_state._copy_with(stock=[])

        assert all(a.action_type != ActionType.DRAW_STOCK for a in legal_actions(state))

    def test_terminal_state_has_no_actions(self, ordered_state):
        assert legal_actions(ordered_state._copy_with(phase=GamePhase.LOST)) == []

    def test_no_plays_without_waste(self, ordered_state):
        state = ordered_state._copy_with(waste=[])

        assert [a.action_type for a in legal_actions(state)] == [ActionType.DRAW_STOCK]


class TestIsLegal:
    """Tests for is_legal."""

    def test_legal_play(self, ordered_state):
        assert is_legal(ordered_state, Action.play("clubs-2"))

    def test_illegal_play(self, ordered_state):
        assert not is_legal(ordered_state, Action.play("diamonds-6"))

    def test_draw(self, ordered_state):
        assert is_legal(ordered_state, Action.draw())
        assert not is_legal(ordered_state._copy_with(stock=[]), Action.draw())
