"""
Game State - Card and tableau state for a TriPeaks deal.

Design principles:
- Immutable-friendly: all mutations return new state
- Serializable: can be converted to plain dicts for the API
- Game-rules free: legality lives in rules.py, transitions in reducer.py
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Any


class Suit(Enum):
    """The four French suits."""
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


class Rank(IntEnum):
    """Card ranks with their linear values (A=1 .. K=13)."""
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def label(self) -> str:
        return RANK_LABELS[self]


RANK_LABELS = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

# Tableau geometry: 3 peak apexes, 6, 9, then the 10-card base row
ROW_SIZES = (3, 6, 9, 10)
BASE_ROW = 3
PEAK_COLUMNS = (0, 3, 6)


class GamePhase(Enum):
    """Lifecycle of a deal."""
    DEALT = "dealt"
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


@dataclass(frozen=True)
class Position:
    """Tableau slot of a card."""
    row: int
    col: int


@dataclass(frozen=True)
class Card:
    """
    A card instance in the game.

    Cards are values: the only state that ever changes is face_up,
    and turning a card over yields a new Card.
    """
    card_id: str
    suit: Suit
    rank: Rank
    face_up: bool = False
    position: Position | None = None

    @property
    def label(self) -> str:
        """Short display label, e.g. '10♥'."""
        return f"{self.rank.label}{self.suit.symbol}"

    def turned_up(self) -> Card:
        """Return this card face-up."""
        if self.face_up:
            return self
        return replace(self, face_up=True)

    def turned_down(self) -> Card:
        """Return this card face-down."""
        if not self.face_up:
            return self
        return replace(self, face_up=False)

    def at(self, row: int, col: int) -> Card:
        """Return this card placed in a tableau slot."""
        return replace(self, position=Position(row=row, col=col))

    def to_dict(self) -> dict[str, Any]:
        return {
            "card_id": self.card_id,
            "suit": self.suit.value,
            "rank": self.rank.label,
            "face_up": self.face_up,
            "row": self.position.row if self.position else None,
            "col": self.position.col if self.position else None,
        }


@dataclass
class GameState:
    """
    Complete state of one deal.

    The 52 cards are always partitioned across tableau, stock and waste.
    Stock head (index 0) is the next card to draw; waste top is the last card.
    """
    tableau: list[list[Card]] = field(default_factory=lambda: [[] for _ in ROW_SIZES])
    stock: list[Card] = field(default_factory=list)
    waste: list[Card] = field(default_factory=list)

    score: int = 0
    moves: int = 0
    streak: int = 0

    phase: GamePhase = GamePhase.DEALT

    @property
    def won(self) -> bool:
        return self.phase == GamePhase.WON

    @property
    def lost(self) -> bool:
        return self.phase == GamePhase.LOST

    @property
    def is_terminal(self) -> bool:
        return self.phase.is_terminal

    @property
    def waste_top(self) -> Card | None:
        """The card tableau plays are matched against."""
        return self.waste[-1] if self.waste else None

    @property
    def tableau_cards(self) -> list[Card]:
        """All tableau cards, row by row."""
        return [card for row in self.tableau for card in row]

    @property
    def cards_remaining(self) -> int:
        return sum(len(row) for row in self.tableau)

    def find_tableau_card(self, card_id: str) -> Card | None:
        """Look up a tableau card by ID."""
        for row in self.tableau:
            for card in row:
                if card.card_id == card_id:
                    return card
        return None

    def all_cards(self) -> list[Card]:
        """Every card in the deal, tableau then stock then waste."""
        return self.tableau_cards + list(self.stock) + list(self.waste)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            tableau=kwargs.get("tableau", self.tableau),
            stock=kwargs.get("stock", self.stock),
            waste=kwargs.get("waste", self.waste),
            score=kwargs.get("score", self.score),
            moves=kwargs.get("moves", self.moves),
            streak=kwargs.get("streak", self.streak),
            phase=kwargs.get("phase", self.phase),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tableau": [[card.to_dict() for card in row] for row in self.tableau],
            "stock_count": len(self.stock),
            "waste": [card.to_dict() for card in self.waste],
            "score": self.score,
            "moves": self.moves,
            "streak": self.streak,
            "phase": self.phase.value,
        }
