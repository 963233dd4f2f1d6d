"""Card and deck utilities shared by blackjack and video poker."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .rng import DEFAULT_SOURCE, RandomSource

SUITS = ("♠", "♥", "♦", "♣")
VALUES = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
FACE_VALUES = ("J", "Q", "K")
POKER_RANKS = {v: i + 2 for i, v in enumerate(VALUES[1:] + ("A",))}
SUIT_CODES = {"S": "♠", "H": "♥", "D": "♦", "C": "♣"}

RESHUFFLE_THRESHOLD = 15


@dataclass(frozen=True)
class Card:
    """A standard playing card."""

    suit: str
    value: str

    def __post_init__(self) -> None:
        if self.suit not in SUITS:
            raise ValueError(f"unknown suit {self.suit!r}")
        if self.value not in VALUES:
            raise ValueError(f"unknown value {self.value!r}")

    @property
    def numeric_value(self) -> int:
        """Blackjack value: Ace counts 11 until a hand adjusts it."""

        if self.value == "A":
            return 11
        if self.value in FACE_VALUES:
            return 10
        return int(self.value)

    @property
    def rank(self) -> int:
        """Poker rank from 2 to 14, Ace high."""

        return POKER_RANKS[self.value]

    @property
    def is_ace(self) -> bool:
        return self.value == "A"

    def __str__(self) -> str:
        return f"{self.value}{self.suit}"


def fresh_cards() -> List[Card]:
    return [Card(suit, value) for suit in SUITS for value in VALUES]


def shuffle(deck: Sequence[Card], rng: RandomSource | None = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``deck``."""

    return (rng or DEFAULT_SOURCE).shuffle(deck)


def create_deck(rng: RandomSource | None = None) -> List[Card]:
    """Build all 52 cards and shuffle them."""

    return shuffle(fresh_cards(), rng)


class Deck:
    """A single shuffled deck dealt from the top."""

    def __init__(self, *, rng: RandomSource | None = None, cards: Optional[Sequence[Card]] = None) -> None:
        self._rng = rng or DEFAULT_SOURCE
        self._cards: List[Card] = []
        if cards is None:
            self.reset()
        else:
            self._cards = list(cards)

    def reset(self) -> None:
        self._cards = create_deck(self._rng)

    def draw(self, count: int = 1) -> List[Card]:
        if count < 0:
            raise ValueError("count must be positive")
        if count > len(self._cards):
            raise ValueError("Not enough cards remaining")
        dealt, self._cards = self._cards[:count], self._cards[count:]
        return dealt

    def draw_one(self) -> Card:
        return self.draw(1)[0]

    def needs_reshuffle(self) -> bool:
        return len(self._cards) < RESHUFFLE_THRESHOLD

    def __len__(self) -> int:
        return len(self._cards)

    def remaining(self) -> Sequence[Card]:
        return tuple(self._cards)


def parse_cards(tokens: Iterable[str]) -> List[Card]:
    """Parse tokens such as ``"AS"`` or ``"10h"`` into cards."""

    cards = []
    for token in tokens:
        value, suit_code = token[:-1].upper(), token[-1].upper()
        if suit_code not in SUIT_CODES:
            raise ValueError(f"unknown suit in {token!r}")
        cards.append(Card(SUIT_CODES[suit_code], value))
    return cards


__all__ = [
    "Card",
    "Deck",
    "SUITS",
    "VALUES",
    "create_deck",
    "fresh_cards",
    "parse_cards",
    "shuffle",
]
