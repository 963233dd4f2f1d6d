"""Jacks or Better video poker."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .cards import Card, Deck
from .errors import InvalidBetError, RoundStateError
from .hand_eval import HandCategory, HandRank, rank_five
from .rng import RandomSource
from .rules import Outcome

HAND_SIZE = 5
JACKS = 11
ROYAL_FLUSH = "Royal Flush"
JACKS_OR_BETTER = "Jacks or Better"

# Gross return per coin staked.
PAY_TABLE: Dict[str, int] = {
    ROYAL_FLUSH: 800,
    HandCategory.STRAIGHT_FLUSH.label: 50,
    HandCategory.FOUR_OF_A_KIND.label: 25,
    HandCategory.FULL_HOUSE.label: 9,
    HandCategory.FLUSH.label: 6,
    HandCategory.STRAIGHT.label: 4,
    HandCategory.THREE_OF_A_KIND.label: 3,
    HandCategory.TWO_PAIR.label: 2,
    JACKS_OR_BETTER: 1,
}


def paying_hand(rank: HandRank) -> Optional[str]:
    """Name of the pay table row for ``rank``, or ``None`` for a losing hand."""

    if rank.is_royal:
        return ROYAL_FLUSH
    if rank.category is HandCategory.PAIR:
        return JACKS_OR_BETTER if rank.tiebreaker[0] >= JACKS else None
    if rank.category is HandCategory.HIGH_CARD:
        return None
    return rank.category.label


def evaluate_hand(cards: Sequence[Card], bet: int) -> Outcome:
    rank = rank_five(cards)
    name = paying_hand(rank)
    payout = bet * PAY_TABLE[name] if name else 0
    return Outcome(
        game="poker",
        bet=bet,
        payout=payout,
        won=payout > bet,
        details={"hand": tuple(cards), "rank": rank.describe(), "paying_hand": name},
    )


@dataclass(eq=False)
class PokerRound:
    """Deal five, hold any subset, draw once."""

    bet: int
    deck: Deck = field(default_factory=Deck)
    hand: List[Card] = field(default_factory=list)
    outcome: Optional[Outcome] = None

    @classmethod
    def deal(cls, bet: int, rng: RandomSource | None = None) -> "PokerRound":
        return cls(bet=bet, deck=Deck(rng=rng))

    def __post_init__(self) -> None:
        if not self.hand:
            self.hand = self.deck.draw(HAND_SIZE)

    @property
    def is_settled(self) -> bool:
        return self.outcome is not None

    def draw(self, holds: Iterable[int] = ()) -> Outcome:
        if self.is_settled:
            raise RoundStateError("this hand has already been drawn")
        held = set(holds)
        if any(not isinstance(idx, int) or not 0 <= idx < HAND_SIZE for idx in held):
            raise InvalidBetError(f"hold positions must be between 0 and {HAND_SIZE - 1}")
        for idx in range(HAND_SIZE):
            if idx not in held:
                self.hand[idx] = self.deck.draw_one()
        self.outcome = evaluate_hand(self.hand, self.bet)
        return self.outcome


__all__ = ["PokerRound", "PAY_TABLE", "evaluate_hand", "paying_hand"]
