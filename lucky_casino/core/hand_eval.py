"""Five-card poker hand ranking."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Sequence, Tuple

from .cards import Card


class HandCategory(IntEnum):
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True, order=True)
class HandRank:
    """Comparable representation of a poker hand rank."""

    category: HandCategory
    tiebreaker: Tuple[int, ...]

    @property
    def is_royal(self) -> bool:
        return self.category is HandCategory.STRAIGHT_FLUSH and self.tiebreaker[0] == 14

    def describe(self) -> str:
        if self.is_royal:
            return "Royal Flush"
        return self.category.label


def rank_five(cards: Sequence[Card]) -> HandRank:
    if len(cards) != 5:
        raise ValueError("exactly five cards are required")
    ranks = sorted((card.rank for card in cards), reverse=True)
    is_flush = len({card.suit for card in cards}) == 1
    straight_high = _straight_high(ranks)
    if is_flush and straight_high is not None:
        return HandRank(HandCategory.STRAIGHT_FLUSH, _straight_sequence(straight_high))

    counts = sorted(Counter(ranks).items(), key=lambda x: (x[1], x[0]), reverse=True)

    if counts[0][1] == 4:
        return HandRank(HandCategory.FOUR_OF_A_KIND, (counts[0][0], counts[1][0]))

    if counts[0][1] == 3 and counts[1][1] == 2:
        return HandRank(HandCategory.FULL_HOUSE, (counts[0][0], counts[1][0]))

    if is_flush:
        return HandRank(HandCategory.FLUSH, tuple(ranks))

    if straight_high is not None:
        return HandRank(HandCategory.STRAIGHT, _straight_sequence(straight_high))

    if counts[0][1] == 3:
        kickers = tuple(rank for rank in ranks if rank != counts[0][0])
        return HandRank(HandCategory.THREE_OF_A_KIND, (counts[0][0],) + kickers)

    if counts[0][1] == 2 and counts[1][1] == 2:
        kicker = counts[2][0]
        return HandRank(HandCategory.TWO_PAIR, (counts[0][0], counts[1][0], kicker))

    if counts[0][1] == 2:
        kickers = tuple(rank for rank in ranks if rank != counts[0][0])
        return HandRank(HandCategory.PAIR, (counts[0][0],) + kickers)

    return HandRank(HandCategory.HIGH_CARD, tuple(ranks))


def _straight_high(ranks: Iterable[int]) -> Optional[int]:
    unique = sorted(set(ranks), reverse=True)
    if len(unique) != 5:
        return None
    if unique[0] - unique[4] == 4:
        return unique[0]
    if unique == [14, 5, 4, 3, 2]:
        return 5
    return None


def _straight_sequence(high: int) -> Tuple[int, ...]:
    if high == 5:
        return (5, 4, 3, 2, 1)
    return tuple(range(high, high - 5, -1))


def compare_hands(hand_a: Sequence[Card], hand_b: Sequence[Card]) -> int:
    """Compare two five-card hands: positive when ``hand_a`` wins."""

    rank_a = rank_five(hand_a)
    rank_b = rank_five(hand_b)
    return (rank_a > rank_b) - (rank_a < rank_b)


__all__ = ["HandCategory", "HandRank", "rank_five", "compare_hands"]
