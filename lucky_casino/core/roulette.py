"""Single-zero roulette rules."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence

from .errors import InvalidBetError
from .rng import DEFAULT_SOURCE, RandomSource
from .rules import Outcome, gross_payout

POCKETS = tuple(range(37))
RED_NUMBERS: FrozenSet[int] = frozenset(
    {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}
)
BLACK_NUMBERS: FrozenSet[int] = frozenset(set(range(1, 37)) - RED_NUMBERS)


class BetKind(Enum):
    STRAIGHT = "straight"
    RED = "red"
    BLACK = "black"
    ODD = "odd"
    EVEN = "even"
    LOW = "low"
    HIGH = "high"
    DOZEN = "dozen"
    COLUMN = "column"


ODDS = {
    BetKind.STRAIGHT: 35,
    BetKind.RED: 1,
    BetKind.BLACK: 1,
    BetKind.ODD: 1,
    BetKind.EVEN: 1,
    BetKind.LOW: 1,
    BetKind.HIGH: 1,
    BetKind.DOZEN: 2,
    BetKind.COLUMN: 2,
}


def color_of(number: int) -> str:
    if number not in POCKETS:
        raise ValueError(f"{number} is not on the wheel")
    if number == 0:
        return "green"
    return "red" if number in RED_NUMBERS else "black"


@dataclass(frozen=True)
class RouletteBet:
    kind: BetKind
    amount: int
    selection: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int) or self.amount <= 0:
            raise InvalidBetError("bet amount must be a positive whole number")
        if isinstance(self.selection, bool):
            raise InvalidBetError("bet selection must be a number")
        if self.kind is BetKind.STRAIGHT:
            if self.selection not in POCKETS:
                raise InvalidBetError("straight bets need a number from 0 to 36")
        elif self.kind in (BetKind.DOZEN, BetKind.COLUMN):
            if self.selection not in (1, 2, 3):
                raise InvalidBetError(f"{self.kind.value} bets need a selection of 1, 2 or 3")
        elif self.selection is not None:
            raise InvalidBetError(f"{self.kind.value} bets take no selection")

    def covers(self, number: int) -> bool:
        if self.kind is BetKind.STRAIGHT:
            return number == self.selection
        if number == 0:
            return False
        if self.kind is BetKind.RED:
            return number in RED_NUMBERS
        if self.kind is BetKind.BLACK:
            return number in BLACK_NUMBERS
        if self.kind is BetKind.ODD:
            return number % 2 == 1
        if self.kind is BetKind.EVEN:
            return number % 2 == 0
        if self.kind is BetKind.LOW:
            return number <= 18
        if self.kind is BetKind.HIGH:
            return number >= 19
        if self.kind is BetKind.DOZEN:
            return (number - 1) // 12 + 1 == self.selection
        return (number - 1) % 3 + 1 == self.selection

    def payout(self, number: int) -> int:
        return gross_payout(self.amount, ODDS[self.kind]) if self.covers(number) else 0


def spin_wheel(rng: RandomSource | None = None) -> int:
    return (rng or DEFAULT_SOURCE).random_int(0, 36)


def total_stake(bets: Sequence[RouletteBet]) -> int:
    return sum(bet.amount for bet in bets)


def evaluate_spin(number: int, bets: Sequence[RouletteBet]) -> Outcome:
    """Settle every bet against the winning ``number``."""

    if not bets:
        raise InvalidBetError("at least one bet is required")
    color = color_of(number)
    results: List[dict] = []
    payout = 0
    lucky = False
    for bet in bets:
        amount = bet.payout(number)
        payout += amount
        if amount and bet.kind is BetKind.STRAIGHT:
            lucky = True
        results.append({"kind": bet.kind.value, "selection": bet.selection, "amount": bet.amount, "payout": amount})
    return Outcome(
        game="roulette",
        bet=total_stake(bets),
        payout=payout,
        won=payout > 0,
        details={"number": number, "color": color, "bets": results, "lucky_number": lucky},
    )


def play_roulette(bets: Sequence[RouletteBet], rng: RandomSource | None = None) -> Outcome:
    return evaluate_spin(spin_wheel(rng), bets)


__all__ = [
    "BetKind",
    "RouletteBet",
    "RED_NUMBERS",
    "BLACK_NUMBERS",
    "ODDS",
    "color_of",
    "spin_wheel",
    "evaluate_spin",
    "play_roulette",
    "total_stake",
]
