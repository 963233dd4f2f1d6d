"""Two-dice game: seven up / seven down plus doubles."""
from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple

from .errors import InvalidBetError
from .rng import DEFAULT_SOURCE, RandomSource
from .rules import Outcome, gross_payout

DICE_COUNT = 2
FACES = 6


class DiceBet(Enum):
    UNDER = "under"
    OVER = "over"
    SEVEN = "seven"
    DOUBLES = "doubles"


ODDS = {
    DiceBet.UNDER: 1,
    DiceBet.OVER: 1,
    DiceBet.SEVEN: 4,
    DiceBet.DOUBLES: 5,
}


def roll_dice(rng: RandomSource | None = None) -> Tuple[int, ...]:
    source = rng or DEFAULT_SOURCE
    return tuple(source.random_int(1, FACES) for _ in range(DICE_COUNT))


def bet_hits(dice: Sequence[int], kind: DiceBet) -> bool:
    total = sum(dice)
    if kind is DiceBet.UNDER:
        return total < 7
    if kind is DiceBet.OVER:
        return total > 7
    if kind is DiceBet.SEVEN:
        return total == 7
    return len(set(dice)) == 1


def evaluate_roll(dice: Sequence[int], bet: int, kind: DiceBet | str) -> Outcome:
    kind = coerce_bet(kind)
    if len(dice) != DICE_COUNT or any(not 1 <= face <= FACES for face in dice):
        raise ValueError(f"invalid roll {tuple(dice)!r}")
    hit = bet_hits(dice, kind)
    payout = gross_payout(bet, ODDS[kind]) if hit else 0
    return Outcome(
        game="dice",
        bet=bet,
        payout=payout,
        won=hit,
        details={"dice": tuple(dice), "total": sum(dice), "kind": kind.value},
    )


def coerce_bet(kind: DiceBet | str) -> DiceBet:
    if isinstance(kind, DiceBet):
        return kind
    try:
        return DiceBet(str(kind).lower())
    except ValueError:
        raise InvalidBetError(f"unknown dice bet {kind!r}") from None


def play_dice(bet: int, kind: DiceBet | str, rng: RandomSource | None = None) -> Outcome:
    kind = coerce_bet(kind)
    return evaluate_roll(roll_dice(rng), bet, kind)


__all__ = ["DiceBet", "ODDS", "roll_dice", "evaluate_roll", "play_dice", "coerce_bet"]
