"""Three-reel slot machine rules."""
from __future__ import annotations

from collections import Counter
from enum import Enum
from fractions import Fraction
from typing import Dict, Sequence, Tuple

from .rng import DEFAULT_SOURCE, RandomSource
from .rules import Outcome

REFERENCE_BET = 50
REEL_COUNT = 3


class Symbol(Enum):
    CHERRY = "🍒"
    LEMON = "🍋"
    ORANGE = "🍊"
    GRAPES = "🍇"
    BELL = "🔔"
    STAR = "⭐"
    DIAMOND = "💎"
    SEVEN = "7️⃣"

    @property
    def glyph(self) -> str:
        return self.value


SYMBOLS: Tuple[Symbol, ...] = tuple(Symbol)
JACKPOT_SYMBOL = Symbol.SEVEN

# Payout for three of a kind on a REFERENCE_BET stake.
TRIPLE_PAYOUTS: Dict[Symbol, int] = {
    Symbol.CHERRY: 500,
    Symbol.LEMON: 750,
    Symbol.ORANGE: 1000,
    Symbol.GRAPES: 1250,
    Symbol.BELL: 2000,
    Symbol.STAR: 3000,
    Symbol.DIAMOND: 5000,
    Symbol.SEVEN: 10000,
}

PAIR_MULTIPLIERS: Dict[Symbol, Fraction] = {
    Symbol.SEVEN: Fraction(2),
    Symbol.DIAMOND: Fraction(3, 2),
    Symbol.BELL: Fraction(5, 4),
    Symbol.STAR: Fraction(1),
}
DEFAULT_PAIR_MULTIPLIER = Fraction(1, 2)


def spin_reels(rng: RandomSource | None = None) -> Tuple[Symbol, ...]:
    source = rng or DEFAULT_SOURCE
    return tuple(source.choice(SYMBOLS) for _ in range(REEL_COUNT))


def triple_payout(symbol: Symbol, bet: int, reference_bet: int = REFERENCE_BET) -> int:
    return TRIPLE_PAYOUTS[symbol] * bet // reference_bet


def pair_payout(symbol: Symbol, bet: int) -> int:
    multiplier = PAIR_MULTIPLIERS.get(symbol, DEFAULT_PAIR_MULTIPLIER)
    return bet * multiplier.numerator // multiplier.denominator


def evaluate_spin(symbols: Sequence[Symbol], bet: int, *, reference_bet: int = REFERENCE_BET) -> Outcome:
    """Settle a spin that landed on ``symbols``."""

    if len(symbols) != REEL_COUNT:
        raise ValueError(f"expected {REEL_COUNT} symbols, got {len(symbols)}")
    counts = Counter(symbols)
    symbol, count = counts.most_common(1)[0]
    jackpot = False
    if count == 3:
        payout = triple_payout(symbol, bet, reference_bet)
        match = "triple"
        jackpot = symbol is JACKPOT_SYMBOL
    elif count == 2:
        payout = pair_payout(symbol, bet)
        match = "pair"
    else:
        payout = 0
        match = "none"
    return Outcome(
        game="slots",
        bet=bet,
        payout=payout,
        won=payout > 0,
        details={
            "symbols": tuple(symbols),
            "match": match,
            "matched_symbol": symbol if count > 1 else None,
            "jackpot": jackpot,
        },
    )


def play_slots(bet: int, rng: RandomSource | None = None, *, reference_bet: int = REFERENCE_BET) -> Outcome:
    return evaluate_spin(spin_reels(rng), bet, reference_bet=reference_bet)


__all__ = [
    "Symbol",
    "SYMBOLS",
    "JACKPOT_SYMBOL",
    "REFERENCE_BET",
    "TRIPLE_PAYOUTS",
    "PAIR_MULTIPLIERS",
    "spin_reels",
    "evaluate_spin",
    "play_slots",
]
