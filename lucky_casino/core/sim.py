"""Monte Carlo return-to-player estimates for the chance games."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from .dice import DiceBet, play_dice
from .rng import RandomSource
from .roulette import RouletteBet, play_roulette
from .rules import Outcome
from .slots import play_slots

Rule = Callable[[int, RandomSource], Outcome]


@dataclass(frozen=True)
class ReturnEstimate:
    rounds: int
    wagered: int
    returned: int
    hits: int

    @property
    def rtp(self) -> float:
        return self.returned / self.wagered if self.wagered else 0.0

    @property
    def hit_rate(self) -> float:
        return self.hits / self.rounds if self.rounds else 0.0


class ReturnEstimator:
    def __init__(self, *, rng: RandomSource | None = None, rounds: int = 10_000, bet: int = 100) -> None:
        self.rng = rng or RandomSource()
        self.rounds = rounds
        self.bet = bet

    def estimate(self, rule: Rule) -> ReturnEstimate:
        """Play ``rule`` repeatedly with a fixed stake and total the results."""

        wagered = returned = hits = 0
        for _ in range(self.rounds):
            outcome = rule(self.bet, self.rng)
            wagered += outcome.bet
            returned += outcome.payout
            if outcome.payout > 0:
                hits += 1
        return ReturnEstimate(rounds=self.rounds, wagered=wagered, returned=returned, hits=hits)

    def slots(self, reference_bet: int = 50) -> ReturnEstimate:
        return self.estimate(lambda bet, rng: play_slots(bet, rng, reference_bet=reference_bet))

    def dice(self, kind: DiceBet) -> ReturnEstimate:
        return self.estimate(lambda bet, rng: play_dice(bet, kind, rng))

    def roulette(self, bets: Sequence[RouletteBet]) -> ReturnEstimate:
        """Estimate a fixed layout of ``bets``; the configured stake is ignored."""

        return self.estimate(lambda _bet, rng: play_roulette(bets, rng))


__all__ = ["ReturnEstimator", "ReturnEstimate"]
