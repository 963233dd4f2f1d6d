"""Round outcome value object and bet validation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .errors import InsufficientFundsError, InvalidBetError


@dataclass(frozen=True)
class Outcome:
    """Result of one settled round.

    ``payout`` is the gross amount handed back to the player, so a losing
    round has a payout of zero and a push returns the stake.
    """

    game: str
    bet: int
    payout: int
    won: bool
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def net(self) -> int:
        return self.payout - self.bet


def validate_bet(bet: Any, coins: int) -> int:
    """Return ``bet`` if it can be staked from ``coins``."""

    if isinstance(bet, bool) or not isinstance(bet, int):
        raise InvalidBetError(f"bet must be a whole number of coins, got {bet!r}")
    if bet <= 0:
        raise InvalidBetError("bet must be positive")
    if bet > coins:
        raise InsufficientFundsError(bet, coins)
    return bet


def gross_payout(bet: int, odds: int) -> int:
    """Stake plus winnings for a bet paying ``odds`` to 1."""

    return bet * (odds + 1)


__all__ = ["Outcome", "validate_bet", "gross_payout"]
