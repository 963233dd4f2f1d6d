"""Error taxonomy for the casino engine."""
from __future__ import annotations


class CasinoError(Exception):
    """Base class for every engine error."""


class InvalidBetError(CasinoError, ValueError):
    """A bet or player decision that cannot be accepted."""


class InsufficientFundsError(InvalidBetError):
    def __init__(self, bet: int, coins: int) -> None:
        super().__init__(f"Bet of {bet} exceeds balance of {coins}")
        self.bet = bet
        self.coins = coins


class RoundStateError(CasinoError, RuntimeError):
    """An action that is not legal in the round's current phase."""


class PersistenceError(CasinoError):
    """Storage could not be read or written."""


class MalformedStateError(PersistenceError):
    """A saved document exists but does not describe a player record."""


__all__ = [
    "CasinoError",
    "InvalidBetError",
    "InsufficientFundsError",
    "RoundStateError",
    "PersistenceError",
    "MalformedStateError",
]
