"""Blackjack scoring and single-hand round flow."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence

from .cards import Card, Deck
from .errors import RoundStateError
from .rng import RandomSource
from .rules import Outcome

LOGGER = logging.getLogger(__name__)

BLACKJACK = 21
DEALER_STANDS_ON = 17


def hand_value(cards: Sequence[Card]) -> int:
    """Best total for ``cards``, demoting Aces from 11 to 1 only while bust."""

    total = sum(card.numeric_value for card in cards)
    soft_aces = sum(1 for card in cards if card.is_ace)
    while total > BLACKJACK and soft_aces:
        total -= 10
        soft_aces -= 1
    return total


def is_soft(cards: Sequence[Card]) -> bool:
    """True when an Ace is still counted as 11."""

    total = sum(card.numeric_value for card in cards)
    soft_aces = sum(1 for card in cards if card.is_ace)
    while total > BLACKJACK and soft_aces:
        total -= 10
        soft_aces -= 1
    return soft_aces > 0


def is_natural(cards: Sequence[Card]) -> bool:
    return len(cards) == 2 and hand_value(cards) == BLACKJACK


def is_bust(cards: Sequence[Card]) -> bool:
    return hand_value(cards) > BLACKJACK


class Phase(Enum):
    PLAYER = auto()
    DEALER = auto()
    SETTLED = auto()


@dataclass(eq=False)
class BlackjackRound:
    """One hand of blackjack against the dealer.

    The deal happens on construction. The player acts with :meth:`hit`,
    :meth:`stand` and :meth:`double_down`; once the player is done the dealer
    plays out and :attr:`outcome` holds the settled result.
    """

    bet: int
    deck: Deck = field(default_factory=Deck)
    dealer_hits_soft_17: bool = True
    player: List[Card] = field(default_factory=list)
    dealer: List[Card] = field(default_factory=list)
    phase: Phase = Phase.PLAYER
    doubled: bool = False
    outcome: Optional[Outcome] = None

    @classmethod
    def deal(cls, bet: int, rng: RandomSource | None = None, *, dealer_hits_soft_17: bool = True) -> "BlackjackRound":
        return cls(bet=bet, deck=Deck(rng=rng), dealer_hits_soft_17=dealer_hits_soft_17)

    def __post_init__(self) -> None:
        if not self.player and not self.dealer:
            for _ in range(2):
                self.player.append(self.deck.draw_one())
                self.dealer.append(self.deck.draw_one())
        self.natural = is_natural(self.player)
        if self.natural or is_natural(self.dealer):
            self._settle()

    @property
    def stake(self) -> int:
        return self.bet * 2 if self.doubled else self.bet

    @property
    def player_value(self) -> int:
        return hand_value(self.player)

    @property
    def dealer_value(self) -> int:
        return hand_value(self.dealer)

    @property
    def dealer_upcard(self) -> Card:
        return self.dealer[0]

    @property
    def is_settled(self) -> bool:
        return self.phase is Phase.SETTLED

    def can_double(self) -> bool:
        return self.phase is Phase.PLAYER and len(self.player) == 2 and not self.doubled

    def hit(self) -> Card:
        self._require_player_turn("hit")
        card = self.deck.draw_one()
        self.player.append(card)
        if is_bust(self.player):
            self._settle()
        elif self.player_value == BLACKJACK:
            self.stand()
        return card

    def stand(self) -> Outcome:
        self._require_player_turn("stand")
        self.phase = Phase.DEALER
        while self.dealer_should_draw():
            self.dealer.append(self.deck.draw_one())
        return self._settle()

    def double_down(self) -> Outcome:
        if not self.can_double():
            raise RoundStateError("doubling is only allowed on the first two cards")
        self.doubled = True
        self.player.append(self.deck.draw_one())
        if is_bust(self.player):
            return self._settle()
        return self.stand()

    def dealer_should_draw(self) -> bool:
        value = self.dealer_value
        if value < DEALER_STANDS_ON:
            return True
        return value == DEALER_STANDS_ON and self.dealer_hits_soft_17 and is_soft(self.dealer)

    def _require_player_turn(self, action: str) -> None:
        if self.phase is not Phase.PLAYER:
            raise RoundStateError(f"cannot {action} once the player's turn is over")

    def _settle(self) -> Outcome:
        player_natural = self.natural
        dealer_natural = is_natural(self.dealer)
        player_value = self.player_value
        dealer_value = self.dealer_value
        stake = self.stake

        if player_natural and dealer_natural:
            result, payout = "push", stake
        elif player_natural:
            result, payout = "blackjack", stake * 5 // 2
        elif dealer_natural:
            result, payout = "dealer_blackjack", 0
        elif player_value > BLACKJACK:
            result, payout = "bust", 0
        elif dealer_value > BLACKJACK:
            result, payout = "dealer_bust", stake * 2
        elif player_value > dealer_value:
            result, payout = "win", stake * 2
        elif player_value == dealer_value:
            result, payout = "push", stake
        else:
            result, payout = "lose", 0

        self.phase = Phase.SETTLED
        self.outcome = Outcome(
            game="blackjack",
            bet=stake,
            payout=payout,
            won=result in {"blackjack", "dealer_bust", "win"},
            details={
                "result": result,
                "player": tuple(self.player),
                "dealer": tuple(self.dealer),
                "player_value": player_value,
                "dealer_value": dealer_value,
                "natural": player_natural,
                "doubled": self.doubled,
            },
        )
        LOGGER.debug("Blackjack settled: %s (%s vs %s)", result, player_value, dealer_value)
        return self.outcome


__all__ = [
    "BlackjackRound",
    "Phase",
    "hand_value",
    "is_soft",
    "is_natural",
    "is_bust",
]
