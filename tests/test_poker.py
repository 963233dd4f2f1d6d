import pytest

from lucky_casino.core.cards import Deck, parse_cards
from lucky_casino.core.errors import InvalidBetError, RoundStateError
from lucky_casino.core.poker import PokerRound, evaluate_hand


def stacked(bet, tokens):
    return PokerRound(bet=bet, deck=Deck(cards=parse_cards(tokens)))


def test_held_cards_stay_put():
    round_ = stacked(10, ["JS", "JH", "2C", "5D", "9S", "3H", "4C", "8D"])
    outcome = round_.draw([0, 1])
    assert [str(card) for card in round_.hand] == ["J♠", "J♥", "3♥", "4♣", "8♦"]
    assert outcome.details["paying_hand"] == "Jacks or Better"
    assert outcome.payout == 10
    assert not outcome.won


def test_draw_twice_rejected():
    round_ = stacked(10, ["JS", "JH", "JC", "5D", "5S"])
    outcome = round_.draw(range(5))
    assert outcome.payout == 90
    assert outcome.won
    with pytest.raises(RoundStateError):
        round_.draw()


def test_bad_hold_position():
    round_ = stacked(10, ["JS", "JH", "JC", "5D", "5S"])
    with pytest.raises(InvalidBetError):
        round_.draw([5])
    assert not round_.is_settled


@pytest.mark.parametrize(
    "tokens, payout",
    [
        (["9H", "10H", "JH", "QH", "KH"], 500),
        (["9H", "9D", "9C", "9S", "KH"], 250),
        (["2H", "7H", "9H", "JH", "KH"], 60),
        (["AH", "2D", "3C", "4S", "5H"], 40),
        (["9H", "9D", "9C", "2S", "KH"], 30),
        (["9H", "9D", "2C", "2S", "KH"], 20),
        (["10H", "10D", "2C", "3S", "KH"], 0),
    ],
)
def test_pay_table(tokens, payout):
    assert evaluate_hand(parse_cards(tokens), 10).payout == payout
