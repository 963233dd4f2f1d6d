import pytest

from lucky_casino.core.errors import InvalidBetError
from lucky_casino.core.roulette import BLACK_NUMBERS, RED_NUMBERS, BetKind, RouletteBet, color_of, evaluate_spin


def test_wheel_colors():
    assert color_of(0) == "green"
    assert color_of(1) == "red"
    assert color_of(2) == "black"
    assert len(RED_NUMBERS) == len(BLACK_NUMBERS) == 18
    with pytest.raises(ValueError):
        color_of(37)


def test_straight_bet_pays_35_to_1():
    outcome = evaluate_spin(17, [RouletteBet(BetKind.STRAIGHT, 10, 17)])
    assert outcome.payout == 360
    assert outcome.details["lucky_number"]


def test_zero_loses_outside_bets():
    bets = [RouletteBet(kind, 10) for kind in (BetKind.RED, BetKind.BLACK, BetKind.ODD, BetKind.EVEN, BetKind.LOW)]
    outcome = evaluate_spin(0, bets)
    assert outcome.payout == 0
    assert outcome.bet == 50
    assert not outcome.won


def test_mixed_layout():
    bets = [
        RouletteBet(BetKind.RED, 20),
        RouletteBet(BetKind.DOZEN, 10, 3),
        RouletteBet(BetKind.COLUMN, 10, 1),
        RouletteBet(BetKind.STRAIGHT, 5, 0),
    ]
    outcome = evaluate_spin(34, bets)
    assert outcome.details["color"] == "red"
    # red 40 + dozen 30 + column 30
    assert outcome.payout == 100
    assert outcome.bet == 45
    assert not outcome.details["lucky_number"]


@pytest.mark.parametrize(
    "kind, amount, selection",
    [
        (BetKind.STRAIGHT, 10, 37),
        (BetKind.STRAIGHT, 10, None),
        (BetKind.STRAIGHT, 10, True),
        (BetKind.DOZEN, 10, True),
        (BetKind.DOZEN, 10, 4),
        (BetKind.RED, 10, 5),
        (BetKind.RED, 0, None),
        (BetKind.RED, 2.5, None),
    ],
)
def test_invalid_bets(kind, amount, selection):
    with pytest.raises(InvalidBetError):
        RouletteBet(kind, amount, selection)


def test_empty_layout_rejected():
    with pytest.raises(InvalidBetError):
        evaluate_spin(5, [])
