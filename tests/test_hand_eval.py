from lucky_casino.core.cards import parse_cards
from lucky_casino.core.hand_eval import HandCategory, compare_hands, rank_five
from lucky_casino.core.poker import evaluate_hand, paying_hand


def test_rank_royal_flush():
    rank = rank_five(parse_cards(["AH", "KH", "QH", "JH", "10H"]))
    assert rank.category is HandCategory.STRAIGHT_FLUSH
    assert rank.is_royal
    assert rank.describe() == "Royal Flush"


def test_wheel_is_five_high_straight():
    rank = rank_five(parse_cards(["AS", "2D", "3H", "4C", "5S"]))
    assert rank.category is HandCategory.STRAIGHT
    assert rank.tiebreaker == (5, 4, 3, 2, 1)


def test_compare_pairs_vs_trips():
    hero = parse_cards(["AH", "AD", "7S", "9H", "2D"])
    villain = parse_cards(["KH", "KD", "KS", "9C", "4D"])
    assert compare_hands(hero, villain) < 0


def test_rank_full_house_and_two_pair():
    assert rank_five(parse_cards(["AH", "AD", "AC", "KH", "KD"])).category is HandCategory.FULL_HOUSE
    two_pair = rank_five(parse_cards(["9H", "9D", "4C", "4H", "KD"]))
    assert two_pair.category is HandCategory.TWO_PAIR
    assert two_pair.tiebreaker == (9, 4, 13)


def test_jacks_or_better_threshold():
    assert paying_hand(rank_five(parse_cards(["JH", "JD", "2C", "5H", "9S"]))) == "Jacks or Better"
    assert paying_hand(rank_five(parse_cards(["10H", "10D", "2C", "5H", "9S"]))) is None


def test_royal_flush_pays_top_of_table():
    outcome = evaluate_hand(parse_cards(["AS", "KS", "QS", "JS", "10S"]), 5)
    assert outcome.payout == 4000
    assert outcome.won
