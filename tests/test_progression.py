from datetime import timedelta

import pytest

from lucky_casino.core import achievements
from lucky_casino.core.blackjack import BlackjackRound
from lucky_casino.core.cards import Deck, parse_cards
from lucky_casino.core.config import CasinoConfig
from lucky_casino.core.persist import ManualScheduler, MemoryStorage
from lucky_casino.core.poker import PokerRound
from lucky_casino.core.roulette import BetKind, RouletteBet
from lucky_casino.core.session import CasinoSession

from helpers import ScriptedSource


def make_session(rng, config=None, storage=None, clock=None):
    kwargs = {"clock": clock} if clock is not None else {}
    return CasinoSession(
        config or CasinoConfig(),
        storage=storage if storage is not None else MemoryStorage(),
        scheduler=ManualScheduler(),
        rng=rng,
        **kwargs,
    )


def stack_blackjack(monkeypatch, tokens):
    def deal(cls, bet, rng=None, *, dealer_hits_soft_17=True):
        return cls(bet=bet, deck=Deck(cards=parse_cards(tokens)), dealer_hits_soft_17=dealer_hits_soft_17)

    monkeypatch.setattr(BlackjackRound, "deal", classmethod(deal))


def stack_poker(monkeypatch, tokens):
    def deal(cls, bet, rng=None):
        return cls(bet=bet, deck=Deck(cards=parse_cards(tokens)))

    monkeypatch.setattr(PokerRound, "deal", classmethod(deal))


def unlocked_ids(session):
    return {achievement.id for achievement in session.unlocked_achievements}


def test_fresh_session_starts_with_default_coins(session):
    assert session.coins == 5000
    assert session.state.games_played == 0
    assert len(session.state.achievements) == len(achievements.CATALOG)
    assert not session.unlocked_achievements


def test_coins_never_go_negative(session):
    session.update_coins(-10**6)
    assert session.coins == 0


def test_streaks_and_first_win(session):
    assert session.update_coins(100, True) == [achievements.FIRST_WIN]
    session.update_coins(100, True)
    unlocked = session.update_coins(100, True)
    assert achievements.THREE_IN_ROW in unlocked
    assert session.state.highest_win_streak == 3
    assert session.state.total_winnings == 300

    session.update_coins(-50, False)
    assert session.state.win_streak == 0
    assert session.state.highest_win_streak == 3
    assert session.state.games_played == 4
    assert session.state.games_won == 3


def test_high_roller(session):
    assert achievements.HIGH_ROLLER in session.update_coins(5000, True)
    assert session.update_coins(10, True) == []


def test_unknown_achievement_is_ignored(session):
    assert not session.unlock_achievement("moon_landing")
    assert session.unlock_achievement(achievements.JACKPOT)
    assert not session.unlock_achievement(achievements.JACKPOT)


def test_declined_bets_consume_no_randomness():
    rng = ScriptedSource([])
    session = make_session(rng)
    assert session.play_slots(10**9).reason == "Insufficient funds"
    assert not session.play_slots(0).accepted
    assert not session.play_dice(100, "sideways").accepted
    assert not session.play_roulette([]).accepted
    assert rng.calls == 0
    assert session.coins == 5000
    assert session.state.games_played == 0


def test_jackpot_unlocks_once():
    session = make_session(ScriptedSource([7] * 6))
    events = []
    session.subscribe(events.append)

    first = session.play_slots(50)
    assert first.outcome.payout == 10000
    assert session.coins == 5000 - 50 + 10000
    session.play_slots(50)

    jackpot_events = [e for e in events if e.kind == "achievement_unlocked" and e.payload["id"] == achievements.JACKPOT]
    assert len(jackpot_events) == 1
    assert {achievements.JACKPOT, achievements.FIRST_WIN, achievements.HIGH_ROLLER} <= unlocked_ids(session)


def test_slots_loss_counts_one_game():
    session = make_session(ScriptedSource([0, 1, 2]))
    result = session.play_slots(100)
    assert result.accepted
    assert result.outcome.payout == 0
    assert session.coins == 4900
    assert session.state.games_played == 1
    assert session.state.win_streak == 0


def test_roulette_lucky_number():
    session = make_session(ScriptedSource([17]))
    result = session.play_roulette([RouletteBet(BetKind.STRAIGHT, 10, 17), RouletteBet(BetKind.RED, 20)])
    assert result.outcome.payout == 360
    assert session.coins == 5000 - 30 + 360
    assert achievements.ROULETTE_LUCKY in unlocked_ids(session)


def test_dice_round():
    session = make_session(ScriptedSource([3, 4]))
    result = session.play_dice(100, "seven")
    assert result.outcome.payout == 500
    assert session.coins == 5400
    assert session.state.games_won == 1


def test_blackjack_natural_is_credited_on_deal(monkeypatch):
    stack_blackjack(monkeypatch, ["AS", "9H", "KD", "7C"])
    session = make_session(ScriptedSource([]))
    result = session.start_blackjack(100)
    assert result.round.is_settled
    assert session.coins == 5150
    assert achievements.BLACKJACK_21 in unlocked_ids(session)
    # Crediting again is a no-op.
    session.settle_blackjack(result.round)
    assert session.coins == 5150


def test_blackjack_stand_and_settle_once(monkeypatch):
    stack_blackjack(monkeypatch, ["10S", "9H", "9D", "8C"])
    session = make_session(ScriptedSource([]))
    round_ = session.start_blackjack(100).round
    assert not session.settle_blackjack(round_).accepted

    result = session.blackjack_stand(round_)
    assert result.outcome.details["result"] == "win"
    assert session.coins == 5100
    assert not session.blackjack_stand(round_).accepted
    session.settle_blackjack(round_)
    assert session.coins == 5100


def test_blackjack_push_refunds_and_breaks_streak(monkeypatch):
    stack_blackjack(monkeypatch, ["10S", "10H", "8D", "8C"])
    session = make_session(ScriptedSource([]))
    session.update_coins(100, True)
    round_ = session.start_blackjack(100).round
    session.blackjack_stand(round_)
    assert session.coins == 5100
    assert session.state.win_streak == 0


def test_double_down_needs_funds(monkeypatch):
    stack_blackjack(monkeypatch, ["5S", "10H", "6D", "7C", "10D"])
    session = make_session(ScriptedSource([]), config=CasinoConfig(starting_coins=150))
    round_ = session.start_blackjack(100).round
    assert session.double_down(round_).reason == "Insufficient funds"
    assert session.blackjack_hit(round_).outcome.payout == 200
    assert session.coins == 250


def test_double_down_stakes_extra_bet(monkeypatch):
    stack_blackjack(monkeypatch, ["5S", "10H", "6D", "7C", "10D"])
    session = make_session(ScriptedSource([]))
    round_ = session.start_blackjack(100).round
    result = session.double_down(round_)
    assert result.outcome.payout == 400
    assert session.coins == 5000 - 200 + 400


def test_poker_round(monkeypatch):
    stack_poker(monkeypatch, ["JS", "JH", "2C", "5D", "9S", "3H", "4C", "8D"])
    session = make_session(ScriptedSource([]))
    started = session.start_poker(100)
    assert started.outcome is None
    assert session.coins == 4900

    assert not session.draw_poker(started.round, [9]).accepted
    result = session.draw_poker(started.round, [0, 1])
    assert result.outcome.payout == 100
    assert session.coins == 5000
    assert not session.draw_poker(started.round).accepted


def test_daily_reward_window(session, clock):
    first = session.claim_daily_reward()
    assert first.success
    assert 100 <= first.amount <= 500
    assert session.coins == 5000 + first.amount

    again = session.claim_daily_reward()
    assert not again.success
    assert again.message == "Daily reward already claimed today"

    clock.advance(hours=23)
    assert not session.can_claim_daily
    clock.advance(hours=1)
    assert session.claim_daily_reward().success


def test_daily_reward_after_clock_moves_backwards(session, clock):
    session.claim_daily_reward()
    clock.now -= timedelta(days=2)
    assert session.can_claim_daily


def test_leaderboard_is_sorted_and_bounded():
    session = make_session(ScriptedSource([]), config=CasinoConfig(leaderboard_size=3))
    for name, delta in [("ann", 0), ("bo", 500), ("cy", -1000), ("di", 2000)]:
        session.update_coins(delta)
        session.add_to_leaderboard(name)
    assert [entry.name for entry in session.state.leaderboard] == ["di", "bo", "ann"]
    assert session.add_to_leaderboard("   ") is None
    assert len(session.state.leaderboard) == 3


def test_settings(session):
    session.update_settings(high_contrast=True, volume=11)
    assert session.state.settings.high_contrast
    assert not hasattr(session.state.settings, "volume")
    assert session.toggle_sound() is False
    assert session.state.sound_enabled is False


def test_saves_are_debounced(session, storage, scheduler):
    session.update_coins(10)
    session.update_coins(10)
    session.add_to_leaderboard("ann")
    assert scheduler.requests == 3
    assert storage.writes == 0
    scheduler.flush()
    assert storage.writes == 1
    assert storage.get("lucky-fun-casino-state")["coins"] == 5020


def test_force_save_cancels_pending_save(session, storage, scheduler):
    session.update_coins(10)
    assert session.force_save()
    assert not scheduler.pending
    assert storage.writes == 1


def test_state_survives_a_new_session(session, storage):
    session.update_coins(250, True)
    session.add_to_leaderboard("ann")
    session.close()

    reloaded = make_session(ScriptedSource([]), storage=storage)
    assert reloaded.coins == 5250
    assert reloaded.state.games_won == 1
    assert achievements.FIRST_WIN in unlocked_ids(reloaded)
    assert reloaded.state.leaderboard[0].name == "ann"


def test_reset(session, storage, scheduler):
    session.update_coins(100, True)
    events = []
    session.subscribe(events.append)
    assert session.reset_casino_data()
    assert session.coins == 5000
    assert session.state.games_played == 0
    assert not session.unlocked_achievements
    assert not scheduler.pending
    assert storage.get("lucky-fun-casino-state")["gamesWon"] == 0
    assert [event.kind for event in events] == ["reset"]


def test_events_and_unsubscribe(session):
    events = []
    unsubscribe = session.subscribe(events.append)
    session.update_coins(100, True)
    assert [event.kind for event in events] == ["coins_changed", "achievement_unlocked"]
    unsubscribe()
    session.update_coins(100, True)
    assert len(events) == 2


def test_failing_listener_does_not_break_session(session):
    def explode(event):
        raise RuntimeError("boom")

    session.subscribe(explode)
    session.update_coins(10)
    assert session.coins == 5010


def test_snapshot_is_detached(session):
    snapshot = session.snapshot()
    session.update_coins(10)
    assert snapshot.coins == 5000


@pytest.mark.parametrize("bet", [-1, 2.5, "100"])
def test_invalid_bets_declined(session, bet):
    assert not session.play_slots(bet).accepted
    assert session.coins == 5000


def test_winning_rounds_build_a_streak():
    session = make_session(ScriptedSource([3, 4] * 3 + [1, 1]))
    for _ in range(3):
        assert session.play_dice(100, "seven").outcome.won
    assert session.state.win_streak == 3
    assert session.state.highest_win_streak == 3
    assert session.state.games_played == 3
    assert session.state.games_won == 3
    assert achievements.THREE_IN_ROW in unlocked_ids(session)

    session.play_dice(100, "seven")
    assert session.state.win_streak == 0
    assert session.state.highest_win_streak == 3
    assert session.state.games_played == 4
    assert session.coins == 5000 + 3 * 400 - 100


def test_stake_alone_keeps_streak(monkeypatch):
    stack_blackjack(monkeypatch, ["10S", "9H", "9D", "8C"])
    session = make_session(ScriptedSource([]))
    session.update_coins(100, True)
    round_ = session.start_blackjack(100).round
    assert session.coins == 5000
    assert session.state.win_streak == 1
    assert session.state.games_played == 1
    session.blackjack_stand(round_)
    assert session.state.win_streak == 2
    assert session.state.games_played == 2


def test_daily_reward_event_carries_new_balance(session):
    events = []
    session.subscribe(events.append)
    reward = session.claim_daily_reward()
    assert events[-1].kind == "coins_changed"
    assert events[-1].payload["coins"] == 5000 + reward.amount
