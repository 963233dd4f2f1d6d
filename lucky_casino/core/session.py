"""Session orchestration: the only place the progression record is mutated."""
from __future__ import annotations

import logging
import threading
import weakref
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from . import achievements
from .blackjack import BlackjackRound
from .clock import Clock, utc_now
from .config import CasinoConfig
from .dice import DiceBet, coerce_bet, play_dice
from .errors import InsufficientFundsError, InvalidBetError, RoundStateError
from .persist import JsonFileStorage, ProgressionStore, SaveScheduler, Storage, ThreadingSaveScheduler
from .poker import PokerRound
from .progression import SETTINGS_KEYS, LeaderboardEntry, PlayerProgression, initial_state
from .rng import RandomSource
from .roulette import RouletteBet, play_roulette, total_stake
from .rules import Outcome, validate_bet
from .slots import play_slots

LOGGER = logging.getLogger(__name__)

SETTINGS_ATTRS = frozenset(SETTINGS_KEYS.values())


@dataclass(frozen=True)
class PlayResult:
    """What the presentation layer gets back from a play request."""

    accepted: bool
    outcome: Optional[Outcome] = None
    reason: str = ""
    round: Any = None


@dataclass(frozen=True)
class DailyReward:
    success: bool
    amount: int
    message: str


@dataclass(frozen=True)
class SessionEvent:
    kind: str
    payload: Dict[str, Any] = field(default_factory=dict)


Listener = Callable[[SessionEvent], None]


def declined(reason: str) -> PlayResult:
    return PlayResult(accepted=False, reason=reason)


class CasinoSession:
    """Owns one player's progression record and its persistence.

    Every public mutation runs under a single re-entrant lock, applies all of
    its field updates, then asks the scheduler for a debounced save.
    """

    def __init__(
        self,
        config: CasinoConfig | None = None,
        *,
        storage: Storage | None = None,
        scheduler: SaveScheduler | None = None,
        rng: RandomSource | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.config = config or CasinoConfig()
        self.store = ProgressionStore(
            storage if storage is not None else JsonFileStorage(self.config.data_dir),
            self.config.storage_key,
            starting_coins=self.config.starting_coins,
            leaderboard_size=self.config.leaderboard_size,
        )
        self.scheduler = scheduler if scheduler is not None else ThreadingSaveScheduler(self.config.save_debounce_seconds)
        self.rng = rng or RandomSource()
        self.clock = clock
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._credited: "weakref.WeakSet[Any]" = weakref.WeakSet()
        self._state = self.store.load()

    # ---------------- Reads ----------------

    @property
    def state(self) -> PlayerProgression:
        """Live record; callers must not mutate it directly."""

        return self._state

    def snapshot(self) -> PlayerProgression:
        with self._lock:
            return self._state.copy()

    @property
    def coins(self) -> int:
        return self._state.coins

    @property
    def unlocked_achievements(self) -> List[achievements.Achievement]:
        with self._lock:
            return list(self._state.unlocked_achievements)

    @property
    def can_claim_daily(self) -> bool:
        with self._lock:
            return self._daily_reward_ready()

    # ---------------- Events ----------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, kind: str, **payload: Any) -> None:
        event = SessionEvent(kind, payload)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                LOGGER.exception("Session listener failed on %s", kind)

    # ---------------- Persistence ----------------

    def _schedule_save(self) -> None:
        self.scheduler.schedule(self._deferred_save)

    def _deferred_save(self) -> None:
        with self._lock:
            state = self._state.copy()
        if not self.store.save(state):
            LOGGER.error("Failed to save casino state")

    def force_save(self) -> bool:
        """Write the current record now, dropping any pending debounced save."""

        with self._lock:
            self.scheduler.cancel()
            success = self.store.save(self._state)
        if not success:
            LOGGER.error("Failed to force save casino state")
        return success

    def close(self) -> bool:
        return self.force_save()

    # ---------------- Progression operations ----------------

    def update_coins(self, amount: int, is_win: bool = False) -> List[str]:
        """Apply a coin delta and the stats that go with it.

        Returns the ids of achievements unlocked by this update.
        """

        with self._lock:
            state = self._state
            state.coins = max(0, state.coins + amount)
            state.games_played += 1
            if is_win:
                state.games_won += 1
                state.win_streak += 1
                state.total_winnings += abs(amount)
            else:
                state.win_streak = 0
            state.highest_win_streak = max(state.highest_win_streak, state.win_streak)
            unlocked = achievements.evaluate(
                state,
                is_win=is_win,
                now=self.clock(),
                high_roller_threshold=self.config.high_roller_threshold,
                win_streak_target=self.config.win_streak_target,
            )
            coins = state.coins
            self._schedule_save()
        self._emit("coins_changed", coins=coins, amount=amount, is_win=is_win)
        for achievement_id in unlocked:
            self._emit("achievement_unlocked", id=achievement_id)
        return unlocked

    def unlock_achievement(self, achievement_id: str) -> bool:
        with self._lock:
            unlocked = achievements.unlock(self._state.achievements, achievement_id, self.clock())
            if unlocked:
                self._schedule_save()
        if unlocked:
            self._emit("achievement_unlocked", id=achievement_id)
        return unlocked

    def _daily_reward_ready(self) -> bool:
        last = self._state.last_daily_reward
        if last is None:
            return True
        interval = timedelta(hours=self.config.daily_reward_interval_hours)
        return abs(self.clock() - last) >= interval

    def claim_daily_reward(self) -> DailyReward:
        with self._lock:
            if not self._daily_reward_ready():
                return DailyReward(False, 0, "Daily reward already claimed today")
            amount = self.rng.random_int(self.config.daily_reward_min, self.config.daily_reward_max)
            self._state.coins += amount
            self._state.last_daily_reward = self.clock()
            coins = self._state.coins
            self._schedule_save()
        LOGGER.info("Daily reward claimed: %d coins", amount)
        self._emit("coins_changed", coins=coins, amount=amount, is_win=False)
        return DailyReward(True, amount, f"You received {amount} coins!")

    def add_to_leaderboard(self, name: str) -> Optional[LeaderboardEntry]:
        name = (name or "").strip()
        if not name:
            LOGGER.info("Ignoring leaderboard entry without a name")
            return None
        with self._lock:
            entry = LeaderboardEntry(name=name, coins=self._state.coins, date=self.clock())
            board = sorted(self._state.leaderboard + [entry], key=lambda e: e.coins, reverse=True)
            self._state.leaderboard = board[: self.config.leaderboard_size]
            self._schedule_save()
        return entry

    def update_settings(self, **changes: bool) -> None:
        with self._lock:
            for key, value in changes.items():
                if key not in SETTINGS_ATTRS:
                    LOGGER.warning("Ignoring unknown setting %r", key)
                    continue
                setattr(self._state.settings, key, bool(value))
            self._schedule_save()

    def toggle_sound(self) -> bool:
        with self._lock:
            enabled = not self._state.settings.sound_enabled
            self.update_settings(sound_enabled=enabled)
        return enabled

    def reset_casino_data(self) -> bool:
        """Start over from the initial record and save it straight away."""

        with self._lock:
            self.scheduler.cancel()
            self._state = initial_state(self.config.starting_coins)
            saved = self.store.save(self._state)
        LOGGER.info("Casino data reset")
        self._emit("reset", coins=self._state.coins)
        return saved

    # ---------------- Rounds ----------------

    def _stake(self, bet: Any) -> Optional[str]:
        """Validate and deduct a stake; returns a decline reason on failure."""

        try:
            validate_bet(bet, self._state.coins)
        except InsufficientFundsError as exc:
            LOGGER.info("Declined bet: %s", exc)
            return "Insufficient funds"
        except InvalidBetError as exc:
            LOGGER.info("Declined bet: %s", exc)
            return str(exc)
        self._deduct(bet)
        return None

    def _deduct(self, amount: int) -> None:
        """Take a stake off the balance; streaks and game counts wait for settlement."""

        with self._lock:
            self._state.coins = max(0, self._state.coins - amount)
            coins = self._state.coins
            self._schedule_save()
        self._emit("coins_changed", coins=coins, amount=-amount, is_win=False)

    def _settle(self, outcome: Outcome) -> None:
        self.update_coins(outcome.payout, outcome.won)
        self._emit("round_settled", outcome=outcome)

    def play_slots(self, bet: int) -> PlayResult:
        with self._lock:
            reason = self._stake(bet)
            if reason:
                return declined(reason)
            outcome = play_slots(bet, self.rng, reference_bet=self.config.slot_reference_bet)
            self._settle(outcome)
            if outcome.details["jackpot"]:
                self.unlock_achievement(achievements.JACKPOT)
        return PlayResult(True, outcome)

    def play_roulette(self, bets: Sequence[RouletteBet] | RouletteBet) -> PlayResult:
        if isinstance(bets, RouletteBet):
            bets = [bets]
        bets = list(bets)
        if not bets:
            return declined("Place at least one bet")
        with self._lock:
            reason = self._stake(total_stake(bets))
            if reason:
                return declined(reason)
            outcome = play_roulette(bets, self.rng)
            self._settle(outcome)
            if outcome.details["lucky_number"]:
                self.unlock_achievement(achievements.ROULETTE_LUCKY)
        return PlayResult(True, outcome)

    def play_dice(self, bet: int, kind: DiceBet | str) -> PlayResult:
        try:
            kind = coerce_bet(kind)
        except InvalidBetError as exc:
            return declined(str(exc))
        with self._lock:
            reason = self._stake(bet)
            if reason:
                return declined(reason)
            outcome = play_dice(bet, kind, self.rng)
            self._settle(outcome)
        return PlayResult(True, outcome)

    def _credit_round(self, round_: BlackjackRound | PokerRound) -> None:
        if round_ in self._credited or round_.outcome is None:
            return
        self._credited.add(round_)
        self._settle(round_.outcome)

    def start_blackjack(self, bet: int) -> PlayResult:
        """Stake ``bet`` and deal; the round settles itself on a natural."""

        with self._lock:
            reason = self._stake(bet)
            if reason:
                return declined(reason)
            round_ = BlackjackRound.deal(bet, self.rng, dealer_hits_soft_17=self.config.dealer_hits_soft_17)
            if round_.natural:
                self.unlock_achievement(achievements.BLACKJACK_21)
            self._credit_round(round_)
        return PlayResult(True, round_.outcome, round=round_)

    def blackjack_hit(self, round_: BlackjackRound) -> PlayResult:
        with self._lock:
            try:
                round_.hit()
            except RoundStateError as exc:
                return declined(str(exc))
            self._credit_round(round_)
        return PlayResult(True, round_.outcome, round=round_)

    def blackjack_stand(self, round_: BlackjackRound) -> PlayResult:
        with self._lock:
            try:
                round_.stand()
            except RoundStateError as exc:
                return declined(str(exc))
            self._credit_round(round_)
        return PlayResult(True, round_.outcome, round=round_)

    def double_down(self, round_: BlackjackRound) -> PlayResult:
        with self._lock:
            if not round_.can_double():
                return declined("Cannot double right now")
            if round_.bet > self._state.coins:
                return declined("Insufficient funds")
            self._deduct(round_.bet)
            round_.double_down()
            self._credit_round(round_)
        return PlayResult(True, round_.outcome, round=round_)

    def settle_blackjack(self, round_: BlackjackRound) -> PlayResult:
        """Credit a round the player finished by acting on it directly."""

        with self._lock:
            if not round_.is_settled:
                return declined("The player's turn is not over yet")
            self._credit_round(round_)
        return PlayResult(True, round_.outcome, round=round_)

    def start_poker(self, bet: int) -> PlayResult:
        with self._lock:
            reason = self._stake(bet)
            if reason:
                return declined(reason)
            round_ = PokerRound.deal(bet, self.rng)
        return PlayResult(True, None, round=round_)

    def draw_poker(self, round_: PokerRound, holds: Iterable[int] = ()) -> PlayResult:
        with self._lock:
            try:
                round_.draw(holds)
            except (InvalidBetError, RoundStateError) as exc:
                return declined(str(exc))
            self._credit_round(round_)
        return PlayResult(True, round_.outcome, round=round_)


__all__ = ["CasinoSession", "PlayResult", "DailyReward", "SessionEvent"]
