"""The player progression record and its saved-document form."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from .achievements import Achievement, achievement_from_dict, achievement_to_dict, fresh_catalog, merge_catalog
from .clock import format_timestamp, parse_timestamp
from .errors import MalformedStateError

STARTING_COINS = 5000

REQUIRED_COUNTERS = {
    "coins": "coins",
    "gamesPlayed": "games_played",
    "gamesWon": "games_won",
    "winStreak": "win_streak",
    "highestWinStreak": "highest_win_streak",
    "totalWinnings": "total_winnings",
}


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    coins: int
    date: datetime


@dataclass
class Settings:
    sound_enabled: bool = True
    high_contrast: bool = False
    large_text: bool = False


SETTINGS_KEYS = {
    "soundEnabled": "sound_enabled",
    "highContrast": "high_contrast",
    "largeText": "large_text",
}


@dataclass
class PlayerProgression:
    """Everything persisted about one player."""

    coins: int = STARTING_COINS
    games_played: int = 0
    games_won: int = 0
    win_streak: int = 0
    highest_win_streak: int = 0
    total_winnings: int = 0
    last_daily_reward: Optional[datetime] = None
    achievements: List[Achievement] = field(default_factory=fresh_catalog)
    leaderboard: List[LeaderboardEntry] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)

    @property
    def sound_enabled(self) -> bool:
        return self.settings.sound_enabled

    @property
    def unlocked_achievements(self) -> List[Achievement]:
        return [achievement for achievement in self.achievements if achievement.unlocked]

    def copy(self) -> "PlayerProgression":
        return copy.deepcopy(self)


def initial_state(starting_coins: int = STARTING_COINS) -> PlayerProgression:
    return PlayerProgression(coins=starting_coins)


def to_document(state: PlayerProgression) -> Dict[str, Any]:
    """Serialize ``state`` into the JSON-compatible saved layout."""

    return {
        "coins": state.coins,
        "soundEnabled": state.settings.sound_enabled,
        "achievements": [achievement_to_dict(a) for a in state.achievements],
        "leaderboard": [
            {"name": entry.name, "coins": entry.coins, "date": format_timestamp(entry.date)}
            for entry in state.leaderboard
        ],
        "lastDailyReward": format_timestamp(state.last_daily_reward),
        "gamesPlayed": state.games_played,
        "gamesWon": state.games_won,
        "winStreak": state.win_streak,
        "highestWinStreak": state.highest_win_streak,
        "totalWinnings": state.total_winnings,
        "settings": {key: getattr(state.settings, attr) for key, attr in SETTINGS_KEYS.items()},
    }


def _counter(document: Mapping[str, Any], key: str) -> int:
    if key not in document:
        raise MalformedStateError(f"saved state is missing {key!r}")
    value = document[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != int(value) or value < 0:
        raise MalformedStateError(f"{key!r} must be a non-negative whole number, got {value!r}")
    return int(value)


def _leaderboard_entry(item: Mapping[str, Any]) -> LeaderboardEntry:
    date = parse_timestamp(item["date"])
    if date is None:
        raise MalformedStateError(f"leaderboard entry for {item['name']!r} has no date")
    return LeaderboardEntry(name=str(item["name"]), coins=int(item["coins"]), date=date)


def from_document(document: Any, *, leaderboard_size: int = 10) -> PlayerProgression:
    """Rebuild a progression record from a saved document.

    Raises :class:`MalformedStateError` when the document is not usable.
    """

    if not isinstance(document, Mapping):
        raise MalformedStateError(f"saved state must be an object, got {type(document).__name__}")
    counters = {attr: _counter(document, key) for key, attr in REQUIRED_COUNTERS.items()}
    try:
        achievements = merge_catalog(achievement_from_dict(item) for item in document.get("achievements") or [])
        leaderboard = [_leaderboard_entry(item) for item in document.get("leaderboard") or []]
        raw_settings = dict(document.get("settings") or {})
        # Older saves only carry the top-level sound flag.
        if "soundEnabled" in document:
            raw_settings.setdefault("soundEnabled", document["soundEnabled"])
        settings = Settings(
            **{attr: bool(raw_settings[key]) for key, attr in SETTINGS_KEYS.items() if key in raw_settings}
        )
        last_daily_reward = parse_timestamp(document.get("lastDailyReward"))
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise MalformedStateError(f"saved state is malformed: {exc}") from exc

    leaderboard.sort(key=lambda entry: entry.coins, reverse=True)
    counters["highest_win_streak"] = max(counters["highest_win_streak"], counters["win_streak"])
    return PlayerProgression(
        **counters,
        last_daily_reward=last_daily_reward,
        achievements=achievements,
        leaderboard=leaderboard[:leaderboard_size],
        settings=settings,
    )


__all__ = [
    "PlayerProgression",
    "LeaderboardEntry",
    "Settings",
    "SETTINGS_KEYS",
    "STARTING_COINS",
    "initial_state",
    "to_document",
    "from_document",
]
