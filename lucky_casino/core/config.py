"""Tunable settings for a casino session."""
from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Tuple

DATA_PATH = Path(__file__).resolve().parent.parent / "data"
STORAGE_KEY = "lucky-fun-casino-state"

_INT_FIELDS = (
    "starting_coins",
    "daily_reward_min",
    "daily_reward_max",
    "leaderboard_size",
    "high_roller_threshold",
    "win_streak_target",
    "slot_reference_bet",
)
_FLOAT_FIELDS = ("save_debounce_seconds", "daily_reward_interval_hours")


@dataclass
class CasinoConfig:
    starting_coins: int = 5000
    storage_key: str = STORAGE_KEY
    data_dir: Path = DATA_PATH
    save_debounce_seconds: float = 1.0
    daily_reward_min: int = 100
    daily_reward_max: int = 500
    daily_reward_interval_hours: float = 24
    leaderboard_size: int = 10
    high_roller_threshold: int = 10000
    win_streak_target: int = 3
    slot_reference_bet: int = 50
    bet_amounts: Tuple[int, ...] = field(default_factory=lambda: (50, 100, 250, 500, 1000))
    dealer_hits_soft_17: bool = True

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir).expanduser()
        self.bet_amounts = tuple(int(amount) for amount in self.bet_amounts)
        for name in _INT_FIELDS:
            setattr(self, name, int(getattr(self, name)))
        for name in _FLOAT_FIELDS:
            setattr(self, name, float(getattr(self, name)))
        if self.starting_coins < 0:
            raise ValueError("starting_coins cannot be negative")
        if not 0 < self.daily_reward_min <= self.daily_reward_max:
            raise ValueError("daily reward range must satisfy 0 < min <= max")
        if self.leaderboard_size <= 0:
            raise ValueError("leaderboard_size must be positive")
        if self.slot_reference_bet <= 0:
            raise ValueError("slot_reference_bet must be positive")
        if self.save_debounce_seconds < 0:
            raise ValueError("save_debounce_seconds cannot be negative")
        if any(amount <= 0 for amount in self.bet_amounts):
            raise ValueError("bet_amounts must all be positive")


def _config_kwargs(payload: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(CasinoConfig)}
    return {key: value for key, value in payload.items() if key in known}


def load_casino_config(path: Path | str) -> CasinoConfig:
    """Read a JSON config file; missing keys keep their defaults."""

    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return CasinoConfig(**_config_kwargs(payload))


def default_config() -> CasinoConfig:
    return CasinoConfig()


__all__ = ["CasinoConfig", "DATA_PATH", "STORAGE_KEY", "load_casino_config", "default_config"]
