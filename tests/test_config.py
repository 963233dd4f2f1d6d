import json

import pytest

from lucky_casino.app import load_config
from lucky_casino.core.config import STORAGE_KEY, CasinoConfig, load_casino_config


def test_load_casino_config_with_overrides(tmp_path):
    config_path = tmp_path / "casino.json"
    config_path.write_text(
        json.dumps(
            {
                "starting_coins": "2000",
                "save_debounce_seconds": 0,
                "bet_amounts": [10, 20, 40],
                "dealer_hits_soft_17": False,
                "table_name": "ignored",
            }
        )
    )

    config = load_casino_config(config_path)
    assert config.starting_coins == 2000
    assert config.save_debounce_seconds == 0.0
    assert config.bet_amounts == (10, 20, 40)
    assert config.dealer_hits_soft_17 is False
    # Untouched keys keep their defaults.
    assert config.storage_key == STORAGE_KEY
    assert config.leaderboard_size == 10


def test_load_casino_config_rejects_non_object(tmp_path):
    config_path = tmp_path / "casino.json"
    config_path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError):
        load_casino_config(config_path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"starting_coins": -1},
        {"daily_reward_min": 600},
        {"leaderboard_size": 0},
        {"slot_reference_bet": 0},
        {"bet_amounts": (50, 0)},
    ],
)
def test_invalid_config_values(overrides):
    with pytest.raises(ValueError):
        CasinoConfig(**overrides)


def test_app_load_config_falls_back_to_defaults(tmp_path):
    assert load_config(["casino"]) == CasinoConfig()
    assert load_config(["casino", str(tmp_path / "missing.json")]) == CasinoConfig()

    broken = tmp_path / "broken.json"
    broken.write_text(json.dumps({"leaderboard_size": 0}))
    assert load_config(["casino", str(broken)]) == CasinoConfig()
