"""Achievement catalog and the unlock rules checked after every settlement."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional

from .clock import format_timestamp, parse_timestamp

if TYPE_CHECKING:
    from .progression import PlayerProgression

LOGGER = logging.getLogger(__name__)

FIRST_WIN = "first_win"
THREE_IN_ROW = "three_in_row"
JACKPOT = "jackpot"
HIGH_ROLLER = "high_roller"
BLACKJACK_21 = "blackjack_21"
ROULETTE_LUCKY = "roulette_lucky"


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    title: str
    description: str


CATALOG = (
    AchievementDefinition(FIRST_WIN, "First Victory", "Win your first game"),
    AchievementDefinition(THREE_IN_ROW, "Hot Streak", "Win 3 games in a row"),
    AchievementDefinition(JACKPOT, "Jackpot Winner", "Hit a jackpot in slots"),
    AchievementDefinition(HIGH_ROLLER, "High Roller", "Accumulate 10,000 coins"),
    AchievementDefinition(BLACKJACK_21, "Perfect 21", "Get a natural blackjack"),
    AchievementDefinition(ROULETTE_LUCKY, "Lucky Number", "Win on a single number bet in roulette"),
)
CATALOG_IDS = tuple(definition.id for definition in CATALOG)


@dataclass
class Achievement:
    id: str
    title: str
    description: str
    unlocked: bool = False
    unlocked_at: Optional[datetime] = None

    @classmethod
    def from_definition(cls, definition: AchievementDefinition) -> "Achievement":
        return cls(definition.id, definition.title, definition.description)

    def unlock(self, when: datetime) -> bool:
        """Mark as unlocked; returns False when it already was."""

        if self.unlocked:
            return False
        self.unlocked = True
        self.unlocked_at = when
        return True


def fresh_catalog() -> List[Achievement]:
    return [Achievement.from_definition(definition) for definition in CATALOG]


def merge_catalog(saved: Iterable[Achievement]) -> List[Achievement]:
    """Align saved achievements with the catalog.

    Entries are matched by id; new catalog ids come back locked and ids no
    longer in the catalog are dropped.
    """

    by_id: Dict[str, Achievement] = {achievement.id: achievement for achievement in saved}
    merged = []
    for definition in CATALOG:
        existing = by_id.get(definition.id)
        merged.append(existing if existing is not None else Achievement.from_definition(definition))
    return merged


def find(achievements: Iterable[Achievement], achievement_id: str) -> Optional[Achievement]:
    return next((a for a in achievements if a.id == achievement_id), None)


def unlock(achievements: Iterable[Achievement], achievement_id: str, when: datetime) -> bool:
    achievement = find(achievements, achievement_id)
    if achievement is None:
        LOGGER.warning("Ignoring unknown achievement id %r", achievement_id)
        return False
    if achievement.unlock(when):
        LOGGER.info("Achievement unlocked: %s", achievement.title)
        return True
    return False


def evaluate(
    state: "PlayerProgression",
    *,
    is_win: bool,
    now: datetime,
    high_roller_threshold: int = 10000,
    win_streak_target: int = 3,
) -> List[str]:
    """Check the stat-driven rules against ``state``; return newly unlocked ids."""

    triggered = []
    if is_win and state.games_won == 1:
        triggered.append(FIRST_WIN)
    if state.win_streak >= win_streak_target:
        triggered.append(THREE_IN_ROW)
    if state.coins >= high_roller_threshold:
        triggered.append(HIGH_ROLLER)
    return [achievement_id for achievement_id in triggered if unlock(state.achievements, achievement_id, now)]


def achievement_to_dict(achievement: Achievement) -> Dict[str, Any]:
    return {
        "id": achievement.id,
        "title": achievement.title,
        "description": achievement.description,
        "unlocked": achievement.unlocked,
        "unlockedAt": format_timestamp(achievement.unlocked_at),
    }


def achievement_from_dict(payload: Mapping[str, Any]) -> Achievement:
    unlocked_at = payload.get("unlockedAt")
    unlocked = bool(payload.get("unlocked", False))
    return Achievement(
        id=str(payload["id"]),
        title=str(payload.get("title", "")),
        description=str(payload.get("description", "")),
        unlocked=unlocked,
        unlocked_at=parse_timestamp(unlocked_at) if unlocked else None,
    )


__all__ = [
    "Achievement",
    "AchievementDefinition",
    "CATALOG",
    "CATALOG_IDS",
    "evaluate",
    "fresh_catalog",
    "merge_catalog",
    "unlock",
    "find",
]
