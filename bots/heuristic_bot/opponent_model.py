from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List

from .types import ActionKind, ActionRecord, ProfileKey
from .utils import clamp

LOGGER = logging.getLogger("heuristic_bot")

DEFAULT_AGGRESSIVENESS = 0.5
AGGRESSIVENESS_WINDOW = 20
MIN_AGGRESSIVENESS = 0.1
MAX_AGGRESSIVENESS = 1.0


@dataclass
class OpponentProfile:
    game_id: str
    player_id: int
    name: str
    actions: List[ActionRecord] = field(default_factory=list)
    aggressiveness: float = DEFAULT_AGGRESSIVENESS
    showdowns: int = 0
    showdowns_won: int = 0

    @property
    def raises(self) -> int:
        return self._count(ActionKind.RAISE)

    @property
    def calls(self) -> int:
        return self._count(ActionKind.CALL)

    @property
    def folds(self) -> int:
        return self._count(ActionKind.FOLD)

    def _count(self, kind: ActionKind) -> int:
        return sum(1 for record in self.actions if record.action == kind)

    def recompute_aggressiveness(self) -> float:
        recent = self.actions[-AGGRESSIVENESS_WINDOW:]
        if not recent:
            self.aggressiveness = DEFAULT_AGGRESSIVENESS
            return self.aggressiveness
        total = len(recent)
        raise_count = sum(1 for record in recent if record.action == ActionKind.RAISE)
        fold_count = sum(1 for record in recent if record.action == ActionKind.FOLD)
        score = (raise_count / total) * 0.8 + 0.2 * (1 - fold_count / total)
        self.aggressiveness = clamp(score, MIN_AGGRESSIVENESS, MAX_AGGRESSIVENESS)
        return self.aggressiveness


class OpponentModel:
    """Per-game opponent profiles, keyed by ``(game_id, player_id)``."""

    def __init__(self) -> None:
        self._profiles: Dict[ProfileKey, OpponentProfile] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._profiles)

    def get_or_create(self, key: ProfileKey, name: str) -> OpponentProfile:
        with self._lock:
            profile = self._profiles.get(key)
            if profile is None:
                game_id, player_id = key
                profile = OpponentProfile(game_id=game_id, player_id=player_id, name=name)
                self._profiles[key] = profile
            return profile

    def record_action(self, key: ProfileKey, record: ActionRecord, name: str = "") -> float:
        with self._lock:
            profile = self.get_or_create(key, name)
            profile.actions.append(record)
            score = profile.recompute_aggressiveness()
        LOGGER.info(
            "[profile] %s (id %s) %s with bet %s | aggressiveness=%.2f",
            profile.name,
            profile.player_id,
            record.action.value,
            record.bet_amount,
            score,
        )
        return score

    def aggressiveness(self, key: ProfileKey) -> float:
        with self._lock:
            profile = self._profiles.get(key)
            if profile is None:
                return DEFAULT_AGGRESSIVENESS
            return profile.aggressiveness

    def observe_showdown(self, key: ProfileKey, name: str, won: bool) -> None:
        with self._lock:
            profile = self.get_or_create(key, name)
            profile.showdowns += 1
            if won:
                profile.showdowns_won += 1

    def profiles(self, game_id: str) -> List[OpponentProfile]:
        with self._lock:
            return [profile for (game, _), profile in self._profiles.items() if game == game_id]

    def describe(self, key: ProfileKey) -> Dict[str, float | int | str]:
        with self._lock:
            profile = self._profiles.get(key)
            if profile is None:
                return {"aggressiveness": DEFAULT_AGGRESSIVENESS, "actions": 0}
            return {
                "name": profile.name,
                "aggressiveness": round(profile.aggressiveness, 2),
                "actions": len(profile.actions),
                "raises": profile.raises,
                "calls": profile.calls,
                "folds": profile.folds,
                "showdowns": profile.showdowns,
                "showdowns_won": profile.showdowns_won,
            }

    def log_stats(self, game_id: str) -> None:
        LOGGER.info("[profile] === player statistics for game %s ===", game_id)
        for profile in self.profiles(game_id):
            summary = self.describe((game_id, profile.player_id))
            LOGGER.info(
                "[profile] %s (id %s): aggressiveness=%.2f actions=%s raises=%s calls=%s folds=%s showdowns=%s/%s",
                summary["name"],
                profile.player_id,
                summary["aggressiveness"],
                summary["actions"],
                summary["raises"],
                summary["calls"],
                summary["folds"],
                summary["showdowns_won"],
                summary["showdowns"],
            )
