from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional

from .types import Position, Round

HEADS_UP_STYLES = ("trap", "counter")


@dataclass(frozen=True)
class StrategyConfig:
    fold_below: float = 0.15
    strong_above: float = 0.5
    raise_above: float = 0.3
    call_above: float = 0.2
    call_blinds: int = 4
    aggressive_opponents_above: float = 0.7
    # Multi-way versus an aggressive table
    tight_big_raise_above: float = 0.7
    tight_small_raise_above: float = 0.5
    tight_call_above: float = 0.35
    # Heads-up versus an aggressive opponent
    heads_up_style: str = "trap"
    heads_up_strong_above: float = 0.5
    heads_up_monster_above: float = 0.7
    heads_up_medium_above: float = 0.3
    slow_play_probability: float = 0.6
    bluff_probability: Dict[Round, float] = field(
        default_factory=lambda: {
            Round.PRE_FLOP: 0.0,
            Round.FLOP: 0.1,
            Round.TURN: 0.15,
            Round.RIVER: 0.25,
            Round.UNKNOWN: 0.0,
        }
    )
    position_factors: Dict[Position, float] = field(
        default_factory=lambda: {
            Position.LATE: 1.2,
            Position.MIDDLE: 1.0,
            Position.EARLY: 0.8,
        }
    )
    round_factors: Dict[Round, float] = field(
        default_factory=lambda: {
            Round.PRE_FLOP: 0.8,
            Round.FLOP: 1.0,
            Round.TURN: 1.2,
            Round.RIVER: 1.5,
            Round.UNKNOWN: 1.5,
        }
    )

    def __post_init__(self) -> None:
        if self.heads_up_style not in HEADS_UP_STYLES:
            raise ValueError(
                f"heads_up_style must be one of {', '.join(HEADS_UP_STYLES)}, got {self.heads_up_style!r}"
            )
        for street, probability in self.bluff_probability.items():
            if not 0.0 <= probability <= 0.25:
                raise ValueError(f"bluff probability for {street.value} must be within [0, 0.25]")
        if not 0.0 <= self.slow_play_probability <= 1.0:
            raise ValueError("slow_play_probability must be within [0, 1]")


@dataclass(frozen=True)
class BotConfig:
    name: str = "What Is Poker"
    version: str = "What Is Poker v1.1.0"
    host: str = "0.0.0.0"
    port: int = 1337
    log_level: str = "INFO"
    hand_log_dir: Optional[str] = None
    seed: Optional[int] = None
    strategy: StrategyConfig = field(default_factory=StrategyConfig)

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BotConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        strategy = StrategyConfig(
            heads_up_style=env.get("BOT_HEADS_UP_STYLE", defaults.strategy.heads_up_style),
        )
        return cls(
            name=env.get("BOT_NAME", defaults.name),
            version=env.get("BOT_VERSION", defaults.version),
            host=env.get("BOT_HOST", defaults.host),
            port=_parse_int(env, "PORT", defaults.port),
            log_level=env.get("BOT_LOG_LEVEL", defaults.log_level),
            hand_log_dir=env.get("BOT_HAND_LOG_DIR") or None,
            seed=_parse_int(env, "BOT_SEED", None),
            strategy=strategy,
        )

    def with_overrides(self, **overrides: object) -> "BotConfig":
        values = {key: value for key, value in overrides.items() if value is not None}
        heads_up_style = values.pop("heads_up_style", None)
        config = replace(self, **values)
        if heads_up_style is not None:
            config = replace(config, strategy=replace(config.strategy, heads_up_style=heads_up_style))
        return config


def _parse_int(env: Mapping[str, str], key: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from exc
