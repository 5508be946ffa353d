from __future__ import annotations

from dataclasses import dataclass

from .opponent_model import DEFAULT_AGGRESSIVENESS
from .types import Position, Round


@dataclass
class OpponentContext:
    active: int = 0
    mean_aggression: float = DEFAULT_AGGRESSIVENESS

    @property
    def heads_up(self) -> bool:
        return self.active == 1


@dataclass
class DecisionContext:
    strength: float
    position: Position
    round: Round
    to_call: int
    minimum_raise: int
    stack: int
    small_blind: int
    pot: int
    opponents: OpponentContext
