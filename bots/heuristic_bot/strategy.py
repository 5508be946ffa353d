from __future__ import annotations

import math
import random
from typing import Optional

from . import decisions as reasons
from .analysis import evaluate_hand_strength
from .config import StrategyConfig
from .context import DecisionContext, OpponentContext
from .decisions import BetDecision
from .opponent_model import DEFAULT_AGGRESSIVENESS, OpponentModel
from .state import poker_round, position_of
from .types import Position, TableSnapshot


class DecisionBuilder:
    def __init__(self, opponent_model: OpponentModel) -> None:
        self.opponent_model = opponent_model

    def build(self, snapshot: TableSnapshot) -> DecisionContext:
        hero = snapshot.acting_seat
        active = snapshot.active_seats()
        return DecisionContext(
            strength=evaluate_hand_strength(hero.hole_cards, snapshot.community_cards),
            position=position_of(snapshot.dealer, snapshot.in_action, len(active)),
            round=poker_round(len(snapshot.community_cards)),
            to_call=snapshot.to_call,
            minimum_raise=snapshot.minimum_raise,
            stack=hero.stack,
            small_blind=snapshot.small_blind,
            pot=snapshot.pot,
            opponents=self.opponent_context(snapshot),
        )

    def opponent_context(self, snapshot: TableSnapshot) -> OpponentContext:
        opponents = snapshot.active_opponents()
        if not opponents:
            return OpponentContext(active=0, mean_aggression=DEFAULT_AGGRESSIVENESS)
        scores = [
            self.opponent_model.aggressiveness(snapshot.profile_key(seat)) for seat in opponents
        ]
        return OpponentContext(active=len(opponents), mean_aggression=sum(scores) / len(scores))


class DecisionEngine:
    def __init__(
        self,
        config: Optional[StrategyConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or StrategyConfig()
        self.rng = rng or random.Random()

    def decide(self, ctx: DecisionContext) -> BetDecision:
        aggressive = ctx.opponents.mean_aggression > self.config.aggressive_opponents_above
        if aggressive and ctx.opponents.heads_up:
            if self.config.heads_up_style == "counter":
                result = self._heads_up_counter(ctx)
            else:
                result = self._heads_up_trap(ctx)
        elif aggressive and ctx.opponents.active > 1:
            result = self._tight(ctx)
        else:
            result = self._baseline(ctx)
        return sanitize_result(ctx, result)

    # ------------------------------------------------------------------
    # Tiers
    # ------------------------------------------------------------------
    def _baseline(self, ctx: DecisionContext) -> BetDecision:
        cfg = self.config
        if ctx.strength < cfg.fold_below:
            return BetDecision(0, reasons.FOLD_WEAK)
        if ctx.strength > cfg.strong_above:
            return BetDecision(big_raise(ctx), reasons.RAISE_STRONG)
        if ctx.strength > cfg.raise_above:
            return BetDecision(small_raise(ctx, self.pot_bet(ctx)), reasons.RAISE_POT)
        if ctx.strength > cfg.call_above and self._cheap(ctx):
            return BetDecision(ctx.to_call, reasons.CALL_MEDIUM)
        return BetDecision(0, reasons.FOLD_PRICE)

    def _tight(self, ctx: DecisionContext) -> BetDecision:
        cfg = self.config
        if ctx.strength > cfg.tight_big_raise_above:
            return BetDecision(big_raise(ctx), reasons.RAISE_STRONG)
        if ctx.strength > cfg.tight_small_raise_above:
            return BetDecision(small_raise(ctx, self.pot_bet(ctx)), reasons.RAISE_POT)
        if ctx.strength > cfg.tight_call_above and self._cheap(ctx):
            return BetDecision(ctx.to_call, reasons.CALL_MEDIUM)
        if ctx.strength < cfg.fold_below:
            return BetDecision(0, reasons.FOLD_WEAK)
        return BetDecision(0, reasons.FOLD_PRICE)

    def _heads_up_trap(self, ctx: DecisionContext) -> BetDecision:
        """Let a lone aggressor keep betting into strong hands."""
        cfg = self.config
        if ctx.strength > cfg.heads_up_strong_above:
            if self.rng.random() < cfg.slow_play_probability:
                return BetDecision(ctx.to_call, reasons.CALL_SLOW_PLAY)
            if ctx.strength > cfg.heads_up_monster_above:
                return BetDecision(huge_raise(ctx), reasons.RAISE_STRONG)
            return BetDecision(big_raise(ctx), reasons.RAISE_STRONG)
        if ctx.strength > cfg.heads_up_medium_above:
            return BetDecision(ctx.to_call, reasons.CALL_DOWN)
        return self._bluff_or_fold(ctx)

    def _heads_up_counter(self, ctx: DecisionContext) -> BetDecision:
        """Take the initiative back from a lone aggressor."""
        cfg = self.config
        if ctx.strength > cfg.heads_up_monster_above:
            return BetDecision(huge_raise(ctx), reasons.RAISE_STRONG)
        if ctx.strength > cfg.heads_up_strong_above:
            if self.rng.random() < cfg.slow_play_probability:
                return BetDecision(big_raise(ctx), reasons.RAISE_STRONG)
            return BetDecision(ctx.to_call, reasons.CALL_SLOW_PLAY)
        if ctx.strength > cfg.heads_up_medium_above:
            if ctx.position == Position.LATE:
                return BetDecision(small_raise(ctx, self.pot_bet(ctx)), reasons.RAISE_POT)
            return BetDecision(ctx.to_call, reasons.CALL_DOWN)
        return self._bluff_or_fold(ctx)

    def _bluff_or_fold(self, ctx: DecisionContext) -> BetDecision:
        probability = self.config.bluff_probability.get(ctx.round, 0.0)
        if probability > 0 and self.rng.random() < probability:
            return BetDecision(small_raise(ctx, self.pot_bet(ctx)), reasons.RAISE_BLUFF)
        return BetDecision(0, reasons.FOLD_WEAK)

    # ------------------------------------------------------------------
    # Sizing
    # ------------------------------------------------------------------
    def pot_bet(self, ctx: DecisionContext) -> int:
        position_factor = self.config.position_factors.get(ctx.position, 1.0)
        round_factor = self.config.round_factors.get(ctx.round, 1.0)
        bet_ratio = ctx.strength * position_factor * round_factor
        return int(math.floor(ctx.pot * bet_ratio + 0.5))

    def _cheap(self, ctx: DecisionContext) -> bool:
        return ctx.to_call <= ctx.small_blind * self.config.call_blinds


def small_raise(ctx: DecisionContext, pot_bet: int) -> int:
    return ctx.to_call + max(ctx.minimum_raise, pot_bet)


def big_raise(ctx: DecisionContext) -> int:
    return ctx.to_call + ctx.minimum_raise * 2


def huge_raise(ctx: DecisionContext) -> int:
    return ctx.to_call + ctx.minimum_raise * 3


def sanitize_result(ctx: DecisionContext, result: BetDecision) -> BetDecision:
    amount = max(0, min(int(result.amount), ctx.stack))
    if amount == result.amount:
        return result
    return BetDecision(amount, result.reason)
