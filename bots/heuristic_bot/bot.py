from __future__ import annotations

import logging
import random
import threading
from typing import Optional

from . import decisions as reasons
from .analysis import describe_hand
from .config import BotConfig
from .decisions import BetDecision
from .logging_utils import HandLogger
from .opponent_model import OpponentModel
from .state import GameStateTracker
from .strategy import DecisionBuilder, DecisionEngine
from .types import TableSnapshot, payload_summary
from .utils import format_cards

LOGGER = logging.getLogger("heuristic_bot")


class HeuristicBot:
    def __init__(
        self,
        config: Optional[BotConfig] = None,
        opponent_model: Optional[OpponentModel] = None,
        rng: Optional[random.Random] = None,
        hand_logger: Optional[HandLogger] = None,
    ) -> None:
        self.config = config or BotConfig()
        self.opponent_model = opponent_model or OpponentModel()
        self.tracker = GameStateTracker()
        self.builder = DecisionBuilder(self.opponent_model)
        self.engine = DecisionEngine(
            self.config.strategy,
            rng or random.Random(self.config.seed),
        )
        if hand_logger is None and self.config.hand_log_dir:
            hand_logger = HandLogger(self.config.hand_log_dir)
        self.hand_logger = hand_logger
        self._lock = threading.Lock()

    @property
    def version(self) -> str:
        return self.config.version

    # ------------------------------------------------------------------
    # Bet requests
    # ------------------------------------------------------------------
    def on_bet_request(self, snapshot: TableSnapshot) -> int:
        with self._lock:
            try:
                decision = self._decide(snapshot)
            except Exception as exc:
                LOGGER.exception("[game %s] failed to choose a bet: %s", snapshot.game_id, exc)
                decision = BetDecision(0, reasons.FOLD_ERROR)
        LOGGER.info(
            "[game %s] betting %s (%s)",
            snapshot.game_id,
            decision.amount,
            decision.reason,
        )
        return decision.amount

    def _decide(self, snapshot: TableSnapshot) -> BetDecision:
        LOGGER.debug("[game %s] bet request %s", snapshot.game_id, payload_summary(snapshot))
        self._observe_opponents(snapshot)
        if not snapshot.players:
            LOGGER.warning("[game %s] no players in game state, folding", snapshot.game_id)
            return BetDecision(0, reasons.FOLD_NO_CARDS)

        hero = snapshot.acting_seat
        if not hero.hole_cards:
            LOGGER.warning("[game %s] no hole cards found, folding", snapshot.game_id)
            return BetDecision(0, reasons.FOLD_NO_CARDS)

        ctx = self.builder.build(snapshot)
        LOGGER.info(
            "[game %s] hole=%s community=%s | %s %s | to_call=%s min_raise=%s stack=%s",
            snapshot.game_id,
            format_cards(hero.hole_cards),
            format_cards(snapshot.community_cards) or "-",
            ctx.round.value,
            ctx.position.value,
            ctx.to_call,
            ctx.minimum_raise,
            ctx.stack,
        )
        LOGGER.debug(
            "[game %s] strength=%.2f opponents=%s mean_aggression=%.2f",
            snapshot.game_id,
            ctx.strength,
            ctx.opponents.active,
            ctx.opponents.mean_aggression,
        )
        return self.engine.decide(ctx)

    def _observe_opponents(self, snapshot: TableSnapshot) -> None:
        hero_id = snapshot.acting_seat.id if snapshot.players else None
        for seat in snapshot.players:
            if seat.id != hero_id:
                self.opponent_model.get_or_create(snapshot.profile_key(seat), seat.name)
        for observed in self.tracker.observe(snapshot):
            self.opponent_model.record_action(
                (snapshot.game_id, observed.seat_id),
                observed.record,
                name=observed.name,
            )

    # ------------------------------------------------------------------
    # Showdown
    # ------------------------------------------------------------------
    def on_showdown(self, snapshot: TableSnapshot) -> None:
        with self._lock:
            try:
                self._record_showdown(snapshot)
            except Exception as exc:
                LOGGER.exception("[showdown] failed to record game %s: %s", snapshot.game_id, exc)

    def _record_showdown(self, snapshot: TableSnapshot) -> None:
        LOGGER.info("[game %s] showdown reached", snapshot.game_id)
        for seat in snapshot.players:
            if not seat.hole_cards:
                LOGGER.debug("[showdown] %s has no hole cards", seat.name)
                continue
            ours = seat.name == self.config.name or seat.version == self.config.version
            won = seat.amount_won > 0
            LOGGER.info(
                "[showdown] %s: %s - %s%s",
                "OUR HAND" if ours else seat.name,
                format_cards(seat.hole_cards),
                describe_hand(seat.hole_cards, snapshot.community_cards),
                f" (WON: {seat.amount_won})" if won else "",
            )
            if not ours:
                self.opponent_model.observe_showdown(snapshot.profile_key(seat), seat.name, won)
        if self.hand_logger:
            self.hand_logger.log_showdown(snapshot)
        if LOGGER.isEnabledFor(logging.DEBUG):
            self.opponent_model.log_stats(snapshot.game_id)
