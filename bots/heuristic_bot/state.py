from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .types import (
    ActionKind,
    ActionRecord,
    ObservedAction,
    PlayerStatus,
    Position,
    Round,
    TableSnapshot,
)

LOGGER = logging.getLogger("heuristic_bot")

ROUND_BY_COMMUNITY_COUNT = {
    0: Round.PRE_FLOP,
    3: Round.FLOP,
    4: Round.TURN,
    5: Round.RIVER,
}


def poker_round(community_count: int) -> Round:
    return ROUND_BY_COMMUNITY_COUNT.get(community_count, Round.UNKNOWN)


def position_of(dealer: int, acting: int, active_count: int) -> Position:
    """Classify the acting seat as early, middle or late relative to the dealer.

    Tables with fewer than three active players collapse the early band (and
    with one player the middle band too), so heads-up play is always middle or
    late.
    """
    if active_count <= 0:
        return Position.LATE
    offset = (acting - dealer - 1 + active_count) % active_count
    if offset < active_count // 3:
        return Position.EARLY
    if offset < (2 * active_count) // 3:
        return Position.MIDDLE
    return Position.LATE


@dataclass
class PreviousSnapshot:
    game_id: str
    round: int
    bet_index: int
    bets: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def capture(cls, snapshot: TableSnapshot) -> "PreviousSnapshot":
        return cls(
            game_id=snapshot.game_id,
            round=snapshot.round,
            bet_index=snapshot.bet_index,
            bets={seat.id: seat.bet for seat in snapshot.players},
        )

    def is_comparable(self, snapshot: TableSnapshot) -> bool:
        return (
            self.game_id == snapshot.game_id
            and self.round == snapshot.round
            and self.bet_index < snapshot.bet_index
        )


def infer_actions(previous: PreviousSnapshot, current: TableSnapshot) -> List[ObservedAction]:
    """Classify what every other seat did between two snapshots of one round.

    A seat whose status is ``folded`` folded, on every diff while it stays
    folded. A seat whose bet grew raised when the new bet tops every bet of
    the previous snapshot and called otherwise; matching the old maximum
    counts as a call. Unchanged or shrinking bets are not actions.
    """
    hero_id = current.acting_seat.id if current.players else None
    max_previous_bet = max(previous.bets.values(), default=0)
    observed: List[ObservedAction] = []
    for seat in current.players:
        if seat.id == hero_id or seat.status == PlayerStatus.OUT:
            continue
        previous_bet = previous.bets.get(seat.id, 0)
        kind: Optional[ActionKind] = None
        if seat.status == PlayerStatus.FOLDED:
            kind = ActionKind.FOLD
        elif seat.bet > previous_bet:
            kind = ActionKind.RAISE if seat.bet > max_previous_bet else ActionKind.CALL
        if kind is None:
            continue
        observed.append(
            ObservedAction(
                seat_id=seat.id,
                name=seat.name,
                record=ActionRecord(
                    game_id=current.game_id,
                    round=current.round,
                    bet_index=current.bet_index,
                    action=kind,
                    bet_amount=seat.bet,
                ),
            )
        )
    return observed


class GameStateTracker:
    """Keeps the last snapshot seen so the next one can be diffed against it."""

    def __init__(self) -> None:
        self.previous: Optional[PreviousSnapshot] = None

    def observe(self, snapshot: TableSnapshot) -> List[ObservedAction]:
        previous = self.previous
        self.previous = PreviousSnapshot.capture(snapshot)
        if previous is None or not previous.is_comparable(snapshot):
            LOGGER.debug(
                "[game %s] fresh betting sequence | round=%s bet_index=%s",
                snapshot.game_id,
                snapshot.round,
                snapshot.bet_index,
            )
            return []
        return infer_actions(previous, snapshot)
