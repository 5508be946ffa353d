from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .utils import RANK_INDEX, SUITS


class SnapshotError(ValueError):
    """Raised when a game state payload cannot be turned into a snapshot."""


class Round(str, Enum):
    PRE_FLOP = "pre-flop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    UNKNOWN = "unknown"


class Position(str, Enum):
    EARLY = "early"
    MIDDLE = "middle"
    LATE = "late"


class PlayerStatus(str, Enum):
    ACTIVE = "active"
    FOLDED = "folded"
    OUT = "out"


class ActionKind(str, Enum):
    FOLD = "fold"
    CALL = "call"
    RAISE = "raise"


# (game_id, player_id)
ProfileKey = Tuple[str, int]


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    @property
    def index(self) -> int:
        return RANK_INDEX[self.rank]

    @classmethod
    def from_payload(cls, payload: Any) -> "Card":
        if not isinstance(payload, Mapping):
            raise SnapshotError(f"card must be an object, got {payload!r}")
        rank = str(payload.get("rank", ""))
        suit = str(payload.get("suit", "")).lower()
        if rank not in RANK_INDEX:
            raise SnapshotError(f"unknown card rank {rank!r}")
        if suit not in SUITS:
            raise SnapshotError(f"unknown card suit {suit!r}")
        return cls(rank=rank, suit=suit)


@dataclass
class Seat:
    id: int
    name: str
    status: PlayerStatus
    stack: int
    bet: int
    hole_cards: List[Card] = field(default_factory=list)
    amount_won: int = 0
    version: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == PlayerStatus.ACTIVE

    @classmethod
    def from_payload(cls, payload: Any) -> "Seat":
        if not isinstance(payload, Mapping):
            raise SnapshotError(f"player must be an object, got {payload!r}")
        status_raw = payload.get("status")
        try:
            status = PlayerStatus(status_raw)
        except ValueError as exc:
            raise SnapshotError(f"unknown player status {status_raw!r}") from exc
        hole_raw = payload.get("hole_cards") or []
        if not isinstance(hole_raw, list):
            raise SnapshotError("hole_cards must be a list")
        return cls(
            id=_required_int(payload, "id"),
            name=str(payload.get("name", "")),
            status=status,
            stack=_required_int(payload, "stack"),
            bet=_required_int(payload, "bet"),
            hole_cards=[Card.from_payload(card) for card in hole_raw],
            amount_won=_optional_int(payload, "amount_won"),
            version=payload.get("version"),
        )


@dataclass
class TableSnapshot:
    game_id: str
    round: int
    bet_index: int
    small_blind: int
    current_buy_in: int
    pot: int
    minimum_raise: int
    dealer: int
    in_action: int
    players: List[Seat]
    community_cards: List[Card] = field(default_factory=list)
    tournament_id: Optional[str] = None
    orbits: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "TableSnapshot":
        if not isinstance(payload, Mapping):
            raise SnapshotError("game state must be an object")
        if "game_id" not in payload:
            raise SnapshotError("missing field 'game_id'")
        players_raw = payload.get("players")
        if not isinstance(players_raw, list):
            raise SnapshotError("players must be a list")
        community_raw = payload.get("community_cards") or []
        if not isinstance(community_raw, list):
            raise SnapshotError("community_cards must be a list")
        snapshot = cls(
            game_id=str(payload["game_id"]),
            round=_required_int(payload, "round"),
            bet_index=_required_int(payload, "bet_index"),
            small_blind=_required_int(payload, "small_blind"),
            current_buy_in=_required_int(payload, "current_buy_in"),
            pot=_required_int(payload, "pot"),
            minimum_raise=_required_int(payload, "minimum_raise"),
            dealer=_required_int(payload, "dealer"),
            in_action=_required_int(payload, "in_action"),
            players=[Seat.from_payload(entry) for entry in players_raw],
            community_cards=[Card.from_payload(card) for card in community_raw],
            tournament_id=payload.get("tournament_id"),
            orbits=_optional_int(payload, "orbits"),
        )
        if snapshot.players and snapshot.in_action >= len(snapshot.players):
            raise SnapshotError(
                f"in_action {snapshot.in_action} outside of {len(snapshot.players)} seats"
            )
        return snapshot

    # ------------------------------------------------------------------
    # Derived helpers
    # ------------------------------------------------------------------
    @property
    def acting_seat(self) -> Seat:
        return self.players[self.in_action]

    @property
    def to_call(self) -> int:
        return max(0, self.current_buy_in - self.acting_seat.bet)

    def active_seats(self) -> List[Seat]:
        return [seat for seat in self.players if seat.is_active]

    def active_opponents(self) -> List[Seat]:
        hero_id = self.acting_seat.id
        return [seat for seat in self.active_seats() if seat.id != hero_id]

    def profile_key(self, seat: Seat) -> ProfileKey:
        return (self.game_id, seat.id)


@dataclass
class ActionRecord:
    game_id: str
    round: int
    bet_index: int
    action: ActionKind
    bet_amount: int


@dataclass
class ObservedAction:
    seat_id: int
    name: str
    record: ActionRecord


def _required_int(payload: Mapping[str, Any], key: str) -> int:
    if key not in payload:
        raise SnapshotError(f"missing field {key!r}")
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotError(f"field {key!r} must be a number, got {value!r}")
    if value < 0:
        raise SnapshotError(f"field {key!r} must not be negative")
    return int(value)


def _optional_int(payload: Mapping[str, Any], key: str) -> int:
    if payload.get(key) is None:
        return 0
    return _required_int(payload, key)


def payload_summary(snapshot: TableSnapshot) -> Dict[str, Any]:
    return {
        "game_id": snapshot.game_id,
        "round": snapshot.round,
        "bet_index": snapshot.bet_index,
        "pot": snapshot.pot,
        "community": len(snapshot.community_cards),
    }
