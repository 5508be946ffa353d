from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, List

from .analysis import describe_hand
from .types import Card, TableSnapshot


class HandLogger:
    def __init__(self, directory: str = "logs/hands") -> None:
        self.directory = directory
        os.makedirs(self.directory, exist_ok=True)

    def path_for(self, game_id: str) -> str:
        return os.path.join(self.directory, f"{game_id}.jsonl")

    def log_showdown(self, snapshot: TableSnapshot) -> None:
        payload: dict[str, Any] = {
            "game_id": snapshot.game_id,
            "tournament_id": snapshot.tournament_id,
            "round": snapshot.round,
            "dealer": snapshot.dealer,
            "pot": snapshot.pot,
            "community": _labels(snapshot.community_cards),
            "players": [
                {
                    "id": seat.id,
                    "name": seat.name,
                    "status": seat.status.value,
                    "stack": seat.stack,
                    "bet": seat.bet,
                    "hand": _labels(seat.hole_cards),
                    "description": (
                        describe_hand(seat.hole_cards, snapshot.community_cards)
                        if seat.hole_cards
                        else None
                    ),
                    "amount_won": seat.amount_won,
                }
                for seat in snapshot.players
            ],
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        with open(self.path_for(snapshot.game_id), "a", encoding="utf-8") as handle:
            handle.write(json.dumps(payload))
            handle.write("\n")


def _labels(cards: List[Card]) -> List[str]:
    return [f"{card.rank}{card.suit[0]}" for card in cards]
