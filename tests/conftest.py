"""Pytest fixtures for building game states."""

import random

import pytest

from bots.heuristic_bot.types import Card, TableSnapshot

SUIT_LETTERS = {"h": "hearts", "d": "diamonds", "c": "clubs", "s": "spades"}


def card_payloads(labels):
    """Turn ``"As 10h"`` into game-server card objects."""
    return [{"rank": label[:-1], "suit": SUIT_LETTERS[label[-1]]} for label in labels.split()]


def parse_cards(labels):
    return [Card.from_payload(payload) for payload in card_payloads(labels)]


def game_state_payload(
    players=None,
    hole="As Ah",
    community="",
    game_id="game-1",
    round=0,
    bet_index=1,
    in_action=0,
    dealer=3,
    current_buy_in=20,
    minimum_raise=10,
    small_blind=5,
    pot=30,
):
    if players is None:
        players = [
            {"id": idx, "name": f"player-{idx}", "status": "active", "stack": 1000, "bet": 0}
            for idx in range(4)
        ]
        players[1]["bet"] = 5
        players[2]["bet"] = 10
    players = [dict(player) for player in players]
    if hole and players:
        players[in_action]["hole_cards"] = card_payloads(hole)
    return {
        "tournament_id": "tournament-1",
        "game_id": game_id,
        "round": round,
        "bet_index": bet_index,
        "small_blind": small_blind,
        "current_buy_in": current_buy_in,
        "pot": pot,
        "minimum_raise": minimum_raise,
        "dealer": dealer,
        "orbits": 0,
        "in_action": in_action,
        "players": players,
        "community_cards": card_payloads(community) if community else [],
    }


@pytest.fixture
def cards():
    return parse_cards


@pytest.fixture
def make_payload():
    return game_state_payload


@pytest.fixture
def make_snapshot():
    def _make(**kwargs):
        return TableSnapshot.from_payload(game_state_payload(**kwargs))

    return _make


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


class FixedRandom(random.Random):
    """Random source that replays a fixed sequence of draws."""

    def __init__(self, *values):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


@pytest.fixture
def fixed_rng():
    return FixedRandom
