"""Tests for the bet request / showdown facade."""

import json

import pytest

from bots.heuristic_bot.bot import HeuristicBot
from bots.heuristic_bot.config import BotConfig
from bots.heuristic_bot.logging_utils import HandLogger
from bots.heuristic_bot.types import ActionKind, ActionRecord, TableSnapshot


def _players(*bets, statuses=None):
    statuses = statuses or ["active"] * len(bets)
    return [
        {"id": idx, "name": f"p{idx}", "status": status, "stack": 1000, "bet": bet}
        for idx, (bet, status) in enumerate(zip(bets, statuses))
    ]


@pytest.fixture
def bot(seeded_rng):
    return HeuristicBot(rng=seeded_rng)


def test_pocket_aces_raise(bot, make_snapshot):
    # to_call 20, minimum raise 10 -> 20 + 2 * 10
    assert bot.on_bet_request(make_snapshot(hole="As Ah")) == 40


def test_trash_folds(bot, make_snapshot):
    assert bot.on_bet_request(make_snapshot(hole="2c 7d")) == 0


def test_missing_hole_cards_fold(bot, make_snapshot):
    assert bot.on_bet_request(make_snapshot(hole="")) == 0


def test_empty_player_list_folds(bot, make_snapshot):
    assert bot.on_bet_request(make_snapshot(players=[], hole="")) == 0


def test_internal_fault_folds(bot, make_snapshot, monkeypatch, caplog):
    def explode(ctx):
        raise RuntimeError("boom")

    monkeypatch.setattr(bot.engine, "decide", explode)
    with caplog.at_level("ERROR", logger="heuristic_bot"):
        assert bot.on_bet_request(make_snapshot()) == 0
    assert "boom" in caplog.text


def test_bet_never_exceeds_stack(bot, make_payload):
    payload = make_payload(hole="Ks Kh")
    payload["players"][0]["stack"] = 25
    assert bot.on_bet_request(TableSnapshot.from_payload(payload)) == 25


def test_profiles_created_for_opponents(bot, make_snapshot):
    bot.on_bet_request(make_snapshot())
    assert len(bot.opponent_model) == 3
    assert bot.opponent_model.aggressiveness(("game-1", 0)) == 0.5


def test_consecutive_requests_record_opponent_actions(bot, make_snapshot):
    bot.on_bet_request(make_snapshot(players=_players(0, 5, 10, 0), bet_index=1))
    bot.on_bet_request(
        make_snapshot(
            players=_players(20, 5, 60, 60, statuses=["active", "folded", "active", "active"]),
            bet_index=4,
        )
    )
    model = bot.opponent_model
    assert model.describe(("game-1", 1))["folds"] == 1
    assert model.describe(("game-1", 2))["raises"] == 1
    assert model.aggressiveness(("game-1", 2)) == pytest.approx(1.0)
    assert model.aggressiveness(("game-1", 1)) == pytest.approx(0.1)


def test_seat_that_stays_folded_records_a_fold_per_request(bot, make_snapshot):
    folded = ["active", "folded", "active", "active"]
    bot.on_bet_request(make_snapshot(players=_players(0, 5, 10, 0), bet_index=1))
    bot.on_bet_request(make_snapshot(players=_players(0, 5, 10, 0, statuses=folded), bet_index=2))
    bot.on_bet_request(make_snapshot(players=_players(0, 5, 10, 0, statuses=folded), bet_index=3))
    assert bot.opponent_model.describe(("game-1", 1))["folds"] == 2


def test_round_boundary_records_nothing(bot, make_snapshot):
    bot.on_bet_request(make_snapshot(players=_players(0, 5, 10, 0), round=1, bet_index=5))
    bot.on_bet_request(make_snapshot(players=_players(0, 50, 100, 0), round=2, bet_index=0))
    for player_id in (1, 2, 3):
        assert bot.opponent_model.describe(("game-1", player_id))["actions"] == 0


def test_aggressive_table_tightens_play(make_snapshot):
    bot = HeuristicBot()
    for seat in (1, 2, 3):
        for idx in range(5):
            bot.opponent_model.record_action(
                ("game-1", seat),
                _raise_record(idx),
            )
    # suited ace: 0.35, raises at a neutral table but folds against three aggressors
    assert bot.on_bet_request(make_snapshot(hole="As 4s", current_buy_in=40)) == 0
    assert HeuristicBot().on_bet_request(make_snapshot(hole="As 4s", current_buy_in=40)) > 0


def _raise_record(idx):
    return ActionRecord(game_id="game-1", round=0, bet_index=idx, action=ActionKind.RAISE, bet_amount=50)


def test_showdown_updates_profiles_and_logs_hand(tmp_path, make_payload, seeded_rng):
    config = BotConfig(name="player-0")
    bot = HeuristicBot(config, rng=seeded_rng, hand_logger=HandLogger(str(tmp_path)))
    payload = make_payload(community="Kh Qd 5c 9s 2h")
    payload["players"][2]["hole_cards"] = [{"rank": "K", "suit": "spades"}, {"rank": "3", "suit": "clubs"}]
    payload["players"][2]["amount_won"] = 120
    payload["players"][3]["hole_cards"] = [{"rank": "7", "suit": "spades"}, {"rank": "8", "suit": "clubs"}]

    bot.on_showdown(TableSnapshot.from_payload(payload))

    winner = bot.opponent_model.describe(("game-1", 2))
    loser = bot.opponent_model.describe(("game-1", 3))
    assert (winner["showdowns"], winner["showdowns_won"]) == (1, 1)
    assert (loser["showdowns"], loser["showdowns_won"]) == (1, 0)
    assert bot.opponent_model.describe(("game-1", 0))["actions"] == 0
    assert "showdowns" not in bot.opponent_model.describe(("game-1", 0))

    lines = (tmp_path / "game-1.jsonl").read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[0])
    assert record["community"] == ["Kh", "Qd", "5c", "9s", "2h"]
    assert record["players"][2]["description"] == "Pair"
    assert record["players"][2]["amount_won"] == 120


def test_showdown_never_raises(bot, make_snapshot, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(bot.opponent_model, "observe_showdown", explode)
    snapshot = make_snapshot()
    snapshot.players[1].hole_cards = list(snapshot.players[0].hole_cards)
    bot.on_showdown(snapshot)


def test_version_comes_from_config():
    assert HeuristicBot(BotConfig(version="v9")).version == "v9"
