import json

from bots.heuristic_bot.logging_utils import HandLogger
from bots.heuristic_bot.types import TableSnapshot


def test_creates_directory_and_appends_lines(tmp_path, make_payload):
    directory = tmp_path / "nested" / "hands"
    logger = HandLogger(str(directory))
    snapshot = TableSnapshot.from_payload(make_payload(community="Kh Qd 5c"))

    logger.log_showdown(snapshot)
    logger.log_showdown(snapshot)

    lines = (directory / "game-1.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    record = json.loads(lines[0])
    assert record["game_id"] == "game-1"
    assert record["tournament_id"] == "tournament-1"
    assert record["players"][0]["hand"] == ["As", "Ah"]
    assert record["players"][0]["description"] == "Pair"
    assert record["players"][1]["hand"] == []
    assert record["players"][1]["description"] is None
    assert "timestamp" in record
