"""HTTP endpoint the tournament server talks to.

The server posts form fields ``action`` and ``game_state`` (JSON) to ``/`` and
expects plain-text answers: a chip amount for ``bet_request``, the version
string for ``version`` and ``OK`` for everything else.
"""
from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import FastAPI, Form
from fastapi.responses import PlainTextResponse

from .bot import HeuristicBot
from .types import SnapshotError, TableSnapshot

LOGGER = logging.getLogger("heuristic_bot")


def parse_game_state(raw: Optional[str]) -> TableSnapshot:
    if not raw:
        raise SnapshotError("missing game_state")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"game_state is not valid JSON: {exc}") from exc
    return TableSnapshot.from_payload(payload)


def create_app(bot: Optional[HeuristicBot] = None) -> FastAPI:
    bot = bot or HeuristicBot()
    app = FastAPI(title="heuristic-bot", version=bot.version)
    app.state.bot = bot

    @app.get("/", response_class=PlainTextResponse)
    def health() -> str:
        return "OK"

    @app.post("/", response_class=PlainTextResponse)
    def handle(action: str = Form(""), game_state: Optional[str] = Form(None)) -> str:
        if action == "bet_request":
            try:
                snapshot = parse_game_state(game_state)
            except SnapshotError as exc:
                LOGGER.warning("[bet_request] invalid game state, folding: %s", exc)
                return "0"
            return str(bot.on_bet_request(snapshot))
        if action == "showdown":
            try:
                snapshot = parse_game_state(game_state)
            except SnapshotError as exc:
                LOGGER.warning("[showdown] invalid game state: %s", exc)
                return "OK"
            bot.on_showdown(snapshot)
            return "OK"
        if action == "version":
            return bot.version
        return "OK"

    return app
