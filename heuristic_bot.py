#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from bots.heuristic_bot import BotConfig, HeuristicBot, create_app
from bots.heuristic_bot.config import HEADS_UP_STYLES


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Heuristic poker bot HTTP player")
    parser.add_argument("--host", help="Interface to bind (env BOT_HOST)")
    parser.add_argument("--port", type=int, help="Port to listen on (env PORT, default 1337)")
    parser.add_argument("--log-level", help="Logging level (INFO, DEBUG, ...)")
    parser.add_argument("--hand-log-dir", help="Directory for JSONL showdown logs")
    parser.add_argument("--heads-up-style", choices=HEADS_UP_STYLES, help="Play against a lone aggressor")
    parser.add_argument("--seed", type=int, help="Seed for the strategy RNG")
    return parser.parse_args(argv)


def main() -> None:
    args = parse_args()
    config = BotConfig.from_env().with_overrides(
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        hand_log_dir=args.hand_log_dir,
        heads_up_style=args.heads_up_style,
        seed=args.seed,
    )
    logging.basicConfig(level=config.level, format="%(message)s")
    app = create_app(HeuristicBot(config))
    logging.getLogger("heuristic_bot").info("[listen] http://%s:%s", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
