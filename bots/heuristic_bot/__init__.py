from .bot import HeuristicBot
from .config import BotConfig, StrategyConfig
from .service import create_app

__all__ = ["BotConfig", "HeuristicBot", "StrategyConfig", "create_app"]
