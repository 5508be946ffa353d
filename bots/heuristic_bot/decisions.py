from __future__ import annotations

from dataclasses import dataclass

FOLD_WEAK = "Folding weak hand"
FOLD_PRICE = "Folding, cost to call too high"
FOLD_ERROR = "Folding after an evaluation error"
FOLD_NO_CARDS = "Folding, no hole cards"
CALL_MEDIUM = "Calling with medium strength hand"
CALL_SLOW_PLAY = "Slow-playing strong hand"
CALL_DOWN = "Calling down an aggressive opponent"
RAISE_STRONG = "Raising with strong hand"
RAISE_POT = "Raising based on pot odds and hand potential"
RAISE_BLUFF = "Bluff raise against a lone aggressor"


@dataclass
class BetDecision:
    amount: int
    reason: str
