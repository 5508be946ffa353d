from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable

if TYPE_CHECKING:
    from .types import Card

RANKS = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")
SUITS = ("hearts", "diamonds", "clubs", "spades")
RANK_INDEX: Dict[str, int] = {rank: idx for idx, rank in enumerate(RANKS)}

SUIT_SYMBOLS = {
    "hearts": "♥",
    "diamonds": "♦",
    "clubs": "♣",
    "spades": "♠",
}


def suit_symbol(suit: str) -> str:
    symbol = SUIT_SYMBOLS.get(suit.lower())
    if symbol is None:
        return suit[:1].upper()
    return symbol


def format_cards(cards: Iterable[Card]) -> str:
    return " ".join(f"{card.rank}{suit_symbol(card.suit)}" for card in cards)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
