from __future__ import annotations

from collections import Counter
from typing import List, Sequence

from .types import Card
from .utils import clamp

HIGH_CARD_INDEX = 8  # rank index of "10"

PAIR_STRENGTH = 0.5
FLUSH_DRAW_STRENGTH = 0.4
STRAIGHT_DRAW_STRENGTH = 0.3
HIGH_CARD_BASE = 0.1


def evaluate_hand_strength(hole: Sequence[Card], community: Sequence[Card]) -> float:
    """Score a hand on a 0-1 scale from a handful of cheap pattern signals.

    Pre-flop the two hole cards are scored from a fixed table. Once community
    cards are out, the combined cards are checked for a pair, four cards of one
    suit and four consecutive ranks, in that order, before falling back to the
    highest hole card.
    """
    if not community:
        return clamp(preflop_strength(hole), 0.0, 1.0)

    cards = [*hole, *community]
    if has_pair(cards):
        return PAIR_STRENGTH
    if has_flush_draw(cards):
        return FLUSH_DRAW_STRENGTH
    if has_straight_draw(cards):
        return STRAIGHT_DRAW_STRENGTH
    return clamp(HIGH_CARD_BASE + high_card_value(hole) / 15, 0.0, 1.0)


def preflop_strength(hole: Sequence[Card]) -> float:
    if len(hole) != 2:
        return 0.0
    first, second = hole
    if first.rank == second.rank:
        return 0.5 + first.index / 30

    suited = first.suit == second.suit
    high = max(first.index, second.index)
    low = min(first.index, second.index)
    connected = high - low <= 2

    if high >= HIGH_CARD_INDEX:
        if low >= HIGH_CARD_INDEX:
            return 0.45
        if suited:
            return 0.35
        return 0.3
    if suited and connected:
        return 0.25
    if suited:
        return 0.2
    if connected:
        return 0.15
    return 0.1


def has_pair(cards: Sequence[Card]) -> bool:
    ranks = [card.rank for card in cards]
    return len(ranks) != len(set(ranks))


def has_flush_draw(cards: Sequence[Card]) -> bool:
    suit_counts = Counter(card.suit for card in cards)
    return any(count >= 4 for count in suit_counts.values())


def has_straight_draw(cards: Sequence[Card]) -> bool:
    return _longest_run(sorted(card.index for card in cards)) >= 4


def high_card_value(cards: Sequence[Card]) -> int:
    if not cards:
        return 0
    return max(card.index for card in cards)


def describe_hand(hole: Sequence[Card], community: Sequence[Card]) -> str:
    cards = [*hole, *community]
    if has_pair(cards):
        return "Pair"
    if has_flush_draw(cards):
        return "Flush draw"
    if has_straight_draw(cards):
        return "Straight draw"
    return "High card"


def _longest_run(ordered: List[int]) -> int:
    if not ordered:
        return 0
    run = 1
    longest = 1
    for previous, current in zip(ordered, ordered[1:]):
        if current == previous + 1:
            run += 1
            longest = max(longest, run)
        elif current != previous:
            run = 1
    return longest
