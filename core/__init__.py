"""Blackjack trainer core - 100% UI-agnostic."""

from core.cards import Card, Shoe, Rank, Suit, create_shoe
from core.hand import Hand, HandValue, evaluate_hand

__all__ = [
    "Card",
    "Shoe",
    "Rank",
    "Suit",
    "create_shoe",
    "Hand",
    "HandValue",
    "evaluate_hand",
]
