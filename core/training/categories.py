"""Drill categories: which family of basic strategy decisions a spot belongs to."""

from enum import Enum
from typing import Iterable

from core.cards import Card, card_value
from core.hand import evaluate_hand, is_pair_hand

_STRONG_UPCARDS = (9, 10, 11)
_MID_UPCARDS = (3, 4, 5, 6)


class DrillCategory(Enum):
    """Decision families used to group drill spots and mistakes."""

    HARD_12_16_VS_2_6 = "hard_12_16_vs_2_6"
    HARD_12_16_VS_7_A = "hard_12_16_vs_7_A"
    SOFT_DOUBLE_CORE = "soft_double_core"
    SOFT18_EXCEPTIONS = "soft18_exceptions"
    PAIR_SPLITS_CORE = "pair_splits_core"
    DOUBLE_9_10_11 = "double_9_10_11"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


def categorize_hand(player_hand: Iterable[Card], dealer_upcard: Card) -> DrillCategory:
    """
    Place a spot in its drill category.

    Pairs are checked first. Soft 18 against 3-6 or 9-A is its own
    exception family; other soft 13-18 hands against 3-6 are the soft
    doubling core. Hard 9-11 are doubling spots and hard 12-16 split on
    whether the dealer shows 2-6 or 7-A.
    """
    cards = list(player_hand)
    value = evaluate_hand(cards)
    dealer_value = card_value(dealer_upcard)

    if is_pair_hand(cards):
        return DrillCategory.PAIR_SPLITS_CORE

    if value.is_soft and value.total <= 19:
        if value.total == 18 and (dealer_value in _STRONG_UPCARDS or dealer_value in _MID_UPCARDS):
            return DrillCategory.SOFT18_EXCEPTIONS
        if 13 <= value.total <= 18 and 3 <= dealer_value <= 6:
            return DrillCategory.SOFT_DOUBLE_CORE

    if not value.is_soft:
        if value.total in (9, 10, 11):
            return DrillCategory.DOUBLE_9_10_11
        if 12 <= value.total <= 16:
            if dealer_value <= 6:
                return DrillCategory.HARD_12_16_VS_2_6
            return DrillCategory.HARD_12_16_VS_7_A

    return DrillCategory.OTHER


def category_tip(category: DrillCategory, player_hand: Iterable[Card], dealer_upcard: Card) -> str:
    """One-line tip for a category, phrased for the spot."""
    total = evaluate_hand(player_hand).total
    upcard = str(dealer_upcard.rank)

    if category is DrillCategory.HARD_12_16_VS_2_6:
        return f"Stand {total} vs {upcard}: the dealer's bust rate is high."
    if category is DrillCategory.HARD_12_16_VS_7_A:
        return f"Hit {total} vs {upcard}: a strong upcard means you must improve."
    if category is DrillCategory.SOFT_DOUBLE_CORE:
        return f"Double soft {total} vs {upcard}: live outs plus the dealer's bust odds."
    if category is DrillCategory.SOFT18_EXCEPTIONS:
        if card_value(dealer_upcard) in _STRONG_UPCARDS:
            return f"A,7 hits vs {upcard}: 18 trails strong dealer upcards."
        return f"A,7 doubles vs {upcard}: a good spot for aggressive play."
    if category is DrillCategory.PAIR_SPLITS_CORE:
        return "Follow the pair rules: split, stand or double as basic strategy says."
    if category is DrillCategory.DOUBLE_9_10_11:
        return f"Double {total} vs {upcard}: a high starting total wins often."
    return "Follow basic strategy for optimal EV."


def category_why(category: DrillCategory, player_hand: Iterable[Card], dealer_upcard: Card) -> str:
    """Longer explanation for a category."""
    if category is DrillCategory.HARD_12_16_VS_2_6:
        return "Small dealer upcards bust more often; hitting risks breaking your hand for little EV gain."
    if category is DrillCategory.HARD_12_16_VS_7_A:
        return "Strong dealer upcards put you behind; taking a card gives you outs to improve."
    if category is DrillCategory.SOFT_DOUBLE_CORE:
        return "You have many live outs plus the dealer's bust odds, so a one-card double has positive EV."
    if category is DrillCategory.SOFT18_EXCEPTIONS:
        if card_value(dealer_upcard) in _STRONG_UPCARDS:
            return "Against strong upcards 18 is often behind; hitting recovers EV that standing leaves."
        return "Doubling against mid-range dealer cards captures the edge of your flexible hand."
    if category is DrillCategory.PAIR_SPLITS_CORE:
        return "Pair strategy weighs splitting into two better hands against playing a good total as it is."
    if category is DrillCategory.DOUBLE_9_10_11:
        return "High starting totals win often with a one-card draw; doubling captures that edge."
    return "Basic strategy maximizes long-term expected value across all decisions."
