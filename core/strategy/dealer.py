"""Dealer play policy."""

import logging
from typing import Callable, Iterable, Literal

from core.cards import Card
from core.hand import evaluate_hand
from core.strategy.rules import RuleSet, TableVariant

logger = logging.getLogger(__name__)


def _hits_soft_17(variant: TableVariant | RuleSet | str) -> bool:
    if isinstance(variant, RuleSet):
        return variant.dealer_hits_soft_17
    variant = variant.upper()
    if variant not in ("H17", "S17"):
        raise ValueError(f"Unknown table variant: {variant}")
    return variant == "H17"


def dealer_should_hit(hand: Iterable[Card], variant: TableVariant | RuleSet | str = "H17") -> bool:
    """
    Determine if the dealer should hit.

    Below 17 the dealer hits, above 17 the dealer stands. On exactly 17 an
    H17 dealer hits a soft hand; an S17 dealer always stands.
    """
    value = evaluate_hand(hand)
    if value.total < 17:
        return True
    if value.total > 17:
        return False
    return value.is_soft and _hits_soft_17(variant)


def dealer_action(hand: Iterable[Card], variant: TableVariant | RuleSet | str = "H17") -> Literal["hit", "stand"]:
    """Dealer decision as an action name."""
    return "hit" if dealer_should_hit(hand, variant) else "stand"


def play_dealer(
    hand: list[Card],
    draw: Callable[[], Card],
    variant: TableVariant | RuleSet | str = "H17",
) -> list[Card]:
    """
    Draw cards into the dealer hand until the policy stands or the hand busts.

    Args:
        hand: Dealer cards, extended in place
        draw: Callable returning the next card from the shoe
        variant: Table variant or rule set

    Returns:
        The same list, for convenience
    """
    # A bust total is above 17, so the policy already stands on it
    while dealer_should_hit(hand, variant):
        card = draw()
        hand.append(card)
        logger.debug("Dealer draws %s (total %d)", card, evaluate_hand(hand).total)
    return hand
