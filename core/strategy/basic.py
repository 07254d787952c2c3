"""Basic strategy resolver for blackjack."""

import logging
from typing import Iterable, Mapping

from core.cards import Card, card_value
from core.hand import Hand, evaluate_hand, is_pair_hand
from core.strategy.rules import RuleSet
from core.strategy.tables import (
    DEALER_KEYS,
    DEFAULT_RULE,
    DEFAULT_SOFT_RULE,
    TABLES,
    Action,
    HandCategory,
    StrategyRule,
    lookup_rule,
)

logger = logging.getLogger(__name__)

PlayerHand = Hand | Iterable[Card]


def dealer_key(card: Card) -> int:
    """Bucket the dealer upcard: 2-9, 10 for any ten-value card, 11 for an Ace."""
    return card_value(card)


def classify_hand(cards: Iterable[Card], pairs: bool = True) -> tuple[HandCategory, int]:
    """
    Return the table a hand is played from and its lookup key.

    Two equal-valued cards use the pair table keyed by card value, soft hands
    the soft table keyed by total, everything else the hard table keyed by
    the total capped at 21. With ``pairs=False`` a pair is classified by its
    total.
    """
    cards = list(cards)
    if pairs and is_pair_hand(cards):
        return HandCategory.PAIR, card_value(cards[0])
    value = evaluate_hand(cards)
    if value.is_soft:
        return HandCategory.SOFT, value.total
    return HandCategory.HARD, min(value.total, 21)


class BasicStrategy:
    """
    Basic strategy lookups against the static rule tables.

    The table rules decide when doubling is structurally available; a rule
    that says double resolves to its fallback action when it is not.
    """

    def __init__(self, rules: RuleSet | None = None) -> None:
        """
        Initialize basic strategy for given rules.

        Args:
            rules: Table rules. Uses the production defaults if None.
        """
        self.rules = rules or RuleSet()

    def get_strategy_rule(
        self,
        hand: PlayerHand,
        dealer_upcard: Card,
        can_split: bool | None = None,
    ) -> StrategyRule:
        """
        Look up the raw table rule, before any double fallback.

        A pair whose rule says split is looked up by its total instead when
        it cannot be split. ``can_split`` defaults to what the hand allows.
        """
        cards = hand if isinstance(hand, Hand) else list(hand)
        category, key = classify_hand(cards)
        upcard_key = dealer_key(dealer_upcard)

        rule = lookup_rule(category, key, upcard_key)
        if rule is not None and rule.action is Action.SPLIT:
            if not (self.can_split(cards) if can_split is None else can_split):
                category, key = classify_hand(cards, pairs=False)
                rule = lookup_rule(category, key, upcard_key)
        if rule is not None:
            return rule

        logger.warning(
            "No %s strategy rule for %d vs %d; using default hit rule",
            category.value,
            key,
            upcard_key,
        )
        if category is HandCategory.SOFT:
            return DEFAULT_SOFT_RULE
        return DEFAULT_RULE

    def can_split(self, hand: PlayerHand) -> bool:
        """Check whether the hand may still be split."""
        if isinstance(hand, Hand):
            return hand.can_split
        return is_pair_hand(hand)

    def can_double(self, hand: PlayerHand) -> bool:
        """Check whether doubling is structurally available for the hand."""
        if isinstance(hand, Hand):
            return hand.can_double(self.rules)
        return len(list(hand)) == 2

    def resolve_action(self, rule: StrategyRule, can_double: bool) -> Action:
        """Substitute the fallback for a double that cannot be taken."""
        if rule.action is not Action.DOUBLE or can_double:
            return rule.action
        if rule.fallback is None:
            logger.warning("Double rule without fallback: %r", rule.tip)
            return Action.HIT
        return rule.fallback

    def get_optimal_move(self, hand: PlayerHand, dealer_upcard: Card) -> Action:
        """
        Get the basic strategy action for a hand.

        Args:
            hand: Player cards, or a Hand carrying split/double flags
            dealer_upcard: The dealer's visible card

        Returns:
            The recommended action; never DOUBLE when doubling is unavailable
        """
        cards = hand if isinstance(hand, Hand) else list(hand)
        rule = self.get_strategy_rule(cards, dealer_upcard)
        return self.resolve_action(rule, self.can_double(cards))

    def get_tip_message(self, hand: PlayerHand, dealer_upcard: Card) -> str:
        """Short advisory tip for the hand."""
        cards = hand if isinstance(hand, Hand) else list(hand)
        rule = self.get_strategy_rule(cards, dealer_upcard)
        return self.adjust_message(rule.tip, rule, self.can_double(cards))

    def get_feedback_message(self, hand: PlayerHand, dealer_upcard: Card) -> str:
        """Longer explanation of why the move is correct."""
        cards = hand if isinstance(hand, Hand) else list(hand)
        rule = self.get_strategy_rule(cards, dealer_upcard)
        return self.adjust_message(rule.why, rule, self.can_double(cards))

    def adjust_message(self, message: str, rule: StrategyRule, can_double: bool) -> str:
        """Note the fallback in a double rule's text when doubling is unavailable."""
        action = self.resolve_action(rule, can_double)
        if rule.action is Action.DOUBLE and action is not Action.DOUBLE:
            return (
                f"{message} Doubling isn't available after drawing cards, "
                f"so {action.value} instead."
            )
        return message

    def _chart(self, category: HandCategory) -> Mapping[tuple[int, int], Action]:
        chart: dict[tuple[int, int], Action] = {}
        for key in TABLES[category]:
            for upcard in DEALER_KEYS:
                rule = lookup_rule(category, key, upcard)
                if rule is not None:
                    chart[(key, upcard)] = rule.action
        return chart

    @property
    def hard_table(self) -> Mapping[tuple[int, int], Action]:
        """Hard totals chart keyed by (total, dealer key)."""
        return self._chart(HandCategory.HARD)

    @property
    def soft_table(self) -> Mapping[tuple[int, int], Action]:
        """Soft totals chart keyed by (total, dealer key)."""
        return self._chart(HandCategory.SOFT)

    @property
    def pair_table(self) -> Mapping[tuple[int, int], Action]:
        """Pair chart keyed by (pair value, dealer key)."""
        return self._chart(HandCategory.PAIR)


def get_optimal_move(hand: PlayerHand, dealer_upcard: Card, rules: RuleSet | None = None) -> Action:
    """Basic strategy action for a hand under the given table rules."""
    return BasicStrategy(rules).get_optimal_move(hand, dealer_upcard)


def get_tip_message(hand: PlayerHand, dealer_upcard: Card, rules: RuleSet | None = None) -> str:
    return BasicStrategy(rules).get_tip_message(hand, dealer_upcard)


def get_feedback_message(hand: PlayerHand, dealer_upcard: Card, rules: RuleSet | None = None) -> str:
    return BasicStrategy(rules).get_feedback_message(hand, dealer_upcard)
