"""
Move feedback.

Builds the tip and explanation shown after a decision. Both come from the
strategy rule tables; when the player's move differs from the optimal one
the explanation is replaced with one aimed at the move actually made.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from core.cards import Card, card_value
from core.hand import Hand, evaluate_hand, is_pair_hand
from core.strategy.basic import BasicStrategy, PlayerHand
from core.strategy.rules import RuleSet, TableVariant
from core.strategy.tables import ACE, Action

logger = logging.getLogger(__name__)


def normalize_upcard(card: Card) -> str:
    """Upcard label used in message keys: '2'-'10' or 'A'."""
    value = card_value(card)
    return "A" if value == ACE else str(value)


@dataclass(frozen=True)
class FeedbackContext:
    """A graded decision: the spot, the optimal move and the move made."""

    player_hand: tuple[Card, ...]
    dealer_upcard: Card
    optimal_move: Action
    player_move: Action
    table_variant: TableVariant = "H17"
    can_double: bool | None = None
    can_split: bool | None = None

    @classmethod
    def for_hand(
        cls,
        hand: PlayerHand,
        dealer_upcard: Card,
        player_move: Action,
        rules: RuleSet | None = None,
    ) -> "FeedbackContext":
        """Build a context, looking the optimal move up in the strategy tables."""
        strategy = BasicStrategy(rules)
        return cls(
            player_hand=tuple(hand),
            dealer_upcard=dealer_upcard,
            optimal_move=strategy.get_optimal_move(hand, dealer_upcard),
            player_move=player_move,
            table_variant=strategy.rules.variant,
            can_double=strategy.can_double(hand),
            can_split=strategy.can_split(hand),
        )


class FeedbackResult(BaseModel):
    """Feedback for one decision."""

    model_config = ConfigDict(frozen=True)

    player_move: Action
    optimal_move: Action
    tip: str
    why: str
    message_key: str

    @property
    def is_correct(self) -> bool:
        return self.player_move is self.optimal_move


def message_key(
    player_hand: Iterable[Card],
    dealer_upcard: Card,
    optimal_move: Action,
    can_split: bool = True,
) -> str:
    """
    Telemetry key, e.g. ``pair_8_vs_10_split`` or ``soft_18_vs_A_hit``.

    A pair that can no longer be split is keyed by its total.
    """
    cards = list(player_hand)
    upcard = normalize_upcard(dealer_upcard)
    value = evaluate_hand(cards)

    if can_split and is_pair_hand(cards):
        key = f"pair_{cards[0].rank}_vs_{upcard}"
    elif value.is_soft:
        key = f"soft_{value.total}_vs_{upcard}"
    else:
        key = f"hard_{value.total}_vs_{upcard}"
    return f"{key}_{optimal_move.value}"


def resolve_feedback(ctx: FeedbackContext) -> FeedbackResult:
    """
    Resolve the feedback for a decision.

    Args:
        ctx: The decision being graded

    Returns:
        Tip, explanation and message key
    """
    rules = RuleSet.from_variant(ctx.table_variant)
    strategy = BasicStrategy(rules)
    cards = list(ctx.player_hand)

    can_split = is_pair_hand(cards) if ctx.can_split is None else ctx.can_split
    rule = strategy.get_strategy_rule(cards, ctx.dealer_upcard, can_split)
    can_double = len(cards) == 2 if ctx.can_double is None else ctx.can_double
    tip = strategy.adjust_message(rule.tip, rule, can_double)
    why = strategy.adjust_message(rule.why, rule, can_double)
    key = message_key(cards, ctx.dealer_upcard, ctx.optimal_move, can_split)

    if ctx.player_move is not ctx.optimal_move:
        why = explain_player_move(ctx.player_move, ctx.optimal_move, why, cards, can_double, can_split)

    logger.debug("Feedback resolved: %s (player %s)", key, ctx.player_move.value)
    return FeedbackResult(
        player_move=ctx.player_move,
        optimal_move=ctx.optimal_move,
        tip=tip,
        why=why,
        message_key=key,
    )


def explain_player_move(
    player_move: Action,
    optimal_move: Action,
    optimal_why: str,
    player_hand: Iterable[Card],
    can_double: bool = True,
    can_split: bool = True,
) -> str:
    """
    Explain why the move made was worse than the optimal one.

    Falls back to the optimal move's own explanation when no specific text
    exists for the pair of moves.
    """
    cards = list(player_hand)
    value = evaluate_hand(cards)
    total = value.total
    soft = " (soft)" if value.is_soft else ""
    pair = is_pair_hand(cards) and can_split
    split_mentioned = "split" in optimal_why.lower()

    if player_move is Action.HIT:
        if optimal_move is Action.STAND:
            if 17 <= total <= 20:
                return (
                    f"Hitting on {total}{soft} is too risky. {total} is already a strong hand that beats "
                    f"most dealer outcomes, and another card can only reach 21 while most cards bust you."
                )
            return (
                f"Hitting on {total}{soft} is too risky here. {total} is strong enough against the "
                f"dealer's likely outcomes, and another card raises your bust risk without enough benefit."
            )
        if optimal_move is Action.DOUBLE:
            return (
                "Hitting wastes the chance to double down. Doubling maximizes your win when you "
                "have the advantage, while hitting only bets the original amount."
            )
        if optimal_move is Action.SPLIT and pair:
            return (
                "Hitting a pair wastes the chance to split. Two separate hands each have better "
                "winning potential than hitting the pair together."
            )

    if player_move is Action.STAND:
        if optimal_move is Action.HIT:
            return (
                f"Standing on {total}{soft} is too conservative. You need to improve your hand to "
                f"have a real chance of winning, and the dealer's upcard says take another card."
            )
        if optimal_move is Action.DOUBLE:
            return (
                "Standing wastes the chance to double down. Doubling maximizes your win when you "
                "have the advantage, while standing only bets the original amount."
            )
        if optimal_move is Action.SPLIT and pair:
            return (
                "Standing on a pair wastes the chance to split. Two separate hands each have better "
                "winning potential than standing on the pair."
            )

    if player_move is Action.DOUBLE:
        if optimal_move in (Action.HIT, Action.STAND):
            if not can_double:
                return (
                    f"Doubling isn't available after drawing cards, so you should "
                    f"{optimal_move.value} instead."
                )
            return (
                f"Doubling puts twice the bet on {total}{soft}, which is not strong enough against "
                f"this upcard. You should {optimal_move.value} instead."
            )
        if optimal_move is Action.SPLIT and pair:
            return (
                "Doubling on a pair wastes the chance to split. Two separate hands each have better "
                "winning potential than doubling on the pair."
            )

    if player_move is Action.SPLIT:
        if not pair:
            if optimal_move in (Action.HIT, Action.STAND):
                reason = "already split" if is_pair_hand(cards) else "not a pair"
                return f"Splitting isn't available here ({reason}). You should {optimal_move.value} instead."
        else:
            suggestion = {
                Action.HIT: "You should hit instead to improve your hand.",
                Action.STAND: "You should stand instead on this strong hand.",
                Action.DOUBLE: "You should double instead to maximize your advantage.",
            }.get(optimal_move)
            if suggestion is not None:
                if split_mentioned:
                    return "Splitting this pair isn't optimal."
                return f"Splitting this pair isn't optimal. {suggestion}"

    return optimal_why or "This isn't optimal here. The optimal move has better expected value."


def grade_move(
    hand: Hand | Iterable[Card],
    dealer_upcard: Card,
    player_move: Action,
    rules: RuleSet | None = None,
) -> FeedbackResult:
    """Grade a move against basic strategy for the hand as it stands."""
    cards: PlayerHand = hand if isinstance(hand, Hand) else list(hand)
    return resolve_feedback(FeedbackContext.for_hand(cards, dealer_upcard, player_move, rules))
