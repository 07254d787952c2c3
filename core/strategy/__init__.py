"""Strategy tables, resolver and dealer policy."""

from core.strategy.rules import RuleSet, TableVariant
from core.strategy.tables import ACE, Action, HandCategory, StrategyRule
from core.strategy.basic import (
    BasicStrategy,
    classify_hand,
    dealer_key,
    get_feedback_message,
    get_optimal_move,
    get_tip_message,
)
from core.strategy.dealer import dealer_action, dealer_should_hit, play_dealer

__all__ = [
    "RuleSet",
    "TableVariant",
    "ACE",
    "Action",
    "HandCategory",
    "StrategyRule",
    "BasicStrategy",
    "classify_hand",
    "dealer_key",
    "get_feedback_message",
    "get_optimal_move",
    "get_tip_message",
    "dealer_action",
    "dealer_should_hit",
    "play_dealer",
]
