"""Training: drill categories, move feedback, EV estimates and the streak drill."""

from core.training.categories import DrillCategory, categorize_hand, category_tip, category_why
from core.training.feedback import FeedbackContext, FeedbackResult, grade_move, resolve_feedback
from core.training.ev import (
    ActionEVs,
    DecisionResult,
    best_wrong_action,
    calculate_credit,
    get_decision_with_ev,
    legal_actions,
)
from core.training.drill import DrillAnswer, DrillSpot, StrategyDrill, get_reward, get_streak_required

__all__ = [
    "DrillCategory",
    "categorize_hand",
    "category_tip",
    "category_why",
    "FeedbackContext",
    "FeedbackResult",
    "grade_move",
    "resolve_feedback",
    "ActionEVs",
    "DecisionResult",
    "best_wrong_action",
    "calculate_credit",
    "get_decision_with_ev",
    "legal_actions",
    "DrillAnswer",
    "DrillSpot",
    "StrategyDrill",
    "get_reward",
    "get_streak_required",
]
