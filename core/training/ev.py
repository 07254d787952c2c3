"""
Approximate action EVs.

Rough expected values per action, taken from common basic strategy
simulation results rather than computed. They are only used to weigh how
costly a wrong answer was.
"""

import math
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from core.cards import Card, card_value
from core.hand import evaluate_hand, is_pair_hand
from core.strategy.basic import get_optimal_move
from core.strategy.rules import RuleSet
from core.strategy.tables import ACE, Action


class ActionEVs(BaseModel):
    """Estimated EV per action; None where the action is not available."""

    model_config = ConfigDict(frozen=True)

    hit: float | None = None
    stand: float | None = None
    double: float | None = None
    split: float | None = None

    def get(self, action: Action) -> float | None:
        return getattr(self, action.value)

    def items(self) -> list[tuple[Action, float]]:
        """Available actions with their EVs, in hit/stand/double/split order."""
        return [(action, self.get(action)) for action in Action if self.get(action) is not None]


class DecisionResult(BaseModel):
    """A decision with its correct action, EVs and legal actions."""

    model_config = ConfigDict(frozen=True)

    correct_action: Action
    ev: ActionEVs
    legal_actions: tuple[Action, ...]


def legal_actions(player_hand: Iterable[Card]) -> tuple[Action, ...]:
    """Hit and stand always; double on two cards; split on a pair."""
    cards = list(player_hand)
    actions = [Action.HIT, Action.STAND]
    if len(cards) == 2:
        actions.append(Action.DOUBLE)
        if is_pair_hand(cards):
            actions.append(Action.SPLIT)
    return tuple(actions)


def _stand_ev(total: int, dealer: int) -> float:
    if total >= 17:
        return 0.1
    if total >= 12:
        return 0.05 if dealer <= 6 else -0.2
    return -0.5


def _hit_ev(total: int, dealer: int) -> float:
    if total <= 11:
        return 0.15
    if total == 12 and dealer <= 6:
        return -0.15
    if total >= 17:
        return -0.3
    return 0.05 if dealer >= 7 else -0.1


def _double_ev(total: int, is_soft: bool, dealer: int) -> float:
    if total == 11:
        return 0.2 if dealer == ACE else 0.25
    if total == 10:
        return 0.2 if dealer <= 9 else 0.05
    if total == 9:
        return 0.15 if 3 <= dealer <= 6 else -0.05
    if not is_soft:
        return -0.15
    if total == 19 and dealer == 6:
        return 0.12
    if total == 18 and 2 <= dealer <= 6:
        return 0.1
    if total == 17 and 3 <= dealer <= 6:
        return 0.08
    if total in (15, 16) and 4 <= dealer <= 6:
        return 0.06
    if total in (13, 14) and dealer in (5, 6):
        return 0.05
    return -0.12


def _split_ev(pair_value: int, dealer: int) -> float:
    if pair_value == ACE:
        return 0.3
    if pair_value == 8:
        return 0.15
    if pair_value == 9:
        return 0.1 if dealer != 7 and dealer <= 9 else -0.05
    if pair_value in (2, 3, 7):
        return 0.05 if dealer <= 7 else -0.1
    if pair_value == 6:
        return 0.05 if dealer <= 6 else -0.15
    if pair_value == 4:
        return 0.02 if dealer in (5, 6) else -0.15
    # 5s and tens
    return -0.2


def calculate_evs(player_hand: Iterable[Card], dealer_upcard: Card) -> ActionEVs:
    """Estimate the EV of every action available to the hand."""
    cards = list(player_hand)
    value = evaluate_hand(cards)
    dealer = card_value(dealer_upcard)

    double = None
    split = None
    if len(cards) == 2:
        double = _double_ev(value.total, value.is_soft, dealer)
        if is_pair_hand(cards):
            split = _split_ev(card_value(cards[0]), dealer)

    return ActionEVs(
        hit=_hit_ev(value.total, dealer),
        stand=_stand_ev(value.total, dealer),
        double=double,
        split=split,
    )


def get_decision_with_ev(
    player_hand: Iterable[Card],
    dealer_upcard: Card,
    rules: RuleSet | None = None,
) -> DecisionResult:
    """Correct action, estimated EVs and legal actions for a spot."""
    cards = list(player_hand)
    return DecisionResult(
        correct_action=get_optimal_move(cards, dealer_upcard, rules),
        ev=calculate_evs(cards, dealer_upcard),
        legal_actions=legal_actions(cards),
    )


def calculate_credit(optimal_ev: float, best_wrong_ev: float) -> float:
    """EV margin of the optimal action over the best wrong one, never negative."""
    return max(0.0, optimal_ev - best_wrong_ev)


def best_wrong_action(ev: ActionEVs, correct_action: Action) -> tuple[Action, float]:
    """
    Highest-EV action other than the correct one.

    Returns (HIT, -inf) when no other action has an estimate.
    """
    best_action = Action.HIT
    best_ev = -math.inf
    for action, value in ev.items():
        if action is not correct_action and value > best_ev:
            best_action = action
            best_ev = value
    return best_action, best_ev
