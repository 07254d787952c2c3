"""
Strategy drill.

Random two-card spots against a dealer upcard. Consecutive correct answers
build a streak; reaching the tier's streak clears the drill and earns its
reward. A wrong answer resets the streak, logs the mistake and fails the
attempt until it is retried.
"""

import logging
from dataclasses import dataclass
from random import Random

from pydantic import BaseModel, ConfigDict

from config import DrillConfig, config
from core.cards import Card, create_shoe
from core.hand import is_natural
from core.strategy.rules import RuleSet
from core.strategy.tables import Action
from core.training.categories import DrillCategory, categorize_hand
from core.training.feedback import FeedbackContext, FeedbackResult, resolve_feedback

logger = logging.getLogger(__name__)


def get_reward(tier: int, drill_config: DrillConfig | None = None) -> int:
    """
    Cash reward for clearing a tier.

    The base is min_bet × base multiplier; each later tier adds one step of
    min_bet × step multiplier, up to the last configured tier
    (250, 300, 350 with the defaults).
    """
    cfg = drill_config or config.drill
    base = cfg.min_bet * cfg.reward_base_multiplier
    step = cfg.min_bet * cfg.reward_step_multiplier
    return base + min(tier, len(cfg.tiers) - 1) * step


def get_streak_required(tier: int, drill_config: DrillConfig | None = None) -> int:
    """Streak needed to clear a tier; tiers past the last repeat it."""
    cfg = drill_config or config.drill
    return cfg.tiers[min(tier, len(cfg.tiers) - 1)]


@dataclass(frozen=True)
class DrillSpot:
    """A drill question."""

    player_hand: tuple[Card, Card]
    dealer_upcard: Card

    @property
    def category(self) -> DrillCategory:
        return categorize_hand(self.player_hand, self.dealer_upcard)

    def __str__(self) -> str:
        cards = " ".join(str(card) for card in self.player_hand)
        return f"{cards} vs {self.dealer_upcard}"


@dataclass(frozen=True)
class DrillMistake:
    """A wrong answer with its feedback."""

    spot: DrillSpot
    feedback: FeedbackResult


class DrillAnswer(BaseModel):
    """Result of answering the current spot."""

    model_config = ConfigDict(frozen=True)

    correct: bool
    counted: bool
    optimal_move: Action
    streak: int
    streak_required: int
    complete: bool
    reason: str = ""
    feedback: FeedbackResult | None = None


class StrategyDrill:
    """
    A streak drill for one reward tier.

    Example:
        drill = StrategyDrill(tier=0, rng=Random(7))
        answer = drill.answer(Action.HIT, elapsed_ms=1500)
        if drill.complete:
            payout = drill.reward
    """

    def __init__(
        self,
        tier: int = 0,
        drill_config: DrillConfig | None = None,
        rules: RuleSet | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Start a drill.

        Args:
            tier: Reward tier, 0 for the first
            drill_config: Drill settings, the application's if None
            rules: Table rules for grading, built from the drill's variant if None
            rng: Random number generator for spot generation
        """
        if tier < 0:
            raise ValueError("tier must be non-negative")

        self.config = drill_config or config.drill
        self.rules = rules or RuleSet.from_variant(self.config.table_variant)
        self.tier = tier
        self._rng = rng or Random()

        self.streak = 0
        self.best_streak = 0
        self.mistakes: list[DrillMistake] = []
        self.complete = False
        self.failed = False
        self.spot = self.next_spot()

    @property
    def streak_required(self) -> int:
        return get_streak_required(self.tier, self.config)

    @property
    def reward(self) -> int:
        return get_reward(self.tier, self.config)

    @property
    def is_over(self) -> bool:
        return self.complete or self.failed

    def next_spot(self) -> DrillSpot:
        """
        Deal a new spot: two player cards that are not a natural and a
        dealer upcard from a fresh deck, distinct from the player's cards.
        """
        cards: list[Card] = []
        for _ in range(self.config.max_spot_attempts):
            cards = create_shoe(1, self._rng)[-2:]
            if not is_natural(cards):
                break

        deck = [card for card in create_shoe(1, self._rng) if card not in cards]
        self.spot = DrillSpot(player_hand=(cards[1], cards[0]), dealer_upcard=deck[-1])
        return self.spot

    def answer(self, action: Action, elapsed_ms: int | None = None) -> DrillAnswer:
        """
        Grade an answer to the current spot.

        Args:
            action: The move chosen
            elapsed_ms: Time taken to answer; faster than the fast-tap limit
                is graded but not counted

        Returns:
            The graded answer

        Raises:
            RuntimeError: If the drill is already cleared or failed
        """
        if self.is_over:
            raise RuntimeError("Drill is over; call retry() to start again")

        spot = self.spot
        ctx = FeedbackContext.for_hand(spot.player_hand, spot.dealer_upcard, action, self.rules)
        optimal = ctx.optimal_move

        if action is not optimal:
            feedback = resolve_feedback(ctx)
            self.mistakes.append(DrillMistake(spot=spot, feedback=feedback))
            self.streak = 0
            self.failed = True
            logger.info("Drill mistake on %s: %s instead of %s", spot, action.value, optimal.value)
            return self._result(False, False, optimal, "Incorrect move", feedback)

        if elapsed_ms is not None and elapsed_ms < self.config.fast_tap_ms:
            self.next_spot()
            return self._result(True, False, optimal, "Too fast, no instant taps")

        self.streak += 1
        self.best_streak = max(self.best_streak, self.streak)
        if self.streak >= self.streak_required:
            self.complete = True
            logger.info("Drill tier %d cleared for %d", self.tier, self.reward)
        else:
            self.next_spot()
        return self._result(True, True, optimal)

    def retry(self) -> DrillSpot:
        """Reset the streak and mistakes and deal a new spot."""
        self.streak = 0
        self.mistakes.clear()
        self.complete = False
        self.failed = False
        return self.next_spot()

    def _result(
        self,
        correct: bool,
        counted: bool,
        optimal: Action,
        reason: str = "",
        feedback: FeedbackResult | None = None,
    ) -> DrillAnswer:
        return DrillAnswer(
            correct=correct,
            counted=counted,
            optimal_move=optimal,
            streak=self.streak,
            streak_required=self.streak_required,
            complete=self.complete,
            reason=reason,
            feedback=feedback,
        )
