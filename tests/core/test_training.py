"""Tests for drill categories, feedback, EV estimates and the streak drill."""

import math
from random import Random

import pytest

from config import DrillConfig
from tests.helpers import cards, hand
from core.cards import Card
from core.hand import is_natural
from core.strategy import Action, RuleSet, get_optimal_move
from core.training import (
    ActionEVs,
    DrillCategory,
    FeedbackContext,
    StrategyDrill,
    best_wrong_action,
    calculate_credit,
    categorize_hand,
    category_tip,
    category_why,
    get_decision_with_ev,
    get_reward,
    get_streak_required,
    grade_move,
    legal_actions,
    resolve_feedback,
)
from core.training.ev import calculate_evs
from core.training.feedback import explain_player_move, message_key, normalize_upcard


def up(text: str) -> Card:
    return Card.from_string(text)


class TestCategories:
    """Tests for drill categorization."""

    @pytest.mark.parametrize(
        "player, upcard, expected",
        [
            ("10S 4H", "5C", DrillCategory.HARD_12_16_VS_2_6),
            ("10S 2H", "2C", DrillCategory.HARD_12_16_VS_2_6),
            ("10S 4H", "9C", DrillCategory.HARD_12_16_VS_7_A),
            ("9S 7H", "AC", DrillCategory.HARD_12_16_VS_7_A),
            ("AS 7H", "9C", DrillCategory.SOFT18_EXCEPTIONS),
            ("AS 7H", "4C", DrillCategory.SOFT18_EXCEPTIONS),
            ("AS 7H", "7C", DrillCategory.OTHER),
            ("AS 4H", "5C", DrillCategory.SOFT_DOUBLE_CORE),
            ("AS 2H", "2C", DrillCategory.OTHER),
            ("8S 8H", "10C", DrillCategory.PAIR_SPLITS_CORE),
            ("AS AH", "6C", DrillCategory.PAIR_SPLITS_CORE),
            ("6S 5H", "AC", DrillCategory.DOUBLE_9_10_11),
            ("10S 9H", "6C", DrillCategory.OTHER),
        ],
    )
    def test_categorize(self, player, upcard, expected):
        assert categorize_hand(cards(player), up(upcard)) is expected

    def test_tips(self):
        assert category_tip(DrillCategory.HARD_12_16_VS_2_6, cards("10S 4H"), up("5C")) == (
            "Stand 14 vs 5: the dealer's bust rate is high."
        )
        assert category_tip(DrillCategory.SOFT18_EXCEPTIONS, cards("AS 7H"), up("KC")).startswith("A,7 hits vs K")
        assert category_tip(DrillCategory.SOFT18_EXCEPTIONS, cards("AS 7H"), up("4C")).startswith("A,7 doubles")

    @pytest.mark.parametrize("category", list(DrillCategory))
    def test_every_category_explained(self, category):
        assert category_tip(category, cards("10S 4H"), up("5C"))
        assert category_why(category, cards("10S 4H"), up("5C"))


class TestFeedback:
    """Tests for move feedback."""

    def test_normalize_upcard(self):
        assert normalize_upcard(up("AS")) == "A"
        assert normalize_upcard(up("QS")) == "10"
        assert normalize_upcard(up("7S")) == "7"

    @pytest.mark.parametrize(
        "player, upcard, optimal, expected",
        [
            ("8S 8H", "10C", Action.SPLIT, "pair_8_vs_10_split"),
            ("KS KH", "6C", Action.STAND, "pair_K_vs_6_stand"),
            ("AS 7H", "AC", Action.HIT, "soft_18_vs_A_hit"),
            ("10S 6H", "JC", Action.HIT, "hard_16_vs_10_hit"),
        ],
    )
    def test_message_key(self, player, upcard, optimal, expected):
        assert message_key(cards(player), up(upcard), optimal) == expected

    def test_correct_move_uses_rule_text(self, basic_strategy):
        result = grade_move(cards("10S 6H"), up("10C"), Action.HIT)
        assert result.is_correct
        assert result.tip == basic_strategy.get_tip_message(cards("10S 6H"), up("10C"))
        assert result.why == basic_strategy.get_feedback_message(cards("10S 6H"), up("10C"))

    def test_stand_instead_of_hit(self):
        result = grade_move(cards("10S 6H"), up("10C"), Action.STAND)
        assert not result.is_correct
        assert result.optimal_move is Action.HIT
        assert result.why.startswith("Standing on 16 is too conservative.")

    def test_hit_instead_of_stand(self):
        result = grade_move(cards("10S 8H"), up("7C"), Action.HIT)
        assert result.why.startswith("Hitting on 18 is too risky. 18 is already a strong hand")

    def test_double_unavailable(self):
        result = grade_move(cards("5S 4H 3C"), up("2C"), Action.DOUBLE)
        assert result.why == "Doubling isn't available after drawing cards, so you should hit instead."

    def test_double_on_two_cards(self):
        result = grade_move(cards("10S 6H"), up("10C"), Action.DOUBLE)
        assert result.why.startswith("Doubling puts twice the bet on 16")

    def test_split_non_pair(self):
        result = grade_move(cards("10S 6H"), up("10C"), Action.SPLIT)
        assert result.why == "Splitting isn't available here (not a pair). You should hit instead."

    def test_split_tens(self):
        result = grade_move(cards("10S 10H"), up("6C"), Action.SPLIT)
        assert result.why == "Splitting this pair isn't optimal."

    def test_split_fives(self):
        result = grade_move(cards("5S 5H"), up("6C"), Action.SPLIT)
        assert result.optimal_move is Action.DOUBLE
        assert result.why == "Splitting this pair isn't optimal."

    def test_split_suggestion(self):
        result = explain_player_move(Action.SPLIT, Action.DOUBLE, "Treat as hard 10.", cards("5S 5H"))
        assert result == "Splitting this pair isn't optimal. You should double instead to maximize your advantage."

    def test_hit_instead_of_split(self):
        result = grade_move(cards("8S 8H"), up("10C"), Action.HIT)
        assert result.why.startswith("Hitting a pair wastes the chance to split.")

    def test_split_hand_graded_by_total(self):
        result = grade_move(hand("8S 8H", is_split_hand=True), up("10C"), Action.STAND)
        assert not result.is_correct
        assert result.optimal_move is Action.HIT
        assert result.message_key == "hard_16_vs_10_hit"
        assert result.why.startswith("Standing on 16 is too conservative.")

    def test_split_after_split(self):
        result = grade_move(hand("8S 8H", is_split_hand=True), up("10C"), Action.SPLIT)
        assert result.why == "Splitting isn't available here (already split). You should hit instead."
        assert explain_player_move(Action.SPLIT, Action.HIT, "x", cards("8S 8H"), can_split=False) == result.why

    def test_message_key_without_split(self):
        assert message_key(cards("8S 8H"), up("10C"), Action.HIT, can_split=False) == "hard_16_vs_10_hit"

    def test_split_hand_flags(self):
        """Graded against the Hand's own double availability."""
        split_ace = hand("AS 7H", is_split_hand=True, is_split_ace=True)
        result = grade_move(split_ace, up("6C"), Action.STAND, RuleSet())
        assert result.is_correct
        assert "so stand instead." in result.tip

    def test_explicit_context(self):
        ctx = FeedbackContext(
            player_hand=tuple(cards("AS 7H")),
            dealer_upcard=up("9C"),
            optimal_move=Action.HIT,
            player_move=Action.STAND,
            table_variant="S17",
        )
        result = resolve_feedback(ctx)
        assert result.message_key == "soft_18_vs_9_hit"
        assert result.why.startswith("Standing on 18 (soft)")


class TestEV:
    """Tests for the approximate EV tables."""

    def test_legal_actions(self):
        assert legal_actions(cards("8S 8H")) == (Action.HIT, Action.STAND, Action.DOUBLE, Action.SPLIT)
        assert legal_actions(cards("8S 9H")) == (Action.HIT, Action.STAND, Action.DOUBLE)
        assert legal_actions(cards("8S 2H 3C")) == (Action.HIT, Action.STAND)

    def test_hard_11_vs_ace(self):
        ev = calculate_evs(cards("6S 5H"), up("AC"))
        assert ev.double == 0.2
        assert ev.hit == 0.15
        assert ev.stand == -0.5
        assert ev.split is None

    def test_split_aces(self):
        assert calculate_evs(cards("AS AH"), up("10C")).split == 0.3

    def test_no_double_after_draw(self):
        assert calculate_evs(cards("5S 4H 2C"), up("6C")).double is None

    def test_decision(self):
        decision = get_decision_with_ev(cards("AS 7H"), up("6C"))
        assert decision.correct_action is Action.DOUBLE
        assert decision.ev.double == 0.1
        assert Action.DOUBLE in decision.legal_actions

    def test_best_wrong_action_and_credit(self):
        ev = calculate_evs(cards("6S 5H"), up("6C"))
        action, value = best_wrong_action(ev, Action.DOUBLE)
        assert action is Action.HIT
        assert value == 0.15
        assert calculate_credit(ev.double, value) == pytest.approx(0.1)

    def test_best_wrong_action_empty(self):
        action, value = best_wrong_action(ActionEVs(hit=0.1), Action.HIT)
        assert action is Action.HIT
        assert value == -math.inf

    def test_credit_never_negative(self):
        assert calculate_credit(-0.2, 0.1) == 0.0


class TestDrillRewards:
    """Tests for tier rewards and streaks."""

    @pytest.mark.parametrize("tier, reward", [(0, 250), (1, 300), (2, 350), (5, 350)])
    def test_reward(self, tier, reward):
        assert get_reward(tier) == reward

    @pytest.mark.parametrize("tier, streak", [(0, 5), (1, 6), (2, 7), (9, 7)])
    def test_streak_required(self, tier, streak):
        assert get_streak_required(tier) == streak

    def test_custom_config(self):
        cfg = DrillConfig(min_bet=100, tiers=(3,))
        assert get_reward(0, cfg) == 500
        assert get_reward(4, cfg) == 500
        assert get_streak_required(4, cfg) == 3


class TestStrategyDrill:
    """Tests for the streak drill."""

    def _optimal(self, drill: StrategyDrill) -> Action:
        return get_optimal_move(list(drill.spot.player_hand), drill.spot.dealer_upcard, drill.rules)

    def test_spots(self, drill_config):
        drill = StrategyDrill(drill_config=drill_config, rng=Random(11))
        for _ in range(200):
            spot = drill.next_spot()
            assert len(spot.player_hand) == 2
            assert not is_natural(spot.player_hand)
            assert spot.dealer_upcard not in spot.player_hand
            assert isinstance(spot.category, DrillCategory)

    def test_clear_tier(self, drill_config):
        drill = StrategyDrill(tier=0, drill_config=drill_config, rng=Random(3))
        for expected_streak in range(1, 6):
            answer = drill.answer(self._optimal(drill))
            assert answer.correct and answer.counted
            assert answer.streak == expected_streak
        assert drill.complete
        assert answer.complete
        assert drill.reward == 250
        with pytest.raises(RuntimeError):
            drill.answer(Action.HIT)

    def test_wrong_answer(self, drill_config):
        drill = StrategyDrill(tier=1, drill_config=drill_config, rng=Random(3))
        drill.answer(self._optimal(drill))
        optimal = self._optimal(drill)
        wrong = Action.STAND if optimal is not Action.STAND else Action.HIT

        answer = drill.answer(wrong)
        assert not answer.correct
        assert not answer.counted
        assert answer.streak == 0
        assert answer.feedback.player_move is wrong
        assert drill.failed
        assert len(drill.mistakes) == 1
        assert drill.best_streak == 1

        drill.retry()
        assert not drill.failed
        assert drill.mistakes == []
        assert drill.streak == 0

    def test_fast_tap_not_counted(self):
        drill = StrategyDrill(drill_config=DrillConfig(fast_tap_ms=800), rng=Random(3))
        answer = drill.answer(self._optimal(drill), elapsed_ms=100)
        assert answer.correct
        assert not answer.counted
        assert answer.streak == 0
        assert not drill.failed

    def test_negative_tier(self):
        with pytest.raises(ValueError):
            StrategyDrill(tier=-1)
