"""Pytest fixtures for blackjack trainer tests."""

import pytest
from random import Random

from config import DrillConfig, GameConfig
from core.cards import Shoe
from core.hand import Hand
from core.strategy import BasicStrategy, RuleSet
from core.game import BlackjackGame
from tests.helpers import hand, stacked_shoe


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled 6-deck shoe."""
    return Shoe(num_decks=6, rng=rng)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return hand("AS KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return hand("AS 6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return hand("10S 6H")


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return hand("8S 8H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return hand("10S 6H KC")


@pytest.fixture
def rules():
    """Default ruleset (H17, DAS)."""
    return RuleSet()


@pytest.fixture
def s17_rules():
    """Stand-on-soft-17 ruleset."""
    return RuleSet.vegas_strip()


@pytest.fixture
def basic_strategy(rules):
    """Basic strategy for default rules."""
    return BasicStrategy(rules)


@pytest.fixture
def game_config():
    """Game settings that never reshuffle a stacked shoe."""
    return GameConfig(num_decks=6, min_bet=10, reshuffle_threshold=0)


@pytest.fixture
def make_game(rules, game_config):
    """Factory for a game dealing from a stacked shoe."""

    def _make(text: str, **kwargs) -> BlackjackGame:
        return BlackjackGame(
            rules=kwargs.pop("rules", rules),
            game_config=kwargs.pop("game_config", game_config),
            shoe=stacked_shoe(text),
        )

    return _make


@pytest.fixture
def game(rules, game_config, rng):
    """A new game with a shuffled shoe."""
    return BlackjackGame(rules=rules, game_config=game_config, rng=rng)


@pytest.fixture
def drill_config():
    """Drill settings with the fast-tap check disabled."""
    return DrillConfig(fast_tap_ms=0)
