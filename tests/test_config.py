"""Tests for configuration classes."""

import logging
import os
from unittest.mock import patch

import pytest

from core.strategy import RuleSet


class TestTableConfig:
    """Tests for TableConfig class."""

    def test_table_defaults(self):
        """Test the production table is the default."""
        with patch.dict(os.environ, {}, clear=True):
            from config import TableConfig

            config = TableConfig()

            assert config.variant == "H17"
            assert config.double_after_split is True
            assert config.double_on_split_aces is False
            assert config.surrender_allowed is False

    def test_table_from_env(self):
        """Test table rules read from the environment."""
        with patch.dict(
            os.environ,
            {"TABLE_VARIANT": " s17 ", "DOUBLE_AFTER_SPLIT": "FALSE", "DOUBLE_ON_SPLIT_ACES": "True"},
        ):
            from config import TableConfig

            config = TableConfig()

            assert config.variant == "S17"
            assert config.double_after_split is False
            assert config.double_on_split_aces is True

    def test_invalid_variant(self):
        """Test that an unknown variant is rejected."""
        with patch.dict(os.environ, {"TABLE_VARIANT": "H18"}):
            from config import TableConfig

            with pytest.raises(ValueError):
                TableConfig()

    def test_rules_from_config(self):
        """Test that RuleSet picks up the table settings."""
        with patch.dict(os.environ, {"TABLE_VARIANT": "S17", "DOUBLE_AFTER_SPLIT": "false"}):
            from config import TableConfig

            rules = RuleSet.from_config(TableConfig())

            assert rules.dealer_hits_soft_17 is False
            assert rules.variant == "S17"
            assert rules.double_after_split is False


class TestGameConfig:
    """Tests for GameConfig class."""

    def test_game_config_defaults(self):
        """Test default game configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            from config import GameConfig

            config = GameConfig()

            assert config.num_decks == 6
            assert config.min_bet == 50
            assert config.reshuffle_threshold == 20

    def test_game_config_from_env(self):
        """Test game configuration from environment."""
        with patch.dict(os.environ, {"NUM_DECKS": "2", "MIN_BET": "25", "RESHUFFLE_THRESHOLD": "52"}):
            from config import GameConfig

            config = GameConfig()

            assert config.num_decks == 2
            assert config.min_bet == 25
            assert config.reshuffle_threshold == 52

    def test_game_config_frozen(self):
        """Test that GameConfig is frozen (immutable)."""
        from config import GameConfig

        config = GameConfig()

        with pytest.raises(Exception):  # dataclasses.FrozenInstanceError
            config.num_decks = 8


class TestDrillConfig:
    """Tests for DrillConfig class."""

    def test_drill_defaults(self):
        from config import DrillConfig

        config = DrillConfig()

        assert config.tiers == (5, 6, 7)
        assert config.table_variant == "S17"
        assert config.min_bet * config.reward_base_multiplier == 250


class TestAppConfig:
    """Tests for AppConfig class."""

    def test_app_config_has_nested_configs(self):
        """Test that AppConfig has nested configuration objects."""
        from config import AppConfig

        config = AppConfig()

        assert hasattr(config, "logging")
        assert hasattr(config, "table")
        assert hasattr(config, "game")
        assert hasattr(config, "leveling")
        assert hasattr(config, "drill")

    def test_app_config_debug_from_env(self):
        """Test debug mode from environment."""
        with patch.dict(os.environ, {"DEBUG": "true"}):
            from config import AppConfig

            config = AppConfig()

            assert config.debug is True


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_from_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "info", "DEBUG": "false"}):
            from config import AppConfig, configure_logging

            with patch("logging.basicConfig") as basic_config:
                configure_logging(AppConfig())

            assert basic_config.call_args.kwargs["level"] == "INFO"

    def test_debug_overrides_level(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "ERROR", "DEBUG": "true"}):
            from config import AppConfig, configure_logging

            with patch("logging.basicConfig") as basic_config:
                configure_logging(AppConfig())

            assert basic_config.call_args.kwargs["level"] == logging.DEBUG
