"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field
from typing import Literal


def _env_flag(name: str, default: str) -> bool:
    """Parse a boolean environment variable."""
    return os.getenv(name, default).lower() == "true"


def _parse_table_variant() -> Literal["H17", "S17"]:
    """Parse TABLE_VARIANT environment variable."""
    variant = os.getenv("TABLE_VARIANT", "H17").strip().upper()
    if variant not in ("H17", "S17"):
        raise ValueError(f"Invalid TABLE_VARIANT: {variant}")
    return variant  # type: ignore[return-value]


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class TableConfig:
    """Table rules injected into the strategy resolver and dealer policy."""

    variant: Literal["H17", "S17"] = field(default_factory=_parse_table_variant)
    double_after_split: bool = field(
        default_factory=lambda: _env_flag("DOUBLE_AFTER_SPLIT", "true")
    )
    double_on_split_aces: bool = field(
        default_factory=lambda: _env_flag("DOUBLE_ON_SPLIT_ACES", "false")
    )
    surrender_allowed: bool = False


@dataclass(frozen=True)
class GameConfig:
    """Default game configuration."""

    num_decks: int = field(default_factory=lambda: int(os.getenv("NUM_DECKS", "6")))
    min_bet: int = field(default_factory=lambda: int(os.getenv("MIN_BET", "50")))
    # New shoe at the start of a round when fewer cards remain
    reshuffle_threshold: int = field(
        default_factory=lambda: int(os.getenv("RESHUFFLE_THRESHOLD", "20"))
    )


@dataclass(frozen=True)
class LevelingConfig:
    """Leveling formula constants."""

    # XP needed: ceil(A * L^alpha + B * L)
    xp_coefficient: int = 120
    xp_exponent: float = 1.6
    xp_linear: int = 10

    # Cash bonus: max(min_cash_bonus, floor(bonus_rate * xp_needed(L)))
    bonus_rate: float = 0.05
    min_cash_bonus: int = 50

    # XP per win before level and bet scaling
    xp_per_win: int = 10
    min_xp_bet: int = 5


@dataclass(frozen=True)
class DrillConfig:
    """Strategy drill configuration."""

    min_bet: int = 50
    reward_base_multiplier: int = 5
    reward_step_multiplier: int = 1
    tiers: tuple[int, ...] = (5, 6, 7)
    table_variant: Literal["H17", "S17"] = "S17"
    # Correct answers faster than this are not counted
    fast_tap_ms: int = 800
    max_spot_attempts: int = 50


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    table: TableConfig = field(default_factory=TableConfig)
    game: GameConfig = field(default_factory=GameConfig)
    leveling: LevelingConfig = field(default_factory=LevelingConfig)
    drill: DrillConfig = field(default_factory=DrillConfig)


def configure_logging(app_config: AppConfig | None = None) -> None:
    """Configure the root logger from the logging settings."""
    cfg = (app_config or config).logging
    level = logging.DEBUG if (app_config or config).debug else cfg.level
    logging.basicConfig(level=level, format=cfg.format)


# Global configuration instance
config = AppConfig()
