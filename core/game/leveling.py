"""
Leveling formulas.

Pure functions only: XP awarded per win, XP needed to clear a level and the
cash bonus paid on level-up. Tracking a player's XP and level is the
caller's job.
"""

import math
from decimal import ROUND_FLOOR, Decimal

from config import LevelingConfig, config


def _cfg(leveling: LevelingConfig | None) -> LevelingConfig:
    return leveling or config.leveling


def xp_per_win(level: int, bet_amount: Decimal | int | float, leveling: LevelingConfig | None = None) -> int:
    """
    XP for a won hand, scaled by level and bet.

    ``floor(floor(10 * (1 + level * 0.1)) * (1 + (max(bet, 5) - 5) * 0.02))``,
    evaluated in decimal arithmetic so exact products are not lost to float
    rounding.
    """
    cfg = _cfg(leveling)
    base = Decimal(cfg.xp_per_win) * (1 + Decimal(level) * Decimal("0.1"))
    base = base.to_integral_value(rounding=ROUND_FLOOR)

    bet = max(Decimal(str(bet_amount)), Decimal(cfg.min_xp_bet))
    multiplier = 1 + (bet - cfg.min_xp_bet) * Decimal("0.02")
    return int((base * multiplier).to_integral_value(rounding=ROUND_FLOOR))


def xp_needed(level: int, leveling: LevelingConfig | None = None) -> int:
    """XP required to clear a level: ceil(120 * L^1.6 + 10 * L)."""
    cfg = _cfg(leveling)
    return math.ceil(cfg.xp_coefficient * math.pow(level, cfg.xp_exponent) + cfg.xp_linear * level)


def cash_bonus(level: int, cap: int | None = None, leveling: LevelingConfig | None = None) -> int:
    """
    Cash bonus for completing a level.

    ``max(50, floor(0.05 * xp_needed(level)))``, limited to ``cap`` if given.
    """
    cfg = _cfg(leveling)
    bonus = max(cfg.min_cash_bonus, math.floor(cfg.bonus_rate * xp_needed(level, cfg)))
    if cap is not None:
        return min(bonus, cap)
    return bonus
