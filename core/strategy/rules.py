"""Blackjack rule variations."""

from dataclasses import dataclass
from typing import Literal

TableVariant = Literal["H17", "S17"]


@dataclass(frozen=True)
class RuleSet:
    """
    Blackjack table rules configuration.

    Injected into the strategy resolver and the dealer play policy. The
    defaults are the production table: H17, double after split, no
    doubling on split aces, no surrender.
    """

    # Dealer rules
    dealer_hits_soft_17: bool = True  # H17 vs S17

    # Double down rules
    double_after_split: bool = True  # DAS
    double_on_split_aces: bool = False

    # Surrender rules
    surrender_allowed: bool = False

    @property
    def variant(self) -> TableVariant:
        """H17 when the dealer hits soft 17, else S17."""
        return "H17" if self.dealer_hits_soft_17 else "S17"

    @classmethod
    def from_variant(cls, variant: str, **overrides) -> "RuleSet":
        """Build a rule set from an 'H17'/'S17' table variant."""
        variant = variant.upper()
        if variant not in ("H17", "S17"):
            raise ValueError(f"Unknown table variant: {variant}")
        return cls(dealer_hits_soft_17=variant == "H17", **overrides)

    @classmethod
    def from_config(cls, table_config=None) -> "RuleSet":
        """Build the rule set from the application table configuration."""
        if table_config is None:
            from config import config

            table_config = config.table
        return cls.from_variant(
            table_config.variant,
            double_after_split=table_config.double_after_split,
            double_on_split_aces=table_config.double_on_split_aces,
            surrender_allowed=table_config.surrender_allowed,
        )

    @classmethod
    def production(cls) -> "RuleSet":
        """The trainer's default table."""
        return cls()

    @classmethod
    def vegas_strip(cls) -> "RuleSet":
        """Standard Vegas Strip rules (S17)."""
        return cls(dealer_hits_soft_17=False, double_after_split=True)

