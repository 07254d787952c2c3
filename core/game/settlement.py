"""Payout settlement."""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


class Outcome(str, Enum):
    """Result of a hand from the player's side."""

    WIN = "win"
    LOSS = "loss"
    PUSH = "push"

    def __str__(self) -> str:
        return self.value


CENT = Decimal("0.01")
BLACKJACK_MULTIPLIER = Decimal("2.5")


def to_money(amount: Decimal | int | float) -> Decimal:
    """Round an amount to cents."""
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def settle(
    result: Outcome | str,
    base_bet: Decimal | int | float,
    is_doubled: bool = False,
    is_blackjack: bool = False,
) -> Decimal:
    """
    Map a hand outcome to the amount returned to the player.

    The payout includes the returned stake: a winning 10 bet pays 20.
    A winning blackjack pays 3:2 on the base bet (2.5x), a win pays twice
    the wager, a push returns the wager and a loss pays nothing. Doubling
    doubles the wager. Negative bets settle to zero.

    Args:
        result: "win", "loss" or "push"
        base_bet: Bet before any double
        is_doubled: Whether the hand was doubled
        is_blackjack: Whether the hand is a natural

    Returns:
        Payout rounded to cents
    """
    outcome = Outcome(result)
    bet = Decimal(str(base_bet))
    if bet <= 0:
        return to_money(0)

    wager = bet * 2 if is_doubled else bet

    if outcome is Outcome.WIN:
        if is_blackjack:
            return to_money(bet * BLACKJACK_MULTIPLIER)
        return to_money(wager * 2)
    if outcome is Outcome.PUSH:
        return to_money(wager)
    return to_money(0)
