"""
Hand resolution.

Turns finished hands into immutable resolution records: outcome, payout,
net win amount, stat deltas and XP. Records are the only output handed to
the persistence and UI layers.
"""

import logging
from decimal import Decimal
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from core.cards import Card
from core.game.leveling import xp_per_win
from core.game.settlement import Outcome, settle, to_money
from core.hand import Hand, evaluate_hand, is_natural

logger = logging.getLogger(__name__)

MESSAGE_BUST = "Bust! You Lose"
MESSAGE_DEALER_BUSTS = "Dealer Busts! You Win"
MESSAGE_WIN = "You Win!"
MESSAGE_LOSS = "Dealer Wins"
MESSAGE_PUSH = "Push! It's A Tie"
MESSAGE_BOTH_BLACKJACK = "Push! Both Have Blackjack"
MESSAGE_DEALER_BLACKJACK = "Dealer Blackjack! You Lose"
MESSAGE_PLAYER_BLACKJACK = "Blackjack! You Win 3:2"

_SPLIT_LABELS = {
    Outcome.WIN: "Win",
    Outcome.LOSS: "Lose",
    Outcome.PUSH: "Push",
}


class Resolution(BaseModel):
    """Fields shared by every resolution record."""

    model_config = ConfigDict(frozen=True)

    message: str
    payout: Decimal
    total_bet: Decimal
    win_amount: Decimal
    wins_delta: int = 0
    losses_delta: int = 0
    total_moves_delta: int = 0
    correct_moves_delta: int = 0
    hands_played_delta: int = 1
    xp_gain: int = 0


class SingleHandResolution(Resolution):
    """Resolution of a round played with one hand."""

    result: Outcome
    is_blackjack: bool = False


class HandOutcome(BaseModel):
    """One split hand's result."""

    model_config = ConfigDict(frozen=True)

    label: str
    result: Outcome
    value: int
    stake: Decimal
    payout: Decimal


class SplitHandResolution(Resolution):
    """Resolution of a round played as split hands."""

    hands: tuple[HandOutcome, ...]

    @property
    def result(self) -> Outcome:
        """Overall outcome by net win amount."""
        if self.win_amount > 0:
            return Outcome.WIN
        if self.win_amount < 0:
            return Outcome.LOSS
        return Outcome.PUSH


def compare_hands(player_total: int, dealer_total: int) -> tuple[Outcome, str]:
    """
    Classify a finished hand against the dealer.

    The player's bust is checked first: busting loses even when the dealer
    busts too.
    """
    if player_total > 21:
        return Outcome.LOSS, MESSAGE_BUST
    if dealer_total > 21:
        return Outcome.WIN, MESSAGE_DEALER_BUSTS
    if player_total > dealer_total:
        return Outcome.WIN, MESSAGE_WIN
    if player_total < dealer_total:
        return Outcome.LOSS, MESSAGE_LOSS
    return Outcome.PUSH, MESSAGE_PUSH


def resolve_single_hand(
    player_hand: Iterable[Card],
    dealer_hand: Iterable[Card],
    base_bet: Decimal | int,
    is_doubled: bool = False,
    level: int = 1,
) -> SingleHandResolution:
    """
    Resolve a single finished hand against the dealer.

    Args:
        player_hand: Player's final cards
        dealer_hand: Dealer's final cards
        base_bet: Bet before any double
        is_doubled: Whether the hand was doubled
        level: Player level, for XP

    Returns:
        The resolution record
    """
    player_total = evaluate_hand(player_hand).total
    dealer_total = evaluate_hand(dealer_hand).total
    result, message = compare_hands(player_total, dealer_total)

    payout = settle(result, base_bet, is_doubled, is_blackjack=False)
    total_bet = to_money(base_bet) * (2 if is_doubled else 1)
    wins_delta = 1 if result is Outcome.WIN else 0

    return SingleHandResolution(
        result=result,
        message=message,
        payout=payout,
        total_bet=total_bet,
        win_amount=payout - total_bet,
        wins_delta=wins_delta,
        losses_delta=1 if result is Outcome.LOSS else 0,
        total_moves_delta=0 if result is Outcome.PUSH else 1,
        correct_moves_delta=wins_delta,
        hands_played_delta=1,
        xp_gain=xp_per_win(level, total_bet) if wins_delta else 0,
    )


def resolve_split_hands(
    hands: Sequence[Hand],
    dealer_hand: Iterable[Card],
    level: int = 1,
) -> SplitHandResolution:
    """
    Resolve split hands independently against one dealer hand.

    Each hand's own bust loses it regardless of the dealer. Pushes are left
    out of the move count, and every won hand earns XP on its own stake.
    """
    dealer_total = evaluate_hand(dealer_hand).total

    outcomes: list[HandOutcome] = []
    payout = to_money(0)
    total_bet = to_money(0)
    wins_delta = 0
    losses_delta = 0
    total_moves_delta = len(hands)
    xp_gain = 0

    for index, hand in enumerate(hands, start=1):
        player_total = evaluate_hand(hand.cards).total
        result, _ = compare_hands(player_total, dealer_total)
        hand_payout = settle(result, hand.bet, hand.is_doubled)
        stake = to_money(hand.stake)

        if result is Outcome.WIN:
            wins_delta += 1
            xp_gain += xp_per_win(level, stake)
        elif result is Outcome.LOSS:
            losses_delta += 1
        else:
            total_moves_delta -= 1

        payout += hand_payout
        total_bet += stake
        outcomes.append(
            HandOutcome(
                label=f"Hand {index}",
                result=result,
                value=player_total,
                stake=stake,
                payout=hand_payout,
            )
        )

    message = " | ".join(f"{o.label}: {_SPLIT_LABELS[o.result]}" for o in outcomes)

    return SplitHandResolution(
        hands=tuple(outcomes),
        message=message,
        payout=payout,
        total_bet=total_bet,
        win_amount=payout - total_bet,
        wins_delta=wins_delta,
        losses_delta=losses_delta,
        total_moves_delta=total_moves_delta,
        correct_moves_delta=wins_delta,
        hands_played_delta=1,
        xp_gain=xp_gain,
    )


def resolve_hands(
    hands: Sequence[Hand],
    dealer_hand: Iterable[Card],
    level: int = 1,
) -> SingleHandResolution | SplitHandResolution:
    """Resolve one hand or a set of split hands."""
    if not hands:
        raise ValueError("resolve_hands requires at least one hand")

    if len(hands) == 1:
        hand = hands[0]
        return resolve_single_hand(hand.cards, dealer_hand, hand.bet, hand.is_doubled, level)

    return resolve_split_hands(hands, dealer_hand, level)


def dealer_peeks(dealer_hand: Sequence[Card]) -> bool:
    """The dealer checks the hole card when the upcard is a ten or an Ace."""
    return bool(dealer_hand) and dealer_hand[0].value >= 10


def resolve_initial_blackjack(
    player_hand: Sequence[Card],
    dealer_hand: Sequence[Card],
    bet: Decimal | int,
    level: int = 1,
) -> SingleHandResolution | None:
    """
    Settle naturals right after the initial deal.

    The dealer's hole card only counts when the upcard lets the dealer peek.
    Returns None when neither side holds a natural and play continues.
    """
    dealer_blackjack = dealer_peeks(dealer_hand) and is_natural(dealer_hand)
    player_blackjack = is_natural(player_hand)
    total_bet = to_money(bet)

    if dealer_blackjack and player_blackjack:
        payout = settle(Outcome.PUSH, bet, is_doubled=False, is_blackjack=True)
        logger.debug("Both sides hold blackjack")
        return SingleHandResolution(
            result=Outcome.PUSH,
            message=MESSAGE_BOTH_BLACKJACK,
            payout=payout,
            total_bet=total_bet,
            win_amount=payout - total_bet,
            is_blackjack=True,
        )

    if dealer_blackjack:
        logger.debug("Dealer blackjack")
        return SingleHandResolution(
            result=Outcome.LOSS,
            message=MESSAGE_DEALER_BLACKJACK,
            payout=to_money(0),
            total_bet=total_bet,
            win_amount=-total_bet,
            losses_delta=1,
        )

    if player_blackjack:
        payout = settle(Outcome.WIN, bet, is_doubled=False, is_blackjack=True)
        logger.debug("Player blackjack pays %s", payout)
        return SingleHandResolution(
            result=Outcome.WIN,
            message=MESSAGE_PLAYER_BLACKJACK,
            payout=payout,
            total_bet=total_bet,
            win_amount=payout - total_bet,
            wins_delta=1,
            total_moves_delta=1,
            correct_moves_delta=1,
            is_blackjack=True,
            xp_gain=xp_per_win(level, bet),
        )

    return None
