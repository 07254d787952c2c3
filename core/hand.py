"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator, NamedTuple

from core.cards import Card, card_value

if TYPE_CHECKING:
    from core.strategy.rules import RuleSet


class HandValue(NamedTuple):
    """Evaluated hand value."""

    total: int
    is_soft: bool
    hard_value: int


def evaluate_hand(cards: Iterable[Card] | None) -> HandValue:
    """
    Evaluate a hand with soft-ace reduction.

    Every ace starts at 11. While the total is over 21 and an ace is still
    counted as 11, one ace is reduced to 1. The hand is soft when at least
    one ace is still counted as 11 afterwards.

    Empty or missing hands evaluate to (0, False, 0).
    """
    if not cards:
        return HandValue(0, False, 0)

    total = 0
    aces = 0
    for card in cards:
        total += card_value(card)
        if card.is_ace:
            aces += 1

    aces_at_eleven = aces
    while total > 21 and aces_at_eleven > 0:
        total -= 10
        aces_at_eleven -= 1

    is_soft = aces > 0 and aces_at_eleven > 0
    hard_value = total - 10 if is_soft else total
    return HandValue(total, is_soft, hard_value)


def is_pair_hand(cards: Iterable[Card] | None) -> bool:
    """Two cards of equal blackjack value (a King and a 10 are a pair)."""
    if not cards:
        return False
    cards = list(cards)
    return len(cards) == 2 and card_value(cards[0]) == card_value(cards[1])


def is_natural(cards: Iterable[Card] | None) -> bool:
    """Two-card 21."""
    if not cards:
        return False
    cards = list(cards)
    return len(cards) == 2 and evaluate_hand(cards).total == 21


@dataclass
class Hand:
    """A blackjack hand with its wager and split/double flags."""

    cards: list[Card] = field(default_factory=list)
    bet: int = 0
    is_doubled: bool = False
    is_split_hand: bool = False
    is_split_ace: bool = False

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def clear(self) -> None:
        """Remove all cards and reset the flags."""
        self.cards.clear()
        self.is_doubled = False
        self.is_split_hand = False
        self.is_split_ace = False

    @property
    def evaluation(self) -> HandValue:
        return evaluate_hand(self.cards)

    @property
    def value(self) -> int:
        """Best total after ace reduction."""
        return self.evaluation.total

    @property
    def is_soft(self) -> bool:
        """Check if an ace is still counted as 11."""
        return self.evaluation.is_soft

    @property
    def is_hard(self) -> bool:
        return not self.is_soft

    @property
    def is_blackjack(self) -> bool:
        """Natural 21; a split hand never counts as blackjack."""
        return is_natural(self.cards) and not self.is_split_hand

    @property
    def is_busted(self) -> bool:
        return self.value > 21

    @property
    def is_pair(self) -> bool:
        return is_pair_hand(self.cards)

    @property
    def can_split(self) -> bool:
        """A pair that has not been split already (one split per round)."""
        return self.is_pair and not self.is_split_hand

    @property
    def stake(self) -> int:
        """Amount riding on this hand."""
        return self.bet * 2 if self.is_doubled else self.bet

    def can_double(self, rules: "RuleSet | None" = None) -> bool:
        """
        Check if the hand can be doubled down.

        Requires exactly two cards and no previous double. Split hands need
        double-after-split, and split aces need double-on-split-aces.
        """
        if len(self.cards) != 2 or self.is_doubled:
            return False
        if rules is None:
            from core.strategy.rules import RuleSet

            rules = RuleSet()
        if self.is_split_ace and not rules.double_on_split_aces:
            return False
        if self.is_split_hand and not rules.double_after_split:
            return False
        return True

    @property
    def num_cards(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
