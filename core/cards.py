"""Cards and the dealing shoe."""

import logging
from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

CARDS_PER_DECK = 52
DEFAULT_NUM_DECKS = 6


class Suit(Enum):
    """Card suits, valued by their symbol."""

    CLUBS = "♣"
    DIAMONDS = "♦"
    HEARTS = "♥"
    SPADES = "♠"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    """Card ranks, valued by their label."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value

    @property
    def points(self) -> int:
        """Blackjack value: Ace 11, J/Q/K 10, else the pip count."""
        if self is Rank.ACE:
            return 11
        if self.value.isdigit():
            return int(self.value)
        return 10


# Letters and symbols accepted when parsing
_RANKS = {rank.value: rank for rank in Rank} | {"T": Rank.TEN}
_SUITS = {suit.name[0]: suit for suit in Suit} | {suit.value: suit for suit in Suit}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        return self.rank.points

    @property
    def is_ace(self) -> bool:
        return self.rank is Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """10, J, Q or K."""
        return not self.is_ace and self.value == 10

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse a card like 'AS', 'td', '10♥' or 'K♥'; the suit is the last character."""
        text = s.strip().upper()
        rank, suit = _RANKS.get(text[:-1]), _SUITS.get(text[-1:])
        if rank is None or suit is None:
            raise ValueError(f"Invalid card string: {s!r}")
        return cls(rank, suit)


def card_value(card: Card) -> int:
    """Return the blackjack value of a card: Ace 11, J/Q/K 10, else the rank."""
    return card.rank.points


def parse_cards(text: str) -> list[Card]:
    """Parse a whitespace separated list of cards, e.g. 'AS 10H Kd'."""
    return [Card.from_string(token) for token in text.split()]


def create_shoe(num_decks: int = DEFAULT_NUM_DECKS, rng: Random | None = None) -> list[Card]:
    """
    Build a shuffled multi-deck shoe.

    The decks are concatenated in order and then shuffled in place with
    ``Random.shuffle`` (Fisher-Yates).

    Args:
        num_decks: Number of 52-card decks to combine
        rng: Random number generator, a fresh unseeded one if None

    Returns:
        The shuffled cards; draw from the end of the list
    """
    cards = [
        Card(rank, suit)
        for _ in range(num_decks)
        for suit in Suit
        for rank in Rank
    ]
    (rng or Random()).shuffle(cards)
    return cards


class Shoe:
    """
    A multi-deck shoe for blackjack.

    Cards are drawn from the top (the end of the stack). An exhausted shoe
    replaces itself with a freshly shuffled one, so a draw never fails.
    """

    def __init__(
        self,
        num_decks: int = DEFAULT_NUM_DECKS,
        rng: Random | None = None,
        cards: Iterable[Card] | None = None,
    ) -> None:
        """
        Initialize a shoe.

        Args:
            num_decks: Number of decks in the shoe
            rng: Random number generator for shuffling
            cards: Explicit stack to draw from (last card is drawn first)
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")

        self._num_decks = num_decks
        self._rng = rng or Random()
        self._cards: list[Card] = []
        self.shuffle_count = 0
        if cards is None:
            self.shuffle()
        else:
            self._cards = list(cards)

    def shuffle(self) -> None:
        """Replace the remaining cards with a freshly shuffled full shoe."""
        self._cards = create_shoe(self._num_decks, self._rng)
        self.shuffle_count += 1
        logger.debug("Shuffled a new %d-deck shoe", self._num_decks)

    def draw(self) -> Card:
        """Draw a card, reshuffling first if the shoe is empty."""
        if not self._cards:
            logger.info("Shoe exhausted mid-round; reshuffling")
            self.shuffle()
        return self._cards.pop()

    @property
    def cards_remaining(self) -> int:
        """Cards left to deal before the shoe is replaced."""
        return len(self._cards)

    @property
    def total_cards(self) -> int:
        """Size of a fresh shoe."""
        return self._num_decks * CARDS_PER_DECK

    @property
    def num_decks(self) -> int:
        return self._num_decks

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
