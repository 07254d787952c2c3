"""Card and hand builders and hypothesis strategies shared by the tests."""

from hypothesis import strategies as st

from core.cards import Card, Rank, Shoe, Suit, parse_cards
from core.hand import Hand


def cards(text: str) -> list[Card]:
    """Cards from a string like 'AS KH'."""
    return parse_cards(text)


def hand(text: str, bet: int = 0, **flags) -> Hand:
    """A Hand from a string like '8S 8H'."""
    return Hand(cards=parse_cards(text), bet=bet, **flags)


def stacked_shoe(text: str) -> Shoe:
    """
    A shoe that deals the given cards in order.

    The initial deal is dealer, dealer, player, player, so
    'KS 7H 10D 9C 5S' gives the dealer K,7, the player 10,9 and 5 next.
    """
    return Shoe(num_decks=1, cards=reversed(parse_cards(text)))


# Hypothesis strategies for property-based testing


@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=2, max_cards=5):
    """Generate a random hand."""
    return Hand(cards=draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards)))
