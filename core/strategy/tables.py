"""
Basic strategy rule tables.

Static, read-only data: for every pair value, soft total and hard total an
ordered tuple of cases keyed by the dealer upcard. The first case whose
dealer matcher accepts the upcard wins, so explicit dealer sets are listed
before the ``ANY_DEALER`` catch-all.

Dealer keys are the blackjack values 2-10 with J/Q/K folded into 10, and
``ACE`` (11) for an Ace.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

ACE = 11
DEALER_KEYS: tuple[int, ...] = (2, 3, 4, 5, 6, 7, 8, 9, 10, ACE)


class Action(Enum):
    """Possible player actions."""

    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"

    def __str__(self) -> str:
        return self.value


class HandCategory(Enum):
    """Which table a hand is looked up in."""

    PAIR = "pair"
    SOFT = "soft"
    HARD = "hard"


@dataclass(frozen=True)
class AnyDealer:
    """Matches every dealer upcard."""

    def matches(self, dealer_key: int) -> bool:
        return True


@dataclass(frozen=True)
class DealerSet:
    """Matches an explicit set of dealer keys."""

    keys: frozenset[int]

    def matches(self, dealer_key: int) -> bool:
        return dealer_key in self.keys


DealerMatcher = AnyDealer | DealerSet

ANY_DEALER = AnyDealer()


def dealers(*keys: int) -> DealerSet:
    """Build a dealer set matcher."""
    return DealerSet(frozenset(keys))


@dataclass(frozen=True)
class StrategyRule:
    """
    One strategy decision.

    ``fallback`` is the action to take when the rule says double but
    doubling is not available for the hand.
    """

    action: Action
    fallback: Action | None
    tip: str
    why: str


@dataclass(frozen=True)
class RuleCase:
    """A strategy rule applying to a set of dealer upcards."""

    dealers: DealerMatcher
    rule: StrategyRule

    def matches(self, dealer_key: int) -> bool:
        return self.dealers.matches(dealer_key)


def _case(
    matcher: DealerMatcher,
    action: Action,
    tip: str,
    why: str,
    fallback: Action | None = None,
) -> RuleCase:
    return RuleCase(matcher, StrategyRule(action, fallback, tip, why))


H = Action.HIT
S = Action.STAND
D = Action.DOUBLE
P = Action.SPLIT

WEAK_UPCARDS = dealers(2, 3, 4, 5, 6)
FOUR_TO_SIX = dealers(4, 5, 6)
WEAKEST_UPCARDS = dealers(5, 6)
NEUTRAL_SEVEN_EIGHT = dealers(7, 8)
STRONG_UPCARDS = dealers(7, 8, 9, 10, ACE)
NINE_PLUS = dealers(9, 10, ACE)
TWO_TO_SEVEN = dealers(2, 3, 4, 5, 6, 7)
TWO_TO_NINE = dealers(2, 3, 4, 5, 6, 7, 8, 9)
TEN_OR_ACE = dealers(10, ACE)


DEFAULT_RULE = StrategyRule(
    H,
    None,
    "Hit to improve your hand.",
    "Hitting gives you a chance to improve your total and compete with the dealer. "
    "This increases your winning chances compared to standing on a weak hand.",
)

DEFAULT_SOFT_RULE = StrategyRule(
    H,
    None,
    "Hit to improve your soft total: soft hands can't bust on one card.",
    "Soft hands can't bust on one card, so hitting gives you flexibility to build a "
    "winning total without risk. Keep drawing until you reach a strong total or the "
    "situation changes.",
)


# Pairs, keyed by card value (11 = Aces)
PAIR_RULES: Mapping[int, tuple[RuleCase, ...]] = MappingProxyType({
    11: (
        _case(
            ANY_DEALER, P,
            "Always split aces: two hands starting at 11 beat a single soft 12. "
            "Doubling after split aces isn't allowed.",
            "Splitting aces creates two hands each starting at 11, which can each reach "
            "18-21. This significantly increases your expected value compared to playing a "
            "single soft 12. Under these rules you cannot double after splitting aces.",
        ),
    ),
    10: (
        _case(
            ANY_DEALER, S,
            "Never split tens: hard 20 already crushes the dealer.",
            "Hard 20 is one of the strongest hands in blackjack and beats most dealer "
            "outcomes. Splitting tens would turn this top-tier hand into two weaker hands "
            "starting from 10. Always stand on 20.",
        ),
    ),
    9: (
        _case(
            dealers(7, 10, ACE), S,
            "9,9 vs 7/10/A: stand on 18. Splitting into strength reduces expected value.",
            "Against dealer 7, 10, or Ace, holding 18 is stronger than splitting. Two hands "
            "starting from 9 are weaker against these upcards. Standing preserves your "
            "advantage with 18.",
        ),
        _case(
            ANY_DEALER, P,
            "Split 9s vs 2-6 and 8-9 to create two strong hands with better winning potential.",
            "Against weak dealer upcards (2-6) or neutral ones (8-9), splitting 9s creates "
            "two hands that can each reach 19-21. You can win both hands, which beats "
            "standing on 18.",
        ),
    ),
    8: (
        _case(
            ANY_DEALER, P,
            "Always split 8s: hard 16 is the worst hard total and splitting escapes it.",
            "Hard 16 is too weak to stand but likely to bust if you hit. Splitting 8s "
            "creates two hands starting from 8, each with good potential to reach 17-21. "
            "This outperforms hitting or standing on 16, which loses heavily.",
        ),
    ),
    7: (
        _case(
            TWO_TO_SEVEN, P,
            "Split 7s vs 2-7 to create two drawing hands instead of a weak hard 14.",
            "Playing hard 14 against dealer 2-7 is weak. Splitting creates two hands "
            "starting from 7, each with good potential to reach 17-21.",
        ),
        _case(
            ANY_DEALER, H,
            "7,7 vs 8-A: hit. Don't split into strength.",
            "Splitting 7s against strong dealer upcards (8-A) creates two weak hands that "
            "are likely to lose. Hitting gives you a better chance to improve your total.",
        ),
    ),
    6: (
        _case(
            WEAK_UPCARDS, P,
            "Split 6s vs 2-6 (with Double After Split, never after split aces) to escape "
            "a weak hard 12.",
            "Playing hard 12 against weak dealer upcards wastes value. Splitting lets you "
            "double after split on favorable draws, improving expected value compared to "
            "hitting or standing.",
        ),
        _case(
            ANY_DEALER, H,
            "6,6 vs 7-A: hit. Don't split into strength.",
            "Splitting 6s against strong dealer upcards creates two weak hands that are "
            "likely to lose. Hitting gives you a better chance to improve your total.",
        ),
    ),
    5: (
        _case(
            TWO_TO_NINE, D,
            "Treat 5,5 as hard 10: double vs 2-9.",
            "Never split 5s. Treating 5,5 as hard 10 and doubling against dealer 2-9 "
            "maximizes expected value. Two hands starting from 5 perform much worse.",
            fallback=H,
        ),
        _case(
            TEN_OR_ACE, H,
            "5,5 vs 10/A: treat as hard 10 and hit. Don't double into strength.",
            "Against the dealer's strongest upcards (10, Ace), treating 5,5 as hard 10 and "
            "hitting is correct. Doubling would overcommit and is negative expected value.",
        ),
    ),
    4: (
        _case(
            WEAKEST_UPCARDS, P,
            "Split 4s vs 5-6 (with Double After Split) to exploit the dealer's weak upcards.",
            "Against dealer 5-6, splitting with Double After Split lets you double after "
            "favorable draws. This turns two weak 4s into potentially strong hands and "
            "beats hitting hard 8.",
        ),
        _case(
            ANY_DEALER, H,
            "4,4 vs other upcards: hit. Splitting doesn't improve expected value.",
            "Splitting 4s against upcards other than 5-6 underperforms. Hitting hard 8 "
            "gives you flexibility to improve without committing to two weak hands.",
        ),
    ),
    3: (
        _case(
            TWO_TO_SEVEN, P,
            "Split 3s vs 2-7 (with Double After Split) to create two drawing hands "
            "instead of a weak hard 6.",
            "Playing hard 6 against dealer 2-7 is weak. Splitting with Double After Split "
            "lets you double after favorable draws, turning two weak 3s into potentially "
            "strong hands.",
        ),
        _case(
            ANY_DEALER, H,
            "3,3 vs 8-A: hit. Don't split into strength.",
            "Splitting 3s against strong dealer upcards (8-A) creates two weak hands that "
            "are likely to lose. Hitting gives you a better chance to improve.",
        ),
    ),
    2: (
        _case(
            TWO_TO_SEVEN, P,
            "Split 2s vs 2-7 (with Double After Split) to create two drawing hands "
            "instead of a weak hard 4.",
            "Playing hard 4 against dealer 2-7 is very weak. Splitting with Double After "
            "Split lets you double after favorable draws, turning two weak 2s into "
            "potentially strong hands.",
        ),
        _case(
            ANY_DEALER, H,
            "2,2 vs 8-A: hit. Don't split into strength.",
            "Splitting 2s against strong dealer upcards (8-A) creates two very weak hands "
            "that are likely to lose. Hitting gives you a better chance to improve.",
        ),
    ),
})


_SOFT_13_14_HIT = (
    "A,2/A,3 vs other upcards: hit to improve without overcommitting.",
    "Against dealer upcards other than 5-6, doubling soft 13/14 overcommits a weak "
    "total. Hitting gives you flexibility to improve without risking too much.",
)

_SOFT_15_16_HIT = (
    "A,4/A,5 vs other upcards: hit to improve without overcommitting.",
    "Against dealer upcards other than 4-6, doubling overcommits a fragile total. "
    "Hitting gives you flexibility to improve to 17-21 without risking too much.",
)


def _soft_low_double(descriptor: str, upcards: str, reach: str) -> tuple[str, str]:
    return (
        f"{descriptor} vs {upcards}: double to take advantage of the dealer's weak upcards.",
        f"Against dealer {upcards}, {descriptor} has potential to improve to {reach} on "
        f"one card while the dealer busts frequently. Doubling captures this advantage.",
    )


# Soft totals 12-20
SOFT_RULES: Mapping[int, tuple[RuleCase, ...]] = MappingProxyType({
    20: (
        _case(
            ANY_DEALER, S,
            "Soft 20 (A,9) always stands: it's already a premium total.",
            "Soft 20 is one of the strongest hands in blackjack. Hitting would risk "
            "downgrading a made hand that wins against most dealer totals.",
        ),
    ),
    19: (
        _case(
            dealers(6), D,
            "A,8 vs 6: double to maximize your edge against the weakest dealer upcard.",
            "Dealer 6 is the weakest upcard and busts frequently. Doubling soft 19 "
            "against 6 increases expected value compared to standing.",
            fallback=S,
        ),
        _case(
            ANY_DEALER, S,
            "A,8 vs other upcards: stand. Soft 19 is already strong enough.",
            "Soft 19 beats most dealer outcomes. Against upcards other than 6, standing "
            "preserves your advantage.",
        ),
    ),
    18: (
        _case(
            WEAK_UPCARDS, D,
            "A,7 vs 2-6: double to maximize value against weak dealer upcards.",
            "Against weak dealer upcards (2-6), soft 18 has excellent potential to improve "
            "to 19-21 on one card while the dealer is likely to bust.",
            fallback=S,
        ),
        _case(
            NEUTRAL_SEVEN_EIGHT, S,
            "A,7 vs 7 or 8: stand. 18 keeps pace with the dealer's neutral upcards.",
            "Against dealer 7 or 8 you're roughly even. Standing preserves your position "
            "without risking a bust.",
        ),
        _case(
            NINE_PLUS, H,
            "A,7 vs 9-A: hit. 18 trails strong dealer upcards and needs improvement.",
            "Against strong dealer upcards (9, 10, Ace), soft 18 is behind. Hitting gives "
            "you flexibility to reach 19-21 without overcommitting.",
        ),
    ),
    17: (
        _case(
            dealers(3, 4, 5, 6), D,
            "A,6 vs 3-6: double to take advantage of the dealer's weak upcards.",
            "Against weak dealer upcards (3-6), soft 17 has many live outs to improve to "
            "18-21 on one card. Doubling maximizes your expected value.",
            fallback=H,
        ),
        _case(
            ANY_DEALER, H,
            "A,6 vs 2 or 7-A: hit. Soft 17 needs improvement against these upcards.",
            "Against dealer 2 or strong upcards (7-A), soft 17 is too weak to stand or "
            "double. Hitting lets you improve to 18-21 without overcommitting.",
        ),
    ),
    16: (
        _case(FOUR_TO_SIX, D, *_soft_low_double("A,5", "4-6", "17-21"), fallback=H),
        _case(ANY_DEALER, H, *_SOFT_15_16_HIT),
    ),
    15: (
        _case(FOUR_TO_SIX, D, *_soft_low_double("A,4", "4-6", "17-21"), fallback=H),
        _case(ANY_DEALER, H, *_SOFT_15_16_HIT),
    ),
    14: (
        _case(WEAKEST_UPCARDS, D, *_soft_low_double("A,3", "5-6", "15-21"), fallback=H),
        _case(ANY_DEALER, H, *_SOFT_13_14_HIT),
    ),
    13: (
        _case(WEAKEST_UPCARDS, D, *_soft_low_double("A,2", "5-6", "15-21"), fallback=H),
        _case(ANY_DEALER, H, *_SOFT_13_14_HIT),
    ),
    # Only reached by an ace pair that can no longer be split
    12: (
        _case(
            ANY_DEALER, H,
            "A,A you can't split again: hit. Soft 12 can't bust on one card.",
            "With the split already used, two aces are just soft 12. No card can bust it, "
            "and standing on 12 loses to every dealer total that doesn't bust.",
        ),
    ),
})


_STAND_17_PLUS = _case(
    ANY_DEALER, S,
    "17+ is already competitive: don't risk a bust. Never double hard 18.",
    "Hard 17+ beats most dealer outcomes. Hitting would risk busting a winning hand "
    "with little chance of improvement, and doubling gains nothing when you're ahead.",
)

_STAND_VS_WEAK = (
    "13-16 vs 2-6: stand and let the dealer's weak upcards produce busts.",
    "Against weak dealer upcards (2-6), hard 13-16 should stand. The dealer is likely "
    "to bust, so hitting would turn dealer busts into your own busts.",
)

_HIT_VS_STRONG = _case(
    STRONG_UPCARDS, H,
    "13-16 vs 7-A: you're likely behind. Draw to improve.",
    "Against strong dealer upcards (7-A), hard 13-16 is too weak to stand. The dealer "
    "is likely to make 17-21, so you need a chance to improve even at the risk of busting.",
)

_HIT_8_OR_LESS = _case(
    ANY_DEALER, H,
    "Totals 8 or less can't bust: keep drawing to build a hand.",
    "Hard totals 8 or less are too weak to stand and can't bust on one card. Hitting "
    "gives you a chance to improve to a competitive 17-21.",
)


# Hard totals 4-21
HARD_RULES: Mapping[int, tuple[RuleCase, ...]] = MappingProxyType({
    21: (_STAND_17_PLUS,),
    20: (_STAND_17_PLUS,),
    19: (_STAND_17_PLUS,),
    18: (_STAND_17_PLUS,),
    17: (_STAND_17_PLUS,),
    16: (_case(WEAK_UPCARDS, S, *_STAND_VS_WEAK), _HIT_VS_STRONG),
    15: (
        _case(
            dealers(5), S,
            "Hard 15 vs 5: stand. Dealer 5 is a bust card and doubling worsens EV.",
            "Hard 15 vs dealer 5 should stand. Dealer 5 busts frequently, so standing lets "
            "the dealer bust while avoiding your own bust.",
        ),
        _case(dealers(2, 3, 4, 6), S, *_STAND_VS_WEAK),
        _HIT_VS_STRONG,
    ),
    14: (_case(WEAK_UPCARDS, S, *_STAND_VS_WEAK), _HIT_VS_STRONG),
    13: (_case(WEAK_UPCARDS, S, *_STAND_VS_WEAK), _HIT_VS_STRONG),
    12: (
        _case(
            FOUR_TO_SIX, S,
            "12 vs 4-6: stand and let the dealer's weak upcard produce busts.",
            "Against weak dealer upcards (4-6), hard 12 should stand. Hitting would risk "
            "turning dealer busts into your own bust.",
        ),
        _case(
            dealers(2, 3, 7, 8, 9, 10, ACE), H,
            "12 vs 2-3 or 7-A: you're behind. Take a card to improve.",
            "Against dealer 2-3 or strong upcards (7-A), hard 12 is too weak to stand. "
            "Hitting gives you a chance to improve to 17-21.",
        ),
    ),
    11: (
        _case(
            ANY_DEALER, D,
            "Hard 11 doubles vs every upcard including Ace: any ten gives you 21.",
            "Hard 11 is one of the strongest doubling opportunities. Any ten-value card "
            "gives you 21, and even against an Ace doubling earns more than a simple hit.",
            fallback=H,
        ),
    ),
    10: (
        _case(
            TWO_TO_NINE, D,
            "10 vs 2-9: one card often makes 18-20. Double to maximize value.",
            "Hard 10 has excellent potential to improve to 18-20 on one card. Against "
            "dealer 2-9, doubling captures that edge better than a simple hit.",
            fallback=H,
        ),
        _case(
            TEN_OR_ACE, H,
            "10 vs 10/A: the dealer is too strong. Don't overbet; hit.",
            "Against dealer 10 or Ace, doubling hard 10 is negative expected value. "
            "Hitting preserves equity without risking too much.",
        ),
    ),
    9: (
        _case(
            dealers(3, 4, 5, 6), D,
            "9 vs 3-6: the dealer is weak. Press your edge by doubling.",
            "Against weak dealer upcards (3-6), hard 9 has good potential to improve to "
            "19-20 on one card. Hitting alone would leave money on the table.",
            fallback=H,
        ),
        _case(
            ANY_DEALER, H,
            "9 vs strong or neutral upcards: improve first, then compete.",
            "Against dealer upcards other than 3-6, doubling hard 9 overcommits. Hitting "
            "gives you flexibility to improve without risking too much.",
        ),
    ),
    8: (_HIT_8_OR_LESS,),
    7: (_HIT_8_OR_LESS,),
    6: (_HIT_8_OR_LESS,),
    5: (_HIT_8_OR_LESS,),
    # Only reached by a 2,2 that can no longer be split
    4: (_HIT_8_OR_LESS,),
})


TABLES: Mapping[HandCategory, Mapping[int, tuple[RuleCase, ...]]] = MappingProxyType({
    HandCategory.PAIR: PAIR_RULES,
    HandCategory.SOFT: SOFT_RULES,
    HandCategory.HARD: HARD_RULES,
})


def lookup_rule(category: HandCategory, key: int, dealer_key: int) -> StrategyRule | None:
    """
    First matching rule for a hand category, total (or pair value) and dealer key.

    Returns None when the table has no entry; callers fall back to a default rule.
    """
    for case in TABLES[category].get(key, ()):
        if case.matches(dealer_key):
            return case.rule
    return None
