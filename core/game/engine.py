"""Blackjack round engine with state machine."""

import logging
from dataclasses import dataclass, field
from random import Random
from typing import Callable

from transitions import Machine

from config import GameConfig, config
from core.cards import Card, Shoe
from core.hand import Hand
from core.strategy.basic import BasicStrategy
from core.strategy.dealer import dealer_should_hit
from core.strategy.rules import RuleSet
from core.strategy.tables import Action
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.resolution import (
    SingleHandResolution,
    SplitHandResolution,
    dealer_peeks,
    resolve_hands,
    resolve_initial_blackjack,
)
from core.game.state import GameState
from core.training.feedback import FeedbackResult, grade_move

logger = logging.getLogger(__name__)

RoundResolution = SingleHandResolution | SplitHandResolution


@dataclass
class RoundState:
    """Everything about the round in progress."""

    hands: list[Hand] = field(default_factory=list)
    dealer_hand: Hand = field(default_factory=Hand)
    current_hand_index: int = 0
    base_bet: int = 0
    level: int = 1
    resolution: RoundResolution | None = None
    moves: list[FeedbackResult] = field(default_factory=list)

    @property
    def current_hand(self) -> Hand | None:
        """Get the hand being played."""
        if 0 <= self.current_hand_index < len(self.hands):
            return self.hands[self.current_hand_index]
        return None

    @property
    def is_split(self) -> bool:
        return len(self.hands) > 1

    @property
    def upcard(self) -> Card | None:
        """The dealer's first card."""
        return self.dealer_hand.cards[0] if self.dealer_hand.cards else None


class BlackjackGame:
    """
    Blackjack round engine using a state machine.

    UI-agnostic: it reports through events and return values only. Every
    player action is graded against basic strategy before it is applied.
    """

    STATES = [s.value for s in GameState]

    TRANSITIONS = [
        {"trigger": "start_round", "source": ["betting", "finished"], "dest": "playing"},
        {"trigger": "natural", "source": "playing", "dest": "finished"},
        {"trigger": "player_done", "source": "playing", "dest": "dealer_turn"},
        {"trigger": "player_busts", "source": "playing", "dest": "finished"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "finished"},
    ]

    def __init__(
        self,
        rules: RuleSet | None = None,
        game_config: GameConfig | None = None,
        shoe: Shoe | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new game.

        Args:
            rules: Table rules, from the application config if not provided
            game_config: Shoe size, minimum bet and reshuffle threshold
            shoe: Shoe to draw from; a new shuffled one if not provided
            rng: Random number generator for reproducible shoes
        """
        self.rules = rules or RuleSet.from_config()
        self.game_config = game_config or config.game
        self.shoe = shoe or Shoe(num_decks=self.game_config.num_decks, rng=rng)
        self.strategy = BasicStrategy(self.rules)

        self.round = RoundState()
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=GameState.BETTING.value,
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Get current round state as enum."""
        return GameState(self._machine_state)  # type: ignore[attr-defined]

    @property
    def resolution(self) -> RoundResolution | None:
        """The finished round's resolution record."""
        return self.round.resolution

    @property
    def current_hand(self) -> Hand | None:
        return self.round.current_hand

    @property
    def dealer_hand(self) -> Hand:
        return self.round.dealer_hand

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to round events."""
        self.events.subscribe(handler, event_type)

    def deal(self, bet: int, level: int = 1) -> bool:
        """
        Start a round: take the bet and deal the initial cards.

        Cards go dealer, dealer, player, player; the dealer's first card is
        the upcard. A natural on either side settles the round at once.

        Args:
            bet: Base bet
            level: Player level, for XP

        Returns:
            True if the round was dealt
        """
        if self.state not in (GameState.BETTING, GameState.FINISHED):
            return self._invalid("Cannot deal while a round is in progress")

        if bet <= 0 or bet < self.game_config.min_bet:
            return self._invalid(f"Bet must be at least {max(self.game_config.min_bet, 1)}")

        if self.shoe.cards_remaining < self.game_config.reshuffle_threshold:
            self.shoe.shuffle()
            self.events.emit_new(EventType.SHOE_SHUFFLED, cards_remaining=self.shoe.cards_remaining)

        self.round = RoundState(hands=[Hand(bet=bet)], base_bet=bet, level=level)
        player_hand = self.round.hands[0]
        dealer_hand = self.round.dealer_hand

        self._deal_card(dealer_hand)
        self._deal_card(dealer_hand, face_up=False)
        self._deal_card(player_hand)
        self._deal_card(player_hand)

        self.start_round()
        self.events.emit_new(
            EventType.ROUND_STARTED,
            bet=bet,
            upcard=str(self.round.upcard),
            player_value=player_hand.value,
        )

        if dealer_peeks(dealer_hand.cards):
            self.events.emit_new(EventType.DEALER_PEEK, blackjack=dealer_hand.is_blackjack)

        resolution = resolve_initial_blackjack(player_hand.cards, dealer_hand.cards, bet, level)
        if resolution is None:
            return True

        if dealer_peeks(dealer_hand.cards) and dealer_hand.is_blackjack:
            self.events.emit_new(EventType.DEALER_BLACKJACK)
        if player_hand.is_blackjack:
            self.events.emit_new(EventType.PLAYER_BLACKJACK)

        self.natural()
        self._finish(resolution)
        return True

    def hit(self) -> bool:
        """Player takes another card. Reaching 21 stands automatically."""
        hand = self._playable_hand()
        if hand is None:
            return False

        self._grade(hand, Action.HIT)
        self._deal_card(hand)
        self.events.emit_new(
            EventType.PLAYER_HIT,
            hand_index=self.round.current_hand_index,
            hand_value=hand.value,
        )

        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_index=self.round.current_hand_index)
            return self._advance_to_next_hand()

        if hand.value == 21:
            return self._advance_to_next_hand()

        return True

    def stand(self) -> bool:
        """Player keeps the current hand."""
        hand = self._playable_hand()
        if hand is None:
            return False

        self._grade(hand, Action.STAND)
        self.events.emit_new(
            EventType.PLAYER_STAND,
            hand_index=self.round.current_hand_index,
            hand_value=hand.value,
        )
        return self._advance_to_next_hand()

    def double_down(self) -> bool:
        """Double the stake, take exactly one card and end the hand."""
        hand = self._playable_hand()
        if hand is None:
            return False

        if not hand.can_double(self.rules):
            return self._invalid("Cannot double")

        self._grade(hand, Action.DOUBLE)
        hand.is_doubled = True
        self._deal_card(hand)
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            hand_index=self.round.current_hand_index,
            hand_value=hand.value,
            stake=hand.stake,
        )

        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_index=self.round.current_hand_index)

        return self._advance_to_next_hand()

    def split(self) -> bool:
        """
        Split a pair into two hands with the same bet.

        Each hand gets one new card. Only the initial hand can be split, and
        a split hand dealt to 21 is finished without further play.
        """
        hand = self._playable_hand()
        if hand is None:
            return False

        if self.round.is_split or not hand.can_split:
            return self._invalid("Cannot split")

        self._grade(hand, Action.SPLIT)
        first, second = hand.cards
        self.round.hands = [
            Hand(cards=[first], bet=hand.bet, is_split_hand=True, is_split_ace=first.is_ace),
            Hand(cards=[second], bet=hand.bet, is_split_hand=True, is_split_ace=second.is_ace),
        ]
        for split_hand in self.round.hands:
            self._deal_card(split_hand)

        self.events.emit_new(
            EventType.PLAYER_SPLIT,
            hand1_value=self.round.hands[0].value,
            hand2_value=self.round.hands[1].value,
        )
        if self.round.hands[0].value == 21:
            return self._advance_to_next_hand()
        return True

    def hint(self) -> Action | None:
        """Basic strategy action for the current hand."""
        hand = self.round.current_hand
        if self.state != GameState.PLAYING or hand is None:
            return None
        return self.strategy.get_optimal_move(hand, self.round.upcard)

    def tip(self) -> str | None:
        """Basic strategy tip for the current hand."""
        hand = self.round.current_hand
        if self.state != GameState.PLAYING or hand is None:
            return None
        return self.strategy.get_tip_message(hand, self.round.upcard)

    @property
    def can_hit(self) -> bool:
        return self.state == GameState.PLAYING and self.round.current_hand is not None

    @property
    def can_stand(self) -> bool:
        return self.can_hit

    @property
    def can_double(self) -> bool:
        hand = self.round.current_hand
        return self.can_hit and hand.can_double(self.rules)  # type: ignore[union-attr]

    @property
    def can_split(self) -> bool:
        hand = self.round.current_hand
        return self.can_hit and not self.round.is_split and hand.can_split  # type: ignore[union-attr]

    def _playable_hand(self) -> Hand | None:
        hand = self.round.current_hand
        if self.state != GameState.PLAYING or hand is None:
            self._invalid("No hand to play", state=self.state.value)
            return None
        return hand

    def _invalid(self, message: str, **data) -> bool:
        logger.debug("Invalid action: %s", message)
        self.events.emit_new(EventType.INVALID_ACTION, message=message, **data)
        return False

    def _grade(self, hand: Hand, action: Action) -> FeedbackResult:
        result = grade_move(hand, self.round.upcard, action, self.rules)
        self.round.moves.append(result)
        self.events.emit_new(
            EventType.MOVE_GRADED,
            player_move=action.value,
            optimal_move=result.optimal_move.value,
            correct=result.is_correct,
            message_key=result.message_key,
        )
        return result

    def _deal_card(self, hand: Hand, face_up: bool = True) -> Card:
        """Deal a card to a hand."""
        card = self.shoe.draw()
        hand.add_card(card)
        is_dealer = hand is self.round.dealer_hand
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if is_dealer else "player",
            hand_value=hand.value if face_up or not is_dealer else None,
        )
        return card

    def _advance_to_next_hand(self) -> bool:
        """Move to the next split hand still to play, or finish the player's turn."""
        hands = self.round.hands
        index = self.round.current_hand_index + 1
        while index < len(hands) and hands[index].value == 21:
            index += 1
        self.round.current_hand_index = index

        if index < len(hands):
            return True

        if all(hand.is_busted for hand in hands):
            self.player_busts()
            return self._resolve_round()

        self.player_done()
        return self._play_dealer()

    def _play_dealer(self) -> bool:
        """Reveal the hole card and draw out under the table rules."""
        dealer_hand = self.round.dealer_hand
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(dealer_hand.cards[1]),
            hand_value=dealer_hand.value,
        )

        while dealer_should_hit(dealer_hand.cards, self.rules):
            self._deal_card(dealer_hand)
            self.events.emit_new(EventType.DEALER_HITS, hand_value=dealer_hand.value)

        if dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=dealer_hand.value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=dealer_hand.value)

        self.dealer_done()
        return self._resolve_round()

    def _resolve_round(self) -> bool:
        resolution = resolve_hands(self.round.hands, self.round.dealer_hand.cards, self.round.level)
        self._finish(resolution)
        return True

    def _finish(self, resolution: RoundResolution) -> None:
        self.round.resolution = resolution
        self.events.emit_new(
            EventType.ROUND_RESOLVED,
            result=resolution.result.value,
            message=resolution.message,
            payout=str(resolution.payout),
            win_amount=str(resolution.win_amount),
            xp_gain=resolution.xp_gain,
        )
        logger.info("Round resolved: %s (net %s)", resolution.message, resolution.win_amount)
