"""Round state enumeration."""

from enum import Enum


class GameState(Enum):
    """
    Round state machine states.

    Flow: BETTING → PLAYING → DEALER_TURN → FINISHED → PLAYING ...
    """

    # Waiting for the first bet
    BETTING = "betting"

    # Player acts on the current hand
    PLAYING = "playing"

    # Dealer draws out
    DEALER_TURN = "dealer_turn"

    # Round resolved, ready to deal again
    FINISHED = "finished"

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


VALID_TRANSITIONS: dict[GameState, list[GameState]] = {
    GameState.BETTING: [GameState.PLAYING],
    # FINISHED directly on a natural or when every hand busts
    GameState.PLAYING: [GameState.DEALER_TURN, GameState.FINISHED],
    GameState.DEALER_TURN: [GameState.FINISHED],
    GameState.FINISHED: [GameState.PLAYING],
}


def is_valid_transition(from_state: GameState, to_state: GameState) -> bool:
    """
    Check if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
