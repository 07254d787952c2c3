"""Round engine, settlement, resolution and leveling."""

from core.game.events import GameEvent, EventType, EventEmitter
from core.game.state import GameState
from core.game.settlement import Outcome, settle
from core.game.leveling import cash_bonus, xp_needed, xp_per_win
from core.game.resolution import (
    SingleHandResolution,
    SplitHandResolution,
    resolve_hands,
    resolve_initial_blackjack,
    resolve_single_hand,
    resolve_split_hands,
)
from core.game.engine import BlackjackGame, RoundState

__all__ = [
    "GameEvent",
    "EventType",
    "EventEmitter",
    "GameState",
    "Outcome",
    "settle",
    "cash_bonus",
    "xp_needed",
    "xp_per_win",
    "SingleHandResolution",
    "SplitHandResolution",
    "resolve_hands",
    "resolve_initial_blackjack",
    "resolve_single_hand",
    "resolve_split_hands",
    "BlackjackGame",
    "RoundState",
]
