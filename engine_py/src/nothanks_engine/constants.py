"""Game constants and utilities"""

# Card universe: every integer from MIN_CARD to MAX_CARD appears exactly once
MIN_CARD = 3
MAX_CARD = 35
CARD_COUNT = MAX_CARD - MIN_CARD + 1  # 33
REMOVED_CARD_COUNT = 9
PLAYABLE_CARD_COUNT = CARD_COUNT - REMOVED_CARD_COUNT  # 24

# Defaults for the configurable limits (see rules.RuleConfig)
INITIAL_TOKENS = 11
MIN_PLAYERS = 3
MAX_PLAYERS = 7

# Phases
PHASE_WAITING = "WAITING"
PHASE_PLAYING = "PLAYING"
PHASE_ENDED = "ENDED"

# Error codes
ERROR_WRONG_PHASE = "WRONG_PHASE"
ERROR_ROOM_FULL = "ROOM_FULL"
ERROR_DUPLICATE_PLAYER = "DUPLICATE_PLAYER"
ERROR_NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"
ERROR_PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
ERROR_NOT_YOUR_TURN = "NOT_YOUR_TURN"
ERROR_NO_CURRENT_CARD = "NO_CURRENT_CARD"
ERROR_NO_TOKENS = "NO_TOKENS"
ERROR_UNKNOWN_ACTION = "UNKNOWN_ACTION"
ERROR_INVALID_ACTION = "INVALID_ACTION"
ERROR_INVALID_STATE = "INVALID_STATE"
ERROR_ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
ERROR_INTERNAL = "INTERNAL_ERROR"


def full_card_range() -> list:
    """All card values in play order before shuffling (3..35)."""
    return list(range(MIN_CARD, MAX_CARD + 1))
