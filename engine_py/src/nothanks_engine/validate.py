"""
Legality checks for the four game actions.

Each check returns a ValidationResult; the engine turns a failed result into
a no-op.
"""

from typing import Optional

from .constants import (
    ERROR_DUPLICATE_PLAYER, ERROR_NO_CURRENT_CARD, ERROR_NO_TOKENS,
    ERROR_NOT_ENOUGH_PLAYERS, ERROR_NOT_YOUR_TURN, ERROR_PLAYER_NOT_FOUND,
    ERROR_ROOM_FULL, ERROR_WRONG_PHASE
)
from .models import GamePhase, GameState
from .rules import RuleConfig, default_rules


class ValidationResult:
    """Result of validating an action."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def success(cls) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)


def validate_join(
    state: GameState,
    player_id: str,
    rules: RuleConfig = default_rules
) -> ValidationResult:
    """Check that player_id may join: lobby open, room not full, id unused."""
    if state.phase != GamePhase.WAITING:
        return ValidationResult.error(
            ERROR_WRONG_PHASE,
            f"Game is not accepting players (current: {state.phase.value})"
        )
    if len(state.players) >= rules.max_players:
        return ValidationResult.error(
            ERROR_ROOM_FULL,
            f"Room is full ({rules.max_players} players)"
        )
    if state.find_player(player_id) is not None:
        return ValidationResult.error(
            ERROR_DUPLICATE_PLAYER,
            f"Player {player_id} has already joined"
        )
    return ValidationResult.success()


def validate_start(state: GameState, rules: RuleConfig = default_rules) -> ValidationResult:
    if state.phase != GamePhase.WAITING:
        return ValidationResult.error(
            ERROR_WRONG_PHASE,
            f"Game has already started (current: {state.phase.value})"
        )
    if len(state.players) < rules.min_players:
        return ValidationResult.error(
            ERROR_NOT_ENOUGH_PLAYERS,
            f"Need at least {rules.min_players} players"
        )
    return ValidationResult.success()


def _validate_turn(state: GameState, player_id: str) -> ValidationResult:
    """Shared checks for take and place: playing, acting player's turn, card showing."""
    if state.phase != GamePhase.PLAYING:
        return ValidationResult.error(
            ERROR_WRONG_PHASE,
            f"Game is not in play phase (current: {state.phase.value})"
        )

    if state.find_player(player_id) is None:
        return ValidationResult.error(
            ERROR_PLAYER_NOT_FOUND,
            f"Player {player_id} is not in this game"
        )

    current = state.current_player()
    if current is None or current.id != player_id or not current.is_active:
        return ValidationResult.error(
            ERROR_NOT_YOUR_TURN,
            f"It's not your turn (current turn: {current.id if current else None})"
        )

    if state.current_card is None:
        return ValidationResult.error(
            ERROR_NO_CURRENT_CARD,
            "There is no card to act on"
        )

    return ValidationResult.success()


def validate_take(state: GameState, player_id: str) -> ValidationResult:
    return _validate_turn(state, player_id)


def validate_place(state: GameState, player_id: str) -> ValidationResult:
    """A player with no tokens left cannot pass and must take the card."""
    result = _validate_turn(state, player_id)
    if not result.valid:
        return result

    if state.current_player().tokens <= 0:
        return ValidationResult.error(
            ERROR_NO_TOKENS,
            "No tokens left, you must take the card"
        )

    return ValidationResult.success()
