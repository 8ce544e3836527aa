"""
Rules engine for No Thanks!

The module-level functions are pure transitions: they take a GameState and
return an ActionResult holding a new state, leaving the input untouched.
NoThanksGame wraps one private state behind the four boolean operations.
"""

import copy
import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from .actions import (
    GameAction, JoinGameAction, PlaceTokenAction, StartGameAction, TakeCardAction
)
from .constants import ERROR_PLAYER_NOT_FOUND, ERROR_UNKNOWN_ACTION
from .errors import GameError
from .models import GamePhase, GameState, Player, PlayerScore
from .rules import RuleConfig, default_rules
from .scoring import (
    calculate_player_score, calculate_standings, calculate_winner, explain_score
)
from .serialization import dump_state, load_state
from .shuffle import deal_deck
from .validate import (
    ValidationResult, validate_join, validate_place, validate_start, validate_take
)

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    success: bool
    state: GameState
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def ok(cls, state: GameState) -> 'ActionResult':
        return cls(success=True, state=state)

    @classmethod
    def rejected(cls, state: GameState, check: ValidationResult) -> 'ActionResult':
        return cls(
            success=False,
            state=state,
            error_code=check.error_code,
            error_message=check.error_message
        )


def create_game() -> GameState:
    """Fresh game in the lobby: no players, no cards dealt."""
    return GameState()


def join_game(
    state: GameState,
    player_id: str,
    player_name: str,
    rules: Optional[RuleConfig] = None
) -> ActionResult:
    """Append a player to the turn order while the game is WAITING."""
    rules = rules or default_rules
    check = validate_join(state, player_id, rules)
    if not check.valid:
        return ActionResult.rejected(state, check)

    new_state = copy.deepcopy(state)
    new_state.players.append(
        Player(id=player_id, name=player_name, tokens=rules.initial_tokens)
    )
    logger.info(f"Player {player_name} ({player_id}) joined in seat {len(new_state.players) - 1}")
    return ActionResult.ok(new_state)


def start_game(
    state: GameState,
    rules: Optional[RuleConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> ActionResult:
    """
    Deal the deck and hand the first turn to the first player who joined.

    Raises:
        DeckIntegrityError: if the dealt cards do not add up
    """
    rules = rules or default_rules
    check = validate_start(state, rules)
    if not check.valid:
        return ActionResult.rejected(state, check)

    new_state = copy.deepcopy(state)
    removed_cards, deck, current_card = deal_deck(seed=seed, rng=rng)
    new_state.removed_cards = removed_cards
    new_state.deck = deck
    new_state.current_card = current_card
    new_state.tokens_on_card = 0
    new_state.phase = GamePhase.PLAYING
    new_state.current_player_index = 0
    for index, player in enumerate(new_state.players):
        player.is_active = index == 0

    starter = new_state.players[0]
    logger.info(
        f"Game started with {len(new_state.players)} players, "
        f"{starter.name} goes first on card {current_card}"
    )
    return ActionResult.ok(new_state)


def take_card(state: GameState, player_id: str) -> ActionResult:
    """
    Claim the face-up card and its tokens, then turn up the next card.

    The taker keeps the turn. Taking the last card ends the game.
    """
    check = validate_take(state, player_id)
    if not check.valid:
        return ActionResult.rejected(state, check)

    new_state = copy.deepcopy(state)
    player = new_state.current_player()
    card = new_state.current_card
    player.cards.append(card)
    player.tokens += new_state.tokens_on_card
    logger.debug(f"{player.name} took {card} with {new_state.tokens_on_card} tokens")
    new_state.tokens_on_card = 0

    new_state.current_card = new_state.deck.pop() if new_state.deck else None
    if new_state.current_card is None:
        _end_game(new_state)

    return ActionResult.ok(new_state)


def place_token(state: GameState, player_id: str) -> ActionResult:
    """Pay one token onto the card and pass the turn to the next player."""
    check = validate_place(state, player_id)
    if not check.valid:
        return ActionResult.rejected(state, check)

    new_state = copy.deepcopy(state)
    player = new_state.current_player()
    player.tokens -= 1
    new_state.tokens_on_card += 1
    logger.debug(
        f"{player.name} passed on {new_state.current_card} "
        f"({new_state.tokens_on_card} tokens on card)"
    )
    _advance_turn(new_state)
    return ActionResult.ok(new_state)


def apply_action(
    state: GameState,
    action: GameAction,
    rules: Optional[RuleConfig] = None,
    rng: Optional[random.Random] = None
) -> ActionResult:
    """Apply a single decoded action to the state."""
    if isinstance(action, JoinGameAction):
        return join_game(state, action.player_id, action.player_name, rules)
    if isinstance(action, StartGameAction):
        return start_game(state, rules, rng=rng)
    if isinstance(action, TakeCardAction):
        return take_card(state, action.player_id)
    if isinstance(action, PlaceTokenAction):
        return place_token(state, action.player_id)
    return ActionResult.rejected(
        state, ValidationResult.error(ERROR_UNKNOWN_ACTION, "Unknown action.")
    )


def _advance_turn(state: GameState):
    state.players[state.current_player_index].is_active = False
    state.current_player_index = (state.current_player_index + 1) % len(state.players)
    state.players[state.current_player_index].is_active = True


def _end_game(state: GameState):
    state.phase = GamePhase.ENDED
    for player in state.players:
        player.is_active = False
    state.winner = calculate_winner(state.players)

    winner = state.find_player(state.winner)
    logger.info(
        f"Game ended, {winner.name} ({winner.id}) wins with "
        f"{calculate_player_score(winner)} points"
    )


class NoThanksGame:
    """
    One game of No Thanks! with its state kept private.

    Every mutator returns False and leaves the state untouched when the
    action is not legal; last_error then holds the reason code.
    """

    def __init__(self, rules: Optional[RuleConfig] = None, seed: Optional[int] = None):
        self.rules = rules or default_rules
        self._rng = random.Random(seed)
        self._state = create_game()
        self.last_error: Optional[str] = None

    @classmethod
    def from_state(
        cls,
        state: GameState,
        rules: Optional[RuleConfig] = None,
        seed: Optional[int] = None
    ) -> 'NoThanksGame':
        """
        Rehydrate an engine from a stored snapshot.

        Raises:
            GameError: with code INVALID_STATE if the snapshot breaks the game rules
        """
        game = cls(rules=rules, seed=seed)
        game._state = load_state(dump_state(state))
        return game

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    @property
    def current_card(self) -> Optional[int]:
        return self._state.current_card

    def _commit(self, result: ActionResult) -> bool:
        if result.success:
            self._state = result.state
            self.last_error = None
        else:
            self.last_error = result.error_code
        return result.success

    def join_game(self, player_id: str, player_name: str) -> bool:
        return self._commit(join_game(self._state, player_id, player_name, self.rules))

    def start_game(self) -> bool:
        return self._commit(start_game(self._state, self.rules, rng=self._rng))

    def take_card(self, player_id: str) -> bool:
        return self._commit(take_card(self._state, player_id))

    def place_token(self, player_id: str) -> bool:
        return self._commit(place_token(self._state, player_id))

    def apply(self, action: GameAction) -> bool:
        return self._commit(apply_action(self._state, action, self.rules, self._rng))

    def get_state(self) -> GameState:
        """Deep copy of the current state; changing it does not affect the game."""
        return copy.deepcopy(self._state)

    def scores(self) -> Dict[str, int]:
        return {p.id: calculate_player_score(p) for p in self._state.players}

    def standings(self) -> List[PlayerScore]:
        return calculate_standings(self._state.players)

    def explain_score(self, player_id: str) -> str:
        player = self._state.find_player(player_id)
        if player is None:
            raise GameError(ERROR_PLAYER_NOT_FOUND, f"Player {player_id} is not in this game")
        return explain_score(player)
