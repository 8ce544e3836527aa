"""Headless rules engine for the card game No Thanks!"""

from .actions import (
    GameAction, JoinGameAction, PlaceTokenAction, StartGameAction, TakeCardAction, parse_action
)
from .engine import (
    ActionResult, NoThanksGame, apply_action, create_game, join_game, place_token,
    start_game, take_card
)
from .errors import DeckIntegrityError, GameError
from .models import GamePhase, GameState, Player, PlayerScore
from .rooms import Room, RoomManager
from .rules import RuleConfig, create_rules, default_rules, load_rules_from_env
from .scoring import calculate_player_score, calculate_standings, calculate_winner, explain_score

__all__ = [
    "ActionResult",
    "DeckIntegrityError",
    "GameAction",
    "GameError",
    "GamePhase",
    "GameState",
    "JoinGameAction",
    "NoThanksGame",
    "PlaceTokenAction",
    "Player",
    "PlayerScore",
    "Room",
    "RoomManager",
    "RuleConfig",
    "StartGameAction",
    "TakeCardAction",
    "apply_action",
    "calculate_player_score",
    "calculate_standings",
    "calculate_winner",
    "create_game",
    "create_rules",
    "default_rules",
    "explain_score",
    "join_game",
    "load_rules_from_env",
    "parse_action",
    "place_token",
    "start_game",
    "take_card",
]
