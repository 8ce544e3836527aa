"""
State serialization and sanitization utilities.
"""

from typing import Any, Dict, List, Optional

import orjson
from pydantic import BaseModel, Field, ValidationError

from .constants import (
    CARD_COUNT, ERROR_INVALID_STATE, MAX_CARD, MAX_PLAYERS, MIN_CARD, MIN_PLAYERS,
    REMOVED_CARD_COUNT
)
from .errors import GameError
from .models import GamePhase, GameState, Player
from .scoring import calculate_player_score, calculate_standings, calculate_winner


class PlayerRecord(BaseModel):
    """Stored form of a player."""
    id: str = Field(..., min_length=1)
    name: str
    tokens: int = Field(..., ge=0)
    cards: List[int] = Field(default_factory=list)
    is_active: bool = False


class GameRecord(BaseModel):
    """Stored form of a whole game."""
    players: List[PlayerRecord] = Field(default_factory=list)
    current_player_index: int = Field(0, ge=0)
    deck: List[int] = Field(default_factory=list)
    current_card: Optional[int] = Field(None, ge=MIN_CARD, le=MAX_CARD)
    tokens_on_card: int = Field(0, ge=0)
    removed_cards: List[int] = Field(default_factory=list)
    phase: GamePhase = GamePhase.WAITING
    winner: Optional[str] = None


def dump_state(state: GameState) -> Dict[str, Any]:
    """Full snapshot of the state as plain JSON-compatible data."""
    return {
        "players": [_player_to_dict(p) for p in state.players],
        "current_player_index": state.current_player_index,
        "deck": list(state.deck),
        "current_card": state.current_card,
        "tokens_on_card": state.tokens_on_card,
        "removed_cards": list(state.removed_cards),
        "phase": state.phase.value,
        "winner": state.winner,
    }


def load_state(data: Dict[str, Any]) -> GameState:
    """
    Rebuild a GameState from a snapshot produced by dump_state.

    Raises:
        GameError: with code INVALID_STATE if the record is malformed
    """
    try:
        record = GameRecord.model_validate(data)
    except ValidationError as e:
        raise GameError(ERROR_INVALID_STATE, f"Invalid game record: {e}") from e

    all_cards = list(record.deck) + list(record.removed_cards)
    for p in record.players:
        all_cards.extend(p.cards)
    if record.current_card is not None:
        all_cards.append(record.current_card)
    if any(card < MIN_CARD or card > MAX_CARD for card in all_cards):
        raise GameError(ERROR_INVALID_STATE, f"Card values must be between {MIN_CARD} and {MAX_CARD}")
    if len(set(all_cards)) != len(all_cards):
        raise GameError(ERROR_INVALID_STATE, "Card values must be distinct")
    if record.players and record.current_player_index >= len(record.players):
        raise GameError(
            ERROR_INVALID_STATE,
            f"current_player_index {record.current_player_index} is out of range"
        )
    _check_rules(record, all_cards)

    state = GameState(
        players=[
            Player(id=p.id, name=p.name, tokens=p.tokens, cards=list(p.cards), is_active=p.is_active)
            for p in record.players
        ],
        current_player_index=record.current_player_index,
        deck=list(record.deck),
        current_card=record.current_card,
        tokens_on_card=record.tokens_on_card,
        removed_cards=list(record.removed_cards),
        phase=record.phase,
        winner=record.winner,
    )
    if state.phase == GamePhase.ENDED and state.winner != calculate_winner(state.players):
        raise GameError(ERROR_INVALID_STATE, f"Winner {state.winner} does not have the lowest score")
    return state


def _check_rules(record: GameRecord, all_cards: List[int]) -> None:
    """Reject records that no sequence of legal actions could produce."""
    def invalid(message: str):
        raise GameError(ERROR_INVALID_STATE, message)

    player_ids = [p.id for p in record.players]
    if len(set(player_ids)) != len(player_ids):
        invalid("Player ids must be unique")
    if len(record.players) > MAX_PLAYERS:
        invalid(f"At most {MAX_PLAYERS} players can be seated")

    active = [i for i, p in enumerate(record.players) if p.is_active]

    if record.phase == GamePhase.WAITING:
        if all_cards:
            invalid("No cards are dealt before the game starts")
        if active:
            invalid("No player is active before the game starts")
        if record.winner is not None or record.tokens_on_card:
            invalid("A waiting game has no winner and no tokens on the card")
        return

    # PLAYING or ENDED: the whole range has been dealt
    if len(record.removed_cards) != REMOVED_CARD_COUNT:
        invalid(f"Exactly {REMOVED_CARD_COUNT} cards must be removed, got {len(record.removed_cards)}")
    if len(all_cards) != CARD_COUNT:
        invalid(f"A started game accounts for {CARD_COUNT} cards, got {len(all_cards)}")
    if len(record.players) < MIN_PLAYERS:
        invalid(f"A started game has at least {MIN_PLAYERS} players")

    if record.phase == GamePhase.PLAYING:
        if record.current_card is None:
            invalid("A game in play must have a face-up card")
        if active != [record.current_player_index]:
            invalid("Exactly one player, the current one, must be active")
        if record.winner is not None:
            invalid("A game in play has no winner yet")
        return

    if record.current_card is not None or record.deck:
        invalid("An ended game has no cards left to play")
    if active:
        invalid("No player is active after the game ends")
    if record.tokens_on_card:
        invalid("An ended game has no tokens on the card")
    if record.winner not in player_ids:
        invalid(f"Winner {record.winner} is not one of the players")


def dumps(state: GameState) -> bytes:
    """Encode a full snapshot as JSON bytes."""
    return orjson.dumps(dump_state(state))


def loads(raw: bytes) -> GameState:
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise GameError(ERROR_INVALID_STATE, f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise GameError(ERROR_INVALID_STATE, "Game record must be a JSON object")
    return load_state(data)


def _player_to_dict(player: Player) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "tokens": player.tokens,
        "cards": list(player.cards),
        "is_active": player.is_active,
    }


def sanitize_state(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Sanitize game state for transmission to clients.

    The order of the face-down deck and the removed cards are never sent;
    clients only learn how many cards are left.

    Args:
        state: Game state to sanitize
        viewer_id: ID of the player viewing the state

    Returns:
        Sanitized state dictionary safe for JSON transmission
    """
    current = state.current_player()
    sanitized = {
        "phase": state.phase.value,
        "current_player_id": current.id if current and current.is_active else None,
        "current_card": state.current_card,
        "tokens_on_card": state.tokens_on_card,
        "deck_count": len(state.deck),
        "winner": state.winner,
        "players": [],
    }

    for player in state.players:
        sanitized["players"].append({
            "id": player.id,
            "name": player.name,
            "tokens": player.tokens,
            "cards": player.sorted_cards(),
            "is_active": player.is_active,
            "is_viewer": player.id == viewer_id,
            "score": calculate_player_score(player),
        })

    if state.phase == GamePhase.ENDED:
        sanitized["standings"] = [
            {"id": s.id, "name": s.name, "score": s.score, "cards": s.cards, "tokens": s.tokens}
            for s in calculate_standings(state.players)
        ]

    return sanitized
