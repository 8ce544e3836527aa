"""
Action models for driving the engine from decoded messages.
"""

from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .constants import ERROR_INVALID_ACTION
from .errors import GameError


class BaseAction(BaseModel):
    """Base action model."""
    model_config = {"frozen": True}


class JoinGameAction(BaseAction):
    """Join the game in the lobby."""
    type: Literal["JOIN_GAME"] = "JOIN_GAME"
    player_id: str = Field(..., min_length=1)
    player_name: str = Field(..., min_length=1, max_length=30)


class StartGameAction(BaseAction):
    """Deal the cards and begin play."""
    type: Literal["START_GAME"] = "START_GAME"


class TakeCardAction(BaseAction):
    """Claim the face-up card and its tokens."""
    type: Literal["TAKE_CARD"] = "TAKE_CARD"
    player_id: str = Field(..., min_length=1)


class PlaceTokenAction(BaseAction):
    """Pay one token to pass the card to the next player."""
    type: Literal["PLACE_TOKEN"] = "PLACE_TOKEN"
    player_id: str = Field(..., min_length=1)


GameAction = Annotated[
    Union[JoinGameAction, StartGameAction, TakeCardAction, PlaceTokenAction],
    Field(discriminator="type"),
]

_action_adapter = TypeAdapter(GameAction)


def parse_action(data: Dict[str, Any]) -> GameAction:
    """
    Parse a raw action payload.

    Raises:
        GameError: with code INVALID_ACTION if the payload is malformed
    """
    try:
        return _action_adapter.validate_python(data)
    except ValidationError as e:
        raise GameError(ERROR_INVALID_ACTION, f"Invalid action: {e}") from e
