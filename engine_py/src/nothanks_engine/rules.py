"""
Game rule configuration and validation.

Only the player limits and the starting token count are configurable; the
card range (3..35) and the number of removed cards are fixed by the game.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import INITIAL_TOKENS, MAX_PLAYERS, MIN_PLAYERS

ENV_PREFIX = "NOTHANKS_"


class RuleConfig(BaseModel):
    """Configuration for game rules and settings."""

    min_players: int = Field(
        default=MIN_PLAYERS,
        ge=MIN_PLAYERS,
        le=MAX_PLAYERS,
        description="Minimum number of players required to start"
    )
    max_players: int = Field(
        default=MAX_PLAYERS,
        ge=MIN_PLAYERS,
        le=MAX_PLAYERS,
        description="Maximum number of players allowed to join"
    )
    initial_tokens: int = Field(
        default=INITIAL_TOKENS,
        ge=0,
        le=55,
        description="Tokens each player starts with"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players isn't below minimum."""
        min_players = info.data.get('min_players', MIN_PLAYERS)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count is valid for this configuration."""
        return self.min_players <= player_count <= self.max_players


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)


def load_rules_from_env(environ: Optional[Mapping[str, str]] = None) -> RuleConfig:
    """Build rules from NOTHANKS_* environment variables, falling back to defaults."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for name in RuleConfig.model_fields:
        value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return create_rules(**overrides)
