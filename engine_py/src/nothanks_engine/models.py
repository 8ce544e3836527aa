"""Game models and data structures"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .constants import INITIAL_TOKENS, PHASE_ENDED, PHASE_PLAYING, PHASE_WAITING


class GamePhase(str, Enum):
    """Coarse game lifecycle: WAITING -> PLAYING -> ENDED."""
    WAITING = PHASE_WAITING
    PLAYING = PHASE_PLAYING
    ENDED = PHASE_ENDED


@dataclass
class Player:
    id: str
    name: str
    tokens: int = INITIAL_TOKENS
    cards: List[int] = field(default_factory=list)  # claimed cards, unordered
    is_active: bool = False

    def sorted_cards(self) -> List[int]:
        return sorted(self.cards)


@dataclass
class GameState:
    players: List[Player] = field(default_factory=list)  # turn order = join order
    current_player_index: int = 0
    deck: List[int] = field(default_factory=list)  # face-down stack, top is the last element
    current_card: Optional[int] = None
    tokens_on_card: int = 0
    removed_cards: List[int] = field(default_factory=list)
    phase: GamePhase = GamePhase.WAITING
    winner: Optional[str] = None

    def current_player(self) -> Optional[Player]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    def find_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None


@dataclass(frozen=True)
class PlayerScore:
    id: str
    name: str
    score: int
    cards: List[int]
    tokens: int
