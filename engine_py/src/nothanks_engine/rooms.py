"""In-memory registry of games, one per room, with one lock per room."""

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .actions import GameAction
from .constants import ERROR_ROOM_NOT_FOUND
from .engine import NoThanksGame
from .errors import GameError
from .models import GameState
from .rules import RuleConfig

logger = logging.getLogger(__name__)


@dataclass
class Room:
    id: str
    game: NoThanksGame
    version: int = 0
    game_log: List[str] = field(default_factory=list)


class RoomManager:
    """
    Serializes actions per room so at most one action runs on a game at a time.

    Room ids are minted by the caller; capacity and turn rules live in the
    engine.
    """

    def __init__(self, rules: Optional[RuleConfig] = None):
        self.rules = rules
        self.rooms: Dict[str, Room] = {}
        self.room_locks = defaultdict(threading.Lock)
        self._registry_lock = threading.Lock()

    def create_room(
        self,
        room_id: str,
        rules: Optional[RuleConfig] = None,
        seed: Optional[int] = None
    ) -> Room:
        with self._registry_lock:
            if room_id not in self.rooms:
                game = NoThanksGame(rules=rules or self.rules, seed=seed)
                self.rooms[room_id] = Room(id=room_id, game=game)
                logger.info(f"Created room {room_id}")
            return self.rooms[room_id]

    def get_room(self, room_id: str) -> Optional[Room]:
        return self.rooms.get(room_id)

    def remove_room(self, room_id: str) -> bool:
        # Locks are never dropped, so late callers still serialize on the same one
        with self._lock_for(room_id):
            with self._registry_lock:
                room = self.rooms.pop(room_id, None)
        if room is not None:
            logger.info(f"Removed room {room_id}")
        return room is not None

    def list_rooms(self) -> List[str]:
        return list(self.rooms.keys())

    def _lock_for(self, room_id: str) -> threading.Lock:
        with self._registry_lock:
            return self.room_locks[room_id]

    def _require_room(self, room_id: str) -> Room:
        room = self.get_room(room_id)
        if room is None:
            raise GameError(ERROR_ROOM_NOT_FOUND, f"Room {room_id} not found")
        return room

    def _run(
        self,
        room_id: str,
        action: Callable[[NoThanksGame], bool],
        describe: Callable[[NoThanksGame], str]
    ) -> bool:
        with self._lock_for(room_id):
            room = self._require_room(room_id)
            description = describe(room.game)
            success = action(room.game)
            if success:
                room.version += 1
                room.game_log.append(description)
            else:
                logger.warning(
                    f"Rejected in room {room_id}: {description} ({room.game.last_error})"
                )
            return success

    def join_game(self, room_id: str, player_id: str, player_name: str) -> bool:
        return self._run(
            room_id,
            lambda game: game.join_game(player_id, player_name),
            lambda game: f"{player_name} joined",
        )

    def start_game(self, room_id: str) -> bool:
        return self._run(
            room_id,
            lambda game: game.start_game(),
            lambda game: "Game started",
        )

    def take_card(self, room_id: str, player_id: str) -> bool:
        return self._run(
            room_id,
            lambda game: game.take_card(player_id),
            lambda game: f"{player_id} took {game.current_card}",
        )

    def place_token(self, room_id: str, player_id: str) -> bool:
        return self._run(
            room_id,
            lambda game: game.place_token(player_id),
            lambda game: f"{player_id} said no thanks to {game.current_card}",
        )

    def apply(self, room_id: str, action: GameAction) -> bool:
        return self._run(
            room_id,
            lambda game: game.apply(action),
            lambda game: f"{action.type} applied",
        )

    def get_state(self, room_id: str) -> GameState:
        with self._lock_for(room_id):
            return self._require_room(room_id).game.get_state()
