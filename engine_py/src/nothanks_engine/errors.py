# engine_py/src/nothanks_engine/errors.py

from .constants import ERROR_INTERNAL


class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class DeckIntegrityError(GameError):
    """Raised when a freshly built deck does not add up. Always a bug."""
    def __init__(self, message: str):
        super().__init__(ERROR_INTERNAL, message)
