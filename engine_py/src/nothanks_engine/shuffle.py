"""
Deck construction: shuffling, withholding the removed cards and verifying
the deal.
"""

import logging
import random
from typing import List, Optional, Tuple

from .constants import CARD_COUNT, PLAYABLE_CARD_COUNT, REMOVED_CARD_COUNT, full_card_range
from .errors import DeckIntegrityError

logger = logging.getLogger(__name__)


def create_deck() -> List[int]:
    """Create the full, unshuffled card range (3..35)."""
    deck = full_card_range()
    if len(deck) != CARD_COUNT:
        raise DeckIntegrityError(f"Wrong initial card count: {len(deck)}")
    return deck


def shuffle_deck(
    deck: List[int],
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> List[int]:
    """
    Shuffle a deck uniformly, deterministically if seed is provided.

    random.Random.shuffle is a Fisher-Yates shuffle, so every permutation is
    equally likely.

    Args:
        deck: Card values to shuffle
        seed: Optional seed for deterministic shuffling
        rng: Optional random generator; takes precedence over seed

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = deck.copy()

    if rng is None:
        rng = random.Random(seed) if seed is not None else random.Random()
    rng.shuffle(deck_copy)

    return deck_copy


def deal_deck(
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> Tuple[List[int], List[int], Optional[int]]:
    """
    Build the starting layout for a game.

    The first REMOVED_CARD_COUNT shuffled cards are withheld for the whole
    game, the rest form the face-down stack and its top card is turned up.

    Returns:
        (removed_cards, deck, current_card)
    """
    shuffled = shuffle_deck(create_deck(), seed=seed, rng=rng)

    removed_cards = shuffled[:REMOVED_CARD_COUNT]
    deck = shuffled[REMOVED_CARD_COUNT:]
    current_card = deck.pop() if deck else None

    verify_distribution(removed_cards, deck, current_card)
    return removed_cards, deck, current_card


def verify_distribution(
    removed_cards: List[int],
    deck: List[int],
    current_card: Optional[int]
) -> None:
    """Raise DeckIntegrityError unless the deal accounts for every card once."""
    current_count = 1 if current_card is not None else 0
    total = len(deck) + len(removed_cards) + current_count

    problems = []
    if total != CARD_COUNT:
        problems.append(f"total {total} (should be {CARD_COUNT})")
    if len(removed_cards) != REMOVED_CARD_COUNT:
        problems.append(f"removed {len(removed_cards)} (should be {REMOVED_CARD_COUNT})")
    if len(deck) + current_count != PLAYABLE_CARD_COUNT:
        problems.append(
            f"in play {len(deck) + current_count} (should be {PLAYABLE_CARD_COUNT})"
        )

    dealt = list(removed_cards) + list(deck)
    if current_card is not None:
        dealt.append(current_card)
    if sorted(dealt) != full_card_range():
        problems.append("cards are duplicated or out of range")

    if problems:
        message = "Invalid card distribution: " + ", ".join(problems)
        logger.error(
            f"{message} (deck={len(deck)}, removed={len(removed_cards)}, current={current_count})"
        )
        raise DeckIntegrityError(message)
