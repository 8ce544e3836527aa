# engine_py/src/nothanks_engine/scoring.py

from typing import Iterable, List, Sequence

from .models import Player, PlayerScore


def find_runs(cards: Iterable[int]) -> List[List[int]]:
    """
    Split cards into maximal runs of consecutive values.

    The cards are sorted first, so insertion order does not matter.
    For example [10, 3, 5, 4] gives [[3, 4, 5], [10]].
    """
    runs: List[List[int]] = []
    for card in sorted(cards):
        if runs and card == runs[-1][-1] + 1:
            runs[-1].append(card)
        else:
            runs.append([card])
    return runs


def calculate_player_score(player: Player) -> int:
    """
    Score a player: the lowest card of each run, minus remaining tokens.

    Owning 6, 7 and 8 costs 6. Lower is better.
    """
    return sum(run[0] for run in find_runs(player.cards)) - player.tokens


def calculate_winner(players: Sequence[Player]) -> str:
    """
    Return the id of the player with the lowest score.

    Exact ties go to the earliest player in turn order.
    """
    if not players:
        raise ValueError("Cannot pick a winner without players")

    best = players[0]
    best_score = calculate_player_score(best)
    for player in players[1:]:
        score = calculate_player_score(player)
        if score < best_score:
            best, best_score = player, score
    return best.id


def calculate_standings(players: Sequence[Player]) -> List[PlayerScore]:
    """Scores for every player, best first; ties keep turn order."""
    scores = [
        PlayerScore(
            id=player.id,
            name=player.name,
            score=calculate_player_score(player),
            cards=player.sorted_cards(),
            tokens=player.tokens,
        )
        for player in players
    ]
    # sorted() is stable, so equal scores stay in turn order
    return sorted(scores, key=lambda s: s.score)


def explain_score(player: Player) -> str:
    """Human-readable breakdown of how a player's score is computed."""
    cards = player.sorted_cards()
    lines = [
        f"Score calculation for {player.name}:",
        f"Cards: {', '.join(str(c) for c in cards)}",
        f"Tokens: {player.tokens}",
        "Sequences:",
    ]
    for run in find_runs(cards):
        if len(run) > 1:
            lines.append(f"  {'-'.join(str(c) for c in run)} (counts as {run[0]})")
        else:
            lines.append(f"  {run[0]} (single card)")
    lines.append(f"Token deduction: -{player.tokens}")
    lines.append(f"Final score: {calculate_player_score(player)}")
    return "\n".join(lines)
