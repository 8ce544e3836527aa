"""
Scoring tests: run collapsing, token deduction and winner selection.
"""

import pytest

from nothanks_engine.models import Player
from nothanks_engine.scoring import (
    calculate_player_score, calculate_standings, calculate_winner, explain_score, find_runs
)


@pytest.mark.parametrize("cards, tokens, expected", [
    ([3, 4, 5, 10], 5, 8),
    ([3, 5, 7, 9], 3, 21),
    ([3, 4, 5, 6, 7], 2, 1),
    ([3, 4, 7, 8, 11], 4, 17),
    ([], 5, -5),
])
def test_calculate_player_score(cards, tokens, expected):
    player = Player(id="p1", name="Alice", tokens=tokens, cards=cards)
    assert calculate_player_score(player) == expected


def test_score_ignores_card_order():
    player = Player(id="p1", name="Alice", tokens=0, cards=[8, 6, 7])
    assert calculate_player_score(player) == 6


def test_find_runs():
    assert find_runs([10, 3, 5, 4]) == [[3, 4, 5], [10]]
    assert find_runs([35, 33]) == [[33], [35]]
    assert find_runs([]) == []


def test_winner_tie_goes_to_earlier_player():
    """Identical cards and tokens: the lower seat wins."""
    players = [
        Player(id="p1", name="Alice", tokens=4, cards=[20, 21]),
        Player(id="p2", name="Bob", tokens=4, cards=[20, 21]),
    ]
    assert calculate_winner(players) == "p1"
    assert calculate_winner(list(reversed(players))) == "p2"


def test_winner_is_minimum_score():
    players = [
        Player(id="p1", name="Alice", tokens=0, cards=[30]),
        Player(id="p2", name="Bob", tokens=2, cards=[3, 4, 5]),
        Player(id="p3", name="Charlie", tokens=11, cards=[]),
    ]
    assert calculate_winner(players) == "p3"


def test_winner_requires_players():
    with pytest.raises(ValueError):
        calculate_winner([])


def test_standings_order():
    players = [
        Player(id="p1", name="Alice", tokens=0, cards=[30]),
        Player(id="p2", name="Bob", tokens=1, cards=[12, 11]),
        Player(id="p3", name="Charlie", tokens=0, cards=[10]),
    ]
    standings = calculate_standings(players)

    assert [s.id for s in standings] == ["p2", "p3", "p1"]
    assert standings[0].score == 10
    assert standings[0].cards == [11, 12]
    assert standings[1].score == 10  # tie with p2 keeps seat order


def test_explain_score():
    player = Player(id="p1", name="Alice", tokens=5, cards=[10, 5, 3, 4])
    text = explain_score(player)

    assert "Score calculation for Alice:" in text
    assert "Cards: 3, 4, 5, 10" in text
    assert "3-4-5 (counts as 3)" in text
    assert "10 (single card)" in text
    assert "Token deduction: -5" in text
    assert text.endswith("Final score: 8")
