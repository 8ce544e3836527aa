"""
Snapshot and client view tests.
"""

import pytest

from nothanks_engine.constants import ERROR_INVALID_STATE
from nothanks_engine.engine import NoThanksGame
from nothanks_engine.errors import GameError
from nothanks_engine.models import GamePhase
from nothanks_engine.serialization import (
    dump_state, dumps, load_state, loads, sanitize_state
)


def _game_in_progress():
    game = NoThanksGame(seed=21)
    for i in range(1, 4):
        game.join_game(f"p{i}", f"Player {i}")
    game.start_game()
    game.place_token("p1")
    game.take_card("p2")
    return game


def test_dump_state_fields():
    data = dump_state(_game_in_progress().get_state())

    assert data["phase"] == "PLAYING"
    assert data["current_player_index"] == 1
    assert len(data["deck"]) == 22
    assert len(data["removed_cards"]) == 9
    assert data["players"][1]["tokens"] == 12
    assert data["players"][1]["is_active"] is True


def test_snapshot_restores_same_state():
    state = _game_in_progress().get_state()
    assert load_state(dump_state(state)) == state
    assert loads(dumps(state)) == state


def test_restored_game_keeps_playing():
    state = loads(dumps(_game_in_progress().get_state()))
    game = NoThanksGame.from_state(state)
    assert game.place_token("p2")
    assert game.get_state().current_player_index == 2


@pytest.mark.parametrize("mutate", [
    lambda d: d["players"][0].update(tokens=-1),
    lambda d: d.update(phase="LOBBY"),
    lambda d: d.update(current_card=2),
    lambda d: d["deck"].append(d["removed_cards"][0]),
    lambda d: d.update(current_player_index=9),
    lambda d: d["players"][0].pop("id"),
])
def test_load_state_rejects_bad_records(mutate):
    data = dump_state(_game_in_progress().get_state())
    mutate(data)
    with pytest.raises(GameError) as exc:
        load_state(data)
    assert exc.value.code == ERROR_INVALID_STATE


def test_loads_rejects_bad_json():
    with pytest.raises(GameError):
        loads(b"{not json")
    with pytest.raises(GameError):
        loads(b"[1, 2]")


def test_sanitize_hides_deck():
    state = _game_in_progress().get_state()
    view = sanitize_state(state, viewer_id="p3")

    assert "deck" not in view
    assert "removed_cards" not in view
    assert view["deck_count"] == 22
    assert view["current_player_id"] == "p2"
    assert view["current_card"] == state.current_card
    assert [p["is_viewer"] for p in view["players"]] == [False, False, True]
    assert view["players"][0]["score"] == -10
    assert "standings" not in view


def test_sanitize_includes_standings_when_ended():
    game = NoThanksGame(seed=4)
    for i in range(1, 4):
        game.join_game(f"p{i}", f"Player {i}")
    game.start_game()
    while game.phase == GamePhase.PLAYING:
        game.take_card("p1")

    view = sanitize_state(game.get_state())
    assert view["current_player_id"] is None
    assert view["winner"] == "p2"
    assert [s["id"] for s in view["standings"]] == ["p2", "p3", "p1"]
    assert view["players"][0]["cards"] == sorted(view["players"][0]["cards"])


def _waiting_record():
    game = NoThanksGame()
    for i in range(1, 4):
        game.join_game(f"p{i}", f"Player {i}")
    return dump_state(game.get_state())


def _ended_record():
    game = NoThanksGame(seed=4)
    for i in range(1, 4):
        game.join_game(f"p{i}", f"Player {i}")
    game.start_game()
    while game.phase == GamePhase.PLAYING:
        game.take_card("p1")
    return dump_state(game.get_state())


def test_waiting_and_ended_records_load():
    for data in (_waiting_record(), _ended_record()):
        assert dump_state(load_state(data)) == data


def _move_removed_into_deck(d):
    d["deck"].append(d["removed_cards"].pop())


def _hide_current_card(d):
    d["deck"].append(d["current_card"])
    d["current_card"] = None


@pytest.mark.parametrize("mutate", [
    lambda d: d["players"][1].update(id=d["players"][0]["id"]),  # shared id
    lambda d: d["players"][0].update(is_active=True),  # two active
    lambda d: d["players"][1].update(is_active=False),  # nobody active
    lambda d: (d["players"][1].update(is_active=False), d["players"][2].update(is_active=True)),
    _move_removed_into_deck,  # 8 removed
    lambda d: d["deck"].pop(),  # 32 cards accounted for
    lambda d: d.update(winner="p1"),
    _hide_current_card,
    lambda d: d["players"].pop(),  # fewer than 3 players
])
def test_load_state_rejects_broken_game_in_play(mutate):
    """A game in play must keep one active current player and all 33 cards."""
    data = dump_state(_game_in_progress().get_state())
    mutate(data)
    with pytest.raises(GameError) as exc:
        load_state(data)
    assert exc.value.code == ERROR_INVALID_STATE


@pytest.mark.parametrize("mutate", [
    lambda d: d.update(current_card=d["players"][0]["cards"].pop()),
    lambda d: d.update(winner="nobody"),
    lambda d: d.update(winner="p1"),  # p1 holds every card, not the lowest score
    lambda d: d["players"][1].update(is_active=True),
    lambda d: d.update(tokens_on_card=2),
])
def test_load_state_rejects_broken_ended_game(mutate):
    data = _ended_record()
    mutate(data)
    with pytest.raises(GameError) as exc:
        load_state(data)
    assert exc.value.code == ERROR_INVALID_STATE


@pytest.mark.parametrize("mutate", [
    lambda d: d.update(deck=[3]),
    lambda d: d["players"][0].update(cards=[10]),
    lambda d: d["players"][0].update(is_active=True),
    lambda d: d.update(winner="p1"),
    lambda d: d["players"][2].update(id="p1"),
])
def test_load_state_rejects_broken_lobby(mutate):
    data = _waiting_record()
    mutate(data)
    with pytest.raises(GameError) as exc:
        load_state(data)
    assert exc.value.code == ERROR_INVALID_STATE


def test_from_state_rejects_broken_state():
    """An engine cannot be rehydrated from a state with two active players."""
    state = _game_in_progress().get_state()
    state.players[0].is_active = True

    with pytest.raises(GameError) as exc:
        NoThanksGame.from_state(state)
    assert exc.value.code == ERROR_INVALID_STATE
