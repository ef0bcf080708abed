import pytest

from swisscut import engine
from swisscut.controllers.registration import Roster
from swisscut.exceptions import (
    DuplicatePlayerException,
    InvalidPlayerDataException,
    PlayerNotFoundException,
    RosterFullException,
)
from swisscut.models.player import Player


def test_registered_player_starts_with_zeroed_stats():
    roster = Roster()
    player = engine.register_player(roster, "  Goku  ", deck_name=" Saiyan ")

    assert player.name == "Goku"
    assert player.deck_name == "Saiyan"
    assert player.registration_order == 1
    assert player.group_id is None
    assert (player.wins, player.losses, player.tournament_points) == (0, 0, 0)
    assert player.history == []
    assert player.id in roster


def test_ids_are_unique_and_order_increases():
    roster = Roster()
    players = [engine.register_player(roster, f"Player {i}") for i in range(5)]

    assert len({p.id for p in players}) == 5
    assert [p.registration_order for p in players] == [1, 2, 3, 4, 5]


def test_order_is_never_reused_after_removal():
    roster = Roster()
    first = engine.register_player(roster, "First")
    second = engine.register_player(roster, "Second")

    removed = engine.remove_player(roster, second.id)
    third = engine.register_player(roster, "Third")

    assert removed is second
    assert third.registration_order == 3
    assert [p.id for p in roster.get_player_list()] == [first.id, third.id]


def test_blank_name_is_rejected():
    with pytest.raises(InvalidPlayerDataException):
        engine.register_player(Roster(), "   ")


def test_roster_cap():
    roster = Roster(max_players=2)
    engine.register_player(roster, "A")
    engine.register_player(roster, "B")

    with pytest.raises(RosterFullException):
        engine.register_player(roster, "C")
    assert len(roster) == 2


def test_unknown_player_cannot_be_removed():
    with pytest.raises(PlayerNotFoundException):
        engine.remove_player(Roster(), "P-missing")


def test_add_existing_player_keeps_its_order():
    roster = Roster()
    roster.add_player(Player(id="x", name="Imported", registration_order=7))

    assert engine.register_player(roster, "Next").registration_order == 8
    with pytest.raises(DuplicatePlayerException):
        roster.add_player(Player(id="x", name="Again", registration_order=9))
