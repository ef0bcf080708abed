import random

import pytest

from swisscut.cli import DeskSession, create_main_parser, main
from swisscut.models.tournament import TournamentPhase


@pytest.fixture
def desk():
    session = DeskSession(rng=random.Random(99))
    for name in ("Goku", "Vegeta", "Piccolo", "Gohan", "Krillin"):
        session.execute(f"add {name}")
    return session


def play_round(desk):
    while desk.tournament is not None and desk.execute("pending").count("[") > 0:
        output = desk.execute("result 1 3 1")
        assert not output.startswith("Error")


def test_registration_commands(desk):
    assert "Registered Yamcha (#6" in desk.execute('add "Yamcha"')
    listing = desk.execute("players")
    assert listing.count("\n") == 5
    assert "Goku" in listing


def test_unknown_command():
    assert DeskSession().execute("dance").startswith("Unknown command")


def test_start_lists_round_one(desk):
    output = desk.execute("start")

    assert output.startswith("Tournament started.")
    assert "Round 1 of 4" in output
    assert desk.tournament.phase == TournamentPhase.SWISS
    assert "closed" in desk.execute("add Bulma")


def test_config_applies_to_start(desk):
    desk.execute("config --rounds 2 --top-cut 2 --minutes 30 --timer")
    desk.execute("start")

    config = desk.tournament.config
    assert config.total_swiss_rounds == 2
    assert config.top_cut_size == 2
    assert config.round_duration_seconds == 1800
    assert config.use_timer


def test_engine_errors_are_reported(desk):
    desk.execute("config --top-cut 8")
    assert desk.execute("start").startswith("Error:")
    assert desk.tournament is None


def test_next_with_pending_matches_is_refused(desk):
    desk.execute("start")
    assert desk.execute("next") == "Cannot advance: 2 matches are still pending"


def test_full_event_through_the_desk(desk):
    desk.execute("config --rounds 1 --top-cut 4")
    desk.execute("start")

    play_round(desk)
    assert desk.execute("next") == "Now playing: Semifinals"
    assert "Round 2:" in desk.execute("bracket")

    play_round(desk)
    assert desk.execute("next") == "Now playing: Finals"
    play_round(desk)
    assert desk.execute("next") == "Now playing: Tournament Finished"
    assert "Goku" in desk.execute("standings")

    assert desk.execute("end") == "Tournament ended"
    assert desk.tournament is None


def test_bad_scores_are_reported(desk):
    desk.execute("start")
    assert desk.execute("result 1 2 2").startswith("Error:")
    assert desk.execute("result 1 x 2") == "Scores must be whole numbers"


def test_simulate_command(capsys):
    assert main(["simulate", "--players", "9", "--seed", "4"]) == 0
    out = capsys.readouterr().out
    assert "Standings" in out
    assert "Bracket" in out


def test_parser_defaults():
    args = create_main_parser().parse_args(["simulate"])
    assert args.players == 12
    assert args.overtime_rate == 0.0


def test_unbalanced_quotes_are_reported(desk):
    output = desk.execute('add "Bulma')

    assert output.startswith("Could not read command")
    assert len(desk.roster) == 5
