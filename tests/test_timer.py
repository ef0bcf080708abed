from datetime import timedelta

import pytest

from conftest import NOON, build_players
from swisscut import engine
from swisscut.controllers.tournament.round_timer import elapsed_seconds
from swisscut.exceptions import TournamentStateException
from swisscut.models.tournament import Tournament
from swisscut.models.tournament_config import TournamentConfig


@pytest.fixture
def running(rng):
    config = TournamentConfig(top_cut_size=2, round_duration_seconds=600)
    return engine.start_tournament(build_players(4), config, rng=rng)


def test_clock_is_idle_until_started(running):
    assert running.round_start_time is None
    assert engine.remaining_round_seconds(running, now=NOON) == 600
    assert not engine.is_round_overtime(running, now=NOON)


def test_started_clock_counts_down(running):
    started = engine.start_round_timer(running, now=NOON)

    assert not started.ignore_timer
    assert running.round_start_time is None
    assert elapsed_seconds(started, NOON + timedelta(seconds=90)) == 90
    assert engine.remaining_round_seconds(started, NOON + timedelta(seconds=90)) == 510


def test_overtime_starts_after_the_budget(running):
    started = engine.start_round_timer(running, now=NOON)

    assert not engine.is_round_overtime(started, NOON + timedelta(seconds=600))
    assert engine.is_round_overtime(started, NOON + timedelta(seconds=601))
    assert engine.remaining_round_seconds(started, NOON + timedelta(hours=1)) == 0


def test_reset_restores_configured_mode(running):
    started = engine.start_round_timer(running, now=NOON)

    reset = engine.reset_round_timer(started)

    assert reset.round_start_time is None
    assert reset.ignore_timer


def test_free_time_clears_the_clock(running):
    started = engine.start_round_timer(running, now=NOON)

    free = engine.enable_free_time(started)

    assert free.round_start_time is None
    assert free.ignore_timer
    assert not engine.is_round_overtime(free, NOON + timedelta(hours=2))


def test_timer_needs_a_running_stage():
    registration = Tournament(config=TournamentConfig())
    for operation in (engine.start_round_timer, engine.reset_round_timer, engine.enable_free_time):
        with pytest.raises(TournamentStateException):
            operation(registration)


def test_naive_and_aware_clocks_can_be_mixed(running):
    naive_noon = NOON.replace(tzinfo=None)

    started = engine.start_round_timer(running, now=naive_noon)

    assert started.round_start_time == NOON
    assert engine.remaining_round_seconds(started, NOON + timedelta(seconds=60)) == 540
    assert engine.is_round_overtime(started, naive_noon + timedelta(seconds=601))
