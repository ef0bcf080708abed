from datetime import timedelta

import pytest

from conftest import NOON, build_players
from swisscut import engine
from swisscut.controllers.tournament.result_recorder import ResultRecorder
from swisscut.exceptions import (
    InvalidResultException,
    MatchNotFoundException,
    TournamentStateException,
)
from swisscut.models.match import Match, MatchStatus
from swisscut.models.tournament import Tournament, TournamentPhase
from swisscut.models.tournament_config import TournamentConfig
from swisscut.pairing.bracket import BracketBuilder


def top_cut(size=4):
    """A tournament sitting at the start of its bracket, seeds p1..pN."""
    players = build_players(size)
    round_number = {2: 3, 4: 2, 8: 1}[size]
    return Tournament(
        config=TournamentConfig(total_swiss_rounds=1, top_cut_size=size),
        phase=TournamentPhase.ELIMINATION,
        current_round=round_number,
        players={p.id: p for p in players},
        matches=BracketBuilder().build(players, size),
    )


def seats(tournament, match_id):
    match = tournament.get_match(match_id)
    return (match.player1_id, match.player2_id)


class TestBracketPropagation:
    def test_semifinal_winner_and_loser_move_on(self):
        tournament = top_cut(4)
        final, third, semi_a, semi_b = tournament.matches

        tournament = engine.submit_match_result(tournament, semi_a.id, 3, 1)
        assert seats(tournament, final.id) == ("p1", None)
        assert seats(tournament, third.id) == ("p4", None)

        tournament = engine.submit_match_result(tournament, semi_b.id, 0, 2)
        assert seats(tournament, final.id) == ("p1", "p3")
        assert seats(tournament, third.id) == ("p4", "p2")
        assert tournament.get_match(final.id).is_ready

    def test_quarterfinal_winner_fills_semifinal(self):
        tournament = top_cut(8)
        semi_a = tournament.matches[2]
        quarter_1, quarter_2 = tournament.matches[4:6]

        tournament = engine.submit_match_result(tournament, quarter_1.id, 1, 3)
        tournament = engine.submit_match_result(tournament, quarter_2.id, 3, 0)

        assert seats(tournament, semi_a.id) == ("p8", "p4")

    def test_final_winner_is_recorded(self):
        tournament = top_cut(2)
        final = tournament.matches[0]

        tournament = engine.submit_match_result(tournament, final.id, 1, 2)

        recorded = tournament.get_match(final.id)
        assert recorded.winner_id == "p2"
        assert recorded.status == MatchStatus.COMPLETED
        assert engine.is_finished(tournament)

    def test_resubmitting_same_result_does_not_duplicate(self):
        tournament = top_cut(4)
        final, third, semi_a, _ = tournament.matches

        tournament = engine.submit_match_result(tournament, semi_a.id, 3, 1)
        tournament = engine.submit_match_result(tournament, semi_a.id, 3, 2)

        assert seats(tournament, final.id) == ("p1", None)
        assert seats(tournament, third.id) == ("p4", None)

    def test_corrected_result_swaps_downstream_players(self):
        tournament = top_cut(4)
        final, third, semi_a, _ = tournament.matches

        tournament = engine.submit_match_result(tournament, semi_a.id, 3, 1)
        tournament = engine.submit_match_result(tournament, semi_a.id, 1, 3)

        assert seats(tournament, final.id) == ("p4", None)
        assert seats(tournament, third.id) == ("p1", None)

    def test_correction_after_downstream_played_is_rejected(self):
        tournament = top_cut(4)
        final, _, semi_a, semi_b = tournament.matches
        tournament = engine.submit_match_result(tournament, semi_a.id, 3, 1)
        tournament = engine.submit_match_result(tournament, semi_b.id, 3, 1)
        tournament = engine.submit_match_result(tournament, final.id, 3, 0)

        with pytest.raises(TournamentStateException):
            engine.submit_match_result(tournament, semi_a.id, 0, 3)

        assert tournament.get_match(semi_a.id).winner_id == "p1"

    def test_missing_downstream_match_is_skipped(self):
        tournament = top_cut(4)
        semi_a = tournament.matches[2]
        tournament.matches = [m for m in tournament.matches if m.id != semi_a.next_match_id]

        tournament = engine.submit_match_result(tournament, semi_a.id, 3, 1)

        assert tournament.get_match(semi_a.id).is_completed

    def test_unfilled_bracket_match_cannot_be_played(self):
        tournament = top_cut(8)
        semi_a = tournament.matches[2]

        with pytest.raises(TournamentStateException):
            engine.submit_match_result(tournament, semi_a.id, 3, 1)

    def test_elimination_results_never_touch_standings(self):
        tournament = top_cut(4)
        semi_a = tournament.matches[2]

        tournament = engine.submit_match_result(tournament, semi_a.id, 3, 1)

        assert all(p.wins == 0 and p.history == [] for p in tournament.player_list())


class TestSwissResults:
    @pytest.fixture
    def swiss(self, rng):
        config = TournamentConfig(total_swiss_rounds=2, top_cut_size=2, use_timer=True)
        tournament = engine.start_tournament(build_players(4), config, rng=rng)
        return engine.start_round_timer(tournament, now=NOON - timedelta(minutes=5))

    def test_result_refreshes_standings(self, swiss):
        match = engine.pending_matches(swiss)[0]

        updated = engine.submit_match_result(swiss, match.id, 3, 1, now=NOON)

        winner = updated.get_player(match.player1_id)
        loser = updated.get_player(match.player2_id)
        assert winner.tournament_points == 5
        assert loser.tournament_points == 1
        assert list(updated.players) == [p.id for p in engine.get_standings(updated)]

    def test_result_after_time_budget_is_overtime(self, swiss):
        match = engine.pending_matches(swiss)[0]
        started = engine.start_round_timer(swiss, now=NOON - timedelta(minutes=50))

        updated = engine.submit_match_result(started, match.id, 3, 1, now=NOON)

        assert updated.get_match(match.id).finished_overtime
        assert updated.get_player(match.player1_id).tournament_points == 4
        assert updated.get_player(match.player2_id).tournament_points == 0

    def test_result_inside_time_budget_is_not_overtime(self, swiss):
        match = engine.pending_matches(swiss)[0]
        started = engine.start_round_timer(swiss, now=NOON - timedelta(minutes=10))

        updated = engine.submit_match_result(started, match.id, 3, 1, now=NOON)

        assert not updated.get_match(match.id).finished_overtime

    def test_free_time_never_penalizes(self, swiss):
        match = engine.pending_matches(swiss)[0]
        started = engine.start_round_timer(swiss, now=NOON - timedelta(hours=3))
        free = engine.enable_free_time(started)

        updated = engine.submit_match_result(free, match.id, 3, 1, now=NOON)

        assert not updated.get_match(match.id).finished_overtime

    def test_corrected_result_is_recomputed(self, swiss):
        match = engine.pending_matches(swiss)[0]
        first = engine.submit_match_result(swiss, match.id, 3, 1, now=NOON)

        corrected = engine.submit_match_result(first, match.id, 0, 2, now=NOON)

        assert corrected.get_player(match.player2_id).wins == 1
        assert corrected.get_player(match.player1_id).wins == 0
        assert corrected.get_player(match.player1_id).tournament_points == 0

    def test_submission_leaves_previous_snapshot_untouched(self, swiss):
        match = engine.pending_matches(swiss)[0]

        engine.submit_match_result(swiss, match.id, 3, 1, now=NOON)

        assert swiss.get_match(match.id).status == MatchStatus.PENDING
        assert all(p.wins == 0 for p in swiss.player_list())

    @pytest.mark.parametrize(
        "score1, score2",
        [(2, 2), (-1, 3), (4, 1), (1, 50), (1.5, 0), (True, 0), ("3", 1)],
    )
    def test_invalid_scores_are_rejected(self, swiss, score1, score2):
        match = engine.pending_matches(swiss)[0]

        with pytest.raises(InvalidResultException):
            engine.submit_match_result(swiss, match.id, score1, score2)

        assert swiss.get_match(match.id).status == MatchStatus.PENDING

    def test_timed_round_needs_a_running_clock(self, swiss):
        match = engine.pending_matches(swiss)[0]
        idle = engine.reset_round_timer(swiss)

        with pytest.raises(TournamentStateException):
            engine.submit_match_result(idle, match.id, 3, 1, now=NOON)

        assert idle.get_match(match.id).status == MatchStatus.PENDING

    def test_free_time_accepts_results_without_a_clock(self, swiss):
        match = engine.pending_matches(swiss)[0]
        free = engine.enable_free_time(engine.reset_round_timer(swiss))

        updated = engine.submit_match_result(free, match.id, 3, 1, now=NOON)

        assert updated.get_match(match.id).is_completed

    def test_unknown_match_is_rejected(self, swiss):
        with pytest.raises(MatchNotFoundException):
            engine.submit_match_result(swiss, "no-such-match", 3, 1)

    def test_bye_cannot_be_submitted(self, rng):
        config = TournamentConfig(total_swiss_rounds=2, top_cut_size=2)
        tournament = engine.start_tournament(build_players(5), config, rng=rng)
        bye = next(m for m in tournament.matches if m.is_bye)

        with pytest.raises(InvalidResultException):
            engine.submit_match_result(tournament, bye.id, 3, 1)


def test_swiss_results_are_locked_during_top_cut():
    tournament = top_cut(4)
    tournament.matches.append(
        Match(
            id="R1-1",
            round=1,
            player1_id="p1",
            player2_id="p2",
            winner_id="p1",
            score1=3,
            score2=1,
            status=MatchStatus.COMPLETED,
        )
    )

    with pytest.raises(TournamentStateException):
        engine.submit_match_result(tournament, "R1-1", 0, 3)


def test_results_need_a_running_stage():
    tournament = Tournament(config=TournamentConfig())
    with pytest.raises(TournamentStateException):
        engine.submit_match_result(tournament, "R1-1", 3, 1)


def test_overtime_only_applies_to_swiss_matches():
    tournament = top_cut(4)
    tournament.round_start_time = NOON - timedelta(hours=2)
    tournament.ignore_timer = False
    semi_a = tournament.matches[2]

    assert not ResultRecorder.is_overtime(tournament, semi_a, NOON)


def test_timed_round_fresh_from_start_rejects_results(rng):
    config = TournamentConfig(top_cut_size=2, use_timer=True)
    tournament = engine.start_tournament(build_players(4), config, rng=rng)
    match = engine.pending_matches(tournament)[0]

    with pytest.raises(TournamentStateException):
        engine.submit_match_result(tournament, match.id, 3, 1, now=NOON)


def test_bracket_results_do_not_need_a_clock():
    tournament = top_cut(4)
    tournament.ignore_timer = False
    semi_a = tournament.matches[2]

    updated = engine.submit_match_result(tournament, semi_a.id, 3, 1, now=NOON)

    assert updated.get_match(semi_a.id).is_completed
