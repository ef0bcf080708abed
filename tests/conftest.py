import random
from datetime import datetime, timezone

import pytest

from swisscut import engine
from swisscut.models.match import Match, MatchStatus
from swisscut.models.player import Player
from swisscut.models.tournament import Tournament

NOON = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def build_players(count, group_ids=None):
    players = []
    for i in range(1, count + 1):
        group_id = group_ids[(i - 1) % len(group_ids)] if group_ids else None
        players.append(
            Player(id=f"p{i}", name=f"Player {i}", registration_order=i, group_id=group_id)
        )
    return players


def build_result(match_id, round_number, p1, p2, score1, score2, overtime=False):
    return Match(
        id=match_id,
        round=round_number,
        player1_id=p1,
        player2_id=p2,
        winner_id=p1 if score1 > score2 else p2,
        score1=score1,
        score2=score2,
        status=MatchStatus.COMPLETED,
        finished_overtime=overtime,
    )


def build_bye(match_id, round_number, player_id):
    return Match(
        id=match_id,
        round=round_number,
        player1_id=player_id,
        winner_id=player_id,
        status=MatchStatus.COMPLETED,
        is_bye=True,
    )


def finish_active_round(tournament: Tournament, score1=3, score2=1) -> Tournament:
    """Record the same score for every playable match of the active round."""
    for match in engine.pending_matches(tournament):
        if tournament.get_match(match.id).is_ready:
            tournament = engine.submit_match_result(
                tournament, match.id, score1, score2, now=NOON
            )
    return tournament


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_players():
    return build_players


@pytest.fixture
def result():
    return build_result


@pytest.fixture
def bye():
    return build_bye


@pytest.fixture
def finish_round():
    return finish_active_round
