"""Public operations of the tournament engine.

Each mutating operation takes a tournament snapshot and returns a new one;
the snapshot passed in is never modified, so a rejected call (raised
exception) leaves the caller's state intact.
"""

# SwissCut
# Copyright (C) 2025  SwissCut developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import random
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from swisscut.controllers.registration import Roster
from swisscut.controllers.tournament import round_timer
from swisscut.controllers.tournament.result_recorder import ResultRecorder
from swisscut.controllers.tournament.round_manager import RoundManager
from swisscut.models.match import Match
from swisscut.models.player import Player
from swisscut.models.tournament import Tournament
from swisscut.models.tournament_config import TournamentConfig
from swisscut.tournament.qualification import QualificationMark, project_qualification
from swisscut.tournament.standings import calculate_standings

_recorder = ResultRecorder()


# ========== Registration ==========


def register_player(
    roster: Roster, name: str, deck_name: Optional[str] = None
) -> Player:
    return roster.register_player(name, deck_name)


def remove_player(roster: Roster, player_id: str) -> Player:
    return roster.remove_player(player_id)


# ========== Stage transitions ==========


def start_tournament(
    players: Sequence[Player],
    config: TournamentConfig,
    rng: Optional[random.Random] = None,
) -> Tournament:
    """Validate the roster and settings and pair Swiss round 1."""
    return RoundManager(rng).start_tournament(players, config)


def advance_round(
    tournament: Tournament, rng: Optional[random.Random] = None
) -> Tournament:
    """Advance to the next round or stage.

    Raises PendingMatchesException (with ``pending_count``) while the active
    round has unfinished matches.
    """
    return RoundManager(rng).advance_round(tournament)


def end_tournament(tournament: Optional[Tournament]) -> None:
    """Discard the tournament. Always allowed; callers drop their snapshot."""
    return None


# ========== Results ==========


def submit_match_result(
    tournament: Tournament,
    match_id: str,
    score1: int,
    score2: int,
    now: Optional[datetime] = None,
) -> Tournament:
    return _recorder.submit_result(tournament, match_id, score1, score2, now)


# ========== Timer ==========


def start_round_timer(
    tournament: Tournament, now: Optional[datetime] = None
) -> Tournament:
    return round_timer.start_round_timer(tournament, now)


def reset_round_timer(tournament: Tournament) -> Tournament:
    return round_timer.reset_round_timer(tournament)


def enable_free_time(tournament: Tournament) -> Tournament:
    return round_timer.enable_free_time(tournament)


def is_round_overtime(tournament: Tournament, now: Optional[datetime] = None) -> bool:
    return round_timer.is_round_overtime(tournament, now)


def remaining_round_seconds(
    tournament: Tournament, now: Optional[datetime] = None
) -> int:
    return round_timer.remaining_seconds(tournament, now)


# ========== Read-only projections ==========


def get_standings(tournament: Tournament) -> List[Player]:
    """Ranked players, best first, recomputed from the match log."""
    return calculate_standings(tournament.player_list(), tournament.matches)


def get_bracket(tournament: Tournament) -> Dict[int, List[Match]]:
    """Elimination matches grouped by bracket round."""
    bracket: Dict[int, List[Match]] = {}
    for match in tournament.elimination_matches():
        bracket.setdefault(match.round, []).append(match)
    return dict(sorted(bracket.items()))


def get_qualification_map(tournament: Tournament) -> Dict[str, QualificationMark]:
    return project_qualification(tournament)


def pending_matches(tournament: Tournament) -> List[Match]:
    """Unfinished matches of the active round."""
    return RoundManager().pending_matches(tournament)


def stage_label(tournament: Tournament) -> str:
    return RoundManager().stage_label(tournament)


def is_finished(tournament: Tournament) -> bool:
    return RoundManager().is_finished(tournament)
