"""SwissCut: Swiss qualification and top cut elimination tournament engine."""

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

from swisscut.controllers.registration import Roster
from swisscut.engine import (
    advance_round,
    enable_free_time,
    end_tournament,
    get_bracket,
    get_qualification_map,
    get_standings,
    is_finished,
    pending_matches,
    register_player,
    remove_player,
    reset_round_timer,
    stage_label,
    start_round_timer,
    start_tournament,
    submit_match_result,
)
from swisscut.models import (
    Match,
    MatchStatus,
    Outcome,
    Player,
    Tournament,
    TournamentConfig,
    TournamentPhase,
)

__version__ = "0.1.0"

__all__ = [
    "Match",
    "MatchStatus",
    "Outcome",
    "Player",
    "Roster",
    "Tournament",
    "TournamentConfig",
    "TournamentPhase",
    "advance_round",
    "enable_free_time",
    "end_tournament",
    "get_bracket",
    "get_qualification_map",
    "get_standings",
    "is_finished",
    "pending_matches",
    "register_player",
    "remove_player",
    "reset_round_timer",
    "stage_label",
    "start_round_timer",
    "start_tournament",
    "submit_match_result",
]
