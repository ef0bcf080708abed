"""Data models: players, matches and the tournament aggregate."""

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

from swisscut.models.match import Match, MatchStatus
from swisscut.models.player import Outcome, Player
from swisscut.models.tournament import Tournament, TournamentPhase
from swisscut.models.tournament_config import TournamentConfig, group_count_range

__all__ = [
    "Match",
    "MatchStatus",
    "Outcome",
    "Player",
    "Tournament",
    "TournamentConfig",
    "TournamentPhase",
    "group_count_range",
]
