"""Provisional top cut projection during a group Swiss stage."""

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

from enum import Enum
from typing import Dict, List

from swisscut.models.player import Player
from swisscut.models.tournament import Tournament, TournamentPhase
from swisscut.tournament.standings import (
    calculate_standings,
    group_standings,
    wildcard_sort_key,
)


class QualificationMark(str, Enum):
    GOLD = "gold"  # Current group leader
    SILVER = "silver"  # Best non-leader, inside the wildcard slots


def project_qualification(tournament: Tournament) -> Dict[str, QualificationMark]:
    """Mark who would make the top cut if the Swiss stage ended now.

    Only meaningful during a group Swiss stage, and suppressed until round 1
    is fully played. Never mutates ``tournament``.

    Args:
        tournament: Current tournament snapshot

    Returns:
        Mapping of player id to mark; players without a mark are omitted
    """
    if tournament.phase != TournamentPhase.SWISS or not tournament.active_groups:
        return {}

    if tournament.current_round <= 1:
        round_matches = tournament.matches_in_round(1, elimination=False)
        if not all(m.is_completed for m in round_matches):
            return {}

    standings = calculate_standings(tournament.player_list(), tournament.matches)

    marks: Dict[str, QualificationMark] = {}
    leaders: List[Player] = []
    candidates: List[Player] = []
    for group_id in tournament.active_groups:
        members = group_standings(standings, group_id)
        if members:
            leaders.append(members[0])
            marks[members[0].id] = QualificationMark.GOLD
        candidates.extend(members[1:])

    candidates.sort(key=wildcard_sort_key)
    slots = tournament.top_cut_size - len(leaders)
    for player in candidates[: max(slots, 0)]:
        marks[player.id] = QualificationMark.SILVER

    return marks
