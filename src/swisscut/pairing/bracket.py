"""Elimination bracket builder.

Selects the top cut qualifiers from the final Swiss standings and wires a
fixed-shape single-elimination bracket. The bracket is a flat list of
matches linked by ``next_match_id`` and ``loser_next_match_id``.
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

import itertools
from typing import Iterator, List, Optional, Sequence

from swisscut.constants import (
    ELIMINATION_ID_START,
    FINAL_ROUND,
    QUARTERFINAL_ROUND,
    SEMIFINAL_ROUND,
    THIRD_PLACE_MATCH_ID,
    TOP_CUT_SIZES,
)
from swisscut.exceptions import BracketException
from swisscut.models.match import Match
from swisscut.models.player import Player
from swisscut.tournament.standings import group_standings, wildcard_sort_key
from swisscut.utils import setup_logger

logger = setup_logger(__name__)


def select_qualifiers(
    standings: Sequence[Player],
    top_cut_size: int,
    active_groups: Optional[Sequence[str]] = None,
) -> List[Player]:
    """Choose the players who advance to the top cut.

    Without groups this is simply the top of the standings. With groups,
    every group leader qualifies first, then the best runner-ups (ranked by
    tournament points, wins, desafio), then the best of the remaining field
    ranked by tournament points alone. The final list is re-sorted by
    tournament points, so group identity never decides a seed.

    Args:
        standings: All players ranked best to worst
        top_cut_size: Number of bracket slots
        active_groups: Group labels, or None

    Returns:
        Qualifiers in seed order (seed 1 first)
    """
    if not active_groups:
        return list(standings[:top_cut_size])

    winners: List[Player] = []
    runner_ups: List[Player] = []
    others: List[Player] = []
    for group_id in active_groups:
        members = group_standings(list(standings), group_id)
        winners.extend(members[:1])
        runner_ups.extend(members[1:2])
        others.extend(members[2:])

    runner_ups.sort(key=wildcard_sort_key)

    qualifiers = list(winners)
    slots_needed = top_cut_size - len(qualifiers)
    if slots_needed > 0:
        qualifiers.extend(runner_ups[:slots_needed])

    remaining_slots = top_cut_size - len(qualifiers)
    if remaining_slots > 0:
        # Fallback pool ranks on tournament points only
        pool = runner_ups[max(slots_needed, 0):] + others
        pool.sort(key=lambda p: -p.tournament_points)
        qualifiers.extend(pool[:remaining_slots])

    qualifiers.sort(key=lambda p: -p.tournament_points)
    return qualifiers[:top_cut_size]


class BracketBuilder:
    """Builds the linked elimination matches for a 2, 4 or 8 player cut."""

    def __init__(self, start_id: int = ELIMINATION_ID_START) -> None:
        self._ids: Iterator[int] = itertools.count(start_id)

    def _create_match(
        self,
        round_number: int,
        player1_id: Optional[str] = None,
        player2_id: Optional[str] = None,
        next_match_id: Optional[str] = None,
        loser_next_match_id: Optional[str] = None,
    ) -> Match:
        return Match(
            id=str(next(self._ids)),
            round=round_number,
            is_elimination=True,
            player1_id=player1_id,
            player2_id=player2_id,
            next_match_id=next_match_id,
            loser_next_match_id=loser_next_match_id,
        )

    def build(self, qualifiers: Sequence[Player], top_cut_size: int) -> List[Match]:
        """Wire the bracket for seeded ``qualifiers``.

        Args:
            qualifiers: Players in seed order
            top_cut_size: 2, 4 or 8

        Returns:
            Elimination matches: final, third place (unless a 2-cut),
            semifinals, quarterfinals

        Raises:
            BracketException: If the cut size is unsupported or there are
                not enough qualifiers
        """
        if top_cut_size not in TOP_CUT_SIZES:
            raise BracketException(f"Unsupported top cut size: {top_cut_size}")
        if len(qualifiers) < top_cut_size:
            raise BracketException(
                f"Top cut of {top_cut_size} needs {top_cut_size} qualifiers, "
                f"only {len(qualifiers)} available"
            )

        seeds = [p.id for p in qualifiers]
        final = self._create_match(FINAL_ROUND)
        third_place = self._create_match(FINAL_ROUND)
        third_place.id = THIRD_PLACE_MATCH_ID

        if top_cut_size == 2:
            final.player1_id, final.player2_id = seeds[0], seeds[1]
            return [final]

        matches = [final, third_place]
        if top_cut_size == 4:
            matches.append(
                self._create_match(
                    SEMIFINAL_ROUND, seeds[0], seeds[3], final.id, third_place.id
                )
            )
            matches.append(
                self._create_match(
                    SEMIFINAL_ROUND, seeds[1], seeds[2], final.id, third_place.id
                )
            )
            return matches

        semi_a = self._create_match(
            SEMIFINAL_ROUND, next_match_id=final.id, loser_next_match_id=third_place.id
        )
        semi_b = self._create_match(
            SEMIFINAL_ROUND, next_match_id=final.id, loser_next_match_id=third_place.id
        )
        matches.extend([semi_a, semi_b])
        quarterfinals = (
            (0, 7, semi_a),
            (3, 4, semi_a),
            (1, 6, semi_b),
            (2, 5, semi_b),
        )
        for high, low, semi in quarterfinals:
            matches.append(
                self._create_match(QUARTERFINAL_ROUND, seeds[high], seeds[low], semi.id)
            )
        return matches


def build_elimination_bracket(
    standings: Sequence[Player],
    top_cut_size: int,
    active_groups: Optional[Sequence[str]] = None,
) -> List[Match]:
    """Select qualifiers from ``standings`` and build their bracket."""
    qualifiers = select_qualifiers(standings, top_cut_size, active_groups)
    logger.info(
        "Top %s qualifiers: %s",
        top_cut_size,
        ", ".join(p.name for p in qualifiers),
    )
    return BracketBuilder().build(qualifiers, top_cut_size)
