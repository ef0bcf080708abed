"""Standings calculation for tournaments.

Every statistic is recomputed from the full match log on each call; nothing
is patched incrementally. The result is a fresh list of players sorted by
rank, best first.
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

import functools
from typing import Dict, FrozenSet, Iterable, List, Optional

from swisscut.constants import OVERTIME_PENALTY, WIN_BONUS
from swisscut.models.match import Match
from swisscut.models.player import Outcome, Player
from swisscut.utils import setup_logger

logger = setup_logger(__name__)


def _scoring_matches(matches: Iterable[Match]) -> List[Match]:
    """Completed Swiss matches, the only ones that feed standings."""
    return [m for m in matches if m.is_completed and not m.is_elimination]


class StandingsCalculator:
    """Calculates player statistics and the ranking order.

    Ranking precedence:
    - Wins
    - Tournament points
    - Head-to-head (winner of a completed Swiss meeting)
    - Desafio (tournament points of the opponents who beat the player)
    - Registration order, lowest first
    """

    def __init__(self, matches: Iterable[Match]) -> None:
        self.matches = _scoring_matches(matches)
        self._head_to_head = self._index_head_to_head(self.matches)

    @staticmethod
    def _index_head_to_head(matches: List[Match]) -> Dict[FrozenSet[str], str]:
        winners: Dict[FrozenSet[str], str] = {}
        for match in matches:
            if match.is_bye or match.winner_id is None:
                continue
            if match.player1_id is None or match.player2_id is None:
                continue
            # The first recorded meeting decides
            winners.setdefault(
                frozenset({match.player1_id, match.player2_id}), match.winner_id
            )
        return winners

    # ========== Statistics ==========

    def accumulate(self, player: Player) -> Player:
        """Build a copy of ``player`` with statistics recomputed from the log.

        Args:
            player: The player to compute statistics for

        Returns:
            New Player with everything but desafio filled in
        """
        fresh = player.fresh_copy()
        own_matches = sorted(
            (m for m in self.matches if m.involves(player.id)),
            key=lambda m: m.round,
        )

        for match in own_matches:
            score = match.score_for(player.id)
            fresh.match_points += score

            if match.winner_id == player.id:
                fresh.wins += 1
                fresh.tournament_points += score + WIN_BONUS
                outcome = Outcome.WIN
            else:
                fresh.losses += 1
                fresh.tournament_points += score
                outcome = Outcome.LOSS

            if match.finished_overtime and not match.is_bye:
                fresh.tournament_points -= OVERTIME_PENALTY

            opponent_id = match.opponent_of(player.id)
            if opponent_id is not None:
                fresh.opponents.append(opponent_id)

            if match.is_bye:
                fresh.has_received_bye = True
                outcome = Outcome.BYE

            fresh.history.append(outcome)

        return fresh

    def calculate_desafio(self, player: Player, players: Dict[str, Player]) -> int:
        """Sum the tournament points of every opponent who beat ``player``."""
        desafio = 0
        for match in self.matches:
            opponent_id = match.opponent_of(player.id)
            if opponent_id is None or match.winner_id != opponent_id:
                continue
            opponent = players.get(opponent_id)
            if opponent is not None:
                desafio += opponent.tournament_points
        return desafio

    # ========== Ordering ==========

    def head_to_head_winner(self, p1: Player, p2: Player) -> Optional[str]:
        return self._head_to_head.get(frozenset({p1.id, p2.id}))

    def compare_players(self, p1: Player, p2: Player) -> int:
        """Compare two players for standings order.

        Returns:
            -1 if p1 ranks higher, 1 if p2 ranks higher, 0 only for the same player
        """
        if p1.wins != p2.wins:
            return -1 if p1.wins > p2.wins else 1

        if p1.tournament_points != p2.tournament_points:
            return -1 if p1.tournament_points > p2.tournament_points else 1

        winner = self.head_to_head_winner(p1, p2)
        if winner == p1.id:
            return -1
        if winner == p2.id:
            return 1

        if p1.desafio != p2.desafio:
            return -1 if p1.desafio > p2.desafio else 1

        if p1.registration_order != p2.registration_order:
            return -1 if p1.registration_order < p2.registration_order else 1

        return 0

    def calculate(self, players: Iterable[Player]) -> List[Player]:
        """Recompute all statistics and rank the players.

        Args:
            players: Players to rank, in any order

        Returns:
            New Player objects sorted best to worst
        """
        updated = {p.id: self.accumulate(p) for p in players}
        for player in updated.values():
            player.desafio = self.calculate_desafio(player, updated)

        ranked = sorted(
            updated.values(), key=functools.cmp_to_key(self.compare_players)
        )
        logger.debug(
            "Standings recomputed for %s players over %s matches",
            len(ranked),
            len(self.matches),
        )
        return ranked


def calculate_standings(
    players: Iterable[Player], matches: Iterable[Match]
) -> List[Player]:
    """Rank ``players`` from scratch against the ``matches`` log."""
    return StandingsCalculator(matches).calculate(players)


def group_standings(standings: List[Player], group_id: str) -> List[Player]:
    """Members of one group, keeping the global standings order."""
    return [p for p in standings if p.group_id == group_id]


def wildcard_sort_key(player: Player):
    """Cross-group ordering: tournament points, then wins, then desafio."""
    return (-player.tournament_points, -player.wins, -player.desafio)
