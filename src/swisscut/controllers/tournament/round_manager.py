"""Round management for tournaments.

This module handles starting a tournament, moving from one Swiss round to
the next, opening the top cut and walking the bracket rounds until the
event is finished.
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
from typing import List, Optional, Sequence

from swisscut.constants import (
    FINAL_ROUND,
    FIRST_BRACKET_ROUND,
    GROUP_NAMES,
    STAGE_FINISHED,
    STAGE_NAMES,
)
from swisscut.exceptions import (
    InvalidConfigurationException,
    PendingMatchesException,
    TournamentStateException,
)
from swisscut.models.match import Match
from swisscut.models.player import Player
from swisscut.models.tournament import Tournament, TournamentPhase
from swisscut.models.tournament_config import TournamentConfig
from swisscut.pairing.bracket import build_elimination_bracket
from swisscut.pairing.swiss import create_round_pairings
from swisscut.tournament.standings import calculate_standings
from swisscut.utils import setup_logger

logger = setup_logger(__name__)


def assign_groups(
    players: List[Player], group_count: int, rng: random.Random
) -> List[str]:
    """Shuffle ``players`` and deal them into groups A, B, ... in turn.

    Returns:
        The group labels in order
    """
    group_names = GROUP_NAMES[:group_count]
    rng.shuffle(players)
    for index, player in enumerate(players):
        player.group_id = group_names[index % group_count]
    return group_names


class RoundManager:
    """Manages round progression and pairing generation for tournaments.

    This class is responsible for:
    - Starting the Swiss stage and pairing round 1
    - Gating every advance on the active round being fully played
    - Building the elimination bracket after the last Swiss round
    - Tracking the active bracket round and the end of the event
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    # ========== Start ==========

    def start_tournament(
        self, players: Sequence[Player], config: TournamentConfig
    ) -> Tournament:
        """Create the tournament and pair its first Swiss round.

        Args:
            players: Registered players
            config: Settings fixed for the whole event

        Returns:
            Tournament in the SWISS phase at round 1

        Raises:
            InvalidConfigurationException: If the roster or settings are infeasible
        """
        config.validate(len(players))
        ids = [p.id for p in players]
        if len(set(ids)) != len(ids):
            raise InvalidConfigurationException("Player ids must be unique")

        entrants = [p.fresh_copy() for p in players]
        for player in entrants:
            player.group_id = None

        active_groups = None
        if config.group_count is not None:
            active_groups = assign_groups(entrants, config.group_count, self.rng)
            logger.info(
                "Players split into %s groups: %s",
                config.group_count,
                ", ".join(active_groups),
            )

        tournament = Tournament(
            config=config,
            phase=TournamentPhase.SWISS,
            current_round=1,
            active_groups=active_groups,
            ignore_timer=not config.use_timer,
        )
        tournament.matches = create_round_pairings(
            entrants, 1, active_groups, self.rng
        )
        standings = calculate_standings(entrants, tournament.matches)
        tournament.players = {p.id: p for p in standings}

        logger.info(
            "Started tournament %s: %s players, %s Swiss rounds, top %s",
            config.name,
            len(entrants),
            config.total_swiss_rounds,
            config.top_cut_size,
        )
        return tournament

    # ========== Queries ==========

    @staticmethod
    def active_round_matches(tournament: Tournament) -> List[Match]:
        """Matches of the round that must finish before the next advance."""
        if tournament.phase == TournamentPhase.SWISS:
            return tournament.matches_in_round(tournament.current_round, False)
        if tournament.phase == TournamentPhase.ELIMINATION:
            return tournament.matches_in_round(tournament.current_round, True)
        return []

    def pending_matches(self, tournament: Tournament) -> List[Match]:
        return [m for m in self.active_round_matches(tournament) if not m.is_completed]

    @staticmethod
    def is_bracket_complete(tournament: Tournament) -> bool:
        bracket = tournament.elimination_matches()
        return bool(bracket) and all(m.is_completed for m in bracket)

    def is_finished(self, tournament: Tournament) -> bool:
        """Whether every match of the event has been played."""
        return tournament.phase == TournamentPhase.FINISHED or (
            tournament.phase == TournamentPhase.ELIMINATION
            and self.is_bracket_complete(tournament)
        )

    def stage_label(self, tournament: Tournament) -> str:
        """Human readable name of the current stage."""
        if self.is_finished(tournament):
            return STAGE_FINISHED
        if tournament.phase == TournamentPhase.ELIMINATION:
            return STAGE_NAMES[tournament.current_round]
        if tournament.phase == TournamentPhase.SWISS:
            return f"Round {tournament.current_round} of {tournament.total_swiss_rounds}"
        return tournament.phase.value.title()

    # ========== Advance ==========

    def advance_round(self, tournament: Tournament) -> Tournament:
        """Move to the next Swiss round, the top cut, or the next bracket round.

        Args:
            tournament: Current snapshot, left untouched

        Returns:
            New tournament snapshot

        Raises:
            PendingMatchesException: If the active round still has open matches
            TournamentStateException: If the tournament cannot advance at all
        """
        if tournament.phase not in (TournamentPhase.SWISS, TournamentPhase.ELIMINATION):
            raise TournamentStateException(
                f"Cannot advance a tournament in {tournament.phase.value}"
            )

        pending = self.pending_matches(tournament)
        if pending:
            logger.warning(
                "Round %s still has %s pending matches",
                tournament.current_round,
                len(pending),
            )
            raise PendingMatchesException(len(pending))

        if tournament.phase == TournamentPhase.SWISS:
            if tournament.current_round >= tournament.total_swiss_rounds:
                return self._start_elimination(tournament)
            return self._next_swiss_round(tournament)
        return self._next_bracket_round(tournament)

    def _reset_clock(self, tournament: Tournament) -> None:
        tournament.round_start_time = None
        tournament.ignore_timer = not tournament.config.use_timer

    def _next_swiss_round(self, tournament: Tournament) -> Tournament:
        updated = tournament.copy()
        standings = calculate_standings(updated.player_list(), updated.matches)
        next_round = updated.current_round + 1

        updated.matches.extend(
            create_round_pairings(standings, next_round, updated.active_groups, self.rng)
        )
        updated.players = {p.id: p for p in standings}
        updated.current_round = next_round
        self._reset_clock(updated)

        logger.info("Starting Swiss round %s", next_round)
        return updated

    def _start_elimination(self, tournament: Tournament) -> Tournament:
        if tournament.elimination_matches():
            raise TournamentStateException("The elimination bracket already exists")

        updated = tournament.copy()
        standings = calculate_standings(updated.player_list(), updated.matches)
        bracket = build_elimination_bracket(
            standings, updated.top_cut_size, updated.active_groups
        )

        updated.matches.extend(bracket)
        updated.players = {p.id: p for p in standings}
        updated.phase = TournamentPhase.ELIMINATION
        updated.current_round = FIRST_BRACKET_ROUND[updated.top_cut_size]
        self._reset_clock(updated)

        logger.info(
            "Swiss stage finished, top %s bracket created with %s matches",
            updated.top_cut_size,
            len(bracket),
        )
        return updated

    def _next_bracket_round(self, tournament: Tournament) -> Tournament:
        updated = tournament.copy()
        if updated.current_round >= FINAL_ROUND or self.is_bracket_complete(updated):
            updated.phase = TournamentPhase.FINISHED
            updated.round_start_time = None
            logger.info("Tournament %s finished", updated.name)
            return updated

        updated.current_round += 1
        self._reset_clock(updated)
        logger.info("Starting %s", STAGE_NAMES[updated.current_round])
        return updated
