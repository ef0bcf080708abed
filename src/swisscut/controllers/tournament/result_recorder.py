"""Result recording and bracket propagation for tournaments.

This module stores submitted match results, applies the overtime rule, moves
elimination winners and losers into their downstream bracket slots and
refreshes the standings.
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

import dataclasses
from datetime import datetime
from typing import Optional

from swisscut.constants import MAX_SCORE
from swisscut.controllers.tournament.round_timer import is_round_overtime
from swisscut.exceptions import (
    InvalidResultException,
    MatchNotFoundException,
    TournamentStateException,
)
from swisscut.models.match import Match, MatchStatus
from swisscut.models.tournament import Tournament, TournamentPhase
from swisscut.tournament.standings import calculate_standings
from swisscut.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating submitted scores
    - Classifying a result as overtime
    - Filling downstream bracket slots with winners and losers
    - Refreshing the standings after every change
    """

    def submit_result(
        self,
        tournament: Tournament,
        match_id: str,
        score1: int,
        score2: int,
        now: Optional[datetime] = None,
    ) -> Tournament:
        """Record final scores for a match; the higher score wins.

        Args:
            tournament: Current snapshot, left untouched
            match_id: Match to record
            score1: Raw score of player 1
            score2: Raw score of player 2
            now: Submission time, defaults to the current UTC time

        Returns:
            New tournament snapshot

        Raises:
            MatchNotFoundException: If the match id is unknown
            InvalidResultException: If the scores are invalid or tied
            TournamentStateException: If the match cannot be played yet
        """
        if tournament.phase not in (TournamentPhase.SWISS, TournamentPhase.ELIMINATION):
            raise TournamentStateException(
                f"Results cannot be recorded during {tournament.phase.value}"
            )

        match = tournament.get_match(match_id)
        self._validate_result_entry(tournament, match, score1, score2)

        winner_id = match.player1_id if score1 > score2 else match.player2_id
        completed = dataclasses.replace(
            match,
            score1=score1,
            score2=score2,
            winner_id=winner_id,
            status=MatchStatus.COMPLETED,
        )
        return self.record_match(tournament, completed, now)

    def _validate_result_entry(
        self, tournament: Tournament, match: Match, score1: int, score2: int
    ) -> None:
        for score in (score1, score2):
            if isinstance(score, bool) or not isinstance(score, int):
                raise InvalidResultException(f"Scores must be integers, got {score!r}")
            if score < 0:
                raise InvalidResultException(f"Scores cannot be negative, got {score}")
            if score > MAX_SCORE:
                raise InvalidResultException(
                    f"Scores cannot exceed {MAX_SCORE}, got {score}"
                )
        if score1 == score2:
            raise InvalidResultException("A match needs a winner: scores cannot tie")
        if match.is_bye:
            raise InvalidResultException(
                f"Match {match.id} is a bye and is recorded automatically"
            )
        if not match.is_ready:
            raise TournamentStateException(
                f"Match {match.id} is still waiting for its players"
            )
        if tournament.phase == TournamentPhase.ELIMINATION and not match.is_elimination:
            raise TournamentStateException(
                "Swiss results are locked once the top cut has started"
            )
        # Timed Swiss rounds only take results once the clock is running
        if (
            not match.is_elimination
            and not tournament.ignore_timer
            and tournament.round_start_time is None
        ):
            raise TournamentStateException(
                "Start the round timer or switch to free time before entering results"
            )

    @staticmethod
    def is_overtime(
        tournament: Tournament, match: Match, now: Optional[datetime] = None
    ) -> bool:
        """Decide whether a result submitted at ``now`` finished in overtime."""
        if tournament.ignore_timer or match.is_bye or match.is_elimination:
            return False
        return is_round_overtime(tournament, now)

    def record_match(
        self,
        tournament: Tournament,
        match: Match,
        now: Optional[datetime] = None,
    ) -> Tournament:
        """Store a match record and propagate its consequences.

        Args:
            tournament: Current snapshot, left untouched
            match: Updated record replacing the log entry with the same id
            now: Submission time used for the overtime check

        Returns:
            New tournament snapshot with refreshed standings
        """
        updated = tournament.copy()
        previous = updated.get_match(match.id)

        saved = dataclasses.replace(
            match, finished_overtime=self.is_overtime(updated, match, now)
        )
        updated.replace_match(saved)
        if saved.finished_overtime:
            logger.info("Match %s finished in overtime", saved.id)

        if saved.is_elimination and saved.is_completed and saved.winner_id:
            self._propagate(updated, previous, saved)

        standings = calculate_standings(updated.player_list(), updated.matches)
        updated.players = {p.id: p for p in standings}
        logger.debug("Recorded match %s: %s-%s", saved.id, saved.score1, saved.score2)
        return updated

    def _propagate(self, tournament: Tournament, previous: Match, match: Match) -> None:
        """Move the winner and loser of ``match`` into their next matches."""
        old_winner = previous.winner_id if previous.is_completed else None
        old_loser = previous.loser_id if previous.is_completed else None

        if match.next_match_id:
            self._place_player(
                tournament, match.next_match_id, match.winner_id, old_winner
            )
        if match.loser_next_match_id and match.loser_id:
            self._place_player(
                tournament, match.loser_next_match_id, match.loser_id, old_loser
            )

    def _place_player(
        self,
        tournament: Tournament,
        target_id: str,
        player_id: str,
        replaced_id: Optional[str],
    ) -> None:
        """Put ``player_id`` into the first empty slot of ``target_id``.

        A player already seated there is left alone, and a corrected result
        swaps ``replaced_id`` out of its slot instead of taking a new one.
        """
        try:
            target = tournament.get_match(target_id)
        except MatchNotFoundException:
            logger.warning("Downstream match %s does not exist", target_id)
            return

        slots = (target.player1_id, target.player2_id)
        if player_id in slots:
            return

        if replaced_id is not None and replaced_id in slots:
            if target.is_completed:
                raise TournamentStateException(
                    f"Match {target.id} was already played with {replaced_id}"
                )
            if target.player1_id == replaced_id:
                target = dataclasses.replace(target, player1_id=player_id)
            else:
                target = dataclasses.replace(target, player2_id=player_id)
            logger.info(
                "Corrected result: %s replaces %s in match %s",
                player_id,
                replaced_id,
                target.id,
            )
        elif target.player1_id is None:
            target = dataclasses.replace(target, player1_id=player_id)
        elif target.player2_id is None:
            target = dataclasses.replace(target, player2_id=player_id)
        else:
            logger.warning("Match %s has no empty slot for %s", target.id, player_id)
            return

        tournament.replace_match(target)
