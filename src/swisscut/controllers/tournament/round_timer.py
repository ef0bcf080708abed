"""Round timer controls.

There is no background timer: overtime is decided by comparing the clock
with the recorded start time whenever a result is submitted.
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

from datetime import datetime
from typing import Optional

from swisscut.exceptions import TournamentStateException
from swisscut.models.tournament import Tournament, TournamentPhase
from swisscut.utils import as_utc, setup_logger, utc_now

logger = setup_logger(__name__)

TIMED_PHASES = (TournamentPhase.SWISS, TournamentPhase.ELIMINATION)


def _require_timed_phase(tournament: Tournament) -> None:
    if tournament.phase not in TIMED_PHASES:
        raise TournamentStateException(
            f"Round timer is not available during {tournament.phase.value}"
        )


def start_round_timer(
    tournament: Tournament, now: Optional[datetime] = None
) -> Tournament:
    """Start the clock for the active round and turn penalties on."""
    _require_timed_phase(tournament)
    updated = tournament.copy()
    updated.round_start_time = as_utc(now or utc_now())
    updated.ignore_timer = False
    logger.info("Round %s timer started", updated.current_round)
    return updated


def reset_round_timer(tournament: Tournament) -> Tournament:
    """Clear the clock and restore the configured timer mode."""
    _require_timed_phase(tournament)
    updated = tournament.copy()
    updated.round_start_time = None
    updated.ignore_timer = not updated.config.use_timer
    return updated


def enable_free_time(tournament: Tournament) -> Tournament:
    """Drop the clock for the active round: no overtime, no timer needed."""
    _require_timed_phase(tournament)
    updated = tournament.copy()
    updated.round_start_time = None
    updated.ignore_timer = True
    logger.info("Round %s switched to free time", updated.current_round)
    return updated


def elapsed_seconds(tournament: Tournament, now: Optional[datetime] = None) -> float:
    if tournament.round_start_time is None:
        return 0.0
    started = as_utc(tournament.round_start_time)
    return (as_utc(now or utc_now()) - started).total_seconds()


def remaining_seconds(tournament: Tournament, now: Optional[datetime] = None) -> int:
    """Seconds left on the round clock, never below zero.

    Returns the full round duration while the timer is not running.
    """
    if tournament.round_start_time is None:
        return tournament.round_duration_seconds
    left = tournament.round_duration_seconds - int(elapsed_seconds(tournament, now))
    return max(left, 0)


def is_round_overtime(tournament: Tournament, now: Optional[datetime] = None) -> bool:
    """Whether the running round has exceeded its time budget."""
    if tournament.round_start_time is None:
        return False
    return elapsed_seconds(tournament, now) > tournament.round_duration_seconds
