"""Exceptions for use in SwissCut"""

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


# ========== Base Application Exception ==========


class SwissCutException(Exception):
    """Base exception for all SwissCut errors.

    Every operation that raises one of these leaves the tournament snapshot it
    was given untouched, so callers can correct the input and retry.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(SwissCutException):
    """Base exception for pairing-related errors."""

    pass


class InvalidPairingException(PairingException):
    """Raised when a pairing request is invalid."""

    pass


class BracketException(PairingException):
    """Raised when an elimination bracket cannot be built."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(SwissCutException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class PendingMatchesException(TournamentStateException):
    """Raised when a round or stage cannot advance because matches are pending.

    Attributes
    ----------
    pending_count : int
        Number of matches of the active round that are not completed.
    """

    def __init__(self, pending_count: int, message: str = "") -> None:
        self.pending_count = pending_count
        super().__init__(
            message or f"There are still {pending_count} pending matches"
        )


class MatchNotFoundException(TournamentException):
    """Raised when a requested match does not exist."""

    pass


class DuplicatePlayerException(TournamentException):
    """Raised when attempting to add a player that already exists."""

    pass


class RosterFullException(TournamentException):
    """Raised when the roster already holds the maximum number of players."""

    pass


# ========== Player Exceptions ==========


class PlayerException(SwissCutException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


# ========== Result Exceptions ==========


class ResultException(SwissCutException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., tied scores)."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(SwissCutException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
