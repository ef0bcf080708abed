"""TournamentConfig data class."""

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

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from swisscut.constants import (
    DEFAULT_ROUND_DURATION_SECONDS,
    DEFAULT_TOP_CUT_SIZE,
    DEFAULT_TOURNAMENT_NAME,
    GROUP_NAMES,
    MAX_GROUP_SIZE,
    MAX_PLAYERS,
    MIN_GROUP_SIZE,
    MIN_PLAYERS,
    MIN_PLAYERS_FOR_GROUPS,
    TOP_CUT_SIZES,
)
from swisscut.exceptions import InvalidConfigurationException
from swisscut.utils import setup_logger

logger = setup_logger(__name__)


def group_count_range(player_count: int) -> Optional[Tuple[int, int]]:
    """Recommended (min, max) number of groups for ``player_count`` players.

    Groups hold between three and five players. Returns ``None`` when no
    group split fits.
    """
    if player_count < MIN_PLAYERS_FOR_GROUPS:
        return None
    min_groups = math.ceil(player_count / MAX_GROUP_SIZE)
    max_groups = min(player_count // MIN_GROUP_SIZE, len(GROUP_NAMES))
    if max_groups < min_groups:
        return None
    return min_groups, max_groups


@dataclass
class TournamentConfig:
    """Tournament configuration settings, fixed at start.

    Attributes
    ----------
    total_swiss_rounds : int
        Number of Swiss rounds before the top cut.
    top_cut_size : int
        Number of qualifiers for the elimination bracket (2, 4 or 8).
    group_count : int or None
        Number of Swiss groups, ``None`` for a single pool.
    round_duration_seconds : int
        Time budget for each round.
    use_timer : bool
        Whether rounds are timed by default. When false the tournament runs
        in free time and no overtime penalty is ever applied.
    name : str
        Tournament name.
    """

    total_swiss_rounds: int = 4
    top_cut_size: int = DEFAULT_TOP_CUT_SIZE
    group_count: Optional[int] = None
    round_duration_seconds: int = DEFAULT_ROUND_DURATION_SECONDS
    use_timer: bool = False
    name: str = DEFAULT_TOURNAMENT_NAME

    @property
    def groups_enabled(self) -> bool:
        return self.group_count is not None

    @classmethod
    def suggested(cls, player_count: int, **overrides: Any) -> "TournamentConfig":
        """Build the default configuration for a roster of ``player_count``.

        Args:
            player_count: Number of registered players
            **overrides: Fields to set explicitly

        Returns:
            A TournamentConfig with rounds and top cut scaled to the field
        """
        if player_count <= 11:
            rounds = 4
        elif player_count <= 21:
            rounds = 5
        else:
            rounds = 6

        if player_count >= 17:
            top_cut = 8
        elif player_count >= 7:
            top_cut = 4
        else:
            top_cut = 2

        values: Dict[str, Any] = {
            "total_swiss_rounds": rounds,
            "top_cut_size": top_cut,
        }
        values.update(overrides)
        return cls(**values)

    def validate(self, player_count: int) -> None:
        """Check the configuration against a roster size.

        Raises:
            InvalidConfigurationException: If any setting is infeasible
        """
        if player_count < MIN_PLAYERS:
            raise InvalidConfigurationException(
                f"At least {MIN_PLAYERS} players are required, got {player_count}"
            )
        if player_count > MAX_PLAYERS:
            raise InvalidConfigurationException(
                f"At most {MAX_PLAYERS} players are allowed, got {player_count}"
            )
        if self.total_swiss_rounds < 1:
            raise InvalidConfigurationException(
                "The Swiss stage needs at least one round"
            )
        if self.top_cut_size not in TOP_CUT_SIZES:
            raise InvalidConfigurationException(
                f"Top cut must be one of {TOP_CUT_SIZES}, got {self.top_cut_size}"
            )
        if self.top_cut_size > player_count:
            raise InvalidConfigurationException(
                f"Top cut of {self.top_cut_size} needs at least "
                f"{self.top_cut_size} players, got {player_count}"
            )
        if self.round_duration_seconds <= 0:
            raise InvalidConfigurationException("Round duration must be positive")

        if self.group_count is not None:
            max_groups = min(player_count // MIN_GROUP_SIZE, len(GROUP_NAMES))
            if not 1 <= self.group_count <= max_groups:
                raise InvalidConfigurationException(
                    f"{player_count} players cannot be split into "
                    f"{self.group_count} groups of at least {MIN_GROUP_SIZE}"
                )
            recommended = group_count_range(player_count)
            if recommended is None or not (
                recommended[0] <= self.group_count <= recommended[1]
            ):
                logger.warning(
                    "%s groups for %s players is outside the recommended range %s",
                    self.group_count,
                    player_count,
                    recommended,
                )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "total_swiss_rounds": self.total_swiss_rounds,
            "top_cut_size": self.top_cut_size,
            "group_count": self.group_count,
            "round_duration_seconds": self.round_duration_seconds,
            "use_timer": self.use_timer,
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            total_swiss_rounds=data["total_swiss_rounds"],
            top_cut_size=data.get("top_cut_size", DEFAULT_TOP_CUT_SIZE),
            group_count=data.get("group_count"),
            round_duration_seconds=data.get(
                "round_duration_seconds", DEFAULT_ROUND_DURATION_SECONDS
            ),
            use_timer=data.get("use_timer", False),
            name=data.get("name", DEFAULT_TOURNAMENT_NAME),
        )
