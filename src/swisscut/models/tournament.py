"""Tournament aggregate: the single snapshot every operation reads and returns."""

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

import copy
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from dateutil.parser import isoparse

from swisscut.exceptions import MatchNotFoundException, PlayerNotFoundException
from swisscut.models.match import Match
from swisscut.models.player import Player
from swisscut.models.tournament_config import TournamentConfig
from swisscut.utils import generate_id, utc_now


class TournamentPhase(str, Enum):
    REGISTRATION = "REGISTRATION"
    SWISS = "SWISS"
    ELIMINATION = "ELIMINATION"
    FINISHED = "FINISHED"


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    return isoparse(value) if value else None


@dataclass
class Tournament:
    """Aggregate root holding configuration, players and the match log.

    Operations never mutate a Tournament they receive; they work on a
    :meth:`copy` and return it.

    Attributes
    ----------
    config : TournamentConfig
        Settings fixed at start.
    phase : TournamentPhase
        Current stage of the event.
    current_round : int
        Swiss round number during SWISS, active bracket round during
        ELIMINATION.
    active_groups : list of str or None
        Group labels in order, ``None`` when the Swiss stage is a single pool.
    round_start_time : datetime or None
        When the running round timer was started.
    ignore_timer : bool
        When true no overtime penalty is applied and results may be entered
        without a running timer.
    players : dict of str to Player
        Players by id, holding the latest recomputed standings.
    matches : list of Match
        Append-only match log, updated in place by id.
    """

    config: TournamentConfig
    phase: TournamentPhase = TournamentPhase.REGISTRATION
    current_round: int = 0
    active_groups: Optional[List[str]] = None
    round_start_time: Optional[datetime] = None
    ignore_timer: bool = True
    players: Dict[str, Player] = field(default_factory=dict)
    matches: List[Match] = field(default_factory=list)
    id: str = field(default_factory=lambda: generate_id("T"))
    created_at: datetime = field(default_factory=utc_now)

    # ========== Properties ==========

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def total_swiss_rounds(self) -> int:
        return self.config.total_swiss_rounds

    @property
    def top_cut_size(self) -> int:
        return self.config.top_cut_size

    @property
    def round_duration_seconds(self) -> int:
        return self.config.round_duration_seconds

    # ========== Lookups ==========

    def copy(self) -> "Tournament":
        """Deep copy used as the working state of every operation."""
        return copy.deepcopy(self)

    def get_player(self, player_id: str) -> Player:
        try:
            return self.players[player_id]
        except KeyError:
            raise PlayerNotFoundException(f"Unknown player: {player_id}") from None

    def get_match(self, match_id: str) -> Match:
        for match in self.matches:
            if match.id == match_id:
                return match
        raise MatchNotFoundException(f"Unknown match: {match_id}")

    def replace_match(self, updated: Match) -> None:
        """Swap the log entry that shares ``updated.id``."""
        for index, match in enumerate(self.matches):
            if match.id == updated.id:
                self.matches[index] = updated
                return
        raise MatchNotFoundException(f"Unknown match: {updated.id}")

    def swiss_matches(self) -> List[Match]:
        return [m for m in self.matches if not m.is_elimination]

    def elimination_matches(self) -> List[Match]:
        return [m for m in self.matches if m.is_elimination]

    def matches_in_round(self, round_number: int, elimination: bool) -> List[Match]:
        return [
            m
            for m in self.matches
            if m.round == round_number and m.is_elimination == elimination
        ]

    def player_list(self) -> List[Player]:
        return list(self.players.values())

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "config": self.config.to_dict(),
            "phase": self.phase.value,
            "current_round": self.current_round,
            "active_groups": (
                list(self.active_groups) if self.active_groups is not None else None
            ),
            "round_start_time": (
                self.round_start_time.isoformat() if self.round_start_time else None
            ),
            "ignore_timer": self.ignore_timer,
            "players": [p.to_dict() for p in self.players.values()],
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""
        players = [Player.from_dict(p) for p in data.get("players", [])]
        tournament = cls(
            config=TournamentConfig.from_dict(data["config"]),
            phase=TournamentPhase(data.get("phase", TournamentPhase.SWISS.value)),
            current_round=data.get("current_round", 0),
            active_groups=data.get("active_groups"),
            round_start_time=_parse_timestamp(data.get("round_start_time")),
            ignore_timer=data.get("ignore_timer", True),
            players={p.id: p for p in players},
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
        )
        if "id" in data:
            tournament.id = data["id"]
        created_at = _parse_timestamp(data.get("created_at"))
        if created_at is not None:
            tournament.created_at = created_at
        return tournament
