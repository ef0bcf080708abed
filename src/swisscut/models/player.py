"""Player data class."""

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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Outcome(str, Enum):
    """Per-round outcome code shown in a player's history."""

    WIN = "W"
    LOSS = "L"
    BYE = "B"


@dataclass
class Player:
    """A registered player and the statistics derived from the match log.

    Identity fields (``id``, ``name``, ``registration_order``, ``group_id``,
    ``deck_name``) are set at registration or tournament start. Everything
    else is recomputed from scratch by the standings engine whenever the
    match log changes and must never be edited by hand.

    Attributes
    ----------
    id : str
        Stable unique key.
    name : str
        Display name.
    registration_order : int
        Signup position. Final tiebreak, never changed.
    group_id : str or None
        Group label when the Swiss stage is split into groups.
    deck_name : str or None
        Free-text note carried for display only.
    wins, losses : int
        Swiss match record (byes count as wins).
    match_points : int
        Sum of raw per-match scores.
    tournament_points : int
        ``match_points`` plus 2 per win, minus overtime penalties.
    desafio : int
        Sum of the tournament points of every opponent who beat this player.
    opponents : list of str
        Opponent ids in round order, duplicates allowed.
    history : list of Outcome
        Outcome code per Swiss round played.
    has_received_bye : bool
        Whether a bye was ever assigned.
    """

    id: str
    name: str
    registration_order: int
    group_id: Optional[str] = None
    deck_name: Optional[str] = None

    # Derived statistics
    wins: int = 0
    losses: int = 0
    match_points: int = 0
    tournament_points: int = 0
    desafio: int = 0
    opponents: List[str] = field(default_factory=list)
    history: List[Outcome] = field(default_factory=list)
    has_received_bye: bool = False

    def fresh_copy(self) -> "Player":
        """Return a copy carrying identity only, with zeroed statistics."""
        return Player(
            id=self.id,
            name=self.name,
            registration_order=self.registration_order,
            group_id=self.group_id,
            deck_name=self.deck_name,
        )

    @property
    def games_played(self) -> int:
        return self.wins + self.losses

    def has_played(self, player_id: str) -> bool:
        """Check if this player already faced ``player_id`` in the Swiss stage."""
        return player_id in self.opponents

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "registration_order": self.registration_order,
            "group_id": self.group_id,
            "deck_name": self.deck_name,
            "wins": self.wins,
            "losses": self.losses,
            "match_points": self.match_points,
            "tournament_points": self.tournament_points,
            "desafio": self.desafio,
            "opponents": list(self.opponents),
            "history": [outcome.value for outcome in self.history],
            "has_received_bye": self.has_received_bye,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            registration_order=data["registration_order"],
            group_id=data.get("group_id"),
            deck_name=data.get("deck_name"),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            match_points=data.get("match_points", 0),
            tournament_points=data.get("tournament_points", 0),
            desafio=data.get("desafio", 0),
            opponents=list(data.get("opponents", [])),
            history=[Outcome(code) for code in data.get("history", [])],
            has_received_bye=data.get("has_received_bye", False),
        )

    def __str__(self) -> str:
        return self.name
