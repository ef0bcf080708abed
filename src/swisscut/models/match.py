"""Match data class."""

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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class MatchStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


@dataclass
class Match:
    """A single pairing, either Swiss or elimination.

    Attributes
    ----------
    id : str
        Match identifier, unique within the tournament.
    round : int
        Swiss round number, or bracket round (1 quarterfinal, 2 semifinal,
        3 final/third place) when ``is_elimination`` is set.
    is_elimination : bool
        True for top cut matches.
    player1_id, player2_id : str or None
        Participants. ``None`` marks a bracket slot still waiting for an
        upstream result, or the empty side of a bye.
    winner_id : str or None
        Declared winner, ``None`` until decided.
    score1, score2 : int
        Raw per-match scores.
    status : MatchStatus
        Lifecycle state.
    next_match_id : str or None
        Match whose first empty slot receives the winner.
    loser_next_match_id : str or None
        Match whose first empty slot receives the loser (third place).
    is_bye : bool
        Automatically completed single-player match.
    finished_overtime : bool
        Completed after the round's time budget expired.
    """

    id: str
    round: int
    is_elimination: bool = False
    player1_id: Optional[str] = None
    player2_id: Optional[str] = None
    winner_id: Optional[str] = None
    score1: int = 0
    score2: int = 0
    status: MatchStatus = MatchStatus.PENDING
    next_match_id: Optional[str] = None
    loser_next_match_id: Optional[str] = None
    is_bye: bool = False
    finished_overtime: bool = False

    @property
    def is_completed(self) -> bool:
        return self.status == MatchStatus.COMPLETED

    @property
    def is_ready(self) -> bool:
        """Both slots are filled and the match can be played."""
        return self.player1_id is not None and self.player2_id is not None

    @property
    def loser_id(self) -> Optional[str]:
        """The participant that is not the winner, if a winner is set."""
        if self.winner_id is None:
            return None
        if self.winner_id == self.player1_id:
            return self.player2_id
        return self.player1_id

    def involves(self, player_id: str) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def opponent_of(self, player_id: str) -> Optional[str]:
        if self.player1_id == player_id:
            return self.player2_id
        if self.player2_id == player_id:
            return self.player1_id
        return None

    def score_for(self, player_id: str) -> int:
        """Raw score of ``player_id`` in this match."""
        if self.player1_id == player_id:
            return self.score1
        if self.player2_id == player_id:
            return self.score2
        raise ValueError(f"Player {player_id} did not play match {self.id}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round": self.round,
            "is_elimination": self.is_elimination,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "winner_id": self.winner_id,
            "score1": self.score1,
            "score2": self.score2,
            "status": self.status.value,
            "next_match_id": self.next_match_id,
            "loser_next_match_id": self.loser_next_match_id,
            "is_bye": self.is_bye,
            "finished_overtime": self.finished_overtime,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=data["id"],
            round=data["round"],
            is_elimination=data.get("is_elimination", False),
            player1_id=data.get("player1_id"),
            player2_id=data.get("player2_id"),
            winner_id=data.get("winner_id"),
            score1=data.get("score1", 0),
            score2=data.get("score2", 0),
            status=MatchStatus(data.get("status", MatchStatus.PENDING.value)),
            next_match_id=data.get("next_match_id"),
            loser_next_match_id=data.get("loser_next_match_id"),
            is_bye=data.get("is_bye", False),
            finished_overtime=data.get("finished_overtime", False),
        )
