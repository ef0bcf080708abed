"""Player registration before a tournament starts."""

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

from typing import Dict, List, Optional

from swisscut.constants import MAX_PLAYERS
from swisscut.exceptions import (
    DuplicatePlayerException,
    InvalidPlayerDataException,
    PlayerNotFoundException,
    RosterFullException,
)
from swisscut.models.player import Player
from swisscut.utils import generate_id, setup_logger

logger = setup_logger(__name__)


class Roster:
    """Players signed up during the registration phase.

    Registration order is handed out from a counter that only grows, so a
    removal never lets two players share a position.
    """

    def __init__(self, max_players: int = MAX_PLAYERS) -> None:
        self.max_players = max_players
        self.players: Dict[str, Player] = {}
        self._last_order = 0

    def __len__(self) -> int:
        return len(self.players)

    def __contains__(self, player_id: str) -> bool:
        return player_id in self.players

    def get_player_list(self) -> List[Player]:
        """Players in registration order."""
        return sorted(self.players.values(), key=lambda p: p.registration_order)

    def register_player(self, name: str, deck_name: Optional[str] = None) -> Player:
        """Sign up a new player.

        Args:
            name: Display name, surrounding whitespace is stripped
            deck_name: Optional free-text note

        Returns:
            The new Player with zeroed statistics

        Raises:
            InvalidPlayerDataException: If the name is blank
            RosterFullException: If the roster is already full
        """
        name = name.strip()
        if not name:
            raise InvalidPlayerDataException("Player name cannot be empty")
        if len(self.players) >= self.max_players:
            raise RosterFullException(
                f"Maximum of {self.max_players} players reached"
            )

        self._last_order += 1
        player = Player(
            id=generate_id("P"),
            name=name,
            registration_order=self._last_order,
            deck_name=deck_name.strip() if deck_name else None,
        )
        self.players[player.id] = player
        logger.info(f"Added player: {player.name} ({player.id})")
        return player

    def add_player(self, player: Player) -> None:
        """Add an already built player, keeping its registration order.

        Raises:
            DuplicatePlayerException: If the id is already registered
            RosterFullException: If the roster is already full
        """
        if player.id in self.players:
            raise DuplicatePlayerException(f"Player already registered: {player.id}")
        if len(self.players) >= self.max_players:
            raise RosterFullException(
                f"Maximum of {self.max_players} players reached"
            )
        self.players[player.id] = player
        self._last_order = max(self._last_order, player.registration_order)

    def remove_player(self, player_id: str) -> Player:
        """Remove a player from the roster.

        Args:
            player_id: ID of player to remove

        Returns:
            The removed player

        Raises:
            PlayerNotFoundException: If the id is unknown
        """
        if player_id not in self.players:
            raise PlayerNotFoundException(f"Unknown player: {player_id}")
        player = self.players.pop(player_id)
        logger.info(f"Removed player: {player.name} ({player_id})")
        return player
