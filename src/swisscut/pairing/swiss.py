"""Swiss pairing generator.

Pairs one pool of players (a group, or the whole field) for a single round.
Round 1 is shuffled; later rounds expect the pool already sorted by
standings. Pairing is greedy in list order and avoids rematches whenever
some other opponent is still available.
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

from swisscut.constants import BYE_SCORE
from swisscut.exceptions import InvalidPairingException
from swisscut.models.match import Match, MatchStatus
from swisscut.models.player import Player
from swisscut.tournament.standings import group_standings
from swisscut.utils import generate_id, setup_logger

logger = setup_logger(__name__)


def select_bye_player(pool: List[Player], round_number: int) -> Player:
    """Pick the bye recipient from an odd-sized pool.

    Round 1 takes the last player of the (shuffled) pool. Later rounds scan
    from the bottom of the standings for the first player without a bye and
    fall back to the bottom-ranked player when everyone already had one.

    Args:
        pool: Players in pairing order
        round_number: Round being paired (1-indexed)

    Returns:
        The player who receives the bye
    """
    if round_number == 1:
        return pool[-1]

    for player in reversed(pool):
        if not player.has_received_bye:
            return player

    logger.warning(
        "All players in the pool already had a bye, assigning a second bye to %s",
        pool[-1].name,
    )
    return pool[-1]


def _bye_match(player: Player, round_number: int) -> Match:
    return Match(
        id=generate_id(f"R{round_number}-BYE"),
        round=round_number,
        player1_id=player.id,
        player2_id=None,
        winner_id=player.id,
        score1=BYE_SCORE,
        score2=BYE_SCORE,
        status=MatchStatus.COMPLETED,
        is_bye=True,
    )


def create_swiss_pairings(
    players: Sequence[Player],
    round_number: int,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    """Generate one round of matches for a single pool.

    Args:
        players: The pool, ranked by standings for rounds after the first
        round_number: Round being paired (1-indexed)
        rng: Random source used for the round 1 shuffle

    Returns:
        New matches: the bye (if any) first, then pending pairings in order

    Raises:
        InvalidPairingException: If the round number is not positive
    """
    if round_number < 1:
        raise InvalidPairingException(f"Invalid round number: {round_number}")

    pool = list(players)
    if round_number == 1:
        (rng or random.Random()).shuffle(pool)

    matches: List[Match] = []

    if len(pool) % 2 != 0:
        bye_player = select_bye_player(pool, round_number)
        pool.remove(bye_player)
        matches.append(_bye_match(bye_player, round_number))
        logger.info("Round %s: bye assigned to %s", round_number, bye_player.name)

    table = 0
    while pool:
        p1 = pool.pop(0)
        opponent_index = next(
            (i for i, candidate in enumerate(pool) if not p1.has_played(candidate.id)),
            None,
        )
        if opponent_index is None:
            logger.warning(
                "Round %s: no fresh opponent left for %s, allowing a rematch",
                round_number,
                p1.name,
            )
            opponent_index = 0
        p2 = pool.pop(opponent_index)

        table += 1
        matches.append(
            Match(
                id=generate_id(f"R{round_number}-{table}"),
                round=round_number,
                player1_id=p1.id,
                player2_id=p2.id,
            )
        )
        logger.debug("Round %s table %s: %s vs %s", round_number, table, p1, p2)

    return matches


def create_round_pairings(
    standings: Sequence[Player],
    round_number: int,
    active_groups: Optional[Sequence[str]] = None,
    rng: Optional[random.Random] = None,
) -> List[Match]:
    """Pair a full round, independently per group when groups are active.

    Args:
        standings: All players, ranked (order is irrelevant for round 1)
        round_number: Round being paired (1-indexed)
        active_groups: Group labels, or None for a single pool
        rng: Random source used for the round 1 shuffle

    Returns:
        The round's matches, concatenated in group order
    """
    if not active_groups:
        return create_swiss_pairings(standings, round_number, rng)

    matches: List[Match] = []
    for group_id in active_groups:
        members = group_standings(list(standings), group_id)
        matches.extend(create_swiss_pairings(members, round_number, rng))
    return matches
