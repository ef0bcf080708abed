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

# --- Constants ---

# Roster bounds
MIN_PLAYERS = 4
MAX_PLAYERS = 30

# Group stage sizing
MIN_GROUP_SIZE = 3
MAX_GROUP_SIZE = 5
MIN_PLAYERS_FOR_GROUPS = 6
GROUP_NAMES = ["A", "B", "C", "D", "E", "F", "G", "H"]

# Scoring
WIN_BONUS = 2  # Added to the winner's raw score
OVERTIME_PENALTY = 1  # Charged to both participants of an overtime match
BYE_SCORE = 0  # Raw score recorded on both sides of a bye
MAX_SCORE = 3  # Highest raw score a player can record in one match

# Top cut
TOP_CUT_SIZES = (2, 4, 8)
DEFAULT_TOP_CUT_SIZE = 4

# Timer
DEFAULT_ROUND_DURATION_SECONDS = 45 * 60

# Bracket rounds (fixed labels, independent of the cut size)
QUARTERFINAL_ROUND = 1
SEMIFINAL_ROUND = 2
FINAL_ROUND = 3

THIRD_PLACE_MATCH_ID = "THIRD_PLACE_MATCH"
ELIMINATION_ID_START = 1000

# First bracket round played for each cut size
FIRST_BRACKET_ROUND = {
    2: FINAL_ROUND,
    4: SEMIFINAL_ROUND,
    8: QUARTERFINAL_ROUND,
}

# Display labels for bracket stages
STAGE_QUARTERFINALS = "Quarterfinals"
STAGE_SEMIFINALS = "Semifinals"
STAGE_FINALS = "Finals"
STAGE_FINISHED = "Tournament Finished"

STAGE_NAMES = {
    QUARTERFINAL_ROUND: STAGE_QUARTERFINALS,
    SEMIFINAL_ROUND: STAGE_SEMIFINALS,
    FINAL_ROUND: STAGE_FINALS,
}

DEFAULT_TOURNAMENT_NAME = "Liga Zenkai"
