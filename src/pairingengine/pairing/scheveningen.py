"""Scheveningen team match pairings.

Each player of one team meets every player of the other team exactly once.
The first team keeps its board order and the second rotates one seat per
round, so a team of size T needs exactly T rounds.
"""

# Pairing Engine
# Copyright (C) 2025  Pairing Engine developers
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
from typing import Dict, List, Tuple

from pairingengine.constants import SCHEVENINGEN_TEAM_COUNT
from pairingengine.exceptions import StructuralPairingException
from pairingengine.models import PairingConfig, PairingResult
from pairingengine.pairing.base import RoundBuilder, pairing_generator
from pairingengine.pairing.max_rounds import scheveningen_max_rounds
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)


Team = Tuple[str, List[Player]]


def split_teams(players: List[Player]) -> Tuple[Team, Team]:
    """Group players into the two teams, each in board order.

    Teams are ordered by name; boards within a team by rating, highest
    first, then id.

    Raises:
        StructuralPairingException: if a player has no team, the team count
            is not two, or the teams differ in size
    """
    teams: Dict[str, List[Player]] = {}
    for player in players:
        if not player.team:
            raise StructuralPairingException(
                f"Scheveningen tournament requires every player to have a team; "
                f"{player.name} has none"
            )
        teams.setdefault(player.team, []).append(player)

    if len(teams) != SCHEVENINGEN_TEAM_COUNT:
        raise StructuralPairingException(
            f"Scheveningen tournament requires exactly 2 teams, found {len(teams)}"
        )

    (name_a, team_a), (name_b, team_b) = sorted(teams.items())
    if len(team_a) != len(team_b):
        raise StructuralPairingException(
            "Both teams must have the same number of players for a Scheveningen "
            f"tournament ({name_a}: {len(team_a)}, {name_b}: {len(team_b)})"
        )

    def board_order(team: List[Player]) -> List[Player]:
        return sorted(team, key=lambda p: (-p.rating, p.id))

    return (name_a, board_order(team_a)), (name_b, board_order(team_b))


@pairing_generator("Scheveningen", scheveningen_max_rounds)
def generate_scheveningen_pairings(
    players: List[Player],
    round_number: int,
    rng: random.Random,
    config: PairingConfig,
) -> PairingResult:
    """Generate one round of a Scheveningen match.

    Board i pairs the i-th player of the first team with the player of the
    second team ``round - 1`` seats further along. Colours alternate by
    board and by round.

    Args:
        players: Both teams' players, untouched by this call
        round_number: Round to pair (1-based)
        rng: Unused, the schedule is fully determined by the teams
        config: Pairing configuration

    Returns:
        PairingResult, or a structural error if the teams are unusable
    """
    (name_a, team_a), (name_b, team_b) = split_teams(players)
    shift = round_number - 1
    opponents = team_b[shift:] + team_b[:shift]

    builder = RoundBuilder(round_number)
    for board, (home, away) in enumerate(zip(team_a, opponents)):
        if home.has_played(away.id) or away.has_played(home.id):
            raise StructuralPairingException(
                f"{home.name} ({name_a}) and {away.name} ({name_b}) have already "
                f"met; Scheveningen rounds must be paired in order"
            )
        if (round_number + board) % 2 == 0:
            builder.add_game(home, away, is_rematch=False)
        else:
            builder.add_game(away, home, is_rematch=False)
    return builder.build()
