"""Single-elimination knockout pairings."""

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
from typing import List, Optional

from pairingengine.constants import KNOCKOUT_ACTIVE
from pairingengine.exceptions import TournamentCompleteException
from pairingengine.models import PairingConfig, PairingResult
from pairingengine.pairing.base import RoundBuilder, pairing_generator
from pairingengine.pairing.colour import assign_colours
from pairingengine.pairing.max_rounds import knockout_max_rounds
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)


def seed_order(players: List[Player]) -> List[Player]:
    """Seeding by rating, highest first; input order breaks ties."""
    position = {p.id: i for i, p in enumerate(players)}
    return sorted(players, key=lambda p: (-p.rating, position[p.id]))


def _first_round(
    players: List[Player],
    builder: RoundBuilder,
    rng: random.Random,
    seeded: bool,
) -> None:
    for player in players:
        builder.update(player, knockout_status=KNOCKOUT_ACTIVE, knockout_round=None)

    if seeded:
        field = seed_order(players)
        bye_player: Optional[Player] = field.pop(0) if len(field) % 2 else None
        # 1 v n, 2 v n-1, ... with the higher seed on white
        half = len(field) // 2
        for i in range(half):
            builder.add_game(field[i], field[len(field) - 1 - i])
    else:
        field = list(players)
        rng.shuffle(field)
        bye_player = field.pop(0) if len(field) % 2 else None
        for i in range(0, len(field), 2):
            white, black = assign_colours(field[i], field[i + 1])
            builder.add_game(white, black)

    if bye_player is not None:
        builder.add_bye(bye_player)


def _later_round(players: List[Player], builder: RoundBuilder) -> None:
    active = [p for p in players if p.is_active_in_knockout]
    if len(active) <= 1:
        champion = active[0] if active else None
        if champion is None:
            raise TournamentCompleteException(
                "Tournament completed. No active players remain."
            )
        raise TournamentCompleteException(
            f"Tournament completed. No more pairings needed. "
            f"Champion: {champion.name}",
            champion_id=champion.id,
        )

    position = {p.id: i for i, p in enumerate(players)}
    field = sorted(active, key=lambda p: (-p.score, -p.rating, position[p.id]))

    bye_player: Optional[Player] = None
    if len(field) % 2:
        bye_player = next((p for p in field if p.byes == 0), field[0])
        field = [p for p in field if p is not bye_player]

    for i in range(0, len(field), 2):
        white, black = assign_colours(field[i], field[i + 1])
        builder.add_game(white, black)
    if bye_player is not None:
        builder.add_bye(bye_player)


@pairing_generator("Knockout", knockout_max_rounds)
def generate_knockout_pairings(
    players: List[Player],
    round_number: int,
    rng: random.Random,
    config: PairingConfig,
) -> PairingResult:
    """Generate a knockout round.

    Round 1 marks every entrant active and pairs them seeded (1 v N by
    rating) or by random draw. Later rounds pair only active players, the
    bye going to the top surviving seed without a previous bye.

    Args:
        players: Full entry list including eliminated players
        round_number: Round to pair (1-based)
        rng: Random source for an unseeded first round
        config: ``seeded_knockout`` selects the first-round method

    Returns:
        PairingResult, or a terminal-state error once a champion is decided
    """
    builder = RoundBuilder(round_number)
    if round_number == 1:
        _first_round(players, builder, rng, config.seeded_knockout)
    else:
        _later_round(players, builder)

    # Every player still in the draw records the round reached
    for placed in builder.placed_players():
        builder.update(placed, knockout_round=round_number)
    return builder.build()
