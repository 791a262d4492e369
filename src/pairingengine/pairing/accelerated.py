"""Accelerated Swiss pairings.

During the opening rounds the top half of the field by rating carries a
virtual bonus that decays by one point per round (+3, +2, +1 by default).
The bonus only affects grouping; real scores are never touched.
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

import math
import random
from typing import Dict, List

from pairingengine.models import PairingConfig, PairingResult
from pairingengine.pairing.base import RoundBuilder, pairing_generator
from pairingengine.pairing.max_rounds import accelerated_max_rounds
from pairingengine.pairing.score_groups import ScoreGroupPartitioner
from pairingengine.pairing.swiss import pair_score_groups
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)


def round_bonus(round_number: int, accelerated_rounds: int) -> float:
    """Virtual points the top half carries in ``round_number``."""
    if round_number > accelerated_rounds:
        return 0.0
    return float(accelerated_rounds + 1 - round_number)


def acceleration_bonuses(
    players: List[Player], round_number: int, accelerated_rounds: int
) -> Dict[str, float]:
    """Bonus per player id for this round.

    The top ``ceil(N / 2)`` players by rating receive the round bonus;
    input order breaks rating ties.
    """
    bonus = round_bonus(round_number, accelerated_rounds)
    position = {p.id: i for i, p in enumerate(players)}
    by_rating = sorted(players, key=lambda p: (-p.rating, position[p.id]))
    top_half = math.ceil(len(players) / 2)
    return {
        p.id: (bonus if i < top_half else 0.0) for i, p in enumerate(by_rating)
    }


@pairing_generator("Accelerated Swiss", accelerated_max_rounds)
def generate_accelerated_pairings(
    players: List[Player],
    round_number: int,
    rng: random.Random,
    config: PairingConfig,
) -> PairingResult:
    """Generate an Accelerated Swiss round.

    Players are grouped by score plus bonus and paired like a Swiss round,
    including the first round. Deltas record the bonus and the effective
    score used, so the host can show why a pairing happened.

    Args:
        players: Current standings, untouched by this call
        round_number: Round to pair (1-based)
        rng: Unused, pairing is deterministic
        config: ``accelerated_rounds`` sets the length of the acceleration

    Returns:
        PairingResult for the round
    """
    bonuses = acceleration_bonuses(players, round_number, config.accelerated_rounds)
    if any(bonuses.values()):
        logger.info(
            "Round %s: acceleration bonus %s for the top half",
            round_number,
            round_bonus(round_number, config.accelerated_rounds),
        )

    def effective_score(player: Player) -> float:
        return player.score + bonuses[player.id]

    builder = RoundBuilder(round_number)
    for player in players:
        builder.update(
            player,
            acceleration_bonus=bonuses[player.id],
            effective_score=effective_score(player),
        )
    pair_score_groups(players, ScoreGroupPartitioner(score_of=effective_score), builder)
    return builder.build()
