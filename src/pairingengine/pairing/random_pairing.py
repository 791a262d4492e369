"""Random pairings."""

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

from pairingengine.exceptions import NoPairingAvailableException
from pairingengine.models import PairingConfig, PairingResult
from pairingengine.pairing.base import RoundBuilder, pairing_generator
from pairingengine.pairing.colour import assign_colours
from pairingengine.pairing.max_rounds import random_max_rounds
from pairingengine.pairing.solver import MatchingSolver, RematchPolicy
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)

RANDOM_POLICY = RematchPolicy(preferred=0, hard_limit=1)


@pairing_generator("Random", random_max_rounds)
def generate_random_pairings(
    players: List[Player],
    round_number: int,
    rng: random.Random,
    config: PairingConfig,
) -> PairingResult:
    """Generate a random round.

    The field is shuffled and a uniformly random player sits out when the
    count is odd. Pairs that have never met are preferred; a second meeting
    is allowed and flagged only when the round cannot be completed otherwise.

    Args:
        players: Current standings, untouched by this call
        round_number: Round to pair (1-based)
        rng: Random source for the shuffle and the bye
        config: Pairing configuration

    Returns:
        PairingResult for the round
    """
    shuffled = list(players)
    rng.shuffle(shuffled)
    bye_player: Optional[Player] = None
    if len(shuffled) % 2:
        bye_player = shuffled.pop(rng.randrange(len(shuffled)))

    solver = MatchingSolver(max_prior_meetings=RANDOM_POLICY.hard_limit)
    pairs = solver.solve_minimizing_rematches(shuffled)
    if pairs is None:
        raise NoPairingAvailableException(
            "Pairing Impossible\nEvery remaining pairing would be a third "
            "meeting between the same players."
        )

    builder = RoundBuilder(round_number)
    for first, second, is_rematch in pairs:
        white, black = assign_colours(first, second)
        builder.add_game(white, black, is_rematch=is_rematch)
    if bye_player is not None:
        builder.add_bye(bye_player)
    return builder.build()
