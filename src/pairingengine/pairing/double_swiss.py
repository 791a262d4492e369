"""Double Swiss pairings.

The event runs as two Swiss cycles of ``ceil(log2 N)`` rounds each. Cycle one
forbids rematches. Cycle two opens by pairing neighbours in the cycle-one
ranking (1v2, 3v4, ...) and then groups players by the points scored in the
second cycle only. A pair may meet at most once per cycle.
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
from typing import List

from pairingengine.constants import FIRST_CYCLE, SECOND_CYCLE
from pairingengine.exceptions import NoPairingAvailableException
from pairingengine.models import PairingConfig, PairingResult
from pairingengine.pairing.base import (
    RoundBuilder,
    pairing_generator,
    players_without_bye_first,
)
from pairingengine.pairing.colour import assign_colours
from pairingengine.pairing.max_rounds import double_swiss_max_rounds, swiss_max_rounds
from pairingengine.pairing.score_groups import ScoreGroupPartitioner, rank_players
from pairingengine.pairing.solver import MatchingSolver, RematchPolicy
from pairingengine.pairing.swiss import pair_random_draw, pair_score_groups
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)

CYCLE_ONE_POLICY = RematchPolicy(preferred=0, hard_limit=1)
CYCLE_TWO_POLICY = RematchPolicy(preferred=1, hard_limit=1)


def cycle_for_round(round_number: int, player_count: int) -> int:
    """Cycle a round belongs to."""
    if round_number <= swiss_max_rounds(player_count):
        return FIRST_CYCLE
    return SECOND_CYCLE


def cycle_one_score(player: Player) -> float:
    """Cycle-one result, falling back to the total before it is recorded."""
    if player.cycle_one_score is not None:
        return player.cycle_one_score
    return player.score


def cycle_two_score(player: Player) -> float:
    """Points gained since cycle two began, 0 while cycle one is running."""
    if player.cycle_one_score is None:
        return 0.0
    return player.score - player.cycle_one_score


def _pair_cycle_opening(
    players: List[Player], builder: RoundBuilder
) -> None:
    """First round of cycle two: neighbours in the cycle-one ranking."""
    ranked = rank_players(players, cycle_one_score)
    for player in ranked:
        builder.update(player, cycle_one_score=player.score, cycle_two_score=0.0)

    bye_player = None
    if len(ranked) % 2:
        bye_player = players_without_bye_first(ranked, cycle_one_score)[0]
        ranked = [p for p in ranked if p is not bye_player]

    # neighbours in the ranking, even when they met in cycle one
    solver = MatchingSolver(
        max_prior_meetings=CYCLE_TWO_POLICY.hard_limit, avoid_rematches=False
    )
    pairs = solver.solve(ranked, rematch_budget=len(ranked) // 2)
    if pairs is None:
        raise NoPairingAvailableException(
            "Pairing Impossible\nNo valid pairing exists to open the second "
            f"cycle with {len(ranked)} players."
        )
    for first, second, is_rematch in pairs:
        white, black = assign_colours(first, second)
        builder.add_game(white, black, is_rematch=is_rematch)
    if bye_player is not None:
        builder.add_bye(bye_player)


@pairing_generator("Double Swiss", double_swiss_max_rounds)
def generate_double_swiss_pairings(
    players: List[Player],
    round_number: int,
    rng: random.Random,
    config: PairingConfig,
) -> PairingResult:
    """Generate a Double Swiss round.

    Args:
        players: Current standings, untouched by this call
        round_number: Round to pair (1-based)
        rng: Random source for the first-round draw
        config: Pairing configuration

    Returns:
        PairingResult whose pairings carry the cycle number
    """
    cycle_length = swiss_max_rounds(len(players))
    cycle = cycle_for_round(round_number, len(players))
    builder = RoundBuilder(round_number, cycle=cycle)

    if round_number == 1:
        pair_random_draw(players, rng, builder)
    elif cycle == FIRST_CYCLE:
        pair_score_groups(
            players, ScoreGroupPartitioner(policy=CYCLE_ONE_POLICY), builder
        )
    elif round_number == cycle_length + 1:
        logger.info("Opening second cycle at round %s", round_number)
        _pair_cycle_opening(players, builder)
    else:
        partitioner = ScoreGroupPartitioner(
            policy=CYCLE_TWO_POLICY, score_of=cycle_two_score
        )
        pair_score_groups(players, partitioner, builder)
    return builder.build()
