"""Monrad (Danish) system pairings.

Leaders are paired against a lower score group, offset by a balancing
factor of ``ceil(groups / 3)``. At the bottom of the standings the offset
runs out and players meet their own group.
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
from typing import Dict, List, Optional

from pairingengine.exceptions import NoPairingAvailableException
from pairingengine.models import PairingConfig, PairingResult
from pairingengine.pairing.base import (
    RoundBuilder,
    pairing_generator,
    players_without_bye_first,
)
from pairingengine.pairing.colour import assign_colours
from pairingengine.pairing.max_rounds import monrad_max_rounds
from pairingengine.pairing.score_groups import rank_players
from pairingengine.pairing.solver import MatchingSolver, RematchPolicy
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)

MONRAD_POLICY = RematchPolicy(preferred=0, hard_limit=1)


def balancing_factor(group_count: int) -> int:
    """How many score groups down a leader looks for an opponent."""
    return max(1, math.ceil(group_count / 3))


class MonradOpponentOrder:
    """Orders opponents by how well their score group fits the Monrad offset.

    The target group comes first, then groups further down, then groups
    between a player's own group and the target, then the player's own
    group, and finally higher groups. Standing order breaks ties.
    """

    def __init__(self, ranked: List[Player]):
        scores = sorted({p.score for p in ranked}, reverse=True)
        group_of = {score: i for i, score in enumerate(scores)}
        self.last_group = len(scores) - 1
        self.factor = balancing_factor(len(scores))
        self.group: Dict[str, int] = {p.id: group_of[p.score] for p in ranked}
        self.position: Dict[str, int] = {p.id: i for i, p in enumerate(ranked)}

    def target(self, player: Player) -> int:
        return min(self.group[player.id] + self.factor, self.last_group)

    def _rank(self, player: Player, candidate: Player) -> int:
        own = self.group[player.id]
        target = self.target(player)
        group = self.group[candidate.id]
        if group == target:
            return 0
        if group > target:
            return group - target
        if group > own:
            return self.last_group + (target - group)
        if group == own:
            return 2 * self.last_group + 1
        return 3 * self.last_group + (own - group) + 1

    def __call__(self, player: Player, rest: List[Player]) -> List[Player]:
        return sorted(
            rest, key=lambda c: (self._rank(player, c), self.position[c.id])
        )


@pairing_generator("Monrad", monrad_max_rounds)
def generate_monrad_pairings(
    players: List[Player],
    round_number: int,
    rng: random.Random,
    config: PairingConfig,
) -> PairingResult:
    """Generate a Monrad round.

    The bye goes to the lowest-scoring player without a previous bye,
    unless another choice avoids a rematch. Rematches are avoided; one
    earlier meeting per pair is tolerated and flagged when no other pairing
    exists. Players due the same colour are kept apart where possible.

    Args:
        players: Current standings, untouched by this call
        round_number: Round to pair (1-based)
        rng: Unused, Monrad pairing is deterministic
        config: Pairing configuration

    Returns:
        PairingResult for the round
    """
    ranked = rank_players(players)
    order = MonradOpponentOrder(ranked)
    logger.debug("Monrad balancing factor %s", order.factor)
    # rematches weigh most, so they appear only when unavoidable
    solver = MatchingSolver(
        max_prior_meetings=MONRAD_POLICY.hard_limit,
        candidate_order=order,
        balance_colours=True,
    )
    bye_player: Optional[Player] = None
    if len(ranked) % 2:
        candidates = players_without_bye_first(ranked, lambda p: p.score)
        result = solver.solve_with_bye(ranked, candidates)
        pairs, bye_player = result if result is not None else (None, None)
    else:
        pairs = solver.solve_minimizing_rematches(ranked)
    if pairs is None:
        raise NoPairingAvailableException(
            "Pairing Impossible\nNo valid Monrad pairing exists without a "
            "third meeting between two players."
        )

    builder = RoundBuilder(round_number)
    for leader, trailer, is_rematch in pairs:
        white, black = assign_colours(leader, trailer)
        builder.add_game(white, black, is_rematch=is_rematch)
    if bye_player is not None:
        builder.add_bye(bye_player)
    return builder.build()
