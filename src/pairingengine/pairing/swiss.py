"""Swiss system pairings.

Round 1 is a random draw. Later rounds pair by score groups with no
rematches; a single flagged rematch per pair is allowed only when the
forced fallback is the last way to complete the round.
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
from typing import List, Optional, Sequence

from pairingengine.models import PairingConfig, PairingResult
from pairingengine.pairing.base import (
    RoundBuilder,
    pairing_generator,
    players_without_bye_first,
)
from pairingengine.pairing.colour import assign_colours
from pairingengine.pairing.max_rounds import swiss_max_rounds
from pairingengine.pairing.score_groups import ScoreGroupPartitioner, rank_players
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)


def pair_random_draw(
    players: Sequence[Player], rng: random.Random, builder: RoundBuilder
) -> None:
    """Shuffle the field and pair neighbours; the last player gets any bye."""
    shuffled = list(players)
    rng.shuffle(shuffled)
    bye_player: Optional[Player] = None
    if len(shuffled) % 2:
        bye_player = shuffled.pop()
    for i in range(0, len(shuffled), 2):
        white, black = assign_colours(shuffled[i], shuffled[i + 1])
        builder.add_game(white, black)
    if bye_player is not None:
        builder.add_bye(bye_player)


def pair_score_groups(
    players: Sequence[Player],
    partitioner: ScoreGroupPartitioner,
    builder: RoundBuilder,
) -> None:
    """Pair a round by score groups, choosing a bye when the field is odd.

    The bye is part of the matching: the first candidate in bye order gets
    it unless handing it to a later one avoids a rematch.

    Raises:
        NoPairingAvailableException: if no bye choice leads to a full pairing
    """
    ranked = rank_players(players, partitioner.score_of)
    bye_player: Optional[Player] = None

    if len(ranked) % 2 == 0:
        pairs = partitioner.pair(ranked)
    else:
        candidates = players_without_bye_first(ranked, partitioner.score_of)
        pairs, bye_player = partitioner.pair_with_bye(ranked, candidates)
        if bye_player.byes:
            logger.warning("Player %s receives a repeat bye", bye_player.id)

    for first, second, is_rematch in pairs:
        white, black = assign_colours(first, second)
        builder.add_game(white, black, is_rematch=is_rematch)
    if bye_player is not None:
        builder.add_bye(bye_player)


@pairing_generator("Swiss", swiss_max_rounds)
def generate_swiss_pairings(
    players: List[Player],
    round_number: int,
    rng: random.Random,
    config: PairingConfig,
) -> PairingResult:
    """Generate a Swiss round.

    Args:
        players: Current standings, untouched by this call
        round_number: Round to pair (1-based)
        rng: Random source for the first-round draw
        config: Pairing configuration

    Returns:
        PairingResult with pairings and history deltas, or an error value
    """
    builder = RoundBuilder(round_number)
    if round_number == 1:
        pair_random_draw(players, rng, builder)
    else:
        pair_score_groups(players, ScoreGroupPartitioner(), builder)
    return builder.build()
