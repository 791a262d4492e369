"""Round robin and double round robin pairings (circle method).

Seats follow the order in which the host lists the players, and that order
must stay stable from round to round. The first seat is fixed and the others
rotate one place per round. With an odd field an empty seat is added and
whoever faces it gets the bye.
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
from typing import List, Optional, Sequence, Tuple, TypeVar

from pairingengine.constants import FIRST_CYCLE, SECOND_CYCLE
from pairingengine.models import PairingConfig, PairingResult
from pairingengine.pairing.base import RoundBuilder, pairing_generator
from pairingengine.pairing.colour import assign_colours
from pairingengine.pairing.max_rounds import (
    double_round_robin_max_rounds,
    round_robin_max_rounds,
)
from pairingengine.player import Player
from pairingengine.type_hints import WHITE
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")
Seat = Optional[T]


def circle_round(
    seats: Sequence[Seat], round_in_cycle: int
) -> List[Tuple[Seat, Seat]]:
    """Pairs of seats for one round of the circle method.

    Args:
        seats: Even-length seat list, None marks the empty bye seat
        round_in_cycle: Round number within the cycle (1-based)

    Returns:
        (seat, opposite seat) tuples, fixed seat's board first
    """
    n = len(seats)
    others = list(seats[1:])
    shift = (round_in_cycle - 1) % (n - 1)
    if shift:
        others = others[-shift:] + others[:-shift]
    arrangement = [seats[0]] + others
    return [(arrangement[i], arrangement[n - 1 - i]) for i in range(n // 2)]


def _seats(items: Sequence[T]) -> List[Seat]:
    seats: List[Seat] = list(items)
    if len(seats) % 2:
        seats.append(None)
    return seats


def round_robin_schedule(
    player_ids: Sequence[str], double: bool = False
) -> List[List[Tuple[Optional[str], Optional[str]]]]:
    """Complete pairing schedule for a round robin.

    Args:
        player_ids: Players in seat order
        double: Whether to append the second cycle with seats swapped

    Returns:
        One list of (first, second) id pairs per round, None marks the bye seat
    """
    seats = _seats(player_ids)
    if len(seats) < 2:
        return []
    rounds = [circle_round(seats, r) for r in range(1, len(seats))]
    if double:
        rounds += [[(b, a) for a, b in pairs] for pairs in rounds]
    return rounds


def berger_tables(
    player_ids: Sequence[str], double: bool = False
) -> List[List[Tuple[str, Optional[str]]]]:
    """Round robin schedule with colours fixed by the table.

    The fixed seat takes white in even rounds and black in odd rounds; on
    every other board the first seat takes white. Byes appear as
    ``(player, None)`` after the games.

    Returns:
        One list of (white, black) id pairs per round
    """
    tables = []
    for round_index, pairs in enumerate(round_robin_schedule(player_ids), start=1):
        games = []
        byes = []
        for board, (first, second) in enumerate(pairs):
            if first is None or second is None:
                byes.append((first if first is not None else second, None))
                continue
            if board == 0 and round_index % 2:
                games.append((second, first))
            else:
                games.append((first, second))
        tables.append(games + byes)
    if double:
        tables += [
            [(b, a) if b is not None else (a, b) for a, b in pairs]
            for pairs in tables
        ]
    return tables


def _pair_round_robin(
    players: List[Player], round_number: int, double: bool
) -> PairingResult:
    seats = _seats(players)
    cycle_length = len(seats) - 1
    second_half = double and round_number > cycle_length
    round_in_cycle = round_number - cycle_length if second_half else round_number
    cycle = SECOND_CYCLE if second_half else FIRST_CYCLE

    builder = RoundBuilder(round_number, cycle=cycle)
    for first, second in circle_round(seats, round_in_cycle):
        if first is None or second is None:
            builder.add_bye(first if first is not None else second)
            continue
        if not second_half:
            white, black = assign_colours(first, second)
            builder.add_game(white, black)
            continue

        earlier = first.colour_against(second.id)
        if earlier is None:
            logger.warning(
                "No first-cycle game found between %s and %s, balancing colours",
                first.id,
                second.id,
            )
            white, black = assign_colours(first, second)
        elif earlier == WHITE:
            white, black = second, first
        else:
            white, black = first, second
        builder.add_game(white, black, is_rematch=True)
    return builder.build()


@pairing_generator("Round Robin", round_robin_max_rounds)
def generate_round_robin_pairings(
    players: List[Player],
    round_number: int,
    rng: random.Random,
    config: PairingConfig,
) -> PairingResult:
    """Generate one round of a single round robin.

    Args:
        players: Players in seat order, untouched by this call
        round_number: Round to pair (1-based)
        rng: Unused, round robin is fully determined by seat order
        config: Pairing configuration

    Returns:
        PairingResult for the round
    """
    return _pair_round_robin(players, round_number, double=False)


@pairing_generator("Double Round Robin", double_round_robin_max_rounds)
def generate_double_round_robin_pairings(
    players: List[Player],
    round_number: int,
    rng: random.Random,
    config: PairingConfig,
) -> PairingResult:
    """Generate one round of a double round robin.

    The second half repeats the first with every colour reversed; its
    games are flagged as rematches.
    """
    return _pair_round_robin(players, round_number, double=True)
