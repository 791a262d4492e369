"""Colour allocation between two paired players."""

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

from typing import Tuple

from pairingengine.player import Player
from pairingengine.type_hints import BLACK, WHITE

# Lower rank gets white when white counts are equal
_LAST_COLOUR_RANK = {BLACK: 0, None: 1, WHITE: 2}


def colour_imbalance(player: Player) -> int:
    """Whites minus blacks."""
    return player.white_count - player.black_count


def white_priority(player: Player) -> Tuple[int, int, int]:
    """Sort key for the claim a player has on white, lower claims first."""
    return (
        colour_imbalance(player),
        player.white_count,
        _LAST_COLOUR_RANK[player.last_colour],
    )


def colours_compatible(first: Player, second: Player) -> bool:
    """False when both players are due the same colour."""
    return colour_imbalance(first) * colour_imbalance(second) <= 0


def assign_colours(first: Player, second: Player) -> Tuple[Player, Player]:
    """Decide who plays white.

    The player with fewer whites relative to blacks gets white, which for
    histories of equal length means fewer white games. On equal counts the
    player whose last game was black gets white. A full tie goes to the
    first-listed player.

    Args:
        first: The first-listed candidate (higher-ranked where that matters)
        second: The other candidate

    Returns:
        (white, black)
    """
    if white_priority(second) < white_priority(first):
        return second, first
    return first, second
