"""Round ceilings per tournament format.

All functions are pure functions of the player count.
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

from typing import Optional


def ceil_log2(player_count: int) -> int:
    """Smallest r with 2**r >= player_count, 0 for fields of 0 or 1."""
    if player_count <= 1:
        return 0
    return (player_count - 1).bit_length()


def swiss_max_rounds(player_count: int) -> int:
    return ceil_log2(player_count)


def double_swiss_max_rounds(player_count: int) -> int:
    return 2 * ceil_log2(player_count)


def round_robin_max_rounds(player_count: int) -> int:
    """N-1 rounds for even N; odd N is padded with a bye seat, giving N rounds."""
    if player_count <= 1:
        return 0
    return player_count - 1 if player_count % 2 == 0 else player_count


def double_round_robin_max_rounds(player_count: int) -> int:
    return 2 * round_robin_max_rounds(player_count)


def knockout_max_rounds(player_count: int) -> int:
    return ceil_log2(player_count)


def scheveningen_max_rounds(player_count: int) -> int:
    """Team size of two equal teams."""
    return player_count // 2


def monrad_max_rounds(player_count: int) -> int:
    return ceil_log2(player_count)


def random_max_rounds(player_count: int) -> Optional[int]:
    """Random pairing has no ceiling."""
    return None


def accelerated_max_rounds(player_count: int) -> int:
    return ceil_log2(player_count)
