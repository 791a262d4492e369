"""Shared type aliases for the pairing engine."""

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

from typing import List, Literal, Optional, Tuple

WHITE = "white"
BLACK = "black"

Colour = Literal["white", "black"]

KnockoutStatus = Literal["active", "eliminated"]

# Result strings stored by the host
ResultString = Literal["1-0", "0-1", "1/2-1/2", "BYE", "*"]

# List of players
Players = List["Player"]
MaybePlayer = Optional["Player"]
# (white, black) pair of players, black is None for a bye
PlayerPair = Tuple["Player", Optional["Player"]]
# (white id, black id) pair
PairingIDs = Tuple[str, Optional[str]]

#  LocalWords:  PlayerPair PairingIDs
