"""Pairing Engine: tournament pairing and tiebreak generation.

Typical use pairs a round, lets the host persist it, then records results::

    arena = PlayerArena(players)
    result = generate_pairings("swiss", arena.players(), round_number=1)
    if result.ok:
        arena.apply(result)
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

from pairingengine.models import (
    Pairing,
    PairingConfig,
    PairingError,
    PairingResult,
    PlayerDelta,
)
from pairingengine.pairing import (
    TournamentFormat,
    calculate_max_rounds,
    generate_pairings,
)
from pairingengine.player import Player
from pairingengine.tournament import (
    MatchRecord,
    PlayerArena,
    TiebreakSet,
    calculate_tiebreaks,
)

__version__ = "0.1.0"

__all__ = [
    "MatchRecord",
    "Pairing",
    "PairingConfig",
    "PairingError",
    "PairingResult",
    "Player",
    "PlayerArena",
    "PlayerDelta",
    "TiebreakSet",
    "TournamentFormat",
    "calculate_max_rounds",
    "calculate_tiebreaks",
    "generate_pairings",
]
