"""Pairing generators for every supported tournament format."""

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

from pairingengine.pairing.colour import assign_colours
from pairingengine.pairing.dispatcher import (
    FORMAT_HANDLERS,
    TournamentFormat,
    calculate_max_rounds,
    generate_pairings,
)
from pairingengine.pairing.round_robin import berger_tables, round_robin_schedule
from pairingengine.pairing.score_groups import ScoreGroupPartitioner
from pairingengine.pairing.solver import MatchingSolver, RematchPolicy

__all__ = [
    "FORMAT_HANDLERS",
    "MatchingSolver",
    "RematchPolicy",
    "ScoreGroupPartitioner",
    "TournamentFormat",
    "assign_colours",
    "berger_tables",
    "calculate_max_rounds",
    "generate_pairings",
    "round_robin_schedule",
]
