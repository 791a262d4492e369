"""Result recording, tiebreaks and standings."""

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

from pairingengine.tournament.arena import PlayerArena
from pairingengine.tournament.models import MatchRecord, TiebreakSet
from pairingengine.tournament.result_recorder import ResultRecorder
from pairingengine.tournament.standings import (
    ScheveningenResults,
    StandingEntry,
    double_swiss_standings,
    knockout_standings,
    rank_standings,
    scheveningen_results,
)
from pairingengine.tournament.tiebreak_calculator import (
    TiebreakCalculator,
    calculate_tiebreaks,
)

__all__ = [
    "MatchRecord",
    "PlayerArena",
    "ResultRecorder",
    "ScheveningenResults",
    "StandingEntry",
    "TiebreakCalculator",
    "TiebreakSet",
    "calculate_tiebreaks",
    "double_swiss_standings",
    "knockout_standings",
    "rank_standings",
    "scheveningen_results",
]
