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

# Game outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# Bye scores (awarded by the host, Swiss family only)
FULL_POINT_BYE_SCORE = 1.0
HALF_POINT_BYE_SCORE = 0.5
ZERO_POINT_BYE_SCORE = 0.0
BYE_SCORE = FULL_POINT_BYE_SCORE

# Result strings as stored by the host
RESULT_WHITE_WIN = "1-0"
RESULT_BLACK_WIN = "0-1"
RESULT_DRAW = "1/2-1/2"
RESULT_BYE = "BYE"
RESULT_PENDING = "*"

DECISIVE_RESULTS = (RESULT_WHITE_WIN, RESULT_BLACK_WIN, RESULT_DRAW)
VALID_RESULTS = DECISIVE_RESULTS + (RESULT_BYE, RESULT_PENDING)

# Points for white / black per completed result
RESULT_POINTS = {
    RESULT_WHITE_WIN: (WIN_SCORE, LOSS_SCORE),
    RESULT_BLACK_WIN: (LOSS_SCORE, WIN_SCORE),
    RESULT_DRAW: (DRAW_SCORE, DRAW_SCORE),
}

# Knockout status values
KNOCKOUT_ACTIVE = "active"
KNOCKOUT_ELIMINATED = "eliminated"

# Double Swiss cycles
FIRST_CYCLE = 1
SECOND_CYCLE = 2

# Accelerated pairings: bonus is applied during rounds 1..N
DEFAULT_ACCELERATED_ROUNDS = 3

# Scheveningen needs exactly this many teams
SCHEVENINGEN_TEAM_COUNT = 2

# Tiebreaker Keys
TB_BUCHHOLZ = "buchholz"
TB_BUCHHOLZ_CUT_1 = "buchholz_cut1"
TB_SONNEBORN_BERGER = "sonneborn_berger"
TB_PROGRESSIVE = "progressive_score"
TB_WINS = "wins"
TB_BLACK_WINS = "black_wins"

TIEBREAK_NAMES = {
    TB_BUCHHOLZ: "Buchholz",
    TB_BUCHHOLZ_CUT_1: "Buchholz Cut-1",
    TB_SONNEBORN_BERGER: "Sonneborn-Berger",
    TB_PROGRESSIVE: "Progressive Score",
    TB_WINS: "Number of Wins",
    TB_BLACK_WINS: "Wins with Black",
}

# FIDE-style default tiebreak order
DEFAULT_TIEBREAK_SORT_ORDER = [
    TB_BUCHHOLZ_CUT_1,
    TB_BUCHHOLZ,
    TB_PROGRESSIVE,
    TB_SONNEBORN_BERGER,
    TB_WINS,
    TB_BLACK_WINS,
]

# Logging configuration environment variables
LOG_LEVEL_ENV = "PAIRINGENGINE_LOG_LEVEL"
LOG_DIR_ENV = "PAIRINGENGINE_LOG_DIR"
LOG_FILE_NAME = "pairing-engine.log"
