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

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from pairingengine.constants import (
    DECISIVE_RESULTS,
    RESULT_BYE,
    RESULT_POINTS,
    TB_BLACK_WINS,
    TB_BUCHHOLZ,
    TB_BUCHHOLZ_CUT_1,
    TB_PROGRESSIVE,
    TB_SONNEBORN_BERGER,
    TB_WINS,
)
from pairingengine.exceptions import InvalidResultException
from pairingengine.utils.validation import validate_result


@dataclass
class MatchRecord:
    """A stored game or bye.

    Attributes:
        round: Round number (1-based)
        white_id: ID of the white player (the bye recipient for a bye)
        black_id: ID of the black player, None for a bye
        result: ``"1-0"``, ``"0-1"``, ``"1/2-1/2"``, ``"BYE"`` or ``"*"`` (pending)
        board: Board number, if known
    """

    round: int
    white_id: str
    black_id: Optional[str]
    result: str
    board: Optional[int] = None

    def __post_init__(self):
        check = validate_result(self.result)
        if not check:
            raise InvalidResultException(check.error_message)
        self.result = check.sanitized_value

    @property
    def is_bye(self) -> bool:
        return self.black_id is None or self.result == RESULT_BYE

    @property
    def is_decided(self) -> bool:
        """Whether the game counts for tiebreaks (a finished game, not a bye)."""
        return not self.is_bye and self.result in DECISIVE_RESULTS

    @property
    def points(self) -> Tuple[float, float]:
        """Points for (white, black); only valid for decided games."""
        return RESULT_POINTS[self.result]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match record to dictionary."""
        return {
            "round": self.round,
            "white_id": self.white_id,
            "black_id": self.black_id,
            "result": self.result,
            "board": self.board,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchRecord":
        """Deserialize match record, accepting host camelCase keys."""
        return cls(
            round=data["round"],
            white_id=str(data.get("white_id", data.get("whitePlayer"))),
            black_id=(
                None
                if data.get("black_id", data.get("blackPlayer")) is None
                else str(data.get("black_id", data.get("blackPlayer")))
            ),
            result=data.get("result", "*"),
            board=data.get("board"),
        )


@dataclass
class TiebreakSet:
    """Tiebreak values for one participant, recomputed from scratch each call."""

    player_id: str
    buchholz: float = 0.0
    buchholz_cut1: float = 0.0
    sonneborn_berger: float = 0.0
    progressive_score: float = 0.0
    wins: int = 0
    black_wins: int = 0

    def get(self, key: str) -> float:
        """Value for a tiebreak key from :mod:`pairingengine.constants`."""
        values = {
            TB_BUCHHOLZ: self.buchholz,
            TB_BUCHHOLZ_CUT_1: self.buchholz_cut1,
            TB_SONNEBORN_BERGER: self.sonneborn_berger,
            TB_PROGRESSIVE: self.progressive_score,
            TB_WINS: self.wins,
            TB_BLACK_WINS: self.black_wins,
        }
        return values[key]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "buchholz": self.buchholz,
            "buchholz_cut1": self.buchholz_cut1,
            "sonneborn_berger": self.sonneborn_berger,
            "progressive_score": self.progressive_score,
            "wins": self.wins,
            "black_wins": self.black_wins,
        }
