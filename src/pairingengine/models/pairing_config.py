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

from dataclasses import dataclass, field
from typing import Any, Dict, List

from pairingengine.constants import (
    BYE_SCORE,
    DEFAULT_ACCELERATED_ROUNDS,
    DEFAULT_TIEBREAK_SORT_ORDER,
    TIEBREAK_NAMES,
)
from pairingengine.exceptions import InvalidConfigurationException
from pairingengine.type_hints import BLACK, WHITE


@dataclass
class PairingConfig:
    """Tunable settings for pairing generation and standings.

    Attributes:
        seeded_knockout: Seed knockout round 1 by rating instead of shuffling
        accelerated_rounds: Number of opening rounds that carry the
            acceleration bonus; the bonus in round r is ``accelerated_rounds + 1 - r``
        bye_score: Points the result recorder awards for a Swiss-family bye
        knockout_draw_advances: Colour that advances when a knockout game is drawn
        tiebreak_order: Tiebreak keys in priority order for standings
    """

    seeded_knockout: bool = False
    accelerated_rounds: int = DEFAULT_ACCELERATED_ROUNDS
    bye_score: float = BYE_SCORE
    knockout_draw_advances: str = WHITE
    tiebreak_order: List[str] = field(
        default_factory=lambda: list(DEFAULT_TIEBREAK_SORT_ORDER)
    )

    def __post_init__(self):
        if self.accelerated_rounds < 0:
            raise InvalidConfigurationException(
                f"accelerated_rounds must be >= 0, got {self.accelerated_rounds}"
            )
        if not 0.0 <= self.bye_score <= 1.0:
            raise InvalidConfigurationException(
                f"bye_score must be between 0 and 1, got {self.bye_score}"
            )
        if self.knockout_draw_advances not in (WHITE, BLACK):
            raise InvalidConfigurationException(
                f"knockout_draw_advances must be 'white' or 'black', "
                f"got {self.knockout_draw_advances!r}"
            )
        unknown = [tb for tb in self.tiebreak_order if tb not in TIEBREAK_NAMES]
        if unknown:
            raise InvalidConfigurationException(
                f"Unknown tiebreak keys: {', '.join(unknown)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "seeded_knockout": self.seeded_knockout,
            "accelerated_rounds": self.accelerated_rounds,
            "bye_score": self.bye_score,
            "knockout_draw_advances": self.knockout_draw_advances,
            "tiebreak_order": list(self.tiebreak_order),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            seeded_knockout=data.get("seeded_knockout", False),
            accelerated_rounds=data.get(
                "accelerated_rounds", DEFAULT_ACCELERATED_ROUNDS
            ),
            bye_score=data.get("bye_score", BYE_SCORE),
            knockout_draw_advances=data.get("knockout_draw_advances", WHITE),
            tiebreak_order=data.get(
                "tiebreak_order", list(DEFAULT_TIEBREAK_SORT_ORDER)
            ),
        )
