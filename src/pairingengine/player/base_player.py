"""Player record consumed and produced by every pairing generator."""

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

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

from pairingengine.constants import KNOCKOUT_ACTIVE
from pairingengine.exceptions import InvalidPlayerDataException
from pairingengine.type_hints import BLACK, WHITE, Colour
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)

# camelCase keys accepted from hosts that store documents in that style
_CAMEL_CASE_KEYS = {
    "colorHistory": "color_history",
    "previousOpponents": "previous_opponents",
    "knockoutStatus": "knockout_status",
    "knockoutRound": "knockout_round",
    "cycleOneScore": "cycle_one_score",
    "cycleTwoScore": "cycle_two_score",
    "effectiveScore": "effective_score",
    "accelerationBonus": "acceleration_bonus",
}


class Player:
    """Represents a participant as seen by the pairing engine.

    The host loads a fresh set of these from storage before each pairing or
    tiebreak call. Generators read them and never write to them; history
    changes come back as :class:`~pairingengine.models.PlayerDelta` values.

    Attributes:
        id: Stable identifier, unique within a tournament
        name: Display name (used in log and error messages only)
        score: Cumulative points
        rating: Optional rating, used for seeding
        color_history: Colours played, parallel to ``previous_opponents``
        previous_opponents: Opponent ids in the order they were met
        byes: Number of byes received
        knockout_status: ``"active"`` or ``"eliminated"`` (Knockout)
        knockout_round: Last round the player was drawn in (Knockout)
        cycle_one_score: Score at the end of cycle one (Double Swiss)
        cycle_two_score: Score gained in cycle two (Double Swiss)
        effective_score: Score used for grouping this round (Accelerated)
        acceleration_bonus: Virtual points added this round (Accelerated)
        team: Team name (Scheveningen)
    """

    def __init__(
        self,
        id: str,
        name: Optional[str] = None,
        score: float = 0.0,
        rating: Optional[int] = None,
        color_history: Optional[List[Colour]] = None,
        previous_opponents: Optional[List[str]] = None,
        byes: int = 0,
        knockout_status: Optional[str] = None,
        knockout_round: Optional[int] = None,
        cycle_one_score: Optional[float] = None,
        cycle_two_score: Optional[float] = None,
        effective_score: Optional[float] = None,
        acceleration_bonus: Optional[float] = None,
        team: Optional[str] = None,
    ) -> None:
        if id is None or str(id) == "":
            raise InvalidPlayerDataException("Player id is required")
        self.id: str = str(id)
        self.name: str = name if name is not None else self.id
        self.score: float = float(score)
        self.rating: int = rating if rating is not None else 0

        # Game history, parallel lists
        self.color_history: List[Colour] = list(color_history or [])
        self.previous_opponents: List[str] = [
            str(o) for o in (previous_opponents or [])
        ]
        self.byes: int = int(byes)

        # Format-specific transient fields
        self.knockout_status: Optional[str] = knockout_status
        self.knockout_round: Optional[int] = knockout_round
        self.cycle_one_score: Optional[float] = cycle_one_score
        self.cycle_two_score: Optional[float] = cycle_two_score
        self.effective_score: Optional[float] = effective_score
        self.acceleration_bonus: Optional[float] = acceleration_bonus
        self.team: Optional[str] = team

        if len(self.color_history) != len(self.previous_opponents):
            raise InvalidPlayerDataException(
                f"Player {self.id}: colour history and opponent history "
                "differ in length"
            )

    # --- History queries ---

    @property
    def games_played(self) -> int:
        return len(self.previous_opponents)

    @property
    def white_count(self) -> int:
        return self.color_history.count(WHITE)

    @property
    def black_count(self) -> int:
        return self.color_history.count(BLACK)

    @property
    def last_colour(self) -> Optional[Colour]:
        """Colour of the most recent game, None without history."""
        return self.color_history[-1] if self.color_history else None

    def times_played(self, opponent_id: str) -> int:
        """Number of games already played against ``opponent_id``."""
        return self.previous_opponents.count(opponent_id)

    def has_played(self, opponent_id: str) -> bool:
        return opponent_id in self.previous_opponents

    def colour_against(self, opponent_id: str, occurrence: int = 0) -> Optional[Colour]:
        """Colour this player had in a given meeting with ``opponent_id``.

        Args:
            opponent_id: The opponent to look up
            occurrence: Which meeting (0 for the first one)

        Returns:
            The colour, or None if there were not that many meetings
        """
        seen = 0
        for colour, opp in zip(self.color_history, self.previous_opponents):
            if opp == opponent_id:
                if seen == occurrence:
                    return colour
                seen += 1
        return None

    @property
    def is_active_in_knockout(self) -> bool:
        return self.knockout_status == KNOCKOUT_ACTIVE

    # --- Copying and serialization ---

    def copy(self) -> "Player":
        """Return a deep copy so history lists are never shared."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player data to dictionary format.

        Returns:
            Dictionary containing all public player data
        """
        data = {}
        for k, v in self.__dict__.items():
            if not k.startswith("_"):
                data[k] = list(v) if isinstance(v, list) else v
        return data

    @classmethod
    def from_dict(cls, player_data: Dict[str, Any]) -> "Player":
        """Create a Player instance from serialized dictionary data.

        Accepts both snake_case keys and the camelCase keys hosts often store.
        Unknown keys are ignored.

        Args:
            player_data: Dictionary containing player data

        Returns:
            Player with restored state
        """
        normalized = {}
        for key, value in player_data.items():
            normalized[_CAMEL_CASE_KEYS.get(key, key)] = value
        if "id" not in normalized and "_id" in normalized:
            normalized["id"] = normalized["_id"]
        if "id" not in normalized:
            raise InvalidPlayerDataException("Player data is missing an id")

        allowed = {
            "id",
            "name",
            "score",
            "rating",
            "color_history",
            "previous_opponents",
            "byes",
            "knockout_status",
            "knockout_round",
            "cycle_one_score",
            "cycle_two_score",
            "effective_score",
            "acceleration_bonus",
            "team",
        }
        kwargs = {k: v for k, v in normalized.items() if k in allowed}
        # None values fall back to constructor defaults
        for key in ("score", "byes"):
            if kwargs.get(key) is None:
                kwargs.pop(key, None)
        return cls(**kwargs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, name={self.name}, score={self.score})>"

    def __str__(self) -> str:
        return f"{self.name} ({self.score})"
