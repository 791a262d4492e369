"""Value types returned by pairing generators."""

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

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional

from pairingengine.player import Player
from pairingengine.type_hints import Colour


@dataclass
class Pairing:
    """A single board of a round.

    Attributes:
        round: Round number (1-based)
        board: Board number, 1-based and contiguous within a round
        white_player: Player with white (the bye recipient for a bye)
        black_player: Player with black, None for a bye
        is_bye: Whether this board is a bye
        is_rematch: Whether the two players have met before
        cycle: Cycle number for Double Swiss and round robin formats
    """

    round: int
    board: int
    white_player: Player
    black_player: Optional[Player] = None
    is_bye: bool = False
    is_rematch: bool = False
    cycle: Optional[int] = None

    @property
    def white_id(self) -> str:
        return self.white_player.id

    @property
    def black_id(self) -> Optional[str]:
        return self.black_player.id if self.black_player is not None else None

    @property
    def player_ids(self) -> List[str]:
        ids = [self.white_player.id]
        if self.black_player is not None:
            ids.append(self.black_player.id)
        return ids

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing to dictionary using player ids."""
        return {
            "round": self.round,
            "board": self.board,
            "white_player": self.white_id,
            "black_player": self.black_id,
            "is_bye": self.is_bye,
            "is_rematch": self.is_rematch,
            "cycle": self.cycle,
        }


@dataclass
class PlayerDelta:
    """History change for one player produced by one pairing call.

    Applying a delta appends ``colour`` and ``opponent_id`` together, adds one
    to ``byes`` when ``bye`` is set, then assigns every entry of ``updates``.

    Attributes:
        player_id: Player the change belongs to
        colour: Colour to append, None when the player has no game
        opponent_id: Opponent to append, None when the player has no game
        bye: Whether the player receives a bye this round
        updates: Transient field assignments (``knockout_status`` and so on)
    """

    player_id: str
    colour: Optional[Colour] = None
    opponent_id: Optional[str] = None
    bye: bool = False
    updates: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "colour": self.colour,
            "opponent_id": self.opponent_id,
            "bye": self.bye,
            "updates": dict(self.updates),
        }


# ========== Error Values ==========


@dataclass(frozen=True)
class PairingError:
    """Base error value carried by a failed :class:`PairingResult`."""

    message: str
    kind: ClassVar[str] = "pairing_error"

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind, "message": self.message}


@dataclass(frozen=True)
class InvalidRoundError(PairingError):
    """The requested round is outside the format's legal range."""

    kind: ClassVar[str] = "invalid_round"


@dataclass(frozen=True)
class StructuralError(PairingError):
    """Format preconditions are unmet (teams, field size, history, format id)."""

    kind: ClassVar[str] = "structural"


@dataclass(frozen=True)
class PairingImpossibleError(PairingError):
    """The solver exhausted every fallback without a legal pairing."""

    kind: ClassVar[str] = "pairing_impossible"


@dataclass(frozen=True)
class TerminalStateError(PairingError):
    """The tournament already concluded (e.g. a knockout champion is decided)."""

    kind: ClassVar[str] = "terminal_state"

    champion_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = super().to_dict()
        data["champion_id"] = self.champion_id
        return data


@dataclass
class PairingResult:
    """Outcome of one pairing call: pairings and deltas, or an error.

    Never populated both ways. Build instances with :meth:`success` or
    :meth:`failure`.
    """

    pairings: List[Pairing] = field(default_factory=list)
    deltas: List[PlayerDelta] = field(default_factory=list)
    error: Optional[PairingError] = None

    def __post_init__(self):
        if self.error is not None and (self.pairings or self.deltas):
            raise ValueError("A failed PairingResult cannot carry pairings")

    @classmethod
    def success(
        cls, pairings: List[Pairing], deltas: List[PlayerDelta]
    ) -> "PairingResult":
        return cls(pairings=list(pairings), deltas=list(deltas))

    @classmethod
    def failure(cls, error: PairingError) -> "PairingResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def games(self) -> List[Pairing]:
        return [p for p in self.pairings if not p.is_bye]

    @property
    def byes(self) -> List[Pairing]:
        return [p for p in self.pairings if p.is_bye]

    def delta_for(self, player_id: str) -> Optional[PlayerDelta]:
        for delta in self.deltas:
            if delta.player_id == player_id:
                return delta
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the ``{pairings, error}`` shape hosts persist."""
        return {
            "pairings": [p.to_dict() for p in self.pairings],
            "deltas": [d.to_dict() for d in self.deltas],
            "error": self.error.to_dict() if self.error is not None else None,
        }


#  LocalWords:  PairingResult
