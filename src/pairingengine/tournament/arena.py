"""Id-indexed player store that folds pairing deltas into player history."""

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

from typing import Dict, Iterable, Iterator, List

from pairingengine.exceptions import (
    InvalidPlayerDataException,
    PairingException,
    PlayerNotFoundException,
)
from pairingengine.models import PairingResult, PlayerDelta
from pairingengine.player import Player
from pairingengine.utils import setup_logger

logger = setup_logger(__name__)


class PlayerArena:
    """Owns copies of a tournament's players, indexed by id.

    Generators never modify players; a host that wants the engine to keep
    history for it pairs with :meth:`players`, then calls :meth:`apply` once
    the result is accepted.
    """

    def __init__(self, players: Iterable[Player]):
        self._players: Dict[str, Player] = {}
        for player in players:
            if player.id in self._players:
                raise InvalidPlayerDataException(f"Duplicate player id: {player.id}")
            self._players[player.id] = player.copy()

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players.values())

    def __getitem__(self, player_id: str) -> Player:
        return self.get(player_id)

    def get(self, player_id: str) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise PlayerNotFoundException(f"Unknown player id: {player_id}") from None

    def players(self) -> List[Player]:
        """Fresh copies in entry order, safe to hand to a generator."""
        return [p.copy() for p in self._players.values()]

    def apply(self, result: PairingResult) -> None:
        """Fold the deltas of a successful pairing result into the arena.

        All deltas are checked before any is applied, so a bad result leaves
        the arena untouched.

        Raises:
            PairingException: if the result carries an error
            PlayerNotFoundException: if a delta names an unknown player
        """
        if not result.ok:
            raise PairingException(
                f"Cannot apply a failed pairing result: {result.error.message}"
            )
        for delta in result.deltas:
            player = self.get(delta.player_id)
            unknown = [name for name in delta.updates if not hasattr(player, name)]
            if unknown:
                raise InvalidPlayerDataException(
                    f"Unknown player field in delta: {', '.join(unknown)}"
                )
            if (delta.colour is None) != (delta.opponent_id is None):
                raise InvalidPlayerDataException(
                    f"Delta for {delta.player_id} has a colour without an opponent"
                )
            if delta.opponent_id is not None:
                self.get(delta.opponent_id)
        for delta in result.deltas:
            self._apply_delta(delta)
        logger.debug("Applied %s deltas", len(result.deltas))

    def _apply_delta(self, delta: PlayerDelta) -> None:
        player = self._players[delta.player_id]
        if delta.opponent_id is not None:
            player.color_history.append(delta.colour)
            player.previous_opponents.append(delta.opponent_id)
        if delta.bye:
            player.byes += 1
        for field_name, value in delta.updates.items():
            setattr(player, field_name, value)
